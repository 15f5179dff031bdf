import logging

import uvicorn

from user_service.logging_config import configure_logging
from user_service.settings import HOST, LOG_LEVEL, PORT

logger = logging.getLogger(__name__)


def main():
    configure_logging(LOG_LEVEL)
    logger.info("Server is running http://%s:%s", HOST, PORT)
    uvicorn.run("user_service.main:app", host=HOST, port=PORT, log_config=None)


if __name__ == "__main__":
    main()
