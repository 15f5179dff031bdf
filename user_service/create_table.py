"""
Create the single table that stores users.

Usage:
    python -m user_service.create_table
"""

import logging

from botocore.exceptions import ClientError

from user_service.db import Dynamodb
from user_service.logging_config import configure_logging
from user_service.settings import LOG_LEVEL

logger = logging.getLogger(__name__)

TABLE_DEFINITION = {
    "AttributeDefinitions": [
        {"AttributeName": "PK", "AttributeType": "S"},
        {"AttributeName": "SK", "AttributeType": "S"},
    ],
    "KeySchema": [
        {"AttributeName": "PK", "KeyType": "HASH"},
        {"AttributeName": "SK", "KeyType": "RANGE"},
    ],
    "ProvisionedThroughput": {
        "ReadCapacityUnits": 5,
        "WriteCapacityUnits": 5,
    },
}


def create_table(db: Dynamodb):
    """Create the table and wait for it; returns None when it already exists."""
    try:
        response = db.client.create_table(TableName=db.table_name, **TABLE_DEFINITION)
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceInUseException":
            logger.info("Table %s already exists", db.table_name)
            return None
        logger.error("Error creating table %s: %s", db.table_name, e)
        raise

    db.client.get_waiter("table_exists").wait(TableName=db.table_name)
    logger.info("Table %s created successfully", db.table_name)
    return response["TableDescription"]


def main():
    configure_logging(LOG_LEVEL)
    create_table(Dynamodb())


if __name__ == "__main__":
    main()
