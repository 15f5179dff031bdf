from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_service.errors import register_exception_handlers
from user_service.logging_config import configure_logging
from user_service.middleware import AccessLogMiddleware
from user_service.routers import health, users
from user_service.settings import APP_VERSION, LOG_LEVEL


def create_app() -> FastAPI:
    configure_logging(LOG_LEVEL)

    app = FastAPI(title="User Service API", version=APP_VERSION)

    # -----------------------------------------------------------
    # Middleware
    # -----------------------------------------------------------
    app.add_middleware(AccessLogMiddleware, exclude_paths={"/api/v1/health"})
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -----------------------------------------------------------
    # Routers
    # -----------------------------------------------------------
    app.include_router(health.router, prefix="/api/v1", tags=["Health"])
    app.include_router(users.router, prefix="/api/v1/users", tags=["Users"])

    register_exception_handlers(app)
    return app


app = create_app()
