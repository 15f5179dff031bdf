import logging

from botocore.exceptions import ClientError
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base error rendered as ``{"error": {"message": ...}}``."""

    status_code = 500

    def __init__(self, message, status_code=None, details=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details


class ValidationFailed(ServiceError):
    status_code = 400


class InvalidCredentials(ServiceError):
    status_code = 401

    def __init__(self, message="Invalid email or password"):
        super().__init__(message)


class UserNotFound(ServiceError):
    status_code = 404

    def __init__(self, user_id):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class UserAlreadyExists(ServiceError):
    status_code = 409


class StorageNotConfigured(ServiceError):
    status_code = 500


def error_body(message, details=None):
    body = {"error": {"message": message}}
    if details:
        body["error"]["details"] = details
    return body


def _clean_message(msg: str) -> str:
    # pydantic prefixes messages raised from validators
    return msg.removeprefix("Value error, ")


def validation_details(errors) -> list:
    details = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "path", "query")]
        details.append(
            {
                "field": ".".join(loc) or "body",
                "message": _clean_message(str(err.get("msg", "Invalid value"))),
            }
        )
    return details


async def service_error_handler(request: Request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code, content=error_body(exc.message, exc.details)
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = validation_details(exc.errors())
    message = details[0]["message"] if details else "Invalid request"
    return JSONResponse(status_code=400, content=error_body(message, details))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def client_error_handler(request: Request, exc: ClientError):
    error = exc.response.get("Error", {})
    logger.error(
        "AWS call failed on %s %s: %s %s",
        request.method,
        request.url.path,
        error.get("Code"),
        error.get("Message"),
    )
    return JSONResponse(
        status_code=500, content=error_body(error.get("Message") or str(exc))
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=error_body(str(exc)))


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(ClientError, client_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
