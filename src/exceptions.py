"""Application exceptions and their HTTP mapping."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class AppError(Exception):
    """Base class for errors that are rendered to the client."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = INTERNAL_ERROR_MESSAGE

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(AppError):
    """Request is well-formed but violates a business rule."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Bad request"


class DuplicateEmailError(ValidationError):
    message = "Email already registered"


class AuthError(AppError):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class TokenNotProvidedError(AuthError):
    message = "Unauthorized: Token not provided"


class InvalidTokenError(AuthError):
    message = "Unauthorized: Invalid token"


class InvalidCredentialsError(AuthError):
    message = "Invalid email or password"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class UserNotFoundError(NotFoundError):
    message = "User not found"


class StoreError(AppError):
    """Persistence failure. The cause is logged, never returned."""

    message = INTERNAL_ERROR_MESSAGE


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render an AppError as a {"message": ...} body."""
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{request.method} {request.url.path} failed: {exc!r}", exc_info=exc)
        content = {"message": INTERNAL_ERROR_MESSAGE}
    else:
        content = {"message": exc.message}

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Keep framework errors (404 route, 405 method) in the same body shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the cause and answer with a generic 500."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": INTERNAL_ERROR_MESSAGE},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the handlers above to an application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
