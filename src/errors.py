"""Error taxonomy and the handlers that turn it into HTTP responses.

Every failure raised by a route or a store function is a ``ShrinxError``
subclass. The handlers registered by ``register_exception_handlers`` are the
request boundary: nothing below them builds error responses by hand.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger("uvicorn")

GENERIC_SERVER_MESSAGE = "Internal server error."


class ShrinxError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = GENERIC_SERVER_MESSAGE

    def __init__(self, message: Optional[str] = None, **extra: Any) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message
        self.extra = extra

    def to_dict(self) -> dict:
        return {"message": self.message, **self.extra}


class BadRequest(ShrinxError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Bad request."


class Unauthorized(ShrinxError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class Conflict(ShrinxError):
    # Reported as 400 on the JSON interface, same as other rejected input
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Already exists."


class CaptchaError(ShrinxError):
    """Turnstile verification failed or is misconfigured.

    A rejected token is the caller's fault (400); a missing secret key is
    ours (500).
    """

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Captcha verification failed."

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        misconfigured: bool = False,
        **extra: Any,
    ) -> None:
        super().__init__(message, **extra)
        if misconfigured:
            self.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class ServerError(ShrinxError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = GENERIC_SERVER_MESSAGE


async def shrinx_error_handler(request: Request, exc: ShrinxError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request body."},
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": GENERIC_SERVER_MESSAGE},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": GENERIC_SERVER_MESSAGE},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShrinxError, shrinx_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
