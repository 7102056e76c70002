"""Exception handlers and the error boundary used by HTTP routes."""

from __future__ import annotations

import functools
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobs2go_admin.modules.accounts import AccountAlreadyExistsError, AccountNotFoundError, RoleNotFoundError
from jobs2go_admin.modules.monitoring import MonitoringService
from jobs2go_admin.modules.schedules import ScheduleNotFoundError, ScheduleValidationError
from jobs2go_admin.modules.templates import (
    BuiltInTemplateError,
    TemplateNotFoundError,
    TemplateVersionConflictError,
    TemplateVersionNotFoundError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DOMAIN_STATUS: dict[type[Exception], int] = {
    BuiltInTemplateError: status.HTTP_403_FORBIDDEN,
    TemplateNotFoundError: status.HTTP_404_NOT_FOUND,
    TemplateVersionNotFoundError: status.HTTP_404_NOT_FOUND,
    ScheduleNotFoundError: status.HTTP_404_NOT_FOUND,
    AccountNotFoundError: status.HTTP_404_NOT_FOUND,
    TemplateVersionConflictError: status.HTTP_409_CONFLICT,
    AccountAlreadyExistsError: status.HTTP_409_CONFLICT,
    ScheduleValidationError: status.HTTP_400_BAD_REQUEST,
    RoleNotFoundError: status.HTTP_400_BAD_REQUEST,
}

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def _monitoring(request: Request) -> Optional[MonitoringService]:
    container = getattr(request.app.state, "container", None)
    return container.monitoring if container is not None else None


def internal_error_body(request: Request, exc: BaseException) -> dict[str, str]:
    container = getattr(request.app.state, "container", None)
    development = container is not None and container.settings.is_development
    return {
        "error": "Internal Server Error",
        "message": str(exc) if development else GENERIC_ERROR_MESSAGE,
    }


def track_request_error(request: Request, exc: BaseException) -> None:
    monitoring = _monitoring(request)
    if monitoring is not None:
        monitoring.track_error(
            "API route error",
            exc,
            {"url": str(request.url), "method": request.method},
        )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation error", "errors": jsonable_encoder(exc.errors())},
    )


async def domain_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code = next(
        (code for exc_type, code in DOMAIN_STATUS.items() if isinstance(exc, exc_type)),
        status.HTTP_400_BAD_REQUEST,
    )
    message = str(exc)
    if isinstance(exc, AccountNotFoundError):
        message = "Account not found"
    elif isinstance(exc, RoleNotFoundError):
        message = f"Unknown role: {exc}"
    return JSONResponse(status_code=status_code, content={"error": message})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    track_request_error(request, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=internal_error_body(request, exc),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    for exc_type in DOMAIN_STATUS:
        app.add_exception_handler(exc_type, domain_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def error_boundary(
    fallback: Callable[[Exception], T],
) -> Callable[[Callable[..., Awaitable[Any]]], Callable[..., Awaitable[Any]]]:
    """Wrap an async handler so any exception is logged, tracked and replaced by ``fallback(exc)``.

    The wrapped handler keeps its signature, so FastAPI still resolves its
    parameters. When a ``request`` argument is present the error is reported to
    the monitoring service on the application container.
    """

    def decorator(handler: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        @functools.wraps(handler)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await handler(*args, **kwargs)
            except Exception as exc:
                logger.exception("Error in %s", handler.__name__)
                request = kwargs.get("request")
                if isinstance(request, Request):
                    track_request_error(request, exc)
                return fallback(exc)

        return wrapper

    return decorator


__all__ = [
    "error_boundary",
    "internal_error_body",
    "register_exception_handlers",
]
