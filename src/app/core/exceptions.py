"""Application errors and the exception handlers that render them.

Services raise :class:`AppError` carrying an :class:`ErrorKind`; the
handlers registered by :func:`setup_exception_handlers` are the single place
where a kind is turned into an HTTP status and an error envelope.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any, assert_never

import orjson
from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import Request


logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class OrjsonResponse(JSONResponse):
    """JSON response rendered with orjson."""

    def render(self, content: Any) -> bytes:
        return orjson.dumps(content, option=orjson.OPT_NON_STR_KEYS)


class ErrorKind(StrEnum):
    """Failure categories understood by the HTTP boundary."""

    VALIDATION = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    RATE_LIMITED = "RATE_LIMIT_EXCEEDED"


def status_code_for(kind: ErrorKind) -> int:
    """Map an error kind to its HTTP status code."""
    match kind:
        case ErrorKind.VALIDATION:
            return status.HTTP_400_BAD_REQUEST
        case ErrorKind.UNAUTHORIZED:
            return status.HTTP_401_UNAUTHORIZED
        case ErrorKind.FORBIDDEN:
            return status.HTTP_403_FORBIDDEN
        case ErrorKind.NOT_FOUND:
            return status.HTTP_404_NOT_FOUND
        case ErrorKind.CONFLICT:
            return status.HTTP_409_CONFLICT
        case ErrorKind.RATE_LIMITED:
            return status.HTTP_429_TOO_MANY_REQUESTS
        case _:
            assert_never(kind)


class AppError(Exception):
    """Base application error.

    Attributes:
        kind: Category used to choose the HTTP status.
        message: Client-safe message.
        errors: Optional field -> message map (validation failures).
        context: Structured details for logs; never sent to clients.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        errors: dict[str, str] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.errors = errors
        self.context = context or {}
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return status_code_for(self.kind)


class UnauthorizedError(AppError):
    """Missing or invalid credentials."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(ErrorKind.UNAUTHORIZED, message)


class ForbiddenError(AppError):
    """Authenticated, but not allowed to act on the resource."""

    def __init__(self, message: str = "Permission denied", **context: Any) -> None:
        super().__init__(ErrorKind.FORBIDDEN, message, context=context)


class NotFoundError(AppError):
    """A referenced entity does not exist."""

    def __init__(self, resource: str, identifier: Any = None) -> None:
        super().__init__(
            ErrorKind.NOT_FOUND,
            f"{resource} not found",
            context={"resource": resource, "identifier": identifier},
        )


class ConflictError(AppError):
    """A uniqueness rule would be violated."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(ErrorKind.CONFLICT, message, context=context)


class RateLimitError(AppError):
    """Too many requests for the current window."""

    def __init__(self, message: str = "Too many requests, please try again later") -> None:
        super().__init__(ErrorKind.RATE_LIMITED, message)


def error_envelope(message: str, errors: dict[str, str] | None = None) -> dict[str, Any]:
    """Build the ``{status: "error", ...}`` response body."""
    body: dict[str, Any] = {"status": "error", "message": message}
    if errors:
        body["errors"] = errors
    return body


def _validation_errors(exc: RequestValidationError) -> dict[str, str]:
    """Flatten pydantic errors into ``{field: message}``.

    The request location (``body``/``query``/``path``) is dropped from the key;
    the first message reported for a field wins. Errors that do not name a
    field, such as a JSON decode failure at a character offset, are keyed
    ``body``.
    """
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = list(error.get("loc", ()))
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        if loc and isinstance(loc[0], str):
            field = ".".join(str(part) for part in loc)
        else:
            field = "body"
        errors.setdefault(field, error.get("msg", "Invalid value"))
    return errors


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> OrjsonResponse:
        if exc.kind is ErrorKind.FORBIDDEN or exc.kind is ErrorKind.CONFLICT:
            logger.warning(
                "Request rejected",
                kind=exc.kind.value,
                path=request.url.path,
                **exc.context,
            )
        headers = (
            {"WWW-Authenticate": "Bearer"}
            if exc.kind is ErrorKind.UNAUTHORIZED
            else None
        )
        return OrjsonResponse(
            status_code=exc.status_code,
            content=error_envelope(exc.message, exc.errors),
            headers=headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        _request: Request,
        exc: StarletteHTTPException,
    ) -> OrjsonResponse:
        return OrjsonResponse(
            status_code=exc.status_code,
            content=error_envelope(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        _request: Request,
        exc: RequestValidationError,
    ) -> OrjsonResponse:
        return OrjsonResponse(
            status_code=status_code_for(ErrorKind.VALIDATION),
            content=error_envelope("Invalid data", _validation_errors(exc)),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> OrjsonResponse:
        logger.opt(exception=exc).error(
            "Unhandled exception",
            method=request.method,
            path=request.url.path,
        )
        return OrjsonResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_envelope(INTERNAL_ERROR_MESSAGE),
        )
