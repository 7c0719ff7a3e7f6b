"""Single boundary that turns every request failure into one JSON error response."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from courses_api.errors import ApiError, ErrorKind
from courses_api.schemas.error import ErrorResponse, RouteNotFoundError

logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND_MESSAGE = "Route Not Found"
_UNCLASSIFIED_MESSAGE = "Internal server error"

# None means "keep the failure's own status, defaulting to 500".
_STATUS_BY_KIND: dict[ErrorKind, int | None] = {
    ErrorKind.VALIDATION_FAILURE: 400,
    ErrorKind.UNIQUENESS_CONFLICT: 400,
    ErrorKind.AUTHENTICATION_FAILURE: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNCLASSIFIED: None,
}


@dataclass(slots=True)
class ClassifiedError:
    kind: ErrorKind
    status_code: int
    message: str
    messages: list[str] = field(default_factory=list)

    def to_response(self) -> ErrorResponse:
        errors = self.messages if self.kind is ErrorKind.VALIDATION_FAILURE else None
        return ErrorResponse(message=self.message, errors=errors)


def _resolve_status(kind: ErrorKind, explicit_status: int | None) -> int:
    status_code = _STATUS_BY_KIND[kind]
    if status_code is not None:
        return status_code
    return explicit_status or 500


def _request_validation_messages(exc: RequestValidationError) -> list[str]:
    messages: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        text = str(error.get("msg", "Invalid value"))
        messages.append(f"{location}: {text}" if location else text)
    return messages or ["Invalid request payload"]


def classify(exc: Exception) -> ClassifiedError:
    """Map a raised failure onto exactly one classified error."""
    if isinstance(exc, ApiError):
        status_code = _resolve_status(exc.kind, exc.status_code)
        message = exc.message
        if exc.kind is ErrorKind.UNCLASSIFIED and status_code >= 500:
            message = _UNCLASSIFIED_MESSAGE
        return ClassifiedError(kind=exc.kind, status_code=status_code, message=message, messages=exc.messages)

    if isinstance(exc, RequestValidationError):
        messages = _request_validation_messages(exc)
        return ClassifiedError(
            kind=ErrorKind.VALIDATION_FAILURE,
            status_code=_resolve_status(ErrorKind.VALIDATION_FAILURE, None),
            message="; ".join(messages),
            messages=messages,
        )

    if isinstance(exc, StarletteHTTPException):
        status_code = _resolve_status(ErrorKind.UNCLASSIFIED, exc.status_code)
        message = str(exc.detail) if status_code < 500 else _UNCLASSIFIED_MESSAGE
        return ClassifiedError(kind=ErrorKind.UNCLASSIFIED, status_code=status_code, message=message)

    explicit_status = getattr(exc, "status_code", None)
    if not isinstance(explicit_status, int) or not 400 <= explicit_status <= 599:
        explicit_status = None
    status_code = _resolve_status(ErrorKind.UNCLASSIFIED, explicit_status)
    message = str(exc) if status_code < 500 and str(exc) else _UNCLASSIFIED_MESSAGE
    return ClassifiedError(kind=ErrorKind.UNCLASSIFIED, status_code=status_code, message=message)


class ErrorNormalizer:
    """Exception handlers for the app; error logging is fixed at construction."""

    def __init__(self, *, log_errors: bool) -> None:
        self._log_errors = log_errors

    def install(self, app: FastAPI) -> None:
        app.add_exception_handler(ApiError, self.handle)
        app.add_exception_handler(RequestValidationError, self.handle)
        app.add_exception_handler(StarletteHTTPException, self.handle_http_exception)
        # Anything the handlers above do not claim escapes the router and is caught here.
        app.middleware("http")(self.catch_unhandled)

    async def catch_unhandled(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return await self.handle(request, exc)

    async def handle(self, request: Request, exc: Exception) -> JSONResponse:
        classified = classify(exc)
        self._log(request, exc, classified)
        return JSONResponse(
            status_code=classified.status_code,
            content=classified.to_response().model_dump(mode="json", exclude_none=True),
        )

    async def handle_http_exception(self, request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Only the router raises these (unknown path or method); resources raise NotFound instead.
        if exc.status_code in (404, 405):
            payload = RouteNotFoundError(message=ROUTE_NOT_FOUND_MESSAGE)
            return JSONResponse(status_code=404, content=payload.model_dump())
        return await self.handle(request, exc)

    def _log(self, request: Request, exc: Exception, classified: ClassifiedError) -> None:
        if not self._log_errors:
            return
        try:
            logger.error(
                "request.failed method=%s path=%s kind=%s status=%s",
                request.method,
                request.url.path,
                classified.kind.value,
                classified.status_code,
                exc_info=(type(exc), exc, exc.__traceback__),
            )
        except Exception:  # logging must never break the response
            pass


__all__ = ["ClassifiedError", "ErrorNormalizer", "ROUTE_NOT_FOUND_MESSAGE", "classify"]
