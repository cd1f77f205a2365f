"""JSON:API error formatting and error handling middleware."""

import logging
from typing import Any

from fastapi.exception_handlers import (
    http_exception_handler,
    request_validation_exception_handler,
)
from fastapi.exceptions import RequestValidationError
from starlette.datastructures import MutableHeaders
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from fastapi_jsonapi_media.config import JSONAPISettings
from fastapi_jsonapi_media.core.document import JSONAPIDocumentBuilder
from fastapi_jsonapi_media.core.errors import JSONAPIErrorBuilder
from fastapi_jsonapi_media.utils.content_negotiation import JSONAPI_MEDIA_TYPE

logger = logging.getLogger(__name__)

JSONAPI_STATE_KEY = "jsonapi"

_JSON_MEDIA_TYPES = frozenset({"application/json", JSONAPI_MEDIA_TYPE})


def is_jsonapi_scope(scope: dict[str, Any]) -> bool:
    """Return True when the request passed the ``Accept`` check."""
    return bool(scope.get("state", {}).get(JSONAPI_STATE_KEY, False))


def mark_jsonapi_scope(scope: dict[str, Any]) -> None:
    scope.setdefault("state", {})[JSONAPI_STATE_KEY] = True


def _is_json(content_type: str | None) -> bool:
    if not content_type:
        return False
    return content_type.split(";", 1)[0].strip().lower() in _JSON_MEDIA_TYPES


class JSONAPIResponseFormatter:
    """Rewrite outgoing responses of matched requests into JSON:API shape.

    Failures become single-entry error documents. Every response gets the
    JSON:API ``content-type``, and configured ``meta`` is merged into JSON
    object bodies.
    """

    def __init__(self, settings: JSONAPISettings) -> None:
        self.settings = settings
        self.errors = JSONAPIErrorBuilder()
        self.documents = JSONAPIDocumentBuilder(settings.meta)

    def error_response(self, exc: HTTPException) -> JSONResponse:
        """Build the error document response for a framework failure."""
        return JSONResponse(
            self.errors.from_http_exception(exc),
            status_code=exc.status_code,
            headers=exc.headers,
            media_type=JSONAPI_MEDIA_TYPE,
        )

    async def handle_http_exception(self, request: Request, exc: HTTPException) -> Response:
        """Exception handler for ``HTTPException`` raised by routes or routing."""
        if not is_jsonapi_scope(request.scope):
            return await http_exception_handler(request, exc)
        return self.error_response(exc)

    async def handle_validation_error(
        self, request: Request, exc: RequestValidationError
    ) -> Response:
        """Exception handler collapsing request validation errors into one entry."""
        if not is_jsonapi_scope(request.scope):
            return await request_validation_exception_handler(request, exc)
        messages = [
            f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', '')}"
            for error in exc.errors()
        ]
        detail = "; ".join(messages) or None
        return self.error_response(HTTPException(status_code=422, detail=detail))

    def wrap_send(self, send: Any) -> Any:
        """Return an ASGI ``send`` that applies JSON:API response headers and meta."""
        pending_start: dict[str, Any] | None = None
        body = bytearray()

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal pending_start
            if message["type"] == "http.response.start":
                headers = MutableHeaders(raw=list(message.get("headers", [])))
                rewrite = bool(self.documents.meta) and _is_json(headers.get("content-type"))
                headers["content-type"] = JSONAPI_MEDIA_TYPE
                message = {**message, "headers": headers.raw}
                if rewrite:
                    pending_start = message
                    return
                await send(message)
                return

            if message["type"] == "http.response.body" and pending_start is not None:
                body.extend(message.get("body", b""))
                if message.get("more_body", False):
                    return
                content = self.documents.rewrite_body(bytes(body))
                headers = MutableHeaders(raw=list(pending_start["headers"]))
                if "content-length" in headers:
                    headers["content-length"] = str(len(content))
                start, pending_start = {**pending_start, "headers": headers.raw}, None
                await send(start)
                await send({"type": "http.response.body", "body": content})
                return

            await send(message)

        return send_wrapper


class ErrorHandlerMiddleware:
    """Convert unhandled exceptions on JSON:API requests into error documents."""

    def __init__(self, app: Any, settings: JSONAPISettings | None = None) -> None:
        """Store the ASGI app for middleware chaining."""
        self.app = app
        self.formatter = JSONAPIResponseFormatter(settings or JSONAPISettings())

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        """Handle exceptions and serialize JSON:API error documents."""
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            if response_started or not is_jsonapi_scope(scope):
                raise
            logger.exception(
                "Unhandled error during %s %s", scope.get("method"), scope.get("path")
            )
            response = self.formatter.error_response(
                HTTPException(status_code=500, detail="An unexpected error occurred")
            )
            await response(scope, receive, send)
