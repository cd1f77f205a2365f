"""JSON:API content negotiation middleware."""

import logging
from typing import Any

from starlette.datastructures import Headers

from fastapi_jsonapi_media.config import JSONAPISettings
from fastapi_jsonapi_media.core.errors import (
    JSONAPIHeaderError,
    accept_violation,
    content_type_violation,
)
from fastapi_jsonapi_media.middleware.error_handler import (
    JSONAPIResponseFormatter,
    mark_jsonapi_scope,
)
from fastapi_jsonapi_media.utils.content_negotiation import classify_media_type

logger = logging.getLogger(__name__)


def _combined(headers: Headers, name: str) -> str | None:
    values = headers.getlist(name)
    return ", ".join(values) if values else None


class ContentNegotiationMiddleware:
    """Ensure JSON:API media type for requests and responses."""

    def __init__(self, app: Any, settings: JSONAPISettings | None = None) -> None:
        """Store the ASGI app for middleware chaining."""
        self.app = app
        self.settings = settings or JSONAPISettings()
        self.formatter = JSONAPIResponseFormatter(self.settings)

    def check_headers(self, method: str, headers: Headers) -> JSONAPIHeaderError | None:
        """Return the first header violation for a request, if any.

        A repeated header is judged on its values joined with ``", "``.
        """
        error = accept_violation(classify_media_type(_combined(headers, "accept")))
        if error is not None:
            return error
        if method in self.settings.body_methods:
            return content_type_violation(
                classify_media_type(_combined(headers, "content-type"))
            )
        return None

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        """Validate JSON:API headers before passing to downstream app."""
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "").upper()
        path = scope.get("path", "")
        if method == "OPTIONS" or self.settings.is_exempt(path):
            await self.app(scope, receive, send)
            return

        error = self.check_headers(method, Headers(scope=scope))
        if error is not None:
            logger.log(
                logging.INFO if self.settings.log_rejections else logging.DEBUG,
                "Rejected %s %s with %s: %s",
                method,
                path,
                error.status_code,
                error.check.value,
            )
            response = self.formatter.error_response(error)
            await response(scope, receive, self.formatter.wrap_send(send))
            return

        mark_jsonapi_scope(scope)
        await self.app(scope, receive, self.formatter.wrap_send(send))
