"""Wire JSON:API media-type enforcement onto a Starlette or FastAPI app."""

import logging
from typing import Any, Mapping

from fastapi.exceptions import RequestValidationError
from starlette.applications import Starlette
from starlette.exceptions import HTTPException

from fastapi_jsonapi_media.config import JSONAPISettings
from fastapi_jsonapi_media.middleware.content_negotiation import ContentNegotiationMiddleware
from fastapi_jsonapi_media.middleware.error_handler import (
    ErrorHandlerMiddleware,
    JSONAPIResponseFormatter,
)

logger = logging.getLogger(__name__)


def register_jsonapi(
    app: Starlette,
    settings: JSONAPISettings | None = None,
    *,
    meta: Mapping[str, Any] | None = None,
) -> JSONAPISettings:
    """Register the header check, response formatter and error handlers.

    Must be called before the application starts serving requests.

    Args:
        app: Application to register on.
        settings: Explicit settings. Read from the environment when omitted.
        meta: Top-level meta merged into JSON responses. Overrides ``settings.meta``.

    Returns:
        The settings the middleware was registered with.
    """
    if settings is None:
        settings = JSONAPISettings() if meta is None else JSONAPISettings(meta=dict(meta))
    elif meta is not None:
        settings = settings.model_copy(update={"meta": dict(meta)})

    formatter = JSONAPIResponseFormatter(settings)
    app.add_exception_handler(HTTPException, formatter.handle_http_exception)
    app.add_exception_handler(RequestValidationError, formatter.handle_validation_error)

    # Last added runs first: the header check wraps the error handler so
    # 500 documents also get the JSON:API content-type and meta.
    app.add_middleware(ErrorHandlerMiddleware, settings=settings)
    app.add_middleware(ContentNegotiationMiddleware, settings=settings)

    logger.debug(
        "Registered JSON:API middleware (body methods: %s, exempt paths: %s)",
        ", ".join(settings.body_methods),
        ", ".join(settings.exempt_paths) or "none",
    )
    return settings
