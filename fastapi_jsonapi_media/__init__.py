"""FastAPI JSON:API media-type enforcement package."""

from .config import JSONAPISettings
from .core.document import JSONAPIDocumentBuilder
from .core.errors import JSONAPIErrorBuilder, JSONAPIHeaderError
from .middleware.content_negotiation import ContentNegotiationMiddleware
from .middleware.error_handler import ErrorHandlerMiddleware, JSONAPIResponseFormatter
from .registration import register_jsonapi
from .utils.content_negotiation import JSONAPI_MEDIA_TYPE, MediaTypeCheck, classify_media_type

__all__ = [
    "JSONAPI_MEDIA_TYPE",
    "ContentNegotiationMiddleware",
    "ErrorHandlerMiddleware",
    "JSONAPIDocumentBuilder",
    "JSONAPIErrorBuilder",
    "JSONAPIHeaderError",
    "JSONAPIResponseFormatter",
    "JSONAPISettings",
    "MediaTypeCheck",
    "classify_media_type",
    "register_jsonapi",
]
