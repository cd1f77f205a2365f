"""Core JSON:API document and error helpers."""

from .document import JSONAPIDocumentBuilder
from .errors import JSONAPIErrorBuilder, JSONAPIHeaderError

__all__ = ["JSONAPIDocumentBuilder", "JSONAPIErrorBuilder", "JSONAPIHeaderError"]
