"""Utility helpers for JSON:API header parsing."""

from .content_negotiation import (
    JSONAPI_MEDIA_TYPE,
    MediaTypeCheck,
    ParsedMediaType,
    classify_media_type,
    parse_media_type,
)

__all__ = [
    "JSONAPI_MEDIA_TYPE",
    "MediaTypeCheck",
    "ParsedMediaType",
    "classify_media_type",
    "parse_media_type",
]
