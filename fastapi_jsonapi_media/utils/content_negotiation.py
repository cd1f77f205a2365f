"""Helpers for JSON:API content negotiation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

JSONAPI_TYPE = "application"
JSONAPI_SUBTYPE = "vnd.api+json"
JSONAPI_MEDIA_TYPE = f"{JSONAPI_TYPE}/{JSONAPI_SUBTYPE}"

_JSONAPI_FAMILY_PREFIX = "vnd.api+"


class MediaTypeCheck(str, Enum):
    """Outcome of matching a header value against the JSON:API media type."""

    MISSING = "missing"
    MALFORMED = "malformed"
    WRONG_MEDIA_TYPE = "wrong_media_type"
    UNSUPPORTED_FORMAT = "unsupported_format"
    DISALLOWED_PARAMETERS = "disallowed_parameters"
    VALID = "valid"


@dataclass(frozen=True)
class ParsedMediaType:
    """A media type split into type, subtype and parameters."""

    type: str
    subtype: str
    parameters: dict[str, str] = field(default_factory=dict)

    @property
    def media_type(self) -> str:
        return f"{self.type}/{self.subtype}"


def _split_parameters(value: str) -> list[str]:
    return [part.strip() for part in value.split(";") if part.strip()]


def _parse_parameters(value: str) -> dict[str, str]:
    params: dict[str, str] = {}
    for param in _split_parameters(value):
        name, _, raw_value = param.partition("=")
        params[name.strip()] = raw_value.strip()
    return params


def parse_media_type(value: str) -> ParsedMediaType | None:
    """Parse a raw header value into a media type.

    Returns None when the value has no ``type/subtype`` base. Case is kept
    as-is; JSON:API matching is exact.
    """
    base, _, param_text = value.partition(";")
    type_, slash, subtype = base.partition("/")
    type_ = type_.strip()
    subtype = subtype.strip()
    if not slash or not type_ or not subtype:
        return None
    return ParsedMediaType(type_, subtype, _parse_parameters(param_text))


def classify_media_type(value: str | None) -> MediaTypeCheck:
    """Classify a header value against ``application/vnd.api+json``.

    The whole value is treated as a single candidate: comma separated lists
    are not split into alternatives.
    """
    if value is None or not value.strip():
        return MediaTypeCheck.MISSING

    parsed = parse_media_type(value)
    if parsed is None:
        return MediaTypeCheck.MALFORMED

    if parsed.type == JSONAPI_TYPE and parsed.subtype == JSONAPI_SUBTYPE:
        if parsed.parameters:
            return MediaTypeCheck.DISALLOWED_PARAMETERS
        return MediaTypeCheck.VALID

    if parsed.type == JSONAPI_TYPE and parsed.subtype.startswith(_JSONAPI_FAMILY_PREFIX):
        return MediaTypeCheck.UNSUPPORTED_FORMAT

    return MediaTypeCheck.WRONG_MEDIA_TYPE
