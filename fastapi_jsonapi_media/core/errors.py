"""JSON:API error objects and header violation rules."""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any, Mapping

from starlette.exceptions import HTTPException

from fastapi_jsonapi_media.schemas.resource import JSONAPIErrorDocument, JSONAPIErrorObject
from fastapi_jsonapi_media.utils.content_negotiation import JSONAPI_MEDIA_TYPE, MediaTypeCheck

MISSING_ACCEPT = "Missing `Accept` header"
INVALID_ACCEPT = "Invalid `Accept` header"
UNSUPPORTED_FORMAT = "The requested format is not supported"
PARAMETERS_NOT_ALLOWED = "Media type parameters not allowed"
UNSUPPORTED_CONTENT_TYPE = f"Only `{JSONAPI_MEDIA_TYPE}` content-type supported"

_ACCEPT_RULES: dict[MediaTypeCheck, tuple[int, str]] = {
    MediaTypeCheck.MISSING: (400, MISSING_ACCEPT),
    MediaTypeCheck.MALFORMED: (400, INVALID_ACCEPT),
    MediaTypeCheck.WRONG_MEDIA_TYPE: (400, INVALID_ACCEPT),
    MediaTypeCheck.UNSUPPORTED_FORMAT: (400, UNSUPPORTED_FORMAT),
    MediaTypeCheck.DISALLOWED_PARAMETERS: (406, PARAMETERS_NOT_ALLOWED),
}


class JSONAPIHeaderError(HTTPException):
    """Request header violation detected before the handler runs."""

    def __init__(self, status_code: int, detail: str, check: MediaTypeCheck) -> None:
        super().__init__(status_code=status_code, detail=detail)
        self.check = check


def accept_violation(check: MediaTypeCheck) -> JSONAPIHeaderError | None:
    """Return the error for an ``Accept`` classification, or None if valid."""
    if check is MediaTypeCheck.VALID:
        return None
    status_code, detail = _ACCEPT_RULES[check]
    return JSONAPIHeaderError(status_code, detail, check)


def content_type_violation(check: MediaTypeCheck) -> JSONAPIHeaderError | None:
    """Return the error for a ``Content-Type`` classification, or None if valid."""
    if check is MediaTypeCheck.VALID:
        return None
    return JSONAPIHeaderError(415, UNSUPPORTED_CONTENT_TYPE, check)


def status_title(status_code: int) -> str:
    """Return the reason phrase used as an error title."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


class JSONAPIErrorBuilder:
    """Build JSON:API error objects and error documents."""

    def error_object(
        self,
        *,
        status: int,
        title: str | None = None,
        detail: str | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API error object."""
        error = JSONAPIErrorObject(
            title=title if title is not None else status_title(status),
            status=status,
            detail=detail,
        )
        return error.model_dump(exclude_none=True)

    def error_document(self, error: Mapping[str, Any]) -> dict[str, Any]:
        """Return a JSON:API document holding exactly one error."""
        document = JSONAPIErrorDocument(errors=[JSONAPIErrorObject(**error)])
        return document.model_dump(exclude_none=True)

    def from_http_exception(self, exc: HTTPException) -> dict[str, Any]:
        """Translate a framework failure, keeping its status and detail."""
        detail = exc.detail if exc.detail is not None else status_title(exc.status_code)
        if not isinstance(detail, str):
            detail = json.dumps(detail, ensure_ascii=False, default=str)
        return self.error_document(
            self.error_object(status=exc.status_code, detail=detail)
        )
