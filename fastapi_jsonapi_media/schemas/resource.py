"""Pydantic schemas for JSON:API error documents."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class JSONAPIErrorObject(BaseModel):
    """Single error object: title, numeric status and detail."""

    title: str
    status: int
    detail: Optional[str] = None


class JSONAPIErrorDocument(BaseModel):
    """Top-level JSON:API error document."""

    errors: List[JSONAPIErrorObject] = Field(min_length=1, max_length=1)
    meta: Optional[Dict[str, Any]] = None
