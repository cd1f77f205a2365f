"""Pydantic schemas for JSON:API."""

from .resource import JSONAPIErrorDocument, JSONAPIErrorObject

__all__ = ["JSONAPIErrorDocument", "JSONAPIErrorObject"]
