"""Middleware for JSON:API media-type enforcement."""

from .content_negotiation import ContentNegotiationMiddleware
from .error_handler import ErrorHandlerMiddleware, JSONAPIResponseFormatter

__all__ = ["ContentNegotiationMiddleware", "ErrorHandlerMiddleware", "JSONAPIResponseFormatter"]
