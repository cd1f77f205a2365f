"""Settings for the JSON:API media-type middleware.

Values come from keyword arguments at registration time, falling back to
``JSONAPI_*`` environment variables. Complex values (``meta``,
``body_methods``, ``exempt_paths``) are read from the environment as JSON.
"""

from typing import Any, Dict, Optional, Tuple

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class JSONAPISettings(BaseSettings):
    """Immutable configuration captured once when the middleware is registered.

    Attributes:
        meta: Opaque top-level meta merged into JSON object responses.
        body_methods: Methods whose ``Content-Type`` must be the JSON:API type.
        exempt_paths: Path prefixes that bypass header checks and formatting.
        log_rejections: Log header rejections at INFO instead of DEBUG.
    """

    model_config = SettingsConfigDict(env_prefix="JSONAPI_", frozen=True)

    meta: Optional[Dict[str, Any]] = None
    body_methods: Tuple[str, ...] = ("POST", "PATCH", "PUT")
    exempt_paths: Tuple[str, ...] = ()
    log_rejections: bool = False

    @field_validator("body_methods")
    @classmethod
    def _upper_methods(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        return tuple(method.upper() for method in value)

    def is_exempt(self, path: str) -> bool:
        """Return True when the path is an exempt prefix or lies below one."""
        return any(
            path == prefix or path.startswith(prefix.rstrip("/") + "/")
            for prefix in self.exempt_paths
        )
