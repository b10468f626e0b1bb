"""Client configuration.

Configuration is an explicit value handed to AttioClient; there is no
process-wide singleton. `AttioConfig.from_env()` reads ATTIO_* environment
variables for the common case.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from attio.errors import AuthenticationError
from attio.utils.config import get_config_value, get_config_value_str

DEFAULT_API_BASE = "https://api.attio.com"
DEFAULT_API_VERSION = "v2"


class AttioConfig(BaseModel):
    """Settings shared by every request made through one AttioClient."""

    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    api_base: str = DEFAULT_API_BASE
    api_version: str = DEFAULT_API_VERSION
    timeout: float = 30.0
    open_timeout: float = 10.0
    max_retries: int = 3
    retry_base_delay: float = 0.5
    verify_ssl_certs: bool = True
    ca_bundle_path: str | None = None
    debug: bool = False

    @field_validator("timeout", "open_timeout")
    @classmethod
    def _positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be positive")
        return value

    @field_validator("max_retries")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must be non-negative")
        return value

    @field_validator("api_base")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_env(cls, **overrides: Any) -> "AttioConfig":
        """Build a config from ATTIO_* environment variables, then apply overrides."""
        values: dict[str, Any] = {
            "api_key": get_config_value_str("api_key"),
            "api_base": get_config_value_str("api_base", DEFAULT_API_BASE),
            "api_version": get_config_value_str("api_version", DEFAULT_API_VERSION),
            "timeout": get_config_value("timeout", 30.0),
            "open_timeout": get_config_value("open_timeout", 10.0),
            "max_retries": get_config_value("max_retries", 3),
            "verify_ssl_certs": get_config_value("verify_ssl_certs", True),
            "ca_bundle_path": get_config_value_str("ca_bundle_path"),
            "debug": get_config_value("debug", False),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def merge(self, **overrides: Any) -> "AttioConfig":
        """Return a copy with the given settings replaced."""
        return self.model_copy(update={k: v for k, v in overrides.items() if k in type(self).model_fields})

    @property
    def base_url(self) -> str:
        return f"{self.api_base}/{self.api_version}"

    def require_api_key(self) -> str:
        if not self.api_key:
            raise AuthenticationError("No API key provided. Set ATTIO_API_KEY or pass api_key to AttioConfig")
        return self.api_key
