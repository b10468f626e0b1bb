"""Environment-backed configuration helpers.

Settings live in ATTIO_* environment variables. Names may be given with or
without the prefix: `get_config_value("timeout")` reads ATTIO_TIMEOUT.
"""

import os
from typing import Any

from attio.errors import ConfigurationError

ENV_PREFIX = "ATTIO_"

TRUE_VALUES = frozenset({"true", "yes", "on"})
FALSE_VALUES = frozenset({"false", "no", "off"})


def env_key(name: str) -> str:
    key = name.upper()
    return key if key.startswith(ENV_PREFIX) else f"{ENV_PREFIX}{key}"


def parse_config_value(value: str) -> str | bool | int | float:
    """Coerce a raw environment string to bool, int, float or str, in that order."""
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            continue
    return value


def get_config_value(name: str, default: Any = None) -> Any:
    """Read and coerce a setting, falling back to `default` when unset or blank."""
    raw = os.environ.get(env_key(name))
    if raw is None or raw.strip() == "":
        return default
    return parse_config_value(raw)


def get_config_value_str(name: str, default: str | None = None) -> str | None:
    """Read a setting without coercion. API keys and URLs must stay strings."""
    raw = os.environ.get(env_key(name))
    if raw is None or raw.strip() == "":
        return default
    return raw.strip()


def require_config_value(name: str) -> str:
    value = get_config_value_str(name)
    if value is None:
        raise ConfigurationError(f"Environment variable {env_key(name)} is required")
    return value
