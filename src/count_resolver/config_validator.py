"""
Configuration validation utilities.

Typed readers over environment variables with errors that name the variable.
"""
import os
import warnings
from typing import Optional

from .exceptions import ConfigurationError


def get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get optional environment variable.
    
    :param key: Environment variable name
    :param default: Default value if not set
    :return: Environment variable value or default
    """
    value = os.getenv(key, default)

    if value and _is_placeholder(value):
        # Warn but don't fail for optional configs
        warnings.warn(
            f"{key} appears to be a placeholder. Using default.",
            UserWarning
        )
        return default

    return value


def get_float_env(key: str, default: float) -> float:
    """
    Read a float environment variable.
    
    :raises: ConfigurationError if the value is not a number
    """
    raw = get_optional_env(key, str(default))
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key} must be a number, got {raw!r}")


def get_optional_float_env(key: str) -> Optional[float]:
    """Read a float environment variable; unset or blank means None."""
    raw = get_optional_env(key)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}")


def get_int_env(key: str, default: int) -> int:
    """
    Read an integer environment variable.
    
    :raises: ConfigurationError if the value is not an integer
    """
    raw = get_optional_env(key, str(default))
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}")


def get_bool_env(key: str, default: bool) -> bool:
    """Read a boolean environment variable ("true"/"1"/"yes" are true)."""
    raw = get_optional_env(key, "true" if default else "false")
    return raw.strip().lower() in {"true", "1", "yes", "on"}


def _is_placeholder(value: str) -> bool:
    """Check if value is a placeholder."""
    if not value:
        return False

    placeholder_patterns = [
        "your_",
        "placeholder",
        "replace",
        "changeme",
        "xxx",
    ]

    value_lower = value.lower()
    return any(pattern in value_lower for pattern in placeholder_patterns)
