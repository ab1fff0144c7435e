"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass

_TRUE_VALUES = {"1", "true", "yes", "on", "y", "t"}
_FALSE_VALUES = {"0", "false", "no", "off", "n", "f"}

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _get_env_flag(name: str, default: bool = False) -> bool:
    """Return a boolean read from an environment variable."""

    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


def _get_env_choice(name: str, choices: set, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().upper()
    return normalized if normalized in choices else default


@dataclass(frozen=True)
class Settings:
    """Global settings read from the environment."""

    STRICT_TEMPLATES: bool = False
    LOG_LEVEL: str = "WARNING"


def load_settings() -> Settings:
    return Settings(
        STRICT_TEMPLATES=_get_env_flag("MENUKIT_STRICT_TEMPLATES", default=False),
        LOG_LEVEL=_get_env_choice("MENUKIT_LOG_LEVEL", LOG_LEVELS, "WARNING"),
    )


settings = load_settings()
