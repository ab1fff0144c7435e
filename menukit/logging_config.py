import logging
import logging.config
from typing import Optional

from menukit import config


def configure_logging(level: Optional[str] = None) -> None:
    """Send menukit log records to the console.

    Args:
        level: logger level name, defaults to ``settings.LOG_LEVEL``
    """

    level = (level or config.settings.LOG_LEVEL).upper()

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "verbose": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "DEBUG",
                "formatter": "verbose",
            },
        },
        "loggers": {
            "menukit": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
        },
    }

    logging.config.dictConfig(logging_config)


__all__ = ["configure_logging"]
