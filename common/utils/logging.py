"""
Logging setup helpers.

Library modules only create loggers with ``logging.getLogger(__name__)``;
nothing is printed until the application calls configure_logging().

Example:
    from common.utils import configure_logging

    configure_logging(level="DEBUG", loggers=["smartsplit", "common"])
"""

import logging
import logging.config
from typing import Iterable, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: str = "INFO",
    loggers: Optional[Iterable[str]] = None,
) -> None:
    """
    Send log records from the given loggers to stdout.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)
        loggers: Logger names to configure (default: smartsplit and common)
    """
    level = level.upper()
    names = list(loggers) if loggers is not None else ["smartsplit", "common"]

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            name: {"level": level, "handlers": ["console"], "propagate": False}
            for name in names
        },
    })
