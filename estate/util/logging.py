"""Standard library logging setup.

Route modules log through ``logging.getLogger(__name__)``. Records are
written to stdout and forwarded to Logfire so they sit alongside spans.
"""

import logging
import sys

import logfire

from estate.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Libraries that are chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "asyncio", "sqlalchemy.engine")


def log_level(settings: Settings) -> int:
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "test":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure the root logger for the given settings."""
    level = log_level(settings)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(logging.Formatter(LOG_FORMAT, "%Y-%m-%d %H:%M:%S"))

    logging.basicConfig(
        level=level,
        handlers=[stdout_handler, logfire.LogfireLoggingHandler()],
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging configured for {settings.environment} at {logging.getLevelName(level)}"
    )
