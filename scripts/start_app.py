#!/usr/bin/env python3
"""Run the API under uvicorn.

Logging and Logfire are configured before the app module is imported so
that startup failures are reported.
"""

import sys

import logfire
import uvicorn

from estate.config import Settings
from estate.util.logging import setup_logging
from estate.util.observability import configure_logfire

APP_PATH = "estate.interface.api.app:app"


def main() -> int:
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    with logfire.span("start_app", environment=settings.environment, git_sha=settings.git_sha):
        try:
            uvicorn.run(
                APP_PATH,
                host="0.0.0.0",
                port=settings.port,
                log_level="debug" if settings.debug else "info",
            )
        except Exception as e:
            logfire.error(
                "Application startup failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
