#!/usr/bin/env python3
"""Apply identity schema migrations, reporting failures to Logfire.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py <revision> # upgrade to a specific revision
"""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from estate.config import Settings
from estate.util.logging import setup_logging
from estate.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def main(argv: list[str]) -> int:
    """Upgrade the database and log the outcome."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    target = argv[1] if len(argv) > 1 else "head"

    with logfire.span("run_migrations", target=target):
        try:
            alembic_cfg = Config(str(ALEMBIC_INI))
            command.upgrade(alembic_cfg, target)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                target=target,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Fail the deploy rather than start against a broken schema
            raise

        logfire.info("Database migrated", target=target)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
