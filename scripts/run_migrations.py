#!/usr/bin/env python3
"""Apply Alembic migrations with Logfire error tracking.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py <revision> # upgrade to a specific revision
"""

import sys
import logfire
from alembic import command
from alembic.config import Config

from hadik.config import Settings
from hadik.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Run migrations and log any errors to Logfire."""
    settings = Settings()
    configure_logfire(settings)

    target = argv[1] if len(argv) > 1 else "head"

    try:
        with logfire.span("run_migrations", target=target):
            alembic_cfg = Config("alembic.ini")
            command.upgrade(alembic_cfg, target)
            logfire.info("Database migrations completed", target=target)
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            target=target,
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Fail the deploy rather than serve a broken schema
        raise


if __name__ == "__main__":
    sys.exit(main(sys.argv))
