#!/usr/bin/env python3
"""Upgrade the Murmur schema, reporting failures to Logfire.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py 3f2c9a1d7b40
"""

import sys
import logfire
from alembic import command
from alembic.config import Config

from murmur.config import Settings
from murmur.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Run migrations up to the given revision (default head)."""
    settings = Settings()
    configure_logfire(settings)

    revision = argv[1] if len(argv) > 1 else "head"
    with logfire.span("migrations.upgrade", revision=revision):
        try:
            alembic_cfg = Config("alembic.ini")
            alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)
            command.upgrade(alembic_cfg, revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                revision=revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Re-raise so the deploy stops instead of starting on a stale schema
            raise

    logfire.info("Database migrations completed", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
