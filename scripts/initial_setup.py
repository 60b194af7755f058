"""Prepare the recommendation store configured by DATABASE_URL and migrate it."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.engine import make_url

from aiservice.config import get_settings
from aiservice.database import run_migrations
from aiservice.logging_config import configure_logging


logger = logging.getLogger("scripts.initial_setup")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create the database directory and apply migrations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Migrate the configured database to the latest revision
  python scripts/initial_setup.py

  # Use a different SQLite file
  DATABASE_URL=sqlite:////var/lib/aiservice/store.db python scripts/initial_setup.py
        """
    )
    parser.add_argument(
        "--revision",
        default="head",
        help="Alembic revision to upgrade to (default: head)"
    )
    return parser.parse_args(argv)


def sqlite_directory(database_url: str) -> Path | None:
    """Directory holding the SQLite file, or None for in-memory and server databases."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return None
    if not url.database or url.database == ":memory:":
        return None
    return Path(url.database).parent


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()

    database_url = get_settings().database_url
    directory = sqlite_directory(database_url)
    if directory is not None:
        directory.mkdir(parents=True, exist_ok=True)
        logger.info("Database directory ready at %s", directory)

    run_migrations(args.revision)
    logger.info("Migrated %s to %s", make_url(database_url).render_as_string(hide_password=True), args.revision)
    return 0


if __name__ == "__main__":
    sys.exit(main())
