# src/siteclocks/scripts/migrate.py
"""Apply the ordered schema migrations to the configured database."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from siteclocks.core.settings import settings

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


def build_alembic_config(database_url: str | None = None) -> Config:
    """Return an Alembic config pointing at the project's migrations."""
    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    # ConfigParser interpolation treats '%' specially (URL-encoded passwords).
    url = database_url or settings.database_url
    cfg.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    return cfg


def run_upgrade_head(database_url: str | None = None) -> None:
    """Upgrade the database to the latest revision.

    Every revision is idempotent, so databases created before migrations
    were tracked converge to the same schema.
    """
    logger.info("Applying migrations from %s", MIGRATIONS_DIR)
    command.upgrade(build_alembic_config(database_url), "head")


def main() -> None:
    parser = argparse.ArgumentParser(description="Apply SiteClocks schema migrations")
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to DATABASE_URL)",
    )
    args = parser.parse_args()
    logging.basicConfig(level=settings.log_level)
    run_upgrade_head(args.url)


if __name__ == "__main__":
    main()
