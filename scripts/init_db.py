#!/usr/bin/env python3
"""Create the forum tables in the configured database.

Usage:
    DATABASE__URL=postgresql+asyncpg://... python scripts/init_db.py [--reset]

With ``--reset`` every forum table is dropped first, which deletes all data.
"""

import argparse
import asyncio
import sys

from forum.config import Settings
from forum.persistence.database import create_engine, create_tables, drop_tables
from forum.util.logging import get_logger, setup_logging

logger = get_logger(__name__)


async def init_db(settings: Settings, reset: bool = False) -> None:
    engine = create_engine(settings)
    try:
        if reset:
            logger.warning("Dropping all forum tables")
            await drop_tables(engine)
        await create_tables(engine)
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create the forum tables.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop all forum tables before creating them",
    )
    args = parser.parse_args(argv)

    settings = Settings()
    setup_logging(settings)

    logger.info("Creating tables (environment=%s)", settings.environment)
    asyncio.run(init_db(settings, reset=args.reset))
    logger.info("Tables created")
    return 0


if __name__ == "__main__":
    sys.exit(main())
