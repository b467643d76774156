#!/usr/bin/env python3
"""
Standalone database initialization script.

Creates every CoachDesk table on the database named by DATABASE_URL and lists
the tables that exist afterwards. Safe to run repeatedly.
"""

import sys
import logging
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

logger = logging.getLogger("coachdesk.init_db")


def init_schema() -> bool:
    """Create tables and report them; False when the database is unreachable"""
    from sqlalchemy import inspect
    from sqlalchemy.exc import SQLAlchemyError
    from domain.models.database import engine, init_database

    try:
        init_database()
    except SQLAlchemyError as e:
        logger.error(f"schema_init_failed error={str(e)}")
        return False

    tables = sorted(inspect(engine).get_table_names())
    logger.info(f"schema_ready tables={len(tables)} names={', '.join(tables)}")
    return True


def main() -> int:
    from app.config import settings

    logger.info(f"Initializing database environment={settings.environment.value}")
    return 0 if init_schema() else 1


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    sys.exit(main())
