"""Database factory functions for creating database instances."""

import logging
import os
from pathlib import Path
from typing import Optional

from ledgerlens.database.sqlalchemy_db import SQLAlchemyDatabase

logger = logging.getLogger(__name__)

DB_PATH_ENV_VAR = "LEDGERLENS_DB_PATH"


def default_database_path() -> Path:
    """Return ~/.ledgerlens/ledgerlens.db, creating the directory."""
    db_dir = Path.home() / ".ledgerlens"
    db_dir.mkdir(exist_ok=True)
    return db_dir / "ledgerlens.db"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks
            LEDGERLENS_DB_PATH, then defaults to ~/.ledgerlens/ledgerlens.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV_VAR)
    if database_path is None:
        database_path = str(default_database_path())

    logger.debug("Using SQLite database at %s", database_path)
    return SQLAlchemyDatabase(f"sqlite:///{database_path}")


def create_memory_database() -> SQLAlchemyDatabase:
    """Create a throwaway in-memory SQLite database."""
    return SQLAlchemyDatabase("sqlite://")
