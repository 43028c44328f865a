"""
Startup database wiring.

Connectivity is checked once when the server starts. A failure is logged
and the server keeps running; requests that touch the database will fail
on their own.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from winajaya.core.config import Settings
from winajaya.db.session import Database

logger = logging.getLogger(__name__)


def connect_database(database: Database, settings: Settings) -> bool:
    """
    Authenticate against the database and, outside production, sync the schema.

    Returns True when the database is reachable (and synced if applicable).
    """
    try:
        database.authenticate()
        logger.info("Database connection established.")

        if not settings.is_production:
            database.sync()
            logger.info("Models synchronized.")
    except (SQLAlchemyError, OSError):
        logger.exception("Database connection failed")
        return False

    return True
