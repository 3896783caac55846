# backend/scripts/create_tables.py
"""Create the ride schedule tables on a local database (the hosted schema is managed remotely)."""

import logging

from ridealert.config import settings
from ridealert.db.database import init_db
from ridealert.services.debug_logger import configure_logging

logger = logging.getLogger(__name__)


def main():
    configure_logging(settings.LOG_LEVEL)
    logger.info("Creating all tables...")
    init_db()
    logger.info("Tables created.")


if __name__ == "__main__":
    main()
