import logging

from app.db.session import engine
from app.db.base import Base

logger = logging.getLogger(__name__)


def init_db(bind=None):
    """Create any missing tables. Fails loudly if the database is unreachable."""
    # Import models so they register with Base.metadata
    from app.db import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables ready")
