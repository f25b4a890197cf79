import logging

from chore_calendar.db.session import Base, engine

# Registers every table on Base.metadata
import chore_calendar.models  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(bind=None):
    """Create any missing tables."""
    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ready (%s)", bind.url.render_as_string(hide_password=True))
