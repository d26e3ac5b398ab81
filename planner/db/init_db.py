"""
Database initialization helpers.

Models are imported here so their tables get registered on Base.metadata.
"""

from sqlalchemy.engine import Engine

from planner.core.logging import get_logger
from planner.db.session import engine as default_engine
from planner.models.base import Base
from planner.models import project, task, user  # noqa: F401

logger = get_logger(__name__)


def init_db(bind: Engine | None = None) -> None:
    """
    Create all tables based on SQLAlchemy models.
    """
    bind = bind or default_engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ensured on %s", bind.url.render_as_string(hide_password=True))
