"""Schema creation and first-run seeding."""

import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

import rbac_admin.models  # noqa: F401  (registers tables on Base.metadata)
from rbac_admin.core.config import settings
from rbac_admin.db.base import Base
from rbac_admin.db.session import engine as default_engine, SessionLocal
from rbac_admin.db.seeds import seed_all

logger = logging.getLogger("rbac_admin.db")


def create_tables(engine: Optional[Engine] = None) -> None:
    """Create any missing tables."""
    Base.metadata.create_all(bind=engine or default_engine)


def drop_tables(engine: Optional[Engine] = None) -> None:
    Base.metadata.drop_all(bind=engine or default_engine)


def init_db(
    engine: Optional[Engine] = None,
    session_factory: Optional[sessionmaker] = None,
    seed: Optional[bool] = None,
) -> None:
    """Create the schema and, on first run, the default data."""
    create_tables(engine)
    if seed is None:
        seed = settings.SEED_ON_STARTUP
    if not seed:
        return

    db = (session_factory or SessionLocal)()
    try:
        if seed_all(db):
            logger.info("Default data initialised")
    finally:
        db.close()
