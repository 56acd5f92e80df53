# clinic_booking/database.py

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from .config import settings

logger = logging.getLogger(__name__)


def make_engine(url: str):
    """Create an engine; SQLite gets cross-thread access and FK enforcement."""
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    # check_same_thread=False: sync FastAPI endpoints run in a threadpool
    engine = create_engine(url, connect_args={"check_same_thread": False})

    @event.listens_for(engine, "connect")
    def enable_sqlite_fk(dbapi_connection, _):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


engine = make_engine(settings.resolved_database_url)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


def init_db(bind=None) -> None:
    """Create tables that do not exist yet."""
    from .models import Base

    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info(f"Database schema ready: {bind.url}")


# Dependency for FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
