"""
Database configuration and session management.
"""

import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import settings

logger = logging.getLogger("coachdesk.database")

# Create SQLAlchemy Base
Base = declarative_base()


def _engine_kwargs() -> dict:
    kwargs = {"echo": settings.db_echo, "future": True}
    if settings.is_sqlite():
        # In-memory SQLite must share one connection across threads
        kwargs["connect_args"] = {"check_same_thread": False}
        kwargs["poolclass"] = StaticPool
    return kwargs


# Create engine
engine = create_engine(settings.database_url, **_engine_kwargs())

# Create session factory
SessionLocal = sessionmaker(bind=engine, autoflush=False, future=True)


def init_database():
    """Initialize database schema"""
    # Import model modules so every table is registered on Base.metadata
    from domain.models import profile, food, nutrition, recipe, program, assignment  # noqa: F401

    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
    logger.info("Database tables created successfully")


def get_db_session():
    """Get database session (for FastAPI dependency injection)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
