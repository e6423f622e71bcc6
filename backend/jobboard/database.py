from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session
from jobboard.config import get_settings

settings = get_settings()

engine = create_engine(settings.database_url, echo=False)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def get_db_session() -> Session:
    """
    Get database session for Celery tasks and scheduled sweeps.

    Returns:
        SQLAlchemy Session (caller must close)
    """
    return SessionLocal()


def init_db():
    # Register models on Base.metadata before creating tables
    import jobboard.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
