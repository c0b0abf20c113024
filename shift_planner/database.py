"""Database connection and session management."""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from typing import Any, Dict, Generator
import logging

from shift_planner.config import Settings, settings


logger = logging.getLogger(__name__)


def engine_options(config: Settings) -> Dict[str, Any]:
    """Keyword arguments for create_engine; SQLite keeps its default pool."""
    options = {
        "pool_pre_ping": True,
        "pool_recycle": config.db_pool_recycle,
        "echo": config.debug,
    }
    if config.database_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_timeout=config.db_pool_timeout
        )
    return options


# Create database engine
engine = create_engine(settings.database_url, **engine_options(settings))

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for ORM models
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get database session.

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Initialize database by creating all tables."""
    # Register every model on Base.metadata before create_all
    import shift_planner.models  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise
