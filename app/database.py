"""
Database connection management

The engine is a process-wide resource created on first use. Every caller of
get_engine() after the first gets the same pooled engine back; shutdown
disposes it through close_db_connection().
"""
import logging
import threading
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None
_engine_lock = threading.Lock()

# Bound to the engine on first acquire
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
)


def build_engine(database_url: str) -> Engine:
    """Create a pooled engine with the configured timeouts."""
    if database_url.lower().startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},  # SQLite multi-thread
            echo=settings.DATABASE_ECHO,
        )

    return create_engine(
        database_url,
        connect_args={"connect_timeout": settings.DATABASE_CONNECT_TIMEOUT},
        echo=settings.DATABASE_ECHO,
        pool_pre_ping=True,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_recycle=settings.DATABASE_POOL_RECYCLE,
        pool_timeout=settings.DATABASE_POOL_TIMEOUT,
    )


def get_engine() -> Engine:
    """Return the shared engine, creating it on the first call."""
    global _engine
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                _engine = build_engine(settings.DATABASE_URL)
                SessionLocal.configure(bind=_engine)
                logger.info(f"[DB] Engine created for {settings.safe_database_url}")
    return _engine


def is_connected() -> bool:
    """True once the engine exists and answers a trivial query."""
    if _engine is None:
        return False
    return ping_database()


def get_db():
    """Dependency for getting database session."""
    get_engine()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ping_database() -> bool:
    """Run SELECT 1 against the shared engine."""
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        return True
    except Exception as e:
        logger.warning(f"[DB] Connection check failed: {e}")
        return False


def init_db() -> None:
    """Create tables for all registered models."""
    from app.db.base import Base
    import app.models  # noqa: F401  (registers models with Base)

    Base.metadata.create_all(bind=get_engine())
    logger.info("[DB] Tables initialized")


def close_db_connection() -> None:
    """Dispose the pool. The next get_engine() call creates a fresh engine."""
    global _engine
    with _engine_lock:
        if _engine is not None:
            _engine.dispose()
            _engine = None
            logger.info("[DB] Connections closed")
