import logging

import uvicorn

from app.core.config import settings

logger = logging.getLogger("run")


def run_migrations() -> bool:
    """Run Alembic migrations."""
    try:
        from alembic.config import Config
        from alembic import command

        alembic_cfg = Config("alembic.ini")
        logger.info("[STARTUP] Running database migrations...")
        command.upgrade(alembic_cfg, "head")
        logger.info("[STARTUP] Migrations complete!")
        return True
    except Exception as e:
        logger.warning(f"[WARN] Migration failed: {e}")
        return False


def init_database() -> None:
    """Create tables directly (fallback when migrations are off or fail)."""
    from app.database import init_db
    logger.info("[STARTUP] Initializing database tables...")
    init_db()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    if settings.RUN_MIGRATIONS and not run_migrations():
        logger.warning("[WARN] Falling back to direct table creation...")
        init_database()

    # On SIGINT/SIGTERM uvicorn stops accepting connections, waits up to
    # GRACEFUL_SHUTDOWN_SECONDS for in-flight requests (unbounded when unset),
    # then runs the app lifespan shutdown which disposes the engine.
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT.lower() == "development" and settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
        timeout_graceful_shutdown=settings.GRACEFUL_SHUTDOWN_SECONDS,
        lifespan="on",
    )
