"""
Cash Advance API - Main Application
FastAPI application with CORS, error envelopes, request logging and lifespan
management of the database engine.
"""
import logging
import time
import traceback
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes import cash_advance_router, staff_router
from app.core.config import is_development, settings
from app.core.exceptions import AppError
from app.database import close_db_connection, get_engine, init_db, is_connected, ping_database


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# ==================== STARTUP & SHUTDOWN ====================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Acquire the shared engine on startup, dispose it on shutdown."""
    logger.info("=" * 70)
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION} ({settings.ENVIRONMENT})")
    logger.info("=" * 70)

    get_engine()
    if ping_database():
        logger.info("[OK] Database connection successful")
    else:
        logger.warning("[WARN] Database connection failed - continuing in degraded mode")

    if not settings.RUN_MIGRATIONS:
        try:
            init_db()
        except Exception as init_error:
            logger.warning(f"[WARN] Database init failed: {init_error} - tables may not exist")

    yield

    logger.info("Shutting down application...")
    close_db_connection()
    logger.info("Application shutdown complete")


# Initialize FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=settings.PROJECT_DESCRIPTION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)


# ==================== MIDDLEWARE ====================


# Compression: GZip responses
app.add_middleware(GZipMiddleware, minimum_size=1000)


# CORS: exact frontend origins plus preview deployments matched by regex
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_origin_regex=settings.ALLOWED_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming requests"""
    # Skip logging for health checks
    if request.url.path == "/api/health":
        return await call_next(request)

    start_time = time.perf_counter()
    client_host = request.client.host if request.client else "-"
    logger.info(f">> {request.method} {request.url.path} - {client_host}")

    try:
        response = await call_next(request)
        duration = time.perf_counter() - start_time
        logger.info(f"<< {request.method} {request.url.path} - {response.status_code} ({duration:.2f}s)")
        return response
    except Exception as e:
        duration = time.perf_counter() - start_time
        logger.error(f"[ERROR] {request.method} {request.url.path} - Error: {str(e)} ({duration:.2f}s)")
        raise


# ==================== ROUTERS ====================


app.include_router(staff_router, prefix="/api/staff", tags=["Staff"])
app.include_router(cash_advance_router, prefix="/api/cash-advance", tags=["Cash Advance"])


# ==================== ERROR HANDLERS ====================


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )


def format_validation_errors(errors) -> str:
    """Collapse pydantic errors into one message, missing fields first."""
    missing = []
    messages = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path", "header")]
        field = ".".join(loc) or "body"
        if err.get("type") == "missing":
            missing.append(field)
            continue
        msg = err.get("msg", "Invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        messages.append(f"{field}: {msg}")

    if missing:
        messages.insert(0, "Please provide all required fields: " + ", ".join(missing))
    return ", ".join(messages) or "Validation error"


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Service-layer errors carry their own status code"""
    logger.warning(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return _error(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request body / query validation failures are client errors (400)"""
    message = format_validation_errors(exc.errors())
    logger.warning(f"Validation error on {request.url.path}: {message}")
    return _error(status.HTTP_400_BAD_REQUEST, message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unmatched routes and other framework-level HTTP errors"""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return _error(exc.status_code, "Route not found")
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions"""
    logger.error(f"Unhandled exception: {exc}\n{traceback.format_exc()}")

    # Don't expose internal errors in production
    message = str(exc) if is_development() else "Internal server error"
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


# ==================== HEALTH ====================


@app.get("/api/health", tags=["System"])
def health_check():
    """Liveness plus database connection status"""
    return {
        "success": True,
        "message": "Server is running!",
        "database": "connected" if is_connected() else "disconnected",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
