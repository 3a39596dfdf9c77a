"""
Cash Advance API Configuration
Loads settings from the environment / .env file using Pydantic v2 BaseSettings
"""
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # ==================== Project Info ====================
    PROJECT_NAME: str = "Cash Advance API"
    PROJECT_DESCRIPTION: str = "Staff registration and cash advance request/approval workflow"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"

    # ==================== Database ====================
    # MONGODB_URI is honoured so existing deployments keep their variable name
    DATABASE_URL: str = Field(
        default="sqlite:///cash_advance_local.db",
        validation_alias=AliasChoices("DATABASE_URL", "MONGODB_URI"),
    )
    DATABASE_POOL_SIZE: int = 5
    DATABASE_MAX_OVERFLOW: int = 5
    DATABASE_POOL_TIMEOUT: int = 30
    DATABASE_POOL_RECYCLE: int = 3600
    DATABASE_CONNECT_TIMEOUT: int = 30
    DATABASE_ECHO: bool = False

    # ==================== Security & Identity ====================
    SECRET_KEY: str = "change-this-secret-key-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days
    # "caller": trust X-Staff-Id header, "token": decode the Bearer token
    IDENTITY_MODE: str = "caller"

    # ==================== CORS ====================
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "https://cash-advance-monitoring.vercel.app",
    ]
    ALLOWED_ORIGIN_REGEX: Optional[str] = r"https://.*\.vercel\.app"

    # ==================== Server ====================
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    RUN_MIGRATIONS: bool = False
    GRACEFUL_SHUTDOWN_SECONDS: Optional[int] = None

    # ==================== Features ====================
    DEBUG: bool = False
    TESTING: bool = False
    LOG_LEVEL: str = "INFO"

    # ==================== Configuration Loading ====================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    # ==================== Properties ====================
    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.lower().startswith("sqlite")

    @property
    def safe_database_url(self) -> str:
        """Database URL with credentials stripped, for logging"""
        if "@" in self.DATABASE_URL:
            scheme = self.DATABASE_URL.split("://")[0]
            return f"{scheme}://***@{self.DATABASE_URL.split('@', 1)[1]}"
        return self.DATABASE_URL


# ==================== Settings Singleton ====================
@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Create default settings instance
settings = get_settings()


# ==================== Helper Functions ====================
def is_development() -> bool:
    """Detailed error messages are only exposed in development"""
    return settings.DEBUG or settings.ENVIRONMENT.lower() == "development"


def is_testing() -> bool:
    """Check if running in testing mode"""
    return settings.TESTING
