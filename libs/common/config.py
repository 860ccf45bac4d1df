from functools import lru_cache
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings."""

    # Application
    ENVIRONMENT: Literal["local", "test", "development", "production"] = "local"
    LOG_LEVEL: str = "INFO"
    PORT: int = 3000
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:8081",
        "http://localhost:19006",
    ]

    # Database (PG_* mirror the variables the deployment already exports)
    PG_HOST: str = "localhost"
    PG_PORT: int = 5432
    PG_DB: str = "bundleup"
    PG_USER: str = "postgres"
    PG_PASS: str = "postgres"
    DATABASE_URL: Optional[str] = None
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800

    # Auth
    # Default placeholder secrets keep local/test runs working. Real
    # deployments must override both via env.
    JWT_SECRET: str = "your-secret-key"
    JWT_REFRESH_SECRET: str = "your-refresh-secret-key"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_EXPIRY: int = 3600  # 1 hour
    JWT_REFRESH_EXPIRY: int = 2592000  # 30 days
    BCRYPT_ROUNDS: int = 12
    ADMIN_EMAIL_DOMAIN: str = "naturalfoodsinc.com"

    # Rate limiting
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    AUTH_RATE_LIMIT: str = "10/minute"
    RATE_LIMIT_ENABLED: bool = True

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("DATABASE_URL")
    @classmethod
    def normalize_db_driver(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str):
            if v.startswith("postgresql://"):
                return v.replace("postgresql://", "postgresql+asyncpg://", 1)
            if v.startswith("postgres://"):
                return v.replace("postgres://", "postgresql+asyncpg://", 1)
        return v

    @property
    def database_url(self) -> str:
        """Explicit DATABASE_URL if set, otherwise assembled from PG_* values."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.PG_USER}:{self.PG_PASS}"
            f"@{self.PG_HOST}:{self.PG_PORT}/{self.PG_DB}"
        )


@lru_cache
def get_settings() -> Settings:
    """
    Return the global settings instance, cached.
    """
    return Settings()
