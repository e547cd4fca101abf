from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.field_validators import to_uppercase, to_lowercase


class Settings(BaseSettings):
    """
    Application settings loaded from the environment (and an optional `.env` file).
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration
    POSTGRES_DRIVER: str = "asyncpg"
    POSTGRES_USERNAME: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "backend_store"

    # Test database configuration
    TEST_POSTGRES_DB: str | None = None
    TESTING: bool = False

    # Full URL override (e.g. sqlite+aiosqlite:// for local runs)
    DATABASE_URL_OVERRIDE: str | None = None

    # SQLAlchemy / pool
    SQLALCHEMY_ECHO: bool = False
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 5
    DB_CREATE_ALL: bool = False

    # HTTP
    REQUEST_TIMEOUT_SECONDS: float = 30.0
    DEFAULT_PAGE_LIMIT: int = 100

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/backend-store")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        Return the connection URL for the current environment.

        - `DATABASE_URL_OVERRIDE`, when set, wins over everything else.
        - With `TESTING=True` and `TEST_POSTGRES_DB` set, the test database is used
          so test runs never touch the regular database.
        - Otherwise the URL is built from the POSTGRES_* variables.
        """
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE

        database = self.POSTGRES_DB
        if self.TESTING and self.TEST_POSTGRES_DB:
            database = self.TEST_POSTGRES_DB

        return (
            f"postgresql+{self.POSTGRES_DRIVER}://"
            f"{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
            f"{database}"
        )

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """Logging level names are expected in uppercase ("DEBUG", "INFO", ...)."""
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        return to_lowercase(v)

    @field_validator("DEFAULT_PAGE_LIMIT")
    def check_page_limit(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("DEFAULT_PAGE_LIMIT must be greater than zero")
        return v

    model_config = SettingsConfigDict(
        # `.env` next to the package root (src/backend_store/.env)
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Settings only come from the environment, so one cached instance is enough.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
