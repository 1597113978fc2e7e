"""
Skyward Notes — Application Configuration
==========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a module-level `settings` object.
Who:   Imported by the app factory, the database layer and Alembic.
When:  Loaded once at import time; read-only afterwards.

Database settings mirror the classic DB_* variables:
    DB_HOST      (default 127.0.0.1)
    DB_PORT      (default 3306)
    DB_NAME      (default notes_app)
    DB_USER      (default root)
    DB_PASSWORD  (default empty)

DATABASE_URL, when set, replaces the URL composed from the DB_* values.
Tests point it at an in-memory SQLite database.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes are grouped by concern for readability.
    """

    # ── Database ──────────────────────────────────────────────────────────
    db_host: str = Field(default="127.0.0.1")
    db_port: int = Field(default=3306, ge=1, le=65535)
    db_name: str = Field(default="notes_app")
    db_user: str = Field(default="root")
    db_password: str = Field(default="")

    # What: Full SQLAlchemy URL override (e.g. sqlite+aiosqlite:///./notes.db)
    database_url_override: Optional[str] = Field(default=None, alias="DATABASE_URL")

    # What: Validates pooled connections before use (MySQL drops idle ones)
    db_pool_pre_ping: bool = Field(default=True)

    # What: Recycle connections before MySQL's wait_timeout closes them
    db_pool_recycle: int = Field(default=3600, ge=60, le=86400)

    # ── Server ────────────────────────────────────────────────────────────
    app_host: str = Field(default="127.0.0.1")
    app_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DB_HOST and db_host both work
        "populate_by_name": True,
        "extra": "ignore",
    }

    @property
    def database_url(self) -> str:
        """
        What:  The async SQLAlchemy URL the engine connects with.
        How:   DATABASE_URL wins; otherwise a MySQL (aiomysql) URL is composed
               from the DB_* fields. URL.create escapes special characters in
               the password.
        """
        if self.database_url_override:
            return self.database_url_override
        url = URL.create(
            drivername="mysql+aiomysql",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
            query={"charset": "utf8mb4"},
        )
        return url.render_as_string(hide_password=False)

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


# Module-level instance, imported by the app factory and Alembic
settings = Settings()
