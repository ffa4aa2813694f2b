import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    DB_PATH: str = Field(
        default="/app/data/quotator.db",
        description="Path of the SQLite database file holding the pricing tables",
    )
    HOST: str = Field(default="0.0.0.0", description="Interface the HTTP server binds to")
    PORT: int = Field(default=3849, description="Port the HTTP server listens on")
    INITIAL_CRAWL_DELAY: float = Field(
        default=2.0,
        description="Seconds to wait before the startup refresh; negative disables it",
    )
    REFRESH_INTERVAL: int = Field(
        default=0,
        ge=0,
        description="Seconds between scheduled refreshes after the first; 0 runs only once",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {', '.join(valid_levels)}")
        return v

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v):
        if not 0 < v < 65536:
            raise ValueError(f"Invalid port {v}. Must be between 1 and 65535")
        return v

    @field_validator("DB_PATH")
    @classmethod
    def validate_db_path(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("DB_PATH must not be empty")
        return v

    def get_log_level(self) -> int:
        """Convert string log level to logging constant"""
        return getattr(logging, self.LOG_LEVEL)

    @property
    def initial_crawl_enabled(self) -> bool:
        return self.INITIAL_CRAWL_DELAY >= 0
