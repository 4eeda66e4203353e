"""
Centralized configuration for the video sharing backend.

Loads all environment variables and provides typed configuration objects.
No hardcoded secrets - all sensitive values must come from environment.
"""

import os
from typing import Optional
from dataclasses import dataclass, field

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


@dataclass
class DatabaseConfig:
    """Relational database configuration (PostgreSQL in production)."""

    database_url: Optional[str] = field(
        default_factory=lambda: os.getenv("DATABASE_URL"))
    statement_timeout_ms: int = field(default_factory=lambda: int(
        os.getenv("DB_STATEMENT_TIMEOUT_MS", "5000")))
    echo: bool = field(default_factory=lambda: os.getenv(
        "DB_ECHO", "false").lower() == "true")

    @property
    def url(self) -> Optional[str]:
        """
        Return the SQLAlchemy connection URL.

        Normalizes postgres:// to postgresql:// for hosted providers.
        """
        url = self.database_url
        if url and url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql://", 1)
        return url

    @property
    def is_postgres(self) -> bool:
        return bool(self.url) and self.url.startswith("postgresql")


@dataclass
class ServerConfig:
    """Server runtime configuration."""

    host: str = field(default_factory=lambda: os.getenv(
        "SERVER_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(
        os.getenv("SERVER_PORT", "8001")))
    debug: bool = field(default_factory=lambda: os.getenv(
        "DEBUG", "false").lower() == "true")
    log_level: str = field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    cors_origins: list[str] = field(
        default_factory=lambda: os.getenv("CORS_ORIGINS", "*").split(",")
    )


@dataclass
class MediaConfig:
    """Media storage and probing configuration."""

    storage_dir: str = field(default_factory=lambda: os.getenv(
        "MEDIA_STORAGE_DIR", os.path.join(os.getcwd(), "uploads")))
    base_url: str = field(default_factory=lambda: os.getenv(
        "MEDIA_BASE_URL", "/media"))
    temp_dir: str = field(default_factory=lambda: os.getenv(
        "MEDIA_TEMP_DIR", os.path.join(os.getcwd(), "tmp")))
    probe_timeout: float = field(default_factory=lambda: float(
        os.getenv("MEDIA_PROBE_TIMEOUT", "30")))
    ffprobe_binary: str = field(default_factory=lambda: os.getenv(
        "FFPROBE_BINARY", "ffprobe"))


@dataclass
class QueryConfig:
    """Pagination defaults for list endpoints."""

    default_page_size: int = field(default_factory=lambda: int(
        os.getenv("DEFAULT_PAGE_SIZE", "10")))
    max_page_size: int = field(default_factory=lambda: int(
        os.getenv("MAX_PAGE_SIZE", "100")))


@dataclass
class FlagsConfig:
    """Feature flags for response policies."""

    # List endpoints answer 404 instead of an empty list
    empty_result_not_found: bool = field(
        default_factory=lambda: os.getenv(
            "EMPTY_RESULT_NOT_FOUND", "true").lower() == "true"
    )


@dataclass
class Config:
    """
    Root configuration object aggregating all config sections.

    Usage:
        config = Config()
        db_url = config.database.url
        page_size = config.query.default_page_size
    """

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    media: MediaConfig = field(default_factory=MediaConfig)
    query: QueryConfig = field(default_factory=QueryConfig)
    flags: FlagsConfig = field(default_factory=FlagsConfig)

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of warnings/errors.

        Returns:
            List of validation messages (empty if all valid)
        """
        warnings = []

        if not self.database.url:
            warnings.append("DATABASE_URL not set - database calls will fail")
        elif not self.database.is_postgres and not self.server.debug:
            warnings.append("Non-PostgreSQL database in production mode")

        if self.query.default_page_size > self.query.max_page_size:
            warnings.append(
                "DEFAULT_PAGE_SIZE exceeds MAX_PAGE_SIZE - requests without a limit will be rejected")

        if self.database.statement_timeout_ms <= 0:
            warnings.append("DB_STATEMENT_TIMEOUT_MS disabled - slow queries can hang requests")

        return warnings


# Global config instance - import and use this
config = Config()
