"""
Configuration management using pydantic-settings.

Handles environment variables and provides typed configuration for the
field registry and its host adapters.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Constants that are not meant to be tuned per deployment
internal_settings = {
    "logging": {
        "max_bytes": 5 * 1024 * 1024,
        "backup_count": 3,
    },
}


class Settings(BaseSettings):
    """
    Field registry configuration.

    Loads from .env file and LOGFIELDS_* environment variables.
    Environment variables take precedence over .env file values.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOGFIELDS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Label reported by the "environment" field (e.g. production, staging)
    environment: str = Field(
        default="production",
        description="Environment label attached to every record",
    )

    # Client IP resolution
    trust_forwarded_headers: bool = Field(
        default=False,
        description="Resolve client IP from the forwarded-for header (only behind a trusted proxy)",
    )
    forwarded_for_header: str = Field(
        default="x-forwarded-for",
        description="Header carrying the proxy chain of client addresses",
    )

    # Session key under which the host stores its session identifier
    session_id_key: str = Field(
        default="_session_id",
        description="Session key holding the session identifier",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Level for the logfields logger",
    )
    log_to_file: bool = Field(
        default=False,
        description="Also write logs to a rotating file in log_dir",
    )
    log_dir: Path | None = Field(
        default=None,
        description="Directory for log files (platform default when unset)",
    )


# Global settings instance
# Import this in other modules: `from logfields.core.config import settings`
settings = Settings()
