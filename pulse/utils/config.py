# ==============================================================================
# Application Configuration
# ==============================================================================
"""
Configuration management using pydantic-settings.

All configuration is loaded from environment variables, with support for
.env files via python-dotenv.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file before any settings are instantiated
load_dotenv()

BackendName = Literal["valkey", "file", "memory"]


class ValkeySettings(BaseSettings):
    """Valkey (Redis-compatible) settings for the shared event list.

    The backend is only used when a URL is configured. Without one, every
    consumer treats the Valkey store as absent.
    """

    model_config = SettingsConfigDict(env_prefix="VALKEY_")

    url: Optional[str] = Field(
        default=None, description="Valkey connection URL (redis:// or rediss://)"
    )
    events_key: str = Field(default="pulse:events", description="List key holding events")
    max_events: int = Field(
        default=20000, ge=1, description="Newest events kept in the list after each append"
    )
    socket_timeout: int = Field(default=10, description="Socket timeout in seconds")

    @property
    def is_configured(self) -> bool:
        """Check if a Valkey URL is configured."""
        return bool(self.url)


class FileStoreSettings(BaseSettings):
    """JSON file store settings."""

    model_config = SettingsConfigDict(env_prefix="FILE_STORE_")

    path: Path = Field(default=Path("/tmp/data/db.json"), description="Path to the JSON file")


class StoreSettings(BaseSettings):
    """Event store selection.

    Backends are tried in order: appends go to the first backend that accepts
    them, reads come from the first backend that answers.
    """

    model_config = SettingsConfigDict(env_prefix="STORE_")

    backends: list[BackendName] = Field(
        default=["valkey", "file"],
        description="Ordered store backends (valkey, file, memory)",
    )


class SessionSettings(BaseSettings):
    """Session reconstruction and report settings."""

    model_config = SettingsConfigDict(env_prefix="SESSION_")

    timeout_minutes: float = Field(
        default=30, ge=0, description="Session inactivity timeout in minutes"
    )
    top_referrers: int = Field(default=10, ge=0, description="Referrer hostnames in reports")
    top_pages: int = Field(default=5, ge=0, description="Pages in each page ranking")


class ApiSettings(BaseSettings):
    """HTTP server settings."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=8000, description="Bind port")
    allow_origins: list[str] = Field(
        default=["*"], description="CORS origins ('*' echoes any request origin)"
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    # Nested settings
    valkey: ValkeySettings = Field(default_factory=ValkeySettings)
    file_store: FileStoreSettings = Field(default_factory=FileStoreSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)

    # General settings
    log_level: str = Field(default="INFO", description="Logging level")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once and cached for subsequent calls.
    """
    return Settings()
