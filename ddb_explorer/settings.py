from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError


class Settings(BaseSettings):
    """Configuration for the DynamoDB explorer.

    Values are loaded from environment variables and `.env`.

    Notes:
    - Credentials come from the named AWS profile (~/.aws/config), never from here.
    - Set DDB_EXPLORER_ENDPOINT_URL to browse DynamoDB Local.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # AWS
    DDB_EXPLORER_PROFILES: list[str] = Field(default_factory=lambda: ["dev", "prod"])
    DDB_EXPLORER_DEFAULT_PROFILE: str = Field(default="dev")
    DDB_EXPLORER_REGION: str = Field(default="us-east-1")
    DDB_EXPLORER_ENDPOINT_URL: str | None = Field(default=None)

    # Query/Scan batch size
    DDB_EXPLORER_PAGE_SIZE: int = Field(default=15)

    # Where "download as JSON" writes files
    DDB_EXPLORER_EXPORT_DIR: Path = Field(default=Path("."))

    # Diagnostic logging (the terminal belongs to the UI, so logs go to a file)
    DDB_EXPLORER_LOG_DIR: Path = Field(default=Path("_logs"))
    DDB_EXPLORER_LOG_LEVEL: str = Field(default="INFO")
    # Timed rotation retention count (days).
    DDB_EXPLORER_LOG_BACKUP_COUNT: int = Field(default=7)


def load_settings() -> Settings:
    return Settings()


def validate_profile(settings: Settings, profile: str | None) -> str:
    """Return the profile to use, or raise ConfigError if it is not allowed.

    Args:
        settings: Application settings
        profile: Profile requested on the command line (None = default)

    Returns:
        The validated profile name
    """
    name = (profile or settings.DDB_EXPLORER_DEFAULT_PROFILE).strip()
    allowed = list(settings.DDB_EXPLORER_PROFILES)
    if name not in allowed:
        raise ConfigError(f"Invalid profile: {name}. Must be one of: {', '.join(repr(p) for p in allowed)}")
    return name
