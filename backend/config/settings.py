"""
Application settings and configuration management.
All values can be overridden through FIELDDAY_* environment variables or a .env file.
"""
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings - all values from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FIELDDAY_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = "FieldDay"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"

    # Persistence settings
    data_dir: Path = Path.home() / ".fieldday"
    data_file_name: str = "competition_data.json"
    json_indent: int = 2
    autosave: bool = True

    # Storage retry policy (host side; the store itself never retries)
    storage_retries: int = 2
    storage_retry_delay: float = 0.1  # Seconds before the first retry

    # Logging settings
    log_level: str = "INFO"
    log_format: Optional[str] = None


# Global settings instance
settings = Settings()
