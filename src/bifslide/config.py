"""bifslide configuration using pydantic-settings.

All configuration is strongly typed and supports environment variables
(prefixed with ``BIFSLIDE_``) and .env files.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BIFSLIDE_",
        case_sensitive=True,
        extra="ignore",
    )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # "console" or "json"

    # Metadata validation
    # When set, a missing Magnification or ScanRes attribute on the iScan
    # node is reported as bad data instead of being left unset.
    REQUIRE_CORE_METADATA: bool = False


# Singleton instance for import convenience
settings = Settings()
