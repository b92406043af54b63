"""
Configuration settings for robust query execution.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development (see .env.example).
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Logging ===
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Timing Defaults ===
    # Used when neither the query nor the caller supplies a value
    DEFAULT_TIMEOUT: float = Field(default=1.0, ge=0.0)  # seconds
    # Seconds, measured from attempt start; zero would make the loop spin
    DEFAULT_RETRY_INTERVAL: float = Field(default=0.05, gt=0.0)

    # === Error Classification ===
    # ErrorKind values tolerated by the default ClassificationPolicy
    RETRYABLE_ERROR_KINDS: list[str] = [
        "element_not_found",
        "stale_element",
        "window_not_found",
        "transient",
    ]

    # === Monitoring ===
    METRICS_ENABLED: bool = True


# Global settings instance
settings = Settings()
