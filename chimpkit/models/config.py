"""Client configuration model using pydantic-settings."""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chimpkit.utils.validators import is_valid_url


class Config(BaseSettings):
    """Client configuration loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    mailchimp_api_key: str
    mailchimp_api_url: str | None = None
    log_level: str = "INFO"
    request_timeout: float = 30.0
    max_retry_attempts: int = 2
    strict_batch_params: bool = False
    batch_poll_interval: float = 5.0

    @field_validator("mailchimp_api_key")
    @classmethod
    def validate_mailchimp_api_key(cls, value: str) -> str:
        """Mailchimp API key must be non-empty."""
        if not value.strip():
            msg = "mailchimp_api_key must not be empty"
            raise ValueError(msg)
        return value.strip()

    @field_validator("mailchimp_api_url")
    @classmethod
    def validate_mailchimp_api_url(cls, value: str | None) -> str | None:
        """API url override must be an http(s) url; blank means unset."""
        if value is None or not value.strip():
            return None
        if not is_valid_url(value):
            msg = "mailchimp_api_url must be an http:// or https:// url"
            raise ValueError(msg)
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Log level must be a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            msg = f"log_level must be one of {', '.join(sorted(valid_levels))}"
            raise ValueError(msg)
        return upper_value

    @field_validator("request_timeout", "batch_poll_interval")
    @classmethod
    def validate_positive_seconds(cls, value: float) -> float:
        if value <= 0:
            msg = "must be greater than 0 seconds"
            raise ValueError(msg)
        return value

    @field_validator("max_retry_attempts")
    @classmethod
    def validate_max_retry_attempts(cls, value: int) -> int:
        """Max retry attempts must be between 0 and 5."""
        if value < 0 or value > 5:
            msg = "max_retry_attempts must be between 0 and 5"
            raise ValueError(msg)
        return value
