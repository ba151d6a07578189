"""Environment configuration and validation.

This module defines strongly-typed parser settings loaded from environment variables (optionally via
a local `.env` file).
"""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from querie.config.logging import level_from_name
from querie.params.caster import DEFAULT_RANGE_SEPARATOR
from querie.params.dates import DATE_ORDERS
from querie.params.parser import DEFAULT_MAX_REF_DEPTH


class Settings(BaseSettings):
    """Parser settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_ref_depth: int = Field(default=DEFAULT_MAX_REF_DEPTH, ge=1, alias="QUERIE_MAX_REF_DEPTH")
    range_separator: str = Field(default=DEFAULT_RANGE_SEPARATOR, alias="QUERIE_RANGE_SEPARATOR")
    date_order: str = Field(default="YMD", alias="QUERIE_DATE_ORDER")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    parser_log_level: str | None = Field(default=None, alias="QUERIE_LOG_LEVEL")

    @field_validator("range_separator")
    @classmethod
    def validate_range_separator(cls, value: str) -> str:
        """A range separator must be a non-empty string (`str.split` rejects empty separators)."""

        if not value:
            raise ValueError("QUERIE_RANGE_SEPARATOR must not be empty")
        return value

    @field_validator("date_order")
    @classmethod
    def validate_date_order(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in DATE_ORDERS:
            raise ValueError(f"QUERIE_DATE_ORDER must be one of {sorted(DATE_ORDERS)}")
        return normalized

    @field_validator("log_level", "parser_log_level")
    @classmethod
    def validate_log_level(cls, value: str | None) -> str | None:
        if value is None:
            return None
        level_from_name(value)
        return value.strip().upper()


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
