"""
debug_sdk.tier0_core.config
────────────────────────────
Typed configuration with env layering. Reads from .env → environment
variables. All fields are typed via Pydantic. Invalid values raise
ConfigurationError on first use, not in the middle of formatting.

Minimal stack: pydantic-settings + python-dotenv
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from debug_sdk.tier0_core.errors import ConfigurationError


class DebugConfig(BaseSettings):
    """
    Typed debug_sdk configuration. All env vars are prefixed with DEBUG_SDK_.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", alias="DEBUG_SDK_LOG_LEVEL")
    log_format: str = Field(default="json", alias="DEBUG_SDK_LOG_FORMAT")

    # ── Redaction ─────────────────────────────────────────────────────────────
    # JSON list in the environment, e.g. DEBUG_SDK_REDACT_KEYS='["token"]'
    default_redact_keys: list[str] = Field(
        default_factory=list, alias="DEBUG_SDK_REDACT_KEYS"
    )

    # ── Rendering ─────────────────────────────────────────────────────────────
    pretty_indent: int = Field(default=2, ge=0, alias="DEBUG_SDK_PRETTY_INDENT")

    # ── Date styles (strftime, locale-governed) ───────────────────────────────
    short_date_format: str = Field(default="%x", alias="DEBUG_SDK_SHORT_DATE_FORMAT")
    time_only_format: str = Field(default="%X", alias="DEBUG_SDK_TIME_FORMAT")
    fallback_date_format: str = Field(
        default="%x %X", alias="DEBUG_SDK_FALLBACK_DATE_FORMAT"
    )

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed = {"json", "console"}
        if v.lower() not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got {v!r}")
        return v.lower()

    @field_validator("short_date_format", "time_only_format", "fallback_date_format")
    @classmethod
    def validate_date_format(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("date format must not be empty")
        return v


@lru_cache(maxsize=1)
def get_config() -> DebugConfig:
    """
    Return the singleton debug_sdk config. Cached after first call.
    Call _reset_config() in tests to pick up new env vars.
    """
    try:
        return DebugConfig()
    except PydanticValidationError as exc:
        raise ConfigurationError(
            message="Invalid debug_sdk configuration.",
            detail=str(exc),
        ) from exc


def _reset_config() -> None:
    """Clear the config cache. Used by tests."""
    get_config.cache_clear()


__all__ = ["DebugConfig", "get_config"]
