"""
debug_sdk.tier0_core.normalize
───────────────────────────────
Turns a single leaf value plus a FormatStyle into text.

Absence is explicit: a bare ``None`` or an absent ``Nullable`` becomes
``"nil"``. Date styles only affect dates; anything else falls back to its
generic text without complaint.
"""
from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Generic, TypeVar

from debug_sdk.tier0_core.config import get_config
from debug_sdk.tier0_core.logging import get_logger

T = TypeVar("T")

NIL_TEXT = "nil"

logger = get_logger(__name__)


# ── Nullable ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Nullable(Generic[T]):
    """Explicit present/absent wrapper. ``Nullable()`` is absent."""
    value: T | None = None

    @property
    def is_present(self) -> bool:
        return self.value is not None


def unwrap(value: Any) -> Any:
    """Return the payload of a Nullable (None when absent); other values unchanged."""
    while isinstance(value, Nullable):
        value = value.value
    return value


# ── Format styles ─────────────────────────────────────────────────────────────

class StyleKind(str, Enum):
    DEFAULT = "default"
    ISO8601 = "iso8601"
    SHORT_DATE = "short_date"
    TIME_ONLY = "time_only"
    CUSTOM = "custom"


@dataclass(frozen=True)
class FormatStyle:
    kind: StyleKind = StyleKind.DEFAULT
    formatter: Callable[[Any], str] | None = None

    DEFAULT: ClassVar["FormatStyle"]
    ISO8601: ClassVar["FormatStyle"]
    SHORT_DATE: ClassVar["FormatStyle"]
    TIME_ONLY: ClassVar["FormatStyle"]

    @classmethod
    def custom(cls, formatter: Callable[[Any], str]) -> "FormatStyle":
        return cls(StyleKind.CUSTOM, formatter)


FormatStyle.DEFAULT = FormatStyle(StyleKind.DEFAULT)
FormatStyle.ISO8601 = FormatStyle(StyleKind.ISO8601)
FormatStyle.SHORT_DATE = FormatStyle(StyleKind.SHORT_DATE)
FormatStyle.TIME_ONLY = FormatStyle(StyleKind.TIME_ONLY)


# ── Leaf helpers ──────────────────────────────────────────────────────────────

def safe_text(value: Any) -> str:
    """``str(value)``, or a fixed marker when the value cannot describe itself."""
    if isinstance(value, str):
        return value
    try:
        return str(value)
    except Exception as exc:
        logger.warning(
            "normalize.unprintable",
            type_name=type(value).__name__,
            error_type=type(exc).__name__,
        )
        return f"<unprintable {type(value).__name__}>"


def iso8601(value: _dt.date) -> str:
    """
    ISO-8601 text. Datetimes are expressed in UTC with a ``Z`` suffix and
    whole seconds; naive datetimes are taken to be UTC already.
    """
    if isinstance(value, _dt.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(_dt.timezone.utc)
        return value.replace(tzinfo=None).isoformat(timespec="seconds") + "Z"
    return value.isoformat()


def describe_bytes(value: bytes | bytearray | memoryview) -> str:
    size = value.nbytes if isinstance(value, memoryview) else len(value)
    return f"<{size} bytes>"


def format_fallback_date(value: _dt.date) -> str:
    return _strftime(value, get_config().fallback_date_format)


def _strftime(value: _dt.date, fmt: str) -> str:
    try:
        return value.strftime(fmt)
    except (ValueError, UnicodeError):
        return iso8601(value)


# ── Public API ────────────────────────────────────────────────────────────────

def normalize(value: Any, style: FormatStyle = FormatStyle.DEFAULT) -> str:
    """
    Normalize a leaf to text under *style*.

    Usage:
        normalize(datetime(1970, 1, 1, tzinfo=timezone.utc), FormatStyle.ISO8601)
        # → "1970-01-01T00:00:00Z"
        normalize(Nullable())  # → "nil"
    """
    unwrapped = unwrap(value)
    if unwrapped is None:
        unwrapped = NIL_TEXT

    if style.kind is StyleKind.CUSTOM and style.formatter is not None:
        return _apply_custom(style.formatter, unwrapped)

    if isinstance(unwrapped, _dt.date):
        config = get_config()
        if style.kind is StyleKind.ISO8601:
            return iso8601(unwrapped)
        if style.kind is StyleKind.SHORT_DATE:
            return _strftime(unwrapped, config.short_date_format)
        if style.kind is StyleKind.TIME_ONLY and isinstance(unwrapped, _dt.datetime):
            return _strftime(unwrapped, config.time_only_format)

    return safe_text(unwrapped)


def _apply_custom(formatter: Callable[[Any], str], value: Any) -> str:
    try:
        result = formatter(value)
    except Exception as exc:
        logger.warning(
            "normalize.custom_failed",
            type_name=type(value).__name__,
            error_type=type(exc).__name__,
        )
        return safe_text(value)
    if isinstance(result, str):
        return result
    return safe_text(result)


__all__ = [
    "NIL_TEXT",
    "FormatStyle",
    "Nullable",
    "StyleKind",
    "describe_bytes",
    "format_fallback_date",
    "iso8601",
    "normalize",
    "safe_text",
    "unwrap",
]
