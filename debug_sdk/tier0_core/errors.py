"""
debug_sdk.tier0_core.errors
────────────────────────────
Error taxonomy. Formatting itself never lets an error reach the caller:
RenderError and DescriptionError are raised and handled inside the degrade
paths. ConfigurationError is the only one that surfaces, on a bad environment.
"""
from __future__ import annotations

from typing import Any


# ── Base error ────────────────────────────────────────────────────────────────

class DebugSdkError(Exception):
    """
    Base class for all debug_sdk errors. Every error has:
    - code: stable machine-readable string (snake_case)
    - message: short, value-free summary
    - detail: internal context, never rendered into debug output
    """

    code: str = "debug_sdk_error"

    def __init__(
        self,
        code: str | None = None,
        message: str = "An unexpected error occurred.",
        detail: str | None = None,
        **metadata: Any,
    ) -> None:
        self.code = code or self.__class__.code
        self.message = message
        self.detail = detail or message
        self.metadata = metadata
        super().__init__(self.detail)

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
            }
        }


# ── Typed error classes ───────────────────────────────────────────────────────

class ConfigurationError(DebugSdkError):
    """Invalid DEBUG_SDK_* settings detected on first use."""
    code = "configuration_error"


class RenderError(DebugSdkError):
    """A normalized tree could not be serialized to JSON."""
    code = "render_error"


class DescriptionError(DebugSdkError):
    """A capability's own debug_dict failed or returned a non-mapping."""
    code = "description_error"

    def __init__(
        self,
        code: str | None = None,
        message: str = "Debug description failed.",
        type_name: str | None = None,
        **metadata: Any,
    ) -> None:
        self.type_name = type_name
        super().__init__(code, message, **metadata)

    def to_dict(self) -> dict:
        d = super().to_dict()
        if self.type_name:
            d["error"]["type"] = self.type_name
        return d


__all__ = [
    "DebugSdkError",
    "ConfigurationError",
    "RenderError",
    "DescriptionError",
]
