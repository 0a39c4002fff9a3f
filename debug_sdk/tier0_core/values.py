"""
debug_sdk.tier0_core.values
────────────────────────────
The DebugValue tree: the in-flight representation of any value between
classification and rendering. Pure data, no behaviour.

Trees are built fresh for every formatting call and never mutated afterwards.
A ``Redacted`` node is terminal: nothing downstream looks at what it replaced.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

REDACTED_TEXT = "[REDACTED]"

# Key used by single-value wrappers ({"value": ...}).
VALUE_KEY = "value"


# ── Variants ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Scalar:
    """A renderable primitive: text, number or boolean."""
    value: str | int | float | bool


@dataclass(frozen=True)
class ListValue:
    items: tuple["DebugValue", ...] = ()


@dataclass(frozen=True)
class MapValue:
    entries: dict[str, "DebugValue"] = field(default_factory=dict)

    def keys(self) -> list[str]:
        return list(self.entries)

    def get(self, key: str) -> "DebugValue | None":
        return self.entries.get(key)


@dataclass(frozen=True)
class Redacted:
    """Sentinel for a hidden value. Carries no payload."""

    def __repr__(self) -> str:
        return "Redacted()"


@dataclass(frozen=True)
class Opaque:
    """A value with no structural knowledge, pending fallback handling."""
    value: Any = field(compare=False)
    type_name: str = "object"


DebugValue = Union[Scalar, ListValue, MapValue, Redacted, Opaque]

REDACTED = Redacted()

_VARIANTS = (Scalar, ListValue, MapValue, Redacted, Opaque)


# ── Helpers ───────────────────────────────────────────────────────────────────

def is_debug_value(obj: Any) -> bool:
    return isinstance(obj, _VARIANTS)


def redaction_marker(type_name: str, is_nil_or_empty: bool | None = None) -> MapValue:
    """
    Marker emitted by the fallback path for a hidden leaf:
    ``{"value": "[REDACTED]", "type": <type_name>, "isNilOrEmpty": <bool>}``.
    The flag is only present for text and null leaves.
    """
    entries: dict[str, DebugValue] = {
        VALUE_KEY: REDACTED,
        "type": Scalar(type_name),
    }
    if is_nil_or_empty is not None:
        entries["isNilOrEmpty"] = Scalar(is_nil_or_empty)
    return MapValue(entries)


def unwrap_value_wrapper(node: DebugValue) -> DebugValue:
    """Collapse a ``{"value": x}`` map to ``x``; anything else is returned as is."""
    if isinstance(node, MapValue) and len(node.entries) == 1 and VALUE_KEY in node.entries:
        return node.entries[VALUE_KEY]
    return node


__all__ = [
    "REDACTED",
    "REDACTED_TEXT",
    "VALUE_KEY",
    "DebugValue",
    "ListValue",
    "MapValue",
    "Opaque",
    "Redacted",
    "Scalar",
    "is_debug_value",
    "redaction_marker",
    "unwrap_value_wrapper",
]
