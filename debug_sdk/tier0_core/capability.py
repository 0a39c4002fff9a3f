"""
debug_sdk.tier0_core.capability
────────────────────────────────
The host capability contract and the total classification of values.

Every value lands in exactly one ValueKind, and every ValueKind in exactly
one Category. Capability is checked first so that a type describing itself is
never degraded into generic container or opaque handling.
"""
from __future__ import annotations

import datetime as _dt
import uuid
from collections.abc import Mapping
from enum import Enum
from typing import Any, ClassVar, Protocol, runtime_checkable

from debug_sdk.tier0_core.values import is_debug_value


# ── Capability contract ───────────────────────────────────────────────────────

@runtime_checkable
class SupportsDebugDict(Protocol):
    """
    A host type that declares its own redaction keys and produces its own
    debug mapping given the keys inherited from its parents.
    """

    redacted_debug_keys: ClassVar[frozenset[str]]

    def debug_dict(self, parent_keys: Any) -> Mapping[str, Any]:
        ...


# ── Classification ────────────────────────────────────────────────────────────

class Category(str, Enum):
    CAPABILITY = "capability"
    CONTAINER = "container"
    LEAF = "leaf"
    OPAQUE = "opaque"


class ValueKind(str, Enum):
    CAPABILITY = "capability"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    NORMALIZED = "normalized"
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    NULL = "null"
    BYTES = "bytes"
    IDENTIFIER = "identifier"
    DATE = "date"
    OPAQUE = "opaque"

    @property
    def category(self) -> Category:
        return _CATEGORIES[self]


_CATEGORIES: dict[ValueKind, Category] = {
    ValueKind.CAPABILITY: Category.CAPABILITY,
    ValueKind.MAPPING: Category.CONTAINER,
    ValueKind.SEQUENCE: Category.CONTAINER,
    ValueKind.NORMALIZED: Category.LEAF,
    ValueKind.TEXT: Category.LEAF,
    ValueKind.INTEGER: Category.LEAF,
    ValueKind.FLOAT: Category.LEAF,
    ValueKind.BOOLEAN: Category.LEAF,
    ValueKind.NULL: Category.LEAF,
    ValueKind.BYTES: Category.LEAF,
    ValueKind.IDENTIFIER: Category.LEAF,
    ValueKind.DATE: Category.LEAF,
    ValueKind.OPAQUE: Category.OPAQUE,
}

_SEQUENCE_TYPES = (list, tuple, set, frozenset)
_BYTES_TYPES = (bytes, bytearray, memoryview)


def is_capability(value: Any) -> bool:
    # Classes carry the same attributes as their instances; only instances count.
    if isinstance(value, type):
        return False
    try:
        return isinstance(value, SupportsDebugDict)
    except Exception:
        return False


def classify(value: Any) -> ValueKind:
    """Resolve *value* to exactly one ValueKind."""
    if is_capability(value):
        return ValueKind.CAPABILITY
    if is_debug_value(value):
        return ValueKind.NORMALIZED
    if value is None:
        return ValueKind.NULL
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, _BYTES_TYPES):
        return ValueKind.BYTES
    if isinstance(value, uuid.UUID):
        return ValueKind.IDENTIFIER
    if isinstance(value, _dt.date):
        return ValueKind.DATE
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, _SEQUENCE_TYPES):
        return ValueKind.SEQUENCE
    return ValueKind.OPAQUE


def ordered_elements(value: Any) -> list[Any]:
    """Elements of a sequence in a stable order; sets are sorted by text."""
    if isinstance(value, (set, frozenset)):
        try:
            return sorted(value, key=lambda e: (type(e).__name__, str(e)))
        except Exception:
            return list(value)
    return list(value)


def own_redaction_keys(value: Any) -> frozenset[str]:
    """A capability's declared keys; malformed declarations count as none."""
    keys = getattr(type(value), "redacted_debug_keys", None)
    if keys is None:
        keys = getattr(value, "redacted_debug_keys", None)
    if isinstance(keys, str):
        return frozenset({keys})
    try:
        return frozenset(str(k) for k in keys or ())
    except TypeError:
        return frozenset()


def type_name(value: Any) -> str:
    return type(value).__name__


__all__ = [
    "SupportsDebugDict",
    "Category",
    "ValueKind",
    "classify",
    "is_capability",
    "ordered_elements",
    "own_redaction_keys",
    "type_name",
]
