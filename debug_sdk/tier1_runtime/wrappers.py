"""
debug_sdk.tier1_runtime.wrappers
─────────────────────────────────
Ready-made capability types for values the caller wants to shape explicitly:
a single value with a FormatStyle, an array, or a dictionary. None of them
declare redaction keys of their own.

Usage:
    builder.make_description({
        "created": RedactableValue.iso_date(created_at),
        "tags": RedactableArray(["a", "b"]),
    })
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, Iterable

from debug_sdk.tier0_core.capability import is_capability, ordered_elements
from debug_sdk.tier0_core.errors import RenderError
from debug_sdk.tier0_core.normalize import FormatStyle, StyleKind, normalize, unwrap
from debug_sdk.tier0_core.values import VALUE_KEY
from debug_sdk.tier1_runtime.serialize import serialize


class RedactableValue:
    """A single value rendered through a FormatStyle as ``{"value": text}``."""

    redacted_debug_keys: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, value: Any, style: FormatStyle = FormatStyle.DEFAULT) -> None:
        self.value = value
        self.style = style

    def debug_dict(self, parent_keys: Any = None) -> dict[str, Any]:
        return {VALUE_KEY: normalize(self.value, self.style)}

    @classmethod
    def iso_date(cls, value: Any) -> "RedactableValue":
        return cls(value, FormatStyle.ISO8601)

    @classmethod
    def short_date(cls, value: Any) -> "RedactableValue":
        return cls(value, FormatStyle.SHORT_DATE)

    @classmethod
    def time_only(cls, value: Any) -> "RedactableValue":
        return cls(value, FormatStyle.TIME_ONLY)

    def __repr__(self) -> str:
        return f"RedactableValue(style={self.style.kind.value})"


class RedactableArray:
    """An array rendered as ``{"values": [...]}``."""

    redacted_debug_keys: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, elements: Iterable[Any]) -> None:
        self.elements = list(elements)

    def debug_dict(self, parent_keys: Any = None) -> dict[str, Any]:
        return {"values": [_wrap(element) for element in self.elements]}

    def __repr__(self) -> str:
        return f"RedactableArray(len={len(self.elements)})"


class RedactableDictionary:
    """A dictionary whose plain values are each rendered as ``{"value": text}``."""

    redacted_debug_keys: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, dictionary: Mapping[str, Any]) -> None:
        self.dictionary = dict(dictionary)

    def debug_dict(self, parent_keys: Any = None) -> dict[str, Any]:
        return {str(key): _wrap(value) for key, value in self.dictionary.items()}

    def __repr__(self) -> str:
        return f"RedactableDictionary(keys={len(self.dictionary)})"


def _wrap(value: Any) -> Any:
    return value if is_capability(value) else RedactableValue(value)


# ── Factory and plain normalisation ───────────────────────────────────────────

class Redactable:
    """Helpers choosing the right wrapper for an arbitrary value."""

    @staticmethod
    def of(value: Any, style: FormatStyle = FormatStyle.DEFAULT) -> Any:
        """
        Wrap *value*: capabilities are returned unchanged, mappings become a
        RedactableDictionary, lists/tuples/sets a RedactableArray, anything
        else a RedactableValue.
        """
        if is_capability(value):
            return value
        if isinstance(value, Mapping):
            return RedactableDictionary(value)
        if isinstance(value, (list, tuple, set, frozenset)):
            return RedactableArray(ordered_elements(value))
        return RedactableValue(value, style)

    @staticmethod
    def normalised(value: Any) -> Any:
        """
        A plain structure (dicts, lists, primitives) with every leaf
        normalised. No key-based redaction is applied here.
        """
        if isinstance(value, RedactableValue):
            return _plain_leaf(value.value, value.style)
        if isinstance(value, RedactableArray):
            return [Redactable.normalised(e) for e in value.elements]
        if isinstance(value, RedactableDictionary):
            return {k: Redactable.normalised(v) for k, v in value.dictionary.items()}
        if isinstance(value, Mapping):
            return {str(k): Redactable.normalised(v) for k, v in value.items()}
        if isinstance(value, (list, tuple, set, frozenset)):
            return [Redactable.normalised(e) for e in ordered_elements(value)]
        return _plain_leaf(value, FormatStyle.DEFAULT)

    @staticmethod
    def normalised_description(value: Any) -> str:
        """Pretty JSON of normalised(value), or its text when not serializable."""
        try:
            plain = Redactable.normalised(value)
        except RecursionError:
            return f"<unrenderable {type(value).__name__}>"
        try:
            return serialize(plain, pretty=True)
        except RenderError:
            return str(plain)


def _plain_leaf(value: Any, style: FormatStyle) -> Any:
    unwrapped = unwrap(value)
    if style.kind is StyleKind.DEFAULT and isinstance(unwrapped, (str, int, float, bool)):
        return unwrapped
    return normalize(unwrapped, style)


__all__ = ["Redactable", "RedactableArray", "RedactableDictionary", "RedactableValue"]
