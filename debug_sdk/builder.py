"""
debug_sdk.builder
─────────────────
Top-level entry point: turns a mapping of arbitrary values into redaction-safe
JSON text for logs and diagnostics.

Per entry:
  - a key exactly equal to a redaction key    → "[REDACTED]"
  - a capability value                        → its own debug_dict, keys merged
  - a mapping or sequence                     → structural redaction
  - any other leaf or opaque value            → fallback sanitizer, which hides
                                                values whose text contains a key

The same keys therefore act twice: as exact key names structurally and as
case-insensitive substrings against the text of leaf values. Neither test
triggers the other.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable

from debug_sdk.tier0_core.capability import Category, classify, is_capability
from debug_sdk.tier0_core.config import get_config
from debug_sdk.tier0_core.normalize import unwrap
from debug_sdk.tier0_core.policy import RedactionPolicy
from debug_sdk.tier0_core.values import REDACTED, DebugValue, MapValue
from debug_sdk.tier1_runtime.context import description_scope, guarded_description
from debug_sdk.tier1_runtime.serialize import render
from debug_sdk.tier1_runtime.wrappers import RedactableValue
from debug_sdk.tier2_reliability.fallback import FallbackSanitizer, with_fallback
from debug_sdk.tier2_reliability.redact import StructuralRedactor, get_redactor


def _unavailable(builder: Any, dictionary: Any, *args: Any, **kwargs: Any) -> str:
    try:
        size = len(dictionary)
    except Exception:
        size = "?"
    return f"<{type(dictionary).__name__} with {size} keys: description unavailable>"


class DebugDictionaryBuilder:
    """
    Usage:
        builder = DebugDictionaryBuilder(redact_keys={"token"})
        builder.flat_compact_description({"name": "Alice", "token": "abc123"})
        # → '{"name":"Alice","token":"[REDACTED]"}'
    """

    def __init__(
        self,
        redact_keys: Iterable[str] | str | None = None,
        redactor: StructuralRedactor | None = None,
    ) -> None:
        if redact_keys is None:
            redact_keys = get_config().default_redact_keys
        self.policy = RedactionPolicy.of(redact_keys)
        self.redactor = redactor or get_redactor()

    @property
    def redact_keys(self) -> frozenset[str]:
        return self.policy.keys

    @property
    def sanitizer(self) -> FallbackSanitizer:
        return self.redactor.sanitizer

    # ── Tree ─────────────────────────────────────────────────────────────────

    def make_tree(self, dictionary: Mapping[Any, Any]) -> MapValue:
        entries: dict[str, DebugValue] = {}
        for key, value in dictionary.items():
            name = key if isinstance(key, str) else str(key)
            if name in self.policy:
                entries[name] = REDACTED
            else:
                entries[name] = self._entry(value)
        return MapValue(entries)

    def _entry(self, value: Any) -> DebugValue:
        category = classify(unwrap(value)).category
        if category is Category.CAPABILITY:
            return self.redactor.describe(unwrap(value), self.policy)
        if category is Category.CONTAINER:
            return self.redactor.convert(value, self.policy)
        return self.sanitizer.sanitize(value, self.policy)

    def make_redactables(self, dictionary: Mapping[Any, Any]) -> dict[str, Any]:
        """Capabilities unchanged, every other value wrapped in RedactableValue."""
        return {
            str(key): value if is_capability(value) else RedactableValue(value)
            for key, value in dictionary.items()
        }

    # ── Text ─────────────────────────────────────────────────────────────────

    @with_fallback(default_factory=_unavailable)
    def make_description(self, dictionary: Mapping[Any, Any]) -> str:
        """Pretty-printed JSON, keys sorted."""
        with description_scope():
            return render(self.make_tree(dictionary), pretty=True)

    @with_fallback(default_factory=_unavailable)
    def flat_compact_description(self, dictionary: Mapping[Any, Any]) -> str:
        """Single-line JSON for log lines."""
        with description_scope():
            return render(self.make_tree(dictionary), pretty=False)


# ── Module-level convenience ──────────────────────────────────────────────────

def describe(
    dictionary: Mapping[Any, Any],
    redact_keys: Iterable[str] | str | None = None,
    pretty: bool = True,
) -> str:
    """
    Describe *dictionary* in one call.

    Usage:
        log.info("checkout.started", payload=describe(payload, {"card_number"}, pretty=False))
    """
    builder = DebugDictionaryBuilder(redact_keys)
    if pretty:
        return builder.make_description(dictionary)
    return builder.flat_compact_description(dictionary)


@with_fallback(default_factory=lambda value, *a, **kw: f"<{type(value).__name__}: description unavailable>")
def debug_description(value: Any, pretty: bool = True) -> str:
    """
    Text for a single capability value under the recursion guard. Values that
    are not capabilities go through the fallback sanitizer with no keys.
    """
    def _describe() -> str:
        if is_capability(value):
            tree = get_redactor().describe(value)
        else:
            tree = get_redactor().sanitizer.sanitize(value)
        return render(tree, pretty=pretty)

    return guarded_description(value, _describe)


__all__ = ["DebugDictionaryBuilder", "debug_description", "describe"]
