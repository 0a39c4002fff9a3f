"""
debug_sdk.tier2_reliability.redact
───────────────────────────────────
Structural redaction: walks mappings and sequences, hides values whose key
is in the effective policy, and recurses into capability values with the
policy merged top-down.

Key matching here is exact. A hidden key's value is replaced before it is
looked at, so an opaque value under a redacted key is never stringified.
Values the walker has no structural knowledge of go to FallbackSanitizer.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable

from debug_sdk.tier0_core.capability import (
    ValueKind,
    classify,
    is_capability,
    ordered_elements,
    own_redaction_keys,
    type_name,
)
from debug_sdk.tier0_core.errors import DescriptionError
from debug_sdk.tier0_core.logging import get_logger
from debug_sdk.tier0_core.normalize import (
    FormatStyle,
    describe_bytes,
    normalize,
    unwrap,
)
from debug_sdk.tier0_core.policy import RedactionPolicy
from debug_sdk.tier0_core.values import (
    REDACTED,
    DebugValue,
    ListValue,
    MapValue,
    Opaque,
    Scalar,
    unwrap_value_wrapper,
)
from debug_sdk.tier1_runtime.context import recursion_marker, visiting
from debug_sdk.tier2_reliability.fallback import FallbackSanitizer

logger = get_logger(__name__)

NULL_TEXT = "null"

KeysLike = RedactionPolicy | Iterable[str] | str | None


class StructuralRedactor:
    """
    Usage:
        redactor = StructuralRedactor()
        tree = redactor.redact({"user": user, "token": "abc"}, {"token"})
    """

    def __init__(self, sanitizer: FallbackSanitizer | None = None) -> None:
        self.sanitizer = sanitizer or FallbackSanitizer(redactor=self)

    # ── Mappings ─────────────────────────────────────────────────────────────

    def redact(
        self,
        mapping: Mapping[Any, Any],
        inherited_keys: KeysLike = None,
        own_keys: KeysLike = None,
    ) -> dict[str, DebugValue]:
        """
        Return a copy of *mapping* as DebugValues, with every value whose key
        is in ``inherited_keys ∪ own_keys`` replaced by REDACTED.
        """
        effective = RedactionPolicy.of(inherited_keys).merge(own_keys)
        result: dict[str, DebugValue] = {}
        for key, value in mapping.items():
            name = key if isinstance(key, str) else str(key)
            if name in effective:
                result[name] = REDACTED
            else:
                result[name] = self.convert(value, effective)
        return result

    # ── Values ───────────────────────────────────────────────────────────────

    def convert(self, value: Any, policy: KeysLike = None) -> DebugValue:
        """Convert one value under *policy* according to its classification."""
        policy = RedactionPolicy.of(policy)
        value = unwrap(value)
        kind = classify(value)

        if kind is ValueKind.CAPABILITY:
            return self.describe(value, policy)
        if kind is ValueKind.NORMALIZED:
            if isinstance(value, Opaque):
                return self.sanitizer.sanitize(value, policy)
            return value
        if kind is ValueKind.DATE:
            return Scalar(normalize(value, FormatStyle.ISO8601))
        if kind in (ValueKind.TEXT, ValueKind.INTEGER, ValueKind.FLOAT, ValueKind.BOOLEAN):
            return Scalar(value)
        if kind is ValueKind.IDENTIFIER:
            return Scalar(str(value))
        if kind is ValueKind.BYTES:
            return Scalar(describe_bytes(value))
        if kind is ValueKind.NULL:
            return Scalar(NULL_TEXT)
        if kind is ValueKind.MAPPING:
            with visiting(value) as entered:
                if not entered:
                    return Scalar(recursion_marker(value))
                return MapValue(self.redact(value, policy))
        if kind is ValueKind.SEQUENCE:
            with visiting(value) as entered:
                if not entered:
                    return Scalar(recursion_marker(value))
                return ListValue(tuple(
                    self._element(element, policy)
                    for element in ordered_elements(value)
                ))
        return self.sanitizer.sanitize(Opaque(value, type_name(value)), policy)

    def _element(self, element: Any, policy: RedactionPolicy) -> DebugValue:
        converted = self.convert(element, policy)
        # Arrays never expose the {"value": x} shape of single-value wrappers.
        if is_capability(unwrap(element)):
            return unwrap_value_wrapper(converted)
        return converted

    # ── Capabilities ─────────────────────────────────────────────────────────

    def describe(self, value: Any, inherited_keys: KeysLike = None) -> DebugValue:
        """
        Ask a capability for its own debug mapping, passing the inherited keys
        merged with its declared ones, and lift the result into DebugValues.
        The exact-key test is applied again while lifting, so a capability
        that ignores the keys it was given still cannot reveal them.
        """
        effective = RedactionPolicy.of(inherited_keys).merge(own_redaction_keys(value))
        with visiting(value) as entered:
            if not entered:
                return Scalar(recursion_marker(value))
            try:
                raw = self._debug_dict(value, effective)
            except DescriptionError as exc:
                logger.warning(
                    "describe.failed",
                    type_name=exc.type_name,
                    error_type=exc.metadata.get("error_type"),
                )
                return Scalar(f"<{exc.type_name} debug_dict failed: {exc.metadata.get('error_type')}>")
            return MapValue(self.redact(raw, effective))

    def _debug_dict(self, value: Any, effective: RedactionPolicy) -> Mapping[Any, Any]:
        name = type_name(value)
        try:
            raw = value.debug_dict(effective)
        except Exception as exc:
            raise DescriptionError(
                message="debug_dict raised.",
                type_name=name,
                error_type=type(exc).__name__,
            ) from exc
        if not isinstance(raw, Mapping):
            raise DescriptionError(
                message="debug_dict did not return a mapping.",
                type_name=name,
                error_type=type(raw).__name__,
            )
        return raw


# ── Module-level convenience ──────────────────────────────────────────────────

_redactor: StructuralRedactor | None = None


def get_redactor() -> StructuralRedactor:
    """Return the shared redactor. It holds no per-call state."""
    global _redactor
    if _redactor is None:
        _redactor = StructuralRedactor()
    return _redactor


def redact_dict(mapping: Mapping[Any, Any], keys: KeysLike = None) -> dict[str, DebugValue]:
    """Structurally redact *mapping* with exact-match *keys*."""
    return get_redactor().redact(mapping, keys)


__all__ = ["NULL_TEXT", "StructuralRedactor", "get_redactor", "redact_dict"]
