"""
debug_sdk.tier2_reliability.fallback
─────────────────────────────────────
Degraded-but-functional handling for values with no structural knowledge.

FallbackSanitizer matches redaction terms against the *text of the value*,
case-insensitively, as substrings. That is a different policy from the
structural redactor's exact *key* match, and the two are kept separate:
a key that names a secret is hidden by the structural path, a value that
looks like one is hidden here.

with_fallback is the decorator every never-raise entry point goes through.
"""
from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any, Callable, Iterable, TypeVar

from debug_sdk.tier0_core.capability import Category, ValueKind, classify, type_name
from debug_sdk.tier0_core.logging import get_logger
from debug_sdk.tier0_core.normalize import (
    describe_bytes,
    format_fallback_date,
    safe_text,
    unwrap,
)
from debug_sdk.tier0_core.policy import RedactionPolicy
from debug_sdk.tier0_core.values import (
    DebugValue,
    Opaque,
    Scalar,
    redaction_marker,
)

if TYPE_CHECKING:
    from debug_sdk.tier2_reliability.redact import StructuralRedactor

F = TypeVar("F", bound=Callable[..., Any])

logger = get_logger(__name__)


# ── Decorator ─────────────────────────────────────────────────────────────────

def with_fallback(
    default: Any = None,
    *,
    default_factory: Callable[..., Any] | None = None,
    log_errors: bool = True,
    reraise: type[Exception] | tuple[type[Exception], ...] | None = None,
) -> Callable[[F], F]:
    """
    Decorator: on any exception, return a default instead of raising.

    Args:
        default: Value to return when the wrapped function raises.
        default_factory: Called with the wrapped function's arguments to build
            the default instead; takes precedence over *default*.
        log_errors: Whether to log the exception (default True).
        reraise: Exception type(s) that should still be raised (not caught).

    Usage::

        @with_fallback(default_factory=lambda value: f"<{type(value).__name__}>")
        def describe(value) -> str: ...
    """
    def decorator(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return fn(*args, **kwargs)
            except Exception as exc:
                if reraise and isinstance(exc, reraise):
                    raise
                if log_errors:
                    logger.warning(
                        "fallback_triggered",
                        function=fn.__qualname__,
                        error_type=type(exc).__name__,
                    )
                if default_factory is not None:
                    return default_factory(*args, **kwargs)
                return default

        return wrapper  # type: ignore[return-value]

    return decorator


# ── Sanitizer ─────────────────────────────────────────────────────────────────

def matches_any(text: str, substrings: Iterable[str]) -> bool:
    """Case-insensitive substring test of *text* against every term."""
    lowered = text.lower()
    return any(term and term.lower() in lowered for term in substrings)


class FallbackSanitizer:
    """
    Turns a value with no structural knowledge into a DebugValue, hiding it
    behind a typed marker when its text contains a redaction term.
    """

    def __init__(self, redactor: "StructuralRedactor | None" = None) -> None:
        self._redactor = redactor

    @property
    def redactor(self) -> "StructuralRedactor":
        if self._redactor is None:
            from debug_sdk.tier2_reliability.redact import StructuralRedactor
            self._redactor = StructuralRedactor(sanitizer=self)
        return self._redactor

    def sanitize(
        self,
        value: Any,
        redact_substrings: RedactionPolicy | Iterable[str] | str | None = None,
    ) -> DebugValue:
        policy = RedactionPolicy.of(redact_substrings)
        try:
            return self._sanitize(value, policy)
        except Exception as exc:
            logger.warning("sanitize.failed", error_type=type(exc).__name__)
            return Scalar(f"<unprintable {_declared_name(value)}>")

    def _sanitize(self, value: Any, policy: RedactionPolicy) -> DebugValue:
        declared = _declared_name(value)
        if isinstance(value, Opaque):
            value = value.value
        value = unwrap(value)
        substrings = policy.substrings()
        kind = classify(value)

        if kind is ValueKind.NULL:
            return redaction_marker(type_name(None), is_nil_or_empty=True)

        if kind is ValueKind.TEXT:
            if matches_any(value, substrings):
                return redaction_marker(declared, is_nil_or_empty=value == "")
            return Scalar(value)

        if kind in (ValueKind.BOOLEAN, ValueKind.INTEGER, ValueKind.FLOAT):
            if matches_any(str(value), substrings):
                return redaction_marker(declared)
            return Scalar(value)

        if kind is ValueKind.IDENTIFIER:
            text = str(value)
            if matches_any(text, substrings):
                return redaction_marker(declared)
            return Scalar(text)

        if kind is ValueKind.BYTES:
            return Scalar(describe_bytes(value))

        if kind is ValueKind.DATE:
            return Scalar(format_fallback_date(value))

        if kind is ValueKind.NORMALIZED:
            return value

        if kind is ValueKind.CAPABILITY:
            return self.redactor.describe(value, policy)

        if kind.category is Category.CONTAINER:
            return self.redactor.convert(value, policy)

        text = safe_text(value)
        if matches_any(text, substrings):
            return redaction_marker(declared)
        return Scalar(text)


def _declared_name(value: Any) -> str:
    if isinstance(value, Opaque):
        return value.type_name
    return type_name(unwrap(value))


__all__ = [
    "FallbackSanitizer",
    "matches_any",
    "with_fallback",
]
