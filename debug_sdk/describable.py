"""
debug_sdk.describable
─────────────────────
Mixins for host types that want to control their own debug output.

    @dataclass
    class Token(DebugRedactable):
        redacted_debug_keys = frozenset({"value"})
        value: str
        expiry: datetime

    @dataclass(repr=False)
    class User(DebugDescribable):
        redacted_debug_keys = frozenset({"id"})
        id: str
        name: str
        token: Token

    repr(user)   # pretty JSON, id and token.value hidden

Types that do not use these mixins can still satisfy the capability contract
by providing ``redacted_debug_keys`` and ``debug_dict(parent_keys)``.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any, ClassVar

from debug_sdk.builder import debug_description
from debug_sdk.tier0_core.policy import RedactionPolicy
from debug_sdk.tier0_core.values import DebugValue
from debug_sdk.tier2_reliability.redact import get_redactor


class DebugRedactable:
    """Capability mixin: declared redaction keys plus a default debug_dict."""

    redacted_debug_keys: ClassVar[frozenset[str]] = frozenset()

    def merged_redacted_keys(self, parent_keys: Any = None) -> RedactionPolicy:
        """The type's own keys combined with those inherited from parents."""
        return RedactionPolicy.of(parent_keys).merge(type(self).redacted_debug_keys)

    def redact(self, mapping: Mapping[str, Any], parent_keys: Any = None) -> dict[str, DebugValue]:
        """Structurally redact *mapping* with the merged keys."""
        return get_redactor().redact(mapping, parent_keys, type(self).redacted_debug_keys)

    def debug_fields(self) -> dict[str, Any]:
        """
        Raw field values for the default debug_dict: dataclass fields,
        pydantic model fields, or public instance attributes.
        """
        if dataclasses.is_dataclass(self):
            return {f.name: getattr(self, f.name) for f in dataclasses.fields(self)}
        model_fields = getattr(type(self), "model_fields", None)
        if isinstance(model_fields, Mapping):
            return {name: getattr(self, name) for name in model_fields}
        return {k: v for k, v in vars(self).items() if not k.startswith("_")}

    def debug_dict(self, parent_keys: Any = None) -> dict[str, Any]:
        return self.redact(self.debug_fields(), parent_keys)


class DebugDescribable(DebugRedactable):
    """
    DebugRedactable that also describes itself as pretty JSON, and uses that
    description as its repr. A description that ends up asking for itself
    gets a recursion marker instead of looping.
    """

    @property
    def debug_description(self) -> str:
        return debug_description(self, pretty=True)

    def __repr__(self) -> str:
        return self.debug_description


__all__ = ["DebugRedactable", "DebugDescribable"]
