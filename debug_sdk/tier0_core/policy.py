"""
debug_sdk.tier0_core.policy
────────────────────────────
Immutable set of redaction keys. A child level's policy is always the union
of its parent's policy and its own keys, so merging can only hide more.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator


@dataclass(frozen=True)
class RedactionPolicy:
    keys: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, keys: "RedactionPolicy | Iterable[str] | str | None") -> "RedactionPolicy":
        """Coerce None, a single key, an iterable of keys or a policy."""
        if isinstance(keys, RedactionPolicy):
            return keys
        if keys is None:
            return EMPTY_POLICY
        if isinstance(keys, str):
            return cls(frozenset({keys}))
        return cls(frozenset(str(k) for k in keys))

    def merge(self, other: "RedactionPolicy | Iterable[str] | str | None") -> "RedactionPolicy":
        other_policy = RedactionPolicy.of(other)
        if other_policy.keys <= self.keys:
            return self
        if self.keys <= other_policy.keys:
            return other_policy
        return RedactionPolicy(self.keys | other_policy.keys)

    def __or__(self, other: Any) -> "RedactionPolicy":
        return self.merge(other)

    def __contains__(self, key: object) -> bool:
        return key in self.keys

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.keys))

    def __len__(self) -> int:
        return len(self.keys)

    def __bool__(self) -> bool:
        return bool(self.keys)

    def substrings(self) -> tuple[str, ...]:
        """Lowercased non-empty keys, for value-text matching."""
        return tuple(sorted({k.lower() for k in self.keys if k}))


EMPTY_POLICY = RedactionPolicy()


__all__ = ["RedactionPolicy", "EMPTY_POLICY"]
