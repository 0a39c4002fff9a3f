"""
debug_sdk.tier1_runtime.context
────────────────────────────────
Call-chain scoped recursion guard.

Two facets, both stored in ContextVars so every thread and every asyncio task
sees its own state and concurrent formatting calls never interfere:

  - describing: set while a value renders its own textual description. A
    description that indirectly asks for another one gets a marker instead.
  - visiting:   identities of capabilities and containers on the current
    structural path. Re-entering one yields a marker instead of recursing.

Both are restored on every exit path.
"""
from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Callable, Iterator

from debug_sdk.tier0_core.logging import get_logger

logger = get_logger(__name__)


# ── ContextVar storage ────────────────────────────────────────────────────────

_describing: ContextVar[bool] = ContextVar("debug_sdk_describing", default=False)

_visiting: ContextVar[frozenset[int]] = ContextVar(
    "debug_sdk_visiting",
    default=frozenset(),
)


# ── Public API ────────────────────────────────────────────────────────────────

def recursion_marker(value: Any) -> str:
    return f"<recursive debug description of {type(value).__name__}>"


def is_describing() -> bool:
    return _describing.get()


@contextmanager
def describing(value: Any) -> Iterator[bool]:
    """
    Enter a textual self-description. Yields False (and changes nothing) when
    the current call chain is already inside one.
    """
    if _describing.get():
        logger.debug("guard.recursion", type_name=type(value).__name__)
        yield False
        return
    token = _describing.set(True)
    try:
        yield True
    finally:
        _describing.reset(token)


@contextmanager
def description_scope() -> Iterator[None]:
    """
    Mark the call chain as rendering a description without checking whether
    it already is. Nested builder calls stay allowed; self-descriptions
    reached inside get the recursion marker.
    """
    token = _describing.set(True)
    try:
        yield
    finally:
        _describing.reset(token)


def guarded_description(value: Any, describe: Callable[[], str]) -> str:
    """Run *describe* under the guard, or return the recursion marker."""
    with describing(value) as entered:
        if not entered:
            return recursion_marker(value)
        return describe()


@contextmanager
def visiting(obj: Any) -> Iterator[bool]:
    """
    Mark *obj* as on the current structural path. Yields False when it is
    already there (a cycle).
    """
    active = _visiting.get()
    key = id(obj)
    if key in active:
        logger.debug("guard.cycle", type_name=type(obj).__name__)
        yield False
        return
    token = _visiting.set(active | {key})
    try:
        yield True
    finally:
        _visiting.reset(token)


__all__ = [
    "description_scope",
    "describing",
    "guarded_description",
    "is_describing",
    "recursion_marker",
    "visiting",
]
