"""
debug_sdk.tier1_runtime.serialize
──────────────────────────────────
Renders a DebugValue tree to JSON text.

  pretty  → multi-line, keys sorted, DEBUG_SDK_PRETTY_INDENT spaces
  compact → single line, insertion order, for embedding in log lines

json.dumps never escapes forward slashes, so paths and URLs render as
given and backslashes survive a json.loads round trip. When the tree cannot be
serialized (non-finite floats, for instance) the renderer degrades to a plain
textual dump; render() itself never raises.
"""
from __future__ import annotations

import json
from typing import Any

from debug_sdk.tier0_core.config import get_config
from debug_sdk.tier0_core.errors import RenderError
from debug_sdk.tier0_core.logging import get_logger
from debug_sdk.tier0_core.normalize import safe_text
from debug_sdk.tier0_core.values import (
    REDACTED_TEXT,
    ListValue,
    MapValue,
    Opaque,
    Redacted,
    Scalar,
)

logger = get_logger(__name__)


def to_plain(tree: Any) -> Any:
    """Convert a tree to nested dicts, lists and primitives."""
    if isinstance(tree, Redacted):
        return REDACTED_TEXT
    if isinstance(tree, Scalar):
        return tree.value
    if isinstance(tree, MapValue):
        return {key: to_plain(child) for key, child in tree.entries.items()}
    if isinstance(tree, ListValue):
        return [to_plain(child) for child in tree.items]
    if isinstance(tree, Opaque):
        return safe_text(tree.value)
    if tree is None or isinstance(tree, (str, int, float, bool)):
        return tree
    if isinstance(tree, dict):
        return {str(key): to_plain(child) for key, child in tree.items()}
    if isinstance(tree, (list, tuple)):
        return [to_plain(child) for child in tree]
    return safe_text(tree)


def serialize(plain: Any, pretty: bool = True) -> str:
    """
    Serialize an already-plain structure. Raises RenderError on failure.

    Usage:
        serialize({"b": 1, "a": "x/y"})          # pretty, sorted
        serialize({"b": 1}, pretty=False)        # → '{"b":1}'
    """
    try:
        if pretty:
            text = json.dumps(
                plain,
                indent=get_config().pretty_indent,
                sort_keys=True,
                ensure_ascii=False,
                allow_nan=False,
            )
        else:
            text = json.dumps(
                plain,
                separators=(",", ":"),
                ensure_ascii=False,
                allow_nan=False,
            )
    except (TypeError, ValueError, RecursionError) as exc:
        raise RenderError(
            message="Debug tree is not JSON serializable.",
            detail=f"{type(exc).__name__} while serializing",
        ) from exc
    return text


def render(tree: Any, pretty: bool = True) -> str:
    """Render a tree to text, degrading to a textual dump if JSON fails."""
    try:
        plain = to_plain(tree)
    except RecursionError:
        logger.warning("render.too_deep", type_name=type(tree).__name__)
        return f"<unrenderable {type(tree).__name__}>"
    try:
        return serialize(plain, pretty=pretty)
    except RenderError as exc:
        logger.warning("render.fallback", code=exc.code, detail=exc.detail)
        return _dump(plain)


def _dump(plain: Any) -> str:
    try:
        return str(plain)
    except Exception:
        return f"<unrenderable {type(plain).__name__}>"


__all__ = ["render", "serialize", "to_plain"]
