"""
debug_sdk test configuration.

Env defaults are set before any debug_sdk module is imported, because the
logging layer reads configuration on first use.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

os.environ.setdefault("DEBUG_SDK_LOG_LEVEL", "WARNING")
os.environ.setdefault("DEBUG_SDK_LOG_FORMAT", "console")


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


# ── Fixtures ───────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def reset_config():
    """Each test sees config built from its own environment."""
    from debug_sdk.tier0_core.config import _reset_config

    _reset_config()
    yield
    _reset_config()


@pytest.fixture
def epoch() -> datetime:
    return EPOCH


@pytest.fixture
def user_with_token():
    """A User → Token capability chain; User hides "id", Token hides "value"."""
    from debug_sdk.describable import DebugDescribable, DebugRedactable

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

    return User(id="u-1", name="Alice", token=Token(value="tok-123", expiry=EPOCH))
