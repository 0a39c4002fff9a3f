"""Tests for tier1_runtime modules."""
from __future__ import annotations

import asyncio
import json
import threading

import pytest

from debug_sdk.tier0_core.errors import RenderError
from debug_sdk.tier0_core.normalize import Nullable
from debug_sdk.tier0_core.values import REDACTED, ListValue, MapValue, Opaque, Scalar
from debug_sdk.tier1_runtime.context import (
    description_scope,
    describing,
    guarded_description,
    is_describing,
    recursion_marker,
    visiting,
)
from debug_sdk.tier1_runtime.serialize import render, serialize, to_plain
from debug_sdk.tier1_runtime.wrappers import (
    Redactable,
    RedactableArray,
    RedactableDictionary,
    RedactableValue,
)


# ── context (recursion guard) ──────────────────────────────────────────────

class TestRecursionGuard:
    def test_nested_description_gets_marker(self):
        value = object()

        def inner() -> str:
            return guarded_description(value, lambda: "never")

        assert guarded_description(value, inner) == "<recursive debug description of object>"

    def test_flag_cleared_after_return(self):
        guarded_description(1, lambda: "ok")
        assert is_describing() is False

    def test_description_scope_marks_nested_descriptions(self):
        with description_scope():
            with description_scope():
                assert is_describing() is True
            assert guarded_description(1, lambda: "never") == "<recursive debug description of int>"
        assert is_describing() is False

    def test_flag_cleared_after_failure(self):
        def boom() -> str:
            raise ValueError("x")

        with pytest.raises(ValueError):
            guarded_description(1, boom)
        assert is_describing() is False

    def test_describing_yields_false_when_nested(self):
        with describing(1) as outer:
            assert outer is True
            assert is_describing() is True
            with describing(2) as inner:
                assert inner is False
        assert is_describing() is False

    def test_visiting_detects_reentry_only(self):
        a, b = object(), object()
        with visiting(a) as first:
            assert first
            with visiting(b) as other:
                assert other
            with visiting(a) as again:
                assert again is False
        with visiting(a) as after:
            assert after

    def test_marker_names_type(self):
        assert recursion_marker([]) == "<recursive debug description of list>"

    def test_thread_does_not_inherit_flag(self):
        seen: list[bool] = []
        with describing(1):
            thread = threading.Thread(target=lambda: seen.append(is_describing()))
            thread.start()
            thread.join()
        assert seen == [False]

    @pytest.mark.asyncio
    async def test_concurrent_tasks_are_isolated(self):
        entered = asyncio.Event()
        release = asyncio.Event()

        async def holder() -> None:
            with describing("a"):
                entered.set()
                await release.wait()

        async def observer() -> bool:
            await entered.wait()
            state = is_describing()
            release.set()
            return state

        _, observed = await asyncio.gather(holder(), observer())
        assert observed is False


# ── serialize (renderer) ───────────────────────────────────────────────────

class TestRender:
    def test_pretty_sorted_two_space(self):
        tree = MapValue({"b": Scalar(1), "a": Scalar("x/y")})
        assert render(tree, pretty=True) == '{\n  "a": "x/y",\n  "b": 1\n}'

    def test_compact_keeps_insertion_order(self):
        tree = MapValue({"b": Scalar(1), "a": REDACTED})
        assert render(tree, pretty=False) == '{"b":1,"a":"[REDACTED]"}'

    def test_slashes_not_escaped(self):
        tree = MapValue({"url": Scalar("https://example.com/a/b")})
        assert render(tree, pretty=False) == '{"url":"https://example.com/a/b"}'

    @pytest.mark.parametrize("pretty", [True, False])
    def test_backslash_slash_round_trips(self, pretty):
        tree = MapValue({"p": Scalar("C:\\/tmp")})
        assert json.loads(render(tree, pretty=pretty)) == {"p": "C:\\/tmp"}

    def test_unicode_kept(self):
        assert render(Scalar("café"), pretty=False) == '"café"'

    def test_nested_lists(self):
        tree = MapValue({"xs": ListValue((Scalar(1), Scalar(True), REDACTED))})
        assert render(tree, pretty=False) == '{"xs":[1,true,"[REDACTED]"]}'

    def test_indent_from_config(self, monkeypatch):
        monkeypatch.setenv("DEBUG_SDK_PRETTY_INDENT", "4")
        assert render(MapValue({"a": Scalar(1)})) == '{\n    "a": 1\n}'

    def test_non_finite_falls_back_to_text(self):
        tree = MapValue({"x": Scalar(float("nan"))})
        assert render(tree, pretty=False) == "{'x': nan}"

    def test_serialize_raises_render_error(self):
        with pytest.raises(RenderError):
            serialize({"x": float("inf")})

    def test_rendering_is_idempotent(self):
        tree = MapValue({"z": Scalar(1), "a": MapValue({"y": REDACTED, "b": Scalar("t")})})
        assert render(tree) == render(tree)
        assert render(tree, pretty=False) == render(tree, pretty=False)

    def test_to_plain(self):
        class Thing:
            def __str__(self):
                return "thing"

        tree = MapValue({"o": Opaque(Thing(), "Thing"), "r": REDACTED})
        assert to_plain(tree) == {"o": "thing", "r": "[REDACTED]"}


# ── wrappers ───────────────────────────────────────────────────────────────

class TestWrappers:
    def test_value_iso_date(self, epoch):
        assert RedactableValue.iso_date(epoch).debug_dict(set()) == {"value": "1970-01-01T00:00:00Z"}

    def test_value_default_style_is_text(self):
        assert RedactableValue(5).debug_dict(set()) == {"value": "5"}
        assert RedactableValue(Nullable()).debug_dict(set()) == {"value": "nil"}

    def test_array_wraps_plain_elements(self):
        inner = RedactableValue.time_only(1)
        values = RedactableArray([1, inner]).debug_dict(set())["values"]
        assert isinstance(values[0], RedactableValue)
        assert values[1] is inner

    def test_dictionary_wraps_plain_values(self):
        result = RedactableDictionary({"a": 1}).debug_dict(set())
        assert isinstance(result["a"], RedactableValue)

    def test_of_picks_wrapper(self):
        value = RedactableValue(1)
        assert Redactable.of(value) is value
        assert isinstance(Redactable.of({"a": 1}), RedactableDictionary)
        assert isinstance(Redactable.of([1]), RedactableArray)
        assert isinstance(Redactable.of("x"), RedactableValue)

    def test_normalised(self, epoch):
        value = {"a": [1, Nullable()], "d": RedactableValue.iso_date(epoch)}
        assert Redactable.normalised(value) == {"a": [1, "nil"], "d": "1970-01-01T00:00:00Z"}

    def test_normalised_description(self):
        assert Redactable.normalised_description(RedactableDictionary({"a": 1})) == '{\n  "a": 1\n}'

    def test_normalised_description_non_finite(self):
        assert Redactable.normalised_description([float("nan")]) == "[nan]"
