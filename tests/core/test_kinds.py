"""Tests for value kinds and the MISSING sentinel."""

import asyncio
import pickle
from collections import OrderedDict
from concurrent.futures import Future

import pytest

from rtcheck.core.kinds import (
    MISSING,
    ValueKind,
    is_array,
    is_number,
    is_object,
    is_promise,
    kind_of,
)


class TestMissing:
    def test_singleton(self) -> None:
        assert type(MISSING)() is MISSING

    def test_falsy_and_repr(self) -> None:
        assert not MISSING
        assert repr(MISSING) == "MISSING"

    def test_survives_pickle(self) -> None:
        assert pickle.loads(pickle.dumps(MISSING)) is MISSING


class TestKindOf:
    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (MISSING, ValueKind.MISSING),
            (None, ValueKind.NULL),
            (True, ValueKind.BOOLEAN),
            (0, ValueKind.NUMBER),
            (2.5, ValueKind.NUMBER),
            ("x", ValueKind.STRING),
            (b"x", ValueKind.BYTES),
            ([1], ValueKind.ARRAY),
            ((1,), ValueKind.ARRAY),
            ({"a": 1}, ValueKind.OBJECT),
            (ValueError("boom"), ValueKind.ERROR),
            (len, ValueKind.CALLABLE),
            (object(), ValueKind.OTHER),
        ],
    )
    def test_classification(self, value: object, kind: ValueKind) -> None:
        assert kind_of(value) is kind

    def test_future_is_promise(self) -> None:
        assert kind_of(Future()) is ValueKind.PROMISE


class TestPredicates:
    def test_bool_is_not_a_number(self) -> None:
        assert not is_number(True)
        assert is_number(1)

    def test_text_is_not_an_array(self) -> None:
        assert not is_array("abc")
        assert not is_array(b"abc")
        assert is_array(range(3))

    def test_any_mapping_is_an_object(self) -> None:
        assert is_object(OrderedDict(a=1))
        assert not is_object([("a", 1)])

    def test_coroutine_is_promise(self) -> None:
        async def answer() -> int:
            return 42

        coro = answer()
        try:
            assert is_promise(coro)
        finally:
            coro.close()

    def test_asyncio_future_is_promise(self) -> None:
        loop = asyncio.new_event_loop()
        try:
            assert is_promise(loop.create_future())
        finally:
            loop.close()

    def test_plain_values_are_not_promises(self) -> None:
        assert not is_promise(42)
        assert not is_promise(lambda: None)
