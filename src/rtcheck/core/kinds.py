"""Value kinds — the closed set of shapes a descriptor can ask about.

Every primitive descriptor classifies values through these helpers instead
of sniffing attributes ad hoc, so "is this an array?" has exactly one
answer across the library.
"""

from __future__ import annotations

import inspect
import numbers
from collections.abc import Mapping, Sequence
from concurrent.futures import Future
from enum import StrEnum
from typing import Any, Final

_TEXT_TYPES: Final = (str, bytes, bytearray)


class ValueKind(StrEnum):
    """Kinds reported by :func:`kind_of`."""

    MISSING = "missing"
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    BYTES = "bytes"
    ARRAY = "array"
    OBJECT = "object"
    PROMISE = "promise"
    ERROR = "error"
    CALLABLE = "callable"
    OTHER = "other"


class _Missing:
    """Sentinel for an absent value (an omitted argument or mapping key)."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()


def is_missing(value: Any) -> bool:
    return value is MISSING


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_number(value: Any) -> bool:
    """Real numbers only; ``True``/``False`` are booleans, not numbers."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_array(value: Any) -> bool:
    """Ordered sequences, excluding text and bytes."""
    return isinstance(value, Sequence) and not isinstance(value, _TEXT_TYPES)


def is_object(value: Any) -> bool:
    """Key-value records (any :class:`~collections.abc.Mapping`)."""
    return isinstance(value, Mapping)


def is_promise(value: Any) -> bool:
    """Awaitables and ``concurrent.futures.Future`` instances."""
    return isinstance(value, Future) or inspect.isawaitable(value)


def is_error(value: Any) -> bool:
    return isinstance(value, BaseException)


def kind_of(value: Any) -> ValueKind:
    """Classify *value* into a :class:`ValueKind`.

    Examples:
        >>> kind_of(None)
        <ValueKind.NULL: 'null'>
        >>> kind_of([1, 2])
        <ValueKind.ARRAY: 'array'>
        >>> kind_of(True)
        <ValueKind.BOOLEAN: 'boolean'>
    """
    if value is MISSING:
        return ValueKind.MISSING
    if value is None:
        return ValueKind.NULL
    if is_boolean(value):
        return ValueKind.BOOLEAN
    if is_number(value):
        return ValueKind.NUMBER
    if is_string(value):
        return ValueKind.STRING
    if isinstance(value, (bytes, bytearray)):
        return ValueKind.BYTES
    if is_array(value):
        return ValueKind.ARRAY
    if is_object(value):
        return ValueKind.OBJECT
    if is_promise(value):
        return ValueKind.PROMISE
    if is_error(value):
        return ValueKind.ERROR
    if callable(value):
        return ValueKind.CALLABLE
    return ValueKind.OTHER
