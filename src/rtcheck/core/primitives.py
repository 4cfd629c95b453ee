"""Primitive descriptor factories.

Each factory captures its options once, in a frozen pydantic model, and
returns a :class:`~rtcheck.core.descriptors.Descriptor`.  Unknown option
keys are ignored so hosts can share one option dict across kinds.

Factory names follow the value kinds they accept (``Number``, ``String``,
``Array``...) rather than PEP 8 function naming, so contracts read like
type expressions: ``Array(type=Number(above=0), length=3)``.
"""

# ruff: noqa: N802

from __future__ import annotations

import re
import types
import typing

from pydantic import BaseModel, ConfigDict, InstanceOf

from rtcheck.core.descriptors import Descriptor, PromiseDescriptor
from rtcheck.core.engine import ensure
from rtcheck.core.errors import ContractViolation
from rtcheck.core.equality import deep_equal as _structurally_equal
from rtcheck.core.equality import strict_equal
from rtcheck.core.kinds import (
    is_array,
    is_boolean,
    is_error,
    is_number,
    is_object,
    is_promise,
    is_string,
    kind_of,
)

# --- Option models ---


class _Options(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", arbitrary_types_allowed=True)


class NumberOptions(_Options):
    """``above``/``below`` are exclusive bounds, ``within`` is inclusive."""

    above: int | float | None = None
    below: int | float | None = None
    within: tuple[int | float, int | float] | None = None


class StringOptions(_Options):
    length: int | None = None
    match: re.Pattern[str] | None = None


class ArrayOptions(_Options):
    type: InstanceOf[Descriptor] | None = None
    length: int | None = None


class ObjectOptions(_Options):
    type: InstanceOf[Descriptor] | None = None
    length: int | None = None


class PromiseOptions(_Options):
    type: InstanceOf[Descriptor] | None = None


class ErrorOptions(_Options):
    message: str | None = None


def _expected(what: str, value: typing.Any) -> str:
    return f"expected {what}, got {kind_of(value)}"


# --- Checks ---


def _accept_anything(descriptor: Descriptor, value: typing.Any) -> None:
    return None


def _check_bool(descriptor: Descriptor, value: typing.Any) -> None:
    ensure(is_boolean(value), descriptor, value, _expected("a boolean", value))


def _check_number(descriptor: Descriptor, value: typing.Any) -> None:
    ensure(is_number(value), descriptor, value, _expected("a number", value))
    opts = typing.cast(NumberOptions, descriptor.options)
    if opts.above is not None:
        ensure(value > opts.above, descriptor, value, f"expected a number above {opts.above}")
    if opts.below is not None:
        ensure(value < opts.below, descriptor, value, f"expected a number below {opts.below}")
    if opts.within is not None:
        low, high = opts.within
        ensure(
            low <= value <= high,
            descriptor,
            value,
            f"expected a number within [{low}, {high}]",
        )


def _check_string(descriptor: Descriptor, value: typing.Any) -> None:
    ensure(is_string(value), descriptor, value, _expected("a string", value))
    opts = typing.cast(StringOptions, descriptor.options)
    if opts.length is not None:
        ensure(
            len(value) == opts.length,
            descriptor,
            value,
            f"expected length {opts.length}, got {len(value)}",
        )
    if opts.match is not None:
        ensure(
            opts.match.fullmatch(value) is not None,
            descriptor,
            value,
            f"expected a string matching {opts.match.pattern!r}",
        )


def _check_elements(
    descriptor: Descriptor, items: typing.Iterable[tuple[typing.Any, typing.Any]]
) -> None:
    """Run the ``type`` option against each (key, item); re-raise with the key on the path."""
    element_type = getattr(descriptor.options, "type", None)
    if element_type is None:
        return
    for key, item in items:
        try:
            element_type(item)
        except ContractViolation as exc:
            raise exc.nested(key) from exc


def _check_array(descriptor: Descriptor, value: typing.Any) -> None:
    ensure(is_array(value), descriptor, value, _expected("an array", value))
    opts = typing.cast(ArrayOptions, descriptor.options)
    if opts.length is not None:
        ensure(
            len(value) == opts.length,
            descriptor,
            value,
            f"expected {opts.length} elements, got {len(value)}",
        )
    _check_elements(descriptor, enumerate(value))


def _check_object(descriptor: Descriptor, value: typing.Any) -> None:
    ensure(is_object(value), descriptor, value, _expected("a mapping", value))
    opts = typing.cast(ObjectOptions, descriptor.options)
    if opts.length is not None:
        ensure(
            len(value) == opts.length,
            descriptor,
            value,
            f"expected {opts.length} keys, got {len(value)}",
        )
    _check_elements(descriptor, value.items())


def _check_promise(descriptor: Descriptor, value: typing.Any) -> None:
    ensure(is_promise(value), descriptor, value, _expected("an awaitable or future", value))


def _check_error(descriptor: Descriptor, value: typing.Any) -> None:
    ensure(is_error(value), descriptor, value, _expected("an exception", value))
    opts = typing.cast(ErrorOptions, descriptor.options)
    if opts.message is not None:
        ensure(
            str(value) == opts.message,
            descriptor,
            value,
            f"expected message {opts.message!r}, got {str(value)!r}",
        )


# --- Factories ---


def Any() -> Descriptor:
    """Accept every value, including ``None`` and ``MISSING``."""
    return Descriptor("Any", _accept_anything)


def Bool() -> Descriptor:
    return Descriptor("Bool", _check_bool)


def Number(**options: typing.Any) -> Descriptor:
    """Real numbers (``bool`` excluded).

    Options:
        above: Exclusive lower bound.
        below: Exclusive upper bound.
        within: Inclusive ``(min, max)`` range.
    """
    return Descriptor("Number", _check_number, NumberOptions.model_validate(options))


def String(**options: typing.Any) -> Descriptor:
    """Text values.

    Options:
        length: Exact length.
        match: Pattern (string or compiled) the whole value must match.
    """
    return Descriptor("String", _check_string, StringOptions.model_validate(options))


def Array(**options: typing.Any) -> Descriptor:
    """Ordered sequences other than text and bytes.

    Options:
        type: Descriptor every element must satisfy.
        length: Exact element count.
    """
    return Descriptor("Array", _check_array, ArrayOptions.model_validate(options))


def Object(**options: typing.Any) -> Descriptor:
    """Mappings.

    Options:
        type: Descriptor every value must satisfy.
        length: Exact key count.
    """
    return Descriptor("Object", _check_object, ObjectOptions.model_validate(options))


def Promise(**options: typing.Any) -> PromiseDescriptor:
    """Awaitables and ``concurrent.futures.Future`` objects.

    Options:
        type: Descriptor applied to the resolved value.  Only a wrapped
            function's return check can defer it; see
            :meth:`PromiseDescriptor.settle`.
    """
    return PromiseDescriptor("Promise", _check_promise, PromiseOptions.model_validate(options))


def Error(**options: typing.Any) -> Descriptor:
    """Exception instances.

    Options:
        message: Exact expected ``str(error)``.
    """
    return Descriptor("Error", _check_error, ErrorOptions.model_validate(options))


def _class_label(cls: typing.Any) -> str:
    if isinstance(cls, tuple):
        return " | ".join(_class_label(member) for member in cls)
    return getattr(cls, "__qualname__", None) or repr(cls)


def instance_of(cls: type | tuple[type, ...] | types.UnionType) -> Descriptor:
    """Instances of *cls*: a class, a tuple of classes, or a ``X | Y`` union.

    Anything ``isinstance`` cannot take raises TypeError here, not at check time.
    """
    try:
        isinstance(None, cls)
    except TypeError as exc:
        msg = f"instance_of() expects a class, a tuple of classes or a union, got {cls!r}"
        raise TypeError(msg) from exc
    expected = _class_label(cls)

    def _check(descriptor: Descriptor, value: typing.Any) -> None:
        ensure(
            isinstance(value, cls),
            descriptor,
            value,
            f"expected an instance of {expected}, got {type(value).__qualname__}",
        )

    return Descriptor("instance_of", _check, arguments=(cls,))


def exactly(expected: typing.Any) -> Descriptor:
    """Strict equality: identity for composite values, value for scalars."""

    def _check(descriptor: Descriptor, value: typing.Any) -> None:
        ensure(strict_equal(value, expected), descriptor, value, "expected the identical value")

    return Descriptor("exactly", _check, arguments=(expected,))


def deep_equal(expected: typing.Any) -> Descriptor:
    """Structural equality, recursing through mappings and sequences."""

    def _check(descriptor: Descriptor, value: typing.Any) -> None:
        ensure(
            _structurally_equal(expected, value),
            descriptor,
            value,
            "expected a structurally equal value",
        )

    return Descriptor("deep_equal", _check, arguments=(expected,))
