"""Combinators — descriptors composed from other descriptors.

``one_of`` is OR, ``each_of`` is AND, ``not_`` is negation; ``nullable`` and
``option`` widen a descriptor to ``None`` and ``MISSING`` respectively;
``shape`` checks declared fields of a mapping or positions of a sequence.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any

from rtcheck.core.descriptors import Check, Descriptor, require_descriptors
from rtcheck.core.engine import ensure
from rtcheck.core.errors import ContractViolation
from rtcheck.core.kinds import MISSING, is_array, is_object, kind_of


def one_of(*descriptors: Descriptor) -> Descriptor:
    """Pass if any child passes, trying children in order.

    When every child fails the violation lists each child's failure.
    """

    def _check(descriptor: Descriptor, value: Any) -> None:
        failures: list[str] = []
        for child in descriptor.children:
            try:
                child(value)
            except ContractViolation as exc:
                failures.append(str(exc))
            else:
                return
        reason = "no alternative matched" if not failures else "; ".join(failures)
        ensure(False, descriptor, value, reason)

    return Descriptor("one_of", _check, children=require_descriptors("one_of", descriptors))


def each_of(*descriptors: Descriptor) -> Descriptor:
    """Pass only if every child passes; the first failure propagates as-is."""

    def _check(descriptor: Descriptor, value: Any) -> None:
        for child in descriptor.children:
            child(value)

    return Descriptor("each_of", _check, children=require_descriptors("each_of", descriptors))


def not_(descriptor: Descriptor) -> Descriptor:
    """Pass iff *descriptor* fails.

    Any exception from the child counts as a failure, not only violations.
    """

    def _check(this: Descriptor, value: Any) -> None:
        (child,) = this.children
        try:
            child(value)
        except Exception:
            return
        ensure(False, this, value, f"expected a value rejected by {child!r}")

    return Descriptor("not_", _check, children=require_descriptors("not_", (descriptor,)))


def nullable(descriptor: Descriptor) -> Descriptor:
    """Accept ``None`` or whatever *descriptor* accepts (``MISSING`` is not ``None``)."""

    def _check(this: Descriptor, value: Any) -> None:
        if value is None:
            return
        this.children[0](value)

    return Descriptor("nullable", _check, children=require_descriptors("nullable", (descriptor,)))


def option(descriptor: Descriptor) -> Descriptor:
    """Accept ``MISSING`` or whatever *descriptor* accepts (``None`` is not absent)."""

    def _check(this: Descriptor, value: Any) -> None:
        if value is MISSING:
            return
        this.children[0](value)

    return Descriptor("option", _check, children=require_descriptors("option", (descriptor,)))


def _field_check(fields: Mapping[Any, Descriptor]) -> Check:
    def _check(descriptor: Descriptor, value: Any) -> None:
        ensure(is_object(value), descriptor, value, f"expected a mapping, got {kind_of(value)}")
        for key, field in fields.items():
            try:
                field(value.get(key, MISSING))
            except ContractViolation as exc:
                raise exc.nested(key) from exc

    return _check


def _position_check(positions: tuple[Descriptor, ...]) -> Check:
    def _check(descriptor: Descriptor, value: Any) -> None:
        ensure(is_array(value), descriptor, value, f"expected an array, got {kind_of(value)}")
        size = len(value)
        for index, position in enumerate(positions):
            try:
                position(value[index] if index < size else MISSING)
            except ContractViolation as exc:
                raise exc.nested(index) from exc

    return _check


def shape(spec: Mapping[Any, Descriptor] | Sequence[Descriptor]) -> Descriptor:
    """Check declared fields (mapping spec) or positions (sequence spec).

    Undeclared keys and trailing elements of the value are ignored.  A key
    absent from the value is checked as ``MISSING``, so pair it with
    :func:`option` to make it optional.

    Examples:
        >>> point = shape({"x": Number(), "y": Number()})
        >>> point.accepts({"x": 1, "y": 2, "label": "origin"})
        True
        >>> shape([Number(), String()]).accepts([1, "a", None])
        True
    """
    if is_object(spec):
        fields = MappingProxyType(dict(spec))
        require_descriptors("shape", fields.values())
        return Descriptor("shape", _field_check(fields), arguments=(dict(fields),))
    if is_array(spec):
        positions = require_descriptors("shape", spec)
        return Descriptor("shape", _position_check(positions), arguments=(list(positions),))
    msg = f"shape() expects a mapping or sequence of descriptors, got {type(spec).__qualname__}"
    raise TypeError(msg)
