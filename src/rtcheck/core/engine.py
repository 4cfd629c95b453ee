"""The single assertion primitive every descriptor is built on."""

from __future__ import annotations

import reprlib
from typing import TYPE_CHECKING, Any

from rtcheck.core.errors import ContractViolation

if TYPE_CHECKING:
    from rtcheck.core.descriptors import Descriptor

_repr = reprlib.Repr()
_repr.maxstring = 60
_repr.maxother = 60
_repr.maxlist = 6
_repr.maxtuple = 6
_repr.maxdict = 6
_repr.maxlevel = 3


def set_repr_limit(limit: int) -> None:
    """Adjust how much of an offending string/object is shown in messages."""
    _repr.maxstring = limit
    _repr.maxother = limit


def describe_value(value: Any) -> str:
    """Short, bounded representation of *value* for error messages."""
    return _repr.repr(value)


def ensure(condition: bool, descriptor: Descriptor, value: Any, reason: str) -> None:
    """Raise :class:`ContractViolation` unless *condition* holds.

    Args:
        condition: Result of the descriptor's test against *value*.
        descriptor: The descriptor doing the check (named in the message).
        value: The value under test.
        reason: What was expected, e.g. ``"expected a number above 0"``.
    """
    if not condition:
        raise ContractViolation(descriptor, value, reason, rendered_value=describe_value(value))
