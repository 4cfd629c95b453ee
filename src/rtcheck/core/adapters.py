"""Adapters that expose descriptors through other validation conventions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from rtcheck.core.descriptors import Descriptor, require_descriptors
from rtcheck.core.errors import ContractViolation
from rtcheck.core.kinds import MISSING, is_object

PropValidator = Callable[..., ContractViolation | None]


def to_prop_type(descriptor: Descriptor) -> PropValidator:
    """Turn *descriptor* into a ``(props, prop_name) -> error | None`` validator.

    The validator never raises for a rejected value: it returns the
    :class:`ContractViolation` instead, as component prop-validation hooks
    expect.  Mappings are read by key, other containers by attribute; a
    missing field is checked as ``MISSING``.  Extra positional arguments
    (component name, location...) are accepted and ignored.
    """
    (checked,) = require_descriptors("to_prop_type", (descriptor,))

    def validate(props: Any, prop_name: str, *_context: Any) -> ContractViolation | None:
        if is_object(props):
            value = props.get(prop_name, MISSING)
        else:
            value = getattr(props, prop_name, MISSING)
        try:
            checked(value)
        except ContractViolation as exc:
            return exc.nested(prop_name)
        return None

    validate.__qualname__ = f"to_prop_type({checked!r})"
    return validate
