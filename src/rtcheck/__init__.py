"""rtcheck — composable runtime contracts for Python callables.

Descriptors are small immutable predicates built once at definition time
and applied to arguments and return values by :func:`wrap`, :func:`takes`
and :func:`returns`.  Every check can be switched off process-wide through
:data:`CHECKS` (seeded from ``RTCHECK_ENABLED``).
"""

from __future__ import annotations

__version__ = "0.1.0"

from rtcheck.core.adapters import to_prop_type
from rtcheck.core.combinators import each_of, not_, nullable, one_of, option, shape
from rtcheck.core.descriptors import Descriptor, PromiseDescriptor
from rtcheck.core.errors import ContractViolation, UnsupportedCyclicInput
from rtcheck.core.kinds import MISSING, ValueKind, kind_of
from rtcheck.core.primitives import (
    Any,
    Array,
    Bool,
    Error,
    Number,
    Object,
    Promise,
    String,
    deep_equal,
    exactly,
    instance_of,
)
from rtcheck.core.toggle import (
    CHECKS,
    Toggle,
    checks_enabled,
    checks_suspended,
    disable_checks,
    enable_checks,
)
from rtcheck.core.wrapper import WrappedFunction, returns, takes, wrap

__all__ = [
    "CHECKS",
    "MISSING",
    "Any",
    "Array",
    "Bool",
    "ContractViolation",
    "Descriptor",
    "Error",
    "Number",
    "Object",
    "Promise",
    "PromiseDescriptor",
    "String",
    "Toggle",
    "UnsupportedCyclicInput",
    "ValueKind",
    "WrappedFunction",
    "__version__",
    "checks_enabled",
    "checks_suspended",
    "deep_equal",
    "disable_checks",
    "each_of",
    "enable_checks",
    "exactly",
    "instance_of",
    "kind_of",
    "not_",
    "nullable",
    "one_of",
    "option",
    "returns",
    "shape",
    "takes",
    "to_prop_type",
    "wrap",
]
