"""Strict and structural equality used by ``exactly`` and ``deep_equal``."""

from __future__ import annotations

import numbers
from typing import Any

from rtcheck.core.errors import UnsupportedCyclicInput
from rtcheck.core.kinds import is_array, is_object


def _scalar_kind(value: Any) -> str | None:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, numbers.Number):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, bytes):
        return "bytes"
    return None


def strict_equal(left: Any, right: Any) -> bool:
    """Identity for composite values, kind-and-value equality for scalars.

    Examples:
        >>> strict_equal(1, 1.0)
        True
        >>> strict_equal(1, True)
        False
        >>> strict_equal([1], [1])
        False
    """
    left_kind = _scalar_kind(left)
    right_kind = _scalar_kind(right)
    if left_kind is not None or right_kind is not None:
        return left_kind == right_kind and bool(left == right)
    return left is right


def deep_equal(left: Any, right: Any) -> bool:
    """Recursive structural equality over mappings and sequences.

    Raises:
        UnsupportedCyclicInput: If the comparison revisits a container that
            is already on its own path (a reference cycle).
    """
    return _deep_equal(left, right, frozenset(), frozenset())


def _enter(value: Any, path: frozenset[int]) -> frozenset[int]:
    if id(value) in path:
        msg = f"cyclic reference in {type(value).__qualname__} during structural comparison"
        raise UnsupportedCyclicInput(msg)
    return path | {id(value)}


def _deep_equal(
    left: Any,
    right: Any,
    left_path: frozenset[int],
    right_path: frozenset[int],
) -> bool:
    if is_object(left) and is_object(right):
        left_path = _enter(left, left_path)
        right_path = _enter(right, right_path)
        if len(left) != len(right) or set(left) != set(right):
            return False
        return all(_deep_equal(left[key], right[key], left_path, right_path) for key in left)

    if is_array(left) and is_array(right):
        left_path = _enter(left, left_path)
        right_path = _enter(right, right_path)
        if len(left) != len(right):
            return False
        return all(
            _deep_equal(a, b, left_path, right_path) for a, b in zip(left, right, strict=True)
        )

    if is_object(left) or is_object(right) or is_array(left) or is_array(right):
        return False
    if _scalar_kind(left) is not None or _scalar_kind(right) is not None:
        return strict_equal(left, right)
    return left is right or bool(left == right)
