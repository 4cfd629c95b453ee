"""Descriptor — an immutable, reusable predicate over one value.

A descriptor is built once (usually at import time) by a factory in
:mod:`rtcheck.core.primitives` or :mod:`rtcheck.core.combinators` and then
evaluated any number of times.  Evaluation returns ``None`` or raises
:class:`~rtcheck.core.errors.ContractViolation`.

INVARIANT: descriptors hold no mutable state; children may be shared
freely between combinators and wrapped functions.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from rtcheck.core.errors import ContractViolation

Check = Callable[["Descriptor", Any], None]


def _render_argument(value: Any) -> str:
    if isinstance(value, type):
        return value.__qualname__
    return repr(value)


def _render_option(value: Any) -> str:
    pattern = getattr(value, "pattern", None)
    if isinstance(pattern, str) and hasattr(value, "fullmatch"):
        return repr(pattern)
    return repr(value)


def require_descriptors(owner: str, candidates: Iterable[Any]) -> tuple[Descriptor, ...]:
    """Return *candidates* as a tuple, rejecting anything that is not a descriptor."""
    children = tuple(candidates)
    for child in children:
        if not isinstance(child, Descriptor):
            msg = f"{owner}() expects descriptors, got {type(child).__qualname__}"
            raise TypeError(msg)
    return children


@dataclass(frozen=True, slots=True, eq=False)
class Descriptor:
    """A named predicate with captured configuration.

    Attributes:
        name: Factory name used in messages (``"Number"``, ``"one_of"``).
        check: ``check(descriptor, value)``; raises on rejection.
        options: Frozen option model captured at construction, if any.
        children: Child descriptors for combinators.
        arguments: Positional configuration shown in ``repr`` (the value of
            ``exactly``, the class of ``instance_of``, a ``shape`` spec).
    """

    name: str
    check: Check
    options: BaseModel | None = None
    children: tuple[Descriptor, ...] = ()
    arguments: tuple[Any, ...] = ()

    def __call__(self, value: Any) -> None:
        self.check(self, value)

    def accepts(self, value: Any) -> bool:
        """Return True when *value* passes, False on a violation."""
        try:
            self.check(self, value)
        except ContractViolation:
            return False
        return True

    def __repr__(self) -> str:
        parts = [_render_argument(arg) for arg in self.arguments]
        parts.extend(repr(child) for child in self.children)
        if self.options is not None:
            for key, value in self.options:
                if value is not None:
                    parts.append(f"{key}={_render_option(value)}")
        return f"{self.name}({', '.join(parts)})"


ViolationHook = Callable[[ContractViolation], None]


def _check_resolved(inner: Descriptor, value: Any, on_violation: ViolationHook | None) -> None:
    try:
        inner(value)
    except ContractViolation as exc:
        if on_violation is not None:
            on_violation(exc)
        raise


async def _resolve_then_check(
    awaitable: Any, inner: Descriptor, on_violation: ViolationHook | None
) -> Any:
    value = await awaitable
    _check_resolved(inner, value, on_violation)
    return value


def _chain_future(
    source: Future[Any], inner: Descriptor, on_violation: ViolationHook | None
) -> Future[Any]:
    target: Future[Any] = Future()

    def _relay(done: Future[Any]) -> None:
        if done.cancelled():
            target.cancel()
            return
        error = done.exception()
        if error is not None:
            target.set_exception(error)
            return
        value = done.result()
        try:
            _check_resolved(inner, value, on_violation)
        except Exception as exc:
            target.set_exception(exc)
        else:
            target.set_result(value)

    source.add_done_callback(_relay)
    return target


@dataclass(frozen=True, slots=True, eq=False)
class PromiseDescriptor(Descriptor):
    """Descriptor for promise-like values with a deferred inner check.

    Calling it only checks that the value is promise-like.  :meth:`settle`
    returns a pass-through that validates the resolved value once the
    original settles; the original failure always wins over a validation
    failure.
    """

    @property
    def inner(self) -> Descriptor | None:
        return getattr(self.options, "type", None)

    def settle(self, value: Any, *, on_violation: ViolationHook | None = None) -> Any:
        """Chain the inner check onto *value* (an awaitable or a Future).

        Awaitables become a coroutine resolving to the original value;
        ``concurrent.futures.Future`` objects become a new chained future.
        Without an inner descriptor *value* is returned unchanged.

        Args:
            value: The promise-like result of a wrapped call.
            on_violation: Called with the violation, once the value has
                resolved and been rejected, before the violation is raised
                (or set on the chained future).
        """
        inner = self.inner
        if inner is None:
            return value
        if isinstance(value, Future):
            return _chain_future(value, inner, on_violation)
        return _resolve_then_check(value, inner, on_violation)
