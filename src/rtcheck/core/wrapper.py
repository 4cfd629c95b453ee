"""Function wrapper — @takes, @returns, and the explicit wrap().

Near-zero overhead when checks are disabled: one attribute read on the
toggle, then a straight call to the original function.

Argument ``i`` is checked against ``arg_descriptors[i]``.  Positions past
the end of the descriptor list are never checked; a ``None`` entry leaves
its position unchecked.  Return checks run after the original function, so
its side effects have already happened when a return violation surfaces.
"""

from __future__ import annotations

import functools
import inspect
import logging
import types
from collections.abc import Callable, Sequence
from typing import Any

from rtcheck.core import toggle as _toggle
from rtcheck.core.descriptors import Descriptor, PromiseDescriptor, require_descriptors
from rtcheck.core.errors import ContractViolation, format_path
from rtcheck.core.kinds import MISSING, is_promise
from rtcheck.core.toggle import SupportsEnabled

logger = logging.getLogger(__name__)

_KEYWORD_KINDS = (inspect.Parameter.POSITIONAL_OR_KEYWORD,)
_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def _keyword_names(fn: Callable[..., Any]) -> tuple[str | None, ...]:
    """Names usable as keywords for each positional slot of *fn*.

    Positional-only slots map to None.  Callables without an introspectable
    signature (some builtins) yield an empty tuple: only positional
    arguments are checked for them.
    """
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return ()
    return tuple(
        param.name if param.kind in _KEYWORD_KINDS else None
        for param in signature.parameters.values()
        if param.kind in _POSITIONAL_KINDS
    )


class WrappedFunction:
    """A callable that validates arguments and/or the return value.

    Instances are descriptors: looked up through an instance they bind the
    receiver the way a plain function would, and validate only the
    remaining arguments.

    Parameters:
        fn: The original callable.
        arg_descriptors: One descriptor (or None) per positional argument;
            None skips argument checks entirely.
        return_descriptor: Descriptor for the result; None skips the check.
        toggle: Switch consulted on every call; defaults to the global
            :data:`~rtcheck.core.toggle.CHECKS`.
        receiver_first: The first positional argument is a receiver that
            must not be checked (used for wrapped ``classmethod`` bodies).
    """

    def __init__(
        self,
        fn: Callable[..., Any],
        arg_descriptors: Sequence[Descriptor | None] | None = None,
        return_descriptor: Descriptor | None = None,
        *,
        toggle: SupportsEnabled | None = None,
        receiver_first: bool = False,
    ) -> None:
        functools.update_wrapper(self, fn)
        if arg_descriptors is not None:
            arg_descriptors = tuple(arg_descriptors)
            require_descriptors("wrap", (d for d in arg_descriptors if d is not None))
        if return_descriptor is not None:
            require_descriptors("wrap", (return_descriptor,))
        self._fn = fn
        self._arg_descriptors: tuple[Descriptor | None, ...] | None = arg_descriptors
        self._return_descriptor = return_descriptor
        self._toggle = toggle
        self._receiver_first = receiver_first
        self._keywords = _keyword_names(fn)

    @property
    def arg_descriptors(self) -> tuple[Descriptor | None, ...] | None:
        return self._arg_descriptors

    @property
    def return_descriptor(self) -> Descriptor | None:
        return self._return_descriptor

    # ------------------------------------------------------------------
    # Call protocol
    # ------------------------------------------------------------------

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        if args and (self._receiver_first or self._bound_as_classmethod(args[0])):
            return self._call_bound(*args, **kwargs)
        return self._invoke(self._fn, args, args, kwargs, offset=0)

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return types.MethodType(self._call_bound, instance)

    def _call_bound(self, receiver: Any, *args: Any, **kwargs: Any) -> Any:
        binder = getattr(type(self._fn), "__get__", None)
        target = binder(self._fn, receiver, type(receiver)) if binder else self._fn
        return self._invoke(target, args, args, kwargs, offset=1)

    def _bound_as_classmethod(self, receiver: Any) -> bool:
        """True when *receiver* is a class holding this wrapper as a classmethod body.

        From Python 3.13 ``classmethod.__get__`` no longer defers to the
        wrapped object's ``__get__``; it calls the wrapper with the class as
        the first positional argument, so the receiver is recognised here.
        """
        if not isinstance(receiver, type):
            return False
        name = getattr(self, "__name__", None)
        if name is not None:
            try:
                attr = inspect.getattr_static(receiver, name)
            except AttributeError:
                attr = None
            if isinstance(attr, classmethod) and attr.__func__ is self:
                return True
        return any(
            isinstance(attr, classmethod) and attr.__func__ is self
            for klass in receiver.__mro__
            for attr in vars(klass).values()
        )

    @property
    def label(self) -> str:
        return getattr(self, "__qualname__", None) or repr(self._fn)

    def __repr__(self) -> str:
        return f"<WrappedFunction {self.label}>"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _current_toggle(self) -> SupportsEnabled:
        return self._toggle if self._toggle is not None else _toggle.CHECKS

    def _invoke(
        self,
        target: Callable[..., Any],
        call_args: tuple[Any, ...],
        checked_args: tuple[Any, ...],
        kwargs: dict[str, Any],
        *,
        offset: int,
    ) -> Any:
        toggle = self._current_toggle()
        if not toggle.enabled:
            return target(*call_args, **kwargs)

        if self._arg_descriptors is not None:
            for position, descriptor in enumerate(self._arg_descriptors):
                if descriptor is None:
                    continue
                value = self._argument(position, checked_args, kwargs, offset)
                self._guard(toggle, "argument", position, descriptor, value)

        result = target(*call_args, **kwargs)

        returns = self._return_descriptor
        if returns is None:
            return result
        self._guard(toggle, "return", None, returns, result)
        if isinstance(returns, PromiseDescriptor) and is_promise(result):
            return returns.settle(
                result,
                on_violation=functools.partial(self._report, toggle, "return", None),
            )
        return result

    def _argument(
        self,
        position: int,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        offset: int,
    ) -> Any:
        if position < len(args):
            return args[position]
        slot = position + offset
        name = self._keywords[slot] if slot < len(self._keywords) else None
        if name is None:
            return MISSING
        return kwargs.get(name, MISSING)

    def _guard(
        self,
        toggle: SupportsEnabled,
        phase: str,
        position: int | None,
        descriptor: Descriptor,
        value: Any,
    ) -> None:
        try:
            descriptor(value)
        except ContractViolation as exc:
            self._report(toggle, phase, position, exc)
            raise

    def _report(
        self,
        toggle: SupportsEnabled,
        phase: str,
        position: int | None,
        exc: ContractViolation,
    ) -> None:
        """Log *exc* on the violation channel when the toggle asks for it."""
        if not getattr(toggle, "log_violations", False):
            return
        logger.debug(
            "contract.violation: %s %s%s: %s",
            self.label,
            phase,
            "" if position is None else f"[{position}]",
            exc,
            extra={
                "function": self.label,
                "phase": phase,
                "position": position,
                "path": format_path(exc.path),
                "reason": exc.reason,
            },
        )


def wrap(
    arg_descriptors: Sequence[Descriptor | None] | None,
    return_descriptor: Descriptor | None,
    fn: Callable[..., Any],
    *,
    toggle: SupportsEnabled | None = None,
) -> Any:
    """Wrap *fn* so calls validate arguments and/or the return value.

    ``classmethod`` and ``staticmethod`` objects are unwrapped, checked
    without their receiver, and re-wrapped in the same kind.

    Usage::

        add = wrap([Number(), Number()], Number(), lambda a, b: a + b)
        add(1, 2)      # 3
        add("1", "2")  # ContractViolation before the lambda runs
    """
    if isinstance(fn, (classmethod, staticmethod)):
        inner = WrappedFunction(
            fn.__func__,
            arg_descriptors,
            return_descriptor,
            toggle=toggle,
            receiver_first=isinstance(fn, classmethod),
        )
        return type(fn)(inner)
    return WrappedFunction(fn, arg_descriptors, return_descriptor, toggle=toggle)


def takes(
    *descriptors: Descriptor | None,
    toggle: SupportsEnabled | None = None,
) -> Callable[[Callable[..., Any]], Any]:
    """Decorator: check positional arguments against *descriptors*."""

    def decorator(fn: Callable[..., Any]) -> Any:
        return wrap(descriptors, None, fn, toggle=toggle)

    return decorator


def returns(
    descriptor: Descriptor,
    *,
    toggle: SupportsEnabled | None = None,
) -> Callable[[Callable[..., Any]], Any]:
    """Decorator: check the return value against *descriptor*."""

    def decorator(fn: Callable[..., Any]) -> Any:
        return wrap(None, descriptor, fn, toggle=toggle)

    return decorator
