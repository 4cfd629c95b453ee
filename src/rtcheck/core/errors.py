"""Failure types raised by descriptors.

INVARIANT: ContractViolation is the only error a descriptor raises for a
value it rejects.  It subclasses the builtin AssertionError so hosts that
already treat assertion failures as programmer errors keep doing so.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rtcheck.core.descriptors import Descriptor


def format_path(path: tuple[Any, ...]) -> str:
    """Render a container path as subscripts.

    Examples:
        >>> format_path(("user", 0, "age"))
        "['user'][0]['age']"
        >>> format_path(())
        ''
    """
    return "".join(f"[{step!r}]" for step in path)


class ContractViolation(AssertionError):
    """A value did not satisfy a descriptor.

    Attributes:
        descriptor: The descriptor that rejected the value.
        value: The offending value.
        reason: Human-readable explanation, without the descriptor prefix.
        path: Keys/indices leading from the checked value to the offending
            one, filled in by container descriptors as the failure bubbles up.
    """

    def __init__(
        self,
        descriptor: Descriptor | None,
        value: Any,
        reason: str,
        *,
        path: tuple[Any, ...] = (),
        rendered_value: str | None = None,
    ) -> None:
        self.descriptor = descriptor
        self.value = value
        self.reason = reason
        self.path = path
        self.rendered_value = rendered_value if rendered_value is not None else repr(value)
        super().__init__(self._render())

    def _render(self) -> str:
        label = repr(self.descriptor) if self.descriptor is not None else "contract"
        where = f" at {format_path(self.path)}" if self.path else ""
        return f"{label} rejected {self.rendered_value}{where}: {self.reason}"

    @property
    def message(self) -> str:
        return str(self)

    def nested(self, step: Any) -> ContractViolation:
        """Return a copy of this violation one container level further out."""
        return ContractViolation(
            self.descriptor,
            self.value,
            self.reason,
            path=(step, *self.path),
            rendered_value=self.rendered_value,
        )


class UnsupportedCyclicInput(ValueError):
    """A structural comparison met a reference cycle.

    Raised instead of recursing forever.  It is not a ContractViolation:
    combinators such as ``one_of`` do not swallow it.
    """
