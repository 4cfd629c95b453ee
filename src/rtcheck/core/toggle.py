"""Global toggle — the process-wide switch every wrapped call reads.

INVARIANT: wrapped functions read :data:`CHECKS` on every call and never
cache it, so flipping the toggle changes the behaviour of wrappers that
already exist.

The toggle is a plain attribute rather than a ContextVar: a change made in
one thread or task must be visible to all of them.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import AbstractContextManager, contextmanager
from typing import TYPE_CHECKING, Protocol

from rtcheck.core.engine import set_repr_limit

if TYPE_CHECKING:
    from rtcheck.config.settings import RtcheckSettings

logger = logging.getLogger(__name__)


class SupportsEnabled(Protocol):
    """Anything a wrapper can consult: an ``enabled`` attribute is enough."""

    @property
    def enabled(self) -> bool: ...


class Toggle:
    """Mutable on/off switch with a violation-logging preference.

    Attributes:
        log_violations: Emit a DEBUG log record before raising a violation
            from a wrapped call.
    """

    def __init__(self, enabled: bool = True, *, log_violations: bool = True) -> None:
        self._enabled = bool(enabled)
        self.log_violations = log_violations

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set(self, enabled: bool) -> None:
        enabled = bool(enabled)
        if enabled != self._enabled:
            logger.debug("Runtime checks %s", "enabled" if enabled else "disabled")
        self._enabled = enabled

    def enable(self) -> None:
        self.set(True)

    def disable(self) -> None:
        self.set(False)

    @contextmanager
    def suspended(self) -> Generator[None]:
        """Disable checks for the duration of a ``with`` block."""
        previous = self._enabled
        self.set(False)
        try:
            yield
        finally:
            self.set(previous)

    def __repr__(self) -> str:
        return f"Toggle(enabled={self._enabled})"


def apply_settings(settings: RtcheckSettings, toggle: Toggle | None = None) -> None:
    """Push resolved settings into *toggle* (default: :data:`CHECKS`)."""
    target = CHECKS if toggle is None else toggle
    target.set(settings.enabled)
    target.log_violations = settings.checks.log_violations
    set_repr_limit(settings.checks.max_repr_length)


def _seed() -> Toggle:
    from rtcheck.config.settings import RtcheckSettings

    toggle = Toggle()
    apply_settings(RtcheckSettings(), toggle)
    return toggle


CHECKS: Toggle = _seed()


# ── Public helpers ───────────────────────────────────────────────────


def enable_checks() -> None:
    """Turn runtime checks on for every wrapped function."""
    CHECKS.enable()


def disable_checks() -> None:
    """Turn runtime checks off; wrapped functions call straight through."""
    CHECKS.disable()


def checks_enabled() -> bool:
    return CHECKS.enabled


def checks_suspended() -> AbstractContextManager[None]:
    """``with checks_suspended(): ...`` — run a block with checks off."""
    return CHECKS.suspended()
