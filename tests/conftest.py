"""Shared pytest fixtures for rtcheck tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest
from click.testing import CliRunner

from rtcheck.core import engine
from rtcheck.core.toggle import CHECKS, Toggle


@pytest.fixture(autouse=True)
def _restore_global_toggle(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Every test starts with checks on and leaves the global toggle as found."""
    monkeypatch.delenv("RTCHECK_ENABLED", raising=False)
    monkeypatch.delenv("RTCHECK_CONFIG", raising=False)
    enabled = CHECKS.enabled
    log_violations = CHECKS.log_violations
    limits = (engine._repr.maxstring, engine._repr.maxother)
    CHECKS.enable()
    yield
    CHECKS.set(enabled)
    CHECKS.log_violations = log_violations
    engine._repr.maxstring, engine._repr.maxother = limits


@pytest.fixture
def toggle() -> Toggle:
    """A private toggle, for wrappers that must not touch the global one."""
    return Toggle()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()
