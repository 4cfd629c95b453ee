"""Command: show the resolved runtime-check settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rtcheck.commands._base import RtCommand

if TYPE_CHECKING:
    from rtcheck.commands._context import AppContext


@click.command(
    cls=RtCommand,
    examples="""\
  rtcheck status
  RTCHECK_ENABLED=0 rtcheck status
  rtcheck -c ./ci/rtcheck.toml --json status""",
)
@click.pass_obj
def status(app: AppContext) -> None:
    """Show whether checks are enabled and where settings came from."""
    from rtcheck.core.toggle import CHECKS
    from rtcheck.services.result import ServiceResult

    settings = app.settings
    app.emit(
        ServiceResult.success(
            "status",
            enabled=CHECKS.enabled,
            log_violations=CHECKS.log_violations,
            config_path=str(settings.config_path) if settings.config_path else None,
            config_origin=str(settings.config_origin),
            max_repr_length=settings.checks.max_repr_length,
            verbose=settings.verbose,
            log_json=settings.log_json,
        )
    )
