"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Applies settings to logging and the global toggle,
and centralizes result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
import structlog

from rtcheck.config.logging import configure_logging
from rtcheck.core.toggle import apply_settings
from rtcheck.output.formatters import format_result

if TYPE_CHECKING:
    from rtcheck.config.settings import RtcheckSettings
    from rtcheck.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: RtcheckSettings) -> None:
        self.settings = settings
        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            log_violations=settings.checks.log_violations,
        )
        apply_settings(settings)
        structlog.get_logger("rtcheck.cli").debug(
            "settings.resolved",
            enabled=settings.enabled,
            config_path=str(settings.config_path) if settings.config_path else None,
            config_origin=str(settings.config_origin),
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(
            result,
            json_output=self.settings.json_output,
            color=self.settings.output.color,
            width=self.settings.output.width,
        )
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
