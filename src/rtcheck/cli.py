"""Root CLI group for rtcheck with global flags and command registration."""

from __future__ import annotations

import click

from rtcheck import __version__
from rtcheck.commands import register_commands
from rtcheck.commands._context import AppContext
from rtcheck.config.settings import RtcheckSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="rtcheck")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--disable", is_flag=True, help="Turn runtime checks off for this run.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    disable: bool,
) -> None:
    """rtcheck — runtime contract checking utility."""
    settings = RtcheckSettings.from_cli(
        config_path=config_path,
        json_output=json_output or None,
        verbose=verbose or None,
        log_json=log_json or None,
        enabled=False if disable else None,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
