"""Subcommand modules for rtcheck.

Provides register_commands() which uses deferred imports to keep
``rtcheck --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from rtcheck.commands.check import check
    from rtcheck.commands.status import status

    cli.add_command(check)
    cli.add_command(status)
