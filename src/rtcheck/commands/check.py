"""Command: validate a JSON document against a descriptor."""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

import click

from rtcheck.commands._base import RtCommand

if TYPE_CHECKING:
    from rtcheck.commands._context import AppContext


@click.command(
    cls=RtCommand,
    examples="""\
  rtcheck check myapp.contracts:USER payload.json
  cat payload.json | rtcheck check myapp.contracts:USER
  rtcheck --json check myapp.contracts:ORDER order.json
  rtcheck --disable check myapp.contracts:USER payload.json""",
)
@click.argument("target")
@click.argument("document", type=click.File("r", encoding="utf-8"), default="-")
@click.pass_obj
def check(app: AppContext, target: str, document: IO[str]) -> None:
    """Check DOCUMENT (JSON, default stdin) against descriptor TARGET.

    TARGET is ``package.module:attribute`` naming a descriptor.
    """
    from rtcheck.services.check import CheckService

    app.emit(CheckService().check(target, document.read()))
