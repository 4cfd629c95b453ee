"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich styles) or machines
(--json).
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.text import Text

from rtcheck.output.console import create_console, get_output

if TYPE_CHECKING:
    from rtcheck.services.result import ServiceResult


def _render_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    return str(value)


def format_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    color: bool = True,
    width: int | None = None,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
        color: Allow ANSI styles when the output is a terminal.
        width: Console width for wrapping long messages.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console(no_color=not color, width=width)
    if result.ok:
        console.print(Text("OK", style="rt.ok"), Text(f": {result.op}", style="rt.op"), sep="")
        for key, value in result.data.items():
            console.print(
                Text(f"  {key}: ", style="rt.key"),
                _render_value(value),
                sep="",
                markup=False,
                soft_wrap=True,
            )
    else:
        message = result.error.message if result.error else "Unknown error"
        code = f" [{result.error.code}]" if result.error else ""
        console.print(
            Text("ERROR", style="rt.error"),
            f": {result.op} — {message}",
            Text(code, style="rt.code"),
            sep="",
            markup=False,
            soft_wrap=True,
        )
    return get_output(console).rstrip("\n")
