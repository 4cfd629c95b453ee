"""structlog configuration for the rtcheck CLI.

The library never configures logging on import: its modules log through
stdlib ``logging`` and stay silent until a host installs handlers.  The CLI
calls :func:`configure_logging` once per invocation, which routes every
record (structlog-native or stdlib) through one stderr handler.

Contract violations raised by wrapped functions are reported on their own
channel, :data:`VIOLATION_CHANNEL`, at DEBUG.  Their structured fields
(``function``, ``phase``, ``position``, ``path``, ``reason``) become
top-level keys in ``--log-json`` output.
"""

from __future__ import annotations

import logging
import sys

import structlog

VIOLATION_CHANNEL = "rtcheck.core.wrapper"
VIOLATION_FIELDS = ("function", "phase", "position", "path", "reason")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    log_violations: bool = True,
) -> None:
    """Install structlog processors and the single stderr handler.

    Safe to call repeatedly; each call replaces the previous handler.

    Args:
        verbose: DEBUG output for ``rtcheck`` loggers; otherwise WARNING+.
        log_json: JSON lines instead of the console renderer.
        log_violations: Keep the violation channel open under ``verbose``.
            When False the channel stays at WARNING, so violations are
            never reported whatever the verbosity.
    """
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[*shared, structlog.stdlib.ExtraAdder(allow=VIOLATION_FIELDS)],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(log_json),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    rt_level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger("rtcheck").setLevel(rt_level)
    violation_level = rt_level if log_violations else logging.WARNING
    logging.getLogger(VIOLATION_CHANNEL).setLevel(violation_level)
