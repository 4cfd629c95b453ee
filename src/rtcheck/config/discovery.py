"""Locate the rtcheck.toml that applies to a CLI run.

Precedence: an explicit ``--config`` path, then ``RTCHECK_CONFIG``, then the
first ``rtcheck.toml`` found walking up from the start directory.  An
explicit path or env var that names no file stops the search: the run
uses env vars and defaults only, rather than silently falling back to
some other project's file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

CONFIG_FILENAME = "rtcheck.toml"
CONFIG_ENV_VAR = "RTCHECK_CONFIG"


class ConfigOrigin(StrEnum):
    """Where the settled config location came from."""

    FLAG = "flag"
    ENV = "env"
    DISCOVERED = "discovered"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class ConfigLocation:
    """Result of :func:`locate_config`; ``path`` is None when no file applies."""

    path: Path | None
    origin: ConfigOrigin


def _walk_up(start: Path) -> Path | None:
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def locate_config(explicit: str | Path | None = None, start: Path | None = None) -> ConfigLocation:
    """Settle which config file a run should read.

    Args:
        explicit: Path given with ``--config``; wins over everything else.
        start: Directory the walk-up begins in (default: cwd).
    """
    if explicit:
        path = Path(explicit)
        return ConfigLocation(path if path.is_file() else None, ConfigOrigin.FLAG)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        return ConfigLocation(path if path.is_file() else None, ConfigOrigin.ENV)

    found = _walk_up((start or Path.cwd()).resolve())
    return ConfigLocation(found, ConfigOrigin.DISCOVERED if found else ConfigOrigin.NONE)


def find_config(start: Path | None = None) -> Path | None:
    """Path of the applicable rtcheck.toml without an explicit flag, or None."""
    return locate_config(start=start).path
