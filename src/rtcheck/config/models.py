"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, rtcheck.toml only contains
overrides.  An empty file (or none at all) means "checks on, log
violations at DEBUG".
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ChecksConfig(BaseModel):
    """[checks] section."""

    model_config = {"frozen": True}

    log_violations: bool = True
    max_repr_length: int = Field(default=60, ge=8)


class OutputConfig(BaseModel):
    """[output] section (CLI only)."""

    model_config = {"frozen": True}

    color: bool = True
    width: int = 120
