"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``RTCHECK_*`` prefix
  3. TOML file    — ``rtcheck.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

The library itself only ever builds ``RtcheckSettings()`` (env vars and
defaults) to seed the global toggle at import time; file discovery is a
CLI concern handled by :meth:`RtcheckSettings.from_cli`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from rtcheck.config.discovery import ConfigOrigin, locate_config
from rtcheck.config.models import ChecksConfig, OutputConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from an ``rtcheck.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class RtcheckSettings(BaseSettings):
    """Runtime-contract settings.

    Attributes:
        enabled: Initial state of the global toggle (``RTCHECK_ENABLED``).
        config_path: The TOML file the settings were read from, if any.
        config_origin: How that file was chosen (flag, env, discovered, none).
    """

    model_config = {
        "frozen": True,
        "env_prefix": "RTCHECK_",
        "env_nested_delimiter": "__",
    }

    enabled: bool = True
    config_path: Path | None = None
    config_origin: ConfigOrigin = ConfigOrigin.NONE

    # --- CLI flags ---
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    checks: ChecksConfig = Field(default_factory=ChecksConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> RtcheckSettings:
        """Construct settings from a CLI invocation.

        The config file is settled by :func:`~rtcheck.config.discovery.locate_config`
        (explicit *config_path*, then ``RTCHECK_CONFIG``, then a walk-up from
        *start*); where it came from is kept in ``config_origin``.
        CLI flags whose value is None are dropped so they don't mask env
        vars or TOML values.
        """
        location = locate_config(config_path, start)
        flags = {key: value for key, value in cli_flags.items() if value is not None}
        _tls.toml_path = location.path
        try:
            return cls(config_path=location.path, config_origin=location.origin, **flags)
        finally:
            _tls.toml_path = None
