"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``REACTPARCEL_*`` prefix, ``__`` for nested sections
  3. TOML file: ``reactparcel.toml`` discovered via walk-up
  4. Code defaults baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from reactparcel.config.discovery import find_config
from reactparcel.config.models import InstallConfig, TemplateConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a discovered ``reactparcel.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc
            self._anchor_template_path(toml_path.parent)

    def _anchor_template_path(self, base: Path) -> None:
        """Resolve a relative ``[template] path`` against the config's directory."""
        section = self._data.get("template")
        if isinstance(section, dict) and isinstance(section.get("path"), str):
            section["path"] = str((base / section["path"]).resolve())

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# TOML path handed to settings_customise_sources during construction.
_tls = threading.local()


class ReactParcelSettings(BaseSettings):
    """Frozen settings for one CLI invocation.

    Attributes:
        config_path: The TOML file that was loaded, if any.
        skip_install: Write the manifest and template but install nothing.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "REACTPARCEL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    skip_install: bool = False

    # --- TOML sections ---
    install: InstallConfig = Field(default_factory=InstallConfig)
    template: TemplateConfig = Field(default_factory=TemplateConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
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
    ) -> ReactParcelSettings:
        """Build settings for a CLI run.

        An explicit *config_path* must exist; otherwise ``reactparcel.toml``
        is discovered by walking up from *start* (default: cwd).
        """
        toml_path: Path | None
        if config_path:
            toml_path = Path(config_path)
            if not toml_path.is_file():
                msg = f"Config file not found: {config_path}"
                raise click.ClickException(msg)
        else:
            toml_path = find_config(start)

        # Unset flags (False/None) defer to env vars and TOML.
        overrides = {k: v for k, v in cli_flags.items() if v is not None and v is not False}

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
