"""Pydantic configuration sections with code-baked defaults.

Sparse TOML contract: ``reactparcel.toml`` only holds overrides.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, field_validator

from reactparcel.domain.types import DEFAULT_PACKAGE_MANAGER


class InstallConfig(BaseModel):
    """[install] section."""

    model_config = {"frozen": True}

    package_manager: str = DEFAULT_PACKAGE_MANAGER

    @field_validator("package_manager")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            msg = "package_manager must not be empty"
            raise ValueError(msg)
        return value


class TemplateConfig(BaseModel):
    """[template] section. ``path`` replaces the bundled template tree."""

    model_config = {"frozen": True}

    path: Path | None = None
