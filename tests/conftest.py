"""Shared pytest fixtures and test helpers for reactparcel tests."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Generator, Sequence
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from reactparcel.config.settings import ReactParcelSettings
from reactparcel.infrastructure.installer import DependencyInstaller, InstallError
from reactparcel.services.telemetry import _current_span, disable_telemetry


@pytest.fixture(autouse=True)
def _clean_process_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Isolate env config and undo logging/telemetry changes made by the CLI."""
    for var in (
        "REACTPARCEL_CONFIG",
        "REACTPARCEL_SKIP_INSTALL",
        "REACTPARCEL_INSTALL__PACKAGE_MANAGER",
    ):
        monkeypatch.delenv(var, raising=False)
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A clean working directory the CLI runs in (no config above it)."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


@pytest.fixture
def settings(workdir: Path) -> ReactParcelSettings:
    return ReactParcelSettings.from_cli(start=workdir)


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """A small template tree exercising every rename rule."""
    root = tmp_path / "template"
    (root / "src").mkdir(parents=True)
    (root / "public").mkdir()
    (root / "gitignore").write_text("/node_modules\n", encoding="utf-8")
    (root / "eslintrc").write_text("{}\n", encoding="utf-8")
    (root / "README-template.md").write_text("# App\n", encoding="utf-8")
    (root / "public" / "index.html").write_text("<div id='root'></div>\n", encoding="utf-8")
    (root / "src" / "index.js").write_text("console.log('hi')\n", encoding="utf-8")
    return root


class FakeInstaller(DependencyInstaller):
    """Records install calls instead of spawning a package manager."""

    def __init__(self, *, fail_on_dev: bool | None = None) -> None:
        super().__init__("npm")
        self.calls: list[dict[str, Any]] = []
        self._fail_on_dev = fail_on_dev

    def install(self, packages: Sequence[str] | None, *, dev: bool, cwd: Path) -> None:
        self.calls.append(
            {
                "packages": list(packages) if packages is not None else None,
                "dev": dev,
                "cwd": cwd,
                "manifest_present": (cwd / "package.json").is_file(),
            }
        )
        if packages and self._fail_on_dev is dev:
            raise InstallError(self.command_line(packages, dev=dev), returncode=1)


@pytest.fixture
def fake_installer() -> FakeInstaller:
    return FakeInstaller()


@pytest.fixture
def npm_ok() -> Generator[Any]:
    """Patch ``subprocess.run`` so every package-manager call exits 0."""
    with patch("subprocess.run") as mock_run:
        mock_run.side_effect = lambda args, **kwargs: subprocess.CompletedProcess(args, 0)
        yield mock_run
