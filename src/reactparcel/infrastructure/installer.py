"""Package-manager child process for dependency installation.

The child inherits this process's stdin/stdout/stderr so install progress
shows in the invoking terminal; only the exit status is observed.

Calls must never overlap: two installs in one project race on the same
``package.json`` and the shared package cache.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from reactparcel.domain.types import DEFAULT_PACKAGE_MANAGER

logger = logging.getLogger(__name__)

# Opt out of install-time ads and funding prompts.
INSTALL_ENV: dict[str, str] = {
    "ADBLOCK": "1",
    "DISABLE_OPENCOLLECTIVE": "1",
}


class InstallError(Exception):
    """The package manager exited non-zero (or could not be started)."""

    def __init__(self, command: str, *, returncode: int | None = None, reason: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.reason = reason
        super().__init__(f"{command} has failed")


def build_install_args(
    packages: Sequence[str],
    *,
    dev: bool,
    package_manager: str = DEFAULT_PACKAGE_MANAGER,
) -> list[str]:
    """Arguments for an exact-version install of *packages*.

    yarn, pnpm and bun get their own ``add`` syntax; any other executable
    is driven with npm's ``install`` flags.
    """
    # "npm.cmd" and "/usr/local/bin/pnpm" name the same tools
    tool = Path(package_manager).stem.lower()
    if tool in ("yarn", "bun"):
        return ["add", "--exact", *(["--dev"] if dev else []), *packages]
    if tool == "pnpm":
        return ["add", "--save-exact", "--save-dev" if dev else "--save-prod", *packages]
    return ["install", "--save-exact", "--save-dev" if dev else "--save", *packages]


class DependencyInstaller:
    """Runs one exact-version install per dependency set, one set at a time."""

    def __init__(self, package_manager: str = DEFAULT_PACKAGE_MANAGER) -> None:
        self.package_manager = package_manager

    def command_line(self, packages: Sequence[str], *, dev: bool) -> str:
        """The command string reported to the user on failure."""
        args = build_install_args(packages, dev=dev, package_manager=self.package_manager)
        return " ".join([self.package_manager, *args])

    def install(self, packages: Sequence[str] | None, *, dev: bool, cwd: Path) -> None:
        """Install *packages* into the project at *cwd*, blocking until done.

        ``None`` or an empty sequence is a no-op; no process is spawned.

        Raises:
            InstallError: non-zero exit, or the executable could not be run.
        """
        if not packages:
            return

        args = build_install_args(packages, dev=dev, package_manager=self.package_manager)
        command = self.command_line(packages, dev=dev)
        # shutil.which resolves npm.cmd and friends on Windows
        executable = shutil.which(self.package_manager) or self.package_manager
        logger.debug("Running %s in %s", command, cwd)

        try:
            completed = subprocess.run(
                [executable, *args],
                cwd=cwd,
                env={**os.environ, **INSTALL_ENV},
                check=False,
            )
        except OSError as exc:
            raise InstallError(command, reason=str(exc)) from exc

        if completed.returncode != 0:
            logger.debug("%s exited with %s", command, completed.returncode)
            raise InstallError(command, returncode=completed.returncode)
