"""ScaffoldService: turns a project directory name into an installed project.

Stages run strictly in order and the first failure ends the run::

    validating -> directory_preparing -> manifest_writing
      -> installing_runtime -> installing_dev -> materializing -> done

No stage is retried and nothing is rolled back, so a failed run can leave
a partially populated directory. The project root is passed explicitly to
every stage; the process working directory is never changed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from reactparcel.domain.naming import printable_name, validate_npm_name
from reactparcel.domain.project import ProjectRequest, ResolvedProject, resolve_project
from reactparcel.domain.types import (
    DEV_DEPENDENCIES,
    RENAME_RULES,
    RUNTIME_DEPENDENCIES,
    DependencySet,
    Stage,
)
from reactparcel.infrastructure.filesystem import (
    is_writable,
    materialize_template,
    write_manifest,
)
from reactparcel.infrastructure.installer import DependencyInstaller, InstallError
from reactparcel.infrastructure.templates import template_root
from reactparcel.services.result import ServiceResult
from reactparcel.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from reactparcel.config.settings import ReactParcelSettings

logger = logging.getLogger(__name__)

StageCallback = Callable[[Stage, dict[str, Any]], None]

OP = "create_app"


def _ignore_stage(stage: Stage, detail: dict[str, Any]) -> None:
    """Default stage callback."""


class ScaffoldService:
    """Sequences validation, manifest, installs, and template copy.

    Args:
        settings: Resolved CLI/env/TOML settings.
        installer: Injected installer (tests pass a fake); defaults to a
            :class:`DependencyInstaller` for ``settings.install.package_manager``.
        on_stage: Called as each stage starts, and on ``done``/``failed``.
            Presentation only; the result carries the real outcome.
    """

    def __init__(
        self,
        settings: ReactParcelSettings,
        *,
        installer: DependencyInstaller | None = None,
        on_stage: StageCallback | None = None,
    ) -> None:
        self._settings = settings
        self._installer = installer or DependencyInstaller(settings.install.package_manager)
        self._on_stage = on_stage or _ignore_stage

    @property
    def package_manager(self) -> str:
        return self._installer.package_manager

    @traced
    def create_app(self, project_directory: str, *, cwd: Path | None = None) -> ServiceResult:
        """Scaffold a project at *project_directory* (relative to *cwd*)."""
        request = ProjectRequest(raw_name=project_directory)

        # --- validating ---
        self._on_stage(Stage.VALIDATING, {"project_directory": request.cleaned})
        with trace_span(Stage.VALIDATING.value):
            if request.is_blank:
                return self._fail(
                    Stage.VALIDATING,
                    "MISSING_PROJECT_DIRECTORY",
                    "Please specify the project directory",
                )
            project = resolve_project(request, cwd=cwd)
            validation = validate_npm_name(project.name)
            if not validation.valid:
                shown = printable_name(project.name)
                return self._fail(
                    Stage.VALIDATING,
                    "INVALID_NAME",
                    f'Could not create a project called "{shown}" '
                    "because of npm naming restrictions",
                    name=shown,
                    problems=validation.problems,
                )
            parent = project.absolute_path.parent
            if not is_writable(parent):
                return self._fail(
                    Stage.VALIDATING,
                    "PATH_NOT_WRITABLE",
                    "The application path is not writable, "
                    "please check folder permissions and try again.",
                    path=str(parent),
                )

        root = project.absolute_path

        # --- directory_preparing ---
        self._on_stage(Stage.DIRECTORY_PREPARING, {"path": str(root)})
        with trace_span(Stage.DIRECTORY_PREPARING.value):
            try:
                root.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                return self._fail(
                    Stage.DIRECTORY_PREPARING,
                    "DIRECTORY_FAILED",
                    f"Could not create {root}: {exc}",
                    path=str(root),
                )

        # --- manifest_writing ---
        self._on_stage(Stage.MANIFEST_WRITING, {"path": str(root)})
        with trace_span(Stage.MANIFEST_WRITING.value):
            try:
                write_manifest(root, project.name)
            except OSError as exc:
                return self._fail(
                    Stage.MANIFEST_WRITING,
                    "MANIFEST_FAILED",
                    f"Could not write package.json: {exc}",
                    path=str(root),
                )

        # --- installing_runtime / installing_dev ---
        for stage, deps in (
            (Stage.INSTALLING_RUNTIME, RUNTIME_DEPENDENCIES),
            (Stage.INSTALLING_DEV, DEV_DEPENDENCIES),
        ):
            failed = self._install(stage, deps, root)
            if failed is not None:
                return failed

        # --- materializing ---
        self._on_stage(Stage.MATERIALIZING, {"path": str(root)})
        with trace_span(Stage.MATERIALIZING.value) as span:
            try:
                with template_root(self._settings.template.path) as source:
                    files_created = materialize_template(source, root, RENAME_RULES)
            except OSError as exc:
                return self._fail(
                    Stage.MATERIALIZING,
                    "MATERIALIZE_FAILED",
                    f"Could not copy the project template: {exc}",
                    path=str(root),
                    reason=str(exc),
                )
            if span is not None:
                span.annotate("files", len(files_created))

        self._on_stage(Stage.DONE, {"path": str(root)})
        logger.debug("Scaffolded %s at %s", project.name, root)
        return ServiceResult(
            ok=True,
            op=OP,
            data=self._success_data(project, files_created),
        )

    # ------------------------------------------------------------------
    # Stage helpers
    # ------------------------------------------------------------------

    def _install(self, stage: Stage, deps: DependencySet, root: Path) -> ServiceResult | None:
        """Run one install stage; returns a failed result or None."""
        packages = None if self._settings.skip_install else list(deps.packages)
        self._on_stage(stage, {"label": deps.label, "packages": packages or []})
        with trace_span(stage.value) as span:
            try:
                self._installer.install(packages, dev=deps.is_development, cwd=root)
            except InstallError as exc:
                return self._fail(
                    stage,
                    "INSTALL_FAILED",
                    f"{exc.command} has failed.",
                    command=exc.command,
                    returncode=exc.returncode,
                )
            if span is not None:
                span.annotate("packages", len(packages or []))
        return None

    def _fail(self, stage: Stage, code: str, message: str, **detail: Any) -> ServiceResult:
        logger.debug("Stage %s failed: %s", stage, code)
        self._on_stage(Stage.FAILED, {"stage": stage.value, "code": code})
        return ServiceResult.failure(OP, code, message, stage=stage.value, **detail)

    def _success_data(self, project: ResolvedProject, files_created: list[str]) -> dict[str, Any]:
        pm = self.package_manager
        installed = not self._settings.skip_install
        return {
            "name": project.name,
            "path": str(project.absolute_path),
            "cd_path": project.cd_path,
            "package_manager": pm,
            "dependencies": list(RUNTIME_DEPENDENCIES.packages) if installed else [],
            "dev_dependencies": list(DEV_DEPENDENCIES.packages) if installed else [],
            "files_created": ["package.json", *files_created],
            "commands": [
                {"command": f"{pm} start", "description": "Starts the development server."},
                {"command": f"{pm} run build", "description": "Builds the app for production."},
            ],
            "next_steps": [f"cd {project.cd_path}", f"{pm} start"],
        }
