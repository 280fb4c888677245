"""Project request and resolution.

A :class:`ProjectRequest` is the raw CLI input; resolving it yields a
:class:`ResolvedProject` whose absolute path is the project root for the
rest of the run.

INVARIANT: ``ResolvedProject.name == ResolvedProject.absolute_path.name``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, model_validator


class ProjectRequest(BaseModel):
    """The project directory exactly as the user typed it."""

    model_config = {"frozen": True}

    raw_name: str

    @property
    def cleaned(self) -> str:
        return self.raw_name.strip()

    @property
    def is_blank(self) -> bool:
        return not self.cleaned


class ResolvedProject(BaseModel):
    """Absolute project root plus the derived package name."""

    model_config = {"frozen": True}

    absolute_path: Path
    name: str
    cd_path: str

    @model_validator(mode="after")
    def _name_matches_basename(self) -> ResolvedProject:
        if self.name != self.absolute_path.name:
            msg = f"name {self.name!r} does not match {self.absolute_path}"
            raise ValueError(msg)
        return self


def resolve_project(request: ProjectRequest, *, cwd: Path | None = None) -> ResolvedProject:
    """Resolve *request* against *cwd* (default: the process CWD).

    ``cd_path`` is the short form shown in the "next steps" hint: just the
    name when the project sits directly under *cwd*, else the full path.
    """
    base = (cwd or Path.cwd()).resolve()
    root = (base / request.cleaned).resolve()
    cd_path = root.name if root.parent == base else str(root)
    return ResolvedProject(absolute_path=root, name=root.name, cd_path=cd_path)
