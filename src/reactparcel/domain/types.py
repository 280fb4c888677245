"""Core enums and fixed value sets for project scaffolding."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class Stage(StrEnum):
    """Scaffold pipeline states, in execution order.

    ``DONE`` and ``FAILED`` are terminal.
    """

    VALIDATING = "validating"
    DIRECTORY_PREPARING = "directory_preparing"
    MANIFEST_WRITING = "manifest_writing"
    INSTALLING_RUNTIME = "installing_runtime"
    INSTALLING_DEV = "installing_dev"
    MATERIALIZING = "materializing"
    DONE = "done"
    FAILED = "failed"


class DependencySet(BaseModel):
    """Ordered package identifiers installed in one package-manager call."""

    model_config = {"frozen": True}

    packages: tuple[str, ...]
    is_development: bool = False

    @property
    def label(self) -> str:
        return "devDependencies" if self.is_development else "dependencies"


RUNTIME_DEPENDENCIES = DependencySet(packages=("react", "react-dom"))

DEV_DEPENDENCIES = DependencySet(
    packages=("@babel/preset-env", "@babel/preset-react", "parcel"),
    is_development=True,
)

# Template file base name -> destination base name.
RENAME_RULES: dict[str, str] = {
    "gitignore": ".gitignore",
    "eslintrc": ".eslintrc",
    "README-template.md": "README.md",
}

MANIFEST_FILENAME = "package.json"

DEFAULT_PACKAGE_MANAGER = "npm"
