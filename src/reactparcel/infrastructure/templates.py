"""Location of the project template tree shipped inside the package."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from importlib import resources
from pathlib import Path


@contextmanager
def template_root(override: Path | None = None) -> Generator[Path]:
    """Yield a real directory holding the template tree.

    An explicit *override* (from ``[template] path``) wins; otherwise the
    packaged ``reactparcel/template`` directory is used, extracted to a
    temporary location if the package is not installed on disk.
    """
    if override is not None:
        yield override
        return

    bundled = resources.files("reactparcel") / "template"
    with resources.as_file(bundled) as path:
        yield Path(path)
