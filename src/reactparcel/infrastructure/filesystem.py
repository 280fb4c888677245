"""Filesystem operations for project scaffolding.

Covers the three stages that touch disk directly: the writability guard,
the manifest write, and template materialization. Failures inside the
manifest write and materialization propagate as ``OSError``; nothing here
rolls back a partially written tree.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Mapping
from pathlib import Path

from reactparcel.domain.manifest import Manifest, render_manifest
from reactparcel.domain.types import MANIFEST_FILENAME

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Path guard
# ---------------------------------------------------------------------------


def is_writable(directory: Path) -> bool:
    """Whether the current user may create entries inside *directory*.

    Never raises: a missing directory, a non-directory, or any access
    failure all read as ``False``.
    """
    try:
        return directory.is_dir() and os.access(directory, os.W_OK)
    except (OSError, ValueError):
        logger.debug("Access check failed for %s", directory, exc_info=True)
        return False


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------


def write_manifest(root: Path, name: str) -> Path:
    """Write a fresh ``package.json`` for *name* into *root*.

    Any existing manifest is overwritten, not merged.
    """
    path = root / MANIFEST_FILENAME
    # newline="" keeps the os.linesep terminator byte-exact on every platform
    path.write_text(render_manifest(Manifest(name=name)), encoding="utf-8", newline="")
    logger.debug("Wrote manifest %s", path)
    return path


# ---------------------------------------------------------------------------
# Template materialization
# ---------------------------------------------------------------------------


def destination_name(filename: str, rename_rules: Mapping[str, str]) -> str:
    """Map a template base name through *rename_rules* (exact match only)."""
    return rename_rules.get(filename, filename)


def _reraise(exc: OSError) -> None:
    raise exc


def materialize_template(
    template_root: Path,
    dest_root: Path,
    rename_rules: Mapping[str, str],
) -> list[str]:
    """Copy every file under *template_root* into *dest_root*.

    Relative directory structure is preserved and existing destination
    files are always overwritten, so a re-run yields the same tree.
    Returns the sorted destination-relative POSIX paths written.

    Raises:
        FileNotFoundError: *template_root* does not exist.
        NotADirectoryError: *template_root* is not a directory.
        OSError: a read or write failed part-way; earlier copies remain.
    """
    if not template_root.exists():
        msg = f"Template root not found: {template_root}"
        raise FileNotFoundError(msg)
    if not template_root.is_dir():
        msg = f"Template root is not a directory: {template_root}"
        raise NotADirectoryError(msg)

    written: list[str] = []
    for dirpath, dirnames, filenames in os.walk(template_root, onerror=_reraise):
        dirnames.sort()
        source_dir = Path(dirpath)
        target_dir = dest_root / source_dir.relative_to(template_root)
        target_dir.mkdir(parents=True, exist_ok=True)
        for filename in sorted(filenames):
            target = target_dir / destination_name(filename, rename_rules)
            shutil.copyfile(source_dir / filename, target)
            written.append(target.relative_to(dest_root).as_posix())

    logger.debug("Materialized %d template files into %s", len(written), dest_root)
    return sorted(written)
