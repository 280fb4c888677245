"""Config file discovery.

Walks up from the working directory looking for ``reactparcel.toml``,
the way git finds ``.git/``. ``REACTPARCEL_CONFIG`` short-circuits the
search.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "reactparcel.toml"
CONFIG_ENV_VAR = "REACTPARCEL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``reactparcel.toml`` at or above *start* (default: cwd).

    When ``REACTPARCEL_CONFIG`` is set it is the only candidate; a
    dangling value yields None rather than falling back to the walk.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current.parent == current:
            return None
        current = current.parent
