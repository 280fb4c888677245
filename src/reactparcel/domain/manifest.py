"""The generated ``package.json`` model and its serialized form."""

from __future__ import annotations

import json
import os

from pydantic import BaseModel, Field

DEV_SERVER_PORT = 3000
ENTRY_HTML = "./public/index.html"
BUILD_DIR = "build"

DEFAULT_SCRIPTS: dict[str, str] = {
    "start": f'parcel "{ENTRY_HTML}" --open -p {DEV_SERVER_PORT}',
    "build": f'parcel build "{ENTRY_HTML}" --out-dir {BUILD_DIR}',
}


class Manifest(BaseModel):
    """Project manifest written once per scaffold run.

    Field order is the serialized key order.
    """

    model_config = {"frozen": True}

    name: str
    version: str = "1.0.0"
    private: bool = True
    scripts: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_SCRIPTS))


def render_manifest(manifest: Manifest, *, line_ending: str = os.linesep) -> str:
    """Serialize *manifest* as 2-space indented JSON plus a trailing line ending."""
    return json.dumps(manifest.model_dump(), indent=2, ensure_ascii=False) + line_ending
