"""Tests for the package.json model."""

import json

from reactparcel.domain.manifest import DEFAULT_SCRIPTS, Manifest, render_manifest


class TestManifest:
    def test_defaults(self) -> None:
        manifest = Manifest(name="my-app")
        assert manifest.version == "1.0.0"
        assert manifest.private is True
        assert manifest.scripts == DEFAULT_SCRIPTS

    def test_scripts(self) -> None:
        assert DEFAULT_SCRIPTS == {
            "start": 'parcel "./public/index.html" --open -p 3000',
            "build": 'parcel build "./public/index.html" --out-dir build',
        }

    def test_scripts_not_shared(self) -> None:
        first = Manifest(name="a")
        first.scripts["extra"] = "x"
        assert "extra" not in Manifest(name="b").scripts


class TestRenderManifest:
    def test_key_order_and_indent(self) -> None:
        text = render_manifest(Manifest(name="my-app"), line_ending="\n")
        assert text.startswith('{\n  "name": "my-app",\n  "version": "1.0.0",\n  "private": true,')
        assert list(json.loads(text)) == ["name", "version", "private", "scripts"]

    def test_trailing_line_ending(self) -> None:
        assert render_manifest(Manifest(name="a"), line_ending="\r\n").endswith("}\r\n")
        assert render_manifest(Manifest(name="a"), line_ending="\n").endswith("}\n")

    def test_non_ascii_preserved(self) -> None:
        text = render_manifest(Manifest(name="café"), line_ending="\n")
        assert '"café"' in text
