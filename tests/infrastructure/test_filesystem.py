"""Tests for filesystem operations: path guard, manifest write, template copy."""

import json
import os
from pathlib import Path

import pytest

from reactparcel.domain.types import RENAME_RULES
from reactparcel.infrastructure.filesystem import (
    destination_name,
    is_writable,
    materialize_template,
    write_manifest,
)


def _tree(root: Path) -> dict[str, bytes]:
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


class TestIsWritable:
    def test_writable_directory(self, tmp_path: Path) -> None:
        assert is_writable(tmp_path) is True

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert is_writable(tmp_path / "does" / "not" / "exist") is False

    def test_file_is_not_a_writable_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "file.txt"
        target.write_text("x", encoding="utf-8")
        assert is_writable(target) is False

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="root bypasses permission bits",
    )
    def test_read_only_directory(self, tmp_path: Path) -> None:
        locked = tmp_path / "locked"
        locked.mkdir()
        locked.chmod(0o500)
        try:
            assert is_writable(locked) is False
        finally:
            locked.chmod(0o700)

    def test_access_error_is_false(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def boom(*_args: object, **_kwargs: object) -> bool:
            raise OSError("denied")

        monkeypatch.setattr(os, "access", boom)
        assert is_writable(tmp_path) is False


class TestWriteManifest:
    def test_writes_package_json(self, tmp_path: Path) -> None:
        path = write_manifest(tmp_path, "my-app")
        assert path == tmp_path / "package.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["name"] == "my-app"
        assert data["version"] == "1.0.0"
        assert data["private"] is True
        assert set(data["scripts"]) == {"start", "build"}

    def test_platform_line_ending(self, tmp_path: Path) -> None:
        raw = write_manifest(tmp_path, "my-app").read_bytes()
        assert raw.endswith(("}" + os.linesep).encode())
        assert b'\n  "name": "my-app"' in raw.replace(b"\r\n", b"\n")

    def test_overwrites_existing(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text('{"name": "old", "extra": 1}', encoding="utf-8")
        write_manifest(tmp_path, "fresh")
        data = json.loads((tmp_path / "package.json").read_text(encoding="utf-8"))
        assert data["name"] == "fresh"
        assert "extra" not in data


class TestDestinationName:
    def test_renames(self) -> None:
        assert destination_name("gitignore", RENAME_RULES) == ".gitignore"
        assert destination_name("eslintrc", RENAME_RULES) == ".eslintrc"
        assert destination_name("README-template.md", RENAME_RULES) == "README.md"

    def test_exact_match_only(self) -> None:
        assert destination_name("gitignore.txt", RENAME_RULES) == "gitignore.txt"
        assert destination_name("my-gitignore", RENAME_RULES) == "my-gitignore"
        assert destination_name("index.js", RENAME_RULES) == "index.js"


class TestMaterializeTemplate:
    def test_copies_with_renames(self, tmp_path: Path, template_dir: Path) -> None:
        dest = tmp_path / "out"
        dest.mkdir()
        written = materialize_template(template_dir, dest, RENAME_RULES)
        assert written == [
            ".eslintrc",
            ".gitignore",
            "README.md",
            "public/index.html",
            "src/index.js",
        ]
        assert (dest / ".gitignore").read_text(encoding="utf-8") == "/node_modules\n"
        assert not (dest / "gitignore").exists()
        assert not (dest / "README-template.md").exists()

    def test_rename_applies_in_subdirectories(self, tmp_path: Path, template_dir: Path) -> None:
        (template_dir / "src" / "gitignore").write_text("*.log\n", encoding="utf-8")
        dest = tmp_path / "out"
        written = materialize_template(template_dir, dest, RENAME_RULES)
        assert "src/.gitignore" in written
        assert (dest / "src" / ".gitignore").is_file()

    def test_idempotent(self, tmp_path: Path, template_dir: Path) -> None:
        dest = tmp_path / "out"
        dest.mkdir()
        materialize_template(template_dir, dest, RENAME_RULES)
        first = _tree(dest)
        materialize_template(template_dir, dest, RENAME_RULES)
        assert _tree(dest) == first

    def test_overwrites_existing_files(self, tmp_path: Path, template_dir: Path) -> None:
        dest = tmp_path / "out"
        dest.mkdir()
        (dest / "README.md").write_text("stale", encoding="utf-8")
        materialize_template(template_dir, dest, RENAME_RULES)
        assert (dest / "README.md").read_text(encoding="utf-8") == "# App\n"

    def test_keeps_unrelated_files(self, tmp_path: Path, template_dir: Path) -> None:
        dest = tmp_path / "out"
        dest.mkdir()
        (dest / "package.json").write_text("{}", encoding="utf-8")
        materialize_template(template_dir, dest, RENAME_RULES)
        assert (dest / "package.json").read_text(encoding="utf-8") == "{}"

    def test_missing_template_root(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            materialize_template(tmp_path / "nope", tmp_path / "out", RENAME_RULES)

    def test_template_root_is_file(self, tmp_path: Path) -> None:
        not_dir = tmp_path / "file"
        not_dir.write_text("x", encoding="utf-8")
        with pytest.raises(NotADirectoryError):
            materialize_template(not_dir, tmp_path / "out", RENAME_RULES)

    def test_destination_write_failure_propagates(
        self, tmp_path: Path, template_dir: Path
    ) -> None:
        dest = tmp_path / "out"
        dest.mkdir()
        # a directory where a file must go makes the copy fail
        (dest / "README.md").mkdir()
        with pytest.raises(OSError):
            materialize_template(template_dir, dest, RENAME_RULES)

    def test_empty_rule_table_keeps_names(self, tmp_path: Path, template_dir: Path) -> None:
        dest = tmp_path / "out"
        written = materialize_template(template_dir, dest, {})
        assert "gitignore" in written
        assert "README-template.md" in written
