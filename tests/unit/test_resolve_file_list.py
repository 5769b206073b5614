# topmark:header:start
#
#   project      : DocSieve
#   file         : test_resolve_file_list.py
#   file_relpath : tests/unit/test_resolve_file_list.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `resolve_file_list`: directory expansion, include/exclude filtering, ordering."""

from __future__ import annotations

from pathlib import Path

from docsieve.file_resolver import resolve_file_list
from tests.conftest import make_config


def _touch(root: Path, *names: str) -> None:
    for name in names:
        path: Path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", "utf-8")


def test_directory_expansion_applies_include(tmp_path: Path) -> None:
    _touch(tmp_path, "b.rb", "a.rb", "notes.txt", "lib/c.rb")
    files: list[Path] = resolve_file_list([tmp_path], config=make_config(), cwd=tmp_path)
    assert files == [tmp_path / "a.rb", tmp_path / "b.rb", tmp_path / "lib" / "c.rb"]


def test_explicit_file_ignores_include(tmp_path: Path) -> None:
    _touch(tmp_path, "notes.txt")
    files: list[Path] = resolve_file_list(
        [tmp_path / "notes.txt"], config=make_config(), cwd=tmp_path
    )
    assert files == [tmp_path / "notes.txt"]


def test_custom_include(tmp_path: Path) -> None:
    _touch(tmp_path, "a.rb", "tasks.rake")
    cfg = make_config(include_patterns=["*.rake"])
    assert resolve_file_list([tmp_path], config=cfg, cwd=tmp_path) == [tmp_path / "tasks.rake"]


def test_exclude_relative_to_cwd(tmp_path: Path) -> None:
    _touch(tmp_path, "a.rb", "vendor/x.rb", "vendor/y.rb")
    cfg = make_config(exclude_patterns=["vendor/"])
    assert resolve_file_list([tmp_path], config=cfg, cwd=tmp_path) == [tmp_path / "a.rb"]
    assert resolve_file_list([tmp_path / "vendor" / "x.rb"], config=cfg, cwd=tmp_path) == []


def test_missing_paths_are_kept(tmp_path: Path) -> None:
    missing: Path = tmp_path / "absent.rb"
    assert resolve_file_list([missing], config=make_config(), cwd=tmp_path) == [missing]


def test_duplicates_collapse(tmp_path: Path) -> None:
    _touch(tmp_path, "a.rb")
    files: list[Path] = resolve_file_list(
        [tmp_path / "a.rb", str(tmp_path / "a.rb")], config=make_config(), cwd=tmp_path
    )
    assert files == [tmp_path / "a.rb"]


def test_empty_input() -> None:
    assert resolve_file_list([], config=make_config()) == []
