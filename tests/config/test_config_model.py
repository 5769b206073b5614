# topmark:header:start
#
#   project      : DocSieve
#   file         : test_config_model.py
#   file_relpath : tests/config/test_config_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `Config`/`MutableConfig`: defaults, merging, discovery and validation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from docsieve.config import Config, MutableConfig
from docsieve.config.io import parse_toml_text, to_toml
from docsieve.core.errors import ConfigError
from tests.conftest import parametrize

if TYPE_CHECKING:
    from pathlib import Path


def test_defaults() -> None:
    cfg: Config = MutableConfig.from_defaults().freeze()
    assert cfg == Config()
    assert cfg.trace_depth == 6
    assert cfg.encoding == "utf-8"
    assert cfg.disabled_handlers == frozenset()
    assert cfg.include_patterns == ("*.rb",)
    assert cfg.exclude_patterns == ()


def test_thaw_freeze_round_trip() -> None:
    cfg = Config(trace_depth=2, disabled_handlers=frozenset({"mixin"}))
    draft: MutableConfig = cfg.thaw()
    draft.exclude_patterns.append("vendor/")
    again: Config = draft.freeze()
    assert again.trace_depth == 2
    assert again.disabled_handlers == frozenset({"mixin"})
    assert again.exclude_patterns == ("vendor/",)
    assert cfg.exclude_patterns == ()


def test_merge_toml() -> None:
    data = parse_toml_text(
        'trace_depth = 3\nencoding = "latin-1"\n'
        '[handlers]\ndisabled = ["constant"]\n'
        '[files]\ninclude = ["*.rb", "*.rake"]\nexclude = ["vendor/"]\n'
    )
    cfg: Config = MutableConfig.from_defaults().merge_toml(data).freeze()
    assert cfg.trace_depth == 3
    assert cfg.encoding == "latin-1"
    assert cfg.disabled_handlers == frozenset({"constant"})
    assert cfg.include_patterns == ("*.rb", "*.rake")
    assert cfg.exclude_patterns == ("vendor/",)


def test_merge_keeps_unset_keys() -> None:
    draft = MutableConfig(trace_depth=9)
    draft.merge_toml({"encoding": "ascii"})
    assert draft.trace_depth == 9
    assert draft.encoding == "ascii"


def test_unknown_keys_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)
    MutableConfig().merge_toml({"colour": True, "files": {"includes": []}})
    assert "Ignoring unknown configuration key 'colour' at top level" in caplog.text
    assert "Ignoring unknown configuration key 'includes' at [files]" in caplog.text


@parametrize(
    "data",
    [
        {"trace_depth": "6"},
        {"trace_depth": True},
        {"encoding": 8},
        {"handlers": ["constant"]},
        {"handlers": {"disabled": "constant"}},
        {"files": {"include": [1, 2]}},
    ],
)
def test_wrong_types_raise(data: dict[str, object]) -> None:
    with pytest.raises(ConfigError):
        MutableConfig().merge_toml(data)


@parametrize("draft", [MutableConfig(trace_depth=-1), MutableConfig(encoding="no-such-codec")])
def test_freeze_validates(draft: MutableConfig) -> None:
    with pytest.raises(ConfigError):
        draft.freeze()


def test_to_toml_dict_round_trips() -> None:
    cfg = Config(trace_depth=4, disabled_handlers=frozenset({"b", "a"}))
    text: str = to_toml(cfg.to_toml_dict())
    again: Config = MutableConfig().merge_toml(parse_toml_text(text)).freeze()
    assert again == cfg


def test_discover_prefers_docsieve_toml(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.docsieve]\ntrace_depth = 1\n", "utf-8")
    assert MutableConfig.discover_config_file(tmp_path) == tmp_path / "pyproject.toml"
    (tmp_path / "docsieve.toml").write_text("trace_depth = 2\n", "utf-8")
    assert MutableConfig.discover_config_file(tmp_path) == tmp_path / "docsieve.toml"


def test_discover_ignores_pyproject_without_table(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[project]\nname = 'x'\n", "utf-8")
    assert MutableConfig.discover_config_file(tmp_path) is None


def test_load_merged_precedence(tmp_path: Path) -> None:
    (tmp_path / "docsieve.toml").write_text('trace_depth = 2\nencoding = "ascii"\n', "utf-8")
    explicit: Path = tmp_path / "other.toml"
    explicit.write_text("trace_depth = 5\n", "utf-8")

    cfg: Config = MutableConfig.load_merged(config_file=explicit, cwd=tmp_path).freeze()
    assert cfg.trace_depth == 5
    assert cfg.encoding == "ascii"
    assert cfg.config_files == (tmp_path / "docsieve.toml", explicit)


def test_load_merged_does_not_merge_same_file_twice(tmp_path: Path) -> None:
    found: Path = tmp_path / "docsieve.toml"
    found.write_text("trace_depth = 2\n", "utf-8")
    cfg: Config = MutableConfig.load_merged(config_file=found, cwd=tmp_path).freeze()
    assert cfg.config_files == (found,)


def test_load_merged_without_files(tmp_path: Path) -> None:
    assert MutableConfig.load_merged(cwd=tmp_path).freeze() == Config()


def test_pyproject_given_explicitly_without_table(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.WARNING)
    pyproject: Path = tmp_path / "pyproject.toml"
    pyproject.write_text("[project]\nname = 'x'\n", "utf-8")
    cfg: Config = MutableConfig().merge_toml_file(pyproject).freeze()
    assert cfg.trace_depth == 6
    assert "[tool.docsieve] section missing" in caplog.text


def test_invalid_toml_file(tmp_path: Path) -> None:
    bad: Path = tmp_path / "docsieve.toml"
    bad.write_text("trace_depth = = 1\n", "utf-8")
    with pytest.raises(ConfigError, match="Invalid TOML"):
        MutableConfig.load_merged(cwd=tmp_path)
