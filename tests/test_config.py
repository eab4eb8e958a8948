from __future__ import annotations

import textwrap
import pytest
from pathlib import Path

from unminify.config import (
    ConfigError,
    FormatConfig,
    apply_overrides,
    build_config,
    load_config,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".unminify.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.unminify]
        indent = 2
        line_length = 100
        max_file_size = 1024
        """,
    )

    config = load_config(tmp_path)

    assert config == FormatConfig(indent=2, line_length=100, max_file_size=1024)


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [unminify]
        indent = 3
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    config = load_config(nested)

    assert config.indent == 3
    assert config.line_length == FormatConfig().line_length


def test_dotfile_accepts_tool_table(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [tool.unminify]
        line-length = 120
        """,
    )

    assert load_config(tmp_path).line_length == 120


def test_load_config_walks_up_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.unminify]
        indent = 8
        """,
    )
    nested = tmp_path / "a" / "b" / "c"
    nested.mkdir(parents=True)

    assert load_config(nested).indent == 8


def test_pyproject_without_table_is_skipped(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.unminify]
        indent = 2
        """,
    )
    child = tmp_path / "child"
    child.mkdir()
    _write_pyproject(
        child,
        """
        [project]
        name = "site"
        """,
    )

    assert load_config(child).indent == 2


def test_load_config_returns_defaults_when_missing(tmp_path: Path):
    assert load_config(tmp_path) == FormatConfig()


def test_load_config_skips_invalid_toml(tmp_path: Path):
    invalid_dir = tmp_path / "invalid"
    invalid_dir.mkdir()
    _write_pyproject(invalid_dir, "not = {valid")
    _write_pyproject(
        tmp_path,
        """
        [tool.unminify]
        indent = 6
        """,
    )

    assert load_config(invalid_dir).indent == 6


def test_load_config_errors_on_unknown_key(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.unminify]
        indent = 2
        unexpected = true
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_errors_on_non_table(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool]
        unminify = 3
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "config",
    [
        FormatConfig(indent=-1),
        FormatConfig(indent=17),
        FormatConfig(line_length=0),
        FormatConfig(max_file_size=0),
        FormatConfig(indent="2"),
        FormatConfig(line_length=True),
    ],
)
def test_validate_config_rejects_bad_values(config: FormatConfig):
    with pytest.raises(ConfigError):
        validate_config(config)


def test_validate_config_accepts_zero_indent():
    validate_config(FormatConfig(indent=0))


def test_apply_overrides_ignores_none():
    config = FormatConfig(indent=2)

    assert apply_overrides(config, indent=None, line_length=None) is config
    assert apply_overrides(config, line_length=60) == FormatConfig(indent=2, line_length=60)


def test_build_config_prefers_overrides(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.unminify]
        indent = 2
        line_length = 100
        """,
    )

    config = build_config(tmp_path, indent=8)

    assert config.indent == 8
    assert config.line_length == 100


def test_build_config_validates(tmp_path: Path):
    with pytest.raises(ConfigError):
        build_config(tmp_path, line_length=-5)
