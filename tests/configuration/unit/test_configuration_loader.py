"""Configuration loader tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from idl_compat_checker.configuration.loader import ConfigurationError, load_configuration


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def test_empty_configuration_uses_defaults(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "idl-compat.yaml", "")

    configuration = load_configuration(config_path)

    assert configuration.path == config_path
    assert configuration.include_root is None
    assert configuration.comparison.mode == "merged"
    assert configuration.comparison.check_throws is False
    assert configuration.merging.parallel is False


def test_loads_yaml_configuration(tmp_path: Path) -> None:
    (tmp_path / "schemas").mkdir()
    config_path = _write_file(
        tmp_path / "idl-compat.yaml",
        """
include_root: schemas
comparison:
  mode: PER_FILE
  check_throws: true
merging:
  parallel: true
""",
    )

    configuration = load_configuration(config_path)

    assert configuration.include_root == (tmp_path / "schemas").resolve()
    assert configuration.comparison.mode == "per_file"
    assert configuration.comparison.check_throws is True
    assert configuration.merging.parallel is True


def test_loads_json_configuration_with_absolute_include_root(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "idl-compat.json",
        json.dumps({"include_root": str(tmp_path), "comparison": {"mode": "merged"}}),
    )

    configuration = load_configuration(config_path)

    assert configuration.include_root == tmp_path


def test_missing_configuration_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_configuration(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    ("contents", "message"),
    [
        ("- item\n", "root must be a mapping"),
        ("reporting: {}\n", "Unknown configuration sections: reporting"),
        ("comparison: merged\n", "'comparison' must be a mapping"),
        ("comparison: {mode: both}\n", "comparison.mode must be one of merged, per_file"),
        ("comparison: {mode: ''}\n", "comparison.mode must not be empty"),
        ("comparison: {check_throws: 'yes'}\n", "comparison.check_throws must be a boolean"),
        ("merging: {parallel: 1}\n", "merging.parallel must be a boolean"),
        ("include_root: missing-dir\n", "include_root is not a directory"),
    ],
)
def test_invalid_configuration_raises(tmp_path: Path, contents: str, message: str) -> None:
    config_path = _write_file(tmp_path / "idl-compat.yaml", contents)

    with pytest.raises(ConfigurationError, match=message):
        load_configuration(config_path)
