"""Scenario-style integration tests for core check behaviors."""

from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

from click.testing import CliRunner
from idl_compat_checker.cli import cli
from idl_compat_checker.compatibility_checking.violations import ViolationKind
from idl_compat_checker.run_execution import CheckRequest, execute_compatibility_check


def _write_tree(path: Path, files: dict[str, object]) -> str:
    path.write_text(json.dumps({"files": files}), encoding="utf-8")
    return str(path)


def _check(tmp_path: Path, old: dict[str, object], new: dict[str, object], **settings):
    return execute_compatibility_check(
        CheckRequest(
            old_tree_path=_write_tree(tmp_path / "old.json", old),
            new_tree_path=_write_tree(tmp_path / "new.json", new),
            **settings,
        )
    )


def test_given_new_optional_field_when_checking_then_schema_is_compatible(tmp_path: Path) -> None:
    old = {"a.thrift": {"structs": {"User": [{"id": 1, "name": "id", "type": "i64"}]}}}
    new = {
        "a.thrift": {
            "structs": {
                "User": [
                    {"id": 1, "name": "id", "type": "i64"},
                    {"id": 2, "name": "email", "type": "string", "optional": True},
                ]
            }
        }
    }

    outcome = _check(tmp_path, old, new)

    assert outcome.verdict.compatible


def test_given_field_renumbered_when_checking_then_id_change_is_reported(tmp_path: Path) -> None:
    old = {"a.thrift": {"structs": {"User": [{"id": 1, "name": "id", "type": "i64"}]}}}
    new = {"a.thrift": {"structs": {"User": [{"id": 7, "name": "id", "type": "i64"}]}}}

    outcome = _check(tmp_path, old, new)

    assert outcome.verdict.violation is not None
    assert outcome.verdict.violation.kind == ViolationKind.FIELD_ID_CHANGED
    assert outcome.verdict.message == "struct 'User' was changed: field 'id' ID was changed: 1 -> 7"


def test_given_list_element_type_changed_when_checking_then_chain_names_the_element(
    tmp_path: Path,
) -> None:
    old = {
        "a.thrift": {
            "structs": {
                "Batch": [{"id": 1, "name": "ids", "type": {"name": "list", "value": "i32"}}]
            }
        }
    }
    new = {
        "a.thrift": {
            "structs": {
                "Batch": [{"id": 1, "name": "ids", "type": {"name": "list", "value": "i64"}}]
            }
        }
    }

    outcome = _check(tmp_path, old, new)

    assert outcome.verdict.message == (
        "struct 'Batch' was changed: field 'ids' type was changed: "
        "list element type was changed: i32 -> i64"
    )


def test_given_struct_moved_to_other_file_when_checking_merged_then_schema_is_compatible(
    tmp_path: Path,
) -> None:
    user = {"User": [{"id": 1, "name": "id", "type": "i64"}]}
    old = {"a.thrift": {"structs": user}, "b.thrift": {}}
    new = {"a.thrift": {}, "b.thrift": {"structs": user}}

    merged = _check(tmp_path, old, new)
    per_file = _check(tmp_path, old, new, mode="per_file")

    assert merged.verdict.compatible
    assert per_file.verdict.message == "file 'a.thrift' was changed: struct 'User' was removed"


def test_given_self_referencing_struct_when_checking_then_comparison_terminates(
    tmp_path: Path,
) -> None:
    node = {
        "a.thrift": {
            "structs": {
                "Node": [
                    {"id": 1, "name": "value", "type": "i32"},
                    {"id": 2, "name": "next", "type": "Node", "optional": True},
                ]
            }
        }
    }

    outcome = _check(tmp_path, node, node)

    assert outcome.verdict.compatible


def test_given_generate_config_when_loading_defaults_then_check_uses_merged_mode(
    tmp_path: Path,
) -> None:
    runner = CliRunner()
    config_path = tmp_path / "idl-compat.yaml"
    result = runner.invoke(cli, ["generate-config", "--output", str(config_path)])
    assert result.exit_code == 0

    tree = {"a.thrift": {"enums": {"Status": {"ACTIVE": 1}}}}
    outcome = _check(tmp_path, tree, tree, config_path=str(config_path))

    assert outcome.mode == "merged"
    assert outcome.verdict.compatible


def test_given_module_invocation_when_requesting_help_then_commands_are_listed() -> None:
    project_root = Path(__file__).resolve().parents[3]
    env = {**os.environ, "PYTHONPATH": str(project_root / "src")}

    completed = subprocess.run(
        [sys.executable, "-m", "idl_compat_checker", "--help"],
        cwd=project_root,
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )

    assert completed.returncode == 0
    assert "check" in completed.stdout
    assert "generate-config" in completed.stdout
