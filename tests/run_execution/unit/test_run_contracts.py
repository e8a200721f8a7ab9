"""Tests for run execution domain entities."""

from __future__ import annotations

from idl_compat_checker.compatibility_checking.violations import (
    CompatibilityVerdict,
    Violation,
    ViolationKind,
)
from idl_compat_checker.configuration.runtime_settings import CheckConfiguration
from idl_compat_checker.declaration_model.declaration_models import ParsedFile
from idl_compat_checker.run_execution.run_contracts import (
    CheckArtifacts,
    CheckOutcome,
    CheckRequest,
)


def test_check_request_defers_settings_to_configuration() -> None:
    request = CheckRequest(old_tree_path="old.yaml", new_tree_path="new.yaml")

    assert request.config_path is None
    assert request.include_root is None
    assert request.mode is None
    assert request.check_throws is None
    assert request.parallel_merge is None


def test_check_outcome_exposes_verdict_and_file_counts() -> None:
    violation = Violation(kind=ViolationKind.DECLARATION_REMOVED, detail="struct 'Foo' was removed")
    outcome = CheckOutcome(
        verdict=CompatibilityVerdict(violation=violation),
        mode="merged",
        old_file_count=2,
        new_file_count=1,
    )

    assert not outcome.verdict.compatible
    assert outcome.verdict.message == "struct 'Foo' was removed"
    assert outcome.old_file_count == 2


def test_check_artifacts_hold_loaded_inputs() -> None:
    artifacts = CheckArtifacts(
        configuration=CheckConfiguration(),
        old_files=(ParsedFile(path="a.thrift"),),
        new_files=(ParsedFile(path="a.thrift"), ParsedFile(path="b.thrift")),
    )

    assert artifacts.configuration.comparison.mode == "merged"
    assert [parsed.path for parsed in artifacts.new_files] == ["a.thrift", "b.thrift"]
