"""Compatibility checks over the sample declaration trees."""

from __future__ import annotations

from pathlib import Path

from idl_compat_checker.compatibility_checking import check_documents, check_files_pairwise
from idl_compat_checker.declaration_model import load_declaration_trees
from idl_compat_checker.document_merging import merge_documents


def _samples_dir() -> Path:
    return Path(__file__).resolve().parents[3] / "samples"


def _load(name: str):
    return load_declaration_trees(_samples_dir() / name)


def test_additive_sample_revision_is_compatible() -> None:
    old = merge_documents(_load("user-service-v1.yaml"))
    new = merge_documents(_load("user-service-v2.yaml"))

    assert check_documents(old, new).compatible


def test_reverting_the_additive_revision_is_incompatible() -> None:
    old = merge_documents(_load("user-service-v2.yaml"))
    new = merge_documents(_load("user-service-v1.yaml"))

    verdict = check_documents(old, new)

    assert verdict.message == (
        "service 'UserService' was changed: method 'list_users' was changed: "
        "argument 'page' was removed"
    )


def test_breaking_sample_revision_reports_first_violation() -> None:
    old = merge_documents(_load("user-service-v1.yaml"))
    new = merge_documents(_load("user-service-v3.yaml"))

    verdict = check_documents(old, new)

    assert verdict.message == (
        "service 'UserService' was changed: method 'list_users' was changed: "
        "argument 'page_size' type was changed: i32 -> i64"
    )


def test_sample_trees_compare_file_by_file() -> None:
    verdict = check_files_pairwise(_load("user-service-v1.yaml"), _load("user-service-v3.yaml"))

    assert verdict.message == (
        "file 'user.thrift' was changed: service 'UserService' was changed: "
        "method 'list_users' was changed: argument 'page_size' type was changed: i32 -> i64"
    )
