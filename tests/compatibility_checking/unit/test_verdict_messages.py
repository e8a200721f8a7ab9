"""Violation and verdict reporting tests."""

from __future__ import annotations

from idl_compat_checker.compatibility_checking.violations import (
    CompatibilityVerdict,
    Violation,
    ViolationKind,
)


def test_context_is_prefixed_outermost_first() -> None:
    violation = (
        Violation(kind=ViolationKind.TYPE_CHANGED, detail="i32 -> i64")
        .within("field 'z' type was changed")
        .within("method 'Y' was changed")
        .within("service 'X' was changed")
    )

    assert violation.context == (
        "service 'X' was changed",
        "method 'Y' was changed",
        "field 'z' type was changed",
    )
    assert violation.message == (
        "service 'X' was changed: method 'Y' was changed: field 'z' type was changed: i32 -> i64"
    )


def test_within_does_not_modify_the_original() -> None:
    violation = Violation(kind=ViolationKind.FIELD_REMOVED, detail="field 'bar' was removed")

    violation.within("struct 'Foo' was changed")

    assert violation.context == ()


def test_compatible_verdict_has_no_message() -> None:
    verdict = CompatibilityVerdict()

    assert verdict.compatible is True
    assert verdict.message is None


def test_incompatible_verdict_exposes_message() -> None:
    verdict = CompatibilityVerdict(
        violation=Violation(
            kind=ViolationKind.DECLARATION_REMOVED, detail="struct 'Foo' was removed"
        )
    )

    assert verdict.compatible is False
    assert verdict.message == "struct 'Foo' was removed"
