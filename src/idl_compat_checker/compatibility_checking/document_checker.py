"""Old-to-new compatibility checking service."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any

from idl_compat_checker.declaration_model.declaration_models import Document, ParsedFile
from idl_compat_checker.document_merging.document_merger import (
    DuplicateDeclarationError,
    merge_documents,
)

from .declaration_matcher import match_declarations, removal_violation
from .structural_comparator import (
    DEFAULT_POLICY,
    ComparisonPolicy,
    compare_enum,
    compare_service,
    compare_struct,
)
from .violations import CompatibilityVerdict, Violation, ViolationKind

logger = logging.getLogger(__name__)

_CHECKED_KINDS: tuple[tuple[str, str], ...] = (
    ("services", "service"),
    ("structs", "struct"),
    ("exceptions", "exception"),
    ("unions", "union"),
    ("enums", "enum"),
)


@dataclass
class _ComparisonState:
    """Per-run policy and outcomes of already compared declaration pairs."""

    policy: ComparisonPolicy
    outcomes: dict[tuple[str, str, str], Violation | None]


def check_documents(
    old: Document, new: Document, policy: ComparisonPolicy = DEFAULT_POLICY
) -> CompatibilityVerdict:
    """Check that ``new`` is backward compatible with ``old``.

    Declarations are walked kind by kind in old-side order and the first
    violation found is returned; nothing after it is examined.
    """
    state = _ComparisonState(policy=policy, outcomes={})
    for attribute, kind in _CHECKED_KINDS:
        violation = _check_kind(state, kind, getattr(old, attribute), getattr(new, attribute))
        if violation is not None:
            logger.debug("incompatible %s change: %s", kind, violation.message)
            return CompatibilityVerdict(violation=violation)
    logger.debug("compared %d declaration pair(s), no violation", len(state.outcomes))
    return CompatibilityVerdict()


def check_files_pairwise(
    old_files: Sequence[ParsedFile],
    new_files: Sequence[ParsedFile],
    policy: ComparisonPolicy = DEFAULT_POLICY,
) -> CompatibilityVerdict:
    """Check each old file against the new file with the same base name.

    Raises:
      DuplicateDeclarationError: If two files of one side share a base name.
    """
    new_by_name = _index_by_base_name(new_files)
    for base_name, old_file in _index_by_base_name(old_files).items():
        new_file = new_by_name.get(base_name)
        if new_file is None:
            return CompatibilityVerdict(
                violation=Violation(
                    kind=ViolationKind.FILE_REMOVED, detail=f"file '{base_name}' was removed"
                )
            )
        verdict = check_documents(merge_documents([old_file]), merge_documents([new_file]), policy)
        if verdict.violation is not None:
            return CompatibilityVerdict(
                violation=verdict.violation.within(f"file '{base_name}' was changed")
            )
    return CompatibilityVerdict()


def _check_kind(
    state: _ComparisonState,
    kind: str,
    old: Mapping[str, Any],
    new: Mapping[str, Any],
) -> Violation | None:
    # A renamed service pairs one-to-one with a compatible new-only service.
    is_replacement = _compatible_with(state, kind) if kind == "service" else None
    for pair in match_declarations(kind, old, new, is_replacement=is_replacement):
        if pair.removed:
            return removal_violation(pair)
        violation = _compare(state, kind, pair.old, pair.new)
        if violation is not None:
            return violation.within(f"{kind} '{pair.name}' was changed")
    return None


def _compatible_with(state: _ComparisonState, kind: str) -> Callable[[Any, Any], bool]:
    def is_compatible(old: Any, new: Any) -> bool:
        return _compare(state, kind, old, new) is None

    return is_compatible


def _compare(state: _ComparisonState, kind: str, old: Any, new: Any) -> Violation | None:
    key = (kind, old.name, new.name)
    if key not in state.outcomes:
        state.outcomes[key] = _compare_declaration(state.policy, kind, old, new)
    return state.outcomes[key]


def _compare_declaration(
    policy: ComparisonPolicy, kind: str, old: Any, new: Any
) -> Violation | None:
    if kind == "service":
        return compare_service(old, new, policy)
    if kind == "enum":
        return compare_enum(old, new)
    return compare_struct(old, new)


def _index_by_base_name(files: Sequence[ParsedFile]) -> dict[str, ParsedFile]:
    indexed: dict[str, ParsedFile] = {}
    for parsed_file in files:
        base_name = PurePath(parsed_file.path).name
        if base_name in indexed:
            raise DuplicateDeclarationError(
                "file", base_name, (indexed[base_name].path, parsed_file.path)
            )
        indexed[base_name] = parsed_file
    return indexed
