"""Check execution use-case service."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from pathlib import Path

from idl_compat_checker.compatibility_checking import (
    ComparisonPolicy,
    CompatibilityVerdict,
    ModelInvariantError,
    check_documents,
    check_files_pairwise,
)
from idl_compat_checker.configuration import (
    COMPARISON_MODES,
    CheckConfiguration,
    ConfigurationError,
    load_configuration,
)
from idl_compat_checker.declaration_model import (
    DeclarationTreeError,
    Document,
    ParsedFile,
    load_declaration_trees,
)
from idl_compat_checker.document_merging import DuplicateDeclarationError, merge_documents

from .run_contracts import CheckArtifacts, CheckOutcome, CheckRequest

logger = logging.getLogger(__name__)


class CheckExecutionError(Exception):
    """Raised when a check cannot be completed."""


def execute_compatibility_check(request: CheckRequest) -> CheckOutcome:
    """Load both declaration trees and check new against old."""
    artifacts = _load_check_artifacts(request)
    configuration = artifacts.configuration
    policy = ComparisonPolicy(check_throws=configuration.comparison.check_throws)
    try:
        if configuration.comparison.mode == "per_file":
            verdict = check_files_pairwise(artifacts.old_files, artifacts.new_files, policy)
        else:
            old_document, new_document = _merge_sides(
                artifacts.old_files,
                artifacts.new_files,
                parallel=configuration.merging.parallel,
            )
            verdict = check_documents(old_document, new_document, policy)
    except (DuplicateDeclarationError, ModelInvariantError) as exc:
        raise CheckExecutionError(str(exc)) from exc

    _log_verdict(verdict)
    return CheckOutcome(
        verdict=verdict,
        mode=configuration.comparison.mode,
        old_file_count=len(artifacts.old_files),
        new_file_count=len(artifacts.new_files),
    )


def resolve_configuration(request: CheckRequest) -> CheckConfiguration:
    """Combine the configuration file with the request's explicit settings."""
    configuration = (
        load_configuration(request.config_path) if request.config_path else CheckConfiguration()
    )
    if request.include_root is not None:
        include_root = Path(request.include_root)
        if not include_root.is_dir():
            raise ConfigurationError(f"include_root is not a directory: {include_root}")
        configuration = replace(configuration, include_root=include_root)
    if request.mode is not None:
        if request.mode not in COMPARISON_MODES:
            raise ConfigurationError(
                f"comparison.mode must be one of {', '.join(COMPARISON_MODES)}, "
                f"got '{request.mode}'."
            )
        configuration = replace(
            configuration, comparison=replace(configuration.comparison, mode=request.mode)
        )
    if request.check_throws is not None:
        configuration = replace(
            configuration,
            comparison=replace(configuration.comparison, check_throws=request.check_throws),
        )
    if request.parallel_merge is not None:
        configuration = replace(
            configuration, merging=replace(configuration.merging, parallel=request.parallel_merge)
        )
    return configuration


def _load_check_artifacts(request: CheckRequest) -> CheckArtifacts:
    try:
        configuration = resolve_configuration(request)
        old_files = load_declaration_trees(
            _resolve_tree_path(configuration.include_root, request.old_tree_path)
        )
        new_files = load_declaration_trees(
            _resolve_tree_path(configuration.include_root, request.new_tree_path)
        )
    except (ConfigurationError, DeclarationTreeError, OSError) as exc:
        raise CheckExecutionError(str(exc)) from exc
    logger.debug("loaded %d old and %d new parsed file(s)", len(old_files), len(new_files))
    return CheckArtifacts(configuration=configuration, old_files=old_files, new_files=new_files)


def _resolve_tree_path(include_root: Path | None, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if include_root is not None and not candidate.is_absolute():
        return include_root / candidate
    return candidate


def _merge_sides(
    old_files: tuple[ParsedFile, ...],
    new_files: tuple[ParsedFile, ...],
    *,
    parallel: bool,
) -> tuple[Document, Document]:
    if not parallel:
        return merge_documents(old_files), merge_documents(new_files)
    with ThreadPoolExecutor(max_workers=2) as executor:
        old_future = executor.submit(merge_documents, old_files)
        new_future = executor.submit(merge_documents, new_files)
        return old_future.result(), new_future.result()


def _log_verdict(verdict: CompatibilityVerdict) -> None:
    if verdict.compatible:
        logger.info("new schema is backward compatible")
    else:
        logger.info("new schema is not backward compatible: %s", verdict.message)
