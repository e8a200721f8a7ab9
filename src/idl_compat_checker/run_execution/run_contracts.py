"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass

from idl_compat_checker.compatibility_checking.violations import CompatibilityVerdict
from idl_compat_checker.configuration.runtime_settings import CheckConfiguration
from idl_compat_checker.declaration_model.declaration_models import ParsedFile


@dataclass(frozen=True)
class CheckRequest:
    """Input contract for one compatibility check.

    Settings left as ``None`` fall back to the configuration file, then to the
    built-in defaults.
    """

    old_tree_path: str
    new_tree_path: str
    config_path: str | None = None
    include_root: str | None = None
    mode: str | None = None
    check_throws: bool | None = None
    parallel_merge: bool | None = None


@dataclass(frozen=True)
class CheckOutcome:
    """Output contract for one completed check."""

    verdict: CompatibilityVerdict
    mode: str
    old_file_count: int
    new_file_count: int


@dataclass(frozen=True)
class CheckArtifacts:
    """Loaded domain artifacts required during check execution."""

    configuration: CheckConfiguration
    old_files: tuple[ParsedFile, ...]
    new_files: tuple[ParsedFile, ...]
