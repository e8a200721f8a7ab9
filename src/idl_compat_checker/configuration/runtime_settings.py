"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

COMPARISON_MODES = ("merged", "per_file")


@dataclass(frozen=True)
class ComparisonSettings:
    """How the old and new declaration trees are compared."""

    mode: str = "merged"
    check_throws: bool = False


@dataclass(frozen=True)
class MergingSettings:
    """How each side's parsed files are merged."""

    parallel: bool = False


@dataclass(frozen=True)
class CheckConfiguration:
    """Top-level configuration aggregate."""

    path: Path | None = None
    include_root: Path | None = None
    comparison: ComparisonSettings = field(default_factory=ComparisonSettings)
    merging: MergingSettings = field(default_factory=MergingSettings)
