"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    COMPARISON_MODES,
    CheckConfiguration,
    ComparisonSettings,
    MergingSettings,
)

_TOP_LEVEL_KEYS = frozenset({"include_root", "comparison", "merging"})


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> CheckConfiguration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    unknown = set(parsed) - _TOP_LEVEL_KEYS
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration sections: {', '.join(sorted(map(str, unknown)))}."
        )

    return CheckConfiguration(
        path=path,
        include_root=_parse_include_root(parsed.get("include_root"), path.parent),
        comparison=_parse_comparison_section(parsed.get("comparison")),
        merging=_parse_merging_section(parsed.get("merging")),
    )


def _parse_include_root(value: Any, base_path: Path) -> Path | None:
    if value is None:
        return None
    raw_path = _require_non_empty_string(value, "include_root")
    include_root = _resolve_path(base_path, raw_path)
    if not include_root.is_dir():
        raise ConfigurationError(f"include_root is not a directory: {include_root}")
    return include_root


def _parse_comparison_section(value: Any) -> ComparisonSettings:
    section = _optional_mapping(value, "comparison")
    mode = _require_non_empty_string(section.get("mode", "merged"), "comparison.mode").lower()
    if mode not in COMPARISON_MODES:
        raise ConfigurationError(
            f"comparison.mode must be one of {', '.join(COMPARISON_MODES)}, got '{mode}'."
        )
    check_throws = _require_bool(section.get("check_throws", False), "comparison.check_throws")
    return ComparisonSettings(mode=mode, check_throws=check_throws)


def _parse_merging_section(value: Any) -> MergingSettings:
    section = _optional_mapping(value, "merging")
    parallel = _require_bool(section.get("parallel", False), "merging.parallel")
    return MergingSettings(parallel=parallel)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value
