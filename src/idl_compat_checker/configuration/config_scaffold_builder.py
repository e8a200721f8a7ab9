"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "idl-compat.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Configuration template for idl-compat-checker.
# Every setting is optional; the values below are the defaults.

# Directory that relative declaration tree paths are resolved against.
# include_root: "<OPTIONAL>"

comparison:
  # merged: merge all files of each side into one document, then compare.
  # per_file: compare each old file with the new file of the same base name.
  mode: merged
  # Also require thrown exceptions of each method to stay compatible.
  check_throws: false

merging:
  # Merge the old and new declaration trees concurrently.
  parallel: false
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with defaults and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
