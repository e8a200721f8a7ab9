"""Document merging service."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from idl_compat_checker.declaration_model.declaration_models import (
    DECLARATION_KINDS,
    Document,
    ParsedFile,
)

logger = logging.getLogger(__name__)


class DuplicateDeclarationError(Exception):
    """Raised when two files of one schema version declare the same name."""

    def __init__(self, kind: str, name: str, paths: tuple[str, str]) -> None:
        super().__init__(
            f"{kind} '{name}' is declared more than once ({paths[0]}, {paths[1]})"
        )
        self.kind = kind
        self.name = name
        self.paths = paths


def merge_documents(files: Sequence[ParsedFile]) -> Document:
    """Merge the parsed files of one schema version into a single document.

    Args:
      files: Declaration trees of every file belonging to the schema version.

    Returns:
      The merged, name-indexed document.

    Raises:
      DuplicateDeclarationError: If a name is declared twice within one kind.
    """
    namespaces = _merge_section(files, "namespaces", "namespace")
    merged = {
        attribute: _merge_section(files, attribute, kind) for attribute, kind in DECLARATION_KINDS
    }
    logger.debug(
        "merged %d file(s): %s",
        len(files),
        ", ".join(f"{len(merged[attribute])} {attribute}" for attribute, _ in DECLARATION_KINDS),
    )
    return Document(namespaces=namespaces, **merged)


def _merge_section(files: Sequence[ParsedFile], attribute: str, kind: str) -> dict[str, Any]:
    merged: dict[str, Any] = {}
    origins: dict[str, str] = {}
    for parsed_file in files:
        section: Mapping[str, Any] = getattr(parsed_file, attribute)
        for name, declaration in section.items():
            if name in merged:
                raise DuplicateDeclarationError(kind, name, (origins[name], parsed_file.path))
            merged[name] = declaration
            origins[name] = parsed_file.path
    return merged
