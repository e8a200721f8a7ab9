"""Compatibility checking domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ViolationKind(str, Enum):
    """Kinds of backward-incompatible change."""

    DECLARATION_REMOVED = "declaration_removed"
    FILE_REMOVED = "file_removed"
    METHOD_REMOVED = "method_removed"
    FIELD_REMOVED = "field_removed"
    FIELD_ID_CHANGED = "field_id_changed"
    TYPE_CHANGED = "type_changed"
    TYPE_CONTAINER_MISMATCH = "type_container_mismatch"
    REQUIREDNESS_TIGHTENED = "requiredness_tightened"
    ENUM_VALUE_REMOVED = "enum_value_removed"
    ENUM_VALUE_CHANGED = "enum_value_changed"


@dataclass(frozen=True)
class Violation:
    """First incompatibility found, with the context it was found in.

    ``context`` lists the enclosing elements from the outermost inwards; each
    caller on the way back up the comparison prefixes its own entry.
    """

    kind: ViolationKind
    detail: str
    context: tuple[str, ...] = ()

    def within(self, context: str) -> Violation:
        """Return a copy of this violation nested inside ``context``."""
        return Violation(kind=self.kind, detail=self.detail, context=(context, *self.context))

    @property
    def message(self) -> str:
        """Return the causal chain as one human-readable line."""
        return ": ".join((*self.context, self.detail))


@dataclass(frozen=True)
class CompatibilityVerdict:
    """Binary outcome of one old-to-new comparison."""

    violation: Violation | None = None

    @property
    def compatible(self) -> bool:
        """Return True when no violation was found."""
        return self.violation is None

    @property
    def message(self) -> str | None:
        """Return the violation message, or None when compatible."""
        return None if self.violation is None else self.violation.message
