"""Structural comparison of matched declarations.

Every ``compare_*`` function returns ``None`` when the new declaration can
stand in for the old one, or the first ``Violation`` found otherwise. Nested
violations are wrapped with the context of each enclosing element on the way
back up, so the returned violation already reads as a full causal chain
relative to the compared declaration.

Policy summary:

- fields and arguments are matched by numeric id; renames are allowed and
  new ids are allowed,
- types must match exactly, container element types included,
- a field may go from required to optional but not from optional to
  required,
- methods are matched by name; ``throws`` lists are only compared when
  ``ComparisonPolicy.check_throws`` is set.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from idl_compat_checker.declaration_model.declaration_models import (
    Enum,
    Field,
    Method,
    Service,
    Struct,
    Type,
)

from .declaration_matcher import match_declarations, removal_violation
from .violations import Violation, ViolationKind


class ModelInvariantError(Exception):
    """Raised when a declaration model breaks its own structural invariants."""


@dataclass(frozen=True)
class ComparisonPolicy:
    """Optional comparison rules."""

    check_throws: bool = False


DEFAULT_POLICY = ComparisonPolicy()


def compare_types(old: Type, new: Type) -> Violation | None:
    """Compare two types exactly, descending into container element types."""
    if old.is_container != new.is_container:
        return Violation(kind=ViolationKind.TYPE_CONTAINER_MISMATCH, detail=f"{old} -> {new}")
    if old.name != new.name:
        return Violation(kind=ViolationKind.TYPE_CHANGED, detail=f"{old} -> {new}")
    if not old.is_container:
        return None

    if old.name == "map":
        violation = compare_types(_element(old, "key"), _element(new, "key"))
        if violation is not None:
            return violation.within("map key type was changed")
        violation = compare_types(_element(old, "value"), _element(new, "value"))
        if violation is not None:
            return violation.within("map value type was changed")
        return None

    violation = compare_types(_element(old, "value"), _element(new, "value"))
    if violation is not None:
        return violation.within(f"{old.name} element type was changed")
    return None


def compare_field(old: Field, new: Field, *, label: str = "field") -> Violation | None:
    """Compare two fields that share the same id."""
    violation = compare_types(old.type, new.type)
    if violation is not None:
        return violation.within(f"{label} '{old.name}' type was changed")
    if old.optional and not new.optional:
        return Violation(
            kind=ViolationKind.REQUIREDNESS_TIGHTENED,
            detail=f"{label} '{old.name}' cannot be made required once optional",
        )
    return None


def compare_fields(
    old: Sequence[Field], new: Sequence[Field], *, label: str = "field"
) -> Violation | None:
    """Compare field lists matched by id; new-only ids are allowed."""
    new_by_id = {field.id: field for field in new}
    old_ids = {field.id for field in old}
    for old_field in old:
        new_field = new_by_id.get(old_field.id)
        if new_field is None:
            return _missing_field_violation(old_field, new, old_ids, label)
        violation = compare_field(old_field, new_field, label=label)
        if violation is not None:
            return violation
    return None


def compare_struct(old: Struct, new: Struct) -> Violation | None:
    """Compare two structs, exceptions or unions."""
    return compare_fields(old.fields, new.fields)


def compare_method(
    old: Method, new: Method, policy: ComparisonPolicy = DEFAULT_POLICY
) -> Violation | None:
    """Compare return type, arguments and, when enabled, thrown exceptions."""
    violation = compare_types(old.return_type, new.return_type)
    if violation is not None:
        return violation.within("return type was changed")
    violation = compare_fields(old.arguments, new.arguments, label="argument")
    if violation is not None:
        return violation
    if policy.check_throws:
        return compare_fields(old.throws, new.throws, label="exception")
    return None


def compare_service(
    old: Service, new: Service, policy: ComparisonPolicy = DEFAULT_POLICY
) -> Violation | None:
    """Compare services method by method; the service name is not compared."""
    for pair in match_declarations("method", old.methods, new.methods):
        if pair.removed:
            return removal_violation(pair)
        violation = compare_method(pair.old, pair.new, policy)
        if violation is not None:
            return violation.within(f"method '{pair.name}' was changed")
    return None


def compare_enum(old: Enum, new: Enum) -> Violation | None:
    """Compare enumerators; new enumerators are allowed."""
    for name, value in old.values.items():
        if name not in new.values:
            return Violation(
                kind=ViolationKind.ENUM_VALUE_REMOVED, detail=f"value '{name}' was removed"
            )
        if new.values[name] != value:
            return Violation(
                kind=ViolationKind.ENUM_VALUE_CHANGED,
                detail=f"value '{name}' was changed: {value} -> {new.values[name]}",
            )
    return None


def _missing_field_violation(
    old_field: Field, new: Sequence[Field], old_ids: set[int], label: str
) -> Violation:
    moved = next(
        (field for field in new if field.name == old_field.name and field.id not in old_ids),
        None,
    )
    if moved is not None:
        return Violation(
            kind=ViolationKind.FIELD_ID_CHANGED,
            detail=f"{label} '{old_field.name}' ID was changed: {old_field.id} -> {moved.id}",
        )
    return Violation(
        kind=ViolationKind.FIELD_REMOVED, detail=f"{label} '{old_field.name}' was removed"
    )


def _element(container: Type, position: str) -> Type:
    element = getattr(container, position)
    if element is None:
        raise ModelInvariantError(f"{container.name} type is missing its {position} type")
    return element
