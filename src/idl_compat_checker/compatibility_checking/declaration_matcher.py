"""Pairing of old and new declarations by name."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .violations import Violation, ViolationKind


@dataclass(frozen=True)
class DeclarationPair:
    """Old declaration and its new counterpart, if any."""

    kind: str
    name: str
    old: Any
    new: Any | None

    @property
    def removed(self) -> bool:
        """Return True when the old declaration has no new counterpart."""
        return self.new is None


def match_declarations(
    kind: str,
    old: Mapping[str, Any],
    new: Mapping[str, Any],
    *,
    is_replacement: Callable[[Any, Any], bool] | None = None,
) -> tuple[DeclarationPair, ...]:
    """Pair old declarations with new ones of the same name, in old-side order.

    Names are compared exactly and case-sensitively. New-only declarations are
    left out. When ``is_replacement`` is given, old declarations without a
    same-named counterpart are paired one-to-one with new-only declarations
    the predicate accepts, pairing as many of them as possible.
    """
    replacements: dict[str, Any] = {}
    if is_replacement is not None:
        replacements = _match_replacements(old, new, is_replacement)
    return tuple(
        DeclarationPair(
            kind=kind,
            name=name,
            old=declaration,
            new=new[name] if name in new else replacements.get(name),
        )
        for name, declaration in old.items()
    )


def removal_violation(pair: DeclarationPair) -> Violation:
    """Describe an unmatched old declaration."""
    kind = (
        ViolationKind.METHOD_REMOVED if pair.kind == "method" else ViolationKind.DECLARATION_REMOVED
    )
    return Violation(kind=kind, detail=f"{pair.kind} '{pair.name}' was removed")


def _match_replacements(
    old: Mapping[str, Any],
    new: Mapping[str, Any],
    is_replacement: Callable[[Any, Any], bool],
) -> dict[str, Any]:
    new_only = [name for name in new if name not in old]
    candidates = {
        name: [
            candidate for candidate in new_only if is_replacement(declaration, new[candidate])
        ]
        for name, declaration in old.items()
        if name not in new
    }
    claimed_by: dict[str, str] = {}
    for name in candidates:
        _claim(name, candidates, claimed_by, set())
    return {name: new[candidate] for candidate, name in claimed_by.items()}


def _claim(
    name: str,
    candidates: Mapping[str, list[str]],
    claimed_by: dict[str, str],
    visited: set[str],
) -> bool:
    # Augmenting path: a claimed candidate is taken over when its holder can move.
    for candidate in candidates[name]:
        if candidate in visited:
            continue
        visited.add(candidate)
        holder = claimed_by.get(candidate)
        if holder is None or _claim(holder, candidates, claimed_by, visited):
            claimed_by[candidate] = name
            return True
    return False
