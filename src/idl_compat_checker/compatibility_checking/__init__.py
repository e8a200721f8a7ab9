"""Compatibility checking domain exports."""

from .declaration_matcher import DeclarationPair, match_declarations, removal_violation
from .document_checker import check_documents, check_files_pairwise
from .structural_comparator import (
    DEFAULT_POLICY,
    ComparisonPolicy,
    ModelInvariantError,
    compare_enum,
    compare_field,
    compare_fields,
    compare_method,
    compare_service,
    compare_struct,
    compare_types,
)
from .violations import CompatibilityVerdict, Violation, ViolationKind

__all__ = [
    "CompatibilityVerdict",
    "ComparisonPolicy",
    "DEFAULT_POLICY",
    "DeclarationPair",
    "ModelInvariantError",
    "Violation",
    "ViolationKind",
    "check_documents",
    "check_files_pairwise",
    "compare_enum",
    "compare_field",
    "compare_fields",
    "compare_method",
    "compare_service",
    "compare_struct",
    "compare_types",
    "match_declarations",
    "removal_violation",
]
