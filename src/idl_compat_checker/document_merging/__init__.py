"""Document merging exports."""

from .document_merger import DuplicateDeclarationError, merge_documents

__all__ = [
    "DuplicateDeclarationError",
    "merge_documents",
]
