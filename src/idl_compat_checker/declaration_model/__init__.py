"""Declaration model exports."""

from .declaration_models import (
    CONTAINER_KINDS,
    DECLARATION_KINDS,
    VOID,
    Constant,
    Document,
    Enum,
    Field,
    IdentifierReference,
    Literal,
    LiteralList,
    LiteralMap,
    LiteralScalar,
    Method,
    ParsedFile,
    Service,
    Struct,
    Type,
    Typedef,
)
from .tree_loader import (
    DeclarationTreeError,
    build_literal,
    build_parsed_file,
    build_type,
    load_declaration_trees,
)

__all__ = [
    "CONTAINER_KINDS",
    "DECLARATION_KINDS",
    "VOID",
    "Constant",
    "Document",
    "Enum",
    "Field",
    "IdentifierReference",
    "Literal",
    "LiteralList",
    "LiteralMap",
    "LiteralScalar",
    "Method",
    "ParsedFile",
    "Service",
    "Struct",
    "Type",
    "Typedef",
    "DeclarationTreeError",
    "build_literal",
    "build_parsed_file",
    "build_type",
    "load_declaration_trees",
]
