"""Declaration model entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

CONTAINER_KINDS = frozenset({"map", "list", "set"})


@dataclass(frozen=True)
class LiteralScalar:
    """Scalar literal (string, number or boolean)."""

    value: str | int | float | bool


@dataclass(frozen=True)
class LiteralList:
    """List or set literal."""

    items: tuple[Literal, ...]


@dataclass(frozen=True)
class LiteralMap:
    """Map literal as ordered key/value pairs."""

    entries: tuple[tuple[Literal, Literal], ...]


@dataclass(frozen=True)
class IdentifierReference:
    """Reference to a named constant or enumerator."""

    name: str


Literal = LiteralScalar | LiteralList | LiteralMap | IdentifierReference


@dataclass(frozen=True)
class Type:
    """Type reference; containers carry their element types."""

    name: str
    key: Type | None = None
    value: Type | None = None

    @property
    def is_container(self) -> bool:
        """Return True for map, list and set types."""
        return self.name in CONTAINER_KINDS

    def __str__(self) -> str:
        if self.name == "map" and self.key is not None and self.value is not None:
            return f"map<{self.key},{self.value}>"
        if self.is_container and self.value is not None:
            return f"{self.name}<{self.value}>"
        return self.name


VOID = Type(name="void")


@dataclass(frozen=True)
class Field:
    """Struct member or method argument."""

    id: int
    name: str
    type: Type
    optional: bool = False
    default: Literal | None = None


@dataclass(frozen=True)
class Struct:
    """Struct, exception or union declaration."""

    name: str
    fields: tuple[Field, ...]


@dataclass(frozen=True)
class Method:
    """Service method."""

    name: str
    return_type: Type = VOID
    arguments: tuple[Field, ...] = ()
    throws: tuple[Field, ...] = ()
    oneway: bool = False


@dataclass(frozen=True)
class Service:
    """Service declaration with name-indexed methods."""

    name: str
    methods: Mapping[str, Method]
    extends: str | None = None


@dataclass(frozen=True)
class Typedef:
    """Type alias declaration."""

    name: str
    type: Type


@dataclass(frozen=True)
class Constant:
    """Constant declaration."""

    name: str
    type: Type
    value: Literal


@dataclass(frozen=True)
class Enum:
    """Enum declaration; enumerator name to integer value."""

    name: str
    values: Mapping[str, int]


@dataclass(frozen=True)
class ParsedFile:
    """Declaration tree for one parsed IDL source file."""

    path: str
    namespaces: Mapping[str, str] = field(default_factory=dict)
    typedefs: Mapping[str, Typedef] = field(default_factory=dict)
    constants: Mapping[str, Constant] = field(default_factory=dict)
    enums: Mapping[str, Enum] = field(default_factory=dict)
    structs: Mapping[str, Struct] = field(default_factory=dict)
    exceptions: Mapping[str, Struct] = field(default_factory=dict)
    unions: Mapping[str, Struct] = field(default_factory=dict)
    services: Mapping[str, Service] = field(default_factory=dict)


@dataclass(frozen=True)
class Document:
    """Merged, name-indexed declarations of one schema version."""

    namespaces: Mapping[str, str] = field(default_factory=dict)
    typedefs: Mapping[str, Typedef] = field(default_factory=dict)
    constants: Mapping[str, Constant] = field(default_factory=dict)
    enums: Mapping[str, Enum] = field(default_factory=dict)
    structs: Mapping[str, Struct] = field(default_factory=dict)
    exceptions: Mapping[str, Struct] = field(default_factory=dict)
    unions: Mapping[str, Struct] = field(default_factory=dict)
    services: Mapping[str, Service] = field(default_factory=dict)


DECLARATION_KINDS: tuple[tuple[str, str], ...] = (
    ("typedefs", "typedef"),
    ("constants", "constant"),
    ("enums", "enum"),
    ("structs", "struct"),
    ("exceptions", "exception"),
    ("unions", "union"),
    ("services", "service"),
)
"""Document attribute name paired with the singular kind label."""
