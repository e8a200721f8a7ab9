"""Declaration tree loading service.

Reads the output of the external IDL parser (one YAML or JSON document per
schema version, keyed by source file path) and builds immutable declaration
models from it. Every structural problem found while building the models is
reported as a ``DeclarationTreeError`` naming the offending location.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .declaration_models import (
    CONTAINER_KINDS,
    VOID,
    Constant,
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

_FILE_SECTIONS = frozenset(
    {
        "namespaces",
        "includes",
        "typedefs",
        "constants",
        "enums",
        "structs",
        "exceptions",
        "unions",
        "services",
    }
)
_FIELD_KEYS = frozenset({"id", "name", "type", "optional", "default"})
_METHOD_KEYS = frozenset({"returns", "arguments", "throws", "oneway"})
_QUOTING_HINT = "quote YAML words such as on, off, yes and no"


class DeclarationTreeError(Exception):
    """Raised when a declaration tree is missing data or malformed."""


def load_declaration_trees(tree_path: Path | str) -> tuple[ParsedFile, ...]:
    """Load every parsed file contained in one declaration tree document."""
    path = Path(tree_path)
    if not path.exists():
        raise DeclarationTreeError(f"Declaration tree file not found: {path}")

    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise DeclarationTreeError(f"Failed to parse declaration tree {path}: {exc}") from exc

    if not isinstance(parsed, Mapping):
        raise DeclarationTreeError(f"Declaration tree root must be a mapping: {path}")
    files = parsed.get("files")
    if not isinstance(files, Mapping) or not files:
        raise DeclarationTreeError(f"Declaration tree must define at least one file: {path}")

    return tuple(
        build_parsed_file(_require_key(file_path, f"{path}: file"), node)
        for file_path, node in files.items()
    )


def build_parsed_file(file_path: str, node: Any) -> ParsedFile:
    """Build one parsed file from its raw declaration tree."""
    if node is None:
        node = {}
    section = _require_mapping(node, file_path)
    unknown = set(section) - _FILE_SECTIONS
    if unknown:
        raise DeclarationTreeError(
            f"{file_path}: unknown sections {', '.join(sorted(map(str, unknown)))}."
        )

    return ParsedFile(
        path=file_path,
        namespaces=_build_namespaces(section.get("namespaces"), file_path),
        typedefs=_build_named(section.get("typedefs"), f"{file_path}: typedef", _build_typedef),
        constants=_build_named(
            section.get("constants"), f"{file_path}: constant", _build_constant
        ),
        enums=_build_named(section.get("enums"), f"{file_path}: enum", _build_enum),
        structs=_build_named(section.get("structs"), f"{file_path}: struct", _build_struct),
        exceptions=_build_named(
            section.get("exceptions"), f"{file_path}: exception", _build_struct
        ),
        unions=_build_named(section.get("unions"), f"{file_path}: union", _build_struct),
        services=_build_named(section.get("services"), f"{file_path}: service", _build_service),
    )


def build_type(node: Any, location: str) -> Type:
    """Build a type from a bare type name or a ``{name, key, value}`` mapping."""
    if isinstance(node, str):
        name = node.strip()
        if not name:
            raise DeclarationTreeError(f"{location}: type name must not be empty.")
        if name in CONTAINER_KINDS:
            raise DeclarationTreeError(f"{location}: {name} type requires element types.")
        return Type(name=name)
    if isinstance(node, bool):
        raise DeclarationTreeError(f"{location}: type name must be a string; {_QUOTING_HINT}.")

    section = _require_mapping(node, location)
    name = _require_name(section.get("name"), f"{location} type")
    key_node = section.get("key")
    value_node = section.get("value")
    if name not in CONTAINER_KINDS:
        if key_node is not None or value_node is not None:
            raise DeclarationTreeError(f"{location}: {name} type must not have element types.")
        return Type(name=name)

    if value_node is None:
        raise DeclarationTreeError(f"{location}: {name} type requires a value type.")
    if name == "map":
        if key_node is None:
            raise DeclarationTreeError(f"{location}: map type requires a key type.")
        return Type(
            name=name,
            key=build_type(key_node, f"{location} key"),
            value=build_type(value_node, f"{location} value"),
        )
    if key_node is not None:
        raise DeclarationTreeError(f"{location}: {name} type must not have a key type.")
    return Type(name=name, value=build_type(value_node, f"{location} value"))


def build_literal(node: Any, location: str) -> Literal:
    """Build a literal from its raw tree value."""
    if isinstance(node, bool | int | float | str):
        return LiteralScalar(value=node)
    if isinstance(node, Sequence):
        return LiteralList(
            items=tuple(
                build_literal(item, f"{location}[{index}]") for index, item in enumerate(node)
            )
        )
    if isinstance(node, Mapping):
        if set(node) == {"identifier"}:
            return IdentifierReference(name=_require_name(node["identifier"], location))
        if set(node) == {"map"}:
            return LiteralMap(entries=_build_map_entries(node["map"], location))
    raise DeclarationTreeError(f"{location}: unsupported literal value {node!r}.")


def _build_map_entries(node: Any, location: str) -> tuple[tuple[Literal, Literal], ...]:
    if isinstance(node, Mapping):
        pairs: list[Any] = [[key, value] for key, value in node.items()]
    elif isinstance(node, Sequence) and not isinstance(node, str):
        pairs = list(node)
    else:
        raise DeclarationTreeError(f"{location}: map literal must be a mapping or pair list.")

    entries: list[tuple[Literal, Literal]] = []
    for index, pair in enumerate(pairs):
        if not isinstance(pair, Sequence) or isinstance(pair, str) or len(pair) != 2:
            raise DeclarationTreeError(f"{location}: map entry {index} must be a key/value pair.")
        entries.append(
            (
                build_literal(pair[0], f"{location} key {index}"),
                build_literal(pair[1], f"{location} value {index}"),
            )
        )
    return tuple(entries)


def _build_namespaces(value: Any, file_path: str) -> dict[str, str]:
    if value is None:
        return {}
    section = _require_mapping(value, f"{file_path}: namespaces")
    namespaces: dict[str, str] = {}
    for raw_language, namespace in section.items():
        language = _require_key(raw_language, f"{file_path}: namespace")
        namespaces[language] = _require_name(namespace, f"{file_path}: namespace {language}")
    return namespaces


def _build_named(value: Any, location: str, builder) -> dict[str, Any]:
    if value is None:
        return {}
    section = _require_mapping(value, location)
    built: dict[str, Any] = {}
    for raw_name, node in section.items():
        name = _require_key(raw_name, location)
        built[name] = builder(name, node, f"{location} '{name}'")
    return built


def _build_typedef(name: str, node: Any, location: str) -> Typedef:
    return Typedef(name=name, type=build_type(node, location))


def _build_constant(name: str, node: Any, location: str) -> Constant:
    section = _require_mapping(node, location)
    if "value" not in section:
        raise DeclarationTreeError(f"{location}: constant requires a value.")
    return Constant(
        name=name,
        type=build_type(section.get("type"), location),
        value=build_literal(section["value"], f"{location} value"),
    )


def _build_enum(name: str, node: Any, location: str) -> Enum:
    section = _require_mapping(node, location)
    values: dict[str, int] = {}
    for raw_enumerator, number in section.items():
        enumerator = _require_key(raw_enumerator, f"{location} value")
        values[enumerator] = _require_int(number, f"{location} value '{enumerator}'")
    return Enum(name=name, values=values)


def _build_struct(name: str, node: Any, location: str) -> Struct:
    return Struct(name=name, fields=_build_fields(node, location, label="field"))


def _build_service(name: str, node: Any, location: str) -> Service:
    section = _require_mapping(node, location)
    extends = section.get("extends")
    methods_node = section.get("methods") or {}
    methods = _build_named(
        _require_mapping(methods_node, f"{location} methods"), f"{location} method", _build_method
    )
    return Service(
        name=name,
        methods=methods,
        extends=None if extends is None else _require_name(extends, f"{location} extends"),
    )


def _build_method(name: str, node: Any, location: str) -> Method:
    section = _require_mapping(node or {}, location)
    unknown = set(section) - _METHOD_KEYS
    if unknown:
        raise DeclarationTreeError(
            f"{location}: unknown keys {', '.join(sorted(map(str, unknown)))}."
        )
    returns = section.get("returns")
    oneway = section.get("oneway", False)
    if not isinstance(oneway, bool):
        raise DeclarationTreeError(f"{location}: oneway must be a boolean.")
    return Method(
        name=name,
        return_type=VOID if returns is None else build_type(returns, f"{location} return"),
        arguments=_build_fields(section.get("arguments"), location, label="argument"),
        throws=_build_fields(section.get("throws"), location, label="exception"),
        oneway=oneway,
    )


def _build_fields(value: Any, location: str, *, label: str) -> tuple[Field, ...]:
    if value is None:
        return ()
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise DeclarationTreeError(f"{location}: {label} list must be a sequence.")

    fields: list[Field] = []
    seen_ids: set[int] = set()
    for index, node in enumerate(value):
        field = _build_field(node, f"{location} {label} {index}")
        if field.id in seen_ids:
            raise DeclarationTreeError(f"{location}: duplicate {label} id {field.id}.")
        seen_ids.add(field.id)
        fields.append(field)
    return tuple(fields)


def _build_field(node: Any, location: str) -> Field:
    section = _require_mapping(node, location)
    unknown = set(section) - _FIELD_KEYS
    if unknown:
        raise DeclarationTreeError(
            f"{location}: unknown keys {', '.join(sorted(map(str, unknown)))}."
        )
    name = _require_name(section.get("name"), f"{location} name")
    optional = section.get("optional", False)
    if not isinstance(optional, bool):
        raise DeclarationTreeError(f"{location}: optional must be a boolean.")
    default = section.get("default")
    return Field(
        id=_require_int(section.get("id"), f"{location} id"),
        name=name,
        type=build_type(section.get("type"), f"{location} '{name}'"),
        optional=optional,
        default=None if default is None else build_literal(default, f"{location} default"),
    )


def _require_mapping(value: Any, location: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise DeclarationTreeError(f"{location}: expected a mapping.")
    return value


def _require_key(value: Any, location: str) -> str:
    if not isinstance(value, str):
        raise DeclarationTreeError(
            f"{location}: name {value!r} must be a string; {_QUOTING_HINT}."
        )
    return value


def _require_name(value: Any, location: str) -> str:
    if not isinstance(value, str):
        hint = f"; {_QUOTING_HINT}" if isinstance(value, bool) else ""
        raise DeclarationTreeError(f"{location} must be a string{hint}.")
    stripped = value.strip()
    if not stripped:
        raise DeclarationTreeError(f"{location} must not be empty.")
    return stripped


def _require_int(value: Any, location: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise DeclarationTreeError(f"{location} must be an integer.")
    return value
