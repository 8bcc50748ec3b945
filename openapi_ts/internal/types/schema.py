"""
Узлы схем документа.

Сырые словари схем разбираются один раз на границе документа в явный
tagged union: ссылка (`ReferenceNode`) или inline-схема (`InlineNode`) с
дискриминатором `kind`.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

COMBINATORS = ("allOf", "oneOf", "anyOf")


class SchemaKind(str, Enum):
    COMBINED = "combined"
    INTEGER = "integer"
    STRING = "string"
    FILE = "file"
    ARRAY = "array"
    OBJECT = "object"
    OTHER = "other"


class ReferenceNode(BaseModel):
    ref: str


class InlineNode(BaseModel):
    kind: SchemaKind

    combinator: Optional[str] = None
    members: List[Optional["SchemaNode"]] = []

    enum: Optional[List[Any]] = None
    items: Union["SchemaNode", List[Optional["SchemaNode"]], None] = None
    properties: Dict[str, Optional["SchemaNode"]] = {}
    additional_properties: Union[bool, "SchemaNode", None] = None

    # Литеральные имена типов для OTHER: "boolean", ["string", "null"], ...
    type_names: List[str] = []

    description: Optional[str] = None
    deprecated: bool = False


SchemaNode = Union[ReferenceNode, InlineNode]

InlineNode.model_rebuild()

_KINDS = {
    "integer": SchemaKind.INTEGER,
    "string": SchemaKind.STRING,
    "file": SchemaKind.FILE,
    "array": SchemaKind.ARRAY,
    "object": SchemaKind.OBJECT,
}


def is_ref(raw: Any) -> bool:
    """Является ли сырой объект ссылкой"""
    return isinstance(raw, dict) and bool(raw.get("$ref"))


def parse_schema(raw: Any) -> Optional[SchemaNode]:
    """Разбор сырой схемы в узел; не-словарь считается отсутствующей схемой"""
    if not isinstance(raw, dict):
        return None

    if is_ref(raw):
        return ReferenceNode(ref=str(raw["$ref"]))

    description = raw.get("description")
    common = {
        "description": description if isinstance(description, str) else None,
        "deprecated": bool(raw.get("deprecated")),
    }

    for combinator in COMBINATORS:
        members = raw.get(combinator)
        if isinstance(members, list):
            return InlineNode(
                kind=SchemaKind.COMBINED,
                combinator=combinator,
                members=[parse_schema(member) for member in members],
                **common,
            )

    schema_type = raw.get("type")
    kind = _KINDS.get(schema_type) if isinstance(schema_type, str) else None

    if kind is None:
        node = InlineNode(kind=SchemaKind.OTHER, **common)

        if isinstance(schema_type, list):
            node.type_names = [str(name) for name in schema_type]
        elif schema_type:
            node.type_names = [str(schema_type)]
    else:
        node = InlineNode(kind=kind, **common)

    enum = raw.get("enum")
    if isinstance(enum, list):
        node.enum = enum

    items = raw.get("items")
    if isinstance(items, list):
        node.items = [parse_schema(item) for item in items]
    else:
        node.items = parse_schema(items)

    properties = raw.get("properties")
    if isinstance(properties, dict):
        node.properties = {
            str(key): parse_schema(value) for key, value in properties.items()
        }

    additional = raw.get("additionalProperties")
    if additional is True:
        node.additional_properties = True
    elif isinstance(additional, dict):
        node.additional_properties = parse_schema(additional)

    return node
