from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .models import (
    ArraySchema,
    ObjectSchema,
    PlaceholderSchema,
    PrimitiveSchema,
    RefSchema,
    SchemaNode,
)

OPEN_BRACKET = "«"
CLOSE_BRACKET = "»"

# Базовые имена, которые кодируют последовательность
SEQUENCE_BASES = ("List", "Set", "Array", "Collection", "Iterable")

ARGUMENT_TYPES = {
    "string": "string",
    "int": "number",
    "integer": "number",
    "long": "number",
    "short": "number",
    "double": "number",
    "float": "number",
    "number": "number",
    "bigdecimal": "number",
    "boolean": "boolean",
    "object": "any",
    "void": "void",
}


@dataclass(frozen=True)
class GenericName:
    """Разобранное имя определения вида Base«A,B»"""

    raw_name: str
    is_generic: bool = False
    base_name: str = ""
    type_params: List[str] = field(default_factory=list)

    @property
    def placeholders(self) -> List[str]:
        return [f"T{i}" for i in range(len(self.type_params))]

    @property
    def canonical_name(self) -> str:
        if not self.is_generic:
            return self.raw_name
        return f"{self.base_name}<{','.join(self.placeholders)}>"


def split_arguments(inner: str) -> List[str]:
    """Разбивает 'A,B«C,D»' на ['A', 'B«C,D»'] с учетом вложенности"""
    arguments = []
    depth = 0
    current = ""

    for char in inner:
        if char == OPEN_BRACKET:
            depth += 1
        elif char == CLOSE_BRACKET:
            depth -= 1
        elif char == "," and depth == 0:
            arguments.append(current.strip())
            current = ""
            continue
        current += char

    if current.strip():
        arguments.append(current.strip())

    return arguments


def decode(raw_name: str) -> GenericName:
    """Декодирование generic-имени"""
    start = raw_name.find(OPEN_BRACKET)
    if start <= 0 or not raw_name.endswith(CLOSE_BRACKET):
        return GenericName(raw_name=raw_name, base_name=raw_name)

    params = split_arguments(raw_name[start + 1 : -1])
    if not params:
        return GenericName(raw_name=raw_name, base_name=raw_name)

    return GenericName(
        raw_name=raw_name,
        is_generic=True,
        base_name=raw_name[:start],
        type_params=params,
    )


def sequence_item(name: str) -> Optional[str]:
    """'List«Pet»' -> 'Pet', иначе None"""
    decoded = decode(name)
    if (
        decoded.is_generic
        and decoded.base_name in SEQUENCE_BASES
        and len(decoded.type_params) == 1
    ):
        return decoded.type_params[0]
    return None


def type_expression(name: str, argument: bool = False) -> str:
    """TypeScript-выражение для имени: 'Result«List«Pet»»' -> 'Result<Array<Pet>>'"""
    decoded = decode(name)

    if not decoded.is_generic:
        if argument:
            return ARGUMENT_TYPES.get(name.lower(), name)
        return name

    base = "Array" if sequence_item(name) is not None else decoded.base_name
    return f"{base}<{','.join(type_expression(p, True) for p in decoded.type_params)}>"


def _argument_type(argument: str) -> Optional[str]:
    """TS-тип примитивного аргумента: 'long' -> 'number', иначе None"""
    if decode(argument).is_generic:
        return None
    return ARGUMENT_TYPES.get(argument.lower())


def is_primitive_argument(argument: str) -> bool:
    """'string', 'List«long»' - примитивные аргументы, 'Pet' - нет"""
    item = sequence_item(argument)
    while item is not None:
        argument, item = item, sequence_item(item)
    return _argument_type(argument) is not None


def _matches(node: SchemaNode, argument: str) -> bool:
    if isinstance(node, RefSchema):
        return node.name == argument

    if isinstance(node, PrimitiveSchema):
        argument_type = _argument_type(argument)
        return argument_type is not None and argument_type == ARGUMENT_TYPES.get(
            node.type
        )

    item = sequence_item(argument)
    if item is not None and isinstance(node, ArraySchema):
        return _matches(node.items, item)

    return False


def has_placeholders(node: SchemaNode) -> bool:
    """Есть ли в дереве схемы хотя бы один T0, T1, ..."""
    if isinstance(node, PlaceholderSchema):
        return True

    if isinstance(node, ArraySchema):
        return has_placeholders(node.items)

    if isinstance(node, ObjectSchema):
        children = list(node.properties.values())
        if node.additional_properties is not None:
            children.append(node.additional_properties)
        return any(map(has_placeholders, children))

    return False


def substitute_placeholders(node: SchemaNode, generic: GenericName) -> SchemaNode:
    """
    Заменяет в дереве схемы аргументы generic-типа на T0, T1, ...

    Замена структурная: подменяются ссылки на аргумент, примитивы того же
    TypeScript типа (Result«long» заменяет integer/number) и массивы таких
    узлов для аргументов вида List«X». Совпадение с частью другого имени
    невозможно.
    """
    mapping: Dict[str, str] = dict(zip(generic.type_params, generic.placeholders))
    return _substitute(node, mapping)


def _substitute(node: SchemaNode, mapping: Dict[str, str]) -> SchemaNode:
    for argument, placeholder in mapping.items():
        if _matches(node, argument):
            return PlaceholderSchema(name=placeholder)

    if isinstance(node, ArraySchema):
        return node.model_copy(update={"items": _substitute(node.items, mapping)})

    if isinstance(node, ObjectSchema):
        properties = {
            name: _substitute(prop, mapping) for name, prop in node.properties.items()
        }
        additional = node.additional_properties
        if additional is not None:
            additional = _substitute(additional, mapping)
        return node.model_copy(
            update={"properties": properties, "additional_properties": additional}
        )

    return node
