import logging
from typing import Optional

from ..utils import property_key, string_literal
from .generic_names import type_expression
from .models import (
    ArraySchema,
    EnumSchema,
    ObjectSchema,
    PlaceholderSchema,
    PrimitiveSchema,
    RefSchema,
    SchemaNode,
)

logger = logging.getLogger(__name__)

PRIMITIVES = {
    "boolean": "boolean",
    "integer": "number",
    "number": "number",
    "string": "string",
    "file": "File",
}

ANY_OBJECT = "{ [key: string]: any }"
INDENT = "  "


class TypeResolver:
    """Резолвер SchemaNode -> TypeScript выражение типа"""

    def resolve(
        self, node: SchemaNode, binding: Optional[str] = None, required: bool = True
    ) -> str:
        """
        Выражение типа для узла схемы.

        Если передан binding, результат оформляется как объявление поля или
        параметра: ``name?: type`` (``?`` только для необязательных).
        Объект без properties и additionalProperties с binding становится
        именованным алиасом ``export type name = { [key: string]: any };``.
        """
        if binding is None:
            return self.expression(node)

        if (
            isinstance(node, ObjectSchema)
            and not node.properties
            and node.additional_properties is None
        ):
            return self.declare(binding, node)

        return self._field(binding, node, required, depth=0)

    def expression(self, node: SchemaNode, depth: int = 0) -> str:
        if isinstance(node, PrimitiveSchema):
            return PRIMITIVES[node.type]

        if isinstance(node, EnumSchema):
            return "|".join(map(string_literal, node.values)) or "string"

        if isinstance(node, ArraySchema):
            if isinstance(node.items, RefSchema):
                return f"Array<{type_expression(node.items.name)}>"
            return f"Array<{self.expression(node.items, depth) or 'any'}>"

        if isinstance(node, RefSchema):
            return type_expression(node.name)

        if isinstance(node, PlaceholderSchema):
            return node.name

        if isinstance(node, ObjectSchema):
            if node.properties:
                return self._structure(node, depth)
            if node.additional_properties is not None:
                value = self.expression(node.additional_properties, depth) or "any"
                return f"{{ [key: string]: {value} }}"
            return ANY_OBJECT

        logger.warning(f"Неизвестная форма схемы, тип пропущен: {node!r}")
        return ""

    def declare(self, name: str, node: SchemaNode) -> str:
        """Объявление типа верхнего уровня для type.ts"""
        if isinstance(node, ObjectSchema) and node.properties:
            return f"export interface {name} {self._structure(node, 0)}"

        expression = self.expression(node)
        if not expression:
            return ""

        return f"export type {name} = {expression};"

    def _structure(self, node: ObjectSchema, depth: int) -> str:
        fields = [
            INDENT * (depth + 1)
            + self._field(name, prop, node.is_required(name), depth + 1)
            + ";"
            for name, prop in node.properties.items()
        ]
        return "{\n" + "\n".join(fields) + "\n" + INDENT * depth + "}"

    def _field(self, name: str, node: SchemaNode, required: bool, depth: int) -> str:
        var_type = self.expression(node, depth) or "any"
        return f"{property_key(name)}{'' if required else '?'}: {var_type}"
