from typing import Any, Dict

from ..types.models import (
    ArraySchema,
    EnumSchema,
    ObjectSchema,
    PrimitiveSchema,
    RefSchema,
    SchemaNode,
    UnknownSchema,
)

PRIMITIVE_TYPES = ("boolean", "integer", "string", "file", "number")


def ref_name(ref: str) -> str:
    """Имя схемы из $ref: '#/definitions/Pet' -> 'Pet'"""
    return ref.rsplit("/", 1)[-1]


def parse_schema(raw: Any) -> SchemaNode:
    """Разбор JSON-узла Swagger схемы в SchemaNode"""
    if not isinstance(raw, dict):
        return UnknownSchema(raw=raw)

    if "$ref" in raw:
        return RefSchema(name=ref_name(raw["$ref"]))

    # Обертка параметра/ответа: {"schema": {...}}
    if "schema" in raw and "type" not in raw:
        return parse_schema(raw["schema"])

    schema_type = raw.get("type")

    if schema_type == "array":
        return ArraySchema(items=parse_schema(raw.get("items")))

    if schema_type == "object" or (
        schema_type is None
        and ("properties" in raw or "additionalProperties" in raw)
    ):
        return _parse_object(raw)

    if raw.get("enum") and schema_type in ("string", None):
        return EnumSchema(values=[str(value) for value in raw["enum"]])

    if schema_type in PRIMITIVE_TYPES:
        return PrimitiveSchema(type=schema_type)

    return UnknownSchema(raw=raw)


def _parse_object(raw: Dict[str, Any]) -> ObjectSchema:
    properties = {}
    required = raw.get("required")
    required = list(required) if isinstance(required, list) else []

    for name, prop_spec in (raw.get("properties") or {}).items():
        properties[name] = parse_schema(prop_spec)
        # Встречается required: true прямо на свойстве
        if isinstance(prop_spec, dict) and prop_spec.get("required") is True:
            if name not in required:
                required.append(name)

    additional = raw.get("additionalProperties")
    if isinstance(additional, dict):
        additional_properties = parse_schema(additional)
    elif additional is True:
        additional_properties = ObjectSchema()
    else:
        additional_properties = None

    return ObjectSchema(
        properties=properties,
        required=required,
        additional_properties=additional_properties,
    )
