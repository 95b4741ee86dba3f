from dataclasses import dataclass, field
from typing import Any, List, Optional, Set

from ..types.models import Argument, ArraySchema, Parameter, ParameterGroups, SchemaNode
from ..types.type_resolver import TypeResolver
from ..utils import identifier, pascal_case, property_key, string_literal

# Фиксированный порядок слотов в вызове request(...)
LOCATION_ORDER = ("path", "query", "body", "header", "form_data")
NULL = "null"


@dataclass
class Signature:
    arguments: List[Argument] = field(default_factory=list)
    call_args: str = ""

    @property
    def declaration(self) -> str:
        return ", ".join(map(str, self.arguments))


def required_first(arguments: List[Argument]) -> List[Argument]:
    """Обязательные аргументы перед необязательными, порядок внутри групп сохраняется"""
    return sorted(arguments, key=lambda argument: argument.optional)


def _literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return string_literal(value)


def render_default(value: Any, schema_node: Optional[SchemaNode] = None) -> str:
    """Литерал значения по умолчанию: "x" или ["x"] для массивов"""
    if isinstance(value, list):
        values = value
    elif isinstance(schema_node, ArraySchema):
        values = [value]
    else:
        return _literal(value)

    return "[" + ", ".join(map(_literal, values)) + "]"


class SignatureBuilder:
    """Построение объявления параметров и аргументов вызова для операции"""

    def __init__(self, resolver: TypeResolver):
        self.resolver = resolver

    def build(self, groups: ParameterGroups) -> Signature:
        arguments = []
        call_args = []
        used_names: Set[str] = set()

        for slot in LOCATION_ORDER:
            if slot == "body":
                if groups.body is None:
                    call_args.append(NULL)
                    continue
                argument = self._create_argument(groups.body, used_names)
                arguments.append(argument)
                call_args.append(argument.name)
                continue

            parameters = getattr(groups, slot)
            if not parameters:
                call_args.append(NULL)
                continue

            entries = []
            for parameter in parameters:
                argument = self._create_argument(parameter, used_names)
                arguments.append(argument)
                entries.append(self._group_entry(parameter.key, argument.name))
            call_args.append("{" + ",".join(entries) + "}")

        return Signature(
            arguments=required_first(arguments), call_args=",".join(call_args)
        )

    def _create_argument(self, parameter: Parameter, used_names: Set[str]) -> Argument:
        name = identifier(parameter.key)
        if name in used_names:
            name += pascal_case(parameter.location)
        used_names.add(name)

        default = None
        if parameter.default is not None:
            default = render_default(parameter.default, parameter.schema_node)

        return Argument(
            name=name,
            var_type=self.resolver.expression(parameter.schema_node) or "any",
            optional=not parameter.required or default is not None,
            default=default,
        )

    @staticmethod
    def _group_entry(key: str, name: str) -> str:
        if key == name:
            return key
        return f"{property_key(key)}: {name}"


def build_signature(groups: ParameterGroups, resolver: TypeResolver = None) -> Signature:
    return SignatureBuilder(resolver or TypeResolver()).build(groups)
