import logging
from typing import Any, Dict, List, Optional

from ..types.models import (
    Operation,
    Parameter,
    ParameterGroups,
    SchemaNode,
    ServiceGroup,
)
from ..utils import pascal_case
from .schema import parse_schema, ref_name

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")
DEFAULT_TAG = "default"

# location из Swagger -> поле ParameterGroups
GROUP_FIELDS = {
    "path": "path",
    "query": "query",
    "header": "header",
    "formData": "form_data",
}


class _ServiceGroupsBuilder:
    """Накопитель операций по тегам"""

    def __init__(self):
        self._operations: Dict[str, List[Operation]] = {}

    def add(self, operation: Operation):
        self._operations.setdefault(operation.tag, []).append(operation)

    def build(self, descriptions: Dict[str, str]) -> Dict[str, ServiceGroup]:
        return {
            tag: ServiceGroup(
                tag_name=tag,
                operations=operations,
                description=descriptions.get(tag),
            )
            for tag, operations in self._operations.items()
        }


class OperationStructurer:
    """Группировка операций Swagger документа по тегам"""

    def __init__(self, document: Dict[str, Any]):
        self.document = document

    def structure(self) -> Dict[str, ServiceGroup]:
        builder = _ServiceGroupsBuilder()

        for path, path_spec in (self.document.get("paths") or {}).items():
            shared_params = path_spec.get("parameters", [])

            for method, method_spec in path_spec.items():
                if method.lower() not in HTTP_METHODS:
                    continue
                builder.add(
                    self._create_operation(path, method, method_spec, shared_params)
                )

        return builder.build(self._tag_descriptions())

    def _tag_descriptions(self) -> Dict[str, str]:
        return {
            tag["name"]: tag.get("description")
            for tag in self.document.get("tags") or []
            if tag and tag.get("name")
        }

    def _create_operation(
        self, path: str, method: str, spec: Dict, shared_params: List[Dict]
    ) -> Operation:
        identifier = spec.get("operationId") or self._derive_identifier(path, method)
        tags = spec.get("tags") or [DEFAULT_TAG]

        return Operation(
            identifier=identifier,
            http_method=method.lower(),
            path_template=path,
            tag=tags[0],
            summary=spec.get("summary"),
            parameters=self._group_parameters(
                self._merge_parameters(shared_params, spec.get("parameters", [])),
                identifier,
            ),
            response=self._get_response(spec.get("responses") or {}),
        )

    def _merge_parameters(self, shared: List[Dict], own: List[Dict]) -> List[Dict]:
        """Параметры уровня пути + параметры операции (операция важнее)"""
        merged = {}
        for param_spec in map(self._dereference, list(shared) + list(own)):
            merged[(param_spec.get("in"), param_spec.get("name"))] = param_spec
        return list(merged.values())

    def _dereference(self, param_spec: Dict) -> Dict:
        if "$ref" not in param_spec:
            return param_spec

        name = ref_name(param_spec["$ref"])
        return (self.document.get("parameters") or {}).get(name, param_spec)

    def _group_parameters(self, params: List[Dict], identifier: str) -> ParameterGroups:
        groups = {field: [] for field in GROUP_FIELDS.values()}
        body = None

        for param_spec in params:
            location = param_spec.get("in")

            if location == "body":
                if body is not None:
                    logger.warning(
                        f"{identifier}: несколько body параметров, "
                        f"используется последний ({param_spec.get('name')})"
                    )
                body = self._create_parameter(param_spec)
            elif location in GROUP_FIELDS:
                groups[GROUP_FIELDS[location]].append(
                    self._create_parameter(param_spec)
                )
            else:
                logger.debug(f"{identifier}: пропущен параметр in={location}")

        return ParameterGroups(body=body, **groups)

    @staticmethod
    def _create_parameter(param_spec: Dict) -> Parameter:
        location = param_spec["in"]

        if location == "body":
            schema_node = parse_schema(param_spec.get("schema"))
        else:
            schema_node = parse_schema(param_spec)

        # Значение по умолчанию берется только из items.default массивов
        default = None
        items = param_spec.get("items")
        if param_spec.get("type") == "array" and isinstance(items, dict):
            default = items.get("default")

        return Parameter(
            location=location,
            key=param_spec["name"],
            schema_node=schema_node,
            required=bool(param_spec.get("required", False)),
            default=default,
        )

    @staticmethod
    def _get_response(responses: Dict) -> Optional[SchemaNode]:
        success = responses.get("200") or responses.get(200)
        if not success or "schema" not in success:
            return None

        return parse_schema(success["schema"])

    @staticmethod
    def _derive_identifier(path: str, method: str) -> str:
        return method.lower() + pascal_case(path)


def structure(document: Dict[str, Any]) -> Dict[str, ServiceGroup]:
    """Группировка операций документа по тегам"""
    return OperationStructurer(document).structure()
