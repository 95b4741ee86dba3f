import logging
from typing import Any, Dict, List, Optional, Set, Tuple

from ..parser.schema import parse_schema
from ..parser.swagger import structure
from ..types.generic_names import (
    GenericName,
    decode,
    has_placeholders,
    is_primitive_argument,
    substitute_placeholders,
)
from ..types.models import (
    ApiRename,
    Method,
    Operation,
    Project,
    SchemaNode,
    ServiceClass,
)
from ..types.type_resolver import TypeResolver
from ..utils import identifier, pascal_case
from .signature import SignatureBuilder
from .templates import templates

logger = logging.getLogger(__name__)

# Ранг конкретизации generic-типа как источника тела объявления
CONCRETE, PRIMITIVE_ARGUMENTS, REFERENCE_ARGUMENTS = 0, 1, 2


def _instantiation_rank(node: SchemaNode, generic: GenericName) -> int:
    if not has_placeholders(node):
        return CONCRETE
    if any(map(is_primitive_argument, generic.type_params)):
        return PRIMITIVE_ARGUMENTS
    return REFERENCE_ARGUMENTS


def render_definitions(
    definitions: Dict[str, Any], resolver: TypeResolver, seen_generics: Set[str]
) -> Tuple[List[str], List[str]]:
    """
    Объявления типов для всех определений документа.

    Generic-определения (Base«A,B») объявляются один раз на базовое имя.
    Объявление стоит на месте первой конкретизации, а тело берется из
    лучшей: с аргументами-ссылками, затем с примитивными аргументами,
    затем любой (если подстановка не удалась ни разу).
    seen_generics принадлежит вызывающему и пополняется здесь.

    Returns:
        (объявления в порядке документа, имена типов для импорта)
    """
    declarations = []
    known_names = []
    # базовое имя -> (индекс объявления, ранг)
    pending: Dict[str, Tuple[int, int]] = {}

    for raw_name, raw_schema in definitions.items():
        generic = decode(raw_name)

        if not generic.is_generic:
            declaration = resolver.declare(raw_name, parse_schema(raw_schema))
            if declaration:
                declarations.append(declaration)
                if raw_name not in known_names:
                    known_names.append(raw_name)
            continue

        name = generic.base_name
        if name in seen_generics:
            logger.debug(f"{raw_name}: {generic.canonical_name} уже объявлен")
            continue

        if name in templates.special_generics:
            declaration = templates.map_alias.format(
                name=generic.canonical_name, value=generic.placeholders[-1]
            )
            rank = REFERENCE_ARGUMENTS
        else:
            node = substitute_placeholders(parse_schema(raw_schema), generic)
            declaration = resolver.declare(generic.canonical_name, node)
            rank = _instantiation_rank(node, generic)

        if not declaration:
            continue

        if name in pending:
            index, best = pending[name]
            if rank > best:
                logger.debug(f"{generic.canonical_name}: тело взято из {raw_name}")
                declarations[index] = declaration
                pending[name] = (index, rank)
        else:
            pending[name] = (len(declarations), rank)
            declarations.append(declaration)
            if name not in known_names:
                known_names.append(name)

        if rank == REFERENCE_ARGUMENTS:
            seen_generics.add(name)

    seen_generics.update(pending)
    return declarations, known_names


class ServiceGenerator:
    """Генератор type.ts, сервисов по тегам и index.ts"""

    def __init__(
        self,
        document: Dict[str, Any],
        request_import: str,
        page_header: Optional[str] = None,
        api_rename: Optional[ApiRename] = None,
    ):
        self.document = document
        self.request_import = request_import
        self.page_header = page_header
        self.api_rename = api_rename

        self.project = Project(name="services")
        self.resolver = TypeResolver()
        self.signatures = SignatureBuilder(self.resolver)

        self.known_types: List[str] = []
        self.seen_generics: Set[str] = set()  # Только на время одного запуска
        self.service_names: List[str] = []

    def generate(self) -> Project:
        """Основная генерация"""
        self._generate_types()
        self._generate_services()
        self._generate_index()
        return self.project

    def _generate_types(self):
        declarations, self.known_types = render_definitions(
            self.document.get("definitions") or {}, self.resolver, self.seen_generics
        )

        types_file = self.project.add_file(templates.type_file, header=self.page_header)
        for declaration in declarations:
            types_file.add_code_block(declaration)

    def _generate_services(self):
        for tag, group in structure(self.document).items():
            class_name = self._service_name(tag)
            self.service_names.append(class_name)

            service_file = self.project.add_file(
                f"{class_name}.ts", header=self.page_header, imports=self._imports()
            )
            service = service_file.add_class(class_name, description=group.description)

            for operation in group.operations:
                self._add_method(service, operation)

    def _imports(self) -> List[str]:
        imports = []
        if self.known_types:
            imports.append(
                templates.types_import.format(names=", ".join(self.known_types))
            )
        imports.append(self.request_import)
        return imports

    def _service_name(self, tag: str) -> str:
        base = pascal_case(tag) or "Default"
        name = f"{base}Service"

        counter = 2
        while name in self.service_names:
            name = f"{base}{counter}Service"
            counter += 1

        if counter > 2:
            logger.warning(f"Тег '{tag}' совпадает с другим тегом, сервис назван {name}")

        return name

    def _add_method(self, service: ServiceClass, operation: Operation):
        name = identifier(operation.identifier)
        if self.api_rename:
            name = self.api_rename(name) or name

        unique_name = name
        counter = 2
        while unique_name in service.methods:
            unique_name = f"{name}{counter}"
            counter += 1
        if unique_name != name:
            logger.warning(f"{service.name}: метод {name} уже есть, создан {unique_name}")

        signature = self.signatures.build(operation.parameters)

        service.add_method(
            Method(
                name=unique_name,
                arguments=signature.arguments,
                response=self._response_type(operation),
                summary=operation.summary,
                code=templates.request_call.format(
                    method=operation.http_method.upper(),
                    path=operation.path_template,
                    call_args=signature.call_args,
                ),
            )
        )

    def _response_type(self, operation: Operation) -> str:
        if operation.response is None:
            return "void"
        return self.resolver.expression(operation.response) or "any"

    def _generate_index(self):
        index_file = self.project.add_file(templates.index_file, header=self.page_header)
        index_file.add_code_block(
            "\n".join(
                templates.index_export.format(name=name) for name in self.service_names
            )
        )
