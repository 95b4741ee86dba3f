"""
Главный модуль генератора - чистый интерфейс
"""

from typing import Any, Callable, Dict, Optional

from .config import GeneratorConfig
from .internal.generator.service_generator import ServiceGenerator
from .internal.types.models import Project


class ApiServiceGenerator:
    """Чистый интерфейс для генерации TypeScript сервисов"""

    def __init__(self, document: Dict[str, Any], config: GeneratorConfig):
        self.generator = ServiceGenerator(
            document,
            request_import=config.request_import_expression,
            page_header=config.additional_page_header,
            api_rename=config.rename_function(),
        )

    def generate(self) -> Project:
        """Генерация type.ts, сервисов и index.ts"""
        return self.generator.generate()


def generate_services(
    document: Dict[str, Any],
    request_import: str,
    page_header: Optional[str] = None,
    api_rename: Optional[Callable[[str], str]] = None,
) -> Project:
    """Генерация проекта из уже загруженного Swagger документа"""
    return ServiceGenerator(document, request_import, page_header, api_rename).generate()
