"""
Конфигурация для генерации TypeScript сервисов
"""

import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, Optional, Union

import toml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILE = "openapi.toml"

# Имена опций (как в openapi.toml и options) -> поля конфигурации
OPTION_NAMES = {
    "serverUrl": "server_url",
    "servicePath": "service_path",
    "requestImportExpression": "request_import_expression",
    "additionalPageHeader": "additional_page_header",
    "apiRename": "api_rename",
    "debugger": "debugger",
    "verifySsl": "verify_ssl",
}

REQUIRED_OPTIONS = ("serverUrl", "servicePath", "requestImportExpression")


@dataclass
class GeneratorConfig:
    """Конфигурация генератора сервисов"""

    server_url: Optional[str] = None
    service_path: Optional[str] = None
    request_import_expression: Optional[str] = None
    additional_page_header: Optional[str] = None
    api_rename: Optional[Union[Callable[[str], str], Dict[str, str]]] = None
    debugger: bool = False
    verify_ssl: bool = True

    @classmethod
    def from_options(cls, options: Dict[str, Any]) -> "GeneratorConfig":
        """Создание из словаря опций (serverUrl, servicePath, ...)"""
        known = {}
        for option, value in options.items():
            if option in OPTION_NAMES:
                known[OPTION_NAMES[option]] = value
            else:
                logger.warning(f"Неизвестная опция: {option}")
        return cls(**known)

    @classmethod
    def from_file(
        cls, config_path: str = CONFIG_FILE, search_dir: str = None
    ) -> Optional["GeneratorConfig"]:
        """Загрузка конфигурации из файла"""
        # Если указана директория для поиска, ищем конфиг там
        if search_dir and os.path.isdir(search_dir):
            config_in_dir = os.path.join(search_dir, CONFIG_FILE)
            if os.path.exists(config_in_dir):
                config_path = config_in_dir

        if not os.path.exists(config_path):
            return None

        try:
            config_data = toml.load(config_path)
        except toml.TomlDecodeError as exc:
            logger.warning(f"Не удалось прочитать {config_path}: {exc}")
            return None

        return cls.from_options(config_data)

    def to_options(self) -> Dict[str, Any]:
        options = {}
        for option, field_name in OPTION_NAMES.items():
            value = getattr(self, field_name)
            # Функцию переименования в toml не сохранить
            if value is None or callable(value):
                continue
            options[option] = value
        return options

    def save_to_file(self, config_path: str = CONFIG_FILE) -> None:
        """Сохранение конфигурации в файл"""
        with open(config_path, "w", encoding="utf-8") as f:
            toml.dump(self.to_options(), f)

    def merge_with_args(self, args) -> "GeneratorConfig":
        """Объединение с аргументами командной строки"""
        merged = {}
        for item in fields(self):
            value = getattr(args, item.name, None)
            if value is None or value is False:
                value = getattr(self, item.name)
            merged[item.name] = value
        return GeneratorConfig(**merged)

    def validate(self) -> "GeneratorConfig":
        """Проверка обязательных опций до любых обращений к сети и диску"""
        missing = [
            option
            for option in REQUIRED_OPTIONS
            if not getattr(self, OPTION_NAMES[option])
        ]
        if missing:
            raise ConfigurationError(
                f"Не указаны обязательные опции: {', '.join(missing)}"
            )
        return self

    def rename_function(self) -> Optional[Callable[[str], str]]:
        """apiRename как функция (словарь превращается в поиск по ключу)"""
        if self.api_rename is None or callable(self.api_rename):
            return self.api_rename

        mapping = dict(self.api_rename)
        return lambda name: mapping.get(name, name)
