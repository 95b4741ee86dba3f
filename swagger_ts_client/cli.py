import argparse
import logging
import os
import sys
from typing import Any, Dict, Union

from .config import CONFIG_FILE, GeneratorConfig
from .generator import ApiServiceGenerator
from .internal.types.models import Project
from .loader import load_document
from .sink import clear_directory, write_project


def _generate_project(config: GeneratorConfig) -> Project:
    """Ядро генерации - очистка, загрузка, генерация и запись"""
    config.validate()

    target_path = os.path.abspath(config.service_path)
    print(f"🧹 Очистка директории: {target_path}")
    clear_directory(target_path)

    print(f"📥 Загрузка Swagger спецификации из {config.server_url}...")
    document = load_document(config)

    print("⚙️ Генерация кода...")
    project = ApiServiceGenerator(document, config).generate()

    print(f"💾 Сохранение {len(project.files)} файлов...")
    for path in write_project(project, target_path):
        print(f"   Запись: {path}")

    print("😍 Генерация завершена успешно!")
    return project


def run(options: Union[GeneratorConfig, Dict[str, Any]]) -> Project:
    """
    Программная точка входа.

    Принимает GeneratorConfig или словарь опций (serverUrl, servicePath,
    requestImportExpression, additionalPageHeader, apiRename, debugger).
    Любая ошибка завершает процесс с ненулевым кодом.
    """
    config = (
        options
        if isinstance(options, GeneratorConfig)
        else GeneratorConfig.from_options(options)
    )

    try:
        return _generate_project(config)
    except Exception as e:
        print(f"❌ Ошибка: {e}")
        sys.exit(1)


def generate():
    """Команда генерации TypeScript сервисов из Swagger"""
    parser = argparse.ArgumentParser(
        description="Генерация TypeScript сервисов из Swagger 2.0"
    )
    parser.add_argument(
        "--server-url",
        dest="server_url",
        type=str,
        help="URL или путь к Swagger документу",
    )
    parser.add_argument(
        "--service-path",
        dest="service_path",
        type=str,
        help="Директория для сгенерированных файлов",
    )
    parser.add_argument(
        "--request-import",
        dest="request_import_expression",
        type=str,
        help="Строка импорта функции request, вставляется в каждый сервис",
    )
    parser.add_argument(
        "--page-header",
        dest="additional_page_header",
        type=str,
        help="Текст в начале каждого файла",
    )
    parser.add_argument(
        "--config", type=str, default=CONFIG_FILE, help="Путь к openapi.toml"
    )
    parser.add_argument(
        "--debugger", action="store_true", help="Использовать записанную фикстуру"
    )
    parser.add_argument(
        "--insecure", action="store_true", help="Не проверять TLS сертификат"
    )
    parser.add_argument(
        "--init-config", action="store_true", help="Создать конфиг файл openapi.toml"
    )
    parser.add_argument("--verbose", action="store_true", help="Подробный лог")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    file_config = GeneratorConfig.from_file(args.config)
    if file_config:
        print(f"📋 Используется конфиг из {args.config}")

    config = (file_config or GeneratorConfig()).merge_with_args(args)
    if args.insecure:
        config.verify_ssl = False

    # Инициализация конфига
    if args.init_config:
        config.save_to_file(args.config)
        print(f"✅ Создан конфиг файл {args.config}")
        return

    run(config)


if __name__ == "__main__":
    generate()
