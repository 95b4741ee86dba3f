"""
Получение Swagger документа: по URL, из локального файла или фикстуры (debugger)
"""

import json
import logging
import os
from typing import Any, Dict

import httpx
import yaml

from .config import GeneratorConfig
from .errors import SchemaFetchError

logger = logging.getLogger(__name__)

FIXTURE_PATH = os.path.join(os.path.dirname(__file__), "fixtures", "petstore.json")


def load_fixture(path: str = FIXTURE_PATH) -> Dict[str, Any]:
    """Записанный заранее документ для режима debugger"""
    return _read_file(path)


def fetch_document(
    url: str, verify_ssl: bool = True, timeout: float = 30.0
) -> Dict[str, Any]:
    """
    Загрузка документа по HTTP.

    verify_ssl=False отключает проверку сертификата (внутренние стенды с
    самоподписанными сертификатами).
    """
    logger.debug(f"GET {url} (verify={verify_ssl})")
    try:
        response = httpx.get(
            url, verify=verify_ssl, timeout=timeout, follow_redirects=True
        )
        response.raise_for_status()
        document = response.json()
    except httpx.HTTPError as exc:
        raise SchemaFetchError(
            f"Не удалось загрузить спецификацию из {url}: {exc}", source=url
        ) from exc
    except ValueError as exc:
        raise SchemaFetchError(f"Ответ {url} не является JSON: {exc}", source=url) from exc

    return _ensure_document(document, url)


def _read_file(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.endswith((".yaml", ".yml")):
                document = yaml.safe_load(f)
            else:
                document = json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise SchemaFetchError(f"Не удалось прочитать {path}: {exc}", source=path) from exc

    return _ensure_document(document, path)


def _ensure_document(document: Any, source: str) -> Dict[str, Any]:
    if not isinstance(document, dict):
        raise SchemaFetchError(f"{source}: ожидался объект Swagger документа", source=source)
    return document


def load_document(config: GeneratorConfig) -> Dict[str, Any]:
    """Документ для генерации согласно конфигурации"""
    if config.debugger:
        logger.info("Режим debugger: используется фикстура вместо загрузки")
        return load_fixture()

    url = config.server_url
    if url.startswith(("http://", "https://")):
        return fetch_document(url, verify_ssl=config.verify_ssl)

    if os.path.exists(url):
        return _read_file(url)

    raise SchemaFetchError(
        f"Не удалось загрузить спецификацию из {url}. Проверьте URL или путь к файлу.",
        source=url,
    )
