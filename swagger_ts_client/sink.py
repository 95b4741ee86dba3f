"""
Запись сгенерированных файлов на диск
"""

import os
import shutil
from typing import List

from .internal.types.models import Project


def clear_directory(path: str) -> None:
    """Рекурсивная очистка директории (создается, если ее нет)"""
    if os.path.isdir(path):
        for entry in os.listdir(path):
            entry_path = os.path.join(path, entry)
            if os.path.isdir(entry_path) and not os.path.islink(entry_path):
                shutil.rmtree(entry_path)
            else:
                os.remove(entry_path)

    os.makedirs(path, exist_ok=True)


def write_file(path: str, content: str) -> None:
    """Запись файла с созданием родительских директорий (файл перезаписывается)"""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


def write_project(project: Project, target_path: str) -> List[str]:
    """Сохранение файлов проекта, возвращает записанные пути"""
    written = []
    for code_file in project.files:
        path = os.path.join(target_path, code_file.file_name)
        write_file(path, str(code_file))
        written.append(path)
    return written
