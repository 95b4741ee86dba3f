"""Утилиты для работы с именами тегов, параметров и полей"""

import json
import re

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")

# Зарезервированные слова TypeScript, недопустимые как имена переменных
RESERVED_WORDS = frozenset(
    [
        "break", "case", "catch", "class", "const", "continue", "debugger",
        "default", "delete", "do", "else", "enum", "export", "extends",
        "false", "finally", "for", "function", "if", "implements", "import",
        "in", "instanceof", "interface", "let", "new", "null", "package",
        "private", "protected", "public", "return", "static", "super",
        "switch", "this", "throw", "true", "try", "typeof", "var", "void",
        "while", "with", "yield", "await",
    ]
)


def is_identifier(name: str) -> bool:
    """Является ли имя корректным идентификатором TypeScript"""
    return bool(_IDENTIFIER.match(name))


def property_key(name: str) -> str:
    """
    Ключ свойства для объявления интерфейса.

    Examples:
        >>> property_key("id")
        'id'
        >>> property_key("x-request-id")
        '"x-request-id"'
    """
    return name if is_identifier(name) else string_literal(name)


def pascal_case(name: str) -> str:
    """
    PascalCase без разделителей.

    Examples:
        >>> pascal_case("pet")
        'Pet'
        >>> pascal_case("store-order api")
        'StoreOrderApi'
    """
    return "".join(
        part[0].upper() + part[1:] for part in _SEPARATORS.split(name) if part
    )


def identifier(name: str) -> str:
    """
    Имя параметра, пригодное для использования как переменная.

    Examples:
        >>> identifier("petId")
        'petId'
        >>> identifier("X-Request-Id")
        'xRequestId'
        >>> identifier("default")
        'default_'
    """
    if is_identifier(name):
        result = name
    else:
        result = pascal_case(name)
        if not result:
            return "_"

        result = result[0].lower() + result[1:]
        # Имя не может начинаться с цифры
        if result[0].isdigit():
            result = f"_{result}"

    return f"{result}_" if result in RESERVED_WORDS else result


def string_literal(value) -> str:
    """
    Строковый литерал в двойных кавычках с экранированием.

    Examples:
        >>> string_literal('say "hi"')
        '"say \\\\"hi\\\\""'
    """
    return json.dumps(str(value), ensure_ascii=False)


def line_comment(text: str) -> str:
    """Однострочные комментарии // для каждой строки текста"""
    return "\n".join(
        f"// {line.strip()}".rstrip() for line in text.strip().splitlines()
    )
