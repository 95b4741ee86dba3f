"""Утилиты для генератора"""

from .naming import (
    RESERVED_WORDS,
    identifier,
    is_identifier,
    line_comment,
    pascal_case,
    property_key,
    string_literal,
)

__all__ = [
    "RESERVED_WORDS",
    "identifier",
    "is_identifier",
    "line_comment",
    "pascal_case",
    "property_key",
    "string_literal",
]
