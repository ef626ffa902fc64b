# File: schema_harvest/classifier.py
"""schema_harvest.classifier: Определение ключа группировки по полю ``@type``."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Final

from schema_harvest.flatten import dump_json

__all__ = [
    "UNKNOWN_TYPE",
    "NO_SCHEMA",
    "PARSE_ERROR",
    "CRAWL_ERROR",
    "classify",
]

UNKNOWN_TYPE: Final[str] = "UnknownType"
NO_SCHEMA: Final[str] = "NoSchema"
PARSE_ERROR: Final[str] = "ParseError"
CRAWL_ERROR: Final[str] = "CrawlError"


def classify(block: Mapping[str, Any]) -> str:
    """Возвращает тип схемы для декодированного блока.

    Если ``@type`` задан списком, ключом становится первый элемент; полное
    значение при этом остаётся в сплющенной строке под ключом ``@type``.
    Нестроковые значения (объекты, числа) сериализуются компактным JSON.
    """
    value = block.get("@type")
    if value is None:
        return UNKNOWN_TYPE
    if isinstance(value, str):
        return value or UNKNOWN_TYPE
    if isinstance(value, Sequence) and not isinstance(value, bytes):
        if not value or value[0] is None:
            return UNKNOWN_TYPE
        first = value[0]
        key = first if isinstance(first, str) else dump_json(first)
        return key or UNKNOWN_TYPE
    return dump_json(value)
