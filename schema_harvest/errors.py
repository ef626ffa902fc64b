# File: schema_harvest/errors.py
"""schema_harvest.errors: Иерархия исключений SchemaHarvest.

Фатальной является только :class:`InputError`; остальные ошибки перехватываются
на уровне сайта или блока и превращаются в записи отчёта.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "HarvestError",
    "InputError",
    "FetchError",
    "BlockDecodeError",
    "EnrichmentError",
]


class HarvestError(Exception):
    """Базовое исключение проекта."""


class InputError(HarvestError):
    """Список URL для локали отсутствует или имеет неверный формат."""


class FetchError(HarvestError):
    """Сбой загрузки страницы: сеть, таймаут или неуспешный HTTP-статус."""

    def __init__(self, url: str, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class BlockDecodeError(HarvestError, ValueError):
    """Текст блока JSON-LD не декодируется в структурированные данные."""


class EnrichmentError(HarvestError):
    """Сбой внешнего оптимизатора схемы. Никогда не выходит за пределы optimizer."""
