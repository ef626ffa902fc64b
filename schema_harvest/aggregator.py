# File: schema_harvest/aggregator.py
"""schema_harvest.aggregator: Записи результатов и их группировка по типу схемы."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Tuple

from schema_harvest.classifier import CRAWL_ERROR, NO_SCHEMA, PARSE_ERROR
from schema_harvest.flatten import Scalar

__all__ = [
    "PRIMARY_FIELDS",
    "NO_SCHEMA_MESSAGE",
    "ResultRecord",
    "ResultSet",
]

PRIMARY_FIELDS: Tuple[str, str, str] = ("sourceUrl", "schemaFound", "errorMessage")
NO_SCHEMA_MESSAGE = "No schema markup found"


def _freeze(fields: Mapping[str, Scalar]) -> Mapping[str, Scalar]:
    return MappingProxyType(dict(fields))


@dataclass(frozen=True, slots=True)
class ResultRecord:
    """Одна строка вывода. Неизменяема после создания."""

    source_url: str
    schema_found: bool
    error_message: str = ""
    fields: Mapping[str, Scalar] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", _freeze(self.fields))

    @classmethod
    def success(cls, url: str, fields: Mapping[str, Scalar]) -> ResultRecord:
        return cls(url, True, "", fields)

    @classmethod
    def failure(cls, url: str, message: str) -> ResultRecord:
        return cls(url, False, message)

    def as_row(self) -> Dict[str, Any]:
        """Строка для табличного вывода: сначала основные поля, затем сплющенные."""
        row: Dict[str, Any] = {
            "sourceUrl": self.source_url,
            "schemaFound": self.schema_found,
            "errorMessage": self.error_message,
        }
        for key, value in self.fields.items():
            if key not in row:
                row[key] = value
        return row


class ResultSet:
    """Упорядоченное отображение ``тип схемы -> записи`` в порядке обхода.

    Каждая запись попадает ровно в одну корзину. Объект создаётся снаружи,
    передаётся в шаг обхода и возвращается из него.
    """

    __slots__ = ("_buckets",)

    def __init__(self) -> None:
        self._buckets: Dict[str, List[ResultRecord]] = {}

    def add(self, schema_type: str, record: ResultRecord) -> None:
        self._buckets.setdefault(schema_type, []).append(record)

    def add_crawl_error(self, url: str, message: str) -> None:
        self.add(CRAWL_ERROR, ResultRecord.failure(url, f"Crawl error: {message}"))

    def add_no_schema(self, url: str) -> None:
        self.add(NO_SCHEMA, ResultRecord.failure(url, NO_SCHEMA_MESSAGE))

    def add_parse_error(self, url: str, message: str) -> None:
        self.add(PARSE_ERROR, ResultRecord.failure(url, f"Parse error: {message}"))

    def types(self) -> List[str]:
        return [t for t, records in self._buckets.items() if records]

    def records(self, schema_type: str) -> List[ResultRecord]:
        return list(self._buckets.get(schema_type, ()))

    def items(self) -> Iterator[Tuple[str, List[ResultRecord]]]:
        for schema_type, records in self._buckets.items():
            if records:
                yield schema_type, list(records)

    def counts(self) -> Dict[str, int]:
        return {t: len(records) for t, records in self._buckets.items() if records}

    @property
    def total(self) -> int:
        return sum(len(records) for records in self._buckets.values())

    def __len__(self) -> int:
        return self.total

    def __contains__(self, schema_type: object) -> bool:
        return bool(self._buckets.get(schema_type))  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return f"ResultSet({self.counts()!r})"
