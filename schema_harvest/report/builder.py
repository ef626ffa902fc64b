# File: schema_harvest/report/builder.py
"""schema_harvest.report.builder: Преобразование ResultSet в таблицы по типам и сводку.

Чистое преобразование: без сети и файловой системы.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from schema_harvest.aggregator import PRIMARY_FIELDS, ResultSet

__all__ = ["TypeTable", "Summary", "HarvestReport", "build_report", "field_order", "cell"]


@dataclass(frozen=True, slots=True)
class TypeTable:
    """Табличный артефакт одной корзины: порядок колонок и строки."""

    schema_type: str
    columns: Tuple[str, ...]
    rows: Tuple[Dict[str, str], ...]


@dataclass(frozen=True, slots=True)
class Summary:
    """Итоги запуска."""

    total: int
    type_breakdown: Dict[str, int] = field(default_factory=dict)
    with_schema: int = 0
    without_schema: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "type_breakdown": dict(self.type_breakdown),
            "with_schema": self.with_schema,
            "without_schema": self.without_schema,
        }


@dataclass(frozen=True, slots=True)
class HarvestReport:
    tables: Tuple[TypeTable, ...]
    summary: Summary


def cell(value: Any) -> str:
    """Строковое значение ячейки: ``true``/``false`` для bool, пусто для None."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def field_order(rows: List[Dict[str, Any]]) -> Tuple[str, ...]:
    """Основные поля, затем все прочие ключи в порядке первого появления."""
    columns: Dict[str, None] = dict.fromkeys(PRIMARY_FIELDS)
    for row in rows:
        for key in row:
            columns.setdefault(key, None)
    return tuple(columns)


def build_report(results: ResultSet) -> HarvestReport:
    """Строит таблицу для каждой непустой корзины и сводку по всему набору."""
    tables: List[TypeTable] = []
    breakdown: Dict[str, int] = {}
    with_schema = 0

    for schema_type, records in results.items():
        raw_rows = [record.as_row() for record in records]
        columns = field_order(raw_rows)
        rows = tuple({col: cell(raw.get(col)) for col in columns} for raw in raw_rows)
        tables.append(TypeTable(schema_type, columns, rows))
        breakdown[schema_type] = len(records)
        with_schema += sum(1 for record in records if record.schema_found)

    total = sum(breakdown.values())
    summary = Summary(
        total=total,
        type_breakdown=breakdown,
        with_schema=with_schema,
        without_schema=total - with_schema,
    )
    return HarvestReport(tuple(tables), summary)
