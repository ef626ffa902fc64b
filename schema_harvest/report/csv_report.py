# schema_harvest/report/csv_report.py

"""
Генерация CSV-файлов для SchemaHarvest.

Один файл на каждую непустую корзину типа схемы.
"""
from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import List

from slugify import slugify

from schema_harvest.report.builder import HarvestReport, TypeTable


def encode_csv(table: TypeTable) -> str:
    """
    Сериализует таблицу в CSV-текст с заголовком в порядке ``table.columns``.

    :param table: таблица одной корзины
    :return: CSV-текст
    """
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(table.columns), restval="", lineterminator="\n")
    writer.writeheader()
    writer.writerows(table.rows)
    return buffer.getvalue()


def csv_filename(locale: str, schema_type: str, stamp: str) -> str:
    """Имя файла вида ``<locale>_<type>_<stamp>.csv``; тип приводится к безопасному slug."""
    type_slug = slugify(schema_type, lowercase=False, separator="-") or "type"
    return f"{locale}_{type_slug}_{stamp}.csv"


def render_csv(report: HarvestReport, output_dir: Path | str, locale: str, stamp: str) -> List[Path]:
    """
    Сохраняет все таблицы отчёта в каталог output_dir.

    Пример:
    ```python
    from schema_harvest.report.csv_report import render_csv
    paths = render_csv(report, 'output', 'nl-be', '2024-01-01T00-00-00')
    ```
    """
    output = Path(output_dir)
    output.mkdir(parents=True, exist_ok=True)

    saved: List[Path] = []
    used: set[str] = set()
    for table in report.tables:
        name = csv_filename(locale, table.schema_type, stamp)
        # разные типы могут дать одинаковый slug
        if name in used:
            base = name[: -len(".csv")]
            n = 2
            while f"{base}-{n}.csv" in used:
                n += 1
            name = f"{base}-{n}.csv"
        used.add(name)

        path = output / name
        path.write_text(encode_csv(table), encoding="utf-8", newline="")
        saved.append(path)
    return saved
