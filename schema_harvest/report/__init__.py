# File: schema_harvest/report/__init__.py
"""schema_harvest.report: Построение отчёта и сохранение CSV, JSON и HTML артефактов."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from schema_harvest.report.builder import HarvestReport, Summary, TypeTable, build_report
from schema_harvest.report.csv_report import encode_csv, render_csv
from schema_harvest.report.html_report import render_html
from schema_harvest.report.json_report import render_json


@dataclass(slots=True)
class SavedReport:
    """Пути ко всем сохранённым артефактам одного запуска."""

    csv_files: List[Path]
    summary_file: Path
    html_file: Optional[Path] = None


def timestamp(now: Optional[datetime] = None) -> str:
    """ISO-метка времени, пригодная для имени файла (``:`` и ``.`` заменены на ``-``)."""
    moment = now or datetime.now(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H-%M-%S-%fZ")


def write_report(
    report: HarvestReport,
    output_dir: Union[str, Path],
    locale: str,
    *,
    stamp: Optional[str] = None,
    html_path: Union[str, Path, None] = None,
    template_dir: Union[str, Path, None] = None,
) -> SavedReport:
    """Сохраняет CSV по типам, JSON-сводку и, при необходимости, HTML-сводку."""
    stamp = stamp or timestamp()
    csv_files = render_csv(report, output_dir, locale, stamp)
    summary_file = render_json(
        report.summary, Path(output_dir) / f"{locale}_summary_{stamp}.json", files=csv_files
    )
    html_file = None
    if html_path is not None:
        if template_dir is None:
            raise ValueError("template_dir is required for the HTML report")
        html_file = render_html(report, template_dir, html_path, locale=locale)
    return SavedReport(csv_files, summary_file, html_file)


__all__ = [
    "HarvestReport",
    "SavedReport",
    "Summary",
    "TypeTable",
    "build_report",
    "encode_csv",
    "render_csv",
    "render_html",
    "render_json",
    "timestamp",
    "write_report",
]
