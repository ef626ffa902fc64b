# File: schema_harvest/report/html_report.py
"""schema_harvest.report.html_report: Генерация HTML-сводки с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from schema_harvest.report.builder import HarvestReport

TEMPLATE_NAME = "summary.html.j2"


def render_html(
    report: HarvestReport,
    template_dir: Union[Path, str],
    output_path: Union[Path, str],
    *,
    locale: str = "",
) -> Path:
    """Рендерит HTML-сводку из шаблона и сохраняет её по указанному пути.

    Args:
        report: объект HarvestReport.
        template_dir: директория с Jinja2-шаблонами.
        output_path: путь к итоговому HTML-файлу.
        locale: идентификатор локали для заголовка.

    Returns:
        Path до сохранённого HTML-файла.
    """
    template_dir = Path(template_dir)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    context: dict[str, Any] = {
        "locale": locale,
        "summary": report.summary,
        "tables": report.tables,
    }

    html_content = template.render(**context)
    output_path.write_text(html_content, encoding="utf-8")

    return output_path
