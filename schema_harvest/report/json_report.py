# schema_harvest/report/json_report.py

"""
Генерация JSON-сводки для проекта SchemaHarvest.

Сериализация объекта Summary в файл.
"""
import json
from pathlib import Path
from typing import Iterable, Optional

from schema_harvest.report.builder import Summary


def render_json(
    summary: Summary,
    output_path: Path | str,
    files: Optional[Iterable[Path | str]] = None,
) -> Path:
    """
    Сохраняет сводку summary в формате JSON по указанному пути.

    :param summary: объект Summary с итогами запуска
    :param output_path: путь к JSON-файлу
    :param files: список сохранённых CSV (попадает в поле ``files``)
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = summary.as_dict()
    data["files"] = [Path(p).name for p in (files or ())]

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output
