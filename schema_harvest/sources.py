# File: schema_harvest/sources.py
"""schema_harvest.sources: Загрузка списков URL по идентификатору локали."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, List, Union

import yaml

from schema_harvest.errors import InputError
from schema_harvest.logger import logger

__all__ = ["load_urls", "url_file_for"]

_LOCALE_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")
_SUFFIXES = (".yaml", ".yml", ".json")


def url_file_for(locale: str, url_dir: Union[str, Path]) -> Path:
    """Возвращает путь к файлу ``<locale>-urls.<ext>`` или бросает InputError."""
    if not _LOCALE_RE.match(locale or ""):
        raise InputError(f"Invalid locale identifier: {locale!r}")
    base = Path(url_dir).expanduser()
    for suffix in _SUFFIXES:
        candidate = base / f"{locale}-urls{suffix}"
        if candidate.is_file():
            return candidate
    raise InputError(f"No URL list for locale {locale!r} in {base}")


def _parse(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


def load_urls(locale: str, url_dir: Union[str, Path]) -> List[str]:
    """
    Читает список URL для локали.

    Файл должен содержать последовательность строк. Порядок и дубликаты
    сохраняются: каждый элемент списка станет отдельной единицей обхода.
    """
    path = url_file_for(locale, url_dir)
    try:
        data = _parse(path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise InputError(f"Cannot read URL list {path}: {exc}") from exc

    if not isinstance(data, list):
        raise InputError(f"URL list {path} must be a sequence, got {type(data).__name__}")
    bad = [item for item in data if not isinstance(item, str)]
    if bad:
        raise InputError(f"URL list {path} must contain only strings, got {bad[0]!r}")

    urls = [item.strip() for item in data]
    logger.info("Loaded %d URLs for locale: %s", len(urls), locale)
    return urls
