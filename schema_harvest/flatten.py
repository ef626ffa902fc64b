# File: schema_harvest/flatten.py
"""schema_harvest.flatten: Сплющивание вложенных JSON-значений в плоский словарь.

Ключи строятся как пути через точку (``offers.price``). Последовательности
не раскрываются: они сохраняются целиком как компактный JSON-текст.
Если два пути дают один ключ, побеждает последняя запись (как при обычном
``dict.update``); при уникальных ключах на каждом уровне такого не бывает.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any, Dict, Union

__all__ = ["Scalar", "flatten", "dump_json"]

Scalar = Union[str, int, float, bool, None]


def dump_json(value: Any) -> str:
    """Каноническое компактное JSON-представление значения."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _join(prefix: str, key: Any) -> str:
    return f"{prefix}.{key}" if prefix else str(key)


def flatten(value: Any, prefix: str = "") -> Dict[str, Scalar]:
    """Возвращает плоское отображение ``путь -> скаляр`` для *value*.

    Пример::

        >>> flatten({"a": {"b": 1, "c": 2}})
        {'a.b': 1, 'a.c': 2}
    """
    flat: Dict[str, Scalar] = {}
    if isinstance(value, Mapping):
        for key, item in value.items():
            path = _join(prefix, key)
            if isinstance(item, Mapping):
                flat.update(flatten(item, path))
            elif isinstance(item, Sequence) and not isinstance(item, (str, bytes)):
                flat[path] = dump_json(item)
            else:
                flat[path] = item
        return flat

    # верхний уровень не mapping: кладём под сам префикс
    key = prefix or "value"
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        flat[key] = dump_json(value)
    else:
        flat[key] = value
    return flat
