# === FILE: schema_harvest/config.py ===
"""
Модуль для загрузки и валидации конфигурации SchemaHarvest.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

_PACKAGE_TEMPLATES = Path(__file__).resolve().parent / "templates"


class OptimizerConfig(BaseModel):
    """Настройки необязательной LLM-оптимизации схем."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    enabled: bool = Field(False, description="Включить оптимизацию схем через LLM.")
    model: str = Field("gpt-4", min_length=1, description="Имя модели chat completions.")
    temperature: float = Field(0.2, ge=0, le=2, description="Температура генерации.")
    api_key_env: str = Field("OPENAI_API_KEY", min_length=1, description="Переменная окружения с ключом API.")
    base_url: Optional[str] = Field(None, description="OpenAI-совместимый endpoint.")
    timeout: float = Field(60.0, gt=0, description="Таймаут одного запроса к LLM (секунд).")


class HarvestConfig(BaseModel):
    """Конфигурация одного запуска сбора JSON-LD."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    url_dir: Path = Field(Path("site-urls"), description="Каталог со списками URL по локалям.")
    output_dir: Path = Field(Path("output"), description="Каталог для CSV и сводки.")
    template_dir: Path = Field(_PACKAGE_TEMPLATES, description="Папка с Jinja2-шаблонами.")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("SchemaHarvestBot/1.0", min_length=1, description="Заголовок User-Agent.")
    rate_limit: float = Field(5.0, gt=0, description="Лимит запросов в секунду.")
    retry_times: int = Field(0, ge=0, description="Число повторных попыток при 5xx/429.")
    optimizer: OptimizerConfig = Field(default_factory=OptimizerConfig)

    @field_validator("user_agent", mode="before")
    def _strip_user_agent(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> HarvestConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект HarvestConfig.

    Без явного пути используется ``configs/default.yaml``, а если его нет,
    значения по умолчанию. Явно указанный, но отсутствующий файл даёт
    FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return HarvestConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return HarvestConfig(**data)


__all__ = ["HarvestConfig", "OptimizerConfig", "load_config"]
