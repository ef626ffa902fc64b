# File: schema_harvest/enrichment.py
"""schema_harvest.enrichment: Необязательная LLM-оптимизация схем JSON-LD.

Работает по принципу best effort: любая ошибка клиента, сети или ответа
модели логируется, и вызывающий получает исходную схему без изменений.

Configuration via :class:`~schema_harvest.config.OptimizerConfig` and the
environment variable it names (``OPENAI_API_KEY`` by default).
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

from openai import AsyncOpenAI

from schema_harvest.config import OptimizerConfig
from schema_harvest.errors import EnrichmentError
from schema_harvest.logger import get_logger

__all__ = ["SchemaOptimizer", "build_optimizer"]

logger = get_logger("enrichment")

_PROMPT = """Analyze and optimize this schema.org JSON-LD schema:
{schema}

Return only the optimized JSON-LD schema with:
1. All required properties for this type
2. Most relevant recommended properties
3. Proper nesting and relationships
4. Valid schema.org vocabulary
"""


class SchemaOptimizer:
    """Обёртка над OpenAI-совместимым chat completions endpoint."""

    def __init__(self, config: OptimizerConfig, client: Optional[Any] = None) -> None:
        self.config = config
        if client is None:
            api_key = os.getenv(config.api_key_env)
            if not api_key:
                raise EnrichmentError(f"Missing LLM API key. Set {config.api_key_env}.")
            kwargs: Dict[str, Any] = {"api_key": api_key, "timeout": config.timeout}
            if config.base_url:
                kwargs["base_url"] = config.base_url
            client = AsyncOpenAI(**kwargs)
        self._client = client

    async def _complete(self, schema: Dict[str, Any]) -> Dict[str, Any]:
        prompt = _PROMPT.format(schema=json.dumps(schema, ensure_ascii=False, indent=2))
        resp = await self._client.chat.completions.create(
            model=self.config.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.config.temperature,
        )
        content = resp.choices[0].message.content if resp.choices else None
        if not content:
            raise EnrichmentError("empty completion")
        try:
            optimized = json.loads(content)
        except json.JSONDecodeError as exc:
            raise EnrichmentError(f"completion is not JSON: {exc}") from exc
        if not isinstance(optimized, dict):
            raise EnrichmentError(f"completion is not a JSON object: {type(optimized).__name__}")
        return optimized

    async def optimize(self, schema: Dict[str, Any]) -> Dict[str, Any]:
        """Возвращает оптимизированную схему или исходную при любой ошибке."""
        try:
            return await self._complete(schema)
        except Exception as exc:
            logger.warning("Schema optimization failed: %s", exc)
            return schema


def build_optimizer(config: OptimizerConfig) -> Optional[SchemaOptimizer]:
    """Создаёт оптимизатор, если он включён; без ключа API работа продолжается без него."""
    if not config.enabled:
        return None
    try:
        return SchemaOptimizer(config)
    except EnrichmentError as exc:
        logger.warning("Schema optimization disabled: %s", exc)
        return None
