# File: schema_harvest/engine.py
"""schema_harvest.engine: Оркестрация обхода сайтов и сбора записей JSON-LD.

Сайты обрабатываются по одному, в порядке входного списка. Ошибки сайта и
блока не прерывают запуск: они становятся записями в корзинах
``CrawlError``, ``NoSchema`` и ``ParseError``.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Iterable, Optional, Protocol

from schema_harvest.aggregator import ResultRecord, ResultSet
from schema_harvest.classifier import classify
from schema_harvest.config import HarvestConfig
from schema_harvest.crawler.fetcher import Fetcher
from schema_harvest.crawler.models import PageData
from schema_harvest.enrichment import build_optimizer
from schema_harvest.errors import BlockDecodeError, FetchError
from schema_harvest.flatten import dump_json, flatten
from schema_harvest.logger import logger
from schema_harvest.parser.jsonld import decode_block, extract_blocks

__all__ = ["PageSource", "Optimize", "process_block", "process_site", "crawl_sites", "start_harvest"]

Optimize = Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]


class PageSource(Protocol):
    async def fetch(self, url: str) -> PageData: ...


async def process_block(
    url: str,
    raw: str,
    results: ResultSet,
    optimize: Optional[Optimize] = None,
) -> None:
    """Decode → (enrich) → classify → flatten → record для одного блока."""
    try:
        schema = decode_block(raw)
    except BlockDecodeError as exc:
        logger.warning("Error parsing schema for %s: %s", url, exc)
        results.add_parse_error(url, str(exc))
        return

    original = schema
    if optimize is not None:
        try:
            schema = await optimize(schema)
        except Exception as exc:
            logger.warning("Schema optimization failed for %s: %s", url, exc)
            schema = original
        if not isinstance(schema, dict):
            schema = original

    schema_type = classify(schema)
    fields = flatten(schema)
    if schema is not original:
        fields["originalSchema"] = dump_json(original)
    results.add(schema_type, ResultRecord.success(url, fields))
    logger.debug("Recorded %s block for %s", schema_type, url)


async def process_site(
    url: str,
    source: PageSource,
    results: ResultSet,
    optimize: Optional[Optimize] = None,
) -> ResultSet:
    """Проходит конечный автомат одного сайта и дописывает его записи в *results*."""
    logger.info("Crawling %s...", url)
    try:
        page = await source.fetch(url)
    except FetchError as exc:
        logger.warning("Error crawling %s: %s", url, exc)
        results.add_crawl_error(url, str(exc))
        return results
    except Exception as exc:
        logger.error("Unexpected error crawling %s: %s", url, exc)
        results.add_crawl_error(url, str(exc) or exc.__class__.__name__)
        return results

    blocks = extract_blocks(page)
    if not blocks:
        logger.info("No schema found for %s", url)
        results.add_no_schema(url)
        return results

    logger.debug("Found %d JSON-LD blocks on %s", len(blocks), url)
    for raw in blocks:
        try:
            await process_block(url, raw, results, optimize)
        except Exception as exc:
            logger.error("Unexpected error processing block on %s: %s", url, exc)
            results.add_parse_error(url, str(exc) or exc.__class__.__name__)
    return results


async def crawl_sites(
    sites: Iterable[str],
    source: PageSource,
    results: Optional[ResultSet] = None,
    optimize: Optional[Optimize] = None,
) -> ResultSet:
    """Обходит *sites* последовательно и возвращает наполненный ResultSet."""
    results = ResultSet() if results is None else results
    for url in sites:
        await process_site(url, source, results, optimize)
    return results


async def start_harvest(
    cfg: HarvestConfig,
    sites: Iterable[str],
    optimize: bool | None = None,
    results: Optional[ResultSet] = None,
) -> ResultSet:
    """
    Открывает HTTP-сессию и запускает обход списка сайтов.

    Parameters
    ----------
    cfg : HarvestConfig
        Конфигурация запуска.
    sites : Iterable[str]
        URL в порядке обхода.
    optimize : bool | None
        Переопределяет ``cfg.optimizer.enabled``, если задано.
    results : ResultSet | None
        Накопитель записей. Если обход отменён, в нём остаются записи уже
        обработанных сайтов.
    """
    optimizer_cfg = cfg.optimizer
    if optimize is not None:
        optimizer_cfg = optimizer_cfg.model_copy(update={"enabled": optimize})
    optimizer = build_optimizer(optimizer_cfg)

    async with Fetcher(cfg) as fetcher:
        return await crawl_sites(
            sites,
            fetcher,
            results,
            optimize=optimizer.optimize if optimizer is not None else None,
        )
