# schema_harvest/crawler/fetcher.py
"""
Fetcher module: handles HTTP requests with rate limiting, retry/backoff, and timeout.

Unlike a crawler, the fetcher never swallows failures: every unsuccessful
request ends in :class:`~schema_harvest.errors.FetchError`, which the engine
turns into a ``CrawlError`` record.
"""
from __future__ import annotations

import asyncio
import random
import time
from typing import Optional, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout, InvalidURL

from schema_harvest.config import HarvestConfig
from schema_harvest.crawler.models import PageData
from schema_harvest.errors import FetchError
from schema_harvest.logger import get_logger

__all__ = ("Fetcher",)


class Fetcher:
    """Handles HTTP fetching with rate limit, retries/backoff, and timeout."""

    _RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)

    def __init__(self, config: HarvestConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None
        self._rate_lock = asyncio.Lock()
        self._last_request_ts = 0.0
        self.logger = get_logger("fetcher")

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def fetch(self, url: str) -> PageData:
        """
        Fetch *url* and return its markup.

        Raises FetchError on network failure, timeout or a non-2xx status.
        5xx and 429 responses are retried ``config.retry_times`` times.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")

        attempts = 0
        while True:
            await self._wait_for_rate_limit()
            try:
                async with self.session.get(url) as resp:
                    status = resp.status
                    if status in self._RETRY_STATUS and attempts < self.config.retry_times:
                        raise ClientError(f"retryable status {status}")
                    if not 200 <= status < 300:
                        raise FetchError(url, f"Request failed with status code {status}", status)
                    text = await resp.text(errors="replace")
                    return PageData(url, text, status)
            except asyncio.TimeoutError as exc:
                raise FetchError(url, f"Timeout after {self.config.timeout} s") from exc
            except (InvalidURL, ValueError) as exc:
                # InvalidURL is also a ClientError; malformed URLs are never retried
                raise FetchError(url, f"Invalid URL: {exc}") from exc
            except ClientError as exc:
                attempts += 1
                if attempts > self.config.retry_times:
                    raise FetchError(url, str(exc) or exc.__class__.__name__) from exc
                backoff = min(60, 2**attempts + random.random())
                self.logger.debug(
                    "Retry %d/%d for %s after %.2f s", attempts, self.config.retry_times, url, backoff
                )
                await asyncio.sleep(backoff)

    async def _wait_for_rate_limit(self) -> None:
        interval = 1 / self.config.rate_limit
        async with self._rate_lock:
            now = time.monotonic()
            wait = interval - (now - self._last_request_ts)
            if wait > 0:
                await asyncio.sleep(wait)
            self._last_request_ts = time.monotonic()
