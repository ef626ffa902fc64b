# File: tests/conftest.py
from __future__ import annotations

from typing import Dict

import pytest

from schema_harvest.config import HarvestConfig
from schema_harvest.crawler.models import PageData
from schema_harvest.errors import FetchError


ARTICLE_JSONLD = """
{
  "@context": "https://schema.org",
  "@type": ["Article", "NewsArticle"],
  "headline": "Hello",
  "author": {"@type": "Person", "name": "Ann", "address": {"city": "Gent"}},
  "keywords": ["a", "b"]
}
"""

PRODUCT_JSONLD = '{"@context": "https://schema.org", "@type": "Product", "name": "Bike", "offers": {"price": 199.5, "inStock": true}}'


def html_page(*scripts: str, mime: str = "application/ld+json") -> str:
    """Build a small HTML document with one <script> per JSON-LD text."""
    body = "".join(f'<script type="{mime}">{s}</script>' for s in scripts)
    return f"<html><head><title>t</title>{body}</head><body><p>x</p></body></html>"


class FakeSource:
    """In-memory page source: url -> html, or url -> exception to raise."""

    def __init__(self, pages: Dict[str, object]) -> None:
        self.pages = pages
        self.calls: list[str] = []

    async def fetch(self, url: str) -> PageData:
        self.calls.append(url)
        page = self.pages.get(url)
        if page is None:
            raise FetchError(url, "Request failed with status code 404", 404)
        if isinstance(page, Exception):
            raise page
        return PageData(url=url, content=str(page))


@pytest.fixture()
def basic_config(tmp_path) -> HarvestConfig:
    """
    Return a basic valid HarvestConfig writing into tmp_path.
    """
    url_dir = tmp_path / "site-urls"
    url_dir.mkdir()
    return HarvestConfig(
        url_dir=url_dir,
        output_dir=tmp_path / "output",
        timeout=2.0,
        user_agent="TestAgent/1.0",
        rate_limit=100.0,
    )


@pytest.fixture()
def mock_page_data() -> PageData:
    """
    Provide a PageData instance with two JSON-LD blocks.
    """
    return PageData(url="http://example.com/", content=html_page(ARTICLE_JSONLD, PRODUCT_JSONLD))
