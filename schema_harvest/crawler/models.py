# schema_harvest/crawler/models.py
"""
Data models for the SchemaHarvest fetcher.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class PageData:
    """Holds the requested URL, final HTTP status and decoded markup of a page."""

    url: str
    content: str
    status: int = 200
