"""schema_harvest.crawler: HTTP-загрузка страниц для сбора JSON-LD."""

from .fetcher import Fetcher
from .models import PageData

__all__ = ["Fetcher", "PageData"]
