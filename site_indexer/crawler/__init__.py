"""site_indexer.crawler: обход семян, условная загрузка страниц и извлечение ссылок."""

from .crawler import AsyncCrawler
from .fetcher import ConditionalFetcher, build_session
from .link_extractor import extract_links
from .models import CrawlRun, CrawlStats, FetchOutcome
from .urls import normalize_url, resolve_url

__all__ = [
    "AsyncCrawler",
    "ConditionalFetcher",
    "CrawlRun",
    "CrawlStats",
    "FetchOutcome",
    "build_session",
    "extract_links",
    "normalize_url",
    "resolve_url",
]
