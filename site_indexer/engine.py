# File: site_indexer/engine.py
"""site_indexer.engine: Orchestration layer для запуска обхода по списку семян."""

from __future__ import annotations

from typing import Optional

from site_indexer.config import CrawlerConfig
from site_indexer.crawler.crawler import AsyncCrawler
from site_indexer.crawler.models import CrawlStats
from site_indexer.db.connection import get_connection
from site_indexer.db.documents import DocumentStore, SqliteDocumentStore
from site_indexer.db.migrations import init_db
from site_indexer.logger import logger
from site_indexer.utils import read_seeds

__all__ = ["open_store", "start_crawl"]


def open_store(config: CrawlerConfig) -> SqliteDocumentStore:
    """Открывает базу документов из конфига и создаёт схему при необходимости."""
    conn = get_connection(config.db_path)
    init_db(conn)
    return SqliteDocumentStore(conn)


async def start_crawl(config: CrawlerConfig, store: Optional[DocumentStore] = None) -> CrawlStats:
    """
    Читает семена из config.seed_file и запускает AsyncCrawler.

    Parameters
    ----------
    config : CrawlerConfig
        Конфигурация обхода.
    store : DocumentStore, optional
        Хранилище документов; если не передано, открывается SQLite из config.db_path
        и закрывается по завершении.

    Returns
    -------
    CrawlStats
        Счётчики processed/indexed/skipped и список ошибок в порядке обхода.
    """
    seeds = read_seeds(config.seed_file)
    owned: Optional[SqliteDocumentStore] = None
    if store is None:
        owned = open_store(config)
        store = owned

    logger.info("Starting crawl of %s…", config.seed_file)
    try:
        async with AsyncCrawler(config, store) as crawler:
            stats = await crawler.crawl(seeds)
    finally:
        if owned is not None:
            owned.close()

    if stats.has_errors:
        logger.warning("Crawl finished with %d errors", len(stats.errors))
    return stats
