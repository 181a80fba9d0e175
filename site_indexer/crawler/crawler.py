# === FILE: site_indexer/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import hashlib
import hmac
import time
from typing import Optional, Sequence

from aiohttp import ClientSession

from site_indexer.config import CrawlerConfig
from site_indexer.crawler.fetcher import ConditionalFetcher, build_session
from site_indexer.crawler.link_extractor import extract_links
from site_indexer.crawler.models import CrawlRun, CrawlStats, FetchOutcome
from site_indexer.crawler.urls import normalize_url
from site_indexer.db.documents import DocumentStore
from site_indexer.db.models import DocumentPayload, DocumentRecord
from site_indexer.logger import get_logger
from site_indexer.text.tokenizer import preprocess_html

__all__ = ("AsyncCrawler",)


class AsyncCrawler:
    """
    Depth-bounded crawler over a seed list.

    Every seed is crawled depth-first; pages at a level below ``max_depth``
    have their first ``max_links_per_page`` links crawled one level deeper.
    Per-URL failures end up in :attr:`CrawlStats.errors`, never as exceptions.
    """

    def __init__(self, config: CrawlerConfig, store: DocumentStore) -> None:
        self.config = config
        self.store = store
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[ConditionalFetcher] = None
        self.logger = get_logger()
        self._fetch_slots = asyncio.Semaphore(config.concurrency)

    async def __aenter__(self) -> AsyncCrawler:
        self.session = build_session(self.config)
        self.fetcher = ConditionalFetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self, seeds: Sequence[str]) -> CrawlStats:
        """Crawl *seeds* in order and return the run statistics (partial ones on deadline)."""
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        run = CrawlRun()
        if not seeds:
            run.error("Seed list is empty.")
            return run.stats

        self.logger.info("Crawl started: %d seeds, max depth %d", len(seeds), self.config.max_depth)
        start = time.monotonic()
        try:
            await asyncio.wait_for(self._crawl_seeds(seeds, run), timeout=self.config.run_timeout)
        except asyncio.TimeoutError:
            self.logger.warning("Crawl deadline of %s s exceeded, returning partial stats", self.config.run_timeout)
            run.error(f"Crawl deadline of {self.config.run_timeout} s exceeded")

        stats = run.stats
        self.logger.info(
            "Crawl finished in %.2f s: processed=%d indexed=%d skipped=%d errors=%d",
            time.monotonic() - start, stats.processed, stats.indexed, stats.skipped, len(stats.errors),
        )
        return stats

    async def _crawl_seeds(self, seeds: Sequence[str], run: CrawlRun) -> None:
        for seed in seeds:
            url = normalize_url(seed)
            if url is None:
                run.error(f"Invalid URL: {seed}")
                continue
            await self._crawl(url, None, 0, run)

    async def _crawl(self, url: str, parent: Optional[str], level: int, run: CrawlRun) -> None:
        if level > self.config.max_depth:
            return
        if not run.claim(url):
            return

        existing = self.store.find_by_url(url)
        async with self._fetch_slots:
            outcome = await self.fetcher.fetch(url, existing)  # type: ignore[union-attr]

        body = self._index(outcome, existing, parent, run)
        if body is None or level >= self.config.max_depth:
            return

        links = extract_links(body, url)[: self.config.max_links_per_page]
        if self.config.concurrency > 1:
            await asyncio.gather(*(self._crawl(link, url, level + 1, run) for link in links))
        else:
            for link in links:
                await self._crawl(link, url, level + 1, run)

    def _index(
        self,
        outcome: FetchOutcome,
        existing: Optional[DocumentRecord],
        parent: Optional[str],
        run: CrawlRun,
    ) -> Optional[str]:
        """Store one fetched page; returns its decoded HTML when its links may be followed."""
        url = outcome.url
        stats = run.stats
        if not outcome.ok:
            self.logger.warning("Failed %s: %s", url, outcome.error)
            run.error(f"Error fetching {url}: {outcome.error}")
            return None

        if outcome.status == 304:
            if existing is not None:
                self.store.touch(existing.doc_id)
            stats.skipped += 1
            self.logger.debug("Not modified: %s", url)
            return None

        if outcome.status != 200:
            self.logger.warning("HTTP %s at %s", outcome.status, url)
            run.error(f"HTTP {outcome.status} at {url}")
            return None

        if not outcome.is_html:
            stats.skipped += 1
            self.logger.debug("Skipping non-HTML %s (%s)", url, outcome.content_type)
            return None

        html = outcome.text()
        processed = preprocess_html(html, snippet_length=self.config.snippet_length)
        if not processed.tokens:
            self.logger.warning("No indexable text at %s", url)
            run.error(f"Could not extract text from {url}")
            return None

        content_hash = hashlib.sha256(outcome.body or b"").hexdigest()
        stats.processed += 1

        if existing is not None and hmac.compare_digest(existing.content_hash, content_hash):
            self.store.touch(existing.doc_id)
            stats.skipped += 1
            self.logger.debug("Unchanged content: %s", url)
        else:
            self.store.upsert(
                DocumentPayload(
                    source_url=url,
                    parent_url=parent,
                    snippet=processed.snippet,
                    tokens=processed.token_text,
                    content_hash=content_hash,
                    etag=outcome.etag,
                    last_modified_header=outcome.last_modified,
                )
            )
            stats.indexed += 1
            self.logger.debug("Indexed %s (%d tokens, %s)", url, len(processed.tokens), processed.language)
        return html
