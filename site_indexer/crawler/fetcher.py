# site_indexer/crawler/fetcher.py
"""
Fetcher module: one conditional HTTP GET per URL, with revalidation headers
derived from the stored document, bounded redirects and a total timeout.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_indexer.config import CrawlerConfig
from site_indexer.crawler.models import FetchOutcome
from site_indexer.db.models import DocumentRecord
from site_indexer.logger import get_logger

ACCEPT_HTML = "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8"

logger = get_logger("fetcher")


def build_session(config: CrawlerConfig) -> ClientSession:
    """Session shared by every fetch of a run: total timeout and User-Agent from *config*."""
    return ClientSession(
        timeout=ClientTimeout(total=config.timeout),
        headers={"User-Agent": config.user_agent},
        raise_for_status=False,
    )


class ConditionalFetcher:
    """Performs conditional GETs; transport failures are reported, never raised."""

    def __init__(self, session: ClientSession, config: CrawlerConfig) -> None:
        self.session = session
        self.config = config

    @staticmethod
    def build_headers(prior: Optional[DocumentRecord]) -> Dict[str, str]:
        headers = {"Accept": ACCEPT_HTML}
        if prior is not None:
            if prior.etag:
                headers["If-None-Match"] = prior.etag
            if prior.last_modified_header:
                headers["If-Modified-Since"] = prior.last_modified_header
        return headers

    async def fetch(self, url: str, prior: Optional[DocumentRecord] = None) -> FetchOutcome:
        """
        GET *url* once.

        Returns a FetchOutcome with ``error`` set on transport failure
        (DNS, connect, TLS, timeout, too many redirects, unencodable host)
        and with the HTTP status otherwise. ETag / Last-Modified fall back to *prior*'s values.
        """
        prior_etag = prior.etag if prior else None
        prior_modified = prior.last_modified_header if prior else None

        try:
            async with self.session.get(
                url,
                headers=self.build_headers(prior),
                allow_redirects=True,
                max_redirects=self.config.max_redirects,
            ) as resp:
                body = await resp.read()
                outcome = FetchOutcome(
                    url=url,
                    status=resp.status,
                    body=body,
                    content_type=resp.headers.get("Content-Type", ""),
                    etag=resp.headers.get("ETag") or prior_etag,
                    last_modified=resp.headers.get("Last-Modified") or prior_modified,
                )
        except (ClientError, asyncio.TimeoutError, UnicodeError, ValueError) as exc:
            # UnicodeError/ValueError: host or URL rejected by the resolver or yarl
            message = str(exc) or type(exc).__name__
            logger.debug("Transport error for %s: %s", url, message)
            return FetchOutcome(
                url=url,
                content_type="",
                etag=prior_etag,
                last_modified=prior_modified,
                error=message,
            )

        logger.debug("GET %s -> %s (%s)", url, outcome.status, outcome.content_type or "no content type")
        return outcome


__all__ = ["ConditionalFetcher", "build_session", "ACCEPT_HTML"]
