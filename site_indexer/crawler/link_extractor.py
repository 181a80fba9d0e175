# site_indexer/crawler/link_extractor.py
"""
Outbound link extraction for SiteIndexer.
"""
from __future__ import annotations

from typing import List, Union

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.element import Tag

from site_indexer.crawler.urls import resolve_url
from site_indexer.logger import get_logger

logger = get_logger("links")


def extract_links(html: Union[str, bytes], base_url: str) -> List[str]:
    """
    Extract every ``<a href>`` of *html*, resolved against *base_url*.

    Returns normalized absolute URLs, deduplicated, in document order.
    Unresolvable hrefs (``javascript:``, ``mailto:``, fragments, other
    schemes) are dropped; broken markup never aborts the extraction.
    """
    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as exc:
        logger.warning("Unparsable markup at %s: %s", base_url, exc)
        return []
    links: dict[str, None] = {}
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        resolved = resolve_url(base_url, href_val.strip())
        if resolved is not None:
            links.setdefault(resolved, None)
    logger.debug("Extracted %d links from %s", len(links), base_url)
    return list(links)


__all__ = ["extract_links"]
