# site_indexer/crawler/models.py
"""
Data models for the SiteIndexer crawler.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Set

_DEFAULT_ENCODING = "utf-8"


@dataclass(slots=True)
class FetchOutcome:
    """Result of a single conditional GET.

    Exactly one of ``error`` / ``status`` is set. Revalidation tokens are
    inherited from the stored record whenever the response does not carry
    them (or there was no response at all).
    """

    url: str
    status: Optional[int] = None
    body: Optional[bytes] = None
    content_type: str = ""
    etag: Optional[str] = None
    last_modified: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def is_html(self) -> bool:
        return "text/html" in self.content_type.lower()

    @property
    def encoding(self) -> str:
        """Charset parameter of the Content-Type header (utf-8 when absent)."""
        for param in self.content_type.split(";")[1:]:
            key, _, value = param.partition("=")
            if key.strip().lower() == "charset" and value.strip():
                return value.strip().strip("\"'")
        return _DEFAULT_ENCODING

    def text(self) -> str:
        """Body decoded with the announced charset; undecodable bytes are replaced."""
        if not self.body:
            return ""
        try:
            return self.body.decode(self.encoding, errors="replace")
        except LookupError:
            return self.body.decode(_DEFAULT_ENCODING, errors="replace")


@dataclass(slots=True)
class CrawlStats:
    """Counters and ordered error messages accumulated during one crawl run."""

    processed: int = 0
    indexed: int = 0
    skipped: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class CrawlRun:
    """Per-run context threaded through the traversal: visited URLs and stats."""

    visited: Set[str] = field(default_factory=set)
    stats: CrawlStats = field(default_factory=CrawlStats)

    def claim(self, url: str) -> bool:
        """Mark *url* visited; False if it was already claimed in this run.

        Check and mark happen without an await in between, so concurrent
        tasks on the same event loop can never both claim one URL.
        """
        if url in self.visited:
            return False
        self.visited.add(url)
        return True

    def error(self, message: str) -> None:
        self.stats.errors.append(message)


__all__ = ["FetchOutcome", "CrawlStats", "CrawlRun"]
