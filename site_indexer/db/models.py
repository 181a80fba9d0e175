"""Dataclass models representing rows of the ``documents`` table.

These are plain Python objects – not ORM models.  The DB layer serialises /
deserialises to and from these types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class DocumentRecord:
    """One crawled page, keyed by its normalized ``source_url``."""

    doc_id: int
    source_url: str
    parent_url: Optional[str]
    snippet: str
    full_content: str
    content_hash: str
    etag: Optional[str]
    last_modified_header: Optional[str]
    last_crawled_at: Optional[int]
    last_indexed_at: Optional[int]


@dataclass(slots=True)
class DocumentPayload:
    """Everything the crawler writes when a page is (re)indexed."""

    source_url: str
    parent_url: Optional[str]
    snippet: str
    tokens: str
    content_hash: str
    etag: Optional[str] = None
    last_modified_header: Optional[str] = None


__all__ = ["DocumentRecord", "DocumentPayload"]
