"""CRUD operations for the ``documents`` table.

The crawler only ever inserts or updates rows; ``source_url`` (a normalized
URL) is the unique key, so a page has at most one row.
"""

from __future__ import annotations

import sqlite3
from time import time
from typing import Optional, Protocol

from site_indexer.db.models import DocumentPayload, DocumentRecord


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _row_to_document(row: sqlite3.Row) -> DocumentRecord:
    return DocumentRecord(
        doc_id=row["doc_id"],
        source_url=row["source_url"],
        parent_url=row["parent_url"],
        snippet=row["snippet"],
        full_content=row["full_content"],
        content_hash=row["content_hash"],
        etag=row["etag"],
        last_modified_header=row["last_modified_header"],
        last_crawled_at=row["last_crawled_at"],
        last_indexed_at=row["last_indexed_at"],
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def find_document_by_url(conn: sqlite3.Connection, url: str) -> Optional[DocumentRecord]:
    """Fetch the document stored for *url*.  Returns ``None`` if not found."""
    row = conn.execute(
        "SELECT * FROM documents WHERE source_url = ? LIMIT 1", (url,)
    ).fetchone()
    return _row_to_document(row) if row else None


def upsert_document(conn: sqlite3.Connection, payload: DocumentPayload) -> DocumentRecord:
    """Insert a document or update the row with the same ``source_url``.

    Both ``last_crawled_at`` and ``last_indexed_at`` are stamped.

    Raises:
        ValueError: If ``source_url`` or ``content_hash`` is missing.
    """
    if not payload.source_url:
        raise ValueError("Missing required field: source_url")
    if not payload.content_hash:
        raise ValueError("Missing required field: content_hash")

    now = int(time())
    with conn:
        conn.execute(
            """
            INSERT INTO documents (
                source_url, parent_url, snippet, full_content, content_hash,
                etag, last_modified_header, last_crawled_at, last_indexed_at
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(source_url) DO UPDATE SET
                parent_url = excluded.parent_url,
                snippet = excluded.snippet,
                full_content = excluded.full_content,
                content_hash = excluded.content_hash,
                etag = excluded.etag,
                last_modified_header = excluded.last_modified_header,
                last_crawled_at = excluded.last_crawled_at,
                last_indexed_at = excluded.last_indexed_at
            """,
            (
                payload.source_url,
                payload.parent_url,
                payload.snippet,
                payload.tokens,
                payload.content_hash,
                payload.etag,
                payload.last_modified_header,
                now,
                now,
            ),
        )

    return find_document_by_url(conn, payload.source_url)  # type: ignore[return-value]


def touch_document(conn: sqlite3.Connection, doc_id: int) -> None:
    """Refresh ``last_crawled_at`` without touching the indexed content.

    This is a no-op if the document does not exist.
    """
    with conn:
        conn.execute(
            "UPDATE documents SET last_crawled_at = ? WHERE doc_id = ?",
            (int(time()), doc_id),
        )


def count_documents(conn: sqlite3.Connection) -> int:
    row = conn.execute("SELECT COUNT(*) FROM documents").fetchone()
    return row[0] if row else 0


# ---------------------------------------------------------------------------
# Store abstraction used by the crawler
# ---------------------------------------------------------------------------

class DocumentStore(Protocol):
    """Key-value-by-URL view of the document storage."""

    def find_by_url(self, url: str) -> Optional[DocumentRecord]: ...

    def upsert(self, payload: DocumentPayload) -> DocumentRecord: ...

    def touch(self, doc_id: int) -> None: ...


class SqliteDocumentStore:
    """:class:`DocumentStore` backed by an open SQLite connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def find_by_url(self, url: str) -> Optional[DocumentRecord]:
        return find_document_by_url(self.conn, url)

    def upsert(self, payload: DocumentPayload) -> DocumentRecord:
        return upsert_document(self.conn, payload)

    def touch(self, doc_id: int) -> None:
        touch_document(self.conn, doc_id)

    def close(self) -> None:
        self.conn.close()
