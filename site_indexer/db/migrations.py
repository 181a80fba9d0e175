"""Database initialisation helpers.

``init_db(conn)`` is idempotent and can run on an existing database.
"""

from __future__ import annotations

import sqlite3

SCHEMA = """
CREATE TABLE IF NOT EXISTS documents (
    doc_id               INTEGER PRIMARY KEY AUTOINCREMENT,
    source_url           TEXT NOT NULL UNIQUE,
    parent_url           TEXT,
    snippet              TEXT NOT NULL DEFAULT '',
    full_content         TEXT NOT NULL DEFAULT '',
    content_hash         TEXT NOT NULL,
    etag                 TEXT,
    last_modified_header TEXT,
    last_crawled_at      INTEGER,
    last_indexed_at      INTEGER
);

CREATE INDEX IF NOT EXISTS idx_documents_parent_url ON documents (parent_url);
"""


def init_db(conn: sqlite3.Connection) -> None:
    """Create the ``documents`` table and its indexes.

    Every DDL statement uses ``IF NOT EXISTS`` so calling this multiple times
    on the same database is safe.
    """
    conn.executescript(SCHEMA)
