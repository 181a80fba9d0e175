"""Database layer package.

Public re-exports so callers can write::

    from site_indexer.db import get_connection, init_db, SqliteDocumentStore
"""

from site_indexer.db.connection import get_connection
from site_indexer.db.documents import (
    DocumentStore,
    SqliteDocumentStore,
    count_documents,
    find_document_by_url,
    touch_document,
    upsert_document,
)
from site_indexer.db.migrations import init_db
from site_indexer.db.models import DocumentPayload, DocumentRecord

__all__ = [
    "get_connection",
    "init_db",
    "DocumentStore",
    "SqliteDocumentStore",
    "DocumentRecord",
    "DocumentPayload",
    "find_document_by_url",
    "upsert_document",
    "touch_document",
    "count_documents",
]
