"""SQLite connection factory.

Usage::

    from site_indexer.db.connection import get_connection

    with closing(get_connection(config.db_path)) as conn:
        conn.execute("SELECT 1")
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Union


def get_connection(db_path: Union[str, Path]) -> sqlite3.Connection:
    """Open and configure a SQLite connection.

    Steps performed on every new connection:
    1. Create the parent directory of a file database.
    2. Enable ``PRAGMA foreign_keys = ON``.
    3. Switch file databases to WAL journal mode.

    Returns:
        A configured :class:`sqlite3.Connection` with ``row_factory`` set to
        :class:`sqlite3.Row` so columns can be accessed by name.
    """
    in_memory = str(db_path) == ":memory:"
    if not in_memory:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row

    conn.execute("PRAGMA foreign_keys = ON")
    if not in_memory:
        conn.execute("PRAGMA journal_mode = WAL")

    return conn
