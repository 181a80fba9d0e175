# File: tests/conftest.py
from __future__ import annotations

from collections import Counter
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

import pytest
from aiohttp import web

from site_indexer.config import CrawlerConfig
from site_indexer.db.models import DocumentRecord
from site_indexer.engine import open_store

Handler = Callable[[web.Request], "web.StreamResponse"]


@pytest.fixture()
def crawler_config(tmp_path: Path) -> CrawlerConfig:
    """
    Return a basic valid CrawlerConfig with seed list and database under tmp_path.
    """
    return CrawlerConfig(
        seed_file=tmp_path / "data" / "url_seeds.txt",
        db_path=tmp_path / "data" / "documents.db",
        max_depth=1,
        timeout=2.0,
        user_agent="TestAgent/1.0",
    )


@pytest.fixture()
def store(crawler_config: CrawlerConfig):
    """SQLite document store on a temporary file, schema initialised."""
    s = open_store(crawler_config)
    yield s
    s.close()


def make_record(**overrides) -> DocumentRecord:
    """A stored document with sensible defaults for fetcher/crawler tests."""
    fields = dict(
        doc_id=1,
        source_url="http://example.com/",
        parent_url=None,
        snippet="",
        full_content="",
        content_hash="0" * 64,
        etag=None,
        last_modified_header=None,
        last_crawled_at=None,
        last_indexed_at=None,
    )
    fields.update(overrides)
    return DocumentRecord(**fields)


def html_page(text: str, status: int = 200, headers: Optional[Dict[str, str]] = None):
    """Handler answering with a fixed HTML document."""

    async def handler(_: web.Request) -> web.Response:
        return web.Response(text=text, status=status, content_type="text/html", headers=headers)

    return handler


def make_app(routes: Dict[str, Handler]) -> Tuple[web.Application, Counter]:
    """Build an app from *routes*; the returned Counter records hits per path."""
    hits: Counter = Counter()

    @web.middleware
    async def count_hits(request: web.Request, handler):
        hits[request.path] += 1
        return await handler(request)

    app = web.Application(middlewares=[count_hits])
    for path, handler in routes.items():
        app.router.add_get(path, handler)
    return app, hits


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        await runner.cleanup()
