# File: tests/test_link_extractor.py
from site_indexer.crawler.link_extractor import extract_links

BASE = "http://example.com/blog/post.html"


def test_extract_links_resolves_and_dedupes():
    html = """
    <html><body>
      <a href="/about/">About</a>
      <a href="next.html">Next</a>
      <a href="http://EXAMPLE.com/about">About again</a>
      <a href="https://other.org/page?x=1">Elsewhere</a>
      <a href="javascript:void(0)">JS</a>
      <a href="mailto:team@example.com">Mail</a>
      <a href="#comments">Comments</a>
      <a>No href</a>
      <a href="">Empty</a>
    </body></html>
    """
    assert extract_links(html, BASE) == [
        "http://example.com/about",
        "http://example.com/blog/next.html",
        "https://other.org/page?x=1",
    ]


def test_extract_links_survives_malformed_markup():
    html = "<div><a href='/x'>x<p><a href=/y>y</div></span><a href=\"../z\""
    links = extract_links(html, BASE)
    assert "http://example.com/x" in links
    assert "http://example.com/y" in links


def test_extract_links_accepts_bytes():
    html = b'<p><a href="/x">x</a> <a href="y/">y</a></p>'
    assert extract_links(html, BASE) == ["http://example.com/x", "http://example.com/blog/y"]


def test_extract_links_without_anchors():
    assert extract_links("<p>No links here</p>", BASE) == []
