# site_indexer/crawler/urls.py
"""
URL canonicalisation and link resolution for SiteIndexer.

Two URLs that normalize to the same string are the same page: the normalized
form is both the visited-set key of a crawl run and the storage key of a
document.
"""
from __future__ import annotations

import re
from typing import List, Optional
from urllib.parse import urlsplit

__all__ = ("normalize_url", "resolve_url")

_ALLOWED_SCHEMES = ("http", "https")
_SCHEME_PREFIX_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*)://")
# scheme followed by ":" (absolute href such as "https:", "tel:", "ftp:")
_HREF_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")
_INVALID_HOST_RE = re.compile(r"[\s<>\"{}|\\^`%/?#@]")
_MAX_LABEL_LENGTH = 63


def _is_valid_host(host: str) -> bool:
    """Host name the resolver can encode: no stray characters, DNS labels of 1..63 chars."""
    if _INVALID_HOST_RE.search(host):
        return False
    if ":" in host:
        # IPv6 literal
        return True
    labels = host[:-1].split(".") if host.endswith(".") else host.split(".")
    if any(not label or len(label) > _MAX_LABEL_LENGTH for label in labels):
        return False
    try:
        host.encode("idna")
    except UnicodeError:
        return False
    return True


def normalize_url(url: str) -> Optional[str]:
    """
    Canonicalise *url* to ``scheme://host[:port]path[?query]``.

    Adds ``http://`` when no scheme is given, lower-cases scheme and host,
    turns an empty path into ``/`` and strips trailing slashes from any other
    path. The query is kept verbatim, the fragment is dropped.
    Returns None for empty input, non-http(s) schemes and unparsable hosts.
    """
    url = (url or "").strip()
    if not url:
        return None

    match = _SCHEME_PREFIX_RE.match(url)
    if match is None:
        url = "http://" + url
    elif match.group(1).lower() not in _ALLOWED_SCHEMES:
        return None

    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError:
        return None

    scheme = parts.scheme.lower()
    host = parts.hostname
    if scheme not in _ALLOWED_SCHEMES or not host or not _is_valid_host(host):
        return None
    if ":" in host:
        host = f"[{host}]"

    path = parts.path.rstrip("/") or "/"
    query = f"?{parts.query}" if parts.query else ""
    port_part = f":{port}" if port is not None else ""
    return f"{scheme}://{host}{port_part}{path}{query}"


def _resolve_segments(path: str) -> str:
    """Drop ``.`` segments, let ``..`` pop the previous one, rejoin with one leading slash."""
    segments: List[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if segments:
                segments.pop()
        else:
            segments.append(segment)
    return "/" + "/".join(segments)


def resolve_url(base: str, href: str) -> Optional[str]:
    """
    Resolve an ``href`` found on the page *base* into a normalized absolute URL.

    Returns None for empty, ``javascript:``, ``mailto:`` and fragment-only
    hrefs, for absolute hrefs with a scheme other than http(s), and when
    *base* has no scheme or host.
    """
    href = (href or "").strip()
    if not href or href.startswith("#"):
        return None
    lowered = href.lower()
    if lowered.startswith(("javascript:", "mailto:")):
        return None

    scheme_match = _HREF_SCHEME_RE.match(href)
    if scheme_match is not None:
        if scheme_match.group(1).lower() not in _ALLOWED_SCHEMES:
            return None
        return normalize_url(href)

    try:
        base_parts = urlsplit(base)
        base_port = base_parts.port
    except ValueError:
        return None
    if not base_parts.scheme or not base_parts.hostname:
        return None

    if href.startswith("//"):
        return normalize_url(f"{base_parts.scheme}:{href}")

    # the href's own fragment is irrelevant and its query must not take part
    # in segment resolution
    href = href.split("#", 1)[0]
    href_path, sep, href_query = href.partition("?")
    query = f"?{href_query}" if sep and href_query else ""

    base_path = base_parts.path or "/"
    if href.startswith("/"):
        path = href_path
    elif href.startswith("?"):
        path = base_path
    else:
        directory = base_path[: base_path.rfind("/") + 1] or "/"
        path = directory + href_path

    host = base_parts.hostname
    if ":" in host:
        host = f"[{host}]"
    port_part = f":{base_port}" if base_port is not None else ""
    return normalize_url(f"{base_parts.scheme}://{host}{port_part}{_resolve_segments(path)}{query}")
