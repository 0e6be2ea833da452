"""
URL helpers for the crawl engine: de-duplication keys, origins and path depth.
"""
from __future__ import annotations

import re
from typing import Optional, Tuple
from urllib.parse import urlsplit

__all__ = ("normalize_url", "origin_of", "path_depth")

_DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}
_INDEX_SUFFIX_RE = re.compile(r"/index(\.html)?$")

Origin = Tuple[str, str, Optional[int]]


def _host(scheme: str, hostname: str, port: Optional[int]) -> str:
    if ":" in hostname:
        hostname = f"[{hostname}]"
    if port is None or _DEFAULT_PORTS.get(scheme) == port:
        return hostname
    return f"{hostname}:{port}"


def normalize_url(url: str) -> str:
    """
    Canonical de-duplication key: ``host + path + query``.

    One trailing slash and a trailing ``/index`` or ``/index.html`` are
    dropped, an empty path becomes ``/``. The fragment is not part of the key.
    Anything that is not a parsable absolute URL is returned unchanged, which
    also makes the function idempotent.
    """
    try:
        parts = urlsplit(url)
        scheme = parts.scheme.lower()
        hostname = parts.hostname
        port = parts.port
    except ValueError:
        return url
    if not scheme or not hostname:
        return url

    path = parts.path
    if path.endswith("/"):
        path = path[:-1]
    path = _INDEX_SUFFIX_RE.sub("", path) or "/"
    query = f"?{parts.query}" if parts.query else ""
    return f"{_host(scheme, hostname, port)}{path}{query}"


def origin_of(url: str) -> Origin:
    """Return ``(scheme, host, port)`` with the scheme's default port filled in.

    Raises :class:`ValueError` for URLs without scheme/host or with a bad port.
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    hostname = parts.hostname
    if not scheme or not hostname:
        raise ValueError(f"not an absolute URL: {url!r}")
    port = parts.port
    if port is None:
        port = _DEFAULT_PORTS.get(scheme)
    return scheme, hostname, port


def path_depth(url: str) -> int:
    """Number of non-empty ``/``-separated segments in the URL path."""
    return len([segment for segment in urlsplit(url).path.split("/") if segment])
