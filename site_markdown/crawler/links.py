"""
Same-origin link discovery on a loaded page.
"""
from __future__ import annotations

from typing import List
from urllib.parse import urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup, SoupStrainer
from bs4.element import Tag

from site_markdown.backends.base import PageHandle
from site_markdown.crawler.urls import normalize_url, origin_of
from site_markdown.logger import get_logger

__all__ = ("extract_internal_links", "collect_hrefs", "filter_same_origin")

_log = get_logger("links")

# parse only <a href> tags
_LINK_STRAINER = SoupStrainer("a", href=True)


def collect_hrefs(html: str) -> List[str]:
    """Raw ``href`` attribute values of every ``<a href>`` in document order."""
    soup = BeautifulSoup(html, "html.parser", parse_only=_LINK_STRAINER)
    hrefs: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if isinstance(href, str):
            hrefs.append(href.strip())
    return hrefs


def _lowercase_origin(url: str) -> str:
    """Lower-case scheme and host; userinfo, port and path keep their case."""
    parts = urlsplit(url)
    userinfo, at, hostport = parts.netloc.rpartition("@")
    scheme = parts.scheme.lower()
    netloc = f"{userinfo}{at}{hostport.lower()}"
    if (scheme, netloc) == (parts.scheme, parts.netloc):
        return url
    return urlunsplit((scheme, netloc, parts.path, parts.query, parts.fragment))


def filter_same_origin(hrefs: List[str], base_url: str) -> List[str]:
    """
    Resolve ``hrefs`` against ``base_url`` and keep the ones on its origin.

    Scheme and host are lower-cased. Unresolvable entries are dropped
    silently. The result is de-duplicated by exact string, first occurrence
    wins.
    """
    base_origin = origin_of(base_url)
    seen: dict[str, None] = {}
    for href in hrefs:
        try:
            absolute = _lowercase_origin(urljoin(base_url, href))
            if origin_of(absolute) != base_origin:
                continue
        except ValueError:
            _log.debug("Dropping unresolvable link %r", href)
            continue
        seen.setdefault(absolute, None)
    return list(seen)


async def extract_internal_links(page: PageHandle, base_url: str) -> List[str]:
    """
    Same-origin outbound links of the page currently shown, excluding itself.

    The self-link check compares normalized keys against ``page.url`` (the
    rendered URL, which may differ from the requested one after redirects).
    """
    current_key = normalize_url(page.url)
    links = filter_same_origin(collect_hrefs(await page.content()), base_url)
    return [link for link in links if normalize_url(link) != current_key]
