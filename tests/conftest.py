# File: tests/conftest.py
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Dict, Iterable, List, Optional, Tuple

import pytest

from site_markdown.config import AppConfig


def link_page(*hrefs: str, body: str = "") -> str:
    """HTML document with one <a> per href."""
    anchors = "".join(f'<a href="{h}">{h}</a>' for h in hrefs)
    return f"<html><head><title>t</title></head><body>{body}{anchors}</body></html>"


class FakePage:
    """
    In-memory PageHandle over a dict ``url -> html``.

    ``fail`` URLs raise on every navigation, ``fail_load`` URLs only on the
    ``load`` strategy, ``redirects`` map a requested URL to the one rendered.
    """

    def __init__(
        self,
        site: Dict[str, str],
        *,
        fail: Iterable[str] = (),
        fail_load: Iterable[str] = (),
        redirects: Optional[Dict[str, str]] = None,
    ) -> None:
        self.site = dict(site)
        self.fail = set(fail)
        self.fail_load = set(fail_load)
        self.redirects = dict(redirects or {})
        self.gotos: List[Tuple[str, str]] = []
        self.interception: List[bool] = []
        self.closed = False
        self._url = "about:blank"
        self._html = ""

    @property
    def url(self) -> str:
        return self._url

    @property
    def visited_urls(self) -> List[str]:
        return [url for url, _ in self.gotos]

    async def goto(self, url: str, *, wait_until: str = "load", timeout_ms: int = 30000) -> None:
        self.gotos.append((url, wait_until))
        if url in self.fail:
            raise RuntimeError(f"net::ERR_CONNECTION_REFUSED at {url}")
        if url in self.fail_load and wait_until == "load":
            raise TimeoutError(f"Navigation timeout of {timeout_ms} ms exceeded")
        target = self.redirects.get(url, url)
        if target not in self.site:
            raise RuntimeError(f"net::ERR_NAME_NOT_RESOLVED at {url}")
        self._url = target
        self._html = self.site[target]

    async def content(self) -> str:
        return self._html

    async def set_interception(self, enabled: bool) -> None:
        self.interception.append(enabled)

    async def close(self) -> None:
        self.closed = True


def fake_factory(page: FakePage):
    """Page factory compatible with ``open_page`` that always yields ``page``."""

    @asynccontextmanager
    async def factory(config: AppConfig):
        await page.set_interception(True)
        try:
            yield page
        finally:
            await page.close()

    return factory


@pytest.fixture()
def config() -> AppConfig:
    return AppConfig(backend="http", navigation_timeout_ms=2000, max_pages=10)


@pytest.fixture()
def small_site() -> Dict[str, str]:
    """Seed with two children; one child links back and to a grandchild."""
    return {
        "https://example.com": link_page("/about", "/docs/", "https://other.org/x", body="<h1>Home</h1>"),
        "https://example.com/about": link_page("/", "/docs/intro", body="<h1>About</h1>"),
        "https://example.com/docs/": link_page(body="<h1>Docs</h1><p>Read me.</p>"),
        "https://example.com/docs/intro": link_page("/about", body="<h1>Intro</h1>"),
    }
