"""
Plain HTTP backend: fetches server-rendered HTML with aiohttp, no JavaScript.

Lifecycle events do not exist here, so ``wait_until`` is accepted and ignored.
"""
from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_markdown.backends.base import WaitUntil
from site_markdown.config import AppConfig
from site_markdown.logger import get_logger
from site_markdown.validation import is_blocked_domain, is_blocked_media

__all__ = ("HttpPage", "HttpSession")

_log = get_logger("backends.http")


class HttpPage:
    """:class:`~site_markdown.backends.base.PageHandle` over an aiohttp session."""

    def __init__(self, session: ClientSession, config: AppConfig) -> None:
        self.session = session
        self.config = config
        self._url = "about:blank"
        self._html = ""
        self._intercepting = False
        self._closed = False

    @property
    def url(self) -> str:
        return self._url

    async def goto(self, url: str, *, wait_until: WaitUntil = "load", timeout_ms: int = 30000) -> None:
        if self._closed:
            raise RuntimeError("Page is closed")
        if self._intercepting and self._is_blocked(url):
            raise ClientError(f"request blocked: {url}")
        timeout = ClientTimeout(total=timeout_ms / 1000)
        async with self.session.get(url, timeout=timeout, allow_redirects=True) as resp:
            if resp.status >= 400:
                raise ClientError(f"HTTP {resp.status} for {url}")
            text = await resp.text(errors="replace")
            self._url = str(resp.url)
            self._html = text
        _log.debug("Loaded %s (%d bytes, wait_until=%s)", self._url, len(text), wait_until)

    async def content(self) -> str:
        return self._html

    async def set_interception(self, enabled: bool) -> None:
        self._intercepting = enabled

    async def close(self) -> None:
        self._closed = True
        self._html = ""

    def _is_blocked(self, url: str) -> bool:
        try:
            parts = urlsplit(url)
        except ValueError:
            return False
        return is_blocked_domain(parts.hostname or "", self.config.blocked_domains) or is_blocked_media(
            parts.path, self.config.blocked_extensions
        )


class HttpSession:
    """Async context manager yielding an :class:`HttpPage` with its own ClientSession."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self.session: Optional[ClientSession] = None
        self._page: Optional[HttpPage] = None

    async def __aenter__(self) -> HttpPage:
        self.session = ClientSession(
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        )
        self._page = HttpPage(self.session, self.config)
        return self._page

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._page is not None:
            await self._page.close()
        if self.session and not self.session.closed:
            await self.session.close()
