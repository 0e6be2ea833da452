"""
Headless-browser backend built on Playwright's async API.

Locally a Chromium instance is launched; with ``browser_endpoint`` configured
the session attaches to a remote (edge-hosted) browser over CDP instead.
"""
from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

from playwright.async_api import Browser, Page, Playwright, Route, async_playwright

from site_markdown.backends.base import WaitUntil
from site_markdown.config import AppConfig
from site_markdown.logger import get_logger
from site_markdown.validation import is_blocked_domain, is_blocked_media

__all__ = ("BrowserPage", "BrowserSession")

_log = get_logger("backends.browser")

# resource types that must never be blocked
_PASS_THROUGH = frozenset({"document"})


class BrowserPage:
    """:class:`~site_markdown.backends.base.PageHandle` over a Playwright page."""

    def __init__(self, page: Page, config: AppConfig) -> None:
        self._page = page
        self._config = config
        self._intercepting = False

    @property
    def url(self) -> str:
        return self._page.url

    async def goto(self, url: str, *, wait_until: WaitUntil = "load", timeout_ms: int = 30000) -> None:
        await self._page.goto(url, wait_until=wait_until, timeout=timeout_ms)

    async def content(self) -> str:
        return await self._page.content()

    async def set_interception(self, enabled: bool) -> None:
        if enabled == self._intercepting:
            return
        if enabled:
            await self._page.route("**/*", self._handle_route)
        else:
            await self._page.unroute("**/*", self._handle_route)
        self._intercepting = enabled

    async def close(self) -> None:
        if not self._page.is_closed():
            await self._page.close()

    async def _handle_route(self, route: Route) -> None:
        request = route.request
        if request.resource_type in _PASS_THROUGH:
            await route.continue_()
            return
        try:
            parts = urlsplit(request.url)
            hostname, path = parts.hostname or "", parts.path
        except ValueError:
            _log.debug("URL parsing failed for request: %s", request.url)
            await route.continue_()
            return
        if is_blocked_domain(hostname, self._config.blocked_domains) or is_blocked_media(
            path, self._config.blocked_extensions
        ):
            _log.debug("Blocked request: %s (%s)", request.url, request.resource_type)
            await route.abort()
        else:
            await route.continue_()


class BrowserSession:
    """Async context manager: start Playwright, get a browser, yield a fresh page."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._page: Optional[BrowserPage] = None

    async def __aenter__(self) -> BrowserPage:
        self._playwright = await async_playwright().start()
        try:
            chromium = self._playwright.chromium
            if self.config.browser_endpoint:
                _log.info("Connecting to remote browser at %s", self.config.browser_endpoint)
                self._browser = await chromium.connect_over_cdp(self.config.browser_endpoint)
            else:
                self._browser = await chromium.launch(headless=self.config.headless)
            context = await self._browser.new_context(user_agent=self.config.user_agent)
            self._page = BrowserPage(await context.new_page(), self.config)
        except BaseException:
            await self._shutdown()
            raise
        _log.debug("Browser initialized and page created")
        return self._page

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._shutdown()

    async def _shutdown(self) -> None:
        if self._page is not None:
            await self._page.close()
            self._page = None
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
