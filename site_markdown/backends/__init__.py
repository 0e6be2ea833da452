"""site_markdown.backends: page-rendering adapters behind one :class:`PageHandle` protocol."""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from site_markdown.backends.base import PageHandle, WaitUntil
from site_markdown.config import AppConfig

__all__ = ["PageHandle", "WaitUntil", "open_page"]


@asynccontextmanager
async def open_page(config: AppConfig) -> AsyncIterator[PageHandle]:
    """Acquire a fresh page for the configured backend, with interception enabled.

    The page (and its browser / HTTP session) is closed on exit. Every caller
    gets its own page; never share one between concurrent crawls.
    """
    if config.backend == "http":
        from site_markdown.backends.http import HttpSession

        session = HttpSession(config)
    else:
        # playwright is only imported when a browser is actually requested
        from site_markdown.backends.browser import BrowserSession

        session = BrowserSession(config)

    async with session as page:
        await page.set_interception(True)
        yield page
