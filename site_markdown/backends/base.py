"""
Page-rendering capability consumed by the crawler and the content processor.

The engine depends only on :class:`PageHandle`; concrete adapters live in
:mod:`site_markdown.backends.browser` (Playwright) and
:mod:`site_markdown.backends.http` (aiohttp).
"""
from __future__ import annotations

from typing import Literal, Protocol, runtime_checkable

__all__ = ("PageHandle", "WaitUntil")

WaitUntil = Literal["load", "networkidle"]


@runtime_checkable
class PageHandle(Protocol):
    """One page owned by a single crawl or request at a time."""

    @property
    def url(self) -> str:
        """URL of the document currently shown (after redirects)."""
        ...

    async def goto(self, url: str, *, wait_until: WaitUntil = "load", timeout_ms: int = 30000) -> None:
        """Navigate and wait for the given lifecycle event; raise on failure."""
        ...

    async def content(self) -> str:
        """Serialized markup of the live rendered document."""
        ...

    async def set_interception(self, enabled: bool) -> None:
        """Toggle blocking of ad/tracker domains and media requests."""
        ...

    async def close(self) -> None:
        ...
