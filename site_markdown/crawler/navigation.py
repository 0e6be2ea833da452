"""
Two-stage navigation: wait for ``load``, fall back once to ``networkidle``.
"""
from __future__ import annotations

from site_markdown.backends.base import PageHandle
from site_markdown.errors import NavigationError
from site_markdown.logger import get_logger

__all__ = ("navigate_with_fallback", "DEFAULT_TIMEOUT_MS")

DEFAULT_TIMEOUT_MS = 30000

_log = get_logger("navigation")


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


async def navigate_with_fallback(page: PageHandle, url: str, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> None:
    """
    Navigate ``page`` to ``url``.

    The first attempt waits for the ``load`` event. If it fails for any reason
    the navigation is repeated once waiting for ``networkidle`` with the same
    timeout. A second failure raises :class:`NavigationError` chained to it.
    The URL is used as given.
    """
    try:
        _log.debug("Attempting navigation to %s with 'load' strategy", url)
        await page.goto(url, wait_until="load", timeout_ms=timeout_ms)
        return
    except Exception as exc:
        _log.debug("'load' strategy failed for %s, trying 'networkidle': %s", url, _describe(exc))

    try:
        await page.goto(url, wait_until="networkidle", timeout_ms=timeout_ms)
    except Exception as exc:
        _log.warning("Both navigation strategies failed for %s: %s", url, _describe(exc))
        raise NavigationError(url, _describe(exc)) from exc
