"""
Crawl engine: same-origin traversal with a budget of successful page visits.

One crawl owns one page handle and runs a single sequential loop; the only
suspension points are navigation, content processing and link extraction.
"""
from __future__ import annotations

import logging
import time
from typing import Awaitable, Callable, Dict, List, Optional, Set

from site_markdown.backends.base import PageHandle
from site_markdown.crawler.links import extract_internal_links
from site_markdown.crawler.models import (
    CrawlConfigEcho,
    CrawlError,
    CrawlMetadata,
    CrawlSiteResult,
    CrawlStats,
    CrawlTiming,
    PageResult,
)
from site_markdown.crawler.navigation import DEFAULT_TIMEOUT_MS, navigate_with_fallback
from site_markdown.crawler.urls import normalize_url, path_depth
from site_markdown.errors import NavigationError, ProcessingError
from site_markdown.logger import get_logger

__all__ = ("crawl_site", "PageProcessor", "MAX_ATTEMPTS_PER_PAGE")

PageProcessor = Callable[[PageHandle], Awaitable[str]]

#: navigation attempts allowed per unit of budget before the crawl is cut short
MAX_ATTEMPTS_PER_PAGE = 1000


class _CrawlState:
    """Mutable bookkeeping of one crawl; never outlives :func:`crawl_site`."""

    def __init__(self, base_url: str) -> None:
        # normalized key -> raw URL, insertion ordered (FIFO)
        self.frontier: Dict[str, str] = {normalize_url(base_url): base_url}
        self.visited: Set[str] = set()
        self.all_links: Dict[str, None] = {base_url: None}
        self.pages: List[PageResult] = []
        self.errors: List[CrawlError] = []
        self.successful = 0
        self.max_depth = 0

    def pop(self) -> tuple[str, str]:
        key = next(iter(self.frontier))
        return key, self.frontier.pop(key)

    def enqueue(self, links: List[str]) -> List[str]:
        """Record every link, queue those whose key is neither visited nor queued."""
        added: List[str] = []
        for link in links:
            self.all_links.setdefault(link, None)
            key = normalize_url(link)
            if key in self.visited or key in self.frontier:
                continue
            self.frontier[key] = link
            added.append(link)
        return added

    def fail(self, url: str, error: str, log: logging.Logger) -> None:
        self.errors.append(CrawlError(url=url, error=error))
        log.warning("Failed to crawl %s: %s", url, error, extra={"event": "page-failed", "url": url})


async def crawl_site(
    page: PageHandle,
    base_url: str,
    max_pages: int = 10,
    process_page: Optional[PageProcessor] = None,
    *,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    logger: Optional[logging.Logger] = None,
) -> CrawlSiteResult:
    """
    Crawl ``base_url`` and its same-origin links until the frontier is empty or
    ``max_pages`` pages have been visited successfully.

    ``base_url`` is expected to be an absolute http(s) URL already validated by
    the caller. A navigation failure is recorded in ``metadata.errors`` and the
    URL stays eligible for another attempt if a later page links to it again.
    Every successful navigation spends one unit of ``max_pages``. A
    :class:`ProcessingError` from ``process_page`` or a failure to extract the
    page's links is recorded the same way without aborting the crawl. Such a
    page stays visited, and a page that failed processing has no
    :class:`PageResult`. Any other exception from ``process_page`` propagates.

    Request interception is reset before the loop and always disabled on exit.
    """
    log = logger or get_logger("crawler")
    started = time.monotonic()
    state = _CrawlState(base_url)
    max_attempts = max(max_pages, 1) * MAX_ATTEMPTS_PER_PAGE

    await page.set_interception(False)
    await page.set_interception(True)
    log.info(
        "Starting crawl of %s (max pages: %d)", base_url, max_pages,
        extra={"event": "crawl-started", "url": base_url},
    )
    try:
        attempts = 0
        while state.frontier and len(state.visited) < max_pages:
            key, url = state.pop()
            if key in state.visited:
                log.debug("Skipping already visited URL: %s", url, extra={"event": "page-skipped", "url": url})
                continue

            attempts += 1
            if attempts > max_attempts:
                log.warning(
                    "Attempt limit %d reached, stopping crawl of %s", max_attempts, base_url,
                    extra={"event": "crawl-aborted", "url": base_url},
                )
                break

            try:
                await navigate_with_fallback(page, url, timeout_ms)
            except NavigationError as exc:
                state.fail(url, exc.message, log)
                continue

            # the budget counts successful navigations
            state.visited.add(key)
            state.successful += 1
            state.max_depth = max(state.max_depth, path_depth(url))

            processed = True
            if process_page is not None:
                try:
                    markdown = await process_page(page)
                except ProcessingError as exc:
                    processed = False
                    state.fail(url, str(exc), log)
                else:
                    state.pages.append(PageResult(url=url, markdown=markdown))
            log.info("Visited %s", url, extra={"event": "page-visited", "url": url})

            try:
                links = await extract_internal_links(page, base_url)
            except Exception as exc:
                # one error entry per page
                if processed:
                    state.fail(url, f"Link extraction failed: {exc}", log)
                continue
            for link in state.enqueue(links):
                log.debug(
                    "Adding to queue: %s (found on %s)", link, url,
                    extra={"event": "link-discovered", "url": link},
                )

        duration_ms = int(round((time.monotonic() - started) * 1000))
        average_ms = round(duration_ms / state.successful) if state.successful else 0
        log.info(
            "Crawl complete: %d pages visited, %d errors in %d ms",
            len(state.visited), len(state.errors), duration_ms,
            extra={"event": "crawl-finished", "url": base_url},
        )
        return CrawlSiteResult(
            links=list(state.all_links),
            pages=state.pages,
            metadata=CrawlMetadata(
                timing=CrawlTiming(duration_ms=duration_ms, average_page_time_ms=average_ms),
                stats=CrawlStats(
                    successful_pages=state.successful,
                    failed_pages=len(state.errors),
                    unique_links_discovered=len(state.all_links),
                    max_depth_reached=state.max_depth,
                    hit_max_pages=len(state.visited) >= max_pages,
                ),
                errors=state.errors,
                config=CrawlConfigEcho(base_url=base_url, max_pages=max_pages),
            ),
        )
    finally:
        await page.set_interception(False)
