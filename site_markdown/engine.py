"""site_markdown.engine: общий слой действий scrape / crawl / links для CLI и HTTP-обработчика."""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import AsyncContextManager, Callable, Optional, Union

from site_markdown.backends import PageHandle, open_page
from site_markdown.config import AppConfig
from site_markdown.crawler.crawler import crawl_site
from site_markdown.crawler.links import extract_internal_links
from site_markdown.crawler.models import CrawlSiteResult, LinksResult
from site_markdown.crawler.navigation import navigate_with_fallback
from site_markdown.errors import ValidationError
from site_markdown.logger import logger
from site_markdown.processing.markdown import process_page
from site_markdown.validation import validate_url

__all__ = ["ACTIONS", "PageFactory", "ActionResult", "run_action", "scrape", "crawl", "links"]

ACTIONS = ("scrape", "crawl", "links")

PageFactory = Callable[[AppConfig], AsyncContextManager[PageHandle]]
ActionResult = Union[str, CrawlSiteResult, LinksResult]


async def scrape(
    page: PageHandle, url: str, config: AppConfig, *, debug_dir: Union[str, Path, None] = None
) -> str:
    """Загружает одну страницу и возвращает её Markdown."""
    await navigate_with_fallback(page, url, config.navigation_timeout_ms)
    return await process_page(page, debug_dir=debug_dir)


async def crawl(
    page: PageHandle,
    url: str,
    config: AppConfig,
    *,
    max_pages: Optional[int] = None,
    debug_dir: Union[str, Path, None] = None,
) -> CrawlSiteResult:
    """Обходит сайт, конвертируя каждую успешно загруженную страницу."""
    return await crawl_site(
        page,
        url,
        config.max_pages if max_pages is None else max_pages,
        partial(process_page, debug_dir=debug_dir),
        timeout_ms=config.navigation_timeout_ms,
    )


async def links(page: PageHandle, url: str, config: AppConfig) -> LinksResult:
    """Возвращает внутренние ссылки одной страницы."""
    await navigate_with_fallback(page, url, config.navigation_timeout_ms)
    found = await extract_internal_links(page, url)
    return LinksResult(url=url, count=len(found), links=found)


async def run_action(
    action: str,
    url: Optional[str],
    config: AppConfig,
    *,
    page_factory: PageFactory = open_page,
    max_pages: Optional[int] = None,
    debug_dir: Union[str, Path, None] = None,
) -> ActionResult:
    """
    Проверяет action и URL, открывает собственную страницу и выполняет действие.

    ValidationError поднимается до открытия браузера.
    """
    if action not in ACTIONS:
        raise ValidationError(f"Invalid action {action!r}. Use scrape, crawl, or links")
    target = validate_url(url, "Please provide a valid URL")

    logger.info("Running %s for %s (backend: %s)", action, target, config.backend)
    async with page_factory(config) as page:
        if action == "scrape":
            return await scrape(page, target, config, debug_dir=debug_dir)
        if action == "crawl":
            return await crawl(page, target, config, max_pages=max_pages, debug_dir=debug_dir)
        return await links(page, target, config)
