"""site_markdown.crawler: URL keys, link discovery, navigation and the crawl engine."""
from site_markdown.crawler.crawler import PageProcessor, crawl_site
from site_markdown.crawler.links import extract_internal_links
from site_markdown.crawler.models import CrawlError, CrawlSiteResult, LinksResult, PageResult
from site_markdown.crawler.navigation import navigate_with_fallback
from site_markdown.crawler.urls import normalize_url

__all__ = [
    "crawl_site",
    "PageProcessor",
    "extract_internal_links",
    "navigate_with_fallback",
    "normalize_url",
    "CrawlSiteResult",
    "CrawlError",
    "PageResult",
    "LinksResult",
]
