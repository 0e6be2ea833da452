"""
SiteMarkdown package initializer.
Defines package version and exposes the crawl engine entry points.
"""
__version__ = "0.1.0"

from site_markdown.crawler import crawl_site, extract_internal_links, navigate_with_fallback, normalize_url
from site_markdown.errors import NavigationError, ProcessingError, ValidationError

__all__ = [
    "__version__",
    "crawl_site",
    "extract_internal_links",
    "navigate_with_fallback",
    "normalize_url",
    "NavigationError",
    "ProcessingError",
    "ValidationError",
]
