"""
Data models for the SiteMarkdown crawler.

Attributes are snake_case; the JSON payload handed to transport layers uses
camelCase keys (``durationMs``, ``successfulPages`` …) via field aliases.
"""
from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

__all__ = (
    "PageResult",
    "CrawlError",
    "CrawlTiming",
    "CrawlStats",
    "CrawlConfigEcho",
    "CrawlMetadata",
    "CrawlSiteResult",
    "LinksResult",
)


class _Payload(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class PageResult(_Payload):
    """One successfully processed page."""

    url: str
    markdown: str


class CrawlError(_Payload):
    """One failed visit attempt."""

    url: str
    error: str


class CrawlTiming(_Payload):
    duration_ms: int
    average_page_time_ms: int


class CrawlStats(_Payload):
    successful_pages: int
    failed_pages: int
    unique_links_discovered: int
    max_depth_reached: int
    hit_max_pages: bool


class CrawlConfigEcho(_Payload):
    base_url: str
    max_pages: int


class CrawlMetadata(_Payload):
    timing: CrawlTiming
    stats: CrawlStats
    errors: List[CrawlError]
    config: CrawlConfigEcho


class CrawlSiteResult(_Payload):
    """Outcome of one crawl: link inventory, converted pages and metadata."""

    links: List[str]
    pages: List[PageResult]
    metadata: CrawlMetadata


class LinksResult(_Payload):
    """Payload of the ``links`` action."""

    url: str
    count: int
    links: List[str]
