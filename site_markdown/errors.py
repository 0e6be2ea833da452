"""Exception hierarchy shared by the crawler, the CLI and the HTTP handler."""
from __future__ import annotations

__all__ = ("SiteMarkdownError", "ValidationError", "NavigationError", "ProcessingError")


class SiteMarkdownError(Exception):
    """Base class for all project errors."""


class ValidationError(SiteMarkdownError):
    """Bad caller input: missing/malformed seed URL or unknown action."""


class NavigationError(SiteMarkdownError):
    """Both load strategies failed for ``url``."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url
        self.message = message


class ProcessingError(SiteMarkdownError):
    """Converting a loaded page to Markdown failed."""
