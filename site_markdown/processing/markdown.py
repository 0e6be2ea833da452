"""
Content processor: strip non-content markup from the rendered page and
convert what is left to Markdown.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Union
from urllib.parse import urlsplit

from bs4 import BeautifulSoup
from markdownify import markdownify

from site_markdown.backends.base import PageHandle
from site_markdown.errors import ProcessingError
from site_markdown.logger import get_logger

__all__: Sequence[str] = (
    "NON_CONTENT_SELECTORS",
    "EMPTY_MARKDOWN",
    "clean_html",
    "html_to_markdown",
    "process_page",
)

_log = get_logger("processing")

EMPTY_MARKDOWN = "No content after conversion"

NON_CONTENT_SELECTORS: tuple[str, ...] = (
    "script",
    "style",
    "iframe",
    "noscript",
    "header nav",
    "nav:not([aria-label])",
    "footer",
    '[role="navigation"]',
    '[role="banner"]',
    '[role="contentinfo"]',
    '[role="complementary"]',
    '[aria-hidden="true"]',
    "[data-nosnippet]",
    ".cookie-banner",
    ".ad",
    ".ads",
    ".advertisement",
    "#comments",
    ".comments",
    # footers
    ".colophon",
    ".site-footer",
    ".footer",
    ".footer-content",
    ".footer-widgets",
    '[class*="footer"]',
    '[id*="footer"]',
    ".bottom-bar",
    ".bottom-content",
    # common UI elements
    ".go-to-top",
    ".scroll-to-top",
    ".back-to-top",
    '[class*="to-top"]',
    '[id*="to-top"]',
    ".hidden-print",
    "[aria-hidden]",
    '[class*="social-"]',
    ".share-buttons",
    ".print-button",
)


def clean_html(html: str, selectors: Sequence[str] = NON_CONTENT_SELECTORS) -> str:
    """Remove non-content elements and return the inner HTML of ``<body>``."""
    soup = BeautifulSoup(html, "html.parser")
    for node in soup.select(", ".join(selectors)):
        # an ancestor may already have been removed
        if node.decomposed:
            continue
        node.decompose()
    body = soup.body
    if body is None:
        return str(soup)
    return body.decode_contents()


def html_to_markdown(html: str) -> str:
    markdown = markdownify(html, heading_style="ATX", bullets="-")
    return markdown.strip()


def _write_debug_file(debug_dir: Path, hostname: str, content: str, suffix: str) -> None:
    path = debug_dir / f"{hostname}.{suffix}"
    try:
        debug_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        _log.error("Failed to write debug file %s: %s", path, exc)
        return
    _log.debug("Wrote %s content to %s", suffix, path)


async def process_page(page: PageHandle, *, debug_dir: Union[str, Path, None] = None) -> str:
    """
    Convert the page currently loaded in ``page`` to Markdown.

    With ``debug_dir`` the cleaned HTML and the resulting Markdown are written
    there as ``<hostname>.raw.html`` and ``<hostname>.md``.
    Every failure is raised as :class:`ProcessingError`.
    """
    debug_path: Optional[Path] = Path(debug_dir) if debug_dir is not None else None
    hostname = urlsplit(page.url).hostname or "page"
    try:
        html = clean_html(await page.content())
    except Exception as exc:
        raise ProcessingError(f"Failed to read page content: {exc}") from exc
    if debug_path is not None:
        _write_debug_file(debug_path, hostname, html, "raw.html")

    try:
        markdown = html_to_markdown(html)
    except Exception as exc:
        raise ProcessingError(f"Markdown conversion failed: {exc}") from exc
    if debug_path is not None:
        _write_debug_file(debug_path, hostname, markdown, "md")

    return markdown or EMPTY_MARKDOWN
