# File: tests/test_markdown.py
import pytest

from conftest import FakePage
from site_markdown.errors import ProcessingError
from site_markdown.processing.markdown import EMPTY_MARKDOWN, clean_html, html_to_markdown, process_page

ARTICLE = """
<html>
  <head><title>Doc</title><style>body { color: red }</style></head>
  <body>
    <header><nav><a href="/">Home</a></nav></header>
    <script>trackVisitor()</script>
    <main>
      <h1>Getting started</h1>
      <p>Install the <strong>package</strong> first.</p>
      <ul><li>one</li><li>two</li></ul>
      <div class="cookie-banner">We use cookies</div>
      <div class="share-buttons">Share</div>
    </main>
    <div class="site-footer">Copyright</div>
    <footer>Contact us</footer>
  </body>
</html>
"""


def test_clean_html_drops_non_content_markup():
    cleaned = clean_html(ARTICLE)
    assert "Getting started" in cleaned
    for noise in ("trackVisitor", "cookies", "Share", "Copyright", "Contact us", "Home", "color: red"):
        assert noise not in cleaned


def test_clean_html_keeps_labelled_nav():
    html = '<body><nav aria-label="Contents"><a href="#a">Section A</a></nav><nav>Menu</nav></body>'
    cleaned = clean_html(html)
    assert "Section A" in cleaned
    assert "Menu" not in cleaned


def test_html_to_markdown_uses_atx_headings_and_dash_bullets():
    markdown = html_to_markdown(clean_html(ARTICLE))
    assert markdown.startswith("# Getting started")
    assert "**package**" in markdown
    assert "- one" in markdown
    assert "- two" in markdown


@pytest.mark.asyncio()
async def test_process_page_converts_loaded_document():
    page = FakePage({"https://example.com/doc": ARTICLE})
    await page.goto("https://example.com/doc")
    markdown = await process_page(page)
    assert markdown.startswith("# Getting started")
    assert "Contact us" not in markdown


@pytest.mark.asyncio()
async def test_process_page_empty_document():
    page = FakePage({"https://example.com": "<html><body><script>x()</script></body></html>"})
    await page.goto("https://example.com")
    assert await process_page(page) == EMPTY_MARKDOWN


@pytest.mark.asyncio()
async def test_process_page_wraps_failures():
    class BrokenPage(FakePage):
        async def content(self):
            raise RuntimeError("Execution context was destroyed")

    page = BrokenPage({"https://example.com": ""})
    await page.goto("https://example.com")
    with pytest.raises(ProcessingError, match="Execution context was destroyed"):
        await process_page(page)


@pytest.mark.asyncio()
async def test_process_page_writes_debug_files(tmp_path):
    page = FakePage({"https://docs.example.com/doc": ARTICLE})
    await page.goto("https://docs.example.com/doc")
    debug_dir = tmp_path / "_debug"

    markdown = await process_page(page, debug_dir=debug_dir)

    raw = debug_dir / "docs.example.com.raw.html"
    md = debug_dir / "docs.example.com.md"
    assert "Getting started" in raw.read_text(encoding="utf-8")
    assert md.read_text(encoding="utf-8") == markdown
