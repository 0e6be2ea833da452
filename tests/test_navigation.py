# File: tests/test_navigation.py
import pytest

from conftest import FakePage, link_page
from site_markdown.crawler.navigation import navigate_with_fallback
from site_markdown.errors import NavigationError

URL = "https://example.com/page"


@pytest.mark.asyncio()
async def test_load_strategy_succeeds_first():
    page = FakePage({URL: link_page()})
    await navigate_with_fallback(page, URL, timeout_ms=1500)
    assert page.gotos == [(URL, "load")]
    assert page.url == URL


@pytest.mark.asyncio()
async def test_falls_back_to_networkidle_once():
    page = FakePage({URL: link_page()}, fail_load=[URL])
    await navigate_with_fallback(page, URL)
    assert page.gotos == [(URL, "load"), (URL, "networkidle")]
    assert page.url == URL


@pytest.mark.asyncio()
async def test_both_strategies_fail():
    page = FakePage({}, fail=[URL])
    with pytest.raises(NavigationError) as excinfo:
        await navigate_with_fallback(page, URL)
    # exactly one retry, never more
    assert page.gotos == [(URL, "load"), (URL, "networkidle")]
    assert excinfo.value.url == URL
    assert "ERR_CONNECTION_REFUSED" in excinfo.value.message
    assert isinstance(excinfo.value.__cause__, RuntimeError)


@pytest.mark.asyncio()
async def test_timeout_is_passed_to_both_attempts():
    seen = []

    class RecordingPage(FakePage):
        async def goto(self, url, *, wait_until="load", timeout_ms=30000):
            seen.append(timeout_ms)
            await super().goto(url, wait_until=wait_until, timeout_ms=timeout_ms)

    page = RecordingPage({URL: link_page()}, fail_load=[URL])
    await navigate_with_fallback(page, URL, 15000)
    assert seen == [15000, 15000]


@pytest.mark.asyncio()
async def test_error_without_message_uses_exception_name():
    class SilentPage(FakePage):
        async def goto(self, url, *, wait_until="load", timeout_ms=30000):
            raise TimeoutError()

    with pytest.raises(NavigationError, match="TimeoutError"):
        await navigate_with_fallback(SilentPage({}), URL)
