import asyncio

import pytest

from webpage.errors import (
    BrowserLaunchError,
    ExportTimeoutError,
    NavigationError,
    RenderError,
    WebpageError,
)
from webpage.options import (
    with_format,
    with_landscape,
    with_page_ranges,
    with_quality,
    with_timeout,
)
from webpage.page import Webpage


@pytest.mark.asyncio
async def test_pdf_returns_bytes(fake_playwright):
    page = Webpage("https://example.com")
    data = await page.pdf(with_landscape(True), with_page_ranges("1-2"))

    assert data == fake_playwright.pdf_bytes
    method, params = fake_playwright.cdp.send.await_args.args
    assert method == "Page.printToPDF"
    assert params["landscape"] is True
    assert params["pageRanges"] == "1-2"
    assert params["paperWidth"] == 8.5
    assert params["marginTop"] == 0.4
    fake_playwright.page.goto.assert_awaited_once()
    fake_playwright.playwright.stop.assert_awaited_once()


@pytest.mark.asyncio
async def test_screenshot_returns_bytes(fake_playwright):
    page = Webpage("https://example.com")
    data = await page.screenshot(with_format("jpeg"), with_quality(80))

    assert data == fake_playwright.png_bytes
    method, params = fake_playwright.cdp.send.await_args.args
    assert method == "Page.captureScreenshot"
    assert params == {
        "format": "jpeg",
        "quality": 80,
        "captureBeyondViewport": True,
        "fromSurface": True,
    }


@pytest.mark.asyncio
async def test_each_call_uses_its_own_browser(fake_playwright):
    page = Webpage("https://example.com")
    await page.pdf()
    await page.screenshot()
    assert fake_playwright.factory.call_count == 2
    assert fake_playwright.browser.close.await_count == 2


@pytest.mark.asyncio
async def test_navigation_failure_returns_no_bytes(fake_playwright):
    fake_playwright.page.goto.side_effect = Exception("net::ERR_CONNECTION_REFUSED")
    page = Webpage("http://127.0.0.1:9")

    with pytest.raises(NavigationError, match="ERR_CONNECTION_REFUSED"):
        await page.pdf()

    fake_playwright.cdp.send.assert_not_awaited()
    fake_playwright.browser.close.assert_awaited_once()
    fake_playwright.playwright.stop.assert_awaited_once()


@pytest.mark.asyncio
async def test_render_failure_names_the_call(fake_playwright):
    fake_playwright.cdp.send.side_effect = Exception("invalid page range")
    page = Webpage("https://example.com")

    with pytest.raises(RenderError, match="Page.printToPDF failed: invalid page range"):
        await page.pdf(with_page_ranges("9-1"))
    with pytest.raises(RenderError, match="Page.captureScreenshot failed"):
        await page.screenshot()


@pytest.mark.asyncio
async def test_launch_failure(fake_playwright):
    fake_playwright.playwright.chromium.launch.side_effect = Exception("no chromium")
    with pytest.raises(BrowserLaunchError):
        await Webpage("https://example.com").screenshot()


@pytest.mark.asyncio
async def test_timeout_releases_resources(fake_playwright):
    async def slow_goto(*args, **kwargs):
        await asyncio.sleep(10)

    fake_playwright.page.goto.side_effect = slow_goto
    page = Webpage("https://example.com", with_timeout(0.05))

    with pytest.raises(ExportTimeoutError) as exc_info:
        await page.pdf()

    assert isinstance(exc_info.value, TimeoutError)
    fake_playwright.page.close.assert_awaited_once()
    fake_playwright.context.close.assert_awaited_once()
    fake_playwright.browser.close.assert_awaited_once()
    fake_playwright.playwright.stop.assert_awaited_once()


def test_sync_helpers(fake_playwright):
    page = Webpage("https://example.com")
    assert page.pdf_sync() == fake_playwright.pdf_bytes
    assert page.screenshot_sync() == fake_playwright.png_bytes


@pytest.mark.asyncio
async def test_timeout_during_launch_stops_driver(fake_playwright):
    async def slow_start():
        await asyncio.sleep(0.2)
        return fake_playwright.playwright

    fake_playwright.factory.return_value.start.side_effect = slow_start
    page = Webpage("https://example.com", with_timeout(0.01))

    with pytest.raises(ExportTimeoutError):
        await page.screenshot()

    fake_playwright.playwright.chromium.launch.assert_not_awaited()
    fake_playwright.playwright.stop.assert_awaited_once()


@pytest.mark.asyncio
async def test_tab_failure_is_a_webpage_error(fake_playwright):
    fake_playwright.context.new_page.side_effect = Exception("browser has been closed")

    with pytest.raises(WebpageError):
        await Webpage("https://example.com").pdf()

    fake_playwright.browser.close.assert_awaited_once()
