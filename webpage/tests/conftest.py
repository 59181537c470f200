import base64
import subprocess
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

# Try to import playwright and check availability at module level
try:
    from playwright.async_api import async_playwright
    PLAYWRIGHT_AVAILABLE = True
except ImportError:
    PLAYWRIGHT_AVAILABLE = False

FIXTURES_DIR = Path(__file__).parent / "fixtures"

PDF_BYTES = b"%PDF-1.4\n%fake\n"
PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


def pytest_configure(config):
    """Configure pytest to add custom markers for Playwright tests."""
    config.addinivalue_line(
        "markers", "playwright: mark test as requiring Playwright and browser"
    )


def check_playwright_browser_installed():
    """Check if Playwright browsers (specifically chromium) are installed."""
    if not PLAYWRIGHT_AVAILABLE:
        return False

    try:
        result = subprocess.run(
            [sys.executable, "-c",
             "from playwright.sync_api import sync_playwright; "
             "p = sync_playwright().start(); "
             "p.chromium.launch(headless=True, args=['--no-sandbox']).close(); "
             "p.stop()"],
            capture_output=True,
            text=True,
            timeout=60
        )
        return result.returncode == 0
    except subprocess.TimeoutExpired:
        return False


@pytest.fixture(scope="session")
def ensure_playwright_browser():
    """Ensure Playwright browsers are available, skip tests if not."""
    if not PLAYWRIGHT_AVAILABLE:
        pytest.skip("Playwright not installed. Install with: pip install playwright")

    if not check_playwright_browser_installed():
        pytest.skip("Chromium for Playwright not available. Run: playwright install chromium")

    return True


@pytest.fixture
def fixture_url():
    """file:// URL of the static test page."""
    return (FIXTURES_DIR / "sample.html").absolute().as_uri()


@pytest.fixture
def fake_playwright():
    """Patch async_playwright with mocks for the whole launch/tab/CDP chain."""
    cdp = MagicMock()
    cdp.send = AsyncMock(
        side_effect=lambda method, params: {
            "data": base64.b64encode(
                PDF_BYTES if method == "Page.printToPDF" else PNG_BYTES
            ).decode()
        }
    )
    cdp.detach = AsyncMock()

    page = MagicMock()
    page.goto = AsyncMock()
    page.close = AsyncMock()

    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)
    context.new_cdp_session = AsyncMock(return_value=cdp)
    context.close = AsyncMock()

    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()

    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)
    playwright.stop = AsyncMock()

    starter = MagicMock()
    starter.start = AsyncMock(return_value=playwright)

    with patch("webpage.browser.async_playwright", return_value=starter) as factory:
        yield SimpleNamespace(
            factory=factory,
            playwright=playwright,
            browser=browser,
            context=context,
            page=page,
            cdp=cdp,
            pdf_bytes=PDF_BYTES,
            png_bytes=PNG_BYTES,
        )
