"""Scoped browser process and tab handling on top of Playwright.

A ``BrowserSession`` owns one Playwright instance and one headless Chromium
process. A ``BrowserTab`` owns one page inside that session. Both are async
context managers and release what they own on every exit path, including
cancellation.
"""

import asyncio
import base64
import logging
from typing import Optional

from playwright.async_api import (
    async_playwright,
    Playwright,
    Browser,
    BrowserContext,
    Page,
    CDPSession,
    TimeoutError as PlaywrightTimeoutError,
)

from webpage.errors import BrowserLaunchError, ExportTimeoutError, NavigationError
from webpage.types import BrowserOptions

logger = logging.getLogger(__name__)

LAUNCH_ARGS = ["--disable-gpu", "--no-sandbox"]


def build_launch_options(options: BrowserOptions) -> dict:
    """Build the keyword arguments for ``chromium.launch``."""
    launch_options = {
        "headless": True,
        "args": list(LAUNCH_ARGS),
        "chromium_sandbox": False,
    }
    if options.channel:
        launch_options["channel"] = options.channel
    return launch_options


def build_context_options(options: BrowserOptions) -> dict:
    """Build the keyword arguments for ``browser.new_context``."""
    context_options = {}
    if options.user_agent:
        context_options["user_agent"] = options.user_agent
    return context_options


class BrowserSession:
    def __init__(self, options: Optional[BrowserOptions] = None):
        """
        Args:
            options: Browser launch options; defaults to ``BrowserOptions()``
        """
        self.options = options or BrowserOptions()
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self._starting: Optional[asyncio.Future] = None

    async def __aenter__(self):
        try:
            await self.start()
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def start(self):
        launch_options = build_launch_options(self.options)
        logger.debug(f"Launching chromium with {launch_options}")
        try:
            # close() awaits this future when the launch is cancelled mid-start
            self._starting = asyncio.ensure_future(async_playwright().start())
            self.playwright = await asyncio.shield(self._starting)
            self.browser = await self.playwright.chromium.launch(**launch_options)
            self.context = await self.browser.new_context(
                **build_context_options(self.options)
            )
        except Exception as e:
            raise BrowserLaunchError(f"failed to launch browser: {e}") from e

    def new_tab(self) -> "BrowserTab":
        """Return a tab bound to this session. Use it with ``async with``."""
        if not self.context:
            raise RuntimeError(
                "Context not initialized. Use 'async with BrowserSession()' block."
            )
        return BrowserTab(self.context)

    async def close(self):
        if self.playwright is None and self._starting is not None:
            try:
                self.playwright = await self._starting
            except Exception as e:
                logger.debug(f"Playwright driver did not start: {e}")
        self._starting = None
        if self.context:
            try:
                await self.context.close()
            except Exception as e:
                logger.warning(f"Error closing browser context: {e}")
            self.context = None
        if self.browser:
            try:
                await self.browser.close()
            except Exception as e:
                logger.warning(f"Error closing browser: {e}")
            self.browser = None
        if self.playwright:
            try:
                await self.playwright.stop()
            except Exception as e:
                logger.warning(f"Error stopping Playwright: {e}")
            self.playwright = None
        logger.debug("Browser session closed")


class BrowserTab:
    """A single page in a browser session, driven through CDP for exports."""

    def __init__(self, context: BrowserContext):
        self.context = context
        self.page: Optional[Page] = None
        self.cdp: Optional[CDPSession] = None

    async def __aenter__(self):
        try:
            self.page = await self.context.new_page()
        except Exception as e:
            raise BrowserLaunchError(f"failed to open browser tab: {e}") from e
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def navigate(self, url: str, timeout: float):
        """
        Navigate to a URL and wait for the load event.

        Args:
            url: Target URL, passed to the browser unchanged
            timeout: Navigation timeout in seconds

        Raises:
            NavigationError: If the browser cannot load the URL
            ExportTimeoutError: If the navigation timeout elapses
        """
        if not self.page:
            raise RuntimeError("Page not initialized. Use 'async with' on the tab.")
        try:
            await self.page.goto(url, wait_until="load", timeout=timeout * 1000)
        except PlaywrightTimeoutError as e:
            raise ExportTimeoutError(f"navigation to {url} timed out: {e}") from e
        except Exception as e:
            raise NavigationError(f"failed to navigate to {url}: {e}") from e

    async def send(self, method: str, params: dict) -> dict:
        """Send a DevTools Protocol command on this tab's CDP session."""
        if not self.page:
            raise RuntimeError("Page not initialized. Use 'async with' on the tab.")
        if self.cdp is None:
            self.cdp = await self.context.new_cdp_session(self.page)
        logger.debug(f"CDP {method}({params})")
        return await self.cdp.send(method, params)

    async def print_to_pdf(self, params: dict) -> bytes:
        result = await self.send("Page.printToPDF", params)
        return base64.b64decode(result["data"])

    async def capture_screenshot(self, params: dict) -> bytes:
        result = await self.send("Page.captureScreenshot", params)
        return base64.b64decode(result["data"])

    async def close(self):
        if self.cdp is not None:
            try:
                await self.cdp.detach()
            except Exception as e:
                logger.debug(f"Error detaching CDP session: {e}")
            self.cdp = None
        if self.page:
            try:
                await self.page.close()
            except Exception as e:
                logger.warning(f"Error closing page: {e}")
            self.page = None
