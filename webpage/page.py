"""Page handle and the PDF / screenshot export operations.

Each export runs one linear browser session:

    launch -> navigate -> export -> teardown

The whole sequence is bounded by the browser timeout. The browser process
and tab are released on every exit path.
"""

import asyncio
import logging
from typing import Awaitable, Callable

from webpage.browser import BrowserSession, BrowserTab
from webpage.errors import ExportTimeoutError, RenderError
from webpage.types import (
    BrowserOptions,
    PDFOptions,
    ScreenshotOptions,
    Option,
)

logger = logging.getLogger(__name__)


class Webpage:
    """A URL bound to a set of browser options.

    Example:
        page = Webpage("https://example.com", with_timeout(10))
        pdf = await page.pdf(with_landscape(True))
    """

    def __init__(self, url: str, *opts: Option[BrowserOptions]):
        self.url = url
        self.browser = BrowserOptions.build(*opts)

    def __repr__(self):
        return f"Webpage(url={self.url!r}, browser={self.browser!r})"

    async def pdf(self, *opts: Option[PDFOptions]) -> bytes:
        """Render the page as a PDF.

        Args:
            *opts: PDF option setters, applied over the default PDFOptions

        Returns:
            The PDF document bytes

        Raises:
            BrowserLaunchError: If the browser could not be started
            NavigationError: If the URL could not be loaded
            RenderError: If Page.printToPDF failed
            ExportTimeoutError: If the browser timeout elapsed
        """
        pdf_opts = PDFOptions.build(*opts)
        params = pdf_opts.to_cdp_params()

        async def export(tab: BrowserTab) -> bytes:
            try:
                return await tab.print_to_pdf(params)
            except Exception as e:
                raise RenderError(f"Page.printToPDF failed: {e}") from e

        return await self._run("pdf", export)

    async def screenshot(self, *opts: Option[ScreenshotOptions]) -> bytes:
        """Capture the full page, beyond the viewport, as an image.

        Args:
            *opts: Screenshot option setters, applied over the default ScreenshotOptions

        Returns:
            The encoded image bytes

        Raises:
            BrowserLaunchError: If the browser could not be started
            NavigationError: If the URL could not be loaded
            RenderError: If Page.captureScreenshot failed
            ExportTimeoutError: If the browser timeout elapsed
        """
        screenshot_opts = ScreenshotOptions.build(*opts)
        params = screenshot_opts.to_cdp_params()

        async def export(tab: BrowserTab) -> bytes:
            try:
                return await tab.capture_screenshot(params)
            except Exception as e:
                raise RenderError(f"Page.captureScreenshot failed: {e}") from e

        return await self._run("screenshot", export)

    def pdf_sync(self, *opts: Option[PDFOptions]) -> bytes:
        """Blocking version of :meth:`pdf` for callers without an event loop."""
        return asyncio.run(self.pdf(*opts))

    def screenshot_sync(self, *opts: Option[ScreenshotOptions]) -> bytes:
        """Blocking version of :meth:`screenshot` for callers without an event loop."""
        return asyncio.run(self.screenshot(*opts))

    async def _run(
        self, kind: str, export: Callable[[BrowserTab], Awaitable[bytes]]
    ) -> bytes:
        timeout = self.browser.timeout.total_seconds()
        try:
            return await asyncio.wait_for(self._session(kind, export), timeout)
        except ExportTimeoutError:
            logger.debug(f"{kind} of {self.url}: failed (timeout)")
            raise
        except asyncio.TimeoutError as e:
            logger.debug(f"{kind} of {self.url}: failed (timeout)")
            raise ExportTimeoutError(
                f"{kind} of {self.url} timed out after {timeout:g}s"
            ) from e

    async def _session(
        self, kind: str, export: Callable[[BrowserTab], Awaitable[bytes]]
    ) -> bytes:
        timeout = self.browser.timeout.total_seconds()
        logger.debug(f"{kind} of {self.url}: launching")
        async with BrowserSession(self.browser) as session:
            async with session.new_tab() as tab:
                logger.debug(f"{kind} of {self.url}: navigating")
                await tab.navigate(self.url, timeout)
                logger.debug(f"{kind} of {self.url}: exporting")
                data = await export(tab)
        logger.debug(f"{kind} of {self.url}: done ({len(data)} bytes)")
        return data
