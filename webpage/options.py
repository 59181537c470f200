"""Option setters.

Each ``with_*`` function returns a pure callable that takes an options model
and returns a copy with one field overridden. Setters never validate their
input; out-of-range values reach the browser unchanged.

Example:
    page = Webpage("https://example.com", with_timeout(10))
    data = await page.pdf(with_landscape(True), with_margin_top(0))
"""

from datetime import timedelta
from typing import Union

from webpage.types import BrowserOptions, PDFOptions, ScreenshotOptions, Option

# Browser names accepted by with_browser, mapped to Playwright channels
BROWSER_CHANNELS = {
    "chromium": None,
    "chrome": "chrome",
    "edge": "msedge",
}


def _setter(field: str, value) -> Option:
    def apply(model):
        return model.model_copy(update={field: value})

    return apply


# Browser options


def with_timeout(timeout: Union[float, int, timedelta]) -> Option[BrowserOptions]:
    """Set the timeout for the whole export call. Numbers are seconds."""
    if not isinstance(timeout, timedelta):
        timeout = timedelta(seconds=timeout)
    return _setter("timeout", timeout)


def with_user_agent(user_agent: str) -> Option[BrowserOptions]:
    """Override the browser user agent string."""
    return _setter("user_agent", user_agent)


def with_browser(name: str) -> Option[BrowserOptions]:
    """Select the browser build: 'chromium' (bundled), 'chrome' or 'edge'.

    Unknown names are used as the Playwright channel as-is.
    """
    return _setter("channel", BROWSER_CHANNELS.get(name, name))


# PDF options


def with_landscape(enable: bool) -> Option[PDFOptions]:
    return _setter("landscape", enable)


def with_background(enable: bool) -> Option[PDFOptions]:
    """Include background graphics in the PDF."""
    return _setter("print_background", enable)


def with_scale(scale: float) -> Option[PDFOptions]:
    return _setter("scale", scale)


def with_paper_width(width: float) -> Option[PDFOptions]:
    """Paper width in inches."""
    return _setter("paper_width", width)


def with_paper_height(height: float) -> Option[PDFOptions]:
    """Paper height in inches."""
    return _setter("paper_height", height)


def with_margin_top(top: float) -> Option[PDFOptions]:
    return _setter("margin_top", top)


def with_margin_bottom(bottom: float) -> Option[PDFOptions]:
    return _setter("margin_bottom", bottom)


def with_margin_left(left: float) -> Option[PDFOptions]:
    return _setter("margin_left", left)


def with_margin_right(right: float) -> Option[PDFOptions]:
    return _setter("margin_right", right)


def with_page_ranges(ranges: str) -> Option[PDFOptions]:
    """Pages to print, e.g. '1-5, 8, 11-13'. Empty means all pages."""
    return _setter("page_ranges", ranges)


# Screenshot options


def with_format(format: str) -> Option[ScreenshotOptions]:
    """Image format: 'png' or 'jpeg'."""
    return _setter("format", format)


def with_quality(quality: int) -> Option[ScreenshotOptions]:
    """Compression quality 0-100, only used for jpeg."""
    return _setter("quality", quality)
