"""Webpage capture module.

This module renders URLs in headless Chromium and exports them as PDF
documents or screenshots.
"""

__version__ = "0.1.0"

from webpage.page import Webpage
from webpage.errors import (
    WebpageError,
    BrowserLaunchError,
    NavigationError,
    RenderError,
    ExportTimeoutError,
)
from webpage.types import (
    BrowserOptions,
    PDFOptions,
    ScreenshotOptions,
    DEFAULT_TIMEOUT,
)
from webpage.options import (
    with_timeout,
    with_user_agent,
    with_browser,
    with_landscape,
    with_background,
    with_scale,
    with_paper_width,
    with_paper_height,
    with_margin_top,
    with_margin_bottom,
    with_margin_left,
    with_margin_right,
    with_page_ranges,
    with_format,
    with_quality,
)

__all__ = [
    "Webpage",
    "WebpageError",
    "BrowserLaunchError",
    "NavigationError",
    "RenderError",
    "ExportTimeoutError",
    "BrowserOptions",
    "PDFOptions",
    "ScreenshotOptions",
    "DEFAULT_TIMEOUT",
    "with_timeout",
    "with_user_agent",
    "with_browser",
    "with_landscape",
    "with_background",
    "with_scale",
    "with_paper_width",
    "with_paper_height",
    "with_margin_top",
    "with_margin_bottom",
    "with_margin_left",
    "with_margin_right",
    "with_page_ranges",
    "with_format",
    "with_quality",
]
