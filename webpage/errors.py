"""Exceptions raised by export operations."""


class WebpageError(Exception):
    """Base class for all export failures."""


class BrowserLaunchError(WebpageError):
    """The browser executable is missing or failed to start."""


class NavigationError(WebpageError):
    """Navigating to the target URL failed."""


class RenderError(WebpageError):
    """The print-to-PDF or capture-screenshot call failed."""


class ExportTimeoutError(WebpageError, TimeoutError):
    """The export did not finish within the configured timeout."""
