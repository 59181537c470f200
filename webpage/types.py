"""Option containers for browser launch, PDF export and screenshot export.

The defaults below are shared by the library and the command line tool.
"""

from datetime import timedelta
from typing import Callable, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

DEFAULT_TIMEOUT = timedelta(seconds=30)

DEFAULT_SCALE = 1.0
DEFAULT_PAPER_WIDTH = 8.5
DEFAULT_PAPER_HEIGHT = 11.0
DEFAULT_MARGIN = 0.4

DEFAULT_FORMAT = "png"
DEFAULT_QUALITY = 100

SCREENSHOT_FORMATS = ("png", "jpeg")

ModelT = TypeVar("ModelT", bound="OptionsModel")
Option = Callable[[ModelT], ModelT]


class OptionsModel(BaseModel):
    """Frozen base model that can be built from a sequence of option setters."""

    model_config = ConfigDict(frozen=True)

    @classmethod
    def build(cls, *opts: Option):
        """Apply option setters left to right to a default instance.

        Args:
            *opts: Setters returned by the ``with_*`` functions in ``webpage.options``

        Returns:
            A new instance with every setter applied; for the same field the last one wins
        """
        model = cls()
        for opt in opts:
            model = opt(model)
        return model


class BrowserOptions(OptionsModel):
    """Options for launching the browser"""

    timeout: timedelta = DEFAULT_TIMEOUT
    user_agent: Optional[str] = None
    channel: Optional[str] = None


class PDFOptions(OptionsModel):
    """Options for Page.printToPDF. Dimensions and margins are in inches."""

    landscape: bool = False
    print_background: bool = False
    scale: float = DEFAULT_SCALE
    paper_width: float = DEFAULT_PAPER_WIDTH
    paper_height: float = DEFAULT_PAPER_HEIGHT
    margin_top: float = DEFAULT_MARGIN
    margin_bottom: float = DEFAULT_MARGIN
    margin_left: float = DEFAULT_MARGIN
    margin_right: float = DEFAULT_MARGIN
    page_ranges: str = ""

    def to_cdp_params(self) -> dict:
        params = {
            "landscape": self.landscape,
            "printBackground": self.print_background,
            "scale": self.scale,
            "paperWidth": self.paper_width,
            "paperHeight": self.paper_height,
            "marginTop": self.margin_top,
            "marginBottom": self.margin_bottom,
            "marginLeft": self.margin_left,
            "marginRight": self.margin_right,
        }
        if self.page_ranges:
            params["pageRanges"] = self.page_ranges
        return params


class ScreenshotOptions(OptionsModel):
    """Options for Page.captureScreenshot. Quality only applies to jpeg."""

    format: str = DEFAULT_FORMAT
    quality: int = DEFAULT_QUALITY

    def to_cdp_params(self) -> dict:
        params = {
            "format": self.format,
            "captureBeyondViewport": True,
            "fromSurface": True,
        }
        if self.format == "jpeg":
            params["quality"] = self.quality
        return params
