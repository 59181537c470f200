"""
Command line tool for capturing webpages as PDFs or screenshots.

Usage:
    webpage pdf https://example.com -o example.pdf --landscape
    webpage screenshot https://example.com -o example.jpg -f jpeg -q 80
"""

import asyncio
import logging
import math
import re
import sys
from datetime import timedelta
from pathlib import Path

import click

from config import env
from webpage import __version__
from webpage.errors import WebpageError
from webpage.logging_config import configure_logging
from webpage.options import (
    BROWSER_CHANNELS,
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
from webpage.page import Webpage
from webpage.types import (
    DEFAULT_SCALE,
    DEFAULT_PAPER_WIDTH,
    DEFAULT_PAPER_HEIGHT,
    DEFAULT_MARGIN,
    DEFAULT_FORMAT,
    DEFAULT_QUALITY,
    SCREENSHOT_FORMATS,
)

logger = logging.getLogger(__name__)


class DurationParamType(click.ParamType):
    """Parses durations such as '30s', '1m30s', '500ms' or plain seconds."""

    name = "duration"

    UNITS = {
        "ns": 1e-9,
        "us": 1e-6,
        "µs": 1e-6,
        "ms": 1e-3,
        "s": 1.0,
        "m": 60.0,
        "h": 3600.0,
    }
    PATTERN = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")

    MAX_SECONDS = timedelta.max.total_seconds()

    def convert(self, value, param, ctx):
        if isinstance(value, (int, float)):
            return self.check_range(float(value), value, param, ctx)
        text = value.strip()
        try:
            return self.check_range(float(text), value, param, ctx)
        except ValueError:
            pass

        pos = 0
        seconds = 0.0
        for match in self.PATTERN.finditer(text):
            if match.start() != pos:
                break
            seconds += float(match.group(1)) * self.UNITS[match.group(2)]
            pos = match.end()
        if pos == 0 or pos != len(text):
            self.fail(f"{value!r} is not a valid duration", param, ctx)
        return self.check_range(seconds, value, param, ctx)

    def check_range(self, seconds, value, param, ctx):
        if not math.isfinite(seconds) or abs(seconds) > self.MAX_SECONDS:
            self.fail(f"{value!r} is out of range for a duration", param, ctx)
        return seconds


DURATION = DurationParamType()


def browser_options(f):
    """Browser and output options shared by every capture command."""
    f = click.option(
        "--browser",
        type=click.Choice(sorted(BROWSER_CHANNELS)),
        default=None,
        help="Browser build to use (default: chromium)",
    )(f)
    f = click.option(
        "--output", "-o", default=None, help="Output file path (default: output)"
    )(f)
    f = click.option(
        "--user-agent", "-u", default=None, help="User agent string"
    )(f)
    f = click.option(
        "--timeout",
        "-t",
        type=DURATION,
        default=None,
        help="Timeout for the operation, e.g. 30s or 1m (default: 30s)",
    )(f)
    return f


def make_page(url, timeout, user_agent, browser) -> Webpage:
    """Build the page handle from command line values and configured defaults."""
    settings = env.get_settings()
    opts = [with_timeout(timeout if timeout is not None else settings.timeout)]
    user_agent = user_agent or settings.user_agent
    if user_agent:
        opts.append(with_user_agent(user_agent))
    opts.append(with_browser(browser or settings.browser_type))
    return Webpage(url, *opts)


def write_output(path: str, data: bytes):
    Path(path).write_bytes(data)


@click.group(help="A CLI tool for capturing webpages as PDFs or screenshots")
@click.version_option(version=__version__, prog_name="webpage")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose):
    """Capture webpages as PDFs or screenshots."""
    env.load()
    configure_logging("DEBUG" if verbose else env.get_setting("log_level", "WARNING"))


@cli.command()
@click.argument("url")
@browser_options
@click.option("--landscape", "-l", is_flag=True, default=False, help="Enable landscape mode")
@click.option("--background", "-b", is_flag=True, default=False, help="Include background graphics")
@click.option("--scale", "-s", type=float, default=DEFAULT_SCALE, show_default=True, help="Scale factor for the PDF")
@click.option("--width", type=float, default=DEFAULT_PAPER_WIDTH, show_default=True, help="Paper width in inches")
@click.option("--height", type=float, default=DEFAULT_PAPER_HEIGHT, show_default=True, help="Paper height in inches")
@click.option("--margin-top", type=float, default=DEFAULT_MARGIN, show_default=True, help="Top margin in inches")
@click.option("--margin-bottom", type=float, default=DEFAULT_MARGIN, show_default=True, help="Bottom margin in inches")
@click.option("--margin-left", type=float, default=DEFAULT_MARGIN, show_default=True, help="Left margin in inches")
@click.option("--margin-right", type=float, default=DEFAULT_MARGIN, show_default=True, help="Right margin in inches")
@click.option("--pages", default="", help="Page ranges to print (e.g., '1-5, 8, 11-13')")
def pdf(
    url,
    timeout,
    user_agent,
    output,
    browser,
    landscape,
    background,
    scale,
    width,
    height,
    margin_top,
    margin_bottom,
    margin_left,
    margin_right,
    pages,
):
    """Capture a webpage as PDF."""
    page = make_page(url, timeout, user_agent, browser)
    output = output or env.get_output_path()

    pdf_opts = [
        with_landscape(landscape),
        with_background(background),
        with_scale(scale),
        with_paper_width(width),
        with_paper_height(height),
        with_margin_top(margin_top),
        with_margin_bottom(margin_bottom),
        with_margin_left(margin_left),
        with_margin_right(margin_right),
    ]
    if pages:
        pdf_opts.append(with_page_ranges(pages))

    logger.info(f"Generating PDF of {url}")
    try:
        data = asyncio.run(page.pdf(*pdf_opts))
    except WebpageError as e:
        raise click.ClickException(f"failed to generate PDF: {e}") from e

    try:
        write_output(output, data)
    except OSError as e:
        raise click.ClickException(f"failed to write PDF file: {e}") from e

    click.echo(f"PDF saved to: {output}")


@cli.command()
@click.argument("url")
@browser_options
@click.option(
    "--format",
    "-f",
    "image_format",
    type=click.Choice(SCREENSHOT_FORMATS),
    default=DEFAULT_FORMAT,
    show_default=True,
    help="Screenshot format",
)
@click.option(
    "--quality",
    "-q",
    type=click.IntRange(0, 100),
    default=DEFAULT_QUALITY,
    show_default=True,
    help="Image quality (0-100, only for jpeg)",
)
def screenshot(url, timeout, user_agent, output, browser, image_format, quality):
    """Capture a webpage screenshot."""
    page = make_page(url, timeout, user_agent, browser)
    output = output or env.get_output_path()

    logger.info(f"Capturing screenshot of {url}")
    try:
        data = asyncio.run(page.screenshot(with_format(image_format), with_quality(quality)))
    except WebpageError as e:
        raise click.ClickException(f"failed to capture screenshot: {e}") from e

    try:
        write_output(output, data)
    except OSError as e:
        raise click.ClickException(f"failed to write screenshot file: {e}") from e

    click.echo(f"Screenshot saved to: {output}")


def main():
    """Entry point for the CLI application. Any error, usage errors included, exits 1."""
    try:
        return cli.main(prog_name="webpage", standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)


if __name__ == "__main__":
    sys.exit(main())
