"""Built-in content extractors, one per scraper mode.

Each extractor receives a Playwright ``Page`` that has already navigated to
its URL and returns the page content as a string.
"""

from __future__ import annotations

import base64
import logging
from typing import Any

from llmscraper import settings
from llmscraper.extractors.main_content import extract_readable

logger = logging.getLogger(__name__)


class HtmlExtractor:
    """Rendered markup, unmodified."""

    mode = "html"

    async def extract(self, page: Any) -> str:
        return await page.content()


class ReadabilityExtractor:
    """Article title and body text, formatted as ``"{title}\\n{text}"``.

    The rendered DOM is serialised with ``page.content()`` and parsed
    in-process, so nothing is injected into the page sandbox.
    """

    mode = "text"

    async def extract(self, page: Any) -> str:
        html = await page.content()
        return extract_readable(html, url=page.url).format()


class ScreenshotExtractor:
    """Full-page screenshot as base64 text."""

    mode = "image"

    def __init__(self, image_type: str = settings.SCREENSHOT_TYPE) -> None:
        self._image_type = image_type

    async def extract(self, page: Any) -> str:
        image: bytes = await page.screenshot(full_page=True, type=self._image_type)
        logger.debug("screenshot of %s: %d bytes", page.url, len(image))
        return base64.b64encode(image).decode("ascii")
