"""Headless Chromium startup for callers that do not bring their own browser."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from playwright.async_api import async_playwright

from llmscraper import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def launch_browser(headless: bool | None = None, **launch_kwargs: Any) -> AsyncIterator[Any]:
    """Start Playwright, launch Chromium, and yield the ``Browser``.

    Both are shut down on exit.  If the browser was already closed (for
    instance by a run with ``close_on_finish=True``) only Playwright is
    stopped.
    """
    if headless is None:
        headless = settings.HEADLESS
    launch_kwargs.setdefault("args", list(settings.CHROMIUM_ARGS))

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=headless, **launch_kwargs)
        logger.debug("launched chromium (headless=%s)", headless)
        try:
            yield browser
        finally:
            if browser.is_connected():
                await browser.close()
