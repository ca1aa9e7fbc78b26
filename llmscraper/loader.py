"""llmscraper.loader - open pages in a shared browser context and extract content.

Every URL gets its own page inside one context per run.  Visits run
concurrently as asyncio tasks; the returned list is in input order no
matter which page finishes first::

    loader = PageLoader(browser)
    pending = await loader.load(["https://a.example", "https://b.example"],
                                LoadOptions(mode="text"))
    results = await asyncio.gather(*pending)
    await loader.close()
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from llmscraper import settings
from llmscraper.errors import LoadError
from llmscraper.items import LoadOptions, LoadResult
from llmscraper.plugins import get_extractor

logger = logging.getLogger(__name__)


def normalize_urls(url: str | Sequence[str]) -> list[str]:
    """Return *url* as a list, accepting a single URL or a sequence."""
    if isinstance(url, str):
        return [url]
    return list(url)


class PageLoader:
    """Loads pages through a caller-owned Playwright ``Browser``.

    Args:
        browser:       A live ``playwright.async_api.Browser``.
        context_kwargs: Extra keyword arguments for ``browser.new_context()``
                        (viewport, user agent, proxy and so on).
    """

    def __init__(self, browser: Any, **context_kwargs: Any) -> None:
        self._browser = browser
        self._context_kwargs = context_kwargs
        self._context: Any = None
        self._context_lock = asyncio.Lock()

    @property
    def context(self) -> Any:
        """The current browser context, or ``None`` before the first load."""
        return self._context

    async def _ensure_context(self) -> Any:
        async with self._context_lock:
            if self._context is None:
                self._context = await self._browser.new_context(**self._context_kwargs)
                logger.debug("opened browser context")
            return self._context

    async def _load_one(self, context: Any, url: str, options: LoadOptions) -> LoadResult:
        extractor = get_extractor(options.mode)
        try:
            page = await context.new_page()
        except Exception as exc:
            raise LoadError(f"Could not open a page for {url}: {exc}", url=url) from exc

        try:
            logger.debug("navigating to %s", url)
            await page.goto(
                url,
                wait_until=settings.WAIT_UNTIL,
                timeout=settings.NAVIGATION_TIMEOUT_MS,
            )
            content = await extractor.extract(page)
        except Exception as exc:
            raise LoadError(
                f"Failed to load {url} ({options.mode}): {exc}", url=url,
            ) from exc
        finally:
            # A failed close must not replace the extraction outcome.
            try:
                await page.close()
            except Exception as exc:
                logger.debug("closing page for %s failed: %s", url, exc)

        logger.debug("loaded %s: %d chars (%s)", url, len(content), options.mode)
        return LoadResult(url=url, content=content, mode=options.mode)

    async def load(
        self,
        url: str | Sequence[str],
        options: LoadOptions | None = None,
    ) -> list[asyncio.Task[LoadResult]]:
        """Start loading every URL and return one pending task per URL.

        Args:
            url:     A single URL or an ordered sequence of URLs.
            options: :class:`~llmscraper.items.LoadOptions`; defaults to
                     ``mode="html"``.

        Returns:
            Tasks resolving to :class:`~llmscraper.items.LoadResult`, in the
            order of *url*.  A failed navigation or extraction resolves that
            task with :class:`~llmscraper.errors.LoadError`.
        """
        options = options or LoadOptions()
        urls = normalize_urls(url)
        # Resolve the strategy before any page is opened so a bad mode fails fast.
        get_extractor(options.mode)
        if not urls:
            return []

        context = await self._ensure_context()
        logger.info("loading %d page(s) in %s mode", len(urls), options.mode)
        return [
            asyncio.create_task(self._load_one(context, u, options), name=f"load:{u}")
            for u in urls
        ]

    async def close(self) -> None:
        """Close the shared context.  Safe to call more than once."""
        async with self._context_lock:
            if self._context is None:
                return
            context, self._context = self._context, None
        await context.close()
        logger.debug("closed browser context")
