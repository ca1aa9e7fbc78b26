"""llmscraper.scraper — High-level LLMScraper class.

Loads pages in a Playwright browser and asks an OpenAI model to extract
structured data from each one.

Usage::

    from pydantic import BaseModel
    from llmscraper import LLMScraper, RunOptions

    class Story(BaseModel):
        title: str
        points: int

    async with LLMScraper.launch() as scraper:
        results = await scraper.run(
            ["https://news.ycombinator.com"],
            RunOptions(schema=Story, mode="text"),
        )
    for result in results:
        print(result.url, result.data)

    # With a browser you already manage
    scraper = LLMScraper(browser)
    results = await scraper.run("https://example.com", RunOptions(schema=Story))
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any

from llmscraper.browser import launch_browser
from llmscraper.completion import CompletionRequester
from llmscraper.items import CompletionResult, RunOptions
from llmscraper.loader import PageLoader, normalize_urls
from llmscraper.schema import to_json_schema

logger = logging.getLogger(__name__)


class LLMScraper:
    """Scrape pages into structured data with a browser and an LLM.

    Args:
        browser:        A live ``playwright.async_api.Browser``.  It is only
                        closed by a run with ``close_on_finish=True``.
        client:         Optional ``openai.AsyncOpenAI`` client.  Created from
                        the environment on first use when omitted.
        context_kwargs: Extra keyword arguments for ``browser.new_context()``.
    """

    def __init__(self, browser: Any, client: Any = None, **context_kwargs: Any) -> None:
        self._browser = browser
        self._context_kwargs = context_kwargs
        self._requester = CompletionRequester(client)

    @classmethod
    @asynccontextmanager
    async def launch(
        cls,
        client: Any = None,
        headless: bool | None = None,
        **context_kwargs: Any,
    ) -> AsyncIterator[LLMScraper]:
        """Launch a headless Chromium and yield a scraper bound to it."""
        async with launch_browser(headless=headless) as browser:
            yield cls(browser, client=client, **context_kwargs)

    async def run(
        self,
        url: str | Sequence[str],
        options: RunOptions,
    ) -> list[CompletionResult]:
        """Load every URL, extract structured data, and return one result per URL.

        Results are in the order of *url*.  The run's browser context is
        closed only after every item has finished, successfully or not.

        Args:
            url:     A single URL or an ordered sequence of URLs.
            options: :class:`~llmscraper.items.RunOptions`.

        Returns:
            A list of :class:`~llmscraper.items.CompletionResult`.

        Raises:
            :class:`~llmscraper.errors.SchemaError`: If ``options.schema``
                cannot be translated; raised before any page is opened.
            :class:`~llmscraper.errors.ScraperError`: With
                ``on_error="raise"``, the first item failure in input order.
        """
        urls = normalize_urls(url)
        to_json_schema(options.schema)
        logger.info("run: %d url(s), mode=%s", len(urls), options.mode)

        loader = PageLoader(self._browser, **self._context_kwargs)
        try:
            pending = await loader.load(urls, options)
            tasks = self._requester.complete(pending, options, urls=urls)
            # Barrier: every load and completion settles before teardown.
            outcomes = await asyncio.gather(*pending, *tasks, return_exceptions=True)
        finally:
            try:
                await loader.close()
            finally:
                if options.close_on_finish:
                    await self._browser.close()
                    logger.debug("browser closed (close_on_finish)")

        results: list[CompletionResult] = outcomes[len(pending):]
        for outcome in results:
            # Anything that is not a ScraperError escaped per-item handling.
            if isinstance(outcome, BaseException):
                raise outcome

        failed = [r for r in results if not r.ok]
        logger.info("run: %d ok, %d failed", len(results) - len(failed), len(failed))
        if failed and options.on_error == "raise":
            raise failed[0].error
        return results
