"""llmscraper - turn any web page into structured data with an LLM.

Quick usage::

    import asyncio
    from pydantic import BaseModel
    from llmscraper import LLMScraper, RunOptions

    class Page(BaseModel):
        title: str

    async def main():
        async with LLMScraper.launch() as scraper:
            results = await scraper.run(
                "https://example.com", RunOptions(schema=Page, mode="html"),
            )
        print(results[0].data)   # {'title': 'Example Domain'}

    asyncio.run(main())

Custom content extraction::

    from llmscraper import register_extractor

    class VisibleText:
        mode = "text"
        async def extract(self, page):
            return await page.inner_text("body")

    register_extractor(VisibleText())
"""

from llmscraper.completion import CompletionRequester
from llmscraper.errors import CompletionError, LoadError, ParseError, SchemaError, ScraperError
from llmscraper.items import CompletionResult, LoadOptions, LoadResult, RunOptions
from llmscraper.loader import PageLoader
from llmscraper.plugins import ContentExtractor, register_extractor
from llmscraper.schema import to_json_schema
from llmscraper.scraper import LLMScraper

__version__ = "0.1.0"
__all__ = [
    "CompletionError",
    "CompletionRequester",
    "CompletionResult",
    "ContentExtractor",
    "LLMScraper",
    "LoadError",
    "LoadOptions",
    "LoadResult",
    "PageLoader",
    "ParseError",
    "RunOptions",
    "SchemaError",
    "ScraperError",
    "register_extractor",
    "to_json_schema",
]
