"""Shared pytest fixtures: stub Playwright browsers and OpenAI clients."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from llmscraper.plugins import reset_extractors

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def article_html() -> str:
    return _read_fixture("article.html")


@pytest.fixture(autouse=True)
def _builtin_extractors():
    yield
    reset_extractors()


# ---------------------------------------------------------------------------
# Playwright stubs
# ---------------------------------------------------------------------------

def make_page(
    html_by_url: dict[str, str] | None = None,
    delays: dict[str, float] | None = None,
    screenshot: bytes = b"\xff\xd8\xff\xe0jpeg-bytes",
    fail_urls: frozenset[str] = frozenset(),
    close_fail_urls: frozenset[str] = frozenset(),
) -> MagicMock:
    """A Page stub whose content depends on the URL it navigated to."""
    html_by_url = html_by_url or {}
    delays = delays or {}
    page = MagicMock()
    page.url = "about:blank"

    async def goto(url: str, **kwargs: Any) -> None:
        page.url = url
        await asyncio.sleep(delays.get(url, 0))
        if url in fail_urls:
            raise RuntimeError(f"net::ERR_NAME_NOT_RESOLVED at {url}")

    page.goto = AsyncMock(side_effect=goto)
    page.content = AsyncMock(
        side_effect=lambda: html_by_url.get(page.url, f"<html><body>{page.url}</body></html>"),
    )
    page.screenshot = AsyncMock(return_value=screenshot)

    async def close() -> None:
        if page.url in close_fail_urls:
            raise RuntimeError("Target page, context or browser has been closed")

    page.close = AsyncMock(side_effect=close)
    return page


def make_browser(**page_kwargs: Any) -> MagicMock:
    """A Browser stub with one context; every new page is recorded on it."""
    context = MagicMock()
    context.pages = []

    async def new_page() -> MagicMock:
        page = make_page(**page_kwargs)
        context.pages.append(page)
        return page

    context.new_page = AsyncMock(side_effect=new_page)
    context.close = AsyncMock()

    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()
    browser.context = context
    return browser


@pytest.fixture
def browser() -> MagicMock:
    return make_browser()


# ---------------------------------------------------------------------------
# OpenAI stubs
# ---------------------------------------------------------------------------

def make_completion(arguments: str | None) -> SimpleNamespace:
    """A ChatCompletion-shaped object carrying *arguments* as its function call."""
    function_call = None if arguments is None else SimpleNamespace(
        name="extract_content", arguments=arguments,
    )
    message = SimpleNamespace(role="assistant", content=None, function_call=function_call)
    return SimpleNamespace(choices=[SimpleNamespace(index=0, message=message)])


_EXAMPLE_PAYLOAD = {"title": "Example"}


def make_client(responses: Any = _EXAMPLE_PAYLOAD) -> MagicMock:
    """An AsyncOpenAI stub.

    *responses* is either a single payload (dict, str or ``None``) returned
    for every request, or a callable ``(kwargs) -> payload`` that may raise.
    """
    async def create(**kwargs: Any) -> SimpleNamespace:
        payload = responses(kwargs) if callable(responses) else responses
        if isinstance(payload, dict):
            payload = json.dumps(payload)
        return make_completion(payload)

    client = MagicMock()
    client.chat.completions.create = AsyncMock(side_effect=create)
    return client


@pytest.fixture
def client() -> MagicMock:
    return make_client()


@pytest.fixture
def browser_factory():
    return make_browser


@pytest.fixture
def client_factory():
    return make_client


@pytest.fixture
def completion_factory():
    return make_completion
