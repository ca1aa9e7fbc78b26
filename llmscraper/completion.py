"""llmscraper.completion - structured extraction through OpenAI function calls.

Each loaded page becomes one chat-completion request whose only function is
``extract_content``, with the caller's schema as its parameters.  The
function-call arguments string is parsed as JSON and paired with the page
URL.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Sequence
from typing import Any

import openai

from llmscraper import settings
from llmscraper.errors import CompletionError, ParseError, ScraperError
from llmscraper.items import CompletionResult, LoadResult, RunOptions
from llmscraper.schema import to_json_schema, validate_data

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Request building
# ---------------------------------------------------------------------------

def prepare_page(page: LoadResult) -> dict[str, Any]:
    """Return the chat content part for *page*.

    Screenshots become an ``image_url`` part holding a JPEG data URI; HTML
    and text are sent as a plain ``text`` part.
    """
    if page.mode == "image":
        return {
            "type": "image_url",
            "image_url": {"url": f"data:image/jpeg;base64,{page.content}"},
        }
    return {"type": "text", "text": page.content}


def select_model(options: RunOptions) -> str:
    """Use the caller's model when given, otherwise pick one by mode."""
    if options.model:
        return options.model
    if options.mode == "image":
        return settings.VISION_MODEL
    return settings.TEXT_MODEL


def function_description(options: RunOptions) -> str:
    """Caller instructions when non-blank, otherwise the default description."""
    if options.instructions and options.instructions.strip():
        return options.instructions
    return settings.DEFAULT_INSTRUCTIONS


def build_request(
    page: LoadResult,
    options: RunOptions,
    parameters: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Return the keyword arguments for ``chat.completions.create``."""
    if parameters is None:
        parameters = to_json_schema(options.schema)
    return {
        "model": select_model(options),
        "messages": [{"role": "user", "content": [prepare_page(page)]}],
        "functions": [
            {
                "name": settings.FUNCTION_NAME,
                "description": function_description(options),
                "parameters": parameters,
            },
        ],
        "function_call": {"name": settings.FUNCTION_NAME},
    }


# ---------------------------------------------------------------------------
# Response parsing
# ---------------------------------------------------------------------------

def function_arguments(completion: Any, url: str = "") -> str | None:
    """Return the function-call arguments string, or ``None`` if absent.

    Raises:
        CompletionError: If the response carries no choices.
    """
    choices = getattr(completion, "choices", None)
    if not choices:
        raise CompletionError(f"Completion for {url} returned no choices", url=url)
    function_call = getattr(choices[0].message, "function_call", None)
    if function_call is None:
        return None
    return function_call.arguments or None


def parse_arguments(arguments: str | None, url: str = "") -> Any:
    """Parse *arguments* as JSON; empty or missing arguments give ``None``.

    Raises:
        ParseError: If *arguments* is not valid JSON.
    """
    if arguments is None or not arguments.strip():
        return None
    try:
        return json.loads(arguments)
    except json.JSONDecodeError as exc:
        raise ParseError(
            f"Malformed function-call arguments for {url}: {exc}", url=url, raw=arguments,
        ) from exc


# ---------------------------------------------------------------------------
# Requester
# ---------------------------------------------------------------------------

class CompletionRequester:
    """Issues one completion request per loaded page.

    Args:
        client: An ``openai.AsyncOpenAI`` (or compatible) client.  When
                omitted one is created on first use, reading
                ``OPENAI_API_KEY`` from the environment.
    """

    def __init__(self, client: Any = None) -> None:
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = openai.AsyncOpenAI()
        return self._client

    async def _request(self, page: LoadResult, options: RunOptions, parameters: dict[str, Any]) -> Any:
        kwargs = build_request(page, options, parameters)
        logger.debug("requesting %s for %s", kwargs["model"], page.url)
        try:
            return await self.client.chat.completions.create(**kwargs)
        except openai.OpenAIError as exc:
            raise CompletionError(
                f"Completion request failed for {page.url}: {exc}", url=page.url,
            ) from exc

    async def _complete_one(
        self,
        url: str,
        pending: Awaitable[LoadResult],
        options: RunOptions,
        parameters: dict[str, Any],
    ) -> CompletionResult:
        try:
            page = await pending
            completion = await self._request(page, options, parameters)
            data = parse_arguments(function_arguments(completion, page.url), page.url)
            if options.validate_output:
                data = validate_data(options.schema, data, page.url)
        except ScraperError as exc:
            logger.warning("%s: %s", type(exc).__name__, exc)
            return CompletionResult(url=exc.url or url, error=exc)
        return CompletionResult(url=page.url, data=data)

    def complete(
        self,
        pending: Sequence[Awaitable[LoadResult]],
        options: RunOptions,
        urls: Sequence[str] | None = None,
    ) -> list[asyncio.Task[CompletionResult]]:
        """Start one completion per pending page; return tasks in input order.

        Load, request and parse failures resolve their own task with a
        :class:`~llmscraper.items.CompletionResult` whose ``error`` is set;
        sibling tasks are unaffected.

        Args:
            pending: Awaitables resolving to :class:`LoadResult`, typically
                     the tasks returned by :meth:`PageLoader.load`.
            options: Run options (schema, model, instructions, mode).
            urls:    URLs matching *pending* by position, used to label
                     failures that carry no URL of their own.
        """
        parameters = to_json_schema(options.schema)
        labels = list(urls) if urls is not None else [""] * len(pending)
        if len(labels) != len(pending):
            raise ValueError("urls and pending must have the same length")
        return [
            asyncio.ensure_future(self._complete_one(label, p, options, parameters))
            for label, p in zip(labels, pending, strict=True)
        ]
