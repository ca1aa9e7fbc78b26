"""Exception hierarchy for llmscraper.

Every per-item failure is a :class:`ScraperError` carrying the URL it
belongs to, so a batch can report which page failed without aborting its
siblings.
"""

from __future__ import annotations


class ScraperError(RuntimeError):
    """Base class for failures tied to a single URL.

    Attributes:
        url -- the URL whose load or completion failed
    """

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class LoadError(ScraperError):
    """Navigation or content extraction failed in the browser."""


class CompletionError(ScraperError):
    """The completion service failed or returned no usable choice."""


class ParseError(ScraperError):
    """Function-call arguments were not valid JSON or failed validation.

    Attributes:
        raw -- the unparsed arguments string returned by the service
    """

    def __init__(self, message: str, url: str = "", raw: str | None = None) -> None:
        super().__init__(message, url=url)
        self.raw = raw


class SchemaError(ValueError):
    """The output schema cannot be expressed as JSON Schema."""
