"""llmscraper.plugins — pluggable content extraction strategies.

Usage::

    from llmscraper import register_extractor

    class VisibleText:
        mode = "text"
        async def extract(self, page) -> str:
            return await page.inner_text("body")

    register_extractor(VisibleText())

Extractors follow a ``runtime_checkable`` ``Protocol`` so they need no base
class.  Registering an extractor replaces the built-in one for its mode.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from llmscraper.extractors.page import HtmlExtractor, ReadabilityExtractor, ScreenshotExtractor
from llmscraper.items import MODES

# ---------------------------------------------------------------------------
# Protocol definition
# ---------------------------------------------------------------------------

@runtime_checkable
class ContentExtractor(Protocol):
    """Turns a navigated Playwright page into the content sent to the model."""

    mode: str  # "html" | "text" | "image"

    async def extract(self, page: Any) -> str:
        """Return the page content for this mode."""
        ...


# ---------------------------------------------------------------------------
# Module-level registry
# ---------------------------------------------------------------------------

def _builtin_extractors() -> dict[str, ContentExtractor]:
    return {
        "html": HtmlExtractor(),
        "text": ReadabilityExtractor(),
        "image": ScreenshotExtractor(),
    }


_registry: dict[str, ContentExtractor] = _builtin_extractors()


def register_extractor(plugin: ContentExtractor) -> None:
    """Register *plugin* as the extractor for ``plugin.mode``."""
    if not isinstance(plugin, ContentExtractor):
        raise TypeError(f"{plugin!r} does not implement ContentExtractor")
    if plugin.mode not in MODES:
        raise ValueError(f"mode must be one of {MODES}; got {plugin.mode!r}")
    _registry[plugin.mode] = plugin


def get_extractor(mode: str) -> ContentExtractor:
    """Return the extractor registered for *mode*."""
    try:
        return _registry[mode]
    except KeyError:
        raise ValueError(f"mode must be one of {MODES}; got {mode!r}") from None


def reset_extractors() -> None:
    """Restore the built-in extractors. Primarily for use in tests."""
    _registry.clear()
    _registry.update(_builtin_extractors())
