"""Readable title and body text from rendered HTML.

Runs readability-lxml (the Python port of Mozilla Readability) against the
DOM serialised out of the browser, then flattens the article fragment it
selects to plain text with BeautifulSoup.
"""

from __future__ import annotations

import logging
import re
from typing import NamedTuple

from bs4 import BeautifulSoup
from readability import Document  # type: ignore[import-untyped]
from readability.readability import Unparseable  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

_TEMPLATE_RE = re.compile(r"<template\b[^>]*>.*?</template>", re.DOTALL | re.IGNORECASE)
_BLANK_LINES_RE = re.compile(r"\n{3,}")


class ReadableContent(NamedTuple):
    title: str
    text: str

    def format(self) -> str:
        """Render as ``"{title}\\n{text}"`` (``"\\n"`` when both are empty)."""
        return f"{self.title}\n{self.text}"


def _strip_templates(html: str) -> str:
    # lxml re-parents <template> children into <body>, where readability may
    # pick placeholder markup as the main content.
    return _TEMPLATE_RE.sub("", html)


def _fragment_to_text(fragment: str) -> str:
    soup = BeautifulSoup(fragment, "lxml")
    text = soup.get_text(separator="\n", strip=True)
    return _BLANK_LINES_RE.sub("\n\n", text)


def extract_readable(html: str, url: str = "") -> ReadableContent:
    """Return the best-effort article title and body text of *html*.

    Never raises on unusable input: an empty or unparseable document yields
    ``ReadableContent("", "")``.
    """
    if not html or not html.strip():
        return ReadableContent("", "")

    try:
        doc = Document(_strip_templates(html), url=url or None)
        title = (doc.short_title() or "").strip()
        text = _fragment_to_text(doc.summary(html_partial=True))
    except Unparseable as exc:
        logger.debug("readability failed for %s: %s", url or "<html>", exc)
        return ReadableContent("", "")

    logger.debug(
        "readability extracted %d words from %s",
        len(text.split()), url or "<html>",
    )
    return ReadableContent(title, text)
