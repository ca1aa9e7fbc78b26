"""Extraction sub-package: turns a rendered page into model input."""

from .main_content import ReadableContent, extract_readable
from .page import HtmlExtractor, ReadabilityExtractor, ScreenshotExtractor

__all__ = [
    "HtmlExtractor",
    "ReadabilityExtractor",
    "ReadableContent",
    "ScreenshotExtractor",
    "extract_readable",
]
