"""Runtime settings for llmscraper.

Values are read once from the environment at import time.  Override them by
exporting the matching ``LLMSCRAPER_*`` variable before importing the
package, or pass explicit arguments where the API accepts them.
"""

from __future__ import annotations

import os

# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------
TEXT_MODEL = os.getenv("LLMSCRAPER_TEXT_MODEL", "gpt-4-turbo")
# Must accept image input and function calling.
VISION_MODEL = os.getenv("LLMSCRAPER_VISION_MODEL", "gpt-4o")

# ---------------------------------------------------------------------------
# Function-call contract
# ---------------------------------------------------------------------------
FUNCTION_NAME = "extract_content"
DEFAULT_INSTRUCTIONS = "Extracts the content from the given page"

# ---------------------------------------------------------------------------
# Browser
# ---------------------------------------------------------------------------
# Playwright load state awaited by page.goto(): load | domcontentloaded | networkidle
WAIT_UNTIL = os.getenv("LLMSCRAPER_WAIT_UNTIL", "load")
NAVIGATION_TIMEOUT_MS = int(os.getenv("LLMSCRAPER_NAV_TIMEOUT_MS", "30000"))

HEADLESS = os.getenv("LLMSCRAPER_HEADLESS", "1") != "0"
CHROMIUM_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
)

SCREENSHOT_TYPE = "jpeg"
