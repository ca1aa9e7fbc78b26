"""CLI entry point: python -m llmscraper URL [URL ...] --schema FILE [options]"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from llmscraper.errors import SchemaError
from llmscraper.items import MODES, CompletionResult, RunOptions
from llmscraper.scraper import LLMScraper

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="llmscraper",
        description=(
            "Open web pages in headless Chromium and extract structured data\n"
            "with an OpenAI model. Requires OPENAI_API_KEY."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("urls", nargs="+", metavar="URL",
                        help="One or more page URLs to scrape")
    parser.add_argument("--schema", required=True, metavar="FILE",
                        help="JSON Schema file describing the data to extract")
    parser.add_argument("--mode", choices=MODES, default="html",
                        help="Content sent to the model (default: html)")
    parser.add_argument("--model", default=None, metavar="NAME",
                        help="Model override (default: chosen by mode)")
    parser.add_argument("--instructions", default=None, metavar="TEXT",
                        help="Extraction instructions sent as the function description")
    parser.add_argument("--out", default=None, metavar="FILE",
                        help="Write results as JSON to FILE instead of printing a table")
    parser.add_argument("--headed", action="store_true", default=False,
                        help="Show the browser window (default: headless)")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help="Logging level (default: WARNING)")
    return parser


def _load_schema(path: str) -> dict[str, Any]:
    """Read a JSON Schema document from *path*."""
    try:
        schema = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise SchemaError(f"Cannot read schema file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise SchemaError(f"Schema file {path} is not valid JSON: {exc}") from exc
    if not isinstance(schema, dict):
        raise SchemaError(f"Schema file {path} must contain a JSON object")
    return schema


def _print_results(results: list[CompletionResult], console: Console) -> None:
    tbl = Table(box=box.SIMPLE_HEAVY, show_lines=False)
    tbl.add_column("#", style="dim", justify="right", width=4, no_wrap=True)
    tbl.add_column("URL", style="cyan", max_width=48, no_wrap=True)
    tbl.add_column("Data", overflow="fold")
    for i, result in enumerate(results, 1):
        if result.ok:
            cell = Text(json.dumps(result.to_dict()["data"], ensure_ascii=False, indent=2))
        else:
            cell = Text(f"{type(result.error).__name__}: {result.error}", style="red")
        tbl.add_row(str(i), result.url, cell)
    console.print(tbl)


async def _scrape(args: argparse.Namespace, options: RunOptions) -> list[CompletionResult]:
    async with LLMScraper.launch(headless=not args.headed) as scraper:
        return await scraper.run(args.urls, options)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        options = RunOptions(
            schema=_load_schema(args.schema),
            mode=args.mode,
            model=args.model,
            instructions=args.instructions,
        )
    except SchemaError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    try:
        results = asyncio.run(_scrape(args, options))
    except Exception:
        logger.exception("Scraper failed")
        return 1

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(
            json.dumps([r.to_dict() for r in results], ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        logger.info("wrote %d result(s) to %s", len(results), out_path)
    else:
        _print_results(results, Console())

    return 0 if all(r.ok for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
