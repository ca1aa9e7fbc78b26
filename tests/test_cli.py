"""Tests for the llmscraper command-line entry point."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

import pytest

from llmscraper.__main__ import _build_parser, _load_schema, main
from llmscraper.errors import CompletionError, SchemaError
from llmscraper.items import CompletionResult


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps({
        "type": "object",
        "properties": {"title": {"type": "string"}},
        "required": ["title"],
    }), encoding="utf-8")
    return path


class TestParser:
    def test_defaults(self):
        args = _build_parser().parse_args(["https://example.com", "--schema", "s.json"])
        assert args.urls == ["https://example.com"]
        assert args.mode == "html"
        assert args.model is None
        assert args.instructions is None
        assert args.headed is False

    def test_rejects_unknown_mode(self):
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["https://example.com", "--schema", "s.json", "--mode", "pdf"])


class TestLoadSchema:
    def test_reads_object(self, schema_file):
        assert _load_schema(str(schema_file))["properties"]["title"] == {"type": "string"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaError):
            _load_schema(str(tmp_path / "nope.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(SchemaError):
            _load_schema(str(path))

    def test_non_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(SchemaError):
            _load_schema(str(path))


class TestMain:
    def test_writes_json(self, schema_file, tmp_path):
        results = [CompletionResult(url="https://example.com", data={"title": "Example"})]
        out = tmp_path / "out" / "results.json"
        with patch("llmscraper.__main__._scrape", new=AsyncMock(return_value=results)) as mock_scrape:
            code = main([
                "https://example.com", "--schema", str(schema_file),
                "--mode", "text", "--instructions", "Title only", "--out", str(out),
            ])
        assert code == 0
        assert json.loads(out.read_text(encoding="utf-8")) == [
            {"data": {"title": "Example"}, "url": "https://example.com"},
        ]
        _, options = mock_scrape.await_args.args
        assert options.mode == "text"
        assert options.instructions == "Title only"
        assert options.schema["required"] == ["title"]

    def test_failed_item_exit_code(self, schema_file, capsys):
        results = [
            CompletionResult(url="https://a.example", data={"title": "A"}),
            CompletionResult(
                url="https://b.example", error=CompletionError("quota", url="https://b.example"),
            ),
        ]
        with patch("llmscraper.__main__._scrape", new=AsyncMock(return_value=results)):
            code = main(["https://a.example", "https://b.example", "--schema", str(schema_file)])
        assert code == 1
        out = capsys.readouterr().out
        assert "https://a.example" in out
        assert "CompletionError" in out

    def test_bad_schema_exit_code(self, tmp_path):
        assert main(["https://example.com", "--schema", str(tmp_path / "missing.json")]) == 2

    def test_scraper_crash_exit_code(self, schema_file):
        with patch("llmscraper.__main__._scrape", new=AsyncMock(side_effect=RuntimeError("no chromium"))):
            assert main(["https://example.com", "--schema", str(schema_file)]) == 1
