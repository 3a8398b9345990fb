from types import SimpleNamespace

import pytest
import requests

import mseset.source as source_module
from mseset.source import fetch_lines, split_lines
from mseset.utils import SourceError


def test_split_lines_drops_final_empty_line_only():
    assert split_lines("a\r\nb\r\n") == ["a\r", "b\r"]
    assert split_lines("a\n\nb") == ["a", "", "b"]
    assert split_lines("") == []


def test_fetch_lines_reads_local_path_and_file_url(tmp_path):
    sheet = tmp_path / "cards.csv"
    sheet.write_bytes("Title\nJosé,x\n".encode("utf-8"))

    assert fetch_lines(sheet) == ["Title", "José,x"]
    assert fetch_lines(sheet.as_uri()) == ["Title", "José,x"]


def test_fetch_lines_missing_file(tmp_path):
    with pytest.raises(SourceError):
        fetch_lines(tmp_path / "missing.csv")


def test_fetch_lines_downloads_over_http(monkeypatch):
    calls = {}

    def fake_get(url, timeout):
        calls["url"] = url
        calls["timeout"] = timeout
        return SimpleNamespace(content=b"Title\r\nCard,1\r\n", raise_for_status=lambda: None)

    monkeypatch.setattr(source_module.requests, "get", fake_get)

    lines = fetch_lines("https://example.com/export?format=csv", timeout=5)

    assert lines == ["Title\r", "Card,1\r"]
    assert calls == {"url": "https://example.com/export?format=csv", "timeout": 5}


def test_fetch_lines_wraps_http_errors(monkeypatch):
    def raise_status():
        raise requests.HTTPError("404 Client Error")

    monkeypatch.setattr(
        source_module.requests,
        "get",
        lambda url, timeout: SimpleNamespace(content=b"", raise_for_status=raise_status),
    )

    with pytest.raises(SourceError, match="404"):
        fetch_lines("http://example.com/cards.csv")
