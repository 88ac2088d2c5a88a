from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import requests

from vdem_vis.errors import LoadError
from vdem_vis.ingest import fetch_dataset as fetch_mod
from vdem_vis.ingest.fetch_dataset import cache_path_for, fetch_dataset, is_remote

URL = "https://example.org/data/vdem-lite.json"


class _Resp:
    def __init__(self, status: int, content: bytes) -> None:
        self.status_code = status
        self.content = content

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def test_is_remote() -> None:
    assert is_remote(URL)
    assert not is_remote("data/vdem-lite.json")


def test_local_path_returned_as_is(tmp_path: Path) -> None:
    p = tmp_path / "x.csv"
    p.write_text("country,year\n", encoding="utf-8")
    assert fetch_dataset(str(p), tmp_path / "cache") == p


def test_download_then_cache_hit(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []

    def fake_get(url: str, **_: Any) -> _Resp:
        calls.append(url)
        return _Resp(200, b"[]")

    monkeypatch.setattr(fetch_mod.requests, "get", fake_get)
    cache = tmp_path / "cache"

    first = fetch_dataset(URL, cache)
    second = fetch_dataset(URL, cache)

    assert first == second == cache_path_for(URL, cache)
    assert first.suffix == ".json"
    assert first.read_bytes() == b"[]"
    assert calls == [URL]


def test_http_failure_is_load_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(fetch_mod.requests, "get", lambda url, **_: _Resp(503, b""))
    with pytest.raises(LoadError, match="503"):
        fetch_dataset(URL, tmp_path / "cache")


def test_unreachable_is_load_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(url: str, **_: Any) -> _Resp:
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(fetch_mod.requests, "get", boom)
    with pytest.raises(LoadError, match="connection refused"):
        fetch_dataset(URL, tmp_path / "cache")
    assert not cache_path_for(URL, tmp_path / "cache").exists()
