from __future__ import annotations

from pathlib import Path

import pytest

from vdem_vis.config import get_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("VDEM_DATA_SOURCE", "VDEM_CACHE_DIR", "VDEM_FETCH_TIMEOUT", "VDEM_LOG_PATH"):
        monkeypatch.delenv(var, raising=False)
    s = get_settings()
    assert s.data_source == "data/vdem-lite.json"
    assert s.cache_dir == Path("data/vdem_cache")
    assert s.fetch_timeout == 60.0
    assert s.log_path is None


def test_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VDEM_DATA_SOURCE", "https://example.org/vdem.csv")
    monkeypatch.setenv("VDEM_FETCH_TIMEOUT", "12.5")
    monkeypatch.setenv("VDEM_LOG_PATH", "logs/vis.log")
    s = get_settings()
    assert s.data_source == "https://example.org/vdem.csv"
    assert s.fetch_timeout == 12.5
    assert s.log_path == Path("logs/vis.log")


@pytest.mark.parametrize(
    ("var", "value"),
    [("VDEM_DATA_SOURCE", "   "), ("VDEM_FETCH_TIMEOUT", "soon"), ("VDEM_FETCH_TIMEOUT", "0")],
)
def test_invalid_settings_raise(monkeypatch: pytest.MonkeyPatch, var: str, value: str) -> None:
    monkeypatch.setenv(var, value)
    with pytest.raises(RuntimeError):
        get_settings()
