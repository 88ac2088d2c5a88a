from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest

from vdem_vis.errors import LoadError
from vdem_vis.ingest.load_panel import load_panel, load_panel_file

VDEM_CSV = """country_name,year,v2x_polyarchy,e_gdppc,e_pop,e_gdp_growth,v2x_regime,e_regionpol_6C,v2x_libdem
Turkey,2000,0.45,8000,63.2,6.5,1,Middle East,0.3
Türkiye,2000,0.46,8001,63.2,6.6,1,Middle East,0.3
Turkey,2001,,8100,64.0,NA,1.5,Middle East,0.3
,2002,0.5,1,1,1,1,Nowhere,0.1
Chile,abc,0.8,15000,15.1,4.0,3,Latin America,0.7
Chile,2001.5,0.8,15000,15.1,4.0,3,Latin America,0.7
Chile,2000,1.2,15000,15.1,4.0,3,Latin America,0.7
  Chile  ,2001,0.8,,15.2,3.0,3,Latin America,0.7
"""


def _write(tmp_path: Path, name: str, text: str) -> Path:
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


def test_csv_load_normalizes_types_aliases_and_drops_bad_rows(tmp_path: Path) -> None:
    panel, report = load_panel_file(_write(tmp_path, "vdem.csv", VDEM_CSV))

    assert report.rows_read == 8
    assert report.rows_dropped == 3
    assert report.duplicates == 1
    assert report.rows_kept == 4
    assert report.entities == 2
    assert set(panel["country"]) == {"Türkiye", "Chile"}

    tr = panel[panel["country"] == "Türkiye"].set_index("year")
    assert tr.loc[2000, "polyarchy"] == pytest.approx(0.45)  # first occurrence wins
    assert tr.loc[2000, "population"] == pytest.approx(63_200_000)
    assert pd.isna(tr.loc[2001, "polyarchy"])
    assert pd.isna(tr.loc[2001, "gdp_growth"])
    assert pd.isna(tr.loc[2001, "regime"])
    assert tr.loc[2000, "regime"] == 1

    cl = panel[panel["country"] == "Chile"].set_index("year")
    assert pd.isna(cl.loc[2000, "polyarchy"])  # out of range, nulled not dropped
    assert pd.isna(cl.loc[2001, "gdppc"])
    assert cl.loc[2001, "gdp_growth"] == pytest.approx(3.0)
    assert "v2x_libdem" not in panel.columns


def test_absent_values_are_not_zero(tmp_path: Path) -> None:
    panel, _ = load_panel_file(_write(tmp_path, "vdem.csv", VDEM_CSV))
    row = panel[(panel["country"] == "Türkiye") & (panel["year"] == 2001)].iloc[0]
    assert pd.isna(row["polyarchy"])
    assert panel["polyarchy"].fillna(-1.0).eq(0.0).sum() == 0
    assert str(panel["gdppc"].dtype) == "Float64"


def test_json_array_load(tmp_path: Path) -> None:
    rows = [
        {"country": "Turkey", "year": 2000, "polyarchy": 0.4, "gdp": None, "gdppc": 8000,
         "population": 63_000_000, "gdpGrowth": 6.5, "gdpGrowthMA5": None,
         "inflation": 50.1, "regime": 1, "region": "MENA"},
        {"country": "Chile", "year": "2001", "polyarchy": 0.8, "gdppc": "n/a"},
        {"country": None, "year": 2000},
    ]
    panel, report = load_panel_file(_write(tmp_path, "lite.json", json.dumps(rows)))
    assert report.rows_kept == 2
    assert report.rows_dropped == 1
    tr = panel[panel["country"] == "Türkiye"].iloc[0]
    assert tr["gdp_growth"] == pytest.approx(6.5)
    assert tr["region"] == "MENA"
    assert pd.isna(tr["gdp"])
    cl = panel[panel["country"] == "Chile"].iloc[0]
    assert cl["year"] == 2001
    assert pd.isna(cl["gdppc"])


def test_empty_json_array_loads_nothing(tmp_path: Path) -> None:
    panel, report = load_panel_file(_write(tmp_path, "empty.json", "[]"))
    assert panel.empty
    assert report.rows_kept == 0


def test_missing_file_is_load_error(tmp_path: Path) -> None:
    with pytest.raises(LoadError, match="file not found"):
        load_panel(str(tmp_path / "nope.csv"), tmp_path / "cache")


def test_missing_required_column_is_load_error(tmp_path: Path) -> None:
    path = _write(tmp_path, "bad.csv", "country_name,v2x_polyarchy\nChile,0.8\n")
    with pytest.raises(LoadError, match="year"):
        load_panel_file(path)


@pytest.mark.parametrize(
    "text",
    ["{not json", json.dumps({"country": "Chile"}), json.dumps([1, 2, 3])],
)
def test_structurally_bad_json_is_load_error(tmp_path: Path, text: str) -> None:
    with pytest.raises(LoadError):
        load_panel_file(_write(tmp_path, "bad.json", text))
