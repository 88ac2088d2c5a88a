from __future__ import annotations

from typing import Any

import pandas as pd
import pytest

from vdem_vis.clean.validate import to_panel_frame


@pytest.fixture
def small_panel() -> pd.DataFrame:
    rows: list[dict[str, Any]] = []
    # Two large countries, one democracy and one autocracy, 1998-2021
    for i, year in enumerate(range(1998, 2022)):
        rows.append({
            "country": "Freedonia", "year": year, "polyarchy": 0.8 + 0.001 * i,
            "gdppc": 30_000 * 1.02 ** i, "population": 50_000_000.0,
            "gdp_growth": 2.0 + (i % 3), "regime": 3, "region": "Europe",
        })
        rows.append({
            "country": "Sylvania", "year": year, "polyarchy": 0.2,
            "gdppc": 2_000 * 1.06 ** i, "population": 80_000_000.0,
            "gdp_growth": 6.0 + (i % 2), "regime": 0, "region": "Asia",
        })
    # Small country with a gap, excluded by population filters
    rows += [
        {"country": "Tinyland", "year": 2005, "polyarchy": 0.55, "gdppc": 100.0, "population": 1_000_000.0, "regime": 2},
        {"country": "Tinyland", "year": 2006, "polyarchy": 0.55, "gdppc": None, "population": 1_000_000.0, "regime": 2},
        {"country": "Tinyland", "year": 2007, "polyarchy": 0.56, "gdppc": 110.0, "population": 1_000_000.0, "regime": 2},
    ]
    return to_panel_frame(rows)
