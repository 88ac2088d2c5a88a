from __future__ import annotations

import math

import pandas as pd
import pytest
from pydantic import ValidationError

from vdem_vis.models import DomainBounds, PanelRow


def test_panel_row_validates_and_scrubs_missing() -> None:
    row = PanelRow.model_validate({
        "country": "Chile", "year": 2001.0, "polyarchy": pd.NA,
        "gdppc": math.nan, "population": 15_000_000.0, "regime": 3,
    })
    assert row.year == 2001
    assert row.polyarchy is None
    assert row.gdppc is None
    assert row.region is None


@pytest.mark.parametrize(
    "rec",
    [
        {"country": "", "year": 2000},
        {"country": None, "year": 2000},
        {"country": "Chile", "year": pd.NA},
        {"country": "Chile", "year": 2000.5},
        {"country": "Chile", "year": 2000, "unexpected": 1},
    ],
)
def test_panel_row_rejects_bad_identity(rec: dict) -> None:
    with pytest.raises(ValidationError):
        PanelRow.model_validate(rec)


def test_domain_span_handles_inverted_axes() -> None:
    assert DomainBounds(low=7.0, high=2.0).span == pytest.approx(5.0)
