from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from vdem_vis.aggregate.buckets import (
    INCOME_LABELS,
    assign_quantile_buckets,
    category_buckets,
    fixed_width_buckets,
    fixed_width_index,
    income_groups,
    quantile_cut_points,
    quantile_index,
)
from vdem_vis.clean.validate import to_panel_frame


def test_fixed_width_every_value_in_unit_interval_has_one_bin() -> None:
    for v in np.linspace(0, 1, 1001)[:-1]:
        idx = fixed_width_index(float(v), 10)
        assert idx is not None and 0 <= idx < 10


def test_fixed_width_boundaries_are_left_inclusive_and_top_closed() -> None:
    assert fixed_width_index(0.0, 10) == 0
    assert fixed_width_index(0.3, 10) == 3
    assert fixed_width_index(0.7, 10) == 7
    assert fixed_width_index(0.0999, 10) == 0
    assert fixed_width_index(1.0, 10) == 9
    assert fixed_width_index(1.0, 4) == 3


def test_fixed_width_out_of_range_and_absent() -> None:
    assert fixed_width_index(-0.01, 10) is None
    assert fixed_width_index(1.01, 10) is None
    assert fixed_width_index(None, 10) is None
    assert fixed_width_index(pd.NA, 10) is None
    with pytest.raises(ValueError):
        fixed_width_index(0.5, 0)


def test_fixed_width_buckets_report_no_data_instead_of_zero() -> None:
    frame = to_panel_frame([
        {"country": "A", "year": 2000, "polyarchy": 0.05, "gdp_growth": 2.0, "population": 1.0},
        {"country": "B", "year": 2000, "polyarchy": 0.08, "gdp_growth": 4.0, "population": 3.0},
        {"country": "C", "year": 2000, "polyarchy": 1.0, "gdp_growth": -1.0, "population": None},
        {"country": "D", "year": 2000, "polyarchy": 0.5, "gdp_growth": None, "population": 9.0},
    ])
    buckets = fixed_width_buckets(frame, "polyarchy", "gdp_growth", n_bins=10, weight_col="population")
    assert len(buckets) == 10
    assert buckets[0].count == 2
    assert buckets[0].value == pytest.approx((2.0 * 1 + 4.0 * 3) / 4)
    assert buckets[0].label == "0-0.1"
    assert buckets[5].count == 0 and buckets[5].value is None
    assert buckets[9].value == pytest.approx(-1.0)

    unweighted = fixed_width_buckets(frame, "polyarchy", "gdp_growth", n_bins=10)
    assert unweighted[0].value == pytest.approx(3.0)


def test_quantile_cut_points_and_assignment() -> None:
    values = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0]
    cuts = quantile_cut_points(values, 3)
    assert cuts == [pytest.approx(3.6666666), pytest.approx(6.3333333)]
    assert [quantile_index(v, cuts) for v in values] == [0, 0, 0, 1, 1, 1, 2, 2, 2]
    assert quantile_index(None, cuts) is None
    assert quantile_cut_points([None], 4) == []


def test_quantile_index_upper_bound_is_inclusive() -> None:
    assert quantile_index(2.0, [2.0, 5.0]) == 0
    assert quantile_index(5.0, [2.0, 5.0]) == 1
    assert quantile_index(5.1, [2.0, 5.0]) == 2


def test_assign_quantile_buckets_is_reproducible_and_skips_absent() -> None:
    frame = to_panel_frame(
        [{"country": f"C{i}", "year": 2000, "gdppc": float(i)} for i in range(1, 9)]
        + [{"country": "Z", "year": 2000, "gdppc": None}]
    )
    out, cuts = income_groups(frame)
    again, cuts_again = income_groups(frame)
    assert cuts == cuts_again
    assert list(out["income_group"].fillna("-")) == list(again["income_group"].fillna("-"))
    assert out["income_group"].iloc[0] == INCOME_LABELS[0]
    assert out["income_group"].iloc[7] == INCOME_LABELS[-1]
    assert pd.isna(out["income_group"].iloc[8])
    assert "income_group" not in frame.columns


def test_assign_quantile_buckets_label_count_checked() -> None:
    frame = to_panel_frame([{"country": "A", "year": 2000, "gdppc": 1.0}])
    with pytest.raises(ValueError):
        assign_quantile_buckets(frame, "gdppc", 3, labels=["a", "b"])


def test_category_buckets_by_regime() -> None:
    frame = to_panel_frame([
        {"country": "A", "year": 2000, "regime": 0, "gdp_growth": 10.0},
        {"country": "A", "year": 2001, "regime": 0, "gdp_growth": -10.0},
        {"country": "B", "year": 2000, "regime": 3, "gdp_growth": 2.0},
        {"country": "C", "year": 2000, "regime": None, "gdp_growth": 50.0},
    ])
    cats = [(0, "closed"), (1, "electoral"), (3, "liberal")]
    arith = category_buckets(frame, "regime", "gdp_growth", cats)
    geo = category_buckets(frame, "regime", "gdp_growth", cats, averaging="geometric")
    assert [b.count for b in arith] == [2, 0, 1]
    assert arith[0].value == pytest.approx(0.0)
    assert geo[0].value < arith[0].value  # type: ignore[operator]
    assert arith[1].value is None
    assert arith[2].value == pytest.approx(2.0)
