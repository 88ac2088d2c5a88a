"""Diminishing-returns cliff: average growth per democracy-index decile.

Both variants bin the democracy index into ten equal-width bins.
Honest: per-capita growth for 2000-2019, weighted by population, on an axis
that starts at zero and leaves headroom. Distorted: headline GDP growth over
every year, one vote per country-year, axis clipped to the tallest bar.
Empty bins are reported as having no data in both.
"""

from __future__ import annotations

from typing import Literal

import pandas as pd
from pydantic import BaseModel, ConfigDict

from vdem_vis.aggregate.buckets import fixed_width_buckets
from vdem_vis.filters import RowFilter
from vdem_vis.models import Averaging, BucketSummary, DomainBounds, Mode
from vdem_vis.views.base import ViewConfig


class DemocracyBinsConfig(ViewConfig):
    value_col: Literal["gdppc_growth", "gdp_growth"] = "gdppc_growth"
    n_bins: int = 10
    averaging: Averaging = "arithmetic"
    weight_col: str | None = "population"
    # lowest allowed top of the y axis; None clips to the tallest bar
    y_floor: float | None = 8.0
    headroom: float = 1.0


class DemocracyBinsSummary(BaseModel):
    model_config = ConfigDict(extra="forbid")
    mode: Mode
    buckets: list[BucketSummary]
    n_rows: int
    y_domain: DomainBounds | None


def presets(mode: Mode) -> DemocracyBinsConfig:
    """Return the honest or distorted configuration."""
    if mode == "honest":
        return DemocracyBinsConfig(
            mode=mode,
            rows=RowFilter(year_min=2000, year_max=2019, require=("polyarchy", "gdppc_growth")),
        )
    return DemocracyBinsConfig(
        mode=mode,
        rows=RowFilter(require=("polyarchy", "gdp_growth")),
        value_col="gdp_growth",
        weight_col=None,
        y_floor=None,
        headroom=0.0,
    )


def _y_domain(buckets: list[BucketSummary], config: DemocracyBinsConfig) -> DomainBounds | None:
    values = [b.value for b in buckets if b.value is not None]
    if not values:
        return None
    low = min(0.0, min(values))
    high = max(values) + config.headroom
    if config.y_floor is not None:
        high = max(config.y_floor, high)
    if high <= low:
        high = low + 1.0
    return DomainBounds(low=low, high=high)


def build(derived: pd.DataFrame, config: DemocracyBinsConfig) -> DemocracyBinsSummary:
    """Compute per-bin averages and the bar chart's y domain."""
    rows = config.rows.apply(derived)
    buckets = fixed_width_buckets(
        rows,
        key_col="polyarchy",
        value_col=config.value_col,
        n_bins=config.n_bins,
        averaging=config.averaging,
        weight_col=config.weight_col,
    )
    return DemocracyBinsSummary(
        mode=config.mode,
        buckets=buckets,
        n_rows=sum(b.count for b in buckets),
        y_domain=_y_domain(buckets, config),
    )
