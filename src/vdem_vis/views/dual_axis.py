"""Dual-axis chart: one country's democracy index and GDP growth over time.

Honest: 2000-2019 with the democracy axis spanning the whole [0, 1] index and
growth on a conventional 0-10% axis. Distorted: a short 2014-2019 window, a
truncated democracy axis and an inverted growth axis, so a small dip in the
index and a slowdown in growth appear to cross dramatically.

`left_axis_fill` / `right_axis_fill` report how much of each axis the data
actually moves across (data extent / axis span); a truncated axis inflates it.
"""

from __future__ import annotations

from collections import Counter

import pandas as pd
from pydantic import BaseModel, ConfigDict

from vdem_vis.aggregate.stats import extent_domain, present
from vdem_vis.filters import RowFilter
from vdem_vis.models import DomainBounds, Mode
from vdem_vis.views.base import ViewConfig, optional

PREFERRED = ("India", "Brazil", "United States of America", "South Africa", "Indonesia")

RECOVERY_LINE = 4.5


class DualAxisConfig(ViewConfig):
    country: str | None = None
    preferred: tuple[str, ...] = PREFERRED
    growth_col: str = "gdp_growth"
    left_domain: DomainBounds = DomainBounds(low=0.0, high=1.0)
    right_domain: DomainBounds = DomainBounds(low=0.0, high=10.0)
    reference_growth: float = RECOVERY_LINE


class SeriesPoint(BaseModel):
    model_config = ConfigDict(extra="forbid")
    year: int
    polyarchy: float | None
    growth: float | None


class DualAxisSummary(BaseModel):
    model_config = ConfigDict(extra="forbid")
    mode: Mode
    country: str | None
    series: list[SeriesPoint]
    left_domain: DomainBounds
    right_domain: DomainBounds
    reference_growth: float
    left_axis_fill: float | None
    right_axis_fill: float | None


def presets(mode: Mode) -> DualAxisConfig:
    """Return the honest or distorted configuration."""
    if mode == "honest":
        return DualAxisConfig(
            mode=mode,
            rows=RowFilter(year_min=2000, year_max=2019, require=("polyarchy",)),
        )
    return DualAxisConfig(
        mode=mode,
        rows=RowFilter(year_min=2014, year_max=2019, require=("polyarchy",)),
        left_domain=DomainBounds(low=0.4, high=0.65),
        right_domain=DomainBounds(low=7.0, high=2.0),
    )


def pick_country(rows: pd.DataFrame, config: DualAxisConfig) -> str | None:
    """Explicit country, else the first preferred one present, else the best covered."""
    available = set(rows["country"])
    if config.country is not None:
        return config.country if config.country in available else None
    for name in config.preferred:
        if name in available:
            return name
    if not available:
        return None
    counts = Counter(rows["country"])
    # ties broken by name for a stable choice
    return min(counts, key=lambda c: (-counts[c], c))


def _fill(values: list[float], domain: DomainBounds) -> float | None:
    ext = extent_domain(values)
    if ext is None or domain.span == 0:
        return None
    return ext.span / domain.span


def build(derived: pd.DataFrame, config: DualAxisConfig) -> DualAxisSummary:
    """Compute the two aligned series and axis domains for one variant."""
    rows = config.rows.apply(derived)
    country = pick_country(rows, config)

    series: list[SeriesPoint] = []
    if country is not None:
        own = rows[rows["country"] == country].sort_values("year")
        series = [
            SeriesPoint(year=int(y), polyarchy=optional(p), growth=optional(g))
            for y, p, g in zip(own["year"], own["polyarchy"], own[config.growth_col])
        ]

    return DualAxisSummary(
        mode=config.mode,
        country=country,
        series=series,
        left_domain=config.left_domain,
        right_domain=config.right_domain,
        reference_growth=config.reference_growth,
        left_axis_fill=_fill(present(p.polyarchy for p in series), config.left_domain),
        right_axis_fill=_fill(present(p.growth for p in series), config.right_domain),
    )
