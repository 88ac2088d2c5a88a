"""Price of Liberty: democracy index vs growth scatter with a trend line.

Honest: large countries 2000-2019, y axis trimmed to the 5th-95th percentile
band (padded one point) and the x axis fixed to the full [0, 1] index.
Distorted: the window stretches to 2022, an inconvenient outlier is dropped
from the cohort, and both axes hug the data extent so the fitted slope looks
steeper than the weak relationship warrants.
"""

from __future__ import annotations

from typing import Literal

import pandas as pd
from pydantic import BaseModel, ConfigDict

from vdem_vis.aggregate.regression import fit_ols
from vdem_vis.aggregate.stats import extent_domain, trimmed_domain
from vdem_vis.filters import RowFilter
from vdem_vis.models import DomainBounds, Mode, RegressionFit
from vdem_vis.views.base import ScatterPoint, ViewConfig, points

FEATURED = (
    "China",
    "Vietnam",
    "Ethiopia",
    "United States of America",
    "Germany",
    "France",
)


class PriceOfLibertyConfig(ViewConfig):
    growth_col: str = "gdp_growth"
    y_domain: Literal["trimmed", "extent"] = "trimmed"
    trim: tuple[float, float] = (0.05, 0.95)
    pad: float = 1.0
    x_domain: Literal["full", "extent"] = "full"
    # trend line drawn over this x span when x_domain is "full"
    trend_span: tuple[float, float] = (0.02, 0.98)
    featured: tuple[str, ...] = FEATURED


class PriceOfLibertySummary(BaseModel):
    model_config = ConfigDict(extra="forbid")
    mode: Mode
    points: list[ScatterPoint]
    featured: list[ScatterPoint]
    fit: RegressionFit
    trend_line: list[tuple[float, float]]
    x_domain: DomainBounds | None
    y_domain: DomainBounds | None


def presets(mode: Mode) -> PriceOfLibertyConfig:
    """Return the honest or distorted configuration."""
    if mode == "honest":
        return PriceOfLibertyConfig(
            mode=mode,
            rows=RowFilter(
                year_min=2000,
                year_max=2019,
                min_population=10_000_000,
                require=("polyarchy", "gdp_growth"),
            ),
        )
    return PriceOfLibertyConfig(
        mode=mode,
        rows=RowFilter(
            year_min=2000,
            year_max=2022,
            min_population=10_000_000,
            exclude_entities=("Equatorial Guinea",),
            require=("polyarchy", "gdp_growth"),
        ),
        y_domain="extent",
        x_domain="extent",
    )


def _latest(pts: list[ScatterPoint], names: tuple[str, ...]) -> list[ScatterPoint]:
    """Most recent point per featured country, in `names` order."""
    out: list[ScatterPoint] = []
    for name in names:
        own = [p for p in pts if p.country == name]
        if own:
            out.append(max(own, key=lambda p: p.year))
    return out


def build(derived: pd.DataFrame, config: PriceOfLibertyConfig) -> PriceOfLibertySummary:
    """Compute the scatter, trend line and domains for one variant."""
    rows = config.rows.apply(derived)
    pts = points(rows, "polyarchy", rows[config.growth_col])

    xs = [p.x for p in pts]
    ys = [p.y for p in pts]
    fit = fit_ols(xs, ys)

    if config.x_domain == "full":
        x_domain: DomainBounds | None = DomainBounds(low=0.0, high=1.0)
        x0, x1 = config.trend_span
    else:
        x_domain = extent_domain(xs)
        x0, x1 = (x_domain.low, x_domain.high) if x_domain else (0.0, 1.0)

    if config.y_domain == "trimmed":
        y_domain = trimmed_domain(ys, config.trim[0], config.trim[1], pad=config.pad)
    else:
        y_domain = extent_domain(ys)

    return PriceOfLibertySummary(
        mode=config.mode,
        points=pts,
        featured=_latest(pts, config.featured),
        fit=fit,
        trend_line=fit.line(x0, x1),
        x_domain=x_domain,
        y_domain=y_domain,
    )
