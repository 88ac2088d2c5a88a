"""Democracy vs smoothed growth, faceted by income group.

Income groups are GDP-per-capita quartiles computed once over the filtered
rows. Growth is the 5-year rolling average where available, falling back to
the single-year rate. Honest: one regression per income group on a shared,
percentile-trimmed y axis. Distorted: every group pooled into one fit, which
mixes the level effect of income into the democracy slope.
"""

from __future__ import annotations

import pandas as pd
from pydantic import BaseModel, ConfigDict

from vdem_vis.aggregate.buckets import INCOME_LABELS, income_groups
from vdem_vis.aggregate.regression import fit_ols
from vdem_vis.aggregate.stats import trimmed_domain
from vdem_vis.filters import RowFilter
from vdem_vis.models import DomainBounds, Mode, RegressionFit
from vdem_vis.views.base import ScatterPoint, ViewConfig, coalesce, points

POOLED_LABEL = "All countries"


class IncomeFacetsConfig(ViewConfig):
    growth_cols: tuple[str, ...] = ("gdppc_growth_ma5", "gdppc_growth")
    facet_by_income: bool = True
    trim: tuple[float, float] = (0.05, 0.95)
    pad: float = 1.0
    trend_span: tuple[float, float] = (0.05, 0.95)


class Facet(BaseModel):
    model_config = ConfigDict(extra="forbid")
    label: str
    points: list[ScatterPoint]
    fit: RegressionFit
    trend_line: list[tuple[float, float]]


class IncomeFacetsSummary(BaseModel):
    model_config = ConfigDict(extra="forbid")
    mode: Mode
    facets: list[Facet]
    cut_points: list[float]
    y_domain: DomainBounds | None


def presets(mode: Mode) -> IncomeFacetsConfig:
    """Return the honest or distorted configuration."""
    rows = RowFilter(year_min=2000, year_max=2019, require=("polyarchy",))
    if mode == "honest":
        return IncomeFacetsConfig(mode=mode, rows=rows)
    return IncomeFacetsConfig(mode=mode, rows=rows, facet_by_income=False)


def _facet(label: str, frame: pd.DataFrame, growth: pd.Series, config: IncomeFacetsConfig) -> Facet:
    pts = points(frame, "polyarchy", growth)
    fit = fit_ols([p.x for p in pts], [p.y for p in pts])
    return Facet(label=label, points=pts, fit=fit, trend_line=fit.line(*config.trend_span))


def build(derived: pd.DataFrame, config: IncomeFacetsConfig) -> IncomeFacetsSummary:
    """Compute per-group (or pooled) regressions and the shared y domain."""
    rows = config.rows.apply(derived)
    growth = coalesce(rows, config.growth_cols)
    rows = rows.loc[growth.notna()]
    growth = growth.loc[rows.index]

    grouped, cuts = income_groups(rows)

    if config.facet_by_income:
        facets = []
        for label in reversed(INCOME_LABELS):
            member = (grouped["income_group"] == label).fillna(False).astype(bool)
            facets.append(_facet(label, grouped.loc[member], growth.loc[member], config))
        in_groups = grouped["income_group"].notna()
        y_values = growth.loc[in_groups].tolist()
    else:
        facets = [_facet(POOLED_LABEL, grouped, growth, config)]
        y_values = growth.tolist()

    return IncomeFacetsSummary(
        mode=config.mode,
        facets=facets,
        cut_points=cuts,
        y_domain=trimmed_domain(y_values, config.trim[0], config.trim[1], pad=config.pad),
    )
