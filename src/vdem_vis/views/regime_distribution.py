"""Growth distribution by regime type (Regimes of the World, 0-3).

Each regime gets a box summary of annual per-capita growth over 1990-2019
on a shared y axis. The headline average differs by variant: the honest
chart compounds (geometric mean of growth factors), the distorted one
averages percentages, which flatters volatile groups.
"""

from __future__ import annotations

from typing import Literal

import pandas as pd
from pydantic import BaseModel, ConfigDict

from vdem_vis.aggregate.buckets import category_buckets
from vdem_vis.aggregate.stats import box_summary, extent_domain, is_present, trimmed_domain
from vdem_vis.filters import RowFilter
from vdem_vis.models import Averaging, BoxSummary, DomainBounds, Mode
from vdem_vis.views.base import ViewConfig

REGIMES: tuple[tuple[int, str], ...] = (
    (0, "Closed autocracy"),
    (1, "Electoral autocracy"),
    (2, "Electoral democracy"),
    (3, "Liberal democracy"),
)


class RegimeDistributionConfig(ViewConfig):
    value_col: str = "gdppc_growth"
    averaging: Averaging = "geometric"
    y_domain: Literal["trimmed", "extent"] = "trimmed"
    trim: tuple[float, float] = (0.02, 0.98)


class RegimeGroup(BaseModel):
    model_config = ConfigDict(extra="forbid")
    code: int
    label: str
    box: BoxSummary
    headline: float | None


class RegimeDistributionSummary(BaseModel):
    model_config = ConfigDict(extra="forbid")
    mode: Mode
    groups: list[RegimeGroup]
    y_domain: DomainBounds | None


def presets(mode: Mode) -> RegimeDistributionConfig:
    """Return the honest or distorted configuration."""
    rows = RowFilter(year_min=1990, year_max=2019, require=("regime", "gdppc_growth"))
    if mode == "honest":
        return RegimeDistributionConfig(mode=mode, rows=rows)
    return RegimeDistributionConfig(mode=mode, rows=rows, averaging="arithmetic", y_domain="extent")


def build(derived: pd.DataFrame, config: RegimeDistributionConfig) -> RegimeDistributionSummary:
    """Compute per-regime box summaries, headline averages and the shared domain."""
    rows = config.rows.apply(derived)

    headlines = category_buckets(rows, "regime", config.value_col, REGIMES, averaging=config.averaging)

    groups: list[RegimeGroup] = []
    pooled: list[float] = []
    for (code, label), bucket in zip(REGIMES, headlines):
        in_regime = (rows["regime"] == code).fillna(False)
        values = [float(v) for v in rows.loc[in_regime, config.value_col] if is_present(v)]
        pooled.extend(values)
        groups.append(
            RegimeGroup(
                code=code,
                label=label,
                box=box_summary(values),
                headline=bucket.value,
            )
        )

    if config.y_domain == "trimmed":
        y_domain = trimmed_domain(pooled, config.trim[0], config.trim[1])
    else:
        y_domain = extent_domain(pooled)

    return RegimeDistributionSummary(mode=config.mode, groups=groups, y_domain=y_domain)
