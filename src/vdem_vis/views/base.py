"""Shared pieces for chart views.

A view is a pure function ``build(derived, config) -> summary``. The
honest and distorted variants of a chart differ only in their config.
"""

from __future__ import annotations

from typing import Any, Sequence

import pandas as pd
from pydantic import BaseModel, ConfigDict

from vdem_vis.aggregate.stats import is_present
from vdem_vis.filters import RowFilter
from vdem_vis.models import Mode


class ViewConfig(BaseModel):
    """Base configuration: which variant this is and which rows it sees."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    mode: Mode
    rows: RowFilter = RowFilter()


class ScatterPoint(BaseModel):
    """One plotted observation."""
    model_config = ConfigDict(extra="forbid")
    country: str
    year: int
    x: float
    y: float


def coalesce(frame: pd.DataFrame, cols: Sequence[str]) -> pd.Series:
    """Return the first present value across `cols`, row by row."""
    out = frame[cols[0]].astype("Float64")
    for col in cols[1:]:
        out = out.fillna(frame[col].astype("Float64"))
    return out


def points(frame: pd.DataFrame, x_col: str, y: pd.Series) -> list[ScatterPoint]:
    """Build scatter points for rows where both coordinates are observed."""
    out: list[ScatterPoint] = []
    for country, year, xv, yv in zip(frame["country"], frame["year"], frame[x_col], y):
        if is_present(xv) and is_present(yv):
            out.append(ScatterPoint(country=str(country), year=int(year), x=float(xv), y=float(yv)))
    return out


def optional(value: Any) -> float | None:
    """Return `value` as a float, or ``None`` when absent."""
    return float(value) if is_present(value) else None
