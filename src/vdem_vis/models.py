"""Pydantic models used for row validation and view outputs.

`PanelRow` is the validated schema for one country-year observation; the
remaining models are the render-ready summaries handed to the presentation
layer. Absent observations are ``None``, never zero.
"""

from __future__ import annotations

import math
from typing import Any, Literal

import pandas as pd
from pydantic import BaseModel, Field, ConfigDict, model_validator

Mode = Literal["honest", "distorted"]
Averaging = Literal["arithmetic", "geometric"]


class PanelRow(BaseModel):
    """Schema for a normalized country-year observation.

    Attributes:
        country: Canonical entity name (after alias resolution).
        year: Observation year.
        polyarchy: Electoral democracy index in [0, 1].
        gdp: Raw GDP.
        gdppc: GDP per capita.
        population: Population (persons).
        gdp_growth: Headline GDP growth rate as reported by the source (%).
        inflation: Inflation rate (%).
        regime: Regimes of the World code (0-3).
        region: Region label.
    """
    model_config = ConfigDict(extra="forbid")
    country: str = Field(..., min_length=1)
    year: int = Field(..., ge=1700, le=2100)
    polyarchy: float | None = None
    gdp: float | None = None
    gdppc: float | None = None
    population: float | None = None
    gdp_growth: float | None = None
    inflation: float | None = None
    regime: int | None = None
    region: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _scrub_missing(cls, data: Any) -> Any:
        # pandas hands over pd.NA / NaN for missing cells
        if isinstance(data, dict):
            return {k: (None if _is_missing(v) else v) for k, v in data.items()}
        return data


class DerivedRow(PanelRow):
    """A PanelRow with entity-relative growth fields."""
    gdppc_growth: float | None = None
    gdppc_growth_ma5: float | None = None


class LoadReport(BaseModel):
    """Counts describing one load of the panel."""
    model_config = ConfigDict(extra="forbid")
    source: str
    rows_read: int = Field(..., ge=0)
    rows_kept: int = Field(..., ge=0)
    rows_dropped: int = Field(..., ge=0)
    duplicates: int = Field(..., ge=0)
    entities: int = Field(..., ge=0)


class DomainBounds(BaseModel):
    """A scale domain. `low > high` encodes an inverted axis."""
    model_config = ConfigDict(extra="forbid")
    low: float
    high: float

    @property
    def span(self) -> float:
        return abs(self.high - self.low)


class RegressionFit(BaseModel):
    """Ordinary least-squares fit of y on x.

    Attributes:
        slope: Fitted slope (0 when undefined).
        intercept: Fitted intercept (0 for empty input, mean y when x is constant).
        n: Number of points used.
        r_squared: Coefficient of determination, ``None`` when x or y is constant.
        is_defined: False when fewer than 2 points or x has no variance.
    """
    model_config = ConfigDict(extra="forbid")
    slope: float
    intercept: float
    n: int = Field(..., ge=0)
    r_squared: float | None = None
    is_defined: bool

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept

    def line(self, x0: float, x1: float) -> list[tuple[float, float]]:
        """Return the two endpoints of the trend line over [x0, x1]."""
        return [(x0, self.predict(x0)), (x1, self.predict(x1))]


class BucketSummary(BaseModel):
    """Aggregate for one bucket; `value` is ``None`` when no rows contribute."""
    model_config = ConfigDict(extra="forbid")
    index: int = Field(..., ge=0)
    label: str
    lower: float | None = None
    upper: float | None = None
    count: int = Field(..., ge=0)
    value: float | None = None


class BoxSummary(BaseModel):
    """Five-number style summary with Tukey whiskers and headline averages."""
    model_config = ConfigDict(extra="forbid")
    count: int = Field(..., ge=0)
    q1: float | None = None
    median: float | None = None
    q3: float | None = None
    lower_whisker: float | None = None
    upper_whisker: float | None = None
    arithmetic_mean: float | None = None
    geometric_mean: float | None = None


def _is_missing(value: Any) -> bool:
    if value is None or value is pd.NA:
        return True
    return isinstance(value, float) and math.isnan(value)
