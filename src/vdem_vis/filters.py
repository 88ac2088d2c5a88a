"""Row selection criteria supplied by the presentation layer."""

from __future__ import annotations

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, model_validator


class RowFilter(BaseModel):
    """Declarative filter over panel/derived rows.

    Attributes:
        year_min: First year kept (inclusive).
        year_max: Last year kept (inclusive).
        entities: Keep only these entities (``None`` keeps all).
        exclude_entities: Entities removed from the cohort.
        min_population: Keep rows whose population is strictly greater;
            rows without a population are removed.
        require: Columns that must be observed (not absent).
    """
    model_config = ConfigDict(extra="forbid", frozen=True)
    year_min: int | None = None
    year_max: int | None = None
    entities: tuple[str, ...] | None = None
    exclude_entities: tuple[str, ...] = ()
    min_population: float | None = Field(default=None, ge=0)
    require: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_years(self) -> "RowFilter":
        if self.year_min is not None and self.year_max is not None and self.year_min > self.year_max:
            raise ValueError(f"year_min ({self.year_min}) is after year_max ({self.year_max})")
        return self

    def apply(self, frame: pd.DataFrame) -> pd.DataFrame:
        """Return the rows of `frame` matching every criterion."""
        keep = pd.Series(True, index=frame.index)

        if self.year_min is not None:
            keep &= frame["year"] >= self.year_min
        if self.year_max is not None:
            keep &= frame["year"] <= self.year_max
        if self.entities is not None:
            keep &= frame["country"].isin(self.entities).fillna(False).astype(bool)
        if self.exclude_entities:
            keep &= ~frame["country"].isin(self.exclude_entities).fillna(False).astype(bool)
        if self.min_population is not None:
            keep &= (frame["population"] > self.min_population).fillna(False).astype(bool)
        for col in self.require:
            keep &= frame[col].notna()

        return frame.loc[keep]
