"""Per-entity period-over-period growth and trailing rolling averages.

Growth is computed between adjacent rows of an entity's time-ordered series,
not between calendar-adjacent years: a row for 2005 following a row for 2000
yields a growth value. Any absent growth value empties the rolling window,
and an absent observation also makes the "previous value" unavailable for
the next row, so ``[100, 110, None, 121]`` derives ``[None, 10, None, None]``.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterable

import pandas as pd

from vdem_vis.aggregate.stats import is_present, mean

log = logging.getLogger(__name__)

DEFAULT_WINDOW = 5


def period_growth(
    values: Iterable[float | None],
    window: int = DEFAULT_WINDOW,
) -> tuple[list[float | None], list[float | None]]:
    """Return (growth %, rolling mean growth %) for a time-ordered series.

    Args:
        values: Observations in time order; ``None``/NA marks an absent period.
        window: Maximum number of growth values in the rolling average.

    Returns:
        Two lists aligned with `values`.
    """
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")

    growth: list[float | None] = []
    rolling: list[float | None] = []
    recent: deque[float] = deque(maxlen=window)
    prev: float | None = None

    for v in values:
        cur = float(v) if is_present(v) else None  # type: ignore[arg-type]
        if cur is not None and prev is not None and prev != 0:
            g = (cur - prev) / prev * 100.0
            recent.append(g)
            growth.append(g)
            rolling.append(mean(recent))
        else:
            recent.clear()
            growth.append(None)
            rolling.append(None)
        prev = cur

    return growth, rolling


def add_derived(
    frame: pd.DataFrame,
    value_col: str = "gdppc",
    window: int = DEFAULT_WINDOW,
    entity_col: str = "country",
    time_col: str = "year",
) -> pd.DataFrame:
    """Return a copy of `frame` with growth columns derived per entity.

    Adds ``<value_col>_growth`` and ``<value_col>_growth_ma<window>``
    (dtype ``Float64``). Row order of the input is preserved.

    Raises:
        ValueError: if an entity has more than one row for the same year.
    """
    dup = frame.duplicated(subset=[entity_col, time_col], keep=False)
    if dup.any():
        sample = frame.loc[dup, [entity_col, time_col]].head(5).to_dict(orient="records")
        raise ValueError(f"duplicate {entity_col}-{time_col} rows: {sample}")

    growth_col = f"{value_col}_growth"
    rolling_col = f"{value_col}_growth_ma{window}"

    out = frame.copy()
    growth = pd.Series(pd.NA, index=out.index, dtype="Float64")
    rolling = pd.Series(pd.NA, index=out.index, dtype="Float64")

    for _, part in out.groupby(entity_col, sort=False):
        part = part.sort_values(time_col, kind="stable")
        g, r = period_growth(part[value_col].tolist(), window=window)
        growth.loc[part.index] = pd.array(g, dtype="Float64")
        rolling.loc[part.index] = pd.array(r, dtype="Float64")

    out[growth_col] = growth
    out[rolling_col] = rolling

    log.debug("Derived %s/%s for %d rows", growth_col, rolling_col, len(out))
    return out
