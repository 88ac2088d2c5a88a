"""Bucketing: fixed-width bins, quantile bins and discrete categories.

Bucket membership is decided by pure index functions (`fixed_width_index`,
`quantile_index`) so a row's assignment is reproducible from its value and
the cut points alone. Quantile cut points are computed once per frame and
applied to every row in it.
"""
from __future__ import annotations

import math
from typing import Any, Iterable, Sequence

import pandas as pd

from vdem_vis.aggregate.stats import average, is_present, quantile
from vdem_vis.models import BucketSummary

INCOME_LABELS = ("Low Income", "Lower-Middle", "Upper-Middle", "High Income")


# =========================================================
# FIXED WIDTH
# =========================================================

def fixed_width_index(value: Any, n_bins: int, low: float = 0.0, high: float = 1.0) -> int | None:
    """Return the bin index of `value` among `n_bins` equal-width bins.

    Bins are left-inclusive; the last bin is also right-inclusive so that
    `high` itself belongs to bin ``n_bins - 1``.

    Returns:
        The index, or ``None`` for absent values and values outside [low, high].
    """
    if n_bins < 1:
        raise ValueError(f"n_bins must be >= 1, got {n_bins}")
    if high <= low:
        raise ValueError(f"high ({high}) must exceed low ({low})")
    if not is_present(value):
        return None
    v = float(value)
    if v < low or v > high:
        return None
    # scale before dividing: 0.3 * 10 lands on 3, 0.3 / 0.1 does not
    idx = math.floor((v - low) * n_bins / (high - low))
    return min(idx, n_bins - 1)


def fixed_width_edges(n_bins: int, low: float = 0.0, high: float = 1.0) -> list[float]:
    """Return the ``n_bins + 1`` bin edges."""
    width = (high - low) / n_bins
    return [low + i * width for i in range(n_bins)] + [high]


def fixed_width_buckets(
    frame: pd.DataFrame,
    key_col: str,
    value_col: str,
    n_bins: int = 10,
    low: float = 0.0,
    high: float = 1.0,
    averaging: str = "arithmetic",
    weight_col: str | None = None,
) -> list[BucketSummary]:
    """Average `value_col` within equal-width bins of `key_col`.

    Rows missing the key or the value do not contribute. A bin with no
    contributing rows reports ``value=None``.

    Args:
        frame: Input rows.
        key_col: Bounded variable to bin (e.g. ``polyarchy``).
        value_col: Variable to average (e.g. ``gdppc_growth``).
        n_bins: Number of bins.
        low, high: Bounds of `key_col`.
        averaging: ``"arithmetic"`` or ``"geometric"`` (for growth rates).
        weight_col: Optional weight column (e.g. ``population``).

    Returns:
        One BucketSummary per bin, in ascending order.
    """
    edges = fixed_width_edges(n_bins, low, high)
    members: list[tuple[list[Any], list[Any]]] = [([], []) for _ in range(n_bins)]

    weights = frame[weight_col] if weight_col else pd.Series([None] * len(frame), index=frame.index)
    for key, value, weight in zip(frame[key_col], frame[value_col], weights):
        if not is_present(value):
            continue
        idx = fixed_width_index(key, n_bins, low, high)
        if idx is None:
            continue
        members[idx][0].append(value)
        members[idx][1].append(weight)

    out: list[BucketSummary] = []
    for i, (vals, ws) in enumerate(members):
        out.append(
            BucketSummary(
                index=i,
                label=f"{round(edges[i], 4):g}-{round(edges[i + 1], 4):g}",
                lower=edges[i],
                upper=edges[i + 1],
                count=len(vals),
                value=average(vals, ws, averaging) if vals else None,
            )
        )
    return out


# =========================================================
# QUANTILE BUCKETS
# =========================================================

def quantile_cut_points(values: Iterable[Any], n_buckets: int) -> list[float]:
    """Return the ``n_buckets - 1`` ascending cut points of the sample.

    Returns an empty list for an empty sample.
    """
    if n_buckets < 1:
        raise ValueError(f"n_buckets must be >= 1, got {n_buckets}")
    sample = [v for v in values if is_present(v)]
    if not sample:
        return []
    cuts = [quantile(sample, k / n_buckets) for k in range(1, n_buckets)]
    return [float(c) for c in cuts if c is not None]


def quantile_index(value: Any, cut_points: Sequence[float]) -> int | None:
    """Return the bucket of `value`: the first cut point it does not exceed.

    Values above every cut point fall into the last bucket. Absent values
    have no bucket.
    """
    if not is_present(value):
        return None
    v = float(value)
    for i, cut in enumerate(cut_points):
        if v <= cut:
            return i
    return len(cut_points)


def assign_quantile_buckets(
    frame: pd.DataFrame,
    key_col: str,
    n_buckets: int,
    labels: Sequence[str] | None = None,
    out_col: str = "bucket",
) -> tuple[pd.DataFrame, list[float]]:
    """Label each row of `frame` with its quantile bucket of `key_col`.

    Cut points are computed once from the whole frame. Rows missing
    `key_col` get ``pd.NA``.

    Returns:
        A tuple of (copy of frame with `out_col`, cut points).
    """
    if labels is not None and len(labels) != n_buckets:
        raise ValueError(f"expected {n_buckets} labels, got {len(labels)}")

    cuts = quantile_cut_points(frame[key_col], n_buckets)
    names = list(labels) if labels is not None else [str(i) for i in range(n_buckets)]

    def _label(v: Any) -> Any:
        idx = quantile_index(v, cuts)
        return pd.NA if idx is None else names[idx]

    out = frame.copy()
    out[out_col] = pd.array([_label(v) for v in frame[key_col]], dtype="string")
    return out, cuts


def income_groups(frame: pd.DataFrame, gdppc_col: str = "gdppc") -> tuple[pd.DataFrame, list[float]]:
    """Label rows with GDP-per-capita quartile groups (``income_group``)."""
    return assign_quantile_buckets(
        frame,
        gdppc_col,
        n_buckets=len(INCOME_LABELS),
        labels=INCOME_LABELS,
        out_col="income_group",
    )


# =========================================================
# CATEGORIES
# =========================================================

def category_buckets(
    frame: pd.DataFrame,
    key_col: str,
    value_col: str,
    categories: Sequence[tuple[Any, str]],
    averaging: str = "arithmetic",
    weight_col: str | None = None,
) -> list[BucketSummary]:
    """Average `value_col` per discrete code of `key_col` (e.g. regime).

    Args:
        categories: Ordered ``(code, label)`` pairs; rows with other codes
            are ignored.
    """
    out: list[BucketSummary] = []
    for i, (code, label) in enumerate(categories):
        rows = frame[(frame[key_col] == code).fillna(False)]
        mask = rows[value_col].map(is_present).astype(bool)
        vals = rows.loc[mask, value_col].tolist()
        ws = rows.loc[mask, weight_col].tolist() if weight_col else None
        out.append(
            BucketSummary(
                index=i,
                label=label,
                count=len(vals),
                value=average(vals, ws, averaging) if vals else None,
            )
        )
    return out
