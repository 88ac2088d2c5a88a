"""Summary statistics over samples that may contain absent values.

Functions in this module accept any iterable of numbers where ``None``,
``pd.NA`` and NaN mean "not observed". Absent values are dropped, never
treated as zero, and an empty sample yields ``None``.
"""
from __future__ import annotations

import math
from typing import Any, Iterable

import numpy as np
import pandas as pd

from vdem_vis.models import BoxSummary, DomainBounds

WHISKER_IQR = 1.5


def is_present(value: Any) -> bool:
    """Return True when `value` is an observed, finite number."""
    if value is None or value is pd.NA:
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def present(values: Iterable[Any]) -> list[float]:
    """Return the observed values of `values` as floats."""
    return [float(v) for v in values if is_present(v)]


def _observed(
    values: Iterable[Any],
    weights: Iterable[Any] | None,
) -> tuple[np.ndarray, np.ndarray]:
    """Observed values and their weights as arrays (absent weight counts as 1)."""
    vals = list(values)
    if weights is None:
        ws: list[Any] = [1.0] * len(vals)
    else:
        ws = list(weights)
        if len(ws) != len(vals):
            raise ValueError(f"values and weights differ in length ({len(vals)} != {len(ws)})")

    keep = [is_present(v) for v in vals]
    x = np.asarray([float(v) for v, k in zip(vals, keep) if k], dtype=float)
    w = np.asarray([float(w) if is_present(w) else 1.0 for w, k in zip(ws, keep) if k], dtype=float)
    if (w < 0).any():
        raise ValueError(f"negative weight {w[w < 0][0]}")
    return x, w


# =========================================================
# QUANTILES + DOMAINS
# =========================================================

def quantile(values: Iterable[Any], p: float) -> float | None:
    """Return the linearly interpolated p-quantile (R-7 definition).

    Args:
        values: Sample; absent values are ignored.
        p: Probability in [0, 1].

    Returns:
        The quantile, or ``None`` for an empty sample.

    Raises:
        ValueError: if `p` is outside [0, 1].
    """
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"p must be within [0, 1], got {p}")
    sample = present(values)
    if not sample:
        return None
    return float(np.quantile(np.asarray(sample, dtype=float), p, method="linear"))


def trimmed_domain(
    values: Iterable[Any],
    lower_p: float,
    upper_p: float,
    pad: float = 0.0,
) -> DomainBounds | None:
    """Return a scale domain that excludes the tails beyond two quantiles.

    Args:
        values: Sample; absent values are ignored.
        lower_p: Lower cut probability (e.g. 0.02).
        upper_p: Upper cut probability (e.g. 0.98).
        pad: Constant added beyond each bound.

    Returns:
        DomainBounds, or ``None`` when there is no data.
    """
    if lower_p > upper_p:
        raise ValueError(f"lower_p ({lower_p}) must not exceed upper_p ({upper_p})")
    sample = present(values)
    low = quantile(sample, lower_p)
    high = quantile(sample, upper_p)
    if low is None or high is None:
        return None
    return DomainBounds(low=low - pad, high=high + pad)


def extent_domain(values: Iterable[Any]) -> DomainBounds | None:
    """Return the full [min, max] domain of the observed values."""
    sample = present(values)
    if not sample:
        return None
    return DomainBounds(low=min(sample), high=max(sample))


# =========================================================
# MEANS
# =========================================================

def mean(values: Iterable[Any]) -> float | None:
    """Arithmetic mean of the observed values."""
    sample = present(values)
    if not sample:
        return None
    return float(np.mean(np.asarray(sample, dtype=float)))


def weighted_mean(values: Iterable[Any], weights: Iterable[Any] | None = None) -> float | None:
    """Weighted arithmetic mean.

    Args:
        values: Sample; absent values (and their weights) are ignored.
        weights: Non-negative weights aligned with `values`; an absent
            weight counts as 1. ``None`` weights every value 1.

    Returns:
        The mean, or ``None`` when the total contributing weight is zero.

    Raises:
        ValueError: on a negative weight or mismatched lengths.
    """
    x, w = _observed(values, weights)
    if w.sum() == 0:
        return None
    return float(np.average(x, weights=w))


def geometric_mean(values: Iterable[Any], weights: Iterable[Any] | None = None) -> float | None:
    """Weighted geometric mean of strictly positive values.

    Returns:
        The mean, or ``None`` if nothing contributes or any observed value is
        zero or negative (the geometric mean is undefined there).
    """
    x, w = _observed(values, weights)
    if (x <= 0).any() or w.sum() == 0:
        return None
    return float(np.exp(np.average(np.log(x), weights=w)))


def geometric_mean_growth(growth_pct: Iterable[Any], weights: Iterable[Any] | None = None) -> float | None:
    """Compounding average of percent growth rates.

    Each rate g becomes the factor 1 + g/100; the geometric mean of the
    factors is converted back to percent. A rate of -100% or below makes the
    result undefined (``None``).
    """
    factors = [1.0 + float(g) / 100.0 if is_present(g) else None for g in growth_pct]
    gm = geometric_mean(factors, weights)
    if gm is None:
        return None
    return (gm - 1.0) * 100.0


def arithmetic_mean_growth(growth_pct: Iterable[Any], weights: Iterable[Any] | None = None) -> float | None:
    """Plain (optionally weighted) average of percent growth rates.

    Overstates the compounded rate whenever the rates vary.
    """
    return weighted_mean(growth_pct, weights)


def average(
    values: Iterable[Any],
    weights: Iterable[Any] | None = None,
    averaging: str = "arithmetic",
) -> float | None:
    """Dispatch to the arithmetic or geometric growth average."""
    if averaging == "arithmetic":
        return arithmetic_mean_growth(values, weights)
    if averaging == "geometric":
        return geometric_mean_growth(values, weights)
    raise ValueError(f"unknown averaging {averaging!r}")


# =========================================================
# BOX SUMMARY
# =========================================================

def box_summary(values: Iterable[Any]) -> BoxSummary:
    """Quartiles, Tukey whiskers and both growth averages for one group.

    Whiskers are the most extreme observed values within 1.5 × IQR of the
    quartiles. An empty sample gives a summary with count 0 and no values.
    """
    sample = sorted(present(values))
    if not sample:
        return BoxSummary(count=0)

    q1 = quantile(sample, 0.25)
    q2 = quantile(sample, 0.5)
    q3 = quantile(sample, 0.75)
    if q1 is None or q2 is None or q3 is None:
        raise RuntimeError("quartiles undefined for a non-empty sample")
    iqr = q3 - q1

    lower = next((v for v in sample if v >= q1 - WHISKER_IQR * iqr), sample[0])
    upper = next((v for v in reversed(sample) if v <= q3 + WHISKER_IQR * iqr), sample[-1])

    return BoxSummary(
        count=len(sample),
        q1=q1,
        median=q2,
        q3=q3,
        lower_whisker=lower,
        upper_whisker=upper,
        arithmetic_mean=arithmetic_mean_growth(sample),
        geometric_mean=geometric_mean_growth(sample),
    )
