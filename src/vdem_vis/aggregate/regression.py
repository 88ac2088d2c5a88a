"""Ordinary least-squares regression from closed-form sums."""
from __future__ import annotations

from typing import Iterable

import numpy as np

from vdem_vis.models import RegressionFit


def fit_ols(xs: Iterable[float], ys: Iterable[float]) -> RegressionFit:
    """Fit y = slope * x + intercept by least squares.

    Uses the sums Σx, Σy, Σxy, Σx², Σy² and n. Callers filter out absent
    values first.

    Degenerate inputs do not raise:
    - no points: slope 0, intercept 0;
    - x constant (including a single point): slope 0, intercept mean(y).
    Both are flagged ``is_defined=False``. ``r_squared`` is ``None`` whenever
    x or y has zero variance.

    Raises:
        ValueError: if `xs` and `ys` differ in length.
    """
    x = np.asarray(list(xs), dtype=float)
    y = np.asarray(list(ys), dtype=float)
    if len(x) != len(y):
        raise ValueError(f"xs and ys differ in length ({len(x)} != {len(y)})")

    n = len(x)
    if n == 0:
        return RegressionFit(slope=0.0, intercept=0.0, n=0, r_squared=None, is_defined=False)

    sum_x = float(x.sum())
    sum_y = float(y.sum())
    sum_xy = float((x * y).sum())
    sum_xx = float((x * x).sum())
    sum_yy = float((y * y).sum())

    sxx = n * sum_xx - sum_x * sum_x
    syy = n * sum_yy - sum_y * sum_y
    sxy = n * sum_xy - sum_x * sum_y

    # relative tolerance: constant inputs leave rounding residue in sxx/syy
    x_flat = sxx <= 1e-12 * n * sum_xx
    y_flat = syy <= 1e-12 * n * sum_yy

    if x_flat:
        return RegressionFit(slope=0.0, intercept=sum_y / n, n=n, r_squared=None, is_defined=False)

    slope = sxy / sxx
    intercept = (sum_y - slope * sum_x) / n
    r_squared = None if y_flat else min(1.0, (sxy * sxy) / (sxx * syy))

    return RegressionFit(
        slope=slope,
        intercept=intercept,
        n=n,
        r_squared=r_squared,
        is_defined=n >= 2,
    )
