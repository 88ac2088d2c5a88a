"""Aggregation helpers.

This package contains the statistics the chart views are built from:
quantiles and quantile-trimmed domains, arithmetic, weighted and geometric
means, fixed-width and quantile bucketing, and the OLS regression estimator.
Every function ignores absent values and reports ``None`` instead of a
fabricated zero when nothing contributes.
"""
