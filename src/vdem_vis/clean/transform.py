"""Cleaning and normalization utilities.

This module contains transformations that are applied partition-wise using
Dask. The output is a Dask DataFrame whose schema is fixed (every canonical
column present, nullable dtypes) and suitable for Pydantic validation.

Absent observations become ``pd.NA``. Nothing is ever filled with zero.
"""
from __future__ import annotations

import logging
from typing import Any

import numpy as np
import pandas as pd

from vdem_vis.clean.aliases import ENTITY_ALIASES

log = logging.getLogger(__name__)

NUMERIC_FIELDS = (
    "polyarchy",
    "gdp",
    "gdppc",
    "population",
    "gdp_growth",
    "inflation",
)

PANEL_COLUMNS = ("country", "year", *NUMERIC_FIELDS, "regime", "region")

POPULATION_MILLIONS = 1_000_000


def coerce_numeric(s: pd.Series) -> pd.Series:
    """Parse a column to nullable floats.

    Empty, non-numeric and infinite cells become ``pd.NA``.

    Args:
        s: Raw column (text or JSON scalars).

    Returns:
        Series of dtype ``Float64``.
    """
    text = s.astype(str).str.strip().astype(object)
    values = pd.to_numeric(text, errors="coerce").astype("float64")
    values = values.where(np.isfinite(values))
    return values.astype("Float64")


def normalize_text(s: pd.Series) -> pd.Series:
    """Trim and collapse whitespace; empty strings become ``pd.NA``."""
    out = (
        s.astype("string")
        .str.strip()
        .str.replace(r"\s+", " ", regex=True)
    )
    return out.mask((out == "").fillna(False))


def normalize_partition(pdf: pd.DataFrame) -> pd.DataFrame:
    """Partition-level normalization applied via map_partitions.

    Args:
        pdf: Pandas DataFrame for the partition with canonical column names.

    Returns:
        DataFrame with exactly `PANEL_COLUMNS`, typed with nullable dtypes.
    """
    n = len(pdf)
    out = pd.DataFrame(index=pdf.index)

    def _missing(dtype: str) -> pd.Series:
        return pd.Series([pd.NA] * n, index=pdf.index, dtype=dtype)

    # -----------------------------
    # Entity name + aliases
    # -----------------------------
    if "country" in pdf.columns:
        out["country"] = normalize_text(pdf["country"]).replace(ENTITY_ALIASES)
    else:
        out["country"] = _missing("string")

    # -----------------------------
    # Year (kept as float so fractional years fail validation)
    # -----------------------------
    out["year"] = coerce_numeric(pdf["year"]) if "year" in pdf.columns else _missing("Float64")

    # -----------------------------
    # Numeric observations
    # -----------------------------
    for field in NUMERIC_FIELDS:
        if field in pdf.columns:
            out[field] = coerce_numeric(pdf[field])
        else:
            out[field] = _missing("Float64")

    if "population_millions" in pdf.columns:
        scaled = coerce_numeric(pdf["population_millions"]) * POPULATION_MILLIONS
        out["population"] = out["population"].fillna(scaled)

    # -----------------------------
    # Range checks (null the field, keep the row)
    # -----------------------------
    poly = out["polyarchy"]
    out["polyarchy"] = poly.mask(((poly < 0) | (poly > 1)).fillna(False))
    pop = out["population"]
    out["population"] = pop.mask((pop < 0).fillna(False))

    # -----------------------------
    # Regime code: integral values only
    # -----------------------------
    if "regime" in pdf.columns:
        regime = coerce_numeric(pdf["regime"])
        regime = regime.mask((regime.round() != regime).fillna(False))
        out["regime"] = regime.round().astype("Int64")
    else:
        out["regime"] = _missing("Int64")

    out["region"] = normalize_text(pdf["region"]) if "region" in pdf.columns else _missing("string")

    return out[list(PANEL_COLUMNS)]


def normalize_panel_ddf(ddf: Any) -> Any:
    """Normalize a parsed panel Dask DataFrame.

    Applies whitespace normalization and the entity alias table to names,
    coerces numeric fields to nullable floats, scales V-Dem population from
    millions, and nulls out-of-range values without dropping rows.

    Returns:
        Dask DataFrame with the fixed `PANEL_COLUMNS` schema.
    """
    log.info("Starting normalize_panel_ddf transformation")

    meta = normalize_partition(ddf._meta)
    return ddf.map_partitions(normalize_partition, meta=meta)
