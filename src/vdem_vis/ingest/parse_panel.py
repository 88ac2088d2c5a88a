"""Parsing helpers for panel data files.

`parse_panel` reads a delimited file (the V-Dem country-year CSV or a trimmed
export of it) or a pre-shaped JSON array into a Dask DataFrame whose columns
are renamed to the canonical PanelRow field names. Cell values are left as
text; type coercion happens in `vdem_vis.clean.transform`.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, cast

import pandas as pd
import dask.dataframe as dd

from vdem_vis.errors import LoadError

log = logging.getLogger(__name__)

# Canonical field -> accepted source columns, in priority order.
COLUMN_SOURCES: dict[str, tuple[str, ...]] = {
    "country": ("country", "country_name"),
    "year": ("year",),
    "polyarchy": ("polyarchy", "v2x_polyarchy"),
    "gdp": ("gdp", "e_gdp"),
    "gdppc": ("gdppc", "e_gdppc"),
    "population": ("population",),
    # V-Dem reports e_pop in millions; scaled in clean.transform
    "population_millions": ("e_pop",),
    "gdp_growth": ("gdpGrowth", "gdp_growth", "e_gdp_growth"),
    "inflation": ("inflation", "e_miinflat"),
    "regime": ("regime", "v2x_regime"),
    "region": ("region", "e_regionpol_6C"),
}

REQUIRED_FIELDS = ("country", "year")

ROWS_PER_PARTITION = 200_000


def resolve_columns(columns: list[str]) -> dict[str, str]:
    """Return a {source column: canonical field} mapping for `columns`.

    For each canonical field the first matching source column wins; columns
    that map to nothing are not included.
    """
    present = set(columns)
    mapping: dict[str, str] = {}
    for field, candidates in COLUMN_SOURCES.items():
        for c in candidates:
            if c in present and c not in mapping:
                mapping[c] = field
                break
    return mapping


def _check_required(source: str, mapping: dict[str, str]) -> None:
    found = set(mapping.values())
    missing = [f for f in REQUIRED_FIELDS if f not in found]
    if missing:
        raise LoadError(source, f"missing required column(s): {', '.join(missing)}")


def _read_csv(path: Path) -> Any:
    """Read a delimited file into a Dask DataFrame of text columns."""
    sep = "\t" if path.suffix.lower() in (".tsv", ".tab") else ","
    try:
        header = pd.read_csv(path, nrows=0, sep=sep)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError, csv.Error) as e:
        raise LoadError(str(path), f"unreadable header: {e}") from e

    mapping = resolve_columns([str(c) for c in header.columns])
    _check_required(str(path), mapping)

    dd_mod = cast(Any, dd)
    try:
        ddf = dd_mod.read_csv(
            str(path),
            sep=sep,
            usecols=list(mapping),
            dtype=str,
            keep_default_na=False,
            blocksize="64MB",
        )
    except (pd.errors.ParserError, ValueError, UnicodeDecodeError) as e:
        raise LoadError(str(path), str(e)) from e
    return ddf.rename(columns=mapping)


def _read_json(path: Path) -> Any:
    """Read a JSON array of row objects into a Dask DataFrame."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise LoadError(str(path), f"invalid JSON: {e}") from e

    if not isinstance(payload, list) or not all(isinstance(r, dict) for r in payload):
        raise LoadError(str(path), "expected a JSON array of objects")

    pdf = pd.DataFrame.from_records(payload)
    mapping = resolve_columns([str(c) for c in pdf.columns])
    if payload:
        _check_required(str(path), mapping)
    pdf = pdf[list(mapping)].rename(columns=mapping)

    # Empty array: keep the required columns so downstream schema is stable
    for field in REQUIRED_FIELDS:
        if field not in pdf.columns:
            pdf[field] = pd.Series(dtype="object")

    dd_mod = cast(Any, dd)
    return dd_mod.from_pandas(pdf, npartitions=max(1, len(pdf) // ROWS_PER_PARTITION))


def parse_panel(path: Path) -> Any:
    """Parse a panel file into a Dask DataFrame with canonical column names.

    Args:
        path: Local path to a `.json` array or a delimited text file.

    Returns:
        Dask DataFrame with a subset of the canonical columns; values are raw
        (text for CSV, JSON scalars for JSON).

    Raises:
        LoadError: if the file is structurally unparseable or lacks the
            entity/year columns.
    """
    log.info("Parsing %s", path)
    if path.suffix.lower() == ".json":
        return _read_json(path)
    return _read_csv(path)
