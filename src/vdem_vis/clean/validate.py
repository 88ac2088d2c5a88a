"""Validation utilities for the normalized panel.

This module validates normalized rows against the Pydantic `PanelRow` model,
drops rows whose identifying fields (entity, year) are unusable, removes
duplicate entity-years, and rebuilds a frame with stable nullable dtypes.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

import pandas as pd
from pydantic import ValidationError

from vdem_vis.clean.transform import NUMERIC_FIELDS, PANEL_COLUMNS
from vdem_vis.models import PanelRow

log = logging.getLogger(__name__)

PANEL_DTYPES: dict[str, str] = {
    "country": "string",
    "year": "int64",
    **{f: "Float64" for f in NUMERIC_FIELDS},
    "regime": "Int64",
    "region": "string",
}


def validate_panel(pdf: pd.DataFrame) -> tuple[list[dict[str, Any]], int]:
    """Validate normalized records using Pydantic.

    Uses `PanelRow.model_validate` on each record. Optional fields were
    already coerced (or nulled) upstream, so a failure here means the entity
    name or year is missing or malformed and the row is dropped.

    Args:
        pdf: Pandas DataFrame produced by `normalize_partition`.

    Returns:
        A tuple of (list_of_validated_records, bad_count).
    """
    good: list[dict[str, Any]] = []
    bad = 0

    for rec in pdf.to_dict(orient="records"):
        try:
            m = PanelRow.model_validate(rec)
            good.append(m.model_dump(mode="python"))
        except ValidationError as e:
            log.debug("Dropping row %r: %s", rec.get("country"), e.errors()[0]["msg"])
            bad += 1

    return good, bad


def to_panel_frame(records: Iterable[dict[str, Any]]) -> pd.DataFrame:
    """Build a typed panel frame from validated records.

    Missing values are ``pd.NA`` in every optional column.
    """
    pdf = pd.DataFrame.from_records(list(records), columns=list(PANEL_COLUMNS))
    return pdf.astype(PANEL_DTYPES)


def dedupe_panel(pdf: pd.DataFrame) -> tuple[pd.DataFrame, int]:
    """Keep the first row per (country, year).

    Aliasing can map two source names onto one entity; the first occurrence
    in file order wins.

    Returns:
        A tuple of (deduplicated frame, number of rows removed).
    """
    dup = pdf.duplicated(subset=["country", "year"], keep="first")
    removed = int(dup.sum())
    if removed:
        sample = pdf.loc[dup, ["country", "year"]].head(5).to_dict(orient="records")
        log.warning("Dropped %d duplicate entity-year rows (e.g. %s)", removed, sample)
    return pdf.loc[~dup].reset_index(drop=True), removed
