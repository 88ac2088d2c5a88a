"""Panel loading: fetch → parse → normalize → validate → dedupe.

The only entry point that touches the filesystem or network. Everything
downstream of `load_panel` is a pure function of the frame it returns.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, cast

import pandas as pd
from dask import compute  # type: ignore[attr-defined]

from vdem_vis.clean.transform import normalize_panel_ddf
from vdem_vis.clean.validate import dedupe_panel, to_panel_frame, validate_panel
from vdem_vis.errors import LoadError
from vdem_vis.ingest.fetch_dataset import fetch_dataset
from vdem_vis.ingest.parse_panel import parse_panel
from vdem_vis.models import LoadReport

log = logging.getLogger(__name__)


def _materialize(source: str, ddf: Any) -> pd.DataFrame:
    """Compute the normalized Dask DataFrame into pandas.

    Dask reads lazily, so malformed CSV bodies surface here rather than in
    `parse_panel`.
    """
    try:
        (pdf,) = cast(Any, compute)(ddf)
    except (pd.errors.ParserError, UnicodeDecodeError, ValueError) as e:
        raise LoadError(source, f"unparseable body: {e}") from e
    return pdf.reset_index(drop=True)


def load_panel_file(path: Path, source: str | None = None) -> tuple[pd.DataFrame, LoadReport]:
    """Load a local panel file into a typed, validated, deduplicated frame.

    Args:
        path: Local CSV/JSON file.
        source: Label used in the report and errors (defaults to `path`).

    Returns:
        A tuple of (panel frame, LoadReport).

    Raises:
        LoadError: on structural failures; per-row problems are counted.
    """
    label = source or str(path)
    ddf = normalize_panel_ddf(parse_panel(path))
    pdf = _materialize(label, ddf)

    records, bad = validate_panel(pdf)
    panel, duplicates = dedupe_panel(to_panel_frame(records))

    report = LoadReport(
        source=label,
        rows_read=len(pdf),
        rows_kept=len(panel),
        rows_dropped=bad,
        duplicates=duplicates,
        entities=int(panel["country"].nunique()),
    )
    if bad:
        log.warning("Dropped %d rows with unusable entity/year", bad)
    log.info(
        "Panel load complete: read=%d kept=%d entities=%d",
        report.rows_read,
        report.rows_kept,
        report.entities,
    )
    return panel, report


def load_panel(source: str, cache_dir: Path, timeout: float = 60.0) -> tuple[pd.DataFrame, LoadReport]:
    """Fetch (if remote) and load the panel from `source`.

    Args:
        source: Local path or http(s) URL.
        cache_dir: Cache directory for remote sources.
        timeout: Request timeout in seconds.
    """
    path = fetch_dataset(source, cache_dir, timeout)
    return load_panel_file(path, source=source)
