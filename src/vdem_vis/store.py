"""Explicitly owned panel store with a load-once, then-immutable lifecycle.

A `PanelStore` is created by the caller, loaded once, and then only read.
Frames handed out are copies, so views cannot mutate shared state, and two
stores (e.g. in two tests) never share anything.
"""

from __future__ import annotations

import logging
from typing import Iterator

import pandas as pd

from vdem_vis.config import Settings
from vdem_vis.derive.growth import DEFAULT_WINDOW, add_derived
from vdem_vis.ingest.load_panel import load_panel
from vdem_vis.models import DerivedRow, LoadReport

log = logging.getLogger(__name__)


class PanelStore:
    """Holds the immutable base panel and its derived rows."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._panel: pd.DataFrame | None = None
        self._derived: pd.DataFrame | None = None
        self._report: LoadReport | None = None

    @classmethod
    def from_frame(cls, frame: pd.DataFrame) -> "PanelStore":
        """Build an already-loaded store from an in-memory panel frame."""
        store = cls()
        store._set(
            frame,
            LoadReport(
                source="<memory>",
                rows_read=len(frame),
                rows_kept=len(frame),
                rows_dropped=0,
                duplicates=0,
                entities=int(frame["country"].nunique()),
            ),
        )
        return store

    @property
    def is_loaded(self) -> bool:
        return self._panel is not None

    def load(self) -> LoadReport:
        """Load the configured source once; later calls return the same report.

        Raises:
            LoadError: if the source cannot be fetched or parsed.
        """
        if self._report is not None:
            return self._report

        s = self._settings
        if s is None:
            raise RuntimeError("PanelStore has no settings to load from.")
        panel, report = load_panel(s.data_source, s.cache_dir, s.fetch_timeout)
        self._set(panel, report)
        return report

    def _set(self, panel: pd.DataFrame, report: LoadReport) -> None:
        self._panel = panel.copy()
        self._derived = add_derived(self._panel, "gdppc", window=DEFAULT_WINDOW)
        self._report = report
        log.info("PanelStore ready: %d rows from %s", len(panel), report.source)

    def _require(self) -> tuple[pd.DataFrame, pd.DataFrame]:
        if self._panel is None or self._derived is None:
            raise RuntimeError("PanelStore is not loaded. Call load() first.")
        return self._panel, self._derived

    @property
    def report(self) -> LoadReport:
        if self._report is None:
            raise RuntimeError("PanelStore is not loaded. Call load() first.")
        return self._report

    @property
    def panel(self) -> pd.DataFrame:
        """Copy of the validated base panel."""
        return self._require()[0].copy()

    @property
    def derived(self) -> pd.DataFrame:
        """Copy of the panel with ``gdppc_growth`` and ``gdppc_growth_ma5``."""
        return self._require()[1].copy()

    def records(self) -> Iterator[DerivedRow]:
        """Yield the derived rows as validated models, ordered by entity and year."""
        frame = self._require()[1].sort_values(["country", "year"], kind="stable")
        for rec in frame.to_dict(orient="records"):
            yield DerivedRow.model_validate(rec)
