"""Exceptions raised by the loader.

Missing observations and degenerate samples are not exceptions: they are
represented as ``None`` / ``pd.NA`` and flow through every computation.
"""

from __future__ import annotations


class LoadError(RuntimeError):
    """The data source is unreachable or structurally unparseable."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Failed to load {source}: {reason}")
        self.source = source
        self.reason = reason
