"""vdem_vis package.

Contains modules for loading a V-Dem country-year panel, normalizing and
validating rows, deriving per-country growth series, and computing the
statistics behind "honest" and "distorted" variants of the same chart.

Architecture:
- Raw file → Dask parse/normalize → Pydantic row validation → PanelStore
- Derived growth fields are pure functions of the immutable panel
- Each chart view is a pure function of (derived rows, variant config)
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
