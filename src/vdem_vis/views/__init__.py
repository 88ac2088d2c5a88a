"""Chart views.

Each module exposes ``presets(mode)`` returning the honest or distorted
configuration and ``build(derived, config)`` returning a render-ready
summary. `build_view` looks a view up by name.
"""

from __future__ import annotations

from types import ModuleType
from typing import Any

import pandas as pd
from pydantic import BaseModel

from vdem_vis.models import Mode
from vdem_vis.views import democracy_bins, dual_axis, income_facets, price_of_liberty, regime_distribution

VIEWS: dict[str, ModuleType] = {
    "price_of_liberty": price_of_liberty,
    "dual_axis": dual_axis,
    "democracy_bins": democracy_bins,
    "regime_distribution": regime_distribution,
    "income_facets": income_facets,
}


def build_view(name: str, derived: pd.DataFrame, mode: Mode, **overrides: Any) -> BaseModel:
    """Build view `name` in `mode`, optionally overriding preset fields.

    Raises:
        KeyError: if `name` is not a known view.
    """
    module = VIEWS[name]
    config = module.presets(mode)
    if overrides:
        config = type(config).model_validate({**config.model_dump(), **overrides})
    return module.build(derived, config)
