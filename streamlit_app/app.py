from __future__ import annotations

import logging

import altair as alt
import pandas as pd
import streamlit as st

from vdem_vis.config import get_settings
from vdem_vis.errors import LoadError
from vdem_vis.logging_config import configure_logging
from vdem_vis.store import PanelStore
from vdem_vis.views import build_view

log = logging.getLogger(__name__)

# =====================================================
# Page config
# =====================================================
st.set_page_config(page_title="Democracy & Growth: Honest vs Distorted", layout="wide")
st.title("📊 How Charts Mislead Without Falsifying Data")
st.caption(
    "Every pair below is built from the same V-Dem rows. Only the chart "
    "configuration (axes, cohort, binning, averaging) changes."
)

# =====================================================
# Data store (one per server process)
# =====================================================
@st.cache_resource(show_spinner="Loading V-Dem panel...")
def get_store() -> PanelStore:
    """Create and load the panel store once per Streamlit process."""
    settings = get_settings()
    configure_logging(settings.log_path)
    store = PanelStore(settings)
    store.load()
    return store


try:
    store = get_store()
except LoadError as exc:
    st.error(f"Unable to load the dataset: {exc.reason}")
    if st.button("Retry"):
        get_store.clear()
        st.rerun()
    st.stop()

derived = store.derived
report = store.report

c1, c2, c3 = st.columns(3)
c1.metric("Country-years", report.rows_kept)
c2.metric("Countries", report.entities)
c3.metric("Rows dropped", report.rows_dropped + report.duplicates)

mode = st.radio(
    "Variant",
    options=["honest", "distorted"],
    format_func=lambda m: "Honest chart" if m == "honest" else "Distorted chart",
    horizontal=True,
)

# =====================================================
# Helpers
# =====================================================
def scale(domain) -> alt.Scale:
    """Altair scale from a DomainBounds (or automatic when None)."""
    if domain is None:
        return alt.Scale(zero=False)
    return alt.Scale(domain=[domain.low, domain.high], clamp=True)


def trend_layer(line: list[tuple[float, float]], color: str) -> alt.Chart:
    df = pd.DataFrame(line, columns=["x", "y"])
    return alt.Chart(df).mark_line(color=color, strokeWidth=3).encode(x="x", y="y")


# =====================================================
# SECTION 1: PRICE OF LIBERTY
# =====================================================
st.header("1. The Price of Liberty")

pol = build_view("price_of_liberty", derived, mode)
pts = pd.DataFrame([p.model_dump() for p in pol.points])

if pts.empty:
    st.warning("Not enough data for this chart.")
else:
    scatter = alt.Chart(pts).mark_circle(size=30, opacity=0.5, color="#9ca3af").encode(
        x=alt.X("x", title="Electoral democracy index", scale=scale(pol.x_domain)),
        y=alt.Y("y", title="GDP growth (%)", scale=scale(pol.y_domain)),
        tooltip=["country", "year", "x", "y"],
    )
    featured = pd.DataFrame([p.model_dump() for p in pol.featured])
    layers = [scatter, trend_layer(pol.trend_line, "#ff4f4f")]
    if not featured.empty:
        layers.append(
            alt.Chart(featured).mark_text(dy=-10, color="#4fe0a3").encode(x="x", y="y", text="country")
        )
    st.altair_chart(alt.layer(*layers), use_container_width=True)
    r2 = "n/a" if pol.fit.r_squared is None else f"{pol.fit.r_squared:.3f}"
    st.caption(f"slope={pol.fit.slope:.2f} · R²={r2} · n={pol.fit.n}")

st.divider()

# =====================================================
# SECTION 2: DUAL AXIS
# =====================================================
st.header("2. The Turbulence of Transition")

dual = build_view("dual_axis", derived, mode)
series = pd.DataFrame([p.model_dump() for p in dual.series])

if series.empty:
    st.warning("No series available for the selected window.")
else:
    base = alt.Chart(series).encode(x=alt.X("year:O", title="Year"))
    left = base.mark_line(color="#5ea9ff", point=True).encode(
        y=alt.Y("polyarchy", title="Democracy index", scale=scale(dual.left_domain))
    )
    right = base.mark_line(color="#3dd68c", point=True).encode(
        y=alt.Y("growth", title="GDP growth (%)", scale=scale(dual.right_domain))
    )
    st.altair_chart(alt.layer(left, right).resolve_scale(y="independent"), use_container_width=True)
    st.caption(
        f"{dual.country}: democracy moves across "
        f"{(dual.left_axis_fill or 0) * 100:.0f}% of its axis."
    )

st.divider()

# =====================================================
# SECTION 3: BINNING
# =====================================================
st.header("3. The Diminishing-Returns Cliff")

bins = build_view("democracy_bins", derived, mode)
bars = pd.DataFrame([b.model_dump() for b in bins.buckets])
bars = bars[bars["value"].notna()]

if bars.empty:
    st.warning("No binned data available.")
else:
    st.altair_chart(
        alt.Chart(bars).mark_bar().encode(
            x=alt.X("label:N", sort=None, title="Democracy index bin"),
            y=alt.Y("value", title="Average growth (%)", scale=scale(bins.y_domain)),
            tooltip=["label", "count", "value"],
        ),
        use_container_width=True,
    )

st.divider()

# =====================================================
# SECTION 4: REGIMES / INCOME FACETS
# =====================================================
st.header("4. Growth by Regime")

reg = build_view("regime_distribution", derived, mode)
st.dataframe(
    pd.DataFrame(
        [
            {"regime": g.label, "headline": g.headline, **g.box.model_dump()}
            for g in reg.groups
        ]
    ),
    use_container_width=True,
)

st.header("5. Democracy and Growth within Income Groups")

facets = build_view("income_facets", derived, mode)
cols = st.columns(len(facets.facets))
for col, facet in zip(cols, facets.facets):
    with col:
        st.subheader(facet.label)
        df = pd.DataFrame([p.model_dump() for p in facet.points])
        if df.empty:
            st.info("No data.")
            continue
        dots = alt.Chart(df).mark_circle(size=18, opacity=0.6).encode(
            x=alt.X("x", title="Democracy index", scale=alt.Scale(domain=[0, 1])),
            y=alt.Y("y", title="Growth, 5y MA (%)", scale=scale(facets.y_domain)),
        )
        st.altair_chart(dots + trend_layer(facet.trend_line, "#f0abfc"), use_container_width=True)
