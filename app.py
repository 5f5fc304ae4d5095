# app.py
from __future__ import annotations

import streamlit as st
import pandas as pd
import plotly.express as px

from salmon_catch.config import CATCH_URL, DROP_COLS, SENTINEL, TARGET_COLUMN
from salmon_catch.errors import RetrievalError, SalmonCatchError
from salmon_catch.io import load_catch
from salmon_catch.pipeline import run_pipeline
from salmon_catch.queries.aggregations import REDUCTIONS, aggregate, sort_table, stat_column
from salmon_catch.ui.controls import sidebar_filters
from salmon_catch.viz.charts import bar_group_stat, line_catch_by_year, pie_species_mix

# -----------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# -----------------------------------------------------------------------------
st.set_page_config(page_title="Alaska Salmon Catch", layout="wide")


# -----------------------------------------------------------------------------
# Data loading
# -----------------------------------------------------------------------------
@st.cache_data(show_spinner="Fetching catch data…")
def load_df(source: str) -> pd.DataFrame:
    return load_catch(source)


st.title("Alaska Commercial Salmon Catch")

try:
    raw_df = load_df(CATCH_URL)
except RetrievalError as exc:
    st.error(f"Could not load catch data: {exc}")
    st.stop()

# -----------------------------------------------------------------------------
# Sidebar
# -----------------------------------------------------------------------------
with st.sidebar:
    st.header("Summary")
    stat = st.selectbox("Statistic", sorted(REDUCTIONS), index=sorted(REDUCTIONS).index("mean"))
    descending = st.toggle("Largest first", value=True)

try:
    result = run_pipeline(raw_df, DROP_COLS, TARGET_COLUMN, SENTINEL, "Region", stat, descending, drop_missing=True)
except (SalmonCatchError, TypeError) as exc:
    st.error(str(exc))
    st.stop()

long_df = result.long

f_long = sidebar_filters(long_df).apply(long_df)

# -----------------------------------------------------------------------------
# Tabs
# -----------------------------------------------------------------------------
tabs = st.tabs(["By Region", "Trends", "Data Quality"])

with tabs[0]:
    st.subheader(f"{stat.title()} catch by region")
    col = stat_column(stat)
    try:
        summary = sort_table(aggregate(f_long, "Region", stat), col, descending=descending).reset_index(drop=True)
    except SalmonCatchError as exc:
        st.warning(str(exc))
    else:
        st.altair_chart(bar_group_stat(summary, "Region", col, descending), use_container_width=True)
        st.dataframe(summary, use_container_width=True)

with tabs[1]:
    st.altair_chart(line_catch_by_year(f_long), use_container_width=True)

    totals = f_long.groupby("Year", dropna=True)["catch"].sum().reset_index().sort_values("Year")
    if not totals.empty:
        line = px.line(totals, x="Year", y="catch", markers=True, title="Total catch by year (selected species)")
        st.plotly_chart(line, use_container_width=True)
    st.altair_chart(pie_species_mix(f_long, "Share of catch by species"), use_container_width=True)

with tabs[2]:
    dropped = ", ".join(f"`{c}`" for c in DROP_COLS)
    st.markdown(
        f"""
**Cleaning steps**
- Dropped columns: {dropped}
- Replaced `{SENTINEL}` in `{TARGET_COLUMN}` before casting to numbers
- Catch converted from thousands of fish to fish
        """
    )
    if result.issues:
        st.warning(f"{len(result.issues)} value(s) in {TARGET_COLUMN} could not be read as numbers.")
        st.dataframe(result.issues_frame(), use_container_width=True)
    else:
        st.success("Every value parsed as a number after the sentinel replacement.")
