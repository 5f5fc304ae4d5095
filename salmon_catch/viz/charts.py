# salmon_catch/viz/charts.py
from __future__ import annotations
import altair as alt
import pandas as pd

STAT_LABELS = {
    "mean": "Mean catch (fish)",
    "median": "Median catch (fish)",
    "sum": "Total catch (fish)",
    "min": "Min catch (fish)",
    "max": "Max catch (fish)",
    "n": "Rows",
}


def format_stat(stat_col: str) -> str:
    return STAT_LABELS.get(stat_col.split("_", 1)[0], stat_col)


def _no_data() -> alt.Chart:
    return alt.Chart(pd.DataFrame({"note": ["No data"]})).mark_text(size=16).encode(text="note")


def bar_group_stat(df: pd.DataFrame, key: str, stat_col: str, descending: bool = True) -> alt.Chart:
    """Bars in the order the summary was sorted."""
    if df.empty:
        return _no_data()
    label = format_stat(stat_col)
    return (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X(f"{key}:N", title=key, sort=df[key].astype(str).tolist()),
            y=alt.Y(f"{stat_col}:Q", title=label),
            tooltip=[f"{key}:N", alt.Tooltip(f"{stat_col}:Q", title=label, format=",.0f")],
        )
        .properties(height=320, title=f"{label} by {key}" + (" (largest first)" if descending else ""))
    )


def line_catch_by_year(long: pd.DataFrame) -> alt.Chart:
    # expects columns: Year, species, catch
    if long.empty:
        return _no_data()
    gp = long.groupby(["Year", "species"], dropna=True)["catch"].sum().reset_index()
    return (
        alt.Chart(gp)
        .mark_line(point=True)
        .encode(
            x=alt.X("Year:O", title="Year"),
            y=alt.Y("catch:Q", title="Catch (fish)"),
            color=alt.Color("species:N", legend=alt.Legend(title="Species")),
            tooltip=["Year:O", "species:N", alt.Tooltip("catch:Q", format=",.0f")],
        )
        .properties(height=280, title="Catch by Year and Species")
        .interactive()
    )


def pie_species_mix(long: pd.DataFrame, title: str) -> alt.Chart:
    if long.empty:
        return _no_data()
    base = long.groupby("species", dropna=True)["catch"].sum().reset_index()
    total = base["catch"].sum()
    base["share"] = (base["catch"] / total) if total else 0
    return (
        alt.Chart(base)
        .mark_arc()
        .encode(
            theta=alt.Theta("catch:Q"),
            color=alt.Color("species:N", legend=alt.Legend(title="Species")),
            tooltip=[
                "species:N",
                alt.Tooltip("catch:Q", title="Catch (fish)", format=",.0f"),
                alt.Tooltip("share:Q", title="Share", format=".1%"),
            ],
        )
        .properties(height=280, title=title)
    )
