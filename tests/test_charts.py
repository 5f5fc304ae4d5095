import altair as alt
import pandas as pd

from salmon_catch.viz.charts import bar_group_stat, format_stat, line_catch_by_year, pie_species_mix


def test_format_stat():
    assert format_stat("mean_catch") == "Mean catch (fish)"
    assert format_stat("n") == "Rows"


def test_charts_build():
    summary = pd.DataFrame({"Region": ["SSE", "NSE"], "mean_catch": [50500.0, 15000.0]})
    long = pd.DataFrame({
        "Region": ["SSE", "SSE"], "Year": [1990, 1990],
        "species": ["Chinook", "Sockeye"], "catch": [1000, 100000],
    })
    assert isinstance(bar_group_stat(summary, "Region", "mean_catch"), alt.Chart)
    assert isinstance(line_catch_by_year(long), alt.Chart)
    assert isinstance(pie_species_mix(long, "mix"), alt.Chart)
    # empty input still renders a placeholder
    assert isinstance(bar_group_stat(summary.iloc[0:0], "Region", "mean_catch"), alt.Chart)
