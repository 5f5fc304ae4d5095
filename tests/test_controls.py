import pandas as pd

from salmon_catch.ui.controls import CatchFilters, resolve_selection


def test_empty_selection_means_everything():
    assert resolve_selection([], ["SSE", "NSE", "GSE"]) == ["SSE", "NSE", "GSE"]
    assert resolve_selection(["GSE", "SSE"], ["SSE", "NSE", "GSE"]) == ["SSE", "GSE"]


def test_catch_filters_apply():
    long = pd.DataFrame({
        "Region": ["SSE", "SSE", "NSE"],
        "Year": [1990, 1991, 1990],
        "species": ["Chinook", "Sockeye", "Chinook"],
        "catch": [1000, 2000, 3000],
    })
    out = CatchFilters(regions=["SSE"], species=["Chinook", "Sockeye"], year_range=(1991, 1991)).apply(long)
    assert out["catch"].tolist() == [2000]
