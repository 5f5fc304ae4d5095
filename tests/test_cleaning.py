import pandas as pd
import pytest

from salmon_catch.cleaning import (
    coerce_numeric,
    drop_columns,
    normalize_column,
    rename_columns,
    replace_sentinel,
    scale_column,
    select_columns,
    split_column,
    unite_columns,
)
from salmon_catch.errors import SchemaError, ShapeError, TypeCoercionWarning


def _wide():
    return pd.DataFrame({
        "Region": ["SSE", "NSE", "GSE"],
        "Year": [1990, 1990, 1955],
        "Chinook": ["12", "7", "I"],
        "Sockeye": [100, 40, 3],
        "All": [112, 47, 4],
        "notesRegCode": ["", "", "typo"],
    })


def test_drop_columns_removes_exactly_the_named_columns():
    df = _wide()
    out = drop_columns(df, ["All", "notesRegCode"])
    assert list(out.columns) == ["Region", "Year", "Chinook", "Sockeye"]
    assert set(out.columns) == set(df.columns) - {"All", "notesRegCode"}
    # input untouched
    assert "All" in df.columns


def test_drop_unknown_column_names_it():
    with pytest.raises(SchemaError) as err:
        drop_columns(_wide(), ["All", "Steelhead"])
    assert err.value.columns == ["Steelhead"]
    assert "Steelhead" in str(err.value)


def test_select_and_rename():
    df = select_columns(_wide(), ["Year", "Region"])
    assert list(df.columns) == ["Year", "Region"]

    renamed = rename_columns(pd.DataFrame({"catch_thousands": [1]}), {"catch_thousands": "catch"})
    assert list(renamed.columns) == ["catch"]

    with pytest.raises(SchemaError):
        rename_columns(_wide(), {"Chinook": "Sockeye"})


def test_replace_sentinel_only_touches_exact_matches():
    df = pd.DataFrame({"Chinook": ["I", "II", "10", None], "Coho": ["I", "1", "2", "3"]})
    out = replace_sentinel(df, "Chinook", "I", "1")
    assert out["Chinook"].tolist()[:3] == ["1", "II", "10"]
    assert out["Chinook"].isna().iloc[3]
    assert out["Coho"].tolist() == ["I", "1", "2", "3"]
    assert df["Chinook"].iloc[0] == "I"


def test_coerce_numeric_audits_values_that_became_missing():
    df = pd.DataFrame({"Chinook": ["1", "x", None, "3"]})
    out, issues = coerce_numeric(df, "Chinook")
    assert out["Chinook"].isna().tolist() == [False, True, True, False]
    assert len(issues) == 1
    assert isinstance(issues[0], TypeCoercionWarning)
    assert (issues[0].column, issues[0].row, issues[0].value) == ("Chinook", 1, "x")


def test_normalize_single_row():
    df = pd.DataFrame({"Region": ["SSE"], "Year": [1990], "Chinook": ["I"], "Sockeye": [100]})
    out, issues = normalize_column(df, "Chinook", "I", "1")
    assert issues == []
    assert out.to_dict("records") == [{"Region": "SSE", "Year": 1990, "Chinook": 1, "Sockeye": 100}]
    assert pd.api.types.is_numeric_dtype(out["Chinook"])


def test_unlisted_tokens_become_missing_not_errors():
    df = pd.DataFrame({"Chinook": ["I", "n/a", "5"]})
    out, issues = normalize_column(df, "Chinook", "I", "1")
    assert out["Chinook"].tolist()[0] == 1
    assert out["Chinook"].isna().tolist() == [False, True, False]
    assert [w.value for w in issues] == ["n/a"]


def test_scale_column():
    df = pd.DataFrame({"catch": [1, 100]})
    assert scale_column(df, "catch", 1000)["catch"].tolist() == [1000, 100000]
    assert df["catch"].tolist() == [1, 100]


def test_scale_rejects_strings_and_missing():
    with pytest.raises(TypeError, match="catch"):
        scale_column(pd.DataFrame({"catch": ["I", "2"]}), "catch", 1000)
    with pytest.raises(TypeError, match="missing"):
        scale_column(pd.DataFrame({"catch": [1.0, None]}), "catch", 1000)
    with pytest.raises(SchemaError):
        scale_column(pd.DataFrame({"catch": [1]}), "fish", 1000)


def test_split_column_in_place():
    df = pd.DataFrame({"id": [1, 2, 3], "city": ["Juneau-AK", "Sitka-AK", "Anchorage"], "pop": [3, 1, 29]})
    out = split_column(df, "city", ["city", "state_code"], "-")
    assert list(out.columns) == ["id", "city", "state_code", "pop"]
    assert out["city"].tolist() == ["Juneau", "Sitka", "Anchorage"]
    assert out["state_code"].tolist()[:2] == ["AK", "AK"]
    assert pd.isna(out["state_code"].iloc[2])


def test_split_too_many_parts():
    df = pd.DataFrame({"city": ["Juneau-AK-USA"]})
    with pytest.raises(ShapeError):
        split_column(df, "city", ["city", "state_code"], "-")


def test_unite_columns():
    df = pd.DataFrame({"site": ["x", "y"], "year": [2017, 2018], "month": [1, 5], "day": [1, 12]})
    out = unite_columns(df, "date", ["year", "month", "day"], sep="-")
    assert list(out.columns) == ["site", "date"]
    assert out["date"].tolist() == ["2017-1-1", "2018-5-12"]

    kept = unite_columns(df, "date", ["year", "month"], remove=False)
    assert list(kept.columns) == ["site", "date", "year", "month", "day"]
    assert kept["date"].tolist() == ["2017_1", "2018_5"]


def test_unite_then_split_recovers_parts():
    df = pd.DataFrame({"city": ["Juneau", "Sitka"], "state_code": ["AK", "AK"]})
    joined = unite_columns(df, "city", ["city", "state_code"], sep="-")
    assert joined["city"].tolist() == ["Juneau-AK", "Sitka-AK"]
    back = split_column(joined, "city", ["city", "state_code"], "-")
    assert back["city"].tolist() == ["Juneau", "Sitka"]
    assert back["state_code"].tolist() == ["AK", "AK"]
