# salmon_catch/queries/filters.py
from __future__ import annotations
import logging
from typing import Any, Iterable, Optional, Tuple

import pandas as pd

from salmon_catch.validators.schema import require_columns

logger = logging.getLogger(__name__)


# -------- string helpers --------
def _lc(s: pd.Series) -> pd.Series:
    return s.astype("string").str.strip().str.lower()


def _keep(df: pd.DataFrame, mask: pd.Series, why: str) -> pd.DataFrame:
    out = df.loc[mask.fillna(False).astype(bool)].copy()
    logger.debug("filter %s: kept %d of %d rows", why, len(out), len(df))
    return out


# -------- single-column filters --------
def filter_equals(df: pd.DataFrame, column: str, value: Any) -> pd.DataFrame:
    """Rows where `column == value`; missing values never match."""
    require_columns(df, [column], stage="filter_equals")
    return _keep(df, df[column] == value, f"{column} == {value!r}")


def filter_range(
    df: pd.DataFrame,
    column: str,
    lo: float | None = None,
    hi: float | None = None,
) -> pd.DataFrame:
    """Rows with lo <= column <= hi (either bound optional)."""
    require_columns(df, [column], stage="filter_range")
    mask = df[column].notna()
    if lo is not None:
        mask &= df[column] >= lo
    if hi is not None:
        mask &= df[column] <= hi
    return _keep(df, mask, f"{lo} <= {column} <= {hi}")


def filter_present(df: pd.DataFrame, column: str) -> pd.DataFrame:
    """Rows where `column` is not missing."""
    require_columns(df, [column], stage="filter_present")
    return _keep(df, df[column].notna(), f"{column} present")


def filter_isin(df: pd.DataFrame, column: str, values: Iterable[Any], case: bool = True) -> pd.DataFrame:
    """Rows whose `column` is one of `values`; case=False compares strings case-insensitively."""
    require_columns(df, [column], stage="filter_isin")
    values = list(values)
    if case:
        mask = df[column].isin(values)
    else:
        mask = _lc(df[column]).isin({str(v).strip().lower() for v in values})
    return _keep(df, mask, f"{column} in {values}")


# -------- composable filters (safe against missing cols) --------
def filter_df(
    df: pd.DataFrame,
    regions: Optional[Iterable[str]] = None,
    species: Optional[Iterable[str]] = None,
    year_range: Optional[Tuple[int, int]] = None,
    min_catch: Optional[float] = None,
) -> pd.DataFrame:
    """Composable filters for the dashboard; unset criteria are skipped."""
    out = df
    if regions and "Region" in out.columns:
        out = filter_isin(out, "Region", regions, case=False)
    if species and "species" in out.columns:
        out = filter_isin(out, "species", species, case=False)
    if year_range and "Year" in out.columns:
        out = filter_range(out, "Year", *year_range)
    if min_catch is not None and "catch" in out.columns:
        out = filter_range(out, "catch", lo=min_catch)
    return out.copy()


__all__ = [
    "filter_equals",
    "filter_range",
    "filter_isin",
    "filter_present",
    "filter_df",
]
