# salmon_catch/queries/aggregations.py
from __future__ import annotations
import logging
from typing import Callable, Sequence

import pandas as pd

from salmon_catch.config import VALUES_COLUMN
from salmon_catch.errors import AggregationError
from salmon_catch.validators.schema import require_columns

logger = logging.getLogger(__name__)

Reduction = Callable[..., pd.Series]

# stat -> (groupby reducer, needs at least one non-missing value per group)
REDUCTIONS: dict[str, tuple[Reduction, bool]] = {
    "mean": (lambda g: g.mean(), True),
    "median": (lambda g: g.median(), True),
    "min": (lambda g: g.min(), True),
    "max": (lambda g: g.max(), True),
    "sum": (lambda g: g.sum(), False),
    "count": (lambda g: g.size(), False),
}


def register_reduction(name: str, func: Reduction, *, needs_values: bool = True) -> None:
    """Add a statistic usable by `aggregate(stat=name)`."""
    REDUCTIONS[name] = (func, needs_values)


def stat_column(stat: str, value_column: str = VALUES_COLUMN) -> str:
    return "n" if stat == "count" else f"{stat}_{value_column}"


def available_years(df: pd.DataFrame) -> list[int]:
    years = sorted(pd.to_numeric(df["Year"], errors="coerce").dropna().unique().tolist())
    return [int(y) for y in years]


def available_regions(df: pd.DataFrame) -> list[str]:
    return sorted(df["Region"].dropna().astype("string").str.strip().unique().tolist())


def aggregate(
    df: pd.DataFrame,
    group_key: str | Sequence[str],
    stat: str,
    value_column: str = VALUES_COLUMN,
) -> pd.DataFrame:
    """
    Split-apply-combine: one row per distinct key with the reduced statistic.

    Keys come out sorted, so the result does not depend on input row order.
    Missing keys form their own group, which keeps sum(n) == len(df) for
    stat="count".
    """
    if stat not in REDUCTIONS:
        raise ValueError(f"Unknown statistic {stat!r}; choose from {sorted(REDUCTIONS)}")
    keys = [group_key] if isinstance(group_key, str) else list(group_key)
    reducer, needs_values = REDUCTIONS[stat]
    require_columns(df, keys if stat == "count" else keys + [value_column], stage="aggregate")

    out_col = stat_column(stat, value_column)
    gp = df.groupby(keys, dropna=False, sort=True)
    if stat != "count":
        gp = gp[value_column]
    if needs_values:
        n_present = gp.count()
        empty = n_present[n_present == 0]
        if not empty.empty:
            raise AggregationError(
                f"{stat} of {value_column!r} is undefined for groups with no values: {empty.index.tolist()}",
                keys=empty.index.tolist(),
            )

    res = reducer(gp).rename(out_col).reset_index()
    logger.debug("aggregate %s(%s) by %s -> %d groups", stat, value_column, keys, len(res))
    return res


def sort_table(df: pd.DataFrame, column: str, descending: bool = False) -> pd.DataFrame:
    """Stable sort on one column; ties keep their input order, missing last."""
    require_columns(df, [column], stage="sort_table")
    return df.sort_values(column, ascending=not descending, kind="stable", na_position="last")
