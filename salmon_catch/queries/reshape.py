# salmon_catch/queries/reshape.py
from __future__ import annotations
import logging
from typing import Sequence

import pandas as pd

from salmon_catch.config import NAMES_COLUMN, VALUES_COLUMN
from salmon_catch.errors import SchemaError, ShapeError
from salmon_catch.validators.schema import require_columns

logger = logging.getLogger(__name__)


def wide_to_long(
    df: pd.DataFrame,
    id_columns: Sequence[str],
    measure_columns: Sequence[str],
    names_to: str = NAMES_COLUMN,
    values_to: str = VALUES_COLUMN,
) -> pd.DataFrame:
    """
    One row per (input row x measure column).

    Output is row-major: every measure of the first input row, then every
    measure of the second, and so on, measures in the order given.
    """
    ids, measures = list(id_columns), list(measure_columns)
    require_columns(df, ids + measures, stage="wide_to_long")
    overlap = sorted(set(ids) & set(measures))
    if overlap:
        raise SchemaError(f"Columns are both id and measure: {overlap}", columns=overlap)
    clash = [c for c in (names_to, values_to) if c in ids]
    if clash:
        raise SchemaError(f"Long-form names collide with id columns: {clash}", columns=clash)

    long = (
        df.reset_index(drop=True)
          .melt(id_vars=ids, value_vars=measures, var_name=names_to,
                value_name=values_to, ignore_index=False)
          .sort_index(kind="stable")
          .reset_index(drop=True)
    )
    long[names_to] = long[names_to].astype("string")
    logger.debug("wide_to_long: %d rows x %d measures -> %d rows", len(df), len(measures), len(long))
    return long


def long_to_wide(
    df: pd.DataFrame,
    id_columns: Sequence[str],
    names_from: str = NAMES_COLUMN,
    values_from: str = VALUES_COLUMN,
) -> pd.DataFrame:
    """
    One row per distinct id combination, one column per distinct name.

    Rows and new columns follow first appearance in `df`. Raises ShapeError
    when an (id..., name) pair occurs more than once.
    """
    ids = list(id_columns)
    require_columns(df, ids + [names_from, values_from], stage="long_to_wide")

    key = ids + [names_from]
    dup = df.duplicated(subset=key, keep=False)
    if dup.any():
        keys = list(df.loc[dup, key].drop_duplicates().itertuples(index=False, name=None))
        raise ShapeError(f"Cannot widen: duplicate {key} combinations {keys}", keys=keys)

    names = df[names_from].drop_duplicates().tolist()
    clash = [n for n in names if n in ids]
    if clash:
        raise SchemaError(f"Widened column names collide with id columns: {clash}", columns=clash)

    pivoted = df.pivot(index=ids, columns=names_from, values=values_from).reset_index()
    pivoted.columns.name = None

    # restore first-appearance order of rows and columns
    order = df[ids].drop_duplicates().reset_index(drop=True)
    wide = order.merge(pivoted, on=ids, how="left")[ids + names]
    # labels came from the names column's dtype; give them the default one
    wide.columns = pd.Index([str(c) for c in ids + names])
    return wide
