from __future__ import annotations
import logging

import pandas as pd

from salmon_catch.errors import SchemaError, ShapeError
from salmon_catch.validators.schema import require_columns

logger = logging.getLogger(__name__)

REGION_DEF_COLS = ["code", "mgmtArea"]


def join_region_definitions(
    catch: pd.DataFrame,
    region_defs: pd.DataFrame,
    left_on: str = "Region",
    right_on: str = "code",
) -> pd.DataFrame:
    """
    Left-join region definitions onto catch rows.

    Every catch row is kept exactly once; regions without a definition get
    missing values. Duplicate definition codes would multiply rows, so they
    raise ShapeError instead.
    """
    require_columns(catch, [left_on], stage="join_region_definitions (left)")
    require_columns(region_defs, [right_on], stage="join_region_definitions (right)")

    dup = region_defs[right_on].duplicated(keep=False)
    if dup.any():
        keys = sorted(region_defs.loc[dup, right_on].astype(str).unique().tolist())
        raise ShapeError(f"Region definitions have duplicate {right_on!r} values: {keys}", keys=keys)

    clash = [c for c in region_defs.columns if c != right_on and c in catch.columns]
    if clash:
        raise SchemaError(f"Region definition columns already in catch table: {clash}", columns=clash)

    out = catch.merge(region_defs, left_on=left_on, right_on=right_on, how="left", validate="many_to_one")
    if right_on != left_on:
        out = out.drop(columns=[right_on])

    unmatched = catch[left_on].notna() & ~catch[left_on].isin(region_defs[right_on])
    if unmatched.any():
        codes = sorted(catch.loc[unmatched, left_on].astype(str).unique().tolist())
        logger.warning("No region definition for: %s", codes)
    return out
