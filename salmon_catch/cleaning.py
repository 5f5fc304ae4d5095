# salmon_catch/cleaning.py
from __future__ import annotations
import logging
from typing import Iterable, Mapping, Sequence

import pandas as pd

from salmon_catch.errors import SchemaError, ShapeError, TypeCoercionWarning
from salmon_catch.validators.schema import require_columns

logger = logging.getLogger(__name__)


# -------- column selection --------
def drop_columns(df: pd.DataFrame, columns: Iterable[str]) -> pd.DataFrame:
    """Return a copy without `columns`; every name must exist."""
    cols = list(columns)
    require_columns(df, cols, stage="drop_columns")
    out = df.drop(columns=cols)
    logger.debug("Dropped %s -> %d cols", cols, out.shape[1])
    return out


def select_columns(df: pd.DataFrame, columns: Sequence[str]) -> pd.DataFrame:
    """Keep only `columns`, in the order given."""
    cols = list(columns)
    require_columns(df, cols, stage="select_columns")
    return df[cols].copy()


def rename_columns(df: pd.DataFrame, mapping: Mapping[str, str]) -> pd.DataFrame:
    require_columns(df, mapping.keys(), stage="rename_columns")
    clash = [new for old, new in mapping.items() if new in df.columns and new not in mapping]
    if clash:
        raise SchemaError(f"Rename targets already exist: {clash}", columns=clash)
    return df.rename(columns=dict(mapping))


# -------- value normalization --------
def replace_sentinel(df: pd.DataFrame, column: str, sentinel: str, replacement: str) -> pd.DataFrame:
    """Replace exact occurrences of `sentinel` in one column; nothing else changes."""
    require_columns(df, [column], stage="replace_sentinel")
    out = df.copy()
    hits = out[column].eq(sentinel).fillna(False).astype(bool)
    if hits.any():
        logger.debug("Replacing %d %r -> %r in %s", int(hits.sum()), sentinel, replacement, column)
        out[column] = out[column].mask(hits, replacement)
    return out


def coerce_numeric(df: pd.DataFrame, column: str) -> tuple[pd.DataFrame, list[TypeCoercionWarning]]:
    """
    Cast `column` to a number.

    Unparseable values become missing instead of raising. Each value that
    was present before the cast and missing after it is reported as a
    TypeCoercionWarning (column, row label, raw value) so callers can audit
    what was lost.
    """
    require_columns(df, [column], stage="coerce_numeric")
    before = df[column]
    after = pd.to_numeric(before, errors="coerce")
    lost = after.isna() & before.notna()
    issues = [TypeCoercionWarning(column, idx, raw) for idx, raw in before[lost].items()]

    out = df.copy()
    out[column] = after
    return out, issues


def normalize_column(
    df: pd.DataFrame, column: str, sentinel: str, replacement: str
) -> tuple[pd.DataFrame, list[TypeCoercionWarning]]:
    """Sentinel cleanup followed by the numeric cast."""
    return coerce_numeric(replace_sentinel(df, column, sentinel, replacement), column)


# -------- units --------
def scale_column(df: pd.DataFrame, column: str, factor: float) -> pd.DataFrame:
    """Multiply a fully numeric, fully populated column by `factor`."""
    require_columns(df, [column], stage="scale_column")
    s = df[column]
    if not pd.api.types.is_numeric_dtype(s) or pd.api.types.is_bool_dtype(s):
        raise TypeError(f"Cannot scale non-numeric column {column!r} (dtype {s.dtype}); normalize it first")
    n_missing = int(s.isna().sum())
    if n_missing:
        raise TypeError(f"Cannot scale column {column!r}: {n_missing} missing values")
    out = df.copy()
    out[column] = s * factor
    return out


# -------- string split / join --------
def split_column(df: pd.DataFrame, column: str, into: Sequence[str], sep: str) -> pd.DataFrame:
    """
    Split a string column on a literal `sep` into len(into) columns, placed
    where `column` was. Short values pad with missing; values with too
    many parts raise ShapeError.
    """
    require_columns(df, [column], stage="split_column")
    into = list(into)
    clash = [c for c in into if c in df.columns and c != column]
    if clash:
        raise SchemaError(f"Split targets already exist: {clash}", columns=clash)

    parts = df[column].astype("string").str.split(sep, expand=True, regex=False)
    if parts.shape[1] > len(into):
        extra = parts.iloc[:, len(into):].notna().any(axis=1)
        bad = df.loc[extra, column].tolist()
        raise ShapeError(f"Values in {column!r} split into more than {len(into)} parts: {bad}", keys=bad)
    parts = parts.reindex(columns=range(len(into)))
    parts.columns = into

    pos = list(df.columns).index(column)
    left = df.iloc[:, :pos]
    right = df.iloc[:, pos + 1:]
    return pd.concat([left, parts.astype("string"), right], axis=1)


def unite_columns(
    df: pd.DataFrame,
    new_column: str,
    columns: Sequence[str],
    sep: str = "_",
    remove: bool = True,
) -> pd.DataFrame:
    """Join `columns` into one string column at the first column's position.
    Any missing part makes the result missing."""
    columns = list(columns)
    if not columns:
        raise ValueError("unite_columns needs at least one column")
    require_columns(df, columns, stage="unite_columns")
    if new_column in df.columns and not (remove and new_column in columns):
        raise SchemaError(f"Column already exists: {new_column!r}", columns=[new_column])

    parts = df[columns].astype("string")
    joined = parts[columns[0]].str.cat([parts[c] for c in columns[1:]], sep=sep) if len(columns) > 1 else parts[columns[0]]

    first = list(df.columns).index(columns[0])
    if remove:
        out = df.drop(columns=columns)
        pos = len([c for c in df.columns[:first] if c not in columns])
    else:
        out = df.copy()
        pos = first
    out.insert(pos, new_column, joined)
    return out
