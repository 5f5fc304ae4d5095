from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

import pandas as pd

from salmon_catch.config import ID_COLUMNS, NAMES_COLUMN, SPECIES, VALUES_COLUMN
from salmon_catch.errors import SchemaError

KINDS = ("string", "number", "any")


@dataclass(frozen=True)
class Column:
    name: str
    kind: str = "any"

    def __post_init__(self):
        if self.kind not in KINDS:
            raise ValueError(f"Unknown column kind {self.kind!r}; expected one of {KINDS}")


def _kind_ok(s: pd.Series, kind: str) -> bool:
    if kind == "any":
        return True
    if kind == "number":
        # all-missing object columns count as numeric
        return pd.api.types.is_numeric_dtype(s) or s.isna().all()
    return (
        pd.api.types.is_string_dtype(s)
        or pd.api.types.is_object_dtype(s)
        or isinstance(s.dtype, pd.CategoricalDtype)
    )


@dataclass(frozen=True)
class TableSchema:
    """Ordered, typed column list checked at stage boundaries."""

    columns: tuple[Column, ...]

    @classmethod
    def of(cls, *cols: Column | tuple[str, str] | str) -> "TableSchema":
        out = []
        for c in cols:
            if isinstance(c, Column):
                out.append(c)
            elif isinstance(c, str):
                out.append(Column(c))
            else:
                out.append(Column(*c))
        return cls(tuple(out))

    @property
    def names(self) -> list[str]:
        return [c.name for c in self.columns]

    def without(self, names: Iterable[str]) -> "TableSchema":
        drop = set(names)
        return TableSchema(tuple(c for c in self.columns if c.name not in drop))

    def validate(self, df: pd.DataFrame, *, stage: str = "", exact: bool = False) -> pd.DataFrame:
        """
        Raise SchemaError if a declared column is missing or has the wrong kind.
        With exact=True, undeclared columns are also an error.
        Returns the frame unchanged so calls can be chained.
        """
        where = f" at {stage}" if stage else ""
        miss = [n for n in self.names if n not in df.columns]
        if miss:
            raise SchemaError(f"Missing expected columns{where}: {miss}", columns=miss)

        if exact:
            extra = [c for c in df.columns if c not in set(self.names)]
            if extra:
                raise SchemaError(f"Unexpected columns{where}: {extra}", columns=extra)

        bad = [c.name for c in self.columns if not _kind_ok(df[c.name], c.kind)]
        if bad:
            raise SchemaError(
                f"Columns with wrong type{where}: "
                + ", ".join(f"{n} (expected {self[n].kind}, got {df[n].dtype})" for n in bad),
                columns=bad,
            )
        return df

    def __getitem__(self, name: str) -> Column:
        for c in self.columns:
            if c.name == name:
                return c
        raise KeyError(name)

    def __contains__(self, name: object) -> bool:
        return name in self.names


def require_columns(df: pd.DataFrame, columns: Iterable[str], *, stage: str = "") -> None:
    miss = [c for c in columns if c not in df.columns]
    if miss:
        where = f" at {stage}" if stage else ""
        raise SchemaError(f"Missing expected columns{where}: {miss}", columns=miss)


# Wide source table after pruning; species may still hold raw strings
WIDE_CATCH_SCHEMA = TableSchema.of(
    ("Region", "string"),
    ("Year", "number"),
    *[(sp, "any") for sp in SPECIES],
)

LONG_CATCH_SCHEMA = TableSchema.of(
    *[(c, "string" if c == "Region" else "number") for c in ID_COLUMNS],
    (NAMES_COLUMN, "string"),
    (VALUES_COLUMN, "number"),
)
