# salmon_catch/pipeline.py
"""
Composed cleaning -> reshaping -> summarizing pipeline.

    prune columns -> replace sentinel + coerce -> wide to long
    -> scale units -> aggregate by key -> sort by statistic

Each stage is a pure function from one DataFrame to a new one; the same
functions are importable on their own from `salmon_catch.cleaning` and
`salmon_catch.queries`.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

import pandas as pd

from salmon_catch.cleaning import drop_columns, normalize_column, scale_column
from salmon_catch.config import (
    CATCH_SCALE,
    ID_COLUMNS,
    NAMES_COLUMN,
    SENTINEL_REPLACEMENT,
    VALUES_COLUMN,
)
from salmon_catch.errors import TypeCoercionWarning
from salmon_catch.queries.aggregations import aggregate, sort_table, stat_column
from salmon_catch.queries.filters import filter_present
from salmon_catch.queries.reshape import wide_to_long
from salmon_catch.validators.schema import TableSchema

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    summary: pd.DataFrame
    long: pd.DataFrame
    issues: list[TypeCoercionWarning] = field(default_factory=list)

    def issues_frame(self) -> pd.DataFrame:
        """Coercion audit as a table (column, row, value)."""
        return pd.DataFrame([w.as_dict() for w in self.issues], columns=["column", "row", "value"])


def _wide_schema(id_columns: Sequence[str], measures: Sequence[str]) -> TableSchema:
    return TableSchema.of(*id_columns, *[(m, "number") for m in measures])


def _long_schema(id_columns: Sequence[str], names_to: str, values_to: str) -> TableSchema:
    return TableSchema.of(*id_columns, (names_to, "string"), (values_to, "number"))


def run_pipeline(
    table: pd.DataFrame,
    excluded_columns: Iterable[str],
    target_column: str,
    sentinel: str,
    group_key: str | Sequence[str],
    stat: str,
    sort_desc: bool,
    *,
    replacement: str = SENTINEL_REPLACEMENT,
    scale: float = CATCH_SCALE,
    id_columns: Sequence[str] = tuple(ID_COLUMNS),
    names_to: str = NAMES_COLUMN,
    values_to: str = VALUES_COLUMN,
    drop_missing: bool = False,
) -> PipelineResult:
    """
    Run every stage and keep the intermediate long table and the coercion
    audit. Measure columns are whatever remains after pruning, minus the id
    columns. Measures other than `target_column` must already be numeric.

    Missing catch values make the unit scaling fail with TypeError unless
    drop_missing=True, which filters those long rows out first.
    """
    ids = list(id_columns)
    pruned = drop_columns(table, excluded_columns)
    TableSchema.of(*ids, target_column).validate(pruned, stage="prune")

    normalized, issues = normalize_column(pruned, target_column, sentinel, replacement)
    for w in issues:
        logger.warning("Coercion: %s", w)

    measures = [c for c in normalized.columns if c not in ids]
    _wide_schema(ids, measures).validate(normalized, stage="normalize", exact=True)

    long = wide_to_long(normalized, ids, measures, names_to=names_to, values_to=values_to)
    _long_schema(ids, names_to, values_to).validate(long, stage="wide_to_long")
    if drop_missing:
        long = filter_present(long, values_to).reset_index(drop=True)

    scaled = scale_column(long, values_to, scale)
    summary = aggregate(scaled, group_key, stat, value_column=values_to)
    summary = sort_table(summary, stat_column(stat, values_to), descending=sort_desc).reset_index(drop=True)

    logger.info(
        "Pipeline: %d wide rows -> %d long rows -> %d groups (%s, %s)",
        len(table), len(scaled), len(summary), stat, "desc" if sort_desc else "asc",
    )
    return PipelineResult(summary=summary, long=scaled, issues=issues)


def clean_and_summarize(
    table: pd.DataFrame,
    excluded_columns: Iterable[str],
    target_column: str,
    sentinel: str,
    group_key: str | Sequence[str],
    stat: str,
    sort_desc: bool,
) -> pd.DataFrame:
    """Summary table only; coercion issues are logged by run_pipeline."""
    return run_pipeline(
        table, excluded_columns, target_column, sentinel, group_key, stat, sort_desc
    ).summary
