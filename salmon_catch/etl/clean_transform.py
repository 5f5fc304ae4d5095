# salmon_catch/etl/clean_transform.py
"""
Clean, reshape and summarize the Alaska salmon catch table.

Usage examples:
  # 1) Mean catch per region, largest first, straight from the KNB archive:
  python -m salmon_catch.etl.clean_transform --stat mean

  # 2) Row counts per region from a local copy, with the long table written out:
  python -m salmon_catch.etl.clean_transform \
    --source data/raw/byerly_alaska_ak_catch.csv \
    --stat count --ascending \
    --out data/processed/region_counts.csv \
    --long-out data/processed/catch_long.csv

  # 3) Summarize by management area instead of region code:
  python -m salmon_catch.etl.clean_transform --with-regions --group-key mgmtArea

Notes:
- Catch in the source is in thousands of fish; --scale 1000 (default)
  converts to individual fish.
- Values in the target column that are not numbers after the sentinel
  replacement become missing and are listed as warnings.
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

from salmon_catch.config import (
    CATCH_SCALE,
    CATCH_URL,
    DROP_COLS,
    REGION_DEFS_URL,
    SENTINEL,
    SENTINEL_REPLACEMENT,
    TARGET_COLUMN,
)
from salmon_catch.errors import SalmonCatchError
from salmon_catch.io import load_catch, load_region_defs
from salmon_catch.pipeline import run_pipeline
from salmon_catch.queries.aggregations import REDUCTIONS, aggregate, sort_table, stat_column
from salmon_catch.queries.joins import join_region_definitions
from salmon_catch.validators.schema import LONG_CATCH_SCHEMA, WIDE_CATCH_SCHEMA


def _setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S",
    )


def summarize(df: pd.DataFrame) -> dict:
    if df.empty:
        return {"rows": 0}
    return {
        "rows": int(len(df)),
        "years_span": (int(df["Year"].min()), int(df["Year"].max())) if df["Year"].notna().any() else None,
        "total_catch": float(df["catch"].sum()) if "catch" in df.columns else None,
        "regions": int(df["Region"].nunique()) if "Region" in df.columns else None,
        "species_count": int(df["species"].nunique()) if "species" in df.columns else None,
    }


def write_csv(df: pd.DataFrame, path: Path, label: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    logging.info(f"Wrote {label} -> {path} ({len(df):,} rows)")
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Clean & summarize Alaska commercial salmon catch data.")
    parser.add_argument("--source", default=CATCH_URL, help="URL or local path of the wide catch table")
    parser.add_argument("--drop", nargs="*", default=DROP_COLS, help="Columns to drop before reshaping")
    parser.add_argument("--target", default=TARGET_COLUMN, help="Column holding the sentinel token")
    parser.add_argument("--sentinel", default=SENTINEL)
    parser.add_argument("--replacement", default=SENTINEL_REPLACEMENT)
    parser.add_argument("--group-key", nargs="+", default=["Region"], help="Column(s) to group by")
    parser.add_argument("--stat", choices=sorted(REDUCTIONS), default="mean")
    parser.add_argument("--ascending", action="store_true", help="Sort smallest first (default: largest first)")
    parser.add_argument("--scale", type=float, default=CATCH_SCALE, help="Multiply catch by this factor")
    parser.add_argument("--drop-missing", action="store_true", help="Drop rows whose catch became missing instead of failing")
    parser.add_argument("--with-regions", action="store_true", help="Join management areas before grouping")
    parser.add_argument("--regions-source", default=REGION_DEFS_URL)
    parser.add_argument("--out", type=Path, help="Write the summary CSV here")
    parser.add_argument("--long-out", type=Path, help="Write the cleaned long table here")
    parser.add_argument("--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    try:
        logging.info("Reading catch table…")
        raw = WIDE_CATCH_SCHEMA.validate(load_catch(args.source), stage="load")
        logging.info(f"Raw shape: {raw.shape[0]:,} rows × {raw.shape[1]} cols")

        group_key = args.group_key[0] if len(args.group_key) == 1 else args.group_key
        result = run_pipeline(
            raw,
            args.drop,
            args.target,
            args.sentinel,
            "Region" if args.with_regions else group_key,
            args.stat,
            not args.ascending,
            replacement=args.replacement,
            scale=args.scale,
            drop_missing=args.drop_missing,
        )
        long = LONG_CATCH_SCHEMA.validate(result.long, stage="long")
        summary = result.summary

        if args.with_regions:
            logging.info("Joining region definitions…")
            long = join_region_definitions(long, load_region_defs(args.regions_source))
            summary = aggregate(long, group_key, args.stat)
            summary = sort_table(summary, stat_column(args.stat), descending=not args.ascending).reset_index(drop=True)
    except (SalmonCatchError, TypeError) as exc:
        logging.error(str(exc))
        return 1

    if result.issues:
        logging.warning(f"{len(result.issues)} value(s) in {args.target!r} became missing")

    logging.info(f"[Summary] Long table: {summarize(long)}")
    print(summary.to_string(index=False))

    if args.out:
        write_csv(summary, args.out, "summary")
    if args.long_out:
        write_csv(long, args.long_out, "long table")
    return 0


if __name__ == "__main__":
    sys.exit(main())
