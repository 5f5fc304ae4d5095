from __future__ import annotations
import logging
from io import BytesIO
from pathlib import Path

import pandas as pd
import requests

from salmon_catch.config import CATCH_URL, REGION_DEFS_URL, REQUEST_TIMEOUT
from salmon_catch.errors import RetrievalError

logger = logging.getLogger(__name__)

READERS = {
    ".parquet": pd.read_parquet,
    ".feather": pd.read_feather,
    ".csv": pd.read_csv,
}

HEADERS = {"User-Agent": "salmon-catch/0.1"}


def _is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def _fetch(url: str, timeout: float) -> pd.DataFrame:
    try:
        resp = requests.get(url, headers=HEADERS, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise RetrievalError(f"Could not fetch {url}: {exc}") from exc
    # archive objects have no extension; they are CSV
    return pd.read_csv(BytesIO(resp.content))


def _read_local(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    reader = READERS.get(path.suffix.lower())
    if reader is None:
        raise ValueError(f"Unsupported file type {path.suffix!r}; expected one of {sorted(READERS)}")
    return reader(path)


def load_table(source: str | Path, timeout: float = REQUEST_TIMEOUT) -> pd.DataFrame:
    """
    Load a table from an http(s) URL or a local .csv/.parquet/.feather file.

    Any failure (network, HTTP status, missing file, unreadable payload)
    raises RetrievalError chained to the underlying error. No retries.
    """
    try:
        if _is_url(source):
            logger.info("Fetching %s", source)
            df = _fetch(str(source), timeout)
        else:
            df = _read_local(Path(source))
    except (OSError, ValueError, ImportError) as exc:
        # pandas ParserError / EmptyDataError are ValueErrors;
        # parquet/feather raise ImportError without pyarrow
        raise RetrievalError(f"Could not load {source}: {exc}") from exc

    if df.columns.empty:
        raise RetrievalError(f"Source {source} has no columns")
    logger.info("Loaded %s rows x %s cols from %s", f"{len(df):,}", df.shape[1], source)
    return df


def load_catch(source: str | Path = CATCH_URL, timeout: float = REQUEST_TIMEOUT) -> pd.DataFrame:
    """Wide Alaska salmon catch table (one column per species)."""
    return load_table(source, timeout=timeout)


def load_region_defs(source: str | Path = REGION_DEFS_URL, timeout: float = REQUEST_TIMEOUT) -> pd.DataFrame:
    """Region code -> management area lookup, trimmed to code and mgmtArea."""
    df = load_table(source, timeout=timeout)
    keep = [c for c in ("code", "mgmtArea") if c in df.columns]
    if "code" not in keep:
        raise RetrievalError(f"Region definitions from {source} have no 'code' column")
    return df[keep].copy()
