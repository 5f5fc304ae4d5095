from pathlib import Path

import pandas as pd
import pytest
import requests

from salmon_catch import io as sio
from salmon_catch.errors import RetrievalError

CSV = "Region,Year,Chinook,Sockeye\nSSE,1990,I,100\nNSE,1990,4,7\n"


class _Resp:
    def __init__(self, content: bytes, status: int = 200):
        self.content = content
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")


def test_load_local_csv(tmp_path: Path):
    p = tmp_path / "catch.csv"
    p.write_text(CSV)
    df = sio.load_table(p)
    assert df.shape == (2, 4)
    assert df["Chinook"].tolist() == ["I", "4"]


def test_missing_file(tmp_path: Path):
    with pytest.raises(RetrievalError) as err:
        sio.load_table(tmp_path / "nope.csv")
    assert isinstance(err.value.__cause__, FileNotFoundError)


def test_unsupported_suffix_and_empty_file(tmp_path: Path):
    txt = tmp_path / "catch.txt"
    txt.write_text(CSV)
    with pytest.raises(RetrievalError):
        sio.load_table(txt)

    empty = tmp_path / "empty.csv"
    empty.write_text("")
    with pytest.raises(RetrievalError):
        sio.load_table(empty)


def test_load_from_url(monkeypatch):
    calls = []

    def fake_get(url, headers=None, timeout=None):
        calls.append((url, timeout))
        return _Resp(CSV.encode())

    monkeypatch.setattr(sio.requests, "get", fake_get)
    df = sio.load_table("https://example.org/object/df35b.302.1", timeout=5)
    assert len(df) == 2
    assert calls == [("https://example.org/object/df35b.302.1", 5)]


def test_http_and_network_errors(monkeypatch):
    monkeypatch.setattr(sio.requests, "get", lambda *a, **k: _Resp(b"", status=503))
    with pytest.raises(RetrievalError, match="503"):
        sio.load_table("https://example.org/object/x")

    def boom(*a, **k):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(sio.requests, "get", boom)
    with pytest.raises(RetrievalError) as err:
        sio.load_table("https://example.org/object/x")
    assert isinstance(err.value.__cause__, requests.ConnectionError)


def test_load_region_defs_keeps_code_and_area(tmp_path: Path):
    p = tmp_path / "regions.csv"
    p.write_text("code,mgmtArea,areaClass,notes\nSSE,Southern Southeast,subarea,\n")
    defs = sio.load_region_defs(p)
    assert list(defs.columns) == ["code", "mgmtArea"]

    bad = tmp_path / "bad.csv"
    bad.write_text("region,mgmtArea\nSSE,x\n")
    with pytest.raises(RetrievalError):
        sio.load_region_defs(bad)


def test_parquet_round_trip(tmp_path: Path):
    pytest.importorskip("pyarrow")
    p = tmp_path / "catch.parquet"
    pd.DataFrame({"Region": ["SSE"], "Year": [1990]}).to_parquet(p)
    assert sio.load_table(p)["Region"].tolist() == ["SSE"]


def test_missing_parquet_engine(tmp_path: Path, monkeypatch):
    p = tmp_path / "catch.parquet"
    p.write_bytes(b"PAR1")

    def no_engine(path):
        raise ImportError("Unable to find a usable engine; tried using: 'pyarrow'")

    monkeypatch.setitem(sio.READERS, ".parquet", no_engine)
    with pytest.raises(RetrievalError, match="pyarrow") as err:
        sio.load_table(p)
    assert isinstance(err.value.__cause__, ImportError)
