# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest

from prf_bulk.validation.reference import REQUIRED_HEADERS

HEADER: list[str] = list(REQUIRED_HEADERS)


def make_record(**overrides: str) -> list[str]:
    """Build one valid input record in canonical column order.

    Keyword names are the canonical headers with spaces removed
    (e.g. TotalAmount="5.00", CardID="123").
    """
    values = {
        "Name": "Aung Aung",
        "Email": "a@b.com",
        "Country": "Myanmar",
        "CardID": "",
        "Total Amount": "10.50",
        "Currency": "USD",
        "Month": "7",
        "Payment Date": "2026-07-15",
        "Support Region": "Yangon",
        "Note": "monthly",
        "Transaction ID": "TX-1",
        "Payment Method": "card",
        "Phone": "",
    }
    by_key = {h.replace(" ", ""): h for h in HEADER}
    for key, value in overrides.items():
        values[by_key[key]] = value
    return [values[h] for h in HEADER]


def to_csv_bytes(header: list[str], records: list[list[str]]) -> bytes:
    import csv
    import io

    buf = io.StringIO(newline="")
    writer = csv.writer(buf, lineterminator="\r\n")
    writer.writerow(header)
    writer.writerows(records)
    return buf.getvalue().encode("utf-8")


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("PRF_OUTPUT_DIR", raising=False)
        monkeypatch.delenv("PRF_START_SEQ", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """chunk_size: 300
max_rows: 50000
max_bytes: 26214400
start_seq: "001"
seq_min_width: 3
output_directory: ./out
log_directory: ./logs
max_workers: 1
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "prf_bulk.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def write_input(temp_workdir: Path) -> Callable[..., Path]:
    def _write(records: list[list[str]], header: list[str] | None = None, name: str = "payments.csv") -> Path:
        path = temp_workdir / "data" / name
        path.write_bytes(to_csv_bytes(header or HEADER, records))
        return path
    return _write


@pytest.fixture()
def header() -> list[str]:
    return list(HEADER)


@pytest.fixture()
def record() -> Callable[..., list[str]]:
    return make_record


@pytest.fixture()
def csv_bytes() -> Callable[[list[str], list[list[str]]], bytes]:
    return to_csv_bytes
