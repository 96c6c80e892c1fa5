from __future__ import annotations

import json
import zipfile
from pathlib import Path
from unittest.mock import patch

import pytest

from prf_bulk.models.run_result import Manifest, OutputBundle, RunCounts
from prf_bulk.services.packaging import PackagingError, ZipPackagingSink, archive_name


def _bundle() -> OutputBundle:
    manifest = Manifest(
        job_id="abcdef0123456789",
        date_utc="2026-10-19",
        start_seq="001",
        sequence_range_start="001",
        sequence_range_end="001",
        new_file_names=["001_prf_bulk_import_20261019.csv"],
        existing_file_names=[],
        counts=RunCounts(total_rows=1, valid_rows=1, new_member_count=1),
    )
    return OutputBundle(
        files=[
            ("001_prf_bulk_import_20261019.csv", '"Name"\r\n"Aung"\r\n'),
            ("errors.csv", '"line","code","message"\r\n'),
            ("warnings.csv", '"line","code","message"\r\n'),
        ],
        manifest=manifest,
    )


def test_archive_name():
    assert archive_name(_bundle()) == "prf_bulk_import_20261019_abcdef01.zip"


def test_zip_sink_writes_all_files(tmp_path: Path):
    sink = ZipPackagingSink(tmp_path / "out")
    path = sink.package(_bundle())
    assert path == tmp_path / "out" / "prf_bulk_import_20261019_abcdef01.zip"
    with zipfile.ZipFile(path) as zf:
        assert set(zf.namelist()) == {
            "001_prf_bulk_import_20261019.csv",
            "errors.csv",
            "warnings.csv",
            "manifest.json",
        }
        assert zf.read("001_prf_bulk_import_20261019.csv").decode("utf-8") == '"Name"\r\n"Aung"\r\n'
        manifest = json.loads(zf.read("manifest.json"))
    assert manifest["jobId"] == "abcdef0123456789"
    assert manifest["counts"]["newMemberCount"] == 1


def test_zip_sink_io_failure(tmp_path: Path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("file in the way", encoding="utf-8")
    with pytest.raises(PackagingError):
        ZipPackagingSink(blocker).package(_bundle())


def test_bundle_file_names():
    assert _bundle().file_names[0] == "001_prf_bulk_import_20261019.csv"


def test_zip_sink_removes_partial_archive(tmp_path: Path):
    out = tmp_path / "out"
    sink = ZipPackagingSink(out)
    real_writestr = zipfile.ZipFile.writestr
    calls = []

    def failing_writestr(self, name, data, *args, **kwargs):
        calls.append(name)
        if len(calls) == 2:
            raise OSError("disk full")
        return real_writestr(self, name, data, *args, **kwargs)

    with patch.object(zipfile.ZipFile, "writestr", failing_writestr):
        with pytest.raises(PackagingError, match="disk full"):
            sink.package(_bundle())

    assert out.is_dir()
    assert list(out.iterdir()) == []
