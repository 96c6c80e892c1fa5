from __future__ import annotations

import json
from datetime import date

from prf_bulk.csvio.reader import rows_from_records
from prf_bulk.services.orchestrator import run_pipeline

from conftest import HEADER, make_record

"""Output layout contract: column order, quoting, CRLF and manifest keys."""

NEW_HEADER_LINE = '"Name","Email","Country","Total Amount","Currency","Month","SupportRegion","Note"'
EXISTING_HEADER_LINE = '"PRF Card No","TotalAmount","Currency","Month","SupportRegion","Note"'
REPORT_HEADER_LINE = '"line","code","message"'

MANIFEST_KEYS = {
    "jobId",
    "dateUTC",
    "startSeq",
    "sequenceRangeStart",
    "sequenceRangeEnd",
    "newFileNames",
    "existingFileNames",
    "counts",
}
COUNT_KEYS = {
    "totalRows",
    "validRows",
    "newMemberCount",
    "existingMemberCount",
    "warningCount",
    "errorCount",
}


def _run():
    records = [make_record(), make_record(CardID="42", Currency="mmk"), make_record(Email="x")]
    return run_pipeline(rows_from_records(records), HEADER, "001", date_stamp=date(2026, 1, 5))


def test_bundle_files_and_order():
    result = _run()
    assert result.bundle.file_names == [
        "001_prf_bulk_import_20260105.csv",
        "002_extension_prf_bulk_import_20260105.csv",
        "errors.csv",
        "warnings.csv",
    ]


def test_csv_headers_and_line_endings():
    files = dict(_run().bundle.files)
    new_csv = files["001_prf_bulk_import_20260105.csv"]
    existing_csv = files["002_extension_prf_bulk_import_20260105.csv"]
    assert new_csv.startswith(NEW_HEADER_LINE + "\r\n")
    assert existing_csv.startswith(EXISTING_HEADER_LINE + "\r\n")
    assert files["errors.csv"].startswith(REPORT_HEADER_LINE + "\r\n")
    assert files["warnings.csv"] == REPORT_HEADER_LINE + "\r\n"
    for text in files.values():
        assert text.endswith("\r\n")
        assert "\n" not in text.replace("\r\n", "")


def test_existing_row_formatting():
    files = dict(_run().bundle.files)
    rows = files["002_extension_prf_bulk_import_20260105.csv"].split("\r\n")
    assert rows[1] == '"PRF-000042","10.50","MMK",7,"Yangon","monthly"'


def test_error_report_row():
    files = dict(_run().bundle.files)
    rows = files["errors.csv"].split("\r\n")
    assert rows[1].startswith('4,"error.email_invalid",')


def test_manifest_keys():
    manifest = _run().manifest.to_dict()
    assert set(manifest) == MANIFEST_KEYS
    assert set(manifest["counts"]) == COUNT_KEYS
    assert manifest["dateUTC"] == "2026-01-05"
    assert manifest["startSeq"] == "001"
    assert manifest["sequenceRangeStart"] == "001"
    assert manifest["sequenceRangeEnd"] == "002"
    json.dumps(manifest)


def test_manifest_without_files_has_null_range():
    result = run_pipeline([], HEADER, "001", date_stamp=date(2026, 1, 5))
    manifest = result.manifest.to_dict()
    assert manifest["sequenceRangeStart"] is None
    assert manifest["sequenceRangeEnd"] is None
    assert manifest["newFileNames"] == []
    assert manifest["existingFileNames"] == []
