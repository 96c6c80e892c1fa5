from __future__ import annotations

import json
import zipfile
from pathlib import Path
from typing import Any, Protocol

from ..models.run_result import OutputBundle

"""Packaging sinks: turn an OutputBundle into a downloadable artifact.

The orchestrator only depends on the PackagingSink protocol. ZipPackagingSink
is the default implementation used by the CLI: one ZIP per run holding every
output CSV, errors.csv, warnings.csv and manifest.json.
"""

__all__ = [
    "MANIFEST_FILE_NAME",
    "PackagingError",
    "PackagingSink",
    "ZipPackagingSink",
    "archive_name",
]

MANIFEST_FILE_NAME = "manifest.json"


class PackagingError(Exception):
    """Raised by a sink when the bundle could not be packaged."""


class PackagingSink(Protocol):
    def package(self, bundle: OutputBundle) -> Any:
        """Package the bundle and return an opaque artifact (path, bytes, ...)."""
        ...


def archive_name(bundle: OutputBundle) -> str:
    stamp = bundle.manifest.date_utc.replace("-", "")
    return f"prf_bulk_import_{stamp}_{bundle.manifest.job_id[:8]}.zip"


class ZipPackagingSink:
    """Write the bundle to ``<output_dir>/prf_bulk_import_<YYYYMMDD>_<job>.zip``."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def package(self, bundle: OutputBundle) -> Path:
        """Write the archive; on an I/O error remove any partial file and raise PackagingError."""
        target = self.output_dir / archive_name(bundle)
        manifest_text = json.dumps(bundle.manifest.to_dict(), ensure_ascii=False, indent=2)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(target, "w", compression=zipfile.ZIP_DEFLATED) as zf:
                for name, text in bundle.files:
                    zf.writestr(name, text.encode("utf-8"))
                zf.writestr(MANIFEST_FILE_NAME, manifest_text.encode("utf-8"))
        except OSError as e:
            # a failed run leaves no partial archive behind
            if target.is_file():
                target.unlink()
            raise PackagingError(f"failed writing archive {target}: {e}") from e
        return target
