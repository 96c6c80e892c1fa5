from __future__ import annotations

from dataclasses import dataclass

"""Pipeline configuration dataclass.

Defaults reproduce the fixed production limits; the YAML config and
environment variables may override them (see prf_bulk.config.loader).
"""

__all__ = [
    "DEFAULT_MAX_BYTES",
    "DEFAULT_MAX_ROWS",
    "PipelineConfig",
]

DEFAULT_MAX_ROWS = 50_000
DEFAULT_MAX_BYTES = 25 * 1024 * 1024


@dataclass(frozen=True)
class PipelineConfig:
    """Run limits and output settings.

    chunk_size: max data rows per output CSV (300; lowered only in tests)
    max_rows / max_bytes: entry caps checked before any row is classified
    start_seq: default first sequence number (leading zeros set the min width)
    seq_min_width: declared minimum zero-padded width of sequence numbers
    max_workers: >1 classifies rows on a thread pool (order is preserved)
    """
    chunk_size: int = 300
    max_rows: int = DEFAULT_MAX_ROWS
    max_bytes: int = DEFAULT_MAX_BYTES
    start_seq: str = "001"
    seq_min_width: int = 3
    output_directory: str = "./out"
    log_directory: str = "./logs"
    max_workers: int = 1
