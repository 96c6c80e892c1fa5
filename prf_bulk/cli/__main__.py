from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from prf_bulk.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from prf_bulk.csvio.writer import render_message_report
from prf_bulk.logging.init import log_summary, set_debug, setup_logging
from prf_bulk.services.orchestrator import ERRORS_REPORT_NAME, PipelineOrchestrator
from prf_bulk.services.packaging import ZipPackagingSink
from prf_bulk.services.summary import render_summary_line

"""CLI entrypoint.

    python -m prf_bulk.cli payments.csv --start-seq 001

Flow:
- load .env (python-dotenv) so PRF_* overrides reach the config loader
- load config (config/prf_bulk.yml when present, otherwise defaults)
- run the pipeline over the input bytes, packaging into <output_dir>/*.zip
- on a failed run, export errors.csv next to where the archive would be
- print the SUMMARY line

Exit codes: 0 complete without row errors, 2 complete with rejected rows,
1 failed run or fatal setup error.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_PARTIAL = 2


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="PRF payment CSV -> bulk import archive")
    p.add_argument("input", type=Path, help="Input CSV file")
    p.add_argument("--start-seq", default=None, help="First file sequence number (e.g. 001)")
    p.add_argument("--config", type=Path, default=None, help="YAML config path")
    p.add_argument("--output-dir", type=Path, default=None, help="Directory for the archive")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _load_env_file(path: Path) -> None:
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # read sys.argv only when argv is None (tests call main([...]))
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"))
    config_path = args.config
    if config_path is None and DEFAULT_CONFIG_PATH.exists():
        config_path = DEFAULT_CONFIG_PATH
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    output_dir = args.output_dir or Path(cfg.output_directory)
    input_path: Path = args.input
    if not input_path.is_file():
        logger.error(f"input file not found: {input_path}")
        return EXIT_FATAL
    try:
        raw = input_path.read_bytes()
    except OSError as e:
        logger.error(f"cannot read input: {e}")
        return EXIT_FATAL

    logger.info(f"Processing {input_path.name} ({len(raw)} bytes)")
    orchestrator = PipelineOrchestrator(cfg, ZipPackagingSink(output_dir))
    result = orchestrator.process_bytes(raw, args.start_seq)

    log_path = orchestrator.messages.flush(Path(cfg.log_directory))
    if log_path is not None:
        logger.debug(f"messages written to {log_path}")

    if not result.succeeded:
        output_dir.mkdir(parents=True, exist_ok=True)
        report = output_dir / ERRORS_REPORT_NAME
        report.write_text(render_message_report(result.errors), encoding="utf-8", newline="")
        logger.error(f"error report written to {report}")
    else:
        logger.info(f"archive written to {result.artifact}")
        if result.warnings:
            logger.warning(f"{len(result.warnings)} warnings, see warnings.csv in the archive")

    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if not result.succeeded:
        return EXIT_FATAL
    if result.errors:
        return EXIT_PARTIAL
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
