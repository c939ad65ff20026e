"""Command-line interface for the Lighthouse batch auditor."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from lighthouse_batch.batch import BatchPaths, run_batch
from lighthouse_batch.constants import CONFIG_FILE, INPUT_CSV, OUTPUT_CSV, REPORT_DIR
from lighthouse_batch.exceptions import LighthouseBatchError
from lighthouse_batch.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Lighthouse batch auditor - audit every URL in a CSV and record the scores"
    )
    parser.add_argument(
        "--config",
        default=CONFIG_FILE,
        help=f"Authentication configuration (default: {CONFIG_FILE})",
    )
    parser.add_argument(
        "--input",
        default=INPUT_CSV,
        help=f"CSV file with a URL column (default: {INPUT_CSV})",
    )
    parser.add_argument(
        "--output",
        default=OUTPUT_CSV,
        help=f"Results CSV to write (default: {OUTPUT_CSV})",
    )
    parser.add_argument(
        "--report-dir",
        default=REPORT_DIR,
        help=f"Directory for HTML reports (default: {REPORT_DIR})",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set logging verbosity (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        help="Write logs to file in addition to console",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    paths = BatchPaths(
        config=Path(args.config),
        input_csv=Path(args.input),
        output_csv=Path(args.output),
        report_dir=Path(args.report_dir),
    )

    try:
        rows = asyncio.run(run_batch(paths))
    except LighthouseBatchError as e:
        logger.error(str(e))
        return 1

    failed = sum(1 for row in rows if row.failed)
    print(f"Results written to {paths.output_csv} ({len(rows)} URLs, {failed} failed)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
