#!/usr/bin/env python3
"""
CLI: CSV -> JSON

Usage:
    python -m csv2json.cli input.csv [--separator=comma|semicolon] [--pretty]

Writes input.json next to input.csv.
"""

import logging
import sys
from typing import Optional, Sequence

from csv2json.errors import ConversionError
from csv2json.options import parse_input_spec
from csv2json.pipeline import run_pipeline
from csv2json.reader import validate_source

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        spec = parse_input_spec(argv)
        setup_logging(spec.verbose)
        logger.debug("input spec: %s", spec)
        validate_source(spec.source_path)

        print(f"Converting {spec.source_path} (separator={spec.separator}, pretty={spec.pretty}) ...")
        result = run_pipeline(spec)
    except ConversionError as exc:
        print(f"error {exc}", file=sys.stderr)
        return 1

    print(f"Completed! Wrote {result.output_path} "
          f"(rows={result.rows_read}, records={result.records_written}, skipped={result.rows_skipped})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
