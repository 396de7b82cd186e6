"""
csv2json/options.py
Command-line options -> InputSpec.
"""

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from csv2json.errors import InvalidSeparator, MissingArgument

SEPARATORS = {
    "comma": ",",
    "semicolon": ";",
}
DEFAULT_SEPARATOR = "comma"
DEFAULT_ENCODING = "utf-8-sig"


@dataclass(frozen=True)
class InputSpec:
    source_path: Path
    separator: str = DEFAULT_SEPARATOR
    pretty: bool = False
    encoding: str = DEFAULT_ENCODING
    verbose: bool = False

    def __post_init__(self):
        if self.separator not in SEPARATORS:
            raise InvalidSeparator(
                f"separator {self.separator!r} not recognized, only comma or semicolon are allowed"
            )

    @property
    def delimiter(self) -> str:
        return SEPARATORS[self.separator]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="csv2json",
        description="Convert CSV -> JSON (array of records, one per row)",
    )
    parser.add_argument("input", nargs="?", help="Input .csv file")
    # no choices= here: an unknown token has to surface as InvalidSeparator
    parser.add_argument(
        "--separator", "--seperator",
        dest="separator",
        default=DEFAULT_SEPARATOR,
        help="Column separator: comma or semicolon (default: comma)",
    )
    parser.add_argument("--pretty", action="store_true", help="Generate indented JSON")
    parser.add_argument(
        "--encoding",
        default=DEFAULT_ENCODING,
        help=f"Encoding of the CSV file (default: {DEFAULT_ENCODING})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def parse_input_spec(argv: Optional[Sequence[str]] = None) -> InputSpec:
    """
    Resolve command-line arguments into an InputSpec.

    Raises MissingArgument when no source path is given and InvalidSeparator
    when --separator is not one of the accepted tokens.
    """
    args = build_parser().parse_args(argv)
    if not args.input:
        raise MissingArgument("a filepath argument is required")

    return InputSpec(
        source_path=Path(args.input),
        separator=args.separator,
        pretty=args.pretty,
        encoding=args.encoding,
        verbose=args.verbose,
    )
