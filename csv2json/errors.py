"""
csv2json/errors.py
Exceptions raised while converting a CSV file to JSON.

Everything derived from ConversionError ends the run. RowShapeMismatch is
the only row-local error: the producer logs it and moves on.
"""

from typing import List


class ConversionError(Exception):
    """Fatal error; the CLI reports it and exits with status 1."""


class MissingArgument(ConversionError):
    pass


class InvalidSeparator(ConversionError):
    pass


class InvalidExtension(ConversionError):
    pass


class FileNotFound(ConversionError):
    pass


class OpenFailure(ConversionError):
    pass


class ReadFailure(ConversionError):
    pass


class EmptySource(ReadFailure):
    pass


class WriteFailure(ConversionError):
    pass


class ChannelAborted(ConversionError):
    """The consumer went away while the producer was still sending."""


class RowShapeMismatch(ValueError):
    def __init__(self, row: List[str], expected: int):
        self.row = row
        self.expected = expected
        super().__init__(
            f"line does not match headers format ({len(row)} fields, expected {expected}), skipping"
        )
