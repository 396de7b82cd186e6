#!/usr/bin/env python3
"""
csv2json/reader.py
CSV side of the conversion: source validation, row -> record mapping and the
row producer that feeds records into the handoff channel.
"""

import csv
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Sequence

from csv2json.errors import (
    EmptySource,
    FileNotFound,
    InvalidExtension,
    OpenFailure,
    ReadFailure,
    RowShapeMismatch,
)
from csv2json.options import InputSpec

logger = logging.getLogger(__name__)

CSV_EXTENSION = ".csv"

Record = Dict[str, str]


def validate_source(path) -> Path:
    """Check the extension and that the file exists. Content is not read here."""
    path = Path(path)
    # a bare ".csv" name has no suffix and is rejected
    if path.suffix != CSV_EXTENSION:
        raise InvalidExtension(f"file {path} is not CSV")
    if not path.exists():
        raise FileNotFound(f"file {path} does not exist")
    return path


def map_record(headers: Sequence[str], row: Sequence[str]) -> Record:
    if len(row) != len(headers):
        raise RowShapeMismatch(list(row), len(headers))
    record = {}
    # duplicate header names: last one wins
    for name, value in zip(headers, row):
        record[name] = value
    return record


class CsvRowProducer:
    def __init__(self, spec: InputSpec):
        self.path = Path(spec.source_path)
        self.delimiter = spec.delimiter
        self.encoding = spec.encoding
        self.headers: List[str] = []
        self.rows_read = 0
        self.rows_skipped = 0

    def _open(self):
        try:
            return self.path.open("r", newline="", encoding=self.encoding)
        except (OSError, LookupError) as exc:
            raise OpenFailure(f"cannot open {self.path}: {exc}") from exc

    @staticmethod
    def _next_row(rdr) -> List[str]:
        # blank lines are not rows
        for row in rdr:
            if row:
                return row
        raise StopIteration

    def records(self) -> Iterator[Record]:
        """Yield one record per well-shaped data row, in file order."""
        with self._open() as fh:
            rdr = csv.reader(fh, delimiter=self.delimiter, strict=True)
            try:
                try:
                    self.headers = self._next_row(rdr)
                except StopIteration:
                    raise EmptySource(f"file {self.path} is empty, no header line") from None
                logger.debug("headers: %s", self.headers)

                for row in rdr:
                    if not row:
                        continue
                    self.rows_read += 1
                    try:
                        record = map_record(self.headers, row)
                    except RowShapeMismatch as exc:
                        self.rows_skipped += 1
                        logger.warning("Line %d: %s, Error %s", rdr.line_num, exc.row, exc)
                        continue
                    yield record
            except csv.Error as exc:
                raise ReadFailure(f"{self.path}, line {rdr.line_num}: {exc}") from exc
            except UnicodeDecodeError as exc:
                raise ReadFailure(f"{self.path}: cannot decode as {self.encoding}: {exc}") from exc
            except OSError as exc:
                raise ReadFailure(f"{self.path}: {exc}") from exc

    def produce(self, channel) -> int:
        """
        Push every record onto the channel, blocking on each send until the
        consumer takes it. A clean end of file closes the channel, any error
        fails it.
        """
        sent = 0
        try:
            for record in self.records():
                channel.send(record)
                sent += 1
        except Exception:
            channel.fail()
            raise
        channel.close()
        logger.debug("producer done: %d sent, %d skipped", sent, self.rows_skipped)
        return sent
