#!/usr/bin/env python3
r"""
csv2json/writer.py
JSON side of the conversion. Records are appended to the destination one at
a time, so the array is never held in memory.

Compact:  [{"A":"1","B":"2"},{"A":"3","B":"4"}]
Pretty:   [\n\t{\n\t\t"A": "1",\n\t\t"B": "2"\n\t},\n\t{ ... }\n]
"""

import json
import logging
import os
from pathlib import Path
from typing import Callable, Dict, Iterable, Tuple

from csv2json.errors import OpenFailure, WriteFailure

logger = logging.getLogger(__name__)

JSON_EXTENSION = ".json"
INDENT = "\t"


def json_output_path(source_path) -> Path:
    """Sibling of the source: same directory and base name, .json extension."""
    source_path = Path(source_path)
    return source_path.with_name(source_path.stem + JSON_EXTENSION)


def compact_record(record: Dict[str, str]) -> str:
    return json.dumps(record, ensure_ascii=False, separators=(",", ":"))


def pretty_record(record: Dict[str, str]) -> str:
    # one level under the array: shift every line of the object by one indent
    text = json.dumps(record, ensure_ascii=False, indent=INDENT)
    return INDENT + text.replace("\n", "\n" + INDENT)


def get_json_func(pretty: bool) -> Tuple[Callable[[Dict[str, str]], str], str]:
    """Return (record serialiser, line break) for the chosen output style."""
    if pretty:
        return pretty_record, "\n"
    return compact_record, ""


class JsonRecordWriter:
    def __init__(self, out_path, pretty: bool = False):
        self.out_path = Path(out_path)
        # written beside the destination, renamed over it once complete
        self.tmp_path = self.out_path.with_name(f".{self.out_path.name}.tmp")
        self.pretty = pretty
        self.records_written = 0

    def _open(self):
        try:
            return self.tmp_path.open("w", encoding="utf-8", newline="")
        except OSError as exc:
            raise OpenFailure(f"cannot create {self.out_path}: {exc}") from exc

    def _write_array(self, fh, records: Iterable[Dict[str, str]]):
        json_func, break_line = get_json_func(self.pretty)
        with fh:
            fh.write("[" + break_line)
            first = True
            for record in records:
                if not first:
                    fh.write("," + break_line)
                else:
                    first = False
                fh.write(json_func(record))
                self.records_written += 1
            # no empty line inside an empty pretty array
            fh.write((break_line if not first else "") + "]")

    def consume(self, records: Iterable[Dict[str, str]]) -> int:
        """
        Drain `records` into the destination as a JSON array.

        The array is built in a hidden file next to the destination, opened
        before the first record arrives, and renamed over the destination once
        the iterable is exhausted. If anything fails, including the iterable
        itself raising, the hidden file is removed and the destination keeps
        whatever it held before. Returns the number of records written.
        """
        fh = self._open()
        logger.info("Writing JSON file %s", self.out_path)

        try:
            try:
                self._write_array(fh, records)
                os.replace(self.tmp_path, self.out_path)
            except OSError as exc:
                raise WriteFailure(f"cannot write {self.out_path}: {exc}") from exc
        except Exception:
            if self.tmp_path.exists():
                self.tmp_path.unlink()
            raise

        return self.records_written
