"""
Pytest fixtures for csv2json tests.
"""

import pytest
from pathlib import Path


@pytest.fixture
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def write_csv(tmp_path):
    """Write `content` to tmp_path/<name> and return its path."""
    def _write(content, name="test.csv"):
        path = tmp_path / name
        path.write_bytes(content.encode("utf-8"))
        return path
    return _write


class FailingHandle:
    """File handle whose n-th write raises OSError, like a disk filling up."""
    def __init__(self, fh, fail_on):
        self.fh = fh
        self.fail_on = fail_on
        self.writes = 0

    def write(self, data):
        self.writes += 1
        if self.writes == self.fail_on:
            raise OSError(28, "No space left on device")
        return self.fh.write(data)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.fh.close()
        return False


@pytest.fixture
def failing_writes(monkeypatch):
    """Make JsonRecordWriter's output handle fail on the `fail_on`-th write."""
    from csv2json.writer import JsonRecordWriter

    def _patch(fail_on=2):
        real_open = JsonRecordWriter._open
        monkeypatch.setattr(
            JsonRecordWriter, "_open",
            lambda self: FailingHandle(real_open(self), fail_on),
        )
    return _patch
