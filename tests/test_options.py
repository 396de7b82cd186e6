# tests/test_options.py
from pathlib import Path

import pytest

from csv2json.errors import InvalidSeparator, MissingArgument
from csv2json.options import InputSpec, parse_input_spec


@pytest.mark.parametrize("argv, separator, pretty", [
    (["test.csv"], "comma", False),
    (["--separator=semicolon", "test.csv"], "semicolon", False),
    (["--pretty", "test.csv"], "comma", True),
    (["--pretty", "--separator=semicolon", "test.csv"], "semicolon", True),
    (["test.csv", "--separator", "comma", "--pretty"], "comma", True),
    # spelling used by older releases
    (["--seperator=semicolon", "test.csv"], "semicolon", False),
])
def test_parse_input_spec(argv, separator, pretty):
    spec = parse_input_spec(argv)
    assert spec.source_path == Path("test.csv")
    assert spec.separator == separator
    assert spec.pretty is pretty
    assert spec.encoding == "utf-8-sig"
    assert spec.verbose is False


def test_delimiter_follows_separator():
    assert parse_input_spec(["test.csv"]).delimiter == ","
    assert parse_input_spec(["--separator=semicolon", "test.csv"]).delimiter == ";"


@pytest.mark.parametrize("argv", [[], ["--pretty"], ["--separator=semicolon"]])
def test_missing_path(argv):
    with pytest.raises(MissingArgument):
        parse_input_spec(argv)


@pytest.mark.parametrize("token", ["pipe", "tab", "COMMA", ";", ""])
def test_invalid_separator(token):
    with pytest.raises(InvalidSeparator):
        parse_input_spec([f"--separator={token}", "test.csv"])


def test_input_spec_rejects_unknown_separator():
    with pytest.raises(InvalidSeparator):
        InputSpec(Path("test.csv"), separator="pipe")


def test_input_spec_is_frozen():
    spec = InputSpec(Path("test.csv"))
    with pytest.raises(AttributeError):
        spec.pretty = True
