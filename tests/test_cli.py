import json
import logging

import pytest

from jsonl_tools import __version__
from jsonl_tools.cli import build_parser, build_reader, main
from jsonl_tools.log import resolve_level
from jsonl_tools.readers import FileJsonlReader, HttpJsonlReader, JsonArrayFileReader, MemoryJsonlReader


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_version(capsys) -> None:
    assert main(["--version"]) == 0
    assert f"jsonl-tools version {__version__}" in capsys.readouterr().out


def test_no_selector_runs_no_analysis(capsys) -> None:
    assert main([]) == 1
    assert "unique JSON keys" not in capsys.readouterr().out


def test_profile_jsonl_file(tmp_path, capsys) -> None:
    path = tmp_path / "events.jsonl"
    path.write_text('{"a": 1}\n\n{"a": 1, "b": 2}\n', encoding="utf-8")
    assert main(["--filename", str(path)]) == 0
    out = capsys.readouterr().out
    assert "Found 2 unique JSON keys in events.jsonl" in out
    assert "1. (a) - 1 occurrence" in out


def test_json_array_file(tmp_path, capsys) -> None:
    path = tmp_path / "items.json"
    path.write_text(json.dumps([{"x": 1}, {"x": 2, "y": [1, 2]}]), encoding="utf-8")
    assert main(["--filename", str(path), "keys"]) == 0
    assert "Found 3 unique JSON keys in items.json" in capsys.readouterr().out


def test_memory_combos(capsys) -> None:
    assert main(["--memory", "mixed", "combos", "-n", "1"]) == 0
    out = capsys.readouterr().out
    assert "Top 1 Most Frequent JSON Key combinations in mixed" in out
    assert "1. () - 1 occurrence" in out


def test_memory_record(capsys) -> None:
    assert main(["--memory", "users", "record", "0"]) == 0
    assert "Analysis of Record 0:" in capsys.readouterr().out


def test_load_failures_exit_nonzero(tmp_path, capsys) -> None:
    assert main(["--filename", str(tmp_path / "missing.jsonl")]) == 1
    assert "Error" in capsys.readouterr().out

    bad = tmp_path / "bad.jsonl"
    bad.write_text('{"a": 1}\n{oops\n', encoding="utf-8")
    assert main(["--filename", str(bad), "freqs"]) == 1

    assert main(["--url", "https://example.com/data.jsonl"]) == 1
    assert main(["--memory", "no-such-sample"]) == 1


def test_bad_log_level() -> None:
    assert main(["--log-level", "chatty", "--memory", "users"]) == 2


def test_selectors_are_exclusive() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--filename", "a.jsonl", "--memory", "users"])


def test_build_reader_variants() -> None:
    parser = build_parser()
    assert isinstance(build_reader(parser.parse_args(["--filename", "a.jsonl"])), FileJsonlReader)
    assert isinstance(build_reader(parser.parse_args(["--filename", "a.json"])), JsonArrayFileReader)
    assert isinstance(
        build_reader(parser.parse_args(["--filename", "a.json", "--format", "lines"])), FileJsonlReader
    )
    assert isinstance(build_reader(parser.parse_args(["--url", "http://x/y"])), HttpJsonlReader)
    assert isinstance(build_reader(parser.parse_args(["--memory", "events"])), MemoryJsonlReader)
    assert build_reader(parser.parse_args([])) is None


def test_resolve_level(monkeypatch) -> None:
    monkeypatch.delenv("JSONL_TOOLS_LOG_LEVEL", raising=False)
    assert resolve_level() == logging.INFO
    monkeypatch.setenv("JSONL_TOOLS_LOG_LEVEL", "debug")
    assert resolve_level() == logging.DEBUG
    assert resolve_level("warning") == logging.WARNING
    assert resolve_level(logging.ERROR) == logging.ERROR
    with pytest.raises(ValueError):
        resolve_level("chatty")


def test_top_must_be_positive() -> None:
    parser = build_parser()
    for value in ("0", "-1", "many"):
        with pytest.raises(SystemExit):
            parser.parse_args(["--memory", "users", "combos", "-n", value])
    assert parser.parse_args(["profile", "--top", "3"]).top == 3


def test_file_is_selected_by_option_not_positional(tmp_path) -> None:
    path = tmp_path / "d.jsonl"
    path.write_text('{"a": 1}\n', encoding="utf-8")
    with pytest.raises(SystemExit):
        build_parser().parse_args([str(path)])
    assert build_parser().parse_args(["--filename", str(path)]).filename == str(path)
