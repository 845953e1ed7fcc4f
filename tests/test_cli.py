"""CLI tests for flatten and verify subcommands."""

import json
from pathlib import Path
import sys

import pytest

from relflat import cli


FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"


def _run_cli(args, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["relflat"] + args)
    return cli.main()


def _write_json(path: Path, data) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def test_flatten_json_stdout(monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["flatten", str(FIXTURES / "books_view.json")], monkeypatch)
    assert excinfo.value.code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["table"] == "book"
    assert [c["label"] for c in payload["columns"]][:3] == ["id", "title", "author.id"]
    assert payload["rows"][1] == [2, "Anonymous Pamphlet", None, None, None, None, "[...]"]


def test_flatten_csv_to_file(monkeypatch, capsys, tmp_path):
    out_path = tmp_path / "books.csv"
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(
            ["flatten", str(FIXTURES / "books_view.json"), "--format", "csv", "--out", str(out_path)],
            monkeypatch,
        )
    assert excinfo.value.code == 0
    lines = out_path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "id,title,author.id,author.name,author.publisher.name,editor_id,reviews"
    assert lines[2] == "2,Anonymous Pamphlet,,,,,[...]"
    out = capsys.readouterr().out
    assert "Columns: 7" in out
    assert "Rows: 2" in out


def test_flatten_rows_override(monkeypatch, capsys, tmp_path):
    rows_path = tmp_path / "rows.json"
    _write_json(rows_path, [{"id": 99, "author": {"id": 1, "name": "Le Guin", "publisher": None}}])
    with pytest.raises(SystemExit):
        _run_cli(
            ["flatten", str(FIXTURES / "books_view.json"), "--rows", str(rows_path)],
            monkeypatch,
        )
    payload = json.loads(capsys.readouterr().out)
    assert payload["rows"] == [[99, None, 1, "Le Guin", None, None, "[...]"]]


def test_flatten_separator(monkeypatch, capsys):
    with pytest.raises(SystemExit):
        _run_cli(
            ["flatten", str(FIXTURES / "books_view.json"), "--separator", "__"],
            monkeypatch,
        )
    payload = json.loads(capsys.readouterr().out)
    assert "author__publisher__name" in [c["label"] for c in payload["columns"]]


def test_flatten_unsupported_shape_fails(monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["flatten", str(FIXTURES / "invalid_array_expanded.json")], monkeypatch)
    assert excinfo.value.code == 1
    assert "Unsupported heading shape" in capsys.readouterr().err


def test_flatten_missing_document_fails(monkeypatch, capsys, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["flatten", str(tmp_path / "missing.json")], monkeypatch)
    assert excinfo.value.code == 1
    assert "View document not found" in capsys.readouterr().err


def test_verify_ok(monkeypatch, capsys):
    _run_cli(["verify", str(FIXTURES / "books_view.json")], monkeypatch)
    out = capsys.readouterr().out
    assert "Status: OK" in out
    assert "Errors: 0" in out


def test_verify_legacy_warns(monkeypatch, capsys):
    _run_cli(["verify", str(FIXTURES / "legacy_headings.json")], monkeypatch)
    out = capsys.readouterr().out
    assert "Status: OK" in out
    assert "Warnings: 2" in out
    assert "LEGACY_FORMAT" in out


def test_verify_invalid_fails_and_writes_report(monkeypatch, capsys, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(
            ["verify", str(FIXTURES / "invalid_array_expanded.json"), "--output-dir", str(tmp_path)],
            monkeypatch,
        )
    assert excinfo.value.code == 1
    report = json.loads((tmp_path / "verify_headings.json").read_text(encoding="utf-8"))
    assert report["ok"] is False
    assert report["errors"][0]["code"] == "UNSUPPORTED_SHAPE"
    assert "Status: FAILED" in capsys.readouterr().out


def test_verify_max_depth(monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["verify", str(FIXTURES / "books_view.json"), "--max-depth", "1"], monkeypatch)
    assert excinfo.value.code == 1
    assert "DEPTH_EXCEEDED" in capsys.readouterr().out


def test_no_command_prints_help(monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli([], monkeypatch)
    assert excinfo.value.code == 1
