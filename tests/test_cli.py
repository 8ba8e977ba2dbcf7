"""Tests for the json-pretty command line."""

import io

import pytest

from json_pretty.repl import build_parser, main


def test_format_file(tmp_path, capsys):
    path = tmp_path / "in.json"
    path.write_text('{"b": 1, "a": [true]}', encoding="utf-8")
    assert main([str(path)]) == 0
    assert capsys.readouterr().out == '{\n  "b": 1,\n  "a": [\n    true\n  ]\n}\n'

def test_format_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("[1, 2]"))
    assert main([]) == 0
    assert capsys.readouterr().out == "[\n  1,\n  2\n]\n"

def test_parse_error_exit_code(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("{oops"))
    assert main(["-"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("error: ")

def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.json")]) == 1
    assert "error: Cannot read" in capsys.readouterr().err

def test_output_file(tmp_path):
    src = tmp_path / "in.json"
    dst = tmp_path / "out.json"
    src.write_text("[]", encoding="utf-8")
    assert main([str(src), "-o", str(dst)]) == 0
    assert dst.read_text(encoding="utf-8") == "[\n]\n"

def test_indent_and_escape(tmp_path, capsys):
    path = tmp_path / "in.json"
    path.write_text(r'{"q": "a\"b"}', encoding="utf-8")
    assert main([str(path), "--indent", "4", "--escape"]) == 0
    assert capsys.readouterr().out == '{\n    "q": "a\\"b"\n}\n'

def test_nan_rejected_then_allowed(tmp_path, capsys):
    path = tmp_path / "in.json"
    path.write_text("[Infinity]", encoding="utf-8")
    assert main([str(path)]) == 1
    assert main([str(path), "--allow-nan"]) == 0
    assert capsys.readouterr().out == "[\n  Infinity\n]\n"

def test_negative_indent_is_usage_error():
    with pytest.raises(SystemExit) as info:
        main(["--indent", "-1"])
    assert info.value.code == 2

def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.file == "-"
    assert args.indent == 2
    assert not args.escape
    assert not args.interactive

def test_deeply_nested_file(tmp_path, capsys):
    path = tmp_path / "deep.json"
    path.write_text("[" * 600 + "]" * 600, encoding="utf-8")
    assert main([str(path)]) == 0
    assert capsys.readouterr().out.endswith("  ]\n]\n")

def test_huge_integer_exit_code(tmp_path, capsys):
    path = tmp_path / "big.json"
    path.write_text("1" * 5000, encoding="utf-8")
    assert main([str(path)]) == 1
    assert capsys.readouterr().err.startswith("error: ")
