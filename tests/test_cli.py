import pytest

from caelis.cli import format_error, main
from caelis.lexer import LexError, tokenize
from caelis.parser import ParseError, parse


def write_source(tmp_path, text):
    path = tmp_path / "sample.cae"
    path.write_text(text, encoding="utf-8")
    return path


def test_main_prints_definitions(tmp_path, capsys):
    path = write_source(tmp_path, "a = f x;\nPoint | x :f64;\n")
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert "ValueDef" in out
    assert "TypeDef" in out


def test_main_reports_lex_error(tmp_path, capsys):
    text = "x = ?"
    path = write_source(tmp_path, text)
    assert main([str(path)]) == 1
    with pytest.raises(LexError) as info:
        tokenize(text)
    err = capsys.readouterr().err
    assert format_error(str(path), text, info.value) in err


def test_main_reports_parse_error(tmp_path, capsys):
    text = "x = ;"
    path = write_source(tmp_path, text)
    assert main([str(path)]) == 1
    with pytest.raises(ParseError) as info:
        parse(tokenize(text))
    captured = capsys.readouterr()
    assert format_error(str(path), text, info.value) in captured.err
    assert captured.out == ""


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent.cae")]) == 1
    assert "absent.cae" in capsys.readouterr().err


def test_main_requires_argument():
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2


def test_format_error_points_at_column():
    text = "x = ?"
    with pytest.raises(LexError) as info:
        tokenize(text)
    report = format_error("f.cae", text, info.value)
    assert "f.cae:1:5" in report
    assert str(info.value) in report


def test_format_error_caret_covers_token():
    text = "a = 1;\nx = ;"
    with pytest.raises(ParseError) as info:
        parse(tokenize(text))
    error = info.value
    report = format_error("f.cae", text, error)
    caret_line = next(line for line in report.splitlines() if "^" in line)
    assert caret_line.count("^") == error.span.end - error.span.start
    assert "x = ;" in report
    assert error.reason in caret_line


def test_format_error_at_end_of_input():
    text = "x = 1"
    with pytest.raises(ParseError) as info:
        parse(tokenize(text))
    report = format_error("f.cae", text, info.value)
    caret_line = next(line for line in report.splitlines() if "^" in line)
    assert caret_line.count("^") == 1
    assert "end of input" in report


def test_format_error_lists_contexts():
    text = "x = if a then b;"
    with pytest.raises(ParseError) as info:
        parse(tokenize(text))
    report = format_error("f.cae", text, info.value)
    assert "while parsing this branching expression" in report