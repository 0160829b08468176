from __future__ import annotations

import pytest

from csv_browser.core.cells import Cell, CellKind
from csv_browser.core.exceptions import ParseError
from csv_browser.core.parser import ParseConfig, parse_text

EXAMPLE = 'Name,Qty\nWidget,5\nGizmo,\n"Gadget, Pro",3'


def test_parse_example_scenario():
    parsed = parse_text(EXAMPLE)

    assert parsed.header == ("Name", "Qty")
    assert parsed.records == [
        (Cell.text("Widget"), Cell.integer(5)),
        (Cell.text("Gizmo"), Cell.null()),
        (Cell.text("Gadget, Pro"), Cell.integer(3)),
    ]


def test_header_tokens_are_trimmed_but_not_deduplicated():
    parsed = parse_text(" Name , Name ,Qty\na,b,1\n")

    assert parsed.header == ("Name", "Name", "Qty")


def test_short_rows_are_padded_with_nulls():
    parsed = parse_text("a,b,c\n1\n2,x\n")

    assert parsed.records[0] == (Cell.integer(1), Cell.null(), Cell.null())
    assert parsed.records[1] == (Cell.integer(2), Cell.text("x"), Cell.null())
    assert all(len(r) == 3 for r in parsed.records)


def test_long_row_aborts_whole_parse():
    with pytest.raises(ParseError) as exc_info:
        parse_text("a,b\n1,2\n3,4,5\n")

    issue = exc_info.value.issues[0]
    assert issue.row == 3
    assert "saw 3" in issue.reason


def test_unterminated_quote_is_a_parse_error():
    with pytest.raises(ParseError) as exc_info:
        parse_text('a,b\n"oops,1\n2,3\n')

    assert exc_info.value.issues
    assert str(exc_info.value)


def test_text_after_closing_quote_is_a_parse_error():
    with pytest.raises(ParseError) as exc_info:
        parse_text('Name,Qty\n"Gad"get,3\n')

    (issue,) = exc_info.value.issues
    assert issue.row == 2
    assert "malformed quoted field" in issue.reason


def test_type_inference_is_per_cell():
    text = "v\n42\n-7\n3.5\n1e3\ntrue\nFALSE\nhello\n nan\n007\n"
    parsed = parse_text(text)
    cells = [r[0] for r in parsed.records]

    assert cells == [
        Cell.integer(42),
        Cell.integer(-7),
        Cell.floating(3.5),
        Cell.floating(1000.0),
        Cell.boolean(True),
        Cell.boolean(False),
        Cell.text("hello"),
        Cell.text(" nan"),
        Cell.integer(7),
    ]


def test_mixed_kinds_in_one_column():
    parsed = parse_text("x\n1\nabc\n\n2.5\n", ParseConfig(skip_blank_lines=False))
    kinds = [r[0].kind for r in parsed.records]

    assert kinds == [CellKind.INTEGER, CellKind.TEXT, CellKind.NULL, CellKind.FLOAT]


def test_inference_disabled_keeps_text_but_empty_is_null():
    parsed = parse_text("a,b\n5,\ntrue,x\n", ParseConfig(infer_types=False))

    assert parsed.records == [
        (Cell.text("5"), Cell.null()),
        (Cell.text("true"), Cell.text("x")),
    ]


def test_blank_lines_skipped_by_default():
    parsed = parse_text("a,b\n1,2\n\n3,4\n")

    assert len(parsed.records) == 2


def test_blank_lines_kept_as_null_rows_when_configured():
    parsed = parse_text("a,b\n1,2\n\n3,4\n", ParseConfig(skip_blank_lines=False))

    assert len(parsed.records) == 3
    assert parsed.records[1] == (Cell.null(), Cell.null())


def test_without_header_first_row_is_data():
    parsed = parse_text("1,2\n3,4\n", ParseConfig(has_header=False))

    assert parsed.header == ("Column 1", "Column 2")
    assert parsed.records[0] == (Cell.integer(1), Cell.integer(2))
    assert len(parsed.records) == 2


def test_doubled_quotes_and_embedded_newlines():
    parsed = parse_text('a,b\n"He said ""hi""","line1\nline2"\n')

    assert parsed.records == [(Cell.text('He said "hi"'), Cell.text("line1\nline2"))]


def test_crlf_line_endings():
    parsed = parse_text("a,b\r\n1,2\r\n3,4\r\n")

    assert parsed.header == ("a", "b")
    assert parsed.records[1] == (Cell.integer(3), Cell.integer(4))


def test_custom_delimiter():
    parsed = parse_text("a;b\n1,5;x\n", ParseConfig(delimiter=";"))

    assert parsed.records == [(Cell.text("1,5"), Cell.text("x"))]


def test_chunked_parse_matches_single_pass():
    lines = ["id,name"] + [f"{i},row {i}" for i in range(23)]
    text = "\n".join(lines) + "\n"
    seen = []

    chunked = parse_text(text, ParseConfig(chunk_size=4), progress=seen.append)
    single = parse_text(text, ParseConfig(chunk_size=10_000))

    assert chunked == single
    assert [r[0].value for r in chunked.records] == list(range(23))
    assert seen == sorted(seen)
    assert seen[-1] == len(lines)


def test_empty_input_gives_empty_table():
    assert parse_text("").is_empty
    assert parse_text("\n\n").header == ()


def test_invalid_dialect_is_rejected():
    with pytest.raises(ParseError):
        parse_text("a,b\n", ParseConfig(delimiter=""))

    with pytest.raises(ParseError):
        parse_text("a,b\n", ParseConfig(delimiter='"'))


def test_parse_config_from_dict_requires_real_booleans():
    assert ParseConfig.from_dict({"has_header": False}).has_header is False
    assert ParseConfig.from_dict({}) == ParseConfig()

    with pytest.raises(TypeError):
        ParseConfig.from_dict({"has_header": "false"})
