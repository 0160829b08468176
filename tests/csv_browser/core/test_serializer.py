from __future__ import annotations

from csv_browser.core.cells import Cell
from csv_browser.core.parser import ParseConfig, parse_text
from csv_browser.core.serializer import serialize


def test_quotes_fields_with_delimiter():
    text = serialize(("Name", "Qty"), [(Cell.text("Gadget, Pro"), Cell.integer(3))])

    assert text == 'Name,Qty\r\n"Gadget, Pro",3\r\n'


def test_escapes_quotes_and_line_breaks():
    text = serialize(("a", "b"), [(Cell.text('say "hi"'), Cell.text("two\nlines"))])

    assert text == 'a,b\r\n"say ""hi""","two\nlines"\r\n'


def test_nulls_and_typed_values():
    text = serialize(
        ("i", "f", "b", "n"),
        [(Cell.integer(7), Cell.floating(2.5), Cell.boolean(False), Cell.null())],
    )

    assert text.splitlines()[1] == "7,2.5,false,"


def test_column_subset():
    records = [(Cell.text("x"), Cell.integer(1), Cell.text("y"))]
    text = serialize(("a", "b", "c"), records, columns=[2, 0])

    assert text == "c,a\r\ny,x\r\n"


def test_header_only_when_no_records():
    assert serialize(("a", "b"), []) == "a,b\r\n"


def test_no_columns_gives_empty_text():
    assert serialize((), []) == ""


def test_round_trip():
    header = ("Name", "Qty", "Price", "In stock", "Notes")
    records = [
        (Cell.text("Widget"), Cell.integer(5), Cell.floating(9.99), Cell.boolean(True), Cell.null()),
        (Cell.text("Gadget, Pro"), Cell.null(), Cell.floating(1000.0), Cell.boolean(False), Cell.text('the "best"')),
        (Cell.text("Multi\nline"), Cell.integer(-3), Cell.floating(1e-07), Cell.null(), Cell.text("a;b")),
    ]

    parsed = parse_text(serialize(header, records))

    assert parsed.header == header
    assert parsed.records == records


def test_round_trip_with_other_delimiter():
    config = ParseConfig(delimiter=";")
    header = ("a", "b")
    records = [(Cell.text("x;y"), Cell.integer(1)), (Cell.text("1,5"), Cell.integer(2))]

    text = serialize(header, records, delimiter=";")

    assert parse_text(text, config).records == records
