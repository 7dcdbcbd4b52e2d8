import pytest

from partyroulette.exceptions import FileLoadException
from partyroulette.io import load_roster_file, parse_roster_csv


def _pairs(participants):
    return [(p.attribute, p.name) for p in participants]


def test_header_row_is_skipped():
    raw = "Attribute,Name\nSales,Alice\nDesign,Bob\n"
    assert _pairs(parse_roster_csv(raw)) == [("Sales", "Alice"), ("Design", "Bob")]


def test_header_detection_ignores_case_and_spacing():
    raw = "  ATTRIBUTE , name\nSales,Alice"
    assert _pairs(parse_roster_csv(raw)) == [("Sales", "Alice")]


def test_first_row_is_kept_without_header():
    raw = "Sales,Alice\nDesign,Bob"
    assert len(parse_roster_csv(raw)) == 2


def test_quotes_and_whitespace_are_stripped():
    raw = ' "Sales" , "Alice" \n"Sales, EU",Bob'
    assert _pairs(parse_roster_csv(raw)) == [("Sales", "Alice"), ("Sales, EU", "Bob")]


def test_incomplete_and_blank_lines_are_skipped():
    raw = "Sales,Alice\n\n   \nLonely\n,Nameless\nDesign,\nDesign,Bob,extra"
    assert _pairs(parse_roster_csv(raw)) == [("Sales", "Alice"), ("Design", "Bob")]


def test_byte_order_mark_is_ignored():
    raw = "\ufeffattribute,name\nSales,Alice"
    assert _pairs(parse_roster_csv(raw)) == [("Sales", "Alice")]


def test_windows_line_endings():
    raw = "Sales,Alice\r\nDesign,Bob\r\n"
    assert _pairs(parse_roster_csv(raw)) == [("Sales", "Alice"), ("Design", "Bob")]


def test_empty_input_gives_no_participants():
    assert parse_roster_csv("") == []
    assert parse_roster_csv("attribute,name\n") == []


def test_every_row_gets_a_fresh_id():
    participants = parse_roster_csv("Sales,Alice\nSales,Alice")
    assert participants[0].id != participants[1].id


def test_load_roster_file(tmp_path):
    path = tmp_path / "roster.csv"
    path.write_text("attribute,name\nSales,Alice\n", encoding="utf-8-sig")

    assert _pairs(load_roster_file(path)) == [("Sales", "Alice")]


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileLoadException):
        load_roster_file(tmp_path / "missing.csv")


def test_undecodable_file_raises(tmp_path):
    path = tmp_path / "roster.csv"
    path.write_bytes(b"Sales,\xff\xfe\xfa")

    with pytest.raises(FileLoadException):
        load_roster_file(path)
