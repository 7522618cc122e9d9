"""
表头解析与行映射测试
"""
import sys

import pytest

from excel_loader.header_parser import HeaderParser, is_blank
from excel_loader.row_mapper import RowMapper, classify_input, records_to_rows
from excel_loader.exceptions import InvalidInputShapeError


@pytest.mark.parametrize("cells, expected", [
    (["id", "name", "residence"], ["id", "name", "residence"]),
    (["id", None, "residence"], ["id"]),
    (["id", "  ", "residence"], ["id"]),
    ([None, "name"], []),
    ([], []),
    ([2024, 1.5, True], ["2024", "1.5", "True"]),
])
def test_parse_headers(cells, expected):
    assert HeaderParser().parse_headers(cells) == expected


def test_header_keys_are_interned():
    key = HeaderParser().parse_headers(["".join(["na", "me"])])[0]
    assert key is sys.intern("name")


@pytest.mark.parametrize("value, blank", [
    (None, True),
    ("", True),
    (" \t", True),
    (0, False),
    (False, False),
    ("x", False),
])
def test_is_blank(value, blank):
    assert is_blank(value) is blank


def test_row_values_pads_and_truncates():
    mapper = RowMapper(["id", "name", "residence"])
    assert mapper.row_values([1, "Tom"]) == [1, "Tom", None]
    assert mapper.row_values([1, "Tom", "MD", "extra"]) == [1, "Tom", "MD"]


def test_end_of_data():
    mapper = RowMapper(["id", "name"])
    assert mapper.is_end_of_data([None, None])
    assert mapper.is_end_of_data(["", "  "])
    assert not mapper.is_end_of_data([None, "Tom"])
    assert RowMapper([]).is_end_of_data([])


def test_to_record_keeps_header_order():
    record = RowMapper(["id", "name"]).to_record([1, None])
    assert list(record.items()) == [("id", 1), ("name", None)]


def test_classify_input():
    assert classify_input([{"id": 1}]) == "records"
    assert classify_input([["id"], [1]]) == "rows"
    assert classify_input([("id",), (1,)]) == "rows"


@pytest.mark.parametrize("data", [[":blah"], [["id"], {"id": 1}], "hi", [], None, 5])
def test_classify_input_rejects(data):
    with pytest.raises(InvalidInputShapeError):
        classify_input(data)


DATA = [
    {"id": 1, "name": "Stephen King"},
    {"id": 2, "name": "Tom Clancy"},
    {"id": 3, "name": "Umberto Eco"},
]


def test_records_to_rows_header_first():
    rows = records_to_rows(DATA)
    assert rows[0] == ["id", "name"]
    assert rows[1] == [1, "Stephen King"]


def test_records_to_rows_with_order():
    assert records_to_rows(DATA, ["name", "id"]) == [
        ["name", "id"],
        ["Stephen King", 1],
        ["Tom Clancy", 2],
        ["Umberto Eco", 3],
    ]


def test_records_to_rows_stringifies_keys_and_fills_missing():
    assert records_to_rows([{1: "a"}, {}], [1, 2]) == [["1", "2"], ["a", None], [None, None]]
