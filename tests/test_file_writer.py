"""
格式适配层（写出）测试
"""
from datetime import date, datetime

import numpy as np
import pandas as pd
import pytest

from excel_loader.config import LoaderConfig
from excel_loader.models import FileFormat
from excel_loader.file_reader import open_workbook
from excel_loader.file_writer import (
    create_workbook,
    to_native,
    XlsWorkbookWriter,
    XlsxWorkbookWriter,
)


@pytest.mark.parametrize("value, expected", [
    (np.int64(7), 7),
    (np.float64(2.5), 2.5),
    (np.bool_(True), True),
    (float("nan"), None),
    (pd.NaT, None),
    (pd.Timestamp("2025-01-05 14:30"), datetime(2025, 1, 5, 14, 30)),
    ("text", "text"),
    (None, None),
])
def test_to_native(value, expected):
    result = to_native(value)
    assert result == expected
    assert type(result) is type(expected)


@pytest.mark.parametrize("fmt, cls", [
    (FileFormat.xls, XlsWorkbookWriter),
    (FileFormat.xlsx, XlsxWorkbookWriter),
])
def test_create_workbook(fmt, cls):
    assert isinstance(create_workbook(fmt, LoaderConfig()), cls)


def test_set_cell_and_write_row(tmp_path, ext):
    fmt = FileFormat.xlsx if ext == ".xlsx" else FileFormat.xls
    path = str(tmp_path / f"cells{ext}")
    writer = create_workbook(fmt, LoaderConfig())
    writer.write_row(0, ["id", "when", "ok"])
    writer.set_cell(1, 0, np.int64(1))
    writer.set_cell(1, 1, date(2025, 1, 5))
    writer.set_cell(1, 2, True)
    writer.save(path)

    with open_workbook(path) as book:
        sheet = book.worksheet(0)
        rows = [sheet.cells_of(r) for r in sheet.rows()]
    assert rows[0] == ["id", "when", "ok"]
    assert rows[1] == [1, datetime(2025, 1, 5), True]


def test_xls_writer_styles_dates():
    writer = XlsWorkbookWriter("Sheet1", "YYYY-MM-DD", "YYYY-MM-DD HH:MM:SS")
    assert writer._style_for(datetime(2025, 1, 5, 1, 2)) is writer.datetime_style
    assert writer._style_for(date(2025, 1, 5)) is writer.date_style
    assert writer._style_for(5) is None
