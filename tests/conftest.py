"""
测试夹具 - 用 xlwt/openpyxl 直接生成 xls/xlsx 样例文件
"""
import re
import zipfile
from typing import Any, List

import pytest
import xlwt
from openpyxl import Workbook

# 每个工作表是一组行，None 表示该位置不写单元格
SHEETS: List[List[List[Any]]] = [
    # 0: 主表，第 5 行全空，之后的数据不应被读取
    [
        ["id", "name", "residence"],
        [1, "Tom Clancy", "Maryland", "no header"],
        [2, "Mark Twain", "Missouri"],
        [3, "Patrick O'Brien", None],
        [4, "Umberto Eco", "Italy"],
        [],
        [99, "After Blank", "Nowhere"],
    ],
    # 1: 单列单行
    [
        ["id"],
        [1],
    ],
    # 2: 只有表头
    [
        ["id", "name"],
    ],
    # 3: 表头行为空
    [
        [],
        [None, 5],
    ],
    # 4: 表头中间有空列
    [
        ["id", None, "residence"],
        [1, "x", "y"],
    ],
    # 5: 只含空白字符的行也是结束标记
    [
        ["id", "name"],
        [1, "a"],
        ["   ", None],
        [2, "b"],
    ],
]

SHEET_NAMES = ["authors", "one", "header_only", "blank_header", "gap", "whitespace"]


def write_xls(path: str, sheets=SHEETS):
    wb = xlwt.Workbook(encoding="utf-8")
    for name, rows in zip(SHEET_NAMES, sheets):
        sheet = wb.add_sheet(name)
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                if value is not None:
                    sheet.write(r, c, value)
    wb.save(path)


def write_xlsx(path: str, sheets=SHEETS):
    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in zip(SHEET_NAMES, sheets):
        ws = wb.create_sheet(name)
        for r, row in enumerate(rows, start=1):
            for c, value in enumerate(row, start=1):
                if value is not None:
                    ws.cell(row=r, column=c, value=value)
    wb.save(path)
    wb.close()


def inject_cached_value(path: str, formula: str, value: str):
    """
    openpyxl 写公式时不带计算结果；这里把缓存值写进 sheet1.xml，模拟 Excel 保存过的文件
    """
    with zipfile.ZipFile(path) as zin:
        items = [(info, zin.read(info.filename)) for info in zin.infolist()]

    pattern = r"<f>" + re.escape(formula) + r"</f>(<v\s*/>|<v>\s*</v>)?"
    replaced = 0
    with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as zout:
        for info, data in items:
            if info.filename == "xl/worksheets/sheet1.xml":
                xml, replaced = re.subn(pattern, f"<f>{formula}</f><v>{value}</v>", data.decode("utf-8"))
                data = xml.encode("utf-8")
            zout.writestr(info, data)
    assert replaced == 1


@pytest.fixture(params=[".xls", ".xlsx"])
def ext(request) -> str:
    return request.param


@pytest.fixture
def fixture_path(tmp_path, ext) -> str:
    """两种格式内容相同的样例文件"""
    path = str(tmp_path / f"fixtures{ext}")
    if ext == ".xlsx":
        write_xlsx(path)
    else:
        write_xls(path)
    return path


@pytest.fixture
def formula_xlsx(tmp_path) -> str:
    path = str(tmp_path / "formula.xlsx")
    wb = Workbook()
    ws = wb.active
    ws["A1"] = "id"
    ws["B1"] = "name"
    ws["A2"] = "=1+2"
    ws["B2"] = "Computed"
    wb.save(path)
    wb.close()
    inject_cached_value(path, "1+2", "3")
    return path


@pytest.fixture
def authors():
    return [
        {"id": 1, "name": "Stephen King"},
        {"id": 2, "name": "Tom Clancy"},
        {"id": 3, "name": "Umberto Eco"},
    ]
