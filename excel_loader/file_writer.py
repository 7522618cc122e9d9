"""
文件写出器 - 新建 xls/xlsx 工作簿并保存
"""
import datetime as dt
from abc import ABC, abstractmethod
from typing import Any, Iterable, Sequence

import numpy as np
import pandas as pd
import xlwt
from openpyxl import Workbook

from .models import FileFormat
from .config import LoaderConfig
from .constants import XLS_TIME_FORMAT


def to_native(value: Any) -> Any:
    """
    numpy/pandas 值 -> Python 原生值，空值统一为 None
    """
    if isinstance(value, pd.Timestamp):
        return None if pd.isna(value) else value.to_pydatetime()
    if isinstance(value, np.generic):
        value = value.item()
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    return value


class WorkbookWriter(ABC):
    """
    工作簿的统一写出接口
    write_rows 是表格映射层唯一调用的入口，各后端用自身原生方式落盘
    """

    format: FileFormat

    @abstractmethod
    def set_cell(self, row_index: int, col_index: int, value: Any):
        """写单个单元格（0-based）"""

    @abstractmethod
    def write_row(self, row_index: int, values: Sequence[Any]):
        """写整行（0-based）"""

    def write_rows(self, rows: Iterable[Sequence[Any]]):
        for row_index, values in enumerate(rows):
            self.write_row(row_index, values)

    @abstractmethod
    def save(self, file_path: str):
        """保存到磁盘，已存在则覆盖"""


# ========== xls（xlwt）==========
class XlsWorkbookWriter(WorkbookWriter):
    format = FileFormat.xls

    def __init__(self, sheet_name: str, date_format: str, datetime_format: str):
        self.book = xlwt.Workbook(encoding="utf-8")
        self.sheet = self.book.add_sheet(sheet_name)
        self.date_style = xlwt.easyxf(num_format_str=date_format)
        self.datetime_style = xlwt.easyxf(num_format_str=datetime_format)
        self.time_style = xlwt.easyxf(num_format_str=XLS_TIME_FORMAT)

    def _style_for(self, value: Any):
        # datetime 是 date 的子类，先判断
        if isinstance(value, dt.datetime):
            return self.datetime_style
        if isinstance(value, dt.date):
            return self.date_style
        if isinstance(value, dt.time):
            return self.time_style
        return None

    def set_cell(self, row_index: int, col_index: int, value: Any):
        self.sheet.row(row_index).write(col_index, *self._cell_args(value))

    def write_row(self, row_index: int, values: Sequence[Any]):
        # xlwt 原生按行写：取出 Row 对象后整行填充
        row = self.sheet.row(row_index)
        for col_index, value in enumerate(values):
            row.write(col_index, *self._cell_args(value))

    def _cell_args(self, value: Any) -> tuple:
        value = to_native(value)
        style = self._style_for(value)
        return (value,) if style is None else (value, style)

    def save(self, file_path: str):
        self.book.save(file_path)


# ========== xlsx（openpyxl）==========
class XlsxWorkbookWriter(WorkbookWriter):
    format = FileFormat.xlsx

    def __init__(self, sheet_name: str):
        self.wb = Workbook()
        self.ws = self.wb.active
        self.ws.title = sheet_name

    def set_cell(self, row_index: int, col_index: int, value: Any):
        # openpyxl 为 1-based
        value = to_native(value)
        cell = self.ws.cell(row=row_index + 1, column=col_index + 1, value=value)
        # 以 "=" 开头的字符串按文本保存，不当作公式
        if isinstance(value, str) and value.startswith("="):
            cell.data_type = "s"

    def write_row(self, row_index: int, values: Sequence[Any]):
        # openpyxl 按单元格写
        for col_index, value in enumerate(values):
            self.set_cell(row_index, col_index, value)

    def save(self, file_path: str):
        self.wb.save(file_path)
        self.wb.close()


def create_workbook(format: FileFormat, config: LoaderConfig) -> WorkbookWriter:
    """按目标格式新建一个只含一个工作表的工作簿"""
    if format == FileFormat.xlsx:
        return XlsxWorkbookWriter(config.sheet_name)
    return XlsWorkbookWriter(config.sheet_name, config.xls_date_format,
                             config.xls_datetime_format)
