"""
文件读取器 - 支持 xls/xlsx
"""
import zipfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterator, List, Optional

import xlrd
from xlrd.compdoc import CompDocError
from xlrd.biffh import error_text_from_code
from xlrd.xldate import XLDateError, xldate_as_datetime
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from .models import FileFormat
from .constants import XLSX_EXTENSION
from .exceptions import UnsupportedFormatError, CorruptFileError, SheetIndexError


def detect_format(file_path: str) -> FileFormat:
    """检测文件格式：只认 .xlsx，其余一律按旧版 xls 处理"""
    ext = Path(file_path).suffix.lower()
    if ext == XLSX_EXTENSION:
        return FileFormat.xlsx
    return FileFormat.xls


class SheetReader(ABC):
    """单个工作表的统一读取接口"""

    def __init__(self, index: int):
        self.index = index

    @abstractmethod
    def rows(self) -> Iterator[Any]:
        """按文件顺序逐行产出（包含第 0 行表头）"""

    @abstractmethod
    def cells_of(self, row: Optional[Any]) -> List[Any]:
        """把一行规整为值列表；行不存在时返回空列表"""


class WorkbookReader(ABC):
    """工作簿的统一读取接口，按扩展名选择后端"""

    format: FileFormat

    def __init__(self, file_path: str):
        self.file_path = file_path

    @property
    @abstractmethod
    def sheet_count(self) -> int:
        ...

    @abstractmethod
    def _sheet(self, index: int) -> SheetReader:
        ...

    def worksheet(self, index: int) -> SheetReader:
        if index < 0 or index >= self.sheet_count:
            raise SheetIndexError(
                f"Worksheet index {index} out of range",
                hint=f"{Path(self.file_path).name} has {self.sheet_count} worksheet(s)",
            )
        return self._sheet(index)

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


# ========== xls（xlrd）==========
class XlsSheetReader(SheetReader):

    def __init__(self, book, sheet, index: int, coerce_integral_floats: bool = True):
        super().__init__(index)
        self.book = book
        self.sheet = sheet
        self.coerce_integral_floats = coerce_integral_floats

    def rows(self) -> Iterator[Any]:
        for row_idx in range(self.sheet.nrows):
            yield self.sheet.row(row_idx)

    def cells_of(self, row: Optional[Any]) -> List[Any]:
        if row is None:
            return []
        return [self._cell_value(cell) for cell in row]

    def _cell_value(self, cell) -> Any:
        if cell is None:
            return None
        return xls_cell_value(cell.ctype, cell.value, self.book.datemode,
                              self.coerce_integral_floats)


def xls_cell_value(cell_type: int, value: Any, datemode: int,
                   coerce_integral_floats: bool = True) -> Any:
    """
    xlrd 单元格类型 -> Python 值
    公式单元格在 xls 中保存的是计算结果，xlrd 直接给出
    """
    if cell_type in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    if cell_type == xlrd.XL_CELL_BOOLEAN:
        return bool(value)
    if cell_type == xlrd.XL_CELL_ERROR:
        return error_text_from_code.get(value, "#ERROR")
    if cell_type == xlrd.XL_CELL_DATE:
        try:
            return xldate_as_datetime(value, datemode)
        except XLDateError:
            # 超出日期范围，保留原始序列号
            return value
    if cell_type == xlrd.XL_CELL_NUMBER and coerce_integral_floats:
        if isinstance(value, float) and value.is_integer():
            return int(value)
    return value


class XlsWorkbookReader(WorkbookReader):
    format = FileFormat.xls

    def __init__(self, file_path: str, coerce_integral_floats: bool = True):
        super().__init__(file_path)
        self.coerce_integral_floats = coerce_integral_floats
        try:
            self.book = xlrd.open_workbook(file_path, ragged_rows=True)
        except CompDocError as e:
            raise CorruptFileError(f"Failed to read xls file: {e}") from e
        except xlrd.XLRDError as e:
            raise UnsupportedFormatError(f"Failed to read xls file: {e}") from e

    @property
    def sheet_count(self) -> int:
        return self.book.nsheets

    def _sheet(self, index: int) -> SheetReader:
        return XlsSheetReader(self.book, self.book.sheet_by_index(index), index,
                              self.coerce_integral_floats)

    def close(self):
        self.book.release_resources()


# ========== xlsx（openpyxl）==========
class XlsxSheetReader(SheetReader):

    def __init__(self, ws, index: int):
        super().__init__(index)
        self.ws = ws

    def rows(self) -> Iterator[Any]:
        # values_only=True 时，row 直接是值元组
        return self.ws.iter_rows(values_only=True)

    def cells_of(self, row: Optional[Any]) -> List[Any]:
        if row is None:
            return []
        # openpyxl 按最大列补 None，去掉行尾补位与 xls 保持一致
        cells = list(row)
        while cells and cells[-1] is None:
            cells.pop()
        return cells


class XlsxWorkbookReader(WorkbookReader):
    format = FileFormat.xlsx

    def __init__(self, file_path: str):
        super().__init__(file_path)
        try:
            # data_only=True：公式单元格读取缓存的计算结果
            self.wb = load_workbook(file_path, data_only=True)
        except InvalidFileException as e:
            raise UnsupportedFormatError(f"Failed to read xlsx file: {e}") from e
        except (zipfile.BadZipFile, KeyError) as e:
            raise CorruptFileError(f"Failed to read xlsx file: {e}") from e

    @property
    def sheet_count(self) -> int:
        return len(self.wb.worksheets)

    def _sheet(self, index: int) -> SheetReader:
        return XlsxSheetReader(self.wb.worksheets[index], index)

    def close(self):
        self.wb.close()


def open_workbook(file_path: str, coerce_integral_floats: bool = True) -> WorkbookReader:
    """
    统一入口：按扩展名打开工作簿
    文件不存在时 FileNotFoundError 原样抛出
    """
    if detect_format(file_path) == FileFormat.xlsx:
        return XlsxWorkbookReader(file_path)
    return XlsWorkbookReader(file_path, coerce_integral_floats)
