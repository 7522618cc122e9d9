"""
表头解析器 - 第 0 行作为列名
"""
import sys
from typing import Any, List, Sequence


def is_blank(value: Any) -> bool:
    """None 或去空白后为空串视为空"""
    return value is None or str(value).strip() == ""


class HeaderParser:
    """表头解析器"""

    def parse_headers(self, cells: Sequence[Any]) -> List[str]:
        """
        从左到右读取表头单元格，遇到第一个空单元格即停止
        表格左侧不允许有空列，空列右边的列全部丢弃
        """
        headers = []
        for value in cells:
            if is_blank(value):
                break
            headers.append(self._to_key(value))
        return headers

    def _to_key(self, value: Any) -> str:
        return sys.intern(str(value))
