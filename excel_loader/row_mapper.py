"""
行映射器 - 行 <-> 记录
"""
from collections.abc import Mapping
from typing import Any, Hashable, List, Optional, Sequence

from .models import Record, Row
from .header_parser import is_blank
from .exceptions import InvalidInputShapeError


class RowMapper:
    """
    在表头键和行值之间做双向映射
    """

    def __init__(self, headers: Sequence[str]):
        self.headers = list(headers)

    def row_values(self, cells: Sequence[Any]) -> List[Any]:
        """
        按表头位置取值：定长列表预置 None，再按列填入
        超出表头长度的单元格被忽略
        """
        values = [None] * len(self.headers)
        for i, value in enumerate(cells[:len(self.headers)]):
            values[i] = value
        return values

    def is_end_of_data(self, values: Sequence[Any]) -> bool:
        """没有表头，或整行都是空值，即视为数据结束"""
        return not values or all(is_blank(v) for v in values)

    def to_record(self, values: Sequence[Any]) -> Record:
        return dict(zip(self.headers, values))


def classify_input(data: Any) -> str:
    """
    判断写出输入的形态：全部是记录返回 "records"，全部是行返回 "rows"
    """
    if not isinstance(data, (list, tuple)) or not data:
        raise InvalidInputShapeError()

    if all(isinstance(item, Mapping) for item in data):
        return "records"
    if all(isinstance(item, (list, tuple)) for item in data):
        return "rows"
    raise InvalidInputShapeError()


def records_to_rows(records: Sequence[Mapping],
                    column_order: Optional[Sequence[Hashable]] = None) -> List[Row]:
    """
    记录列表 -> 行列表，第一行为字符串化的键
    未给出列顺序时使用第一条记录的键顺序；记录缺少的键写 None
    """
    keys = list(column_order) if column_order is not None else list(records[0].keys())
    rows = [[str(key) for key in keys]]
    for record in records:
        rows.append([record.get(key) for key in keys])
    return rows
