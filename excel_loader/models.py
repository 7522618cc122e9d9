"""
数据类与枚举定义
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Any
from enum import Enum

# 一行记录：表头键 -> 单元格值（可为 None）
Record = Dict[str, Any]
# 一行原始数据：按列位置排列的值
Row = List[Any]


# ========== 枚举 ==========
class FileFormat(str, Enum):
    xls = "xls"      # 旧版二进制格式
    xlsx = "xlsx"    # zip + XML 格式


class LogLevel(str, Enum):
    INFO = "INFO"
    DEBUG = "DEBUG"
    WARN = "WARN"
    ERROR = "ERROR"


class ErrorCode(str, Enum):
    INVALID_ARGUMENT = "InvalidArgument"
    INVALID_INPUT_SHAPE = "InvalidInputShape"
    UNSUPPORTED_FORMAT = "UnsupportedFormat"
    CORRUPT_FILE = "CorruptFile"
    INDEX_OUT_OF_RANGE = "IndexOutOfRange"


# ========== 日志事件 ==========
@dataclass
class LogEvent:
    ts: str                 # "2025-11-09T14:30:12Z"
    lvl: LogLevel
    event: str              # 例如: "workbook.open","header.detect","encode.saved"
    file: Optional[str] = None
    format: Optional[FileFormat] = None
    sheet: Optional[int] = None
    message: Optional[str] = None
    metrics: Optional[Dict[str, Any]] = None
    error_code: Optional[ErrorCode] = None
