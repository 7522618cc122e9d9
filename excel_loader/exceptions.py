"""
异常与错误模型
"""
from typing import Optional
from .models import ErrorCode
from .constants import INVALID_INPUT_SHAPE_MESSAGE


class LoaderError(Exception):
    """异常基类"""
    def __init__(self, code: ErrorCode, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.hint = hint


class InvalidArgumentError(LoaderError):
    def __init__(self, message: str = "Invalid argument", hint: Optional[str] = None):
        super().__init__(ErrorCode.INVALID_ARGUMENT, message, hint)


class InvalidInputShapeError(LoaderError):
    def __init__(self, message: str = INVALID_INPUT_SHAPE_MESSAGE, hint: Optional[str] = None):
        super().__init__(ErrorCode.INVALID_INPUT_SHAPE, message, hint)


class UnsupportedFormatError(LoaderError):
    def __init__(self, message: str = "Unsupported file format", hint: Optional[str] = None):
        super().__init__(ErrorCode.UNSUPPORTED_FORMAT, message, hint)


class CorruptFileError(LoaderError):
    def __init__(self, message: str = "Corrupt spreadsheet file", hint: Optional[str] = None):
        super().__init__(ErrorCode.CORRUPT_FILE, message, hint)


class SheetIndexError(LoaderError, IndexError):
    def __init__(self, message: str = "Worksheet index out of range", hint: Optional[str] = None):
        super().__init__(ErrorCode.INDEX_OUT_OF_RANGE, message, hint)
