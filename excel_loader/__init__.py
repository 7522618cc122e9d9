"""
Excel Loader - 表格文件（xls/xlsx）与记录列表互转
"""

__version__ = "1.0.0"

from .loader import (
    headers,
    decode_rows,
    to_array,
    iter_rows,
    to_dataframe,
    encode,
    from_dataframe,
)
from .row_mapper import records_to_rows
from .config import LoaderConfig, load_config, random_file_name
from .models import FileFormat, LogLevel, ErrorCode, Record, Row
from .exceptions import (
    LoaderError,
    InvalidArgumentError,
    InvalidInputShapeError,
    UnsupportedFormatError,
    CorruptFileError,
    SheetIndexError,
)

__all__ = [
    "headers",
    "decode_rows",
    "to_array",
    "iter_rows",
    "to_dataframe",
    "encode",
    "from_dataframe",
    "records_to_rows",
    "LoaderConfig",
    "load_config",
    "random_file_name",
    "FileFormat",
    "LogLevel",
    "ErrorCode",
    "Record",
    "Row",
    "LoaderError",
    "InvalidArgumentError",
    "InvalidInputShapeError",
    "UnsupportedFormatError",
    "CorruptFileError",
    "SheetIndexError",
]
