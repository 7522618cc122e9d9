"""
主入口 - 表格文件与记录列表互转
"""
from pathlib import Path
from typing import Any, Callable, Hashable, Iterator, List, Optional, Sequence

import pandas as pd

from .config import LoaderConfig
from .file_reader import open_workbook, detect_format, SheetReader
from .file_writer import create_workbook
from .header_parser import HeaderParser
from .row_mapper import RowMapper, classify_input, records_to_rows
from .logger import LoaderLogger
from .models import LogLevel, Record, Row
from .exceptions import LoaderError


def _logger_for(config: LoaderConfig) -> LoaderLogger:
    return LoaderLogger(config.log_dir, config.log_level)


def _log_failure(logger: LoaderLogger, e: Exception):
    logger.log("error", level=LogLevel.ERROR, message=str(e),
               error_code=e.code if isinstance(e, LoaderError) else None)


def _read_headers(sheet: SheetReader, rows: Iterator[Any]) -> List[str]:
    """从行迭代器取出第 0 行并解析表头（迭代器随之前进一行）"""
    return HeaderParser().parse_headers(sheet.cells_of(next(rows, None)))


def headers(file_path: str, index: int = 0, config: Optional[LoaderConfig] = None) -> List[str]:
    """
    返回工作表第 0 行的表头键列表（按列顺序）
    """
    config = config or LoaderConfig()
    logger = _logger_for(config)
    try:
        with open_workbook(file_path, config.coerce_integral_floats) as book:
            logger.log("workbook.open", file=Path(file_path).name, format=book.format, sheet=index)
            sheet = book.worksheet(index)
            keys = _read_headers(sheet, iter(sheet.rows()))
        logger.log("header.detect", file=Path(file_path).name, sheet=index,
                   metrics={"columns": len(keys)})
        return keys
    except Exception as e:
        _log_failure(logger, e)
        raise
    finally:
        logger.close()


def _decode(file_path: str, index: int, config: LoaderConfig,
            logger: LoaderLogger) -> Iterator[Record]:
    with open_workbook(file_path, config.coerce_integral_floats) as book:
        logger.log("workbook.open", file=Path(file_path).name, format=book.format, sheet=index)
        sheet = book.worksheet(index)
        rows = iter(sheet.rows())
        mapper = RowMapper(_read_headers(sheet, rows))
        logger.log("header.detect", file=Path(file_path).name, sheet=index,
                   metrics={"columns": len(mapper.headers)})

        count = 0
        for row in rows:
            values = mapper.row_values(sheet.cells_of(row))
            # 第一条全空行即数据结束，后续行不再读取
            if mapper.is_end_of_data(values):
                break
            count += 1
            yield mapper.to_record(values)

        logger.log("decode.end", file=Path(file_path).name, sheet=index,
                   metrics={"records": count})


def decode_rows(file_path: str, index: int = 0,
                config: Optional[LoaderConfig] = None) -> Iterator[Record]:
    """
    惰性产出数据行记录；每次调用都会重新打开文件
    跳过表头行，遇到第一条全空行停止；每条记录都包含全部表头键
    """
    config = config or LoaderConfig()
    logger = _logger_for(config)
    try:
        yield from _decode(file_path, index, config, logger)
    except Exception as e:
        _log_failure(logger, e)
        raise
    finally:
        logger.close()


def to_array(file_path: str, index: int = 0,
             config: Optional[LoaderConfig] = None) -> List[Record]:
    """
    把表格文件读成记录列表

    Examples:
        example.xls:
        | id | name        | residence |
        |  1 | Tom Clancy  | Maryland  |
        |  2 | Umberto Eco | Italy     |

        >>> to_array("example.xls")
        [{'id': 1, 'name': 'Tom Clancy', 'residence': 'Maryland'},
         {'id': 2, 'name': 'Umberto Eco', 'residence': 'Italy'}]
    """
    return list(decode_rows(file_path, index, config))


def iter_rows(file_path: str, index: int = 0,
              config: Optional[LoaderConfig] = None) -> Iterator[Record]:
    """
    逐行产出以表头为键的字典，包含表头行本身，不做结束判断
    只包含行中实际存在的单元格（行尾空单元格不计）
    """
    config = config or LoaderConfig()
    logger = _logger_for(config)
    try:
        with open_workbook(file_path, config.coerce_integral_floats) as book:
            logger.log("workbook.open", file=Path(file_path).name, format=book.format, sheet=index)
            sheet = book.worksheet(index)
            rows = iter(sheet.rows())
            first = next(rows, None)
            if first is None:
                return
            keys = HeaderParser().parse_headers(sheet.cells_of(first))
            yield dict(zip(keys, sheet.cells_of(first)))
            for row in rows:
                yield dict(zip(keys, sheet.cells_of(row)))
    except Exception as e:
        _log_failure(logger, e)
        raise
    finally:
        logger.close()


def to_dataframe(file_path: str, index: int = 0,
                 config: Optional[LoaderConfig] = None) -> pd.DataFrame:
    """
    读成 DataFrame，列为表头键；没有数据行时返回只有列名的空表
    """
    records = to_array(file_path, index, config)
    columns = list(records[0].keys()) if records else headers(file_path, index, config)
    return pd.DataFrame.from_records(records, columns=columns)


def encode(data: Sequence[Any], column_order: Optional[Sequence[Hashable]] = None,
           file_path: Optional[str] = None, config: Optional[LoaderConfig] = None,
           name_factory: Optional[Callable[[], str]] = None) -> str:
    """
    把记录列表或行列表写成表格文件，返回文件路径

    - 记录列表：第一行为键名，列顺序取 column_order，缺省为第一条记录的键顺序
    - 行列表：原样写出，不补表头
    - 未给出路径时用随机数字文件名（.xls），可通过 name_factory 注入
    - 目标格式由路径扩展名决定
    """
    config = config or LoaderConfig()
    logger = _logger_for(config)
    try:
        shape = classify_input(data)
        if file_path is None:
            file_path = name_factory() if name_factory is not None else config.new_file_name()
        file_format = detect_format(file_path)

        if shape == "records":
            rows: List[Row] = records_to_rows(data, column_order)
        else:
            rows = list(data)
        logger.log("encode.start", file=Path(file_path).name, format=file_format,
                   metrics={"input": shape, "rows": len(rows)})

        writer = create_workbook(file_format, config)
        writer.write_rows(rows)
        writer.save(file_path)

        logger.log("encode.saved", file=str(file_path), format=file_format,
                   metrics={"rows": len(rows)})
        return file_path
    except Exception as e:
        _log_failure(logger, e)
        raise
    finally:
        logger.close()


def from_dataframe(df: pd.DataFrame, column_order: Optional[Sequence[Hashable]] = None,
                   file_path: Optional[str] = None,
                   config: Optional[LoaderConfig] = None) -> str:
    """
    DataFrame 写出；空表只写表头行
    """
    keys = list(column_order) if column_order is not None else list(df.columns)
    if df.empty:
        return encode([[str(key) for key in keys]], file_path=file_path, config=config)
    return encode(df.to_dict(orient="records"), keys, file_path, config)
