"""
常量定义
"""

# 文件扩展名（小写比较）
XLSX_EXTENSION = ".xlsx"
XLS_EXTENSION = ".xls"

# 写出时默认的工作表名
DEFAULT_SHEET_NAME = "Sheet1"

# 随机文件名的取值上限
RANDOM_NAME_UPPER = 9999999999

# 旧版格式日期单元格的数字格式
XLS_DATE_FORMAT = "YYYY-MM-DD"
XLS_DATETIME_FORMAT = "YYYY-MM-DD HH:MM:SS"
XLS_TIME_FORMAT = "HH:MM:SS"

# 日志
LOGGER_NAME = "excel_loader"
LOG_TXT_NAME = "run.log.txt"
LOG_JSONL_NAME = "run.log.jsonl"
LOG_TS_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

INVALID_INPUT_SHAPE_MESSAGE = "first parameter must be a list of records or a list of rows"
