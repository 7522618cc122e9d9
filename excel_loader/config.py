"""
配置类定义
"""
import random
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Callable, Optional

import yaml

from .models import LogLevel
from .exceptions import InvalidArgumentError
from .constants import (
    DEFAULT_SHEET_NAME,
    RANDOM_NAME_UPPER,
    XLS_EXTENSION,
    XLS_DATE_FORMAT,
    XLS_DATETIME_FORMAT,
)


def random_file_name(extension: str = XLS_EXTENSION) -> str:
    """生成随机数字文件名，例如 "4821957730.xls" """
    return f"{random.randint(0, RANDOM_NAME_UPPER)}{extension}"


@dataclass
class LoaderConfig:
    # 写出
    sheet_name: str = DEFAULT_SHEET_NAME
    default_extension: str = XLS_EXTENSION
    name_factory: Optional[Callable[[], str]] = None   # 未指定路径时生成文件名
    xls_date_format: str = XLS_DATE_FORMAT
    xls_datetime_format: str = XLS_DATETIME_FORMAT

    # 读取
    coerce_integral_floats: bool = True   # 旧版格式把 3.0 还原为 3

    # 日志
    log_level: LogLevel = LogLevel.INFO
    log_dir: Optional[str] = None

    def new_file_name(self) -> str:
        if self.name_factory is not None:
            return self.name_factory()
        return random_file_name(self.default_extension)


def load_config(path: str) -> LoaderConfig:
    """
    从 YAML 文件读取配置，键名与 LoaderConfig 字段一致
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise InvalidArgumentError(f"Config file must contain a mapping: {Path(path).name}")

    # name_factory 只能在代码里注入
    allowed = {f.name for f in fields(LoaderConfig)} - {"name_factory"}
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise InvalidArgumentError(
            f"Unknown config keys: {', '.join(unknown)}",
            hint=f"allowed keys: {', '.join(sorted(allowed))}",
        )

    if "log_level" in data:
        try:
            data["log_level"] = LogLevel(str(data["log_level"]).upper())
        except ValueError:
            raise InvalidArgumentError(f"Invalid log_level: {data['log_level']}")

    return LoaderConfig(**data)
