"""
日志系统 - 文本和JSONL格式
"""
import json
import logging
from pathlib import Path
from datetime import datetime, timezone
from typing import Optional, Dict, Any

import numpy as np
import pandas as pd

from .models import LogEvent, LogLevel, FileFormat, ErrorCode
from .constants import LOGGER_NAME, LOG_TXT_NAME, LOG_JSONL_NAME, LOG_TS_FORMAT

_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}

# 宿主程序未配置 logging 时保持安静
logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


class LoaderLogger:
    """
    双格式日志记录器
    文本日志总是走 logging；配置了 log_dir 时额外写 run.log.txt 和 run.log.jsonl
    """

    def __init__(self, log_dir: Optional[Path] = None, log_level: LogLevel = LogLevel.INFO):
        self.log_dir = Path(log_dir) if log_dir else None
        self.log_level = log_level
        self.txt_logger = logging.getLogger(LOGGER_NAME)
        self.txt_handler = None
        self.jsonl_file = None
        self._saved_level = None

        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)

            # 文本日志
            self.txt_handler = logging.FileHandler(self.log_dir / LOG_TXT_NAME, encoding="utf-8")
            self.txt_handler.setLevel(_LEVELS[log_level])
            self.txt_handler.setFormatter(logging.Formatter(
                "[%(asctime)s %(levelname)s] %(message)s",
                datefmt=LOG_TS_FORMAT
            ))
            self.txt_logger.addHandler(self.txt_handler)
            self._saved_level = self.txt_logger.level
            self.txt_logger.setLevel(_LEVELS[log_level])

            # JSONL 日志（追加，同一目录可记录多次调用）
            self.jsonl_file = open(self.log_dir / LOG_JSONL_NAME, "a", encoding="utf-8")

    def log(self, event: str, level: LogLevel = LogLevel.INFO, file: Optional[str] = None,
            format: Optional[FileFormat] = None, sheet: Optional[int] = None,
            message: Optional[str] = None, metrics: Optional[Dict[str, Any]] = None,
            error_code: Optional[ErrorCode] = None):
        """
        记录日志事件
        """
        if _LEVELS[level] < _LEVELS[self.log_level]:
            return

        ts = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        log_event = LogEvent(
            ts=ts,
            lvl=level,
            event=event,
            file=file,
            format=format,
            sheet=sheet,
            message=message,
            metrics=metrics,
            error_code=error_code,
        )

        if self.jsonl_file is not None:
            self.jsonl_file.write(json.dumps(self._to_json(log_event), ensure_ascii=False) + "\n")
            self.jsonl_file.flush()

        parts = [log_event.event]
        if log_event.file:
            parts.append(f"file={log_event.file}")
        if log_event.format:
            parts.append(f"format={log_event.format.value}")
        if log_event.sheet is not None:
            parts.append(f"sheet={log_event.sheet}")
        if log_event.error_code:
            parts.append(f"error_code={log_event.error_code.value}")
        if log_event.message:
            parts.append(log_event.message)
        if log_event.metrics:
            metrics_converted = self._convert_to_json_serializable(log_event.metrics)
            parts.append(" ".join(f"{k}={v}" for k, v in metrics_converted.items()))

        self.txt_logger.log(_LEVELS[level], " ".join(parts))

    def _to_json(self, log_event: LogEvent) -> Dict[str, Any]:
        json_obj = {
            "ts": log_event.ts,
            "lvl": log_event.lvl.value,
            "event": log_event.event,
        }
        if log_event.file:
            json_obj["file"] = log_event.file
        if log_event.format:
            json_obj["format"] = log_event.format.value
        if log_event.sheet is not None:
            json_obj["sheet"] = log_event.sheet
        if log_event.message:
            json_obj["message"] = log_event.message
        if log_event.metrics:
            json_obj["metrics"] = self._convert_to_json_serializable(log_event.metrics)
        if log_event.error_code:
            json_obj["error_code"] = log_event.error_code.value
        return json_obj

    def _convert_to_json_serializable(self, obj):
        """
        将 numpy/pandas 类型转换为 JSON 可序列化的 Python 原生类型
        """
        if isinstance(obj, dict):
            return {k: self._convert_to_json_serializable(v) for k, v in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [self._convert_to_json_serializable(item) for item in obj]
        elif isinstance(obj, np.generic):
            return obj.item()
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        elif pd.api.types.is_scalar(obj) and pd.isna(obj):
            return None
        elif isinstance(obj, (str, int, float, bool)):
            return obj
        return str(obj)

    def close(self):
        """关闭日志文件并摘除文件处理器"""
        if self.txt_handler is not None:
            self.txt_logger.removeHandler(self.txt_handler)
            self.txt_handler.close()
            self.txt_handler = None
            self.txt_logger.setLevel(self._saved_level)
        if self.jsonl_file is not None:
            self.jsonl_file.close()
            self.jsonl_file = None
