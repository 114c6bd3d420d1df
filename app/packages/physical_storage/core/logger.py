"""日志配置模块：控制台彩色输出、按天滚动的文件日志，以及贯穿请求的 request_id。"""

import json
import logging
import logging.config
import sys
from contextvars import ContextVar
from datetime import datetime
from typing import Any, Optional

from .config import get_settings

_MODULE = __name__
_LINE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
_MANAGED_LOGGERS = ("uvicorn", "uvicorn.access", "app")

_request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class LocalTimeFormatter(logging.Formatter):
    """时间戳按配置的时区输出，默认精确到毫秒。"""

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        moment = datetime.fromtimestamp(record.created, get_settings().timezone_info)
        if datefmt:
            return moment.strftime(datefmt)
        return moment.isoformat(sep=" ", timespec="milliseconds")


class ColorFormatter(LocalTimeFormatter):
    """按级别着色；输出目标不是终端时保持纯文本。"""

    RESET = "\033[0m"
    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[41m",
    }

    def __init__(self, fmt: str, datefmt: Optional[str] = None, use_colors: Optional[bool] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_colors = sys.stderr.isatty() if use_colors is None else use_colors

    def format(self, record: logging.LogRecord) -> str:
        rendered = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        return f"{color}{rendered}{self.RESET}" if self.use_colors and color else rendered


class JsonFormatter(LocalTimeFormatter):
    """一行一个 JSON 对象，便于日志平台采集。"""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "request_id": getattr(record, "request_id", None),
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id_ctx.get() or "-"
        return True


def _build_config(level: str, log_file: str, as_json: bool) -> dict[str, Any]:
    handler_names = ["console", "file"]
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "color": {"()": f"{_MODULE}.ColorFormatter", "fmt": _LINE_FORMAT},
            "plain": {"()": f"{_MODULE}.LocalTimeFormatter", "fmt": _LINE_FORMAT},
            "json": {"()": f"{_MODULE}.JsonFormatter"},
        },
        "filters": {"request_id": {"()": f"{_MODULE}.RequestIdFilter"}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "json" if as_json else "color",
                "filters": ["request_id"],
            },
            "file": {
                "class": "logging.handlers.TimedRotatingFileHandler",
                "level": level,
                "formatter": "json" if as_json else "plain",
                "filters": ["request_id"],
                "filename": log_file,
                "when": "midnight",
                "backupCount": 14,
                "encoding": "utf-8",
                "delay": True,
            },
        },
        "loggers": {
            name: {"handlers": handler_names, "level": level, "propagate": False} for name in _MANAGED_LOGGERS
        },
        "root": {"handlers": handler_names, "level": level},
    }


def setup_logging() -> None:
    """按当前配置安装日志处理器；可重复调用。"""
    settings = get_settings()
    settings.log_file_path.parent.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(
        _build_config(settings.log_level, str(settings.log_file_path), bool(settings.log_json))
    )


logger = logging.getLogger("app")


def set_request_id(request_id: Optional[str]) -> None:
    _request_id_ctx.set(request_id)
