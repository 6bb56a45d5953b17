"""对战程序的日志配置

日志默认只写入滚动文件（UTF-8，卡牌名里的 emoji 不会出错）。
控制台输出默认关闭，避免和 rich 界面互相覆盖。
重复调用 setup_logging() 只会更新已有 handler，不会重复添加。

环境变量:
    EMOJI_BATTLE_LOG_LEVEL  覆盖日志级别
    EMOJI_BATTLE_LOG_FILE   覆盖日志文件路径
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

FILE_HANDLER = "emoji_battle_file"
CONSOLE_HANDLER = "emoji_battle_console"
DEFAULT_LOG_FILE = Path("logs") / "emoji_battle.log"

_FORMATTER = logging.Formatter(
    "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)


def _level(value: str | int | None, default: int) -> int:
    """把 "debug" / "INFO" / 10 之类的写法统一成日志级别数值"""
    if isinstance(value, int):
        return value
    resolved = logging.getLevelName(str(value or "").upper())
    return resolved if isinstance(resolved, int) else default


def _named_handler(root: logging.Logger, name: str) -> logging.Handler | None:
    return next((h for h in root.handlers if h.name == name), None)


def setup_logging(
    *,
    level: str | int = "INFO",
    log_file: str | os.PathLike | None = None,
    enable_console: bool = False,
    console_level: str | int = "WARNING",
    max_bytes: int = 1024 * 1024,
    backup_count: int = 3,
) -> Path:
    """配置根 logger，返回日志文件路径"""
    file_level = _level(os.environ.get("EMOJI_BATTLE_LOG_LEVEL") or level, logging.INFO)
    path = Path(os.environ.get("EMOJI_BATTLE_LOG_FILE") or log_file or DEFAULT_LOG_FILE)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    handler = _named_handler(root, FILE_HANDLER)
    if handler is None:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        handler.name = FILE_HANDLER
        root.addHandler(handler)
    handler.setLevel(file_level)
    handler.setFormatter(_FORMATTER)

    console = _named_handler(root, CONSOLE_HANDLER)
    if enable_console and console is None:
        console = logging.StreamHandler()
        console.name = CONSOLE_HANDLER
        console.setFormatter(_FORMATTER)
        root.addHandler(console)
    elif not enable_console and console is not None:
        root.removeHandler(console)
        console.close()
        console = None
    if console is not None:
        console.setLevel(_level(console_level, logging.WARNING))

    logging.getLogger(__name__).info(
        "Logging ready: %s (level=%s)", path, logging.getLevelName(file_level)
    )
    return path
