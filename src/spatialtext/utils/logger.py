"""
日誌與計時工具

所有 logger 都掛在 "spatialtext" 命名空間之下。
函式庫預設不輸出任何東西（只掛 NullHandler），由使用者決定是否開啟。

使用方式:
    from spatialtext import enable_debug_logging, get_logger

    enable_debug_logging()
    logger = get_logger("engine.correction")   # -> spatialtext.engine.correction
"""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Callable, Optional

ROOT_LOGGER_NAME = "spatialtext"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_root_logger = logging.getLogger(ROOT_LOGGER_NAME)
_root_logger.addHandler(logging.NullHandler())

# 計時日誌預設關閉，避免 DEBUG 模式被大量計時訊息淹沒
_timing_enabled = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    取得 spatialtext 命名空間下的 logger

    Args:
        name: 子 logger 名稱（例如 "motion.smoother"），None 時回傳根 logger
    """
    if not name:
        return _root_logger
    if name.startswith(ROOT_LOGGER_NAME + ".") or name == ROOT_LOGGER_NAME:
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logger(level: int = logging.INFO, fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """
    為根 logger 掛上一個 StreamHandler（重複呼叫只會調整等級，不會重複掛載）
    """
    for handler in _root_logger.handlers:
        if getattr(handler, "_spatialtext_handler", False):
            handler.setLevel(level)
            break
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt))
        handler.setLevel(level)
        handler._spatialtext_handler = True  # type: ignore[attr-defined]
        _root_logger.addHandler(handler)

    _root_logger.setLevel(level)
    return _root_logger


def enable_debug_logging() -> logging.Logger:
    """開啟 DEBUG 等級的詳細日誌"""
    return setup_logger(level=logging.DEBUG)


def enable_timing_logging(enabled: bool = True) -> None:
    """開啟（或關閉）TimingContext 的計時日誌輸出"""
    global _timing_enabled
    _timing_enabled = enabled
    if enabled:
        setup_logger(level=logging.DEBUG)


def is_timing_enabled() -> bool:
    return _timing_enabled


class TimingContext:
    """
    計時 context manager

    - 以 time.perf_counter() 量測區塊耗時
    - 開啟計時日誌時寫入 logger
    - 有 callback 時一律回呼 (operation, elapsed_seconds)

    範例:
        >>> with TimingContext("CorrectionEngine.suggest", logger, callback=on_timing):
        ...     engine.suggest("teh")
    """

    def __init__(
        self,
        operation: str,
        logger: Optional[logging.Logger] = None,
        level: int = logging.DEBUG,
        callback: Optional[Callable[[str, float], None]] = None,
    ):
        self.operation = operation
        self.logger = logger or _root_logger
        self.level = level
        self.callback = callback
        self.elapsed = 0.0
        self._start = 0.0

    def __enter__(self) -> "TimingContext":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.elapsed = time.perf_counter() - self._start

        if _timing_enabled:
            self.logger.log(self.level, f"[Timing] {self.operation}: {self.elapsed * 1000:.3f} ms")

        if self.callback is not None:
            try:
                self.callback(self.operation, self.elapsed)
            except Exception:
                self.logger.exception("on_timing 回呼執行失敗")

        return False


def log_timing(operation: Optional[str] = None, level: int = logging.DEBUG):
    """
    函式計時裝飾器

    範例:
        >>> @log_timing("calibrate")
        ... def calibrate(samples): ...
    """

    def decorator(func: Callable) -> Callable:
        name = operation or func.__qualname__
        logger = get_logger(func.__module__.replace(f"{ROOT_LOGGER_NAME}.", ""))

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with TimingContext(name, logger, level):
                return func(*args, **kwargs)

        return wrapper

    return decorator
