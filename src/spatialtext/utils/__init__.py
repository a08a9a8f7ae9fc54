"""
工具模組

提供日誌、計時、緩存等通用工具。
"""

from .cache import LRUCache
from .logger import (
    TimingContext,
    enable_debug_logging,
    enable_timing_logging,
    get_logger,
    log_timing,
    setup_logger,
)

__all__ = [
    # 日誌工具
    "get_logger",
    "setup_logger",
    "enable_debug_logging",
    "enable_timing_logging",
    "log_timing",
    "TimingContext",

    # 緩存
    "LRUCache",
]
