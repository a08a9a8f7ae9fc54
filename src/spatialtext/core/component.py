"""
元件基底類別

CorrectionEngine 與 MotionSmoother 共用的日誌、計時與事件回呼功能。
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from spatialtext.utils.logger import TimingContext, get_logger, setup_logger


class Component:
    """
    元件基底類別

    職責:
    - 建立 spatialtext.<component> 命名空間的 logger
    - 提供 _log_timing() 計時區塊
    - 安全地呼叫事件回呼（回呼出錯只記錄，不中斷流程）

    生命週期:
    - 每個輸入 session 建立一個實例，實例之間不共享可變狀態
    """

    _component_name: str = "base"

    def _init_logger(
        self,
        verbose: bool = False,
        on_timing: Optional[Callable[[str, float], None]] = None,
    ) -> None:
        self._verbose = verbose
        self._timing_callback = on_timing

        if verbose:
            setup_logger(level=logging.DEBUG)

        self._logger = get_logger(self._component_name)

    def _log_timing(self, operation: str) -> TimingContext:
        return TimingContext(
            operation=operation,
            logger=self._logger,
            level=logging.DEBUG,
            callback=self._timing_callback,
        )

    def _emit(self, handler: Optional[Callable[[Any], None]], event: Dict[str, Any]) -> None:
        if handler is None:
            return
        try:
            handler(event)
        except Exception:
            self._logger.exception("on_event 回呼執行失敗")
