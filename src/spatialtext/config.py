"""
全域配置模組

提供兩個元件的配置類別。所有數值在建構時驗證，
不合法的值立即拋出 ConfigurationError，不會延遲到每次呼叫時才出錯。

使用方式:
    from spatialtext import CorrectionEngine, CorrectionConfig

    # 簡單開啟 verbose 模式
    engine = CorrectionEngine(CorrectionConfig(verbose=True))

    # 進階: 使用標準 logging 控制
    import logging
    logging.getLogger("spatialtext").setLevel(logging.DEBUG)
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .core.errors import ConfigurationError
from .utils.logger import setup_logger


def configure_logging(verbose: bool = False) -> None:
    """
    根據 verbose 設定配置 logging

    Args:
        verbose: 是否開啟詳細日誌
    """
    if verbose:
        setup_logger(level=logging.DEBUG)
    else:
        # 不主動設定，讓使用者可以透過標準 logging 控制
        pass


def _require_int(name: str, value: object, minimum: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value < minimum:
        raise ConfigurationError(f"{name} must be an integer >= {minimum}, got {value!r}")


def _require_float(name: str, value: object, minimum: float, *, inclusive: bool = True) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ConfigurationError(f"{name} must be a finite number, got {value!r}")
    if value < minimum or (not inclusive and value == minimum):
        op = ">=" if inclusive else ">"
        raise ConfigurationError(f"{name} must be {op} {minimum}, got {value!r}")


@dataclass
class CorrectionConfig:
    """
    拼字建議引擎配置

    屬性:
        max_suggestions: 每次最多回傳幾個建議
        max_distance: 模糊比對允許的最大編輯距離
        cache_capacity: 建議緩存的最大筆數
        invalidate_on_learn: learn() 後是否讓該詞的緩存失效
        max_dictionary_entries: 字典 key 數上限，達到後 learn() 不再新增 key（None 為不限）
        verbose: 是否開啟詳細日誌
        on_timing: 計時回呼函數 (operation: str, elapsed: float) -> None
    """

    max_suggestions: int = 3
    max_distance: int = 2
    cache_capacity: int = 100
    invalidate_on_learn: bool = True
    max_dictionary_entries: Optional[int] = None

    verbose: bool = False
    on_timing: Optional[Callable[[str, float], None]] = None

    def __post_init__(self):
        _require_int("max_suggestions", self.max_suggestions, 1)
        _require_int("max_distance", self.max_distance, 1)
        _require_int("cache_capacity", self.cache_capacity, 1)
        if self.max_dictionary_entries is not None:
            _require_int("max_dictionary_entries", self.max_dictionary_entries, 1)
        configure_logging(self.verbose)


@dataclass
class SmootherConfig:
    """
    位置平滑器配置

    屬性:
        smoothing_factor: 指數平滑的 alpha，越小越穩定
        prediction_factor: 預測步驟的固定外插時距（不是真正的 dt）
        process_noise: 每次更新時不確定度的膨脹量，越大反應越快
        measurement_noise: 量測雜訊，越大越不信任原始樣本（calibrate() 會調整）
        stability_threshold: 近期樣本變異數低於此值視為穩定
        history_capacity: 歷史樣本視窗大小 (FIFO)
        initial_position: 建構時的初始位置
        adaptive_smoothing: 依移動速度自動調整 alpha
    """

    smoothing_factor: float = 0.15
    prediction_factor: float = 0.3
    process_noise: float = 0.1
    measurement_noise: float = 0.5
    stability_threshold: float = 0.01
    history_capacity: int = 10
    initial_position: Tuple[float, float, float] = (0.0, 0.0, -0.5)

    # 各種統計視窗
    velocity_window: int = 3
    stability_window: int = 5
    min_stability_samples: int = 3
    jitter_window: int = 3
    outlier_window: int = 5
    outlier_sigma: float = 2.0

    # 校正
    min_measurement_noise: float = 0.1
    calibration_scale: float = 0.1

    adaptive_smoothing: bool = False

    verbose: bool = False
    on_timing: Optional[Callable[[str, float], None]] = None

    def __post_init__(self):
        _require_float("smoothing_factor", self.smoothing_factor, 0.0, inclusive=False)
        if self.smoothing_factor > 1.0:
            raise ConfigurationError(f"smoothing_factor must be <= 1.0, got {self.smoothing_factor!r}")
        _require_float("prediction_factor", self.prediction_factor, 0.0)
        _require_float("process_noise", self.process_noise, 0.0)
        _require_float("measurement_noise", self.measurement_noise, 0.0, inclusive=False)
        _require_float("stability_threshold", self.stability_threshold, 0.0, inclusive=False)
        _require_int("history_capacity", self.history_capacity, 1)
        _require_int("velocity_window", self.velocity_window, 2)
        _require_int("stability_window", self.stability_window, 1)
        _require_int("min_stability_samples", self.min_stability_samples, 1)
        _require_int("jitter_window", self.jitter_window, 1)
        _require_int("outlier_window", self.outlier_window, 2)
        _require_float("outlier_sigma", self.outlier_sigma, 0.0, inclusive=False)
        _require_float("min_measurement_noise", self.min_measurement_noise, 0.0, inclusive=False)
        _require_float("calibration_scale", self.calibration_scale, 0.0)

        # 視窗比歷史容量大時，對應的判斷永遠無法成立
        for name in ("min_stability_samples", "jitter_window", "outlier_window"):
            window = getattr(self, name)
            if window > self.history_capacity:
                raise ConfigurationError(
                    f"{name} ({window}) must not exceed history_capacity ({self.history_capacity})"
                )

        position = tuple(self.initial_position)
        if len(position) != 3:
            raise ConfigurationError(f"initial_position must have 3 components, got {len(position)}")
        for axis, value in zip("xyz", position):
            _require_float(f"initial_position.{axis}", value, -math.inf)
        self.initial_position = tuple(float(v) for v in position)

        configure_logging(self.verbose)


# 預設配置實例 (靜默模式)
DEFAULT_CORRECTION_CONFIG = CorrectionConfig()
DEFAULT_SMOOTHER_CONFIG = SmootherConfig()
