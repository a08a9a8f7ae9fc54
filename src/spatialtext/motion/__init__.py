"""
位置平滑模組

把帶雜訊的三維追蹤樣本轉成穩定、可預測的位置。

主要類別:
- MotionSmoother: 位置平滑器（持有狀態的外殼）
- FilterState: 不可變的濾波器狀態
- PositionSample: 位置 + 時間戳
- advance: 純函數狀態轉移 (FilterState, PositionSample) -> (FilterState, 平滑位置)
"""

from .filter import (
    advance,
    classify_movement,
    compute_stability,
    estimate_velocity,
    median_of_recent,
    population_variance,
    reject_outlier,
    smoothing_for,
)
from .smoother import MotionSmoother
from .types import FilterState, MovementProfile, PositionSample, SmootherDebugInfo, as_vector

__all__ = [
    "MotionSmoother",
    "FilterState",
    "PositionSample",
    "SmootherDebugInfo",
    "MovementProfile",
    "as_vector",
    "advance",
    "estimate_velocity",
    "compute_stability",
    "median_of_recent",
    "reject_outlier",
    "population_variance",
    "classify_movement",
    "smoothing_for",
]
