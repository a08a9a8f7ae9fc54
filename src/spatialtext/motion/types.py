"""
位置平滑的資料結構

向量一律以長度 3 的 numpy float64 陣列表示。
FilterState 是不可變值：每次更新都產生新的狀態，而不是原地修改。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

Vector3 = NDArray[np.float64]
VectorLike = Union[Vector3, Sequence[float]]


def as_vector(value: VectorLike) -> Vector3:
    """轉成新的 float64 三維向量（不與呼叫端共用記憶體）"""
    vector = np.array(value, dtype=np.float64).reshape(-1)
    if vector.shape != (3,):
        raise ValueError(f"Expected a 3D vector, got shape {vector.shape}")
    return vector


def zero_vector() -> Vector3:
    return np.zeros(3, dtype=np.float64)


@dataclass(frozen=True, eq=False)
class PositionSample:
    """
    一筆追蹤樣本

    Attributes:
        position: 三維位置
        timestamp: 擷取時間（秒），由呼叫端提供
    """
    position: Vector3
    timestamp: float

    @classmethod
    def create(cls, position: VectorLike, timestamp: float) -> "PositionSample":
        return cls(position=as_vector(position), timestamp=float(timestamp))


@dataclass(frozen=True, eq=False)
class FilterState:
    """
    遞迴估計器的完整狀態

    Attributes:
        estimated_position: 濾波器估計位置
        estimated_velocity: 估計速度
        smoothed_position: 指數平滑後的輸出位置
        position_uncertainty: 位置不確定度（純量變異數近似）
        velocity_uncertainty: 速度不確定度
        history: 最近的樣本（舊 -> 新），長度不超過 history_capacity
        is_stable: 最近樣本的變異數是否低於門檻
    """
    estimated_position: Vector3
    estimated_velocity: Vector3
    smoothed_position: Vector3
    position_uncertainty: float = 1.0
    velocity_uncertainty: float = 1.0
    history: Tuple[PositionSample, ...] = ()
    is_stable: bool = False

    @classmethod
    def initial(cls, position: VectorLike = (0.0, 0.0, -0.5)) -> "FilterState":
        start = as_vector(position)
        return cls(
            estimated_position=start,
            estimated_velocity=zero_vector(),
            smoothed_position=start.copy(),
        )

    @classmethod
    def zero(cls) -> "FilterState":
        return cls.initial((0.0, 0.0, 0.0))

    @property
    def history_size(self) -> int:
        return len(self.history)

    def recent_positions(self, count: int) -> NDArray[np.float64]:
        """最近 count 筆樣本位置，shape 為 (n, 3)，n <= count"""
        recent = self.history[-count:] if count > 0 else ()
        if not recent:
            return np.empty((0, 3), dtype=np.float64)
        return np.stack([sample.position for sample in recent])


class MovementProfile(Enum):
    """移動速度分類"""
    SLOW = "slow"        # 幾乎靜止，加強平滑
    NORMAL = "normal"    # 一般移動，使用設定的平滑係數
    FAST = "fast"        # 快速移動，減少平滑以提高反應速度


@dataclass(frozen=True, eq=False)
class SmootherDebugInfo:
    """除錯/分析用的狀態快照"""
    current_position: Vector3
    estimated_position: Vector3
    velocity: Vector3
    is_stable: bool
    history_size: int
    position_uncertainty: float
    velocity_uncertainty: float
    measurement_noise: float
    movement: MovementProfile
