"""
位置濾波的純函數

advance() 是整個平滑器的狀態轉移：(FilterState, PositionSample) -> (FilterState, 平滑位置)。
不讀系統時鐘、不持有全域狀態，相同輸入序列一定得到相同輸出。

每次更新的流程:
1. 樣本加入歷史（超過容量時丟掉最舊的一筆）
2. 預測：estimated + velocity * prediction_factor（固定時距外插）
3. 不確定度膨脹：兩個不確定度各加上 process_noise
4. 修正：以純量 Kalman gain 逐軸混合預測與量測
5. 指數平滑：smoothed = smoothed * (1 - alpha) + estimated * alpha
6. 由最近幾筆樣本的有限差分重新估計速度
7. 由最近幾筆樣本的變異數判斷是否穩定
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from spatialtext.config import SmootherConfig

from .types import FilterState, MovementProfile, PositionSample, Vector3, VectorLike, as_vector

FAST_SPEED = 1.0
SLOW_SPEED = 0.1
FAST_SMOOTHING = 0.3
SLOW_SMOOTHING = 0.05
VELOCITY_UNCERTAINTY_SCALE = 0.1


def advance(
    state: FilterState,
    sample: PositionSample,
    config: SmootherConfig,
    measurement_noise: Optional[float] = None,
    smoothing_factor: Optional[float] = None,
) -> Tuple[FilterState, Vector3]:
    """
    以一筆樣本推進濾波器狀態

    Args:
        state: 目前狀態（不會被修改）
        sample: 新樣本
        config: 濾波參數
        measurement_noise: 覆寫 config.measurement_noise（校正後的值）
        smoothing_factor: 覆寫 config.smoothing_factor（自適應平滑時使用）

    Returns:
        (新狀態, 平滑後位置)
    """
    noise = config.measurement_noise if measurement_noise is None else measurement_noise
    alpha = config.smoothing_factor if smoothing_factor is None else smoothing_factor

    history = (state.history + (sample,))[-config.history_capacity:]

    predicted = state.estimated_position + state.estimated_velocity * config.prediction_factor

    position_uncertainty = state.position_uncertainty + config.process_noise
    velocity_uncertainty = state.velocity_uncertainty + config.process_noise

    gain = position_uncertainty / (position_uncertainty + noise)
    innovation = sample.position - predicted
    estimated_position = predicted + gain * innovation
    position_uncertainty *= 1.0 - gain

    smoothed = state.smoothed_position * (1.0 - alpha) + estimated_position * alpha

    estimated_velocity = state.estimated_velocity
    velocity = estimate_velocity(history, config.velocity_window)
    if velocity is not None:
        estimated_velocity = velocity
        velocity_uncertainty = float(np.max(np.abs(velocity))) * VELOCITY_UNCERTAINTY_SCALE

    is_stable = compute_stability(
        history,
        window=config.stability_window,
        threshold=config.stability_threshold,
        min_samples=config.min_stability_samples,
    )

    new_state = replace(
        state,
        estimated_position=estimated_position,
        estimated_velocity=estimated_velocity,
        smoothed_position=smoothed,
        position_uncertainty=float(position_uncertainty),
        velocity_uncertainty=float(velocity_uncertainty),
        history=history,
        is_stable=is_stable,
    )
    return new_state, smoothed.copy()


def estimate_velocity(history: Sequence[PositionSample], window: int = 3) -> Optional[Vector3]:
    """
    以最近 window 筆樣本的相鄰有限差分平均估計速度

    只採用時間差為正的相鄰對；樣本不足 2 筆或沒有有效對時回傳 None。
    """
    if len(history) < 2:
        return None

    recent = history[-window:]
    total = np.zeros(3, dtype=np.float64)
    count = 0
    for prev, curr in zip(recent, recent[1:]):
        dt = curr.timestamp - prev.timestamp
        if dt > 0:
            total += (curr.position - prev.position) / dt
            count += 1

    if count == 0:
        return None
    return total / count


def population_variance(positions: NDArray[np.float64]) -> float:
    """到平均位置的平方歐氏距離之平均（空集合為 0.0）"""
    if len(positions) == 0:
        return 0.0
    mean = positions.mean(axis=0)
    return float(np.mean(np.sum((positions - mean) ** 2, axis=1)))


def compute_stability(
    history: Sequence[PositionSample],
    window: int = 5,
    threshold: float = 0.01,
    min_samples: int = 3,
) -> bool:
    if len(history) < min_samples:
        return False
    positions = np.stack([sample.position for sample in history[-window:]])
    return population_variance(positions) < threshold


def median_of_recent(
    history: Sequence[PositionSample],
    position: VectorLike,
    window: int = 3,
) -> Vector3:
    """最近 window 筆樣本的逐軸中位數；樣本不足時原樣回傳 position"""
    if len(history) < window:
        return as_vector(position)
    positions = np.stack([sample.position for sample in history[-window:]])
    return np.median(positions, axis=0)


def reject_outlier(
    history: Sequence[PositionSample],
    position: VectorLike,
    window: int = 5,
    sigma: float = 2.0,
) -> Vector3:
    """
    離群值剔除

    任一軸與最近 window 筆平均的差距超過 sigma 倍標準差（母體）時，回傳平均值；
    否則原樣回傳 position。樣本不足時不做判斷。
    """
    candidate = as_vector(position)
    if len(history) < window:
        return candidate

    positions = np.stack([sample.position for sample in history[-window:]])
    mean = positions.mean(axis=0)
    std = positions.std(axis=0)

    if np.any(np.abs(candidate - mean) > std * sigma):
        return mean
    return candidate


def classify_movement(velocity: VectorLike) -> MovementProfile:
    speed = float(np.linalg.norm(as_vector(velocity)))
    if speed > FAST_SPEED:
        return MovementProfile.FAST
    if speed < SLOW_SPEED:
        return MovementProfile.SLOW
    return MovementProfile.NORMAL


def smoothing_for(profile: MovementProfile, default: float) -> float:
    """各移動分類建議使用的平滑係數"""
    if profile is MovementProfile.FAST:
        return FAST_SMOOTHING
    if profile is MovementProfile.SLOW:
        return SLOW_SMOOTHING
    return default
