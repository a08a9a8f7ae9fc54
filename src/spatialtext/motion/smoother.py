"""
位置平滑器 (MotionSmoother)

把高頻、帶雜訊的三維位置樣本（視線/指標追蹤）轉成穩定的平滑位置，
並提供短時間預測、抖動抑制與離群值剔除。

時間一律由呼叫端提供（秒），平滑器本身不讀系統時鐘。

使用方式:
    from spatialtext import MotionSmoother

    smoother = MotionSmoother()
    for t, position in samples:
        smoothed = smoother.update(position, t)

    smoother.predict(0.05)   # 50ms 後的預測位置
    smoother.is_stable()
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

import numpy as np

from spatialtext.config import SmootherConfig
from spatialtext.core.component import Component
from .filter import (
    advance,
    classify_movement,
    median_of_recent,
    population_variance,
    reject_outlier,
    smoothing_for,
)
from .types import (
    FilterState,
    MovementProfile,
    PositionSample,
    SmootherDebugInfo,
    Vector3,
    VectorLike,
    as_vector,
)


class MotionSmoother(Component):
    """
    位置平滑器

    功能:
    - update(): 純量近似 Kalman 濾波 + 指數平滑，回傳平滑位置
    - predict(): 以目前估計位置與速度做線性外插
    - apply_jitter_reduction() / apply_outlier_rejection(): 呼叫端可選的前處理
    - calibrate(): 由參考樣本的變異數調整量測雜訊
    - reset(): 清空歷史並歸零估計值

    每個追蹤 session 擁有一個實例；單一寫入者，非執行緒安全。
    """

    _component_name = "motion.smoother"

    def __init__(self, config: Optional[SmootherConfig] = None, *, state: Optional[FilterState] = None):
        self._config = config or SmootherConfig()
        self._init_logger(verbose=self._config.verbose, on_timing=self._config.on_timing)

        self._state = state or FilterState.initial(self._config.initial_position)
        self._measurement_noise = self._config.measurement_noise

        self._logger.info(
            f"MotionSmoother initialized (alpha={self._config.smoothing_factor}, "
            f"history={self._config.history_capacity}, measurement_noise={self._measurement_noise})"
        )

    # ------------------------------------------------------------------
    # 狀態查詢
    # ------------------------------------------------------------------

    @property
    def config(self) -> SmootherConfig:
        return self._config

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def measurement_noise(self) -> float:
        return self._measurement_noise

    @property
    def smoothed_position(self) -> Vector3:
        return self._state.smoothed_position.copy()

    @property
    def estimated_position(self) -> Vector3:
        return self._state.estimated_position.copy()

    @property
    def history(self) -> Tuple[PositionSample, ...]:
        return self._state.history

    def is_stable(self) -> bool:
        return self._state.is_stable

    def velocity(self) -> Vector3:
        return self._state.estimated_velocity.copy()

    def predict(self, offset_seconds: float) -> Vector3:
        """estimated_position + velocity * offset_seconds，不改變狀態"""
        return self._state.estimated_position + self._state.estimated_velocity * float(offset_seconds)

    def movement_profile(self) -> MovementProfile:
        return classify_movement(self._state.estimated_velocity)

    def debug_info(self) -> SmootherDebugInfo:
        state = self._state
        return SmootherDebugInfo(
            current_position=state.smoothed_position.copy(),
            estimated_position=state.estimated_position.copy(),
            velocity=state.estimated_velocity.copy(),
            is_stable=state.is_stable,
            history_size=state.history_size,
            position_uncertainty=state.position_uncertainty,
            velocity_uncertainty=state.velocity_uncertainty,
            measurement_noise=self._measurement_noise,
            movement=self.movement_profile(),
        )

    # ------------------------------------------------------------------
    # 更新
    # ------------------------------------------------------------------

    def update(self, position: VectorLike, timestamp: float) -> Vector3:
        """
        加入一筆樣本並回傳平滑後位置

        Args:
            position: 三維位置
            timestamp: 擷取時間（秒）
        """
        return self.update_sample(PositionSample.create(position, timestamp))

    def update_sample(self, sample: PositionSample) -> Vector3:
        alpha = None
        if self._config.adaptive_smoothing:
            alpha = smoothing_for(self.movement_profile(), self._config.smoothing_factor)

        with self._log_timing("MotionSmoother.update"):
            self._state, smoothed = advance(
                self._state,
                sample,
                self._config,
                measurement_noise=self._measurement_noise,
                smoothing_factor=alpha,
            )
        return smoothed

    # ------------------------------------------------------------------
    # 前處理
    # ------------------------------------------------------------------

    def apply_jitter_reduction(self, position: VectorLike) -> Vector3:
        """最近幾筆歷史樣本的逐軸中位數；歷史不足時原樣回傳"""
        return median_of_recent(self._state.history, position, window=self._config.jitter_window)

    def apply_outlier_rejection(self, position: VectorLike) -> Vector3:
        """position 為離群值時回傳最近樣本的平均，否則原樣回傳"""
        return reject_outlier(
            self._state.history,
            position,
            window=self._config.outlier_window,
            sigma=self._config.outlier_sigma,
        )

    # ------------------------------------------------------------------
    # 校正與重置
    # ------------------------------------------------------------------

    def calibrate(self, samples: Iterable[VectorLike]) -> None:
        """
        以參考樣本調整量測雜訊

        measurement_noise = max(min_measurement_noise, variance * calibration_scale)
        沒有樣本時不做任何事。
        """
        vectors = [as_vector(sample) for sample in samples]
        if not vectors:
            self._logger.debug("calibrate() called without samples, keeping current noise")
            return

        with self._log_timing("MotionSmoother.calibrate"):
            variance = population_variance(np.stack(vectors))
            self._measurement_noise = max(
                self._config.min_measurement_noise,
                variance * self._config.calibration_scale,
            )
        self._logger.info(
            f"MotionSmoother calibrated with {len(vectors)} samples. "
            f"Measurement noise: {self._measurement_noise:.4f}"
        )

    def reset(self) -> None:
        """
        清空歷史、歸零位置與速度；校正過的量測雜訊保留

        不確定度回到初始值 1.0 而非 0：為 0 時第一筆樣本的 Kalman gain 會偏低，重置後反應變慢。
        """
        self._state = FilterState.zero()
        self._logger.debug("MotionSmoother reset")
