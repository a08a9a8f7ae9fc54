"""
視線平滑範例

以帶雜訊的合成視線軌跡（60Hz）示範 update / predict / 前處理 / 校正。
時間戳由呼叫端提供，因此結果可重現。
"""

import numpy as np

from spatialtext import MotionSmoother, SmootherConfig, enable_debug_logging


def synthetic_gaze(n: int = 120, rate: float = 60.0, seed: int = 7):
    rng = np.random.default_rng(seed)
    for i in range(n):
        t = i / rate
        target = np.array([0.2 * np.sin(t), 0.1 * np.cos(t), -0.5])
        noise = rng.normal(scale=0.01, size=3)
        if i == 60:
            noise += 0.5   # 一次明顯的追蹤失誤
        yield t, target + noise


def demo_smoothing():
    print("=" * 60)
    print("範例 1: 平滑與離群值剔除")
    print("=" * 60)

    smoother = MotionSmoother()
    for t, raw in synthetic_gaze():
        filtered = smoother.apply_outlier_rejection(raw)
        smoothed = smoother.update(filtered, t)
        if int(t * 60) % 20 == 0:
            print(f"t={t:5.2f}s raw={np.round(raw, 3)} smoothed={np.round(smoothed, 3)} stable={smoother.is_stable()}")

    print(f"50ms 後預測位置: {np.round(smoother.predict(0.05), 3)}")
    print(f"除錯資訊: {smoother.debug_info()}")
    print()


def demo_calibration():
    print("=" * 60)
    print("範例 2: 校正")
    print("=" * 60)

    enable_debug_logging()
    smoother = MotionSmoother(SmootherConfig(verbose=True))
    smoother.calibrate(raw for _, raw in synthetic_gaze(30))
    print(f"校正後量測雜訊: {smoother.measurement_noise:.4f}")
    print()


if __name__ == "__main__":
    demo_smoothing()
    demo_calibration()
