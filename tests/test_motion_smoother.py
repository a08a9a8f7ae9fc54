"""
位置平滑器測試
"""
import numpy as np
import pytest
from numpy.testing import assert_allclose

from spatialtext import FilterState, MotionSmoother, PositionSample, SmootherConfig
from spatialtext.motion import MovementProfile, advance


class TestInitialState:
    """建構後的預設狀態"""

    def test_defaults(self):
        smoother = MotionSmoother()

        assert_allclose(smoother.smoothed_position, [0.0, 0.0, -0.5])
        assert_allclose(smoother.estimated_position, [0.0, 0.0, -0.5])
        assert_allclose(smoother.velocity(), [0.0, 0.0, 0.0])
        assert smoother.is_stable() is False
        assert smoother.history == ()
        assert smoother.measurement_noise == 0.5

    def test_instances_do_not_share_state(self):
        a = MotionSmoother()
        b = MotionSmoother()
        a.update((1.0, 1.0, 1.0), 0.0)

        assert b.history == ()
        assert_allclose(b.smoothed_position, [0.0, 0.0, -0.5])


class TestUpdate:
    """update() 測試"""

    def test_constant_input_converges(self):
        """測試固定輸入時收斂且判定為穩定"""
        smoother = MotionSmoother()
        target = np.array([0.2, -0.1, -1.0])

        for i in range(10):
            smoother.update(target, i * 0.01)
        assert smoother.is_stable() is True

        for i in range(10, 100):
            smoothed = smoother.update(target, i * 0.01)

        assert_allclose(smoothed, target, atol=1e-3)
        assert_allclose(smoother.velocity(), [0.0, 0.0, 0.0], atol=1e-9)

    def test_returns_smoothed_position(self):
        smoother = MotionSmoother()
        smoothed = smoother.update((1.0, 0.0, -0.5), 0.0)

        assert_allclose(smoothed, [0.103125, 0.0, -0.5])
        assert_allclose(smoother.smoothed_position, smoothed)

    def test_returned_vector_is_a_copy(self):
        smoother = MotionSmoother()
        smoothed = smoother.update((1.0, 0.0, -0.5), 0.0)
        smoothed[:] = 42.0

        assert_allclose(smoother.smoothed_position, [0.103125, 0.0, -0.5])

    def test_accepts_position_sample(self):
        smoother = MotionSmoother()
        sample = PositionSample.create([1.0, 0.0, -0.5], 0.0)
        assert_allclose(smoother.update_sample(sample), [0.103125, 0.0, -0.5])

    def test_velocity_from_timestamps(self):
        """測試速度由呼叫端提供的時間戳計算"""
        smoother = MotionSmoother()
        smoother.update((1.0, 0.0, -0.5), 0.0)
        smoother.update((2.0, 0.0, -0.5), 1.0)

        assert_allclose(smoother.velocity(), [1.0, 0.0, 0.0])
        assert smoother.state.velocity_uncertainty == pytest.approx(0.1)

    def test_same_timestamp_keeps_velocity(self):
        smoother = MotionSmoother()
        smoother.update((1.0, 0.0, -0.5), 0.0)
        smoother.update((2.0, 0.0, -0.5), 0.0)

        assert_allclose(smoother.velocity(), [0.0, 0.0, 0.0])

    def test_history_capacity(self):
        smoother = MotionSmoother()
        for i in range(15):
            smoother.update((0.0, 0.0, 0.0), float(i))

        assert len(smoother.history) == 10
        assert smoother.history[0].timestamp == 5.0

    def test_matches_pure_transition(self):
        """測試 update() 與 advance() 的結果一致"""
        config = SmootherConfig()
        smoother = MotionSmoother(config)
        state = FilterState.initial(config.initial_position)

        points = [(0.0, 0.1, -0.5), (0.05, 0.12, -0.5), (0.11, 0.1, -0.48), (0.2, 0.09, -0.5)]
        for i, point in enumerate(points):
            sample = PositionSample.create(point, i * 0.016)
            state, expected = advance(state, sample, config)
            assert_allclose(smoother.update(point, i * 0.016), expected)

        assert_allclose(smoother.estimated_position, state.estimated_position)


class TestPredict:
    """predict() 測試"""

    def test_zero_offset_is_estimated_position(self):
        smoother = MotionSmoother()
        smoother.update((0.3, 0.2, -0.4), 0.0)
        smoother.update((0.35, 0.25, -0.4), 0.02)

        assert_allclose(smoother.predict(0), smoother.estimated_position)

    def test_linear_extrapolation(self):
        smoother = MotionSmoother()
        smoother.update((1.0, 0.0, -0.5), 0.0)
        smoother.update((2.0, 0.0, -0.5), 1.0)

        expected = smoother.estimated_position + np.array([1.0, 0.0, 0.0]) * 0.5
        assert_allclose(smoother.predict(0.5), expected)

    def test_predict_does_not_mutate(self):
        smoother = MotionSmoother()
        smoother.update((1.0, 0.0, -0.5), 0.0)
        before = smoother.estimated_position

        smoother.predict(10.0)

        assert_allclose(smoother.estimated_position, before)


class TestPreFilters:
    """apply_jitter_reduction / apply_outlier_rejection"""

    def test_jitter_reduction_identity_without_history(self):
        smoother = MotionSmoother()
        smoother.update((0.0, 0.0, 0.0), 0.0)
        assert_allclose(smoother.apply_jitter_reduction((9.0, 9.0, 9.0)), [9.0, 9.0, 9.0])

    def test_jitter_reduction_median(self):
        smoother = MotionSmoother()
        for i, x in enumerate([0.0, 5.0, 1.0]):
            smoother.update((x, 0.0, 0.0), float(i))

        assert_allclose(smoother.apply_jitter_reduction((9.0, 9.0, 9.0)), [1.0, 0.0, 0.0])

    def test_outlier_rejection(self):
        """測試 5 筆相同樣本加上一個離群樣本時回傳平均"""
        smoother = MotionSmoother()
        for i in range(5):
            smoother.update((0.5, 0.5, -1.0), i * 0.01)

        assert_allclose(smoother.apply_outlier_rejection((50.0, -20.0, 3.0)), [0.5, 0.5, -1.0])
        assert_allclose(smoother.apply_outlier_rejection((0.5, 0.5, -1.0)), [0.5, 0.5, -1.0])

    def test_outlier_rejection_needs_five_samples(self):
        smoother = MotionSmoother()
        for i in range(4):
            smoother.update((0.5, 0.5, -1.0), i * 0.01)

        assert_allclose(smoother.apply_outlier_rejection((50.0, 0.0, 0.0)), [50.0, 0.0, 0.0])

    def test_pre_filters_do_not_touch_state(self):
        smoother = MotionSmoother()
        for i in range(5):
            smoother.update((0.5, 0.5, -1.0), i * 0.01)
        before = smoother.state

        smoother.apply_jitter_reduction((1.0, 1.0, 1.0))
        smoother.apply_outlier_rejection((1.0, 1.0, 1.0))

        assert smoother.state is before


class TestCalibrate:
    """calibrate() 測試"""

    def test_noise_floor(self):
        smoother = MotionSmoother()
        smoother.calibrate([(0.0, 0.0, 0.0), (2.0, 0.0, 0.0)])
        assert smoother.measurement_noise == pytest.approx(0.1)

    def test_noise_from_variance(self):
        smoother = MotionSmoother()
        smoother.calibrate([(0.0, 0.0, 0.0), (20.0, 0.0, 0.0)])
        assert smoother.measurement_noise == pytest.approx(10.0)

    def test_empty_samples_is_noop(self):
        smoother = MotionSmoother()
        smoother.calibrate([])
        assert smoother.measurement_noise == 0.5

    def test_calibration_affects_filtering(self):
        smoother = MotionSmoother(SmootherConfig(initial_position=(0.0, 0.0, 0.0)))
        smoother.calibrate([(0.0, 0.0, 0.0), (20.0, 0.0, 0.0)])

        smoother.update((1.0, 0.0, 0.0), 0.0)

        assert smoother.estimated_position[0] == pytest.approx(1.1 / 11.1)


class TestReset:
    """reset() 測試"""

    def test_reset_zeroes_state(self):
        smoother = MotionSmoother()
        for i in range(6):
            smoother.update((0.1 * i, 0.2, -0.5), i * 0.01)
        smoother.calibrate([(0.0, 0.0, 0.0), (20.0, 0.0, 0.0)])

        smoother.reset()

        assert_allclose(smoother.smoothed_position, [0.0, 0.0, 0.0])
        assert_allclose(smoother.estimated_position, [0.0, 0.0, 0.0])
        assert_allclose(smoother.velocity(), [0.0, 0.0, 0.0])
        assert_allclose(smoother.predict(1.0), [0.0, 0.0, 0.0])
        assert smoother.is_stable() is False
        assert smoother.history == ()
        assert smoother.state.position_uncertainty == 1.0
        assert smoother.state.velocity_uncertainty == 1.0
        # 校正結果屬於設定，reset 後保留
        assert smoother.measurement_noise == pytest.approx(10.0)

    def test_pre_filters_after_reset(self):
        smoother = MotionSmoother()
        for i in range(5):
            smoother.update((0.5, 0.5, -1.0), i * 0.01)
        smoother.reset()

        assert_allclose(smoother.apply_outlier_rejection((9.0, 9.0, 9.0)), [9.0, 9.0, 9.0])
        assert_allclose(smoother.apply_jitter_reduction((9.0, 9.0, 9.0)), [9.0, 9.0, 9.0])


class TestAdaptiveSmoothing:
    """依移動速度調整平滑係數"""

    def _fast_state(self):
        return FilterState(
            estimated_position=np.zeros(3),
            estimated_velocity=np.array([2.0, 0.0, 0.0]),
            smoothed_position=np.zeros(3),
        )

    def test_fast_movement_uses_higher_alpha(self):
        config = SmootherConfig(adaptive_smoothing=True)
        smoother = MotionSmoother(config, state=self._fast_state())
        assert smoother.movement_profile() is MovementProfile.FAST

        sample = PositionSample.create((1.0, 0.0, 0.0), 0.0)
        _, expected = advance(self._fast_state(), sample, config, smoothing_factor=0.3)

        assert_allclose(smoother.update_sample(sample), expected)

    def test_disabled_by_default(self):
        config = SmootherConfig()
        smoother = MotionSmoother(config, state=self._fast_state())

        sample = PositionSample.create((1.0, 0.0, 0.0), 0.0)
        _, expected = advance(self._fast_state(), sample, config)

        assert_allclose(smoother.update_sample(sample), expected)


class TestDebugInfo:
    """除錯資訊"""

    def test_snapshot(self):
        smoother = MotionSmoother()
        smoother.update((0.0, 0.0, -0.5), 0.0)

        info = smoother.debug_info()

        assert info.history_size == 1
        assert info.is_stable is False
        assert info.measurement_noise == 0.5
        assert info.movement is MovementProfile.SLOW
        assert info.position_uncertainty == pytest.approx(smoother.state.position_uncertainty)
        assert_allclose(info.current_position, smoother.smoothed_position)
        assert_allclose(info.estimated_position, smoother.estimated_position)

    def test_timing_callback(self):
        operations = []
        smoother = MotionSmoother(SmootherConfig(on_timing=lambda op, elapsed: operations.append(op)))
        smoother.update((0.0, 0.0, 0.0), 0.0)

        assert operations == ["MotionSmoother.update"]

    def test_timing_callback_for_calibrate(self):
        operations = []
        smoother = MotionSmoother(SmootherConfig(on_timing=lambda op, elapsed: operations.append(op)))
        smoother.calibrate([(0.0, 0.0, 0.0), (1.0, 0.0, 0.0)])

        assert operations == ["MotionSmoother.calibrate"]
