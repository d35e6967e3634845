#!/usr/bin/env python3
"""
收敛检测测试
"""

import numpy as np
import pytest

from dimerprobe.core.exceptions import ConvergenceError
from dimerprobe.dimer.convergence import (
    TailBandConvergence,
    TailMeanConvergence,
    WindowedMeanConvergence,
    converged_mean,
)


class TestTailMeanConvergence:
    def test_first_index_close_to_tail_mean(self):
        value, index = TailMeanConvergence().detect([5.0, 3.0, 1.0, 1.0, 1.0, 1.0], 0.1)
        assert index == 2
        assert value == pytest.approx(1.0)

    def test_constant_sequence_converges_immediately(self):
        value, index = converged_mean(np.full(10, 0.25), tol=1e-12)
        assert index == 0
        assert value == pytest.approx(0.25)

    def test_last_point_is_not_trivially_converged(self):
        with pytest.raises(ConvergenceError):
            TailMeanConvergence().detect([3.0, 2.0, 1.0, 0.0], 1e-3)

    def test_min_tail_limits_candidates(self):
        values = [4.0, 2.0, 1.0, 1.0]
        assert TailMeanConvergence(min_tail=2).detect(values, 0.1)[1] == 2
        with pytest.raises(ConvergenceError):
            TailMeanConvergence(min_tail=3).detect(values, 0.1)

    def test_min_tail_below_two_rejected(self):
        with pytest.raises(ValueError):
            TailMeanConvergence(min_tail=1)

    def test_sequence_shorter_than_tail(self):
        with pytest.raises(ConvergenceError) as excinfo:
            TailMeanConvergence().detect([1.0], 1.0)
        assert excinfo.value.n_points == 1

    def test_error_records_tolerance(self):
        with pytest.raises(ConvergenceError) as excinfo:
            converged_mean([1.0, 1.0, 1.0, 0.0], tol=1e-6)
        assert excinfo.value.tol == pytest.approx(1e-6)
        assert excinfo.value.n_points == 4

    def test_smaller_tolerance_never_moves_index_earlier(self):
        x = np.linspace(0.0, 8.0, 400)
        values = np.exp(-x) * np.cos(3.0 * x)
        indices = [converged_mean(values, tol)[1] for tol in (1e-1, 1e-2, 1e-3, 1e-4)]
        assert indices == sorted(indices)

    @pytest.mark.parametrize("tol", [0.0, -1e-3])
    def test_non_positive_tolerance_rejected(self, tol):
        with pytest.raises(ValueError):
            converged_mean([1.0, 1.0, 1.0], tol=tol)

    def test_multidimensional_input_rejected(self):
        with pytest.raises(ValueError):
            converged_mean(np.ones((3, 3)), tol=1e-3)

    def test_callable(self):
        detector = TailMeanConvergence()
        assert detector([2.0, 1.0, 1.0], 0.5) == detector.detect([2.0, 1.0, 1.0], 0.5)


class TestWindowedMeanConvergence:
    def test_running_mean_settles(self):
        value, index = WindowedMeanConvergence(window=2).detect(
            [4.0, 2.0, 1.0, 1.0, 1.0, 1.0], 0.1
        )
        assert index == 4
        assert value == pytest.approx(1.0)

    def test_sequence_shorter_than_window(self):
        with pytest.raises(ConvergenceError):
            WindowedMeanConvergence(window=10).detect(np.ones(5), 1e-3)

    def test_smaller_tolerance_never_moves_index_earlier(self):
        x = np.linspace(0.0, 8.0, 400)
        values = np.exp(-x) * np.cos(3.0 * x)
        detector = WindowedMeanConvergence(window=5)
        indices = [detector.detect(values, tol)[1] for tol in (1e-2, 1e-3, 1e-4)]
        assert indices == sorted(indices)

    def test_invalid_window(self):
        with pytest.raises(ValueError):
            WindowedMeanConvergence(window=0)


class TestTailBandConvergence:
    def test_crossing_the_tail_mean_is_not_a_hit(self):
        values = [-1.0, 0.4, 1.0, 0.1, 0.1]
        # 位置 1 恰好等于其尾部均值 0.4，但尾部并未平坦
        assert TailMeanConvergence().detect(values, 0.1)[1] == 1
        value, index = TailBandConvergence().detect(values, 0.1)
        assert index == 3
        assert value == pytest.approx(0.1)

    def test_flat_tail_within_band(self):
        values = [3.0, 1.0, 0.02, -0.02, 0.01, 0.0]
        value, index = TailBandConvergence().detect(values, 0.05)
        assert index == 2
        assert value == pytest.approx(0.0025)

    def test_last_point_is_not_trivially_converged(self):
        with pytest.raises(ConvergenceError):
            TailBandConvergence().detect([3.0, 2.0, 1.0, 0.0], 0.4)

    def test_never_earlier_than_tail_mean(self):
        x = np.linspace(0.0, 8.0, 400)
        values = np.exp(-x) * np.cos(3.0 * x)
        for tol in (1e-1, 1e-2, 1e-3):
            assert (
                TailBandConvergence().detect(values, tol)[1]
                >= TailMeanConvergence().detect(values, tol)[1]
            )

    def test_smaller_tolerance_never_moves_index_earlier(self):
        x = np.linspace(0.0, 8.0, 400)
        values = np.exp(-x) * np.cos(3.0 * x)
        detector = TailBandConvergence()
        indices = [detector.detect(values, tol)[1] for tol in (1e-1, 1e-2, 1e-3, 1e-4)]
        assert indices == sorted(indices)

    def test_min_tail_below_two_rejected(self):
        with pytest.raises(ValueError):
            TailBandConvergence(min_tail=1)
