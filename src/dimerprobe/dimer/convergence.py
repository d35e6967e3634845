#!/usr/bin/env python3
r"""
收敛检测模块

给定数值序列与容差，返回序列“稳定下来”的位置 ``(value, index)``。
检测策略可替换，接口统一为 :meth:`ConvergenceDetector.detect`。

默认策略 :class:`TailMeanConvergence`（尾部均值）：

.. math::
   i_c = \min\Big\{\, i \;:\; \Big|\,x_i - \frac{1}{n-i}\sum_{j\ge i} x_j\Big| < \mathrm{tol} \Big\}

即从序列起点向外扫描，第一个与其后全部数据均值相差小于容差的位置。
尾部至少包含 ``min_tail`` 个点，因此最后一个点不会因“与自身均值相等”
而被平凡地判为收敛。

:class:`TailBandConvergence` 要求尾部全部点都落在尾部均值的容差带内，
:class:`WindowedMeanConvergence` 比较相邻滑动窗口均值。

所有策略都满足：容差减小时，满足条件的位置集合只会缩小，
返回的索引不减。找不到满足条件的位置时抛出 :class:`ConvergenceError`，
而不是回退到边界索引。
"""

import logging
from abc import ABC, abstractmethod

import numpy as np

from dimerprobe.core.exceptions import ConvergenceError

logger = logging.getLogger(__name__)


class ConvergenceDetector(ABC):
    """收敛检测策略基类"""

    @abstractmethod
    def criterion(self, values: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """返回 ``(偏差, 代表值)``：每个位置的判据偏差及对应的收敛值

        不可判定的位置偏差为 ``inf``。
        """
        raise NotImplementedError

    def detect(self, values, tol: float) -> tuple[float, int]:
        """检测序列收敛位置

        Parameters
        ----------
        values : array_like
            一维数值序列
        tol : float
            收敛容差，须为正

        Returns
        -------
        tuple
            ``(value, index)``：收敛值与收敛位置

        Raises
        ------
        ValueError
            容差非正或序列不是一维
        ConvergenceError
            在整个序列上都未满足收敛判据
        """
        if not tol > 0:
            raise ValueError(f"收敛容差必须为正数，得到: {tol}")
        values = np.asarray(values, dtype=np.float64)
        if values.ndim != 1:
            raise ValueError(f"序列必须是一维数组，当前形状: {values.shape}")

        deviation, representative = self.criterion(values)
        hits = np.flatnonzero(deviation < tol)
        if hits.size == 0:
            raise ConvergenceError(
                f"{type(self).__name__}: 序列（{values.size} 点）在容差 {tol:g} 内未收敛",
                tol=tol,
                n_points=values.size,
            )
        index = int(hits[0])
        value = float(representative[index])
        logger.debug(
            f"{type(self).__name__} converged at index {index} (value={value:.6g}, tol={tol:g})"
        )
        return value, index

    def __call__(self, values, tol: float) -> tuple[float, int]:
        return self.detect(values, tol)


class TailMeanConvergence(ConvergenceDetector):
    """尾部均值判据：:math:`|x_i - \\mathrm{mean}(x_{i:})| < \\mathrm{tol}`

    Parameters
    ----------
    min_tail : int, optional
        尾部最少点数，默认 2，不得小于 2
    """

    def __init__(self, min_tail: int = 2):
        if min_tail < 2:
            raise ValueError(f"min_tail 不得小于 2，得到: {min_tail}")
        self.min_tail = int(min_tail)

    def criterion(self, values):
        n = values.size
        deviation = np.full(n, np.inf)
        means = np.full(n, np.nan)
        if n < self.min_tail:
            return deviation, means
        suffix_sums = np.cumsum(values[::-1])[::-1]
        counts = np.arange(n, 0, -1, dtype=np.float64)
        tail_means = suffix_sums / counts
        valid = slice(0, n - self.min_tail + 1)
        means[valid] = tail_means[valid]
        deviation[valid] = np.abs(values[valid] - tail_means[valid])
        return deviation, means

    def __repr__(self):
        return f"TailMeanConvergence(min_tail={self.min_tail})"


class TailBandConvergence(TailMeanConvergence):
    """尾部带宽判据：尾部全部点都落在尾部均值 ``±tol`` 之内

    .. math::
       \\max_{j \\ge i} |x_j - \\mathrm{mean}(x_{i:})| < \\mathrm{tol}

    与 :class:`TailMeanConvergence` 不同，曲线穿过尾部均值的位置不会被误判为
    收敛，只有其后整段都已平坦时才命中。适合在截断附近缓慢归零的力曲线。

    Parameters
    ----------
    min_tail : int, optional
        尾部最少点数，默认 2，不得小于 2
    """

    def criterion(self, values):
        deviation, means = super().criterion(values)
        n = values.size
        if n < self.min_tail:
            return deviation, means
        suffix_max = np.maximum.accumulate(values[::-1])[::-1]
        suffix_min = np.minimum.accumulate(values[::-1])[::-1]
        valid = slice(0, n - self.min_tail + 1)
        m = means[valid]
        deviation[valid] = np.maximum(suffix_max[valid] - m, m - suffix_min[valid])
        return deviation, means

    def __repr__(self):
        return f"TailBandConvergence(min_tail={self.min_tail})"


class WindowedMeanConvergence(ConvergenceDetector):
    """滑动窗口均值判据

    以长度为 ``window`` 的尾随窗口计算滑动均值 :math:`m_i`，
    第一个满足 :math:`|m_i - m_{i-1}| < \\mathrm{tol}` 的位置即为收敛点。

    Parameters
    ----------
    window : int, optional
        窗口长度，默认 10
    """

    def __init__(self, window: int = 10):
        if window < 1:
            raise ValueError(f"窗口长度必须为正整数，得到: {window}")
        self.window = int(window)

    def criterion(self, values):
        n = values.size
        w = self.window
        deviation = np.full(n, np.inf)
        means = np.full(n, np.nan)
        if n < w + 1:
            return deviation, means
        csum = np.concatenate(([0.0], np.cumsum(values)))
        running = (csum[w:] - csum[:-w]) / w  # running[k] 对应位置 k + w - 1
        means[w - 1 :] = running
        deviation[w:] = np.abs(np.diff(running))
        return deviation, means

    def __repr__(self):
        return f"WindowedMeanConvergence(window={self.window})"


def converged_mean(values, tol: float = 1e-3) -> tuple[float, int]:
    """以默认尾部均值判据检测收敛，返回 ``(value, index)``"""
    return TailMeanConvergence().detect(values, tol)
