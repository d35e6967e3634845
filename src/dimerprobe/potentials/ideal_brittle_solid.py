#!/usr/bin/env python3
r"""
DimerProbe - 理想脆性固体 (Ideal Brittle Solid) 势模块

截断二次势，用于断裂力学中的裂纹扩展模拟：

.. math::
   V(r) = \tfrac{1}{2}\cdot\tfrac{1}{2}\,k\,(r-a)^2
        - \tfrac{1}{2}\cdot\tfrac{1}{2}\,k\,(r_c-a)^2,\qquad r < r_c

:math:`r \ge r_c` 时 :math:`V = 0`，因此 :math:`V(r_c) = 0` 严格成立。

额外的 1/2 因子用于对齐两种能量记账方式：matscipy 按原子累加
:math:`E = \sum_{ij} \tfrac{1}{2} V(r_{ij})`，本包按键累加
:math:`E = \sum_{i<j} V(r_{ij})`。该因子须保持不变以便与 matscipy 交叉验证。

参考截断值（领域经验，而非推导结果）：

- ``r_cut = 1.2``：裂纹形貌合理，能量极小化稳定
- ``r_cut = 1.01``：与 matscipy 的 IdealBrittleSolid 数值一致

References
----------
- J. R. Kermode et al., matscipy ``fracture_mechanics.idealbrittlesolid``.
"""

import logging

import numpy as np
from scipy.interpolate import CubicHermiteSpline

from .pair import CutoffFunction, CutoffModulatedPotential, PairPotential

logger = logging.getLogger(__name__)

IBS_CUTOFF_CRACK = 1.2
"""产生合理裂纹并可稳定极小化的截断半径。"""

IBS_CUTOFF_MATSCIPY = 1.01
"""与 matscipy IdealBrittleSolid 默认参数对应的截断半径。"""


class IdealBrittleSolid(PairPotential):
    """理想脆性固体截断二次对势

    Parameters
    ----------
    k : float
        键刚度，须为正
    a : float
        平衡键长，须为正
    r_cut : float
        截断半径，须大于 ``a``

    Raises
    ------
    ValueError
        参数不满足 ``r_cut > a > 0`` 且 ``k > 0``
    """

    def __init__(self, k: float = 1.0, a: float = 1.0, r_cut: float = IBS_CUTOFF_CRACK):
        if k <= 0:
            raise ValueError(f"刚度 k 必须为正数，得到: {k}")
        if a <= 0:
            raise ValueError(f"平衡键长 a 必须为正数，得到: {a}")
        if r_cut <= a:
            raise ValueError(f"截断半径 r_cut={r_cut} 必须大于平衡键长 a={a}")
        super().__init__({"k": k, "a": a}, r_cut)
        self.k = float(k)
        self.a = float(a)
        self.r_cut = float(r_cut)
        logger.debug(f"IdealBrittleSolid initialized with k={k}, a={a}, r_cut={r_cut}.")

    def pair_energy(self, r):
        r = np.asarray(r, dtype=np.float64)
        k, a, rc = self.k, self.a, self.r_cut
        v = 0.5 * 0.5 * k * (r - a) ** 2 - 0.5 * 0.5 * k * (rc - a) ** 2
        return np.where(r < rc, v, 0.0)

    def pair_derivative(self, r):
        r = np.asarray(r, dtype=np.float64)
        return np.where(r < self.r_cut, 0.5 * self.k * (r - self.a), 0.0)


class SplineCutoff(CutoffFunction):
    """三次 Hermite 样条平滑截断

    :math:`r \\le r_0` 取 1，:math:`r \\ge r_1` 取 0，区间内由
    ``scipy.interpolate.CubicHermiteSpline`` 连接，两端斜率为 0，
    因此调制后的力在 :math:`r_1` 处连续衰减到 0。

    ``r0 == r1`` 时退化为 :math:`r_1` 处的阶跃。
    """

    def __init__(self, r0: float, r1: float):
        if r0 > r1:
            raise ValueError(f"样条起点 r0={r0} 不能大于终点 r1={r1}")
        super().__init__(r1)
        self.r0 = float(r0)
        self.r1 = float(r1)
        self._spline = None
        if self.r1 > self.r0:
            self._spline = CubicHermiteSpline(
                [self.r0, self.r1], [1.0, 0.0], [0.0, 0.0]
            )

    def value(self, r):
        r = np.asarray(r, dtype=np.float64)
        out = np.where(r < self.r1, 1.0, 0.0)
        if self._spline is not None:
            inside = (r > self.r0) & (r < self.r1)
            out = np.where(inside, self._spline(np.clip(r, self.r0, self.r1)), out)
        return out

    def derivative(self, r):
        r = np.asarray(r, dtype=np.float64)
        if self._spline is None:
            return np.zeros_like(r)
        inside = (r > self.r0) & (r < self.r1)
        slope = self._spline.derivative()(np.clip(r, self.r0, self.r1))
        return np.where(inside, slope, 0.0)

    def __repr__(self):
        return f"SplineCutoff(r0={self.r0}, r1={self.r1})"


class StepFunction(CutoffFunction):
    """硬阶跃截断：:math:`r < r_c` 取 1，否则取 0

    仅用于对比测试，力在截断处不光滑。
    """

    def value(self, r):
        r = np.asarray(r, dtype=np.float64)
        return np.where(r < self.cutoff, 1.0, 0.0)

    def derivative(self, r):
        return np.zeros_like(np.asarray(r, dtype=np.float64))

    def __repr__(self):
        return f"StepFunction(r_cut={self.cutoff})"


def ideal_brittle_solid(
    k: float = 1.0,
    a: float = 1.0,
    r_cut: float = IBS_CUTOFF_CRACK,
    r_taper: float | None = None,
) -> CutoffModulatedPotential:
    """平滑截断的理想脆性固体势

    Parameters
    ----------
    k, a, r_cut : float
        见 :class:`IdealBrittleSolid`
    r_taper : float, optional
        样条截断起点，默认取 ``a`` 与 ``r_cut`` 的中点

    Returns
    -------
    CutoffModulatedPotential
        ``SplineCutoff(r_taper, r_cut) * IdealBrittleSolid(k, a, r_cut)``
    """
    if r_taper is None:
        r_taper = a + 0.5 * (r_cut - a)
    return SplineCutoff(r_taper, r_cut) * IdealBrittleSolid(k, a, r_cut)


def ideal_brittle_solid_step(
    k: float = 1.0, a: float = 1.0, r_cut: float = IBS_CUTOFF_CRACK
) -> CutoffModulatedPotential:
    """阶跃截断的理想脆性固体势（对比用）"""
    return StepFunction(r_cut) * IdealBrittleSolid(k, a, r_cut)
