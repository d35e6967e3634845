#!/usr/bin/env python3
"""
经验截断估计模块

势的名义截断往往偏保守或带有任意性。在名义截断附近，力曲线会在相互作用
可忽略后趋于平坦，收敛检测给出的位置即平坦化可靠开始的地方。下游需要
“真实相互作用范围”的模拟应使用此处的估计值而不是名义截断。

算法：在 ``[start_fraction * rc, rc]`` 上做 ``num`` 点扫描（默认 0.5 与 1000），
取原子 1 的 x 方向受力曲线交给收敛检测器，返回对应位置的间距。
"""

import logging
from dataclasses import dataclass

import numpy as np

from dimerprobe.potentials.base import Potential

from .convergence import ConvergenceDetector, TailMeanConvergence
from .evaluator import potential_forces
from .sweep import SeparationSweep

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CutoffEstimate:
    """经验截断估计结果

    Attributes
    ----------
    nominal_cutoff : float
        势声明的截断半径
    adjusted_cutoff : float
        经验截断半径
    index : int
        收敛位置在扫描中的索引
    converged_value : float
        收敛处的代表受力值
    tol : float
        使用的容差
    num : int
        扫描点数
    """

    nominal_cutoff: float
    adjusted_cutoff: float
    index: int
    converged_value: float
    tol: float
    num: int

    def as_dict(self) -> dict:
        return {
            "nominal_cutoff": self.nominal_cutoff,
            "adjusted_cutoff": self.adjusted_cutoff,
            "index": self.index,
            "converged_value": self.converged_value,
            "tol": self.tol,
            "num": self.num,
        }


def nominal_cutoff(potential: Potential) -> float:
    """读取势的名义截断半径

    Raises
    ------
    ValueError
        势没有 ``cutoff`` 属性，或其值不是正的有限数
    """
    rc = getattr(potential, "cutoff", None)
    if rc is None or not np.isfinite(rc) or rc <= 0:
        raise ValueError(f"{potential!r} 没有有效的截断半径: {rc}")
    return float(rc)


def estimate_cutoff(
    potential: Potential,
    tol: float = 1e-6,
    num: int = 1000,
    start_fraction: float = 0.5,
    detector: ConvergenceDetector | None = None,
    cell_size: float = 30.0,
    workers: int | None = None,
) -> CutoffEstimate:
    """估计势的经验截断半径并返回完整记录

    Parameters
    ----------
    potential : Potential
        势能（计算器），须带有 ``cutoff``
    tol : float, optional
        收敛容差，默认 1e-6
    num : int, optional
        扫描点数，默认 1000
    start_fraction : float, optional
        扫描起点占名义截断的比例，默认 0.5
    detector : ConvergenceDetector, optional
        收敛检测策略，默认 :class:`TailMeanConvergence`
    cell_size : float, optional
        双原子立方盒边长，默认 30.0
    workers : int, optional
        并行线程数

    Returns
    -------
    CutoffEstimate

    Raises
    ------
    ConvergenceError
        力曲线在整个扫描上都未在容差内收敛

    Notes
    -----
    三次样条截断下力在 ``rc`` 附近约按 :math:`(r_c - r)^2` 归零，1000 点扫描中
    最后一个非零受力仍在 1e-5 量级，默认容差 1e-6 必然抛出 ``ConvergenceError``。
    平滑截断的理想脆性固体应使用 :class:`TailBandConvergence` 与 ``tol=1e-3``；
    阶跃截断在 ``rc`` 处受力突变约 0.1，任何更小的容差都不会收敛。
    """
    if not 0.0 < start_fraction < 1.0:
        raise ValueError(f"start_fraction 必须位于 (0, 1)，得到: {start_fraction}")
    detector = detector or TailMeanConvergence()
    rc = nominal_cutoff(potential)
    sweep = SeparationSweep.linspace(start_fraction * rc, rc, num)
    forces_a1, _ = potential_forces(
        potential, sweep, cell_size=cell_size, workers=workers
    )
    value, index = detector.detect(forces_a1, tol)
    estimate = CutoffEstimate(
        nominal_cutoff=rc,
        adjusted_cutoff=float(sweep[index]),
        index=index,
        converged_value=value,
        tol=tol,
        num=num,
    )
    logger.info(
        f"Adjusted cutoff for {potential!r}: {estimate.adjusted_cutoff:.6g} "
        f"(nominal {rc:.6g}, tol={tol:g})"
    )
    return estimate


def cutoff_adjusted(potential: Potential, tol: float = 1e-6, **kwargs) -> float:
    """返回双原子在给定容差下可视为断开的间距 ``r*``

    其余参数同 :func:`estimate_cutoff`。
    """
    return estimate_cutoff(potential, tol=tol, **kwargs).adjusted_cutoff
