#!/usr/bin/env python3
r"""
DimerProbe - 对势与截断函数模块

对势的总能量按无序原子对累加一次（键能约定）：

.. math::
   E = \sum_{i<j} V(r_{ij})

原子 :math:`i` 受力为

.. math::
   \mathbf{F}_i = \sum_{j} V'(r_{ij})\,\frac{\mathbf{r}_j - \mathbf{r}_i}{r_{ij}}

截断函数 :math:`f_c(r)` 与对势相乘得到调制后的对势：

.. math::
   \tilde V(r) = f_c(r)\,V(r),\qquad
   \tilde V'(r) = f_c'(r)\,V(r) + f_c(r)\,V'(r)

写法 ``SplineCutoff(r0, r1) * pair`` 即构造该乘积。
"""

import logging
from abc import ABC, abstractmethod

import numpy as np

from dimerprobe.core.structure import Cell

from .base import Potential

logger = logging.getLogger(__name__)


class PairPotential(Potential):
    """解析对势基类

    子类只需给出向量化的 :meth:`pair_energy` 与 :meth:`pair_derivative`，
    能量与受力的原子对累加由本类完成（最小镜像约定）。
    """

    @abstractmethod
    def pair_energy(self, r: np.ndarray) -> np.ndarray:
        """对势 :math:`V(r)`，按元素作用于距离数组"""
        raise NotImplementedError

    @abstractmethod
    def pair_derivative(self, r: np.ndarray) -> np.ndarray:
        """对势导数 :math:`dV/dr`，按元素作用于距离数组"""
        raise NotImplementedError

    def __call__(self, r):
        return self.pair_energy(np.asarray(r, dtype=np.float64))

    def _pairs_within_cutoff(self, cell: Cell):
        i_idx, j_idx, disp = cell.pair_displacements()
        r = np.sqrt(np.sum(disp * disp, axis=1))
        mask = r < self.cutoff
        return i_idx[mask], j_idx[mask], disp[mask], r[mask]

    def calculate_energy(self, cell: Cell) -> float:
        _, _, _, r = self._pairs_within_cutoff(cell)
        if r.size == 0:
            return 0.0
        return float(np.sum(self.pair_energy(r)))

    def calculate_forces(self, cell: Cell) -> np.ndarray:
        i_idx, j_idx, disp, r = self._pairs_within_cutoff(cell)
        forces = np.zeros((cell.num_atoms, 3), dtype=np.float64)
        if r.size:
            pair_forces = (self.pair_derivative(r) / r)[:, None] * disp
            np.add.at(forces, i_idx, pair_forces)
            np.add.at(forces, j_idx, -pair_forces)
        cell.set_forces(forces)
        return forces


class CutoffFunction(ABC):
    """截断函数基类：在 ``cutoff`` 处（及之后）取值为 0 的调制因子"""

    def __init__(self, cutoff: float):
        self.cutoff = float(cutoff)

    @abstractmethod
    def value(self, r: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    @abstractmethod
    def derivative(self, r: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def __mul__(self, other):
        if not isinstance(other, PairPotential):
            return NotImplemented
        return CutoffModulatedPotential(self, other)


class CutoffModulatedPotential(PairPotential):
    """截断函数调制后的对势 :math:`f_c(r)\\,V(r)`

    Parameters
    ----------
    cutoff_function : CutoffFunction
        调制因子
    pair : PairPotential
        被调制的对势

    Notes
    -----
    截断半径取两者较小者。
    """

    def __init__(self, cutoff_function: CutoffFunction, pair: PairPotential):
        self.cutoff_function = cutoff_function
        self.pair = pair
        super().__init__(
            dict(pair.parameters), min(cutoff_function.cutoff, pair.cutoff)
        )
        logger.debug(f"Built modulated potential {self!r} with cutoff={self.cutoff}")

    def pair_energy(self, r):
        return self.cutoff_function.value(r) * self.pair.pair_energy(r)

    def pair_derivative(self, r):
        fc = self.cutoff_function.value(r)
        dfc = self.cutoff_function.derivative(r)
        return dfc * self.pair.pair_energy(r) + fc * self.pair.pair_derivative(r)

    def __repr__(self):
        return f"{self.cutoff_function!r} * {self.pair!r}"
