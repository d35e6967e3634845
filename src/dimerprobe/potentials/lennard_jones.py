#!/usr/bin/env python3
r"""
DimerProbe - Lennard-Jones 势模块

Lennard–Jones (12–6) 势用于近似描述惰性原子间的范德华作用：

.. math::
   V(r) = 4\,\varepsilon\Big[\Big(\frac{\sigma}{r}\Big)^{12} - \Big(\frac{\sigma}{r}\Big)^6\Big]

在 :math:`r \ge r_c` 处直接截断（不平移）。由于其力随距离连续衰减，
名义截断往往偏保守，是经验截断估计的典型对象。

References
----------
- J. E. Jones (1924), On the Determination of Molecular Fields.
  Proceedings of the Royal Society A, 106(738), 441–462. doi:10.1098/rspa.1924.0081
"""

import logging

import numpy as np

from .pair import PairPotential

logger = logging.getLogger(__name__)


class LennardJonesPotential(PairPotential):
    r"""Lennard–Jones (12–6) 截断对势

    Parameters
    ----------
    epsilon : float
        势阱深度 epsilon
    sigma : float
        零势能点对应长度 sigma
    cutoff : float
        截断距离
    """

    def __init__(self, epsilon: float = 1.0, sigma: float = 1.0, cutoff: float = 2.5):
        if epsilon <= 0 or sigma <= 0:
            raise ValueError(
                f"epsilon 与 sigma 必须为正数，得到 epsilon={epsilon}, sigma={sigma}"
            )
        if cutoff <= 0:
            raise ValueError(f"截断距离必须为正数，得到: {cutoff}")
        super().__init__({"epsilon": epsilon, "sigma": sigma}, cutoff)
        logger.debug(
            f"Lennard-Jones Potential initialized with epsilon={epsilon}, sigma={sigma}, cutoff={cutoff}."
        )

    def pair_energy(self, r):
        r = np.asarray(r, dtype=np.float64)
        sr6 = (self.parameters["sigma"] / r) ** 6
        v = 4.0 * self.parameters["epsilon"] * (sr6 * sr6 - sr6)
        return np.where(r < self.cutoff, v, 0.0)

    def pair_derivative(self, r):
        r = np.asarray(r, dtype=np.float64)
        sr6 = (self.parameters["sigma"] / r) ** 6
        # dV/dr = -24 epsilon / r * (2 sr12 - sr6)
        dv = -24.0 * self.parameters["epsilon"] / r * (2.0 * sr6 * sr6 - sr6)
        return np.where(r < self.cutoff, dv, 0.0)
