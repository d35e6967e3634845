#!/usr/bin/env python3
"""
间距扫描模块

生成有序的原子间距序列，并把每个间距施加到双原子构型上：
原子 1 位于 x = -r/2，原子 2 位于 x = +r/2，其余坐标保持不变。
周期性晶胞中间距须小于半个最短盒长，否则最小镜像会把它折叠成更短的距离。

每个扫描点都在输入构型的独立副本上完成“施加-评估-丢弃”，
调用方的构型不会被修改，各点之间也不共享可变状态。
"""

import logging
from collections.abc import Iterator, Sequence

import numpy as np

from dimerprobe.core.dimer import validate_dimer
from dimerprobe.core.exceptions import MalformedGeometryError
from dimerprobe.core.structure import Cell

logger = logging.getLogger(__name__)


def check_separation(cell: Cell, r: float) -> None:
    """检查间距 ``r`` 在周期性晶胞中不会被最小镜像折叠

    Raises
    ------
    MalformedGeometryError
        启用周期性边界且 ``r >= 0.5 * min(盒长)``
    """
    if not cell.pbc_enabled:
        return
    limit = 0.5 * float(cell.get_box_lengths().min())
    if r >= limit:
        raise MalformedGeometryError(
            f"间距 r={r:g} 不小于半个最短盒长 {limit:g}，最小镜像会折叠该间距"
        )


def place_dimer(cell: Cell, r: float) -> Cell:
    """将双原子沿 x 轴对称放置于 ±r/2（就地修改）

    Parameters
    ----------
    cell : Cell
        双原子晶胞
    r : float
        目标间距

    Returns
    -------
    Cell
        同一个 ``cell`` 对象

    Raises
    ------
    MalformedGeometryError
        原子数不为 2，或间距超出最小镜像范围
    """
    if cell.num_atoms != 2:
        raise MalformedGeometryError(
            f"双原子扫描要求恰好 2 个原子，当前: {cell.num_atoms}"
        )
    check_separation(cell, r)
    positions = cell.get_positions()
    positions[0, 0] = -r / 2.0
    positions[1, 0] = +r / 2.0
    cell.set_positions(positions)
    return cell


class SeparationSweep:
    """有序的原子间距扫描

    Parameters
    ----------
    r : array_like
        间距序列，须非空、有限且全部为正

    Attributes
    ----------
    r : numpy.ndarray
        只读的间距数组

    Examples
    --------
    >>> sweep = SeparationSweep.linspace(0.6, 1.2, 4)
    >>> len(sweep)
    4
    """

    def __init__(self, r: Sequence[float] | np.ndarray):
        r = np.array(r, dtype=np.float64).ravel()
        if r.size == 0:
            raise ValueError("间距序列不能为空")
        if not np.all(np.isfinite(r)):
            raise ValueError("间距序列包含非有限值")
        if np.any(r <= 0):
            raise ValueError(f"间距必须全部为正，最小值: {r.min()}")
        r.setflags(write=False)
        self.r = r

    @classmethod
    def linspace(cls, start: float, stop: float, num: int) -> "SeparationSweep":
        """由 ``numpy.linspace(start, stop, num)`` 构造（包含端点）"""
        if num < 1:
            raise ValueError(f"扫描点数必须为正整数，得到: {num}")
        return cls(np.linspace(start, stop, num))

    def __len__(self):
        return self.r.size

    def __iter__(self):
        return iter(self.r)

    def __getitem__(self, index):
        return self.r[index]

    def __repr__(self):
        return f"SeparationSweep(n={len(self)}, r=[{self.r[0]:.4g}, ..., {self.r[-1]:.4g}])"

    def check_fits(self, cell: Cell) -> None:
        """检查最大间距可放入 ``cell``，见 :func:`check_separation`"""
        check_separation(cell, float(self.r.max()))

    def configure(self, cell: Cell, index: int) -> Cell:
        """返回第 ``index`` 个扫描点的构型（``cell`` 的独立副本）"""
        return place_dimer(cell.copy(), float(self.r[index]))

    def configurations(self, cell: Cell) -> Iterator[tuple[float, Cell]]:
        """依次产出 ``(r_i, 构型副本)``

        Raises
        ------
        MalformedGeometryError
            ``cell`` 不满足双原子扫描前提，或最大间距超出最小镜像范围
            （在产出任何构型之前检查）
        """
        validate_dimer(cell)
        self.check_fits(cell)
        logger.debug(f"Sweeping {self!r}")
        for i in range(len(self)):
            yield float(self.r[i]), self.configure(cell, i)
