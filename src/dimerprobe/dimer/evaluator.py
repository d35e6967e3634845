#!/usr/bin/env python3
"""
势能曲线评估模块

在间距扫描上驱动势能（计算器），得到与输入间距一一对齐的能量或受力曲线。

- :func:`potential_energy` 返回每个间距下的总能量
- :func:`potential_forces` 返回两个原子受力的 x 分量（键轴为 x，
  其余分量按对称性应为 0，直接舍弃而不校验）

计算器抛出的异常原样传播，不重试；任一点失败即整条曲线作废。
``workers > 1`` 时使用线程池并行评估，各点使用独立构型副本，输出顺序与输入一致。
"""

import concurrent.futures as _cf
import logging
from dataclasses import dataclass

import numpy as np

from dimerprobe.core.dimer import build_dimer, validate_dimer
from dimerprobe.core.structure import Cell
from dimerprobe.potentials.base import Potential

from .sweep import SeparationSweep

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class PotentialCurve:
    """扫描结果：间距与对应输出，按索引对齐

    Attributes
    ----------
    r : numpy.ndarray
        间距
    values : numpy.ndarray
        能量，或原子 1 受力的 x 分量
    values_atom2 : numpy.ndarray | None
        原子 2 受力的 x 分量（仅受力曲线）
    quantity : str
        ``"energy"`` 或 ``"force"``
    """

    r: np.ndarray
    values: np.ndarray
    values_atom2: np.ndarray | None = None
    quantity: str = "energy"

    def __post_init__(self):
        if len(self.r) != len(self.values):
            raise ValueError(
                f"间距与数值长度不一致: {len(self.r)} != {len(self.values)}"
            )

    def __len__(self):
        return len(self.r)

    def as_columns(self) -> dict[str, np.ndarray]:
        """以列字典形式导出，便于写表或绘图"""
        cols = {"r": self.r, self.quantity: self.values}
        if self.values_atom2 is not None:
            cols[f"{self.quantity}_atom2"] = self.values_atom2
        return cols


def _as_sweep(r) -> SeparationSweep:
    return r if isinstance(r, SeparationSweep) else SeparationSweep(r)


def _prepare_cell(cell: Cell | None, symbol: str, cell_size: float) -> Cell:
    if cell is None:
        cell = build_dimer(symbol, cell_size=cell_size)
    validate_dimer(cell)
    return cell


def _evaluate(sweep: SeparationSweep, cell: Cell, func, workers: int | None) -> list:
    """对每个扫描点调用 ``func(构型副本)``，按输入顺序返回结果"""
    if workers is None or workers <= 1:
        return [func(config) for _, config in sweep.configurations(cell)]

    sweep.check_fits(cell)
    logger.debug(f"Evaluating {len(sweep)} sweep points on {workers} threads")
    with _cf.ThreadPoolExecutor(max_workers=workers) as pool:
        # map 保持输入顺序；任一点的异常在取结果时原样抛出
        return list(pool.map(lambda i: func(sweep.configure(cell, i)), range(len(sweep))))


def potential_energy(
    potential: Potential,
    r,
    cell: Cell | None = None,
    cell_size: float = 30.0,
    symbol: str = "H",
    workers: int | None = None,
) -> np.ndarray:
    """计算给定间距序列上的双原子能量

    Parameters
    ----------
    potential : Potential
        势能（计算器）
    r : array_like or SeparationSweep
        间距序列
    cell : Cell, optional
        双原子构型；缺省时以 ``build_dimer(symbol, cell_size=cell_size)`` 构建
    cell_size : float, optional
        缺省构型的立方盒边长，默认 30.0
    symbol : str, optional
        缺省构型的元素符号，默认 "H"
    workers : int, optional
        并行线程数；``None`` 或 1 表示顺序评估

    Returns
    -------
    numpy.ndarray
        能量数组，长度与顺序同 ``r``

    Raises
    ------
    MalformedGeometryError
        构型不是固定晶胞的双原子
    """
    sweep = _as_sweep(r)
    cell = _prepare_cell(cell, symbol, cell_size)
    energies = _evaluate(sweep, cell, potential.calculate_energy, workers)
    return np.array(energies, dtype=np.float64)


def potential_forces(
    potential: Potential,
    r,
    cell: Cell | None = None,
    cell_size: float = 30.0,
    symbol: str = "H",
    workers: int | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """计算给定间距序列上两个原子受力的 x 分量

    参数同 :func:`potential_energy`。

    Returns
    -------
    tuple of numpy.ndarray
        ``(forces_a1, forces_a2)``：原子 1 与原子 2 的 x 方向受力
    """
    sweep = _as_sweep(r)
    cell = _prepare_cell(cell, symbol, cell_size)

    def _force_x(config):
        f = np.asarray(potential.calculate_forces(config), dtype=np.float64)
        return f[0, 0], f[1, 0]

    pairs = _evaluate(sweep, cell, _force_x, workers)
    forces = np.array(pairs, dtype=np.float64).reshape(len(sweep), 2)
    return forces[:, 0].copy(), forces[:, 1].copy()


def energy_curve(potential: Potential, r, **kwargs) -> PotentialCurve:
    """能量曲线，参数同 :func:`potential_energy`"""
    sweep = _as_sweep(r)
    values = potential_energy(potential, sweep, **kwargs)
    return PotentialCurve(r=np.array(sweep.r), values=values, quantity="energy")


def force_curve(potential: Potential, r, **kwargs) -> PotentialCurve:
    """受力曲线，参数同 :func:`potential_forces`"""
    sweep = _as_sweep(r)
    f1, f2 = potential_forces(potential, sweep, **kwargs)
    return PotentialCurve(
        r=np.array(sweep.r), values=f1, values_atom2=f2, quantity="force"
    )
