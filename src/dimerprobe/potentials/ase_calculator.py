#!/usr/bin/env python3
"""
DimerProbe - 外部 ASE 计算器适配模块

将任意 ASE 计算器（第三方模拟引擎）包装为 :class:`Potential`，
使双原子扫描可以与解析对势以同一方式驱动外部引擎。

每次评估都从 :class:`Cell` 新建 ``ase.Atoms``，计算器内部缓存不跨构型复用。
ASE 计算器把 ``atoms`` 与 ``results`` 保存为实例状态，因此对同一计算器的
调用以锁串行化；线程池并行扫描时各点的结果互不覆盖。
计算器抛出的任何异常（如底层模拟不收敛）原样传播。
"""

import logging
import threading

import numpy as np
from ase import Atoms

from dimerprobe.core.structure import Cell

from .base import Potential

logger = logging.getLogger(__name__)


def cell_to_ase(cell: Cell) -> Atoms:
    """将 :class:`Cell` 转换为 ``ase.Atoms``（晶格行向量即 ASE 晶胞）"""
    return Atoms(
        symbols=cell.get_symbols(),
        positions=cell.get_positions(),
        cell=cell.lattice_vectors,
        pbc=cell.pbc_enabled,
    )


class ASECalculatorPotential(Potential):
    """委托给外部 ASE 计算器的势能

    Parameters
    ----------
    calculator : ase.calculators.calculator.Calculator
        外部计算器实例
    cutoff : float, optional
        名义截断半径；缺省时读取 ``calculator.parameters["rc"]``

    Raises
    ------
    ValueError
        无法确定截断半径时
    """

    def __init__(self, calculator, cutoff: float | None = None):
        if cutoff is None:
            cutoff = getattr(calculator, "parameters", {}).get("rc")
        if cutoff is None:
            raise ValueError(
                f"无法从 {type(calculator).__name__} 读取截断半径，请显式传入 cutoff"
            )
        super().__init__(dict(getattr(calculator, "parameters", {})), float(cutoff))
        self.calculator = calculator
        self._lock = threading.Lock()
        logger.debug(
            f"Wrapped ASE calculator {type(calculator).__name__} with cutoff={cutoff}."
        )

    def _attach(self, cell: Cell) -> Atoms:
        atoms = cell_to_ase(cell)
        atoms.calc = self.calculator
        return atoms

    def calculate_energy(self, cell: Cell) -> float:
        with self._lock:
            return float(self._attach(cell).get_potential_energy())

    def calculate_forces(self, cell: Cell) -> np.ndarray:
        with self._lock:
            forces = np.array(self._attach(cell).get_forces(), dtype=np.float64)
        cell.set_forces(forces)
        return forces

    def __repr__(self):
        return f"ASECalculatorPotential({type(self.calculator).__name__}, cutoff={self.cutoff})"


def matscipy_ideal_brittle_solid(**params) -> ASECalculatorPotential:
    """matscipy 断裂力学模块中的 IdealBrittleSolid 计算器

    需要安装可选依赖 ``matscipy``。其能量按原子累加（见
    :mod:`dimerprobe.potentials.ideal_brittle_solid` 中关于 1/2 因子的说明），
    默认 ``rc = 1.01``。

    Parameters
    ----------
    **params
        透传给 ``matscipy.fracture_mechanics.idealbrittlesolid.IdealBrittleSolid``，
        如 ``k``、``a``、``rc``

    Returns
    -------
    ASECalculatorPotential
    """
    from matscipy.fracture_mechanics.idealbrittlesolid import IdealBrittleSolid

    calc = IdealBrittleSolid(**params)
    return ASECalculatorPotential(calc, cutoff=calc.parameters["rc"])
