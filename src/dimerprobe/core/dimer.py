#!/usr/bin/env python3
"""
双原子构型模块

构建用于单独探测对势的双原子（dimer）构型，并检查扫描前提：
恰好两个原子、晶胞已固定（晶格锁定）。

基本使用：
    >>> from dimerprobe.core.dimer import build_dimer
    >>> cell = build_dimer("H", separation=0.8, cell_size=30.0)
    >>> cell.lattice_locked
    True
"""

import logging

import numpy as np

from dimerprobe.core.exceptions import MalformedGeometryError
from dimerprobe.core.structure import Atom, Cell

logger = logging.getLogger(__name__)

# 常见元素的原子质量 (amu)
ATOMIC_MASSES = {
    "H": 1.008,
    "He": 4.002602,
    "C": 12.0107,
    "Si": 28.0855,
    "Al": 26.9815386,
    "Ar": 39.948,
    "Cu": 63.546,
}


def get_atomic_mass(symbol: str) -> float:
    """根据元素符号获取原子质量（amu）

    Raises
    ------
    KeyError
        如果元素符号不在质量表中
    """
    try:
        return ATOMIC_MASSES[symbol]
    except KeyError as e:
        raise KeyError(f"Atomic mass for symbol '{symbol}' not found.") from e


def build_dimer(
    symbol: str = "H", separation: float = 1.0, cell_size: float = 30.0
) -> Cell:
    """构建沿 x 轴对称放置的双原子晶胞

    原子 1 位于 x = -separation/2，原子 2 位于 x = +separation/2，
    立方盒子边长为 ``cell_size``，并预先施加固定晶胞约束。

    Parameters
    ----------
    symbol : str, optional
        元素符号，默认 "H"
    separation : float, optional
        初始原子间距，默认 1.0
    cell_size : float, optional
        立方盒子边长，默认 30.0；应远大于势的截断半径，避免周期镜像干扰

    Returns
    -------
    Cell
        已锁定晶格的双原子晶胞

    Raises
    ------
    ValueError
        如果间距或盒子尺寸非正，或间距不小于半个盒长
    """
    if separation <= 0:
        raise ValueError(f"原子间距必须为正数，得到: {separation}")
    if cell_size <= 0:
        raise ValueError(f"盒子尺寸必须为正数，得到: {cell_size}")
    if separation >= 0.5 * cell_size:
        raise ValueError(
            f"原子间距 {separation} 超过半个盒长 {0.5 * cell_size}，最小镜像将失效"
        )

    mass = get_atomic_mass(symbol)
    atoms = [
        Atom(0, symbol, mass, [-separation / 2.0, 0.0, 0.0]),
        Atom(1, symbol, mass, [+separation / 2.0, 0.0, 0.0]),
    ]
    cell = Cell(cell_size * np.eye(3), atoms, pbc_enabled=True)
    cell.lock_lattice_vectors()
    logger.debug(
        f"Built {symbol} dimer: separation={separation}, cell_size={cell_size}"
    )
    return cell


def validate_dimer(cell: Cell) -> None:
    """检查构型满足双原子扫描前提

    Raises
    ------
    MalformedGeometryError
        原子数不为 2，或晶胞未施加固定晶胞约束
    """
    if cell.num_atoms != 2:
        raise MalformedGeometryError(
            f"双原子扫描要求恰好 2 个原子，当前: {cell.num_atoms}"
        )
    if not cell.lattice_locked:
        raise MalformedGeometryError("双原子扫描要求固定晶胞约束（晶格未锁定）")
