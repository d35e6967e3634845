#!/usr/bin/env python3
r"""
原子结构模块

提供双原子（dimer）势能探测所需的基础数据结构：原子与晶胞。
晶胞支持周期性边界条件与最小镜像约定，并以“晶格锁定”表示固定晶胞约束，
保证评估过程中盒子不会缩放。

最小镜像约定 (Minimum Image Convention)：

.. math::
    \mathbf{d}_{\min} = \mathbf{d} - \mathbf{L}\, \operatorname{round}(\mathbf{L}^{-1} \mathbf{d})

实现说明：本模块内部使用“行向量右乘”的等价实现，
即 :math:`\mathbf{s}^{\top} = \mathbf{d}^{\top}\,\mathbf{L}^{-\top}`。

Classes
-------
Atom
    单个原子，包含位置与受力
Cell
    晶胞，管理原子集合和晶格矢量

Functions
---------
_pair_displacements_numba
    JIT优化的原子对最小镜像位移计算

Notes
-----
长度单位沿用势函数的约化单位（IBS 势中 a = 1），能量单位同理。

Examples
--------
>>> from dimerprobe.core.structure import Atom, Cell
>>> import numpy as np
>>> atoms = [
...     Atom(0, "H", 1.008, [-0.5, 0, 0]),
...     Atom(1, "H", 1.008, [0.5, 0, 0]),
... ]
>>> cell = Cell(30.0 * np.eye(3), atoms)
>>> cell.num_atoms
2
"""

import logging

import numpy as np
from numba import jit

logger = logging.getLogger(__name__)


@jit(nopython=True)
def _pair_displacements_numba(positions, lattice_inv, lattice_vectors, pbc):
    """JIT优化的原子对位移计算

    对每个无序原子对 (i < j) 计算 :math:`\\mathbf{r}_j - \\mathbf{r}_i`，
    启用周期性边界时取最小镜像。

    Parameters
    ----------
    positions : numpy.ndarray
        原子位置数组 (N, 3)
    lattice_inv : numpy.ndarray
        晶格逆矩阵 (3, 3)，即 ``inv(L.T)``
    lattice_vectors : numpy.ndarray
        晶格矢量矩阵 (3, 3)，每行一个基矢
    pbc : bool
        是否使用最小镜像

    Returns
    -------
    tuple
        ``(i_idx, j_idx, displacements)``，长度均为 N(N-1)/2
    """
    n = positions.shape[0]
    n_pairs = n * (n - 1) // 2
    i_idx = np.empty(n_pairs, dtype=np.int64)
    j_idx = np.empty(n_pairs, dtype=np.int64)
    disp = np.empty((n_pairs, 3), dtype=np.float64)
    k = 0
    for i in range(n):
        for j in range(i + 1, n):
            d = positions[j] - positions[i]
            if pbc:
                frac = np.zeros(3)
                for a in range(3):
                    for b in range(3):
                        frac[a] += d[b] * lattice_inv[b, a]
                for a in range(3):
                    frac[a] = np.floor(frac[a] + 0.5)
                # 仅在跨越边界时平移，盒内位移保持原值
                for a in range(3):
                    for b in range(3):
                        d[a] -= frac[b] * lattice_vectors[b, a]
            i_idx[k] = i
            j_idx[k] = j
            disp[k] = d
            k += 1
    return i_idx, j_idx, disp


class Atom:
    """原子对象

    Parameters
    ----------
    id : int
        原子的唯一标识符
    symbol : str
        元素符号 (如 'H', 'Si')
    mass_amu : float
        原子质量 (amu)
    position : array_like
        初始位置，3D笛卡尔坐标

    Attributes
    ----------
    position : numpy.ndarray
        当前位置向量 (3,)
    force : numpy.ndarray
        最近一次势能评估写入的受力 (3,)
    """

    def __init__(
        self,
        id: int,
        symbol: str,
        mass_amu: float,
        position: np.ndarray,
    ) -> None:
        self.id = id
        self.symbol = symbol
        self.mass_amu = mass_amu
        self.position = np.array(position, dtype=np.float64)
        self.force = np.zeros(3, dtype=np.float64)

    def copy(self) -> "Atom":
        """创建 Atom 的深拷贝"""
        atom = Atom(
            id=self.id,
            symbol=self.symbol,
            mass_amu=self.mass_amu,
            position=self.position.copy(),
        )
        atom.force = self.force.copy()
        return atom


class Cell:
    r"""晶胞对象，管理原子集合和晶格结构

    Parameters
    ----------
    lattice_vectors : array_like
        3×3晶格矢量矩阵，每行为一个晶格矢量
    atoms : list of Atom
        晶胞中的原子列表
    pbc_enabled : bool, optional
        是否启用周期性边界条件，默认True

    Attributes
    ----------
    lattice_vectors : numpy.ndarray
        晶格矢量矩阵 (3, 3)
    atoms : list of Atom
        原子对象列表
    volume : float
        晶胞体积
    pbc_enabled : bool
        周期性边界条件标志
    lattice_locked : bool
        晶格锁定标志，即固定晶胞约束
    lattice_inv : numpy.ndarray
        晶格逆矩阵，用于坐标转换
    """

    def __init__(
        self, lattice_vectors: np.ndarray, atoms: list["Atom"], pbc_enabled: bool = True
    ) -> None:
        if not atoms:
            raise ValueError("原子列表不能为空")

        if not self._validate_lattice_vectors(lattice_vectors):
            raise ValueError("Invalid lattice vectors")

        self.lattice_vectors = np.array(lattice_vectors, dtype=np.float64)
        self.atoms = atoms
        self.pbc_enabled = pbc_enabled
        self.volume = self.calculate_volume()
        self.lattice_locked = False
        self.lattice_inv = np.linalg.inv(self.lattice_vectors.T)

        self._validate_atoms()

    def _validate_lattice_vectors(self, lattice_vectors: np.ndarray) -> bool:
        """验证晶格向量：3x3、可逆、体积为正"""
        if not isinstance(lattice_vectors, np.ndarray):
            lattice_vectors = np.array(lattice_vectors, dtype=np.float64)

        if lattice_vectors.shape != (3, 3):
            return False

        try:
            np.linalg.inv(lattice_vectors)
        except np.linalg.LinAlgError:
            return False

        return not np.linalg.det(lattice_vectors) <= 0

    def _validate_atoms(self) -> None:
        """验证原子属性的有效性

        Raises
        ------
        ValueError
            如果原子ID重复、质量非正或位置包含无效值
        """
        atom_ids = set()
        for atom in self.atoms:
            if atom.id in atom_ids:
                raise ValueError(f"原子ID {atom.id} 重复")
            atom_ids.add(atom.id)

            if atom.mass_amu <= 0:
                raise ValueError(
                    f"原子 {atom.id} 的质量必须为正数，当前: {atom.mass_amu}"
                )

            if not np.all(np.isfinite(atom.position)):
                raise ValueError(f"原子 {atom.id} 的位置包含无效值")

    def calculate_volume(self) -> float:
        """计算晶胞的体积"""
        return np.linalg.det(self.lattice_vectors)

    def get_box_lengths(self) -> np.ndarray:
        """返回模拟盒子在 x、y、z 方向的长度"""
        return np.linalg.norm(self.lattice_vectors, axis=1)

    def lock_lattice_vectors(self) -> None:
        """锁定晶格向量（固定晶胞约束）

        Notes
        -----
        锁定后，晶格向量将不能被修改，直到调用 :meth:`unlock_lattice_vectors`。
        """
        self.lattice_locked = True
        logger.debug("Lattice vectors have been locked.")

    def unlock_lattice_vectors(self) -> None:
        """解锁晶格向量"""
        self.lattice_locked = False
        logger.debug("Lattice vectors have been unlocked.")

    def set_lattice_vectors(self, lattice_vectors: np.ndarray) -> None:
        """设置新的晶格矢量

        Raises
        ------
        RuntimeError
            晶格已锁定时
        ValueError
            晶格矢量无效时
        """
        if self.lattice_locked:
            raise RuntimeError("晶格已锁定（固定晶胞约束），不能修改晶格矢量")
        if not self._validate_lattice_vectors(lattice_vectors):
            raise ValueError("Invalid lattice vectors")
        self.lattice_vectors = np.array(lattice_vectors, dtype=np.float64)
        self.lattice_inv = np.linalg.inv(self.lattice_vectors.T)
        self.volume = self.calculate_volume()

    def pair_displacements(self):
        """返回所有无序原子对 (i < j) 及其位移 :math:`r_j - r_i`

        Returns
        -------
        tuple of numpy.ndarray
            ``(i_idx, j_idx, displacements)``
        """
        return _pair_displacements_numba(
            np.ascontiguousarray(self.get_positions()),
            np.ascontiguousarray(self.lattice_inv),
            np.ascontiguousarray(self.lattice_vectors),
            self.pbc_enabled,
        )

    def get_positions(self) -> np.ndarray:
        """获取所有原子的位置，形状为 (num_atoms, 3)"""
        return np.array([atom.position for atom in self.atoms], dtype=np.float64)

    def get_forces(self) -> np.ndarray:
        """获取所有原子的受力，形状为 (num_atoms, 3)"""
        return np.array([atom.force for atom in self.atoms], dtype=np.float64)

    def get_symbols(self) -> list[str]:
        """获取元素符号列表"""
        return [atom.symbol for atom in self.atoms]

    def set_positions(self, positions: np.ndarray) -> None:
        """设置所有原子的笛卡尔坐标

        Parameters
        ----------
        positions : numpy.ndarray
            笛卡尔坐标数组，形状为(num_atoms, 3)
        """
        positions = np.asarray(positions, dtype=np.float64)
        if positions.shape != (len(self.atoms), 3):
            raise ValueError(
                f"位置数组形状错误: 期望({len(self.atoms)}, 3), 实际{positions.shape}"
            )

        for i, atom in enumerate(self.atoms):
            atom.position = positions[i].copy()

    def set_forces(self, forces: np.ndarray) -> None:
        """写入所有原子的受力"""
        forces = np.asarray(forces, dtype=np.float64)
        if forces.shape != (len(self.atoms), 3):
            raise ValueError(
                f"力数组形状错误: 期望({len(self.atoms)}, 3), 实际{forces.shape}"
            )
        for i, atom in enumerate(self.atoms):
            atom.force = forces[i].copy()

    @property
    def num_atoms(self):
        return len(self.atoms)

    def copy(self):
        """创建 Cell 的深拷贝"""
        atoms_copy = [atom.copy() for atom in self.atoms]
        cell_copy = Cell(self.lattice_vectors.copy(), atoms_copy, self.pbc_enabled)
        cell_copy.lattice_locked = self.lattice_locked
        return cell_copy
