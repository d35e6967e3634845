#!/usr/bin/env python3
"""
DimerProbe - 势能基类模块

势能对象即双原子扫描所消费的“计算器”能力：给定构型，返回总能量与
每个原子的受力。扫描核心从不检查其内部实现。
"""

from abc import ABC, abstractmethod

import numpy as np

from dimerprobe.core.structure import Cell


class Potential(ABC):
    """势能计算的抽象基类。

    Parameters
    ----------
    parameters : dict
        势能参数字典（按具体模型定义）。
    cutoff : float
        势能名义截断距离。

    Notes
    -----
    - 所有具体势能模型至少需实现 ``calculate_forces`` 与 ``calculate_energy``。
    - 实现可以是解析对势，也可以委托给外部模拟引擎。
    """

    def __init__(self, parameters, cutoff):
        self.parameters = parameters
        self.cutoff = cutoff

    @abstractmethod
    def calculate_forces(self, cell: Cell) -> np.ndarray:
        """计算系统中所有原子的作用力。

        Parameters
        ----------
        cell : Cell
            晶胞与原子集合。

        Returns
        -------
        numpy.ndarray
            受力数组 (N, 3)。

        Notes
        -----
        实现同时将结果写入 :code:`cell.atoms[i].force`。
        """
        raise NotImplementedError

    @abstractmethod
    def calculate_energy(self, cell: Cell) -> float:
        """计算系统的总势能。

        Parameters
        ----------
        cell : Cell
            晶胞与原子集合。

        Returns
        -------
        float
            系统总势能。
        """
        raise NotImplementedError

    def __repr__(self):
        params = ", ".join(f"{k}={v}" for k, v in self.parameters.items())
        return f"{type(self).__name__}({params})"
