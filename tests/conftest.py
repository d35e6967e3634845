"""
pytest配置文件 - 提供全局fixtures和测试配置
"""

import logging

import numpy as np
import pytest

from dimerprobe.core.dimer import build_dimer
from dimerprobe.core.structure import Atom, Cell
from dimerprobe.potentials.ideal_brittle_solid import IdealBrittleSolid
from dimerprobe.potentials.lennard_jones import LennardJonesPotential


@pytest.fixture
def dimer_cell():
    """固定晶胞的氢双原子，盒长 30"""
    return build_dimer("H", separation=1.0, cell_size=30.0)


@pytest.fixture
def three_atom_cell():
    """三原子晶胞，用于验证双原子前提检查"""
    atoms = [
        Atom(id=0, symbol="H", mass_amu=1.008, position=[0.0, 0.0, 0.0]),
        Atom(id=1, symbol="H", mass_amu=1.008, position=[1.0, 0.0, 0.0]),
        Atom(id=2, symbol="H", mass_amu=1.008, position=[2.0, 0.0, 0.0]),
    ]
    cell = Cell(30.0 * np.eye(3), atoms)
    cell.lock_lattice_vectors()
    return cell


@pytest.fixture
def ibs():
    """k=1, a=1, r_cut=1.2 的理想脆性固体对势（无截断调制）"""
    return IdealBrittleSolid(k=1.0, a=1.0, r_cut=1.2)


@pytest.fixture
def lj():
    """约化单位下的 Lennard-Jones 势，名义截断 2.5 sigma"""
    return LennardJonesPotential(epsilon=1.0, sigma=1.0, cutoff=2.5)



@pytest.fixture
def clean_root_logger():
    """恢复根日志器的处理器与级别，并关闭测试中新增的处理器"""
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    saved_handler_levels = [h.level for h in saved_handlers]
    yield root
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers = saved_handlers
    for handler, level in zip(saved_handlers, saved_handler_levels):
        handler.setLevel(level)
    root.setLevel(saved_level)


# 全局测试配置
def pytest_configure(config):
    """pytest全局配置"""
    # 设置numpy错误处理
    np.seterr(all="raise")


def pytest_runtest_setup(item):
    """每个测试前的设置"""
    np.random.seed(42)
