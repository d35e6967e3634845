"""
DimerProbe - 双原子对势探测器

在受控的双原子构型上评估对势，提取能量/受力曲线、经验收敛截断半径，
以及断裂力学中理想脆性固体势的弹性常数。
"""

__version__ = "1.0.0"

from . import core, dimer, elastic, potentials, utils

__all__ = ["core", "potentials", "dimer", "elastic", "utils"]
