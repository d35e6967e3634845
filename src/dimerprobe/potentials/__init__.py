#!/usr/bin/env python3
"""
DimerProbe - 势能模块

提供双原子扫描所消费的势能（计算器）实现：解析对势、截断函数组合，
以及外部 ASE 计算器适配。采用延迟导入模式，避免未使用时加载 scipy/ase。
"""

__all__ = [
    "Potential",
    "PairPotential",
    "CutoffFunction",
    "CutoffModulatedPotential",
    "IdealBrittleSolid",
    "SplineCutoff",
    "StepFunction",
    "LennardJonesPotential",
    "ASECalculatorPotential",
    "matscipy_ideal_brittle_solid",
]

_LOCATIONS = {
    "Potential": "base",
    "PairPotential": "pair",
    "CutoffFunction": "pair",
    "CutoffModulatedPotential": "pair",
    "IdealBrittleSolid": "ideal_brittle_solid",
    "SplineCutoff": "ideal_brittle_solid",
    "StepFunction": "ideal_brittle_solid",
    "LennardJonesPotential": "lennard_jones",
    "ASECalculatorPotential": "ase_calculator",
    "matscipy_ideal_brittle_solid": "ase_calculator",
}


def __getattr__(name):
    if name in _LOCATIONS:
        from importlib import import_module

        module = import_module(f".{_LOCATIONS[name]}", __name__)
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
