"""
核心模块 - 基础数据结构、双原子构型、异常与配置管理
"""

__all__ = [
    "Atom",
    "Cell",
    "ConfigManager",
    "build_dimer",
    "validate_dimer",
    "DimerProbeError",
    "MalformedGeometryError",
    "ConvergenceError",
    "InvalidElasticDomainError",
]

_EXCEPTIONS = {
    "DimerProbeError",
    "MalformedGeometryError",
    "ConvergenceError",
    "InvalidElasticDomainError",
}


# 延迟导入避免循环依赖
def __getattr__(name):
    if name == "Atom":
        from .structure import Atom
        return Atom
    elif name == "Cell":
        from .structure import Cell
        return Cell
    elif name == "ConfigManager":
        from .config import ConfigManager
        return ConfigManager
    elif name == "build_dimer":
        from .dimer import build_dimer
        return build_dimer
    elif name == "validate_dimer":
        from .dimer import validate_dimer
        return validate_dimer
    elif name in _EXCEPTIONS:
        from . import exceptions
        return getattr(exceptions, name)
    else:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
