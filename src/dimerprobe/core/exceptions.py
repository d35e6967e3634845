"""
DimerProbe 异常类型

所有失败都局限于单次调用，不存在全局错误状态。外部计算器抛出的异常
原样向上传播，不在此包装。
"""

__all__ = [
    "DimerProbeError",
    "MalformedGeometryError",
    "ConvergenceError",
    "InvalidElasticDomainError",
]


class DimerProbeError(Exception):
    """DimerProbe 异常基类"""


class MalformedGeometryError(DimerProbeError, ValueError):
    """几何构型不满足双原子扫描前提（原子数不为 2 或晶胞未固定）"""


class ConvergenceError(DimerProbeError, RuntimeError):
    """曲线在给定容差内始终未收敛

    Attributes
    ----------
    tol : float
        使用的收敛容差。
    n_points : int
        被检测序列的长度。
    """

    def __init__(self, message: str, tol: float | None = None, n_points: int = 0):
        super().__init__(message)
        self.tol = tol
        self.n_points = n_points


class InvalidElasticDomainError(DimerProbeError, ValueError):
    """弹性参数超出物理定义域（例如泊松比 >= 0.5 导致体积模量发散）"""
