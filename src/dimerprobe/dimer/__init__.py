"""双原子扫描模块：间距扫描、曲线评估、收敛检测与经验截断估计"""

from .convergence import (
    ConvergenceDetector,
    TailBandConvergence,
    TailMeanConvergence,
    WindowedMeanConvergence,
    converged_mean,
)
from .cutoff import CutoffEstimate, cutoff_adjusted, estimate_cutoff, nominal_cutoff
from .evaluator import (
    PotentialCurve,
    energy_curve,
    force_curve,
    potential_energy,
    potential_forces,
)
from .sweep import SeparationSweep, check_separation, place_dimer

__all__ = [
    # 扫描
    "SeparationSweep",
    "place_dimer",
    "check_separation",
    # 评估
    "PotentialCurve",
    "potential_energy",
    "potential_forces",
    "energy_curve",
    "force_curve",
    # 收敛
    "ConvergenceDetector",
    "TailMeanConvergence",
    "TailBandConvergence",
    "WindowedMeanConvergence",
    "converged_mean",
    # 截断
    "CutoffEstimate",
    "cutoff_adjusted",
    "estimate_cutoff",
    "nominal_cutoff",
]
