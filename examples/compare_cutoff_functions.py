# examples/compare_cutoff_functions.py

"""
比较理想脆性固体在不同截断函数下的能量与受力曲线，并估计经验截断半径。

运行::

    python examples/compare_cutoff_functions.py
"""

import logging

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from dimerprobe.core.exceptions import ConvergenceError
from dimerprobe.dimer import TailBandConvergence, cutoff_adjusted, force_curve
from dimerprobe.potentials.ideal_brittle_solid import (
    IdealBrittleSolid,
    ideal_brittle_solid,
    ideal_brittle_solid_step,
)
from dimerprobe.utils.log_config import setup_logging
from dimerprobe.utils.plotting import plot_potential

logger = logging.getLogger(__name__)


def main() -> None:
    setup_logging()
    potentials = {
        "raw": IdealBrittleSolid(k=1.0, a=1.0, r_cut=1.2),
        "step": ideal_brittle_solid_step(k=1.0, a=1.0, r_cut=1.2),
        "spline": ideal_brittle_solid(k=1.0, a=1.0, r_cut=1.2),
    }
    r = np.linspace(0.6, 1.4, 400)

    fig, (ax_e, ax_f) = plt.subplots(1, 2, figsize=(12, 5))
    for label, potential in potentials.items():
        plot_potential(potential, r=r, ax=ax_e)
        curve = force_curve(potential, r)
        ax_f.plot(curve.r, curve.values, label=label)
        try:
            # 样条截断使力按 (rc - r)^2 归零，默认容差 1e-6 下无法收敛
            r_star = cutoff_adjusted(potential, tol=1e-3, detector=TailBandConvergence())
            logger.info(f"{label}: r* = {r_star:.4f} (nominal {potential.cutoff})")
        except ConvergenceError as e:
            logger.warning(f"{label}: {e}")
    ax_f.set_xlabel("separation, r")
    ax_f.set_ylabel("Force on atom 1, $F_x$")
    ax_f.legend()
    fig.savefig("ibs_cutoff_functions.png", dpi=150, bbox_inches="tight")
    plt.close(fig)


if __name__ == "__main__":
    main()
