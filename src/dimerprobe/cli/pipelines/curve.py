"""势能曲线场景流水线

在配置的间距扫描上评估能量与受力曲线，产出 ``curve.csv`` 与
``potential_curve.png``。
"""

from __future__ import annotations

import logging
import os

from ...dimer.evaluator import energy_curve, force_curve
from .common import dimer_from_config, sweep_from_config, write_columns

logger = logging.getLogger(__name__)


def run_curve_pipeline(cfg, outdir: str, potential):
    """运行能量/受力曲线扫描。

    Parameters
    ----------
    cfg : ConfigManager
        配置对象。
    outdir : str
        输出目录。
    potential : Potential
        势函数实例。

    Returns
    -------
    tuple[PotentialCurve, PotentialCurve]
        ``(energy, force)`` 曲线。
    """
    sweep = sweep_from_config(cfg)
    workers = cfg.get("sweep.workers")
    cell = dimer_from_config(cfg)
    logger.info(f"扫描 {sweep!r}，势: {potential!r}")

    energy = energy_curve(potential, sweep, cell=cell, workers=workers)
    force = force_curve(potential, sweep, cell=cell, workers=workers)

    columns = {**energy.as_columns(), **force.as_columns()}
    write_columns(outdir, "curve.csv", columns)

    if bool(cfg.get("plot")):
        from ...utils.plotting import plot_curves

        import matplotlib.pyplot as plt

        fig = plot_curves(energy, force, path=os.path.join(outdir, "potential_curve.png"))
        plt.close(fig)
    return energy, force
