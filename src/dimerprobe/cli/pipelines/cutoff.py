"""经验截断场景流水线

读取 ``cutoff.tol`` / ``cutoff.num`` / ``cutoff.start_fraction`` /
``cutoff.detector``，估计势的经验截断半径并写入 ``cutoff.json``。
"""

from __future__ import annotations

from ...dimer.convergence import (
    TailBandConvergence,
    TailMeanConvergence,
    WindowedMeanConvergence,
)
from ...dimer.cutoff import estimate_cutoff
from .common import write_json


def make_detector(spec):
    """按配置创建收敛检测器：``tail_mean``（默认）、``tail_band`` 或 ``windowed_mean``。"""
    spec = dict(spec or {}) if not isinstance(spec, str) else {"type": spec}
    kind = str(spec.pop("type", "tail_mean")).lower()
    if kind in ("tail_mean", "tail"):
        return TailMeanConvergence(min_tail=int(spec.get("min_tail", 2)))
    if kind in ("tail_band", "band"):
        return TailBandConvergence(min_tail=int(spec.get("min_tail", 2)))
    if kind in ("windowed_mean", "window"):
        return WindowedMeanConvergence(window=int(spec.get("window", 10)))
    raise ValueError(f"未知收敛检测器: {kind}")


def run_cutoff_pipeline(cfg, outdir: str, potential):
    """估计经验截断半径。

    Returns
    -------
    CutoffEstimate
        估计结果。

    Raises
    ------
    ConvergenceError
        力曲线未在容差内收敛。
    """
    options = cfg.section("cutoff")
    estimate = estimate_cutoff(
        potential,
        tol=float(options["tol"]),
        num=int(options["num"]),
        start_fraction=float(options["start_fraction"]),
        detector=make_detector(options.get("detector")),
        cell_size=float(cfg.get("dimer.cell_size")),
        workers=cfg.get("sweep.workers"),
    )
    payload = {"potential": repr(potential), **estimate.as_dict()}
    write_json(outdir, "cutoff.json", payload)
    return estimate
