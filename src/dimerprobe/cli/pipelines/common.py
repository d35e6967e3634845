"""CLI 场景通用工具

提供势函数解析、双原子构型与扫描参数读取、结果落盘等工具函数，
供各个场景流水线复用（curve/cutoff/elastic）。

Notes
-----
这些函数面向 CLI 级别的拼装逻辑，避免在核心库中引入场景耦合。
"""

from __future__ import annotations

import csv
import json
import logging
import os

from ...core.dimer import build_dimer
from ...dimer.sweep import SeparationSweep
from ...potentials.ideal_brittle_solid import (
    IBS_CUTOFF_CRACK,
    IBS_CUTOFF_MATSCIPY,
    IdealBrittleSolid,
    ideal_brittle_solid,
    ideal_brittle_solid_step,
)

logger = logging.getLogger(__name__)


def make_potential(kind: str, params: dict | None = None):
    """按字符串创建势函数实例。

    Parameters
    ----------
    kind : str
        势函数标识；支持 'ibs'（样条截断）、'ibs_step'（阶跃截断）、
        'ibs_raw'（无调制）、'lj'、'matscipy_ibs'（大小写不敏感）。
    params : dict, optional
        势参数，如 ``{"k": 1.0, "a": 1.0, "r_cut": 1.2}``。

    Returns
    -------
    Potential
        势函数对象实例。
    """
    p = dict(params or {})
    k = kind.strip().lower()
    if k in ("ibs", "ideal_brittle_solid"):
        return ideal_brittle_solid(
            k=float(p.get("k", 1.0)),
            a=float(p.get("a", 1.0)),
            r_cut=float(p.get("r_cut", IBS_CUTOFF_CRACK)),
            r_taper=p.get("r_taper"),
        )
    if k in ("ibs_step", "ideal_brittle_solid_step"):
        return ideal_brittle_solid_step(
            k=float(p.get("k", 1.0)),
            a=float(p.get("a", 1.0)),
            r_cut=float(p.get("r_cut", IBS_CUTOFF_CRACK)),
        )
    if k in ("ibs_raw",):
        return IdealBrittleSolid(
            k=float(p.get("k", 1.0)),
            a=float(p.get("a", 1.0)),
            r_cut=float(p.get("r_cut", IBS_CUTOFF_CRACK)),
        )
    if k in ("lj", "lennard_jones"):
        from ...potentials.lennard_jones import LennardJonesPotential

        return LennardJonesPotential(
            epsilon=float(p.get("epsilon", 1.0)),
            sigma=float(p.get("sigma", 1.0)),
            cutoff=float(p.get("cutoff", 2.5)),
        )
    if k in ("matscipy_ibs", "matscipy"):
        from ...potentials.ase_calculator import matscipy_ideal_brittle_solid

        return matscipy_ideal_brittle_solid(
            k=float(p.get("k", 1.0)),
            a=float(p.get("a", 1.0)),
            rc=float(p.get("r_cut", IBS_CUTOFF_MATSCIPY)),
        )
    raise ValueError(f"未知势函数: {kind}")


def potential_from_config(cfg):
    """从 ``potential.type`` 与其余 ``potential.*`` 键构建势函数。"""
    spec = cfg.get("potential")
    if isinstance(spec, str):
        return make_potential(spec)
    spec = dict(spec or {})
    kind = str(spec.pop("type", "ibs"))
    return make_potential(kind, spec)


def dimer_from_config(cfg):
    """按 ``dimer.symbol`` / ``dimer.cell_size`` 构建双原子构型。"""
    dimer = cfg.section("dimer")
    return build_dimer(str(dimer["symbol"]), cell_size=float(dimer["cell_size"]))


def sweep_from_config(cfg) -> SeparationSweep:
    """读取扫描：``sweep.r`` 显式列表优先，否则 ``sweep.start/stop/num``。"""
    sweep = cfg.section("sweep")
    if sweep.get("r") is not None:
        return SeparationSweep(sweep["r"])
    return SeparationSweep.linspace(
        float(sweep["start"]), float(sweep["stop"]), int(sweep["num"])
    )


def write_json(outdir: str, name: str, payload: dict) -> str:
    """写入 JSON 结果文件，返回路径。"""
    path = os.path.join(outdir, name)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
    logger.info(f"Results written to {path}")
    return path


def write_columns(outdir: str, name: str, columns: dict) -> str:
    """按列写入 CSV，返回路径。"""
    path = os.path.join(outdir, name)
    headers = list(columns)
    rows = zip(*(columns[h] for h in headers))
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(headers)
        for row in rows:
            writer.writerow([f"{float(v):.12g}" for v in row])
    logger.info(f"Curve written to {path}")
    return path
