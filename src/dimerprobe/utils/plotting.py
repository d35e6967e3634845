#!/usr/bin/env python3
"""
势能曲线绘图模块

Usage:
    from dimerprobe.potentials.ideal_brittle_solid import ideal_brittle_solid
    from dimerprobe.utils.plotting import plot_potential
    r, energies = plot_potential(ideal_brittle_solid(), path="ibs.png")
"""

import logging
import os

import matplotlib

# 使用Agg后端，避免GUI问题
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from dimerprobe.dimer.evaluator import PotentialCurve, potential_energy

logger = logging.getLogger(__name__)

DEFAULT_R = (0.4, 2.5, 2000)
"""默认绘图扫描范围 (start, stop, num)。"""


def plot_potential(potential, r=None, ax=None, path: str | None = None, **kwargs):
    """扫描并绘制双原子能量曲线

    Parameters
    ----------
    potential : Potential
        势能（计算器）
    r : array_like, optional
        间距序列，默认 ``linspace(0.4, 2.5, 2000)``
    ax : matplotlib.axes.Axes, optional
        绘制目标；缺省时新建图
    path : str, optional
        若提供则保存为图片
    **kwargs
        透传给 :func:`dimerprobe.dimer.evaluator.potential_energy`

    Returns
    -------
    tuple of numpy.ndarray
        ``(r, energies)``
    """
    r = np.linspace(*DEFAULT_R) if r is None else np.asarray(r, dtype=np.float64)
    energies = potential_energy(potential, r, **kwargs)

    fig = None
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(6.8, 5))
    ax.plot(r, energies, label=f"{potential!r}")
    ax.set_xlabel("separation, r")
    ax.set_ylabel("Potential Energy")
    ax.grid(True, alpha=0.3)
    ax.legend()

    if path:
        _save(ax.figure, path)
    if fig is not None:
        plt.close(fig)
    return r, energies


def plot_curves(energy: PotentialCurve, force: PotentialCurve | None = None, path: str | None = None):
    """绘制能量曲线及（可选）两原子受力曲线，返回 Figure"""
    n_panels = 1 if force is None else 2
    fig, axes = plt.subplots(1, n_panels, figsize=(6.8 * n_panels, 5), squeeze=False)
    ax_e = axes[0, 0]
    ax_e.plot(energy.r, energy.values, color="#1f77b4")
    ax_e.set_xlabel("separation, r")
    ax_e.set_ylabel("Potential Energy")
    ax_e.grid(True, alpha=0.3)
    if force is not None:
        ax_f = axes[0, 1]
        ax_f.plot(force.r, force.values, label="atom 1, $F_x$")
        if force.values_atom2 is not None:
            ax_f.plot(force.r, force.values_atom2, "--", label="atom 2, $F_x$")
        ax_f.set_xlabel("separation, r")
        ax_f.set_ylabel("Force")
        ax_f.grid(True, alpha=0.3)
        ax_f.legend()
    if path:
        _save(fig, path)
    return fig


def _save(fig, path: str) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    fig.savefig(path, dpi=150, bbox_inches="tight")
    logger.info(f"Figure saved to {path}")
