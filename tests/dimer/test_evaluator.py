#!/usr/bin/env python3
"""
势能曲线评估测试

覆盖长度与顺序对齐、牛顿第三定律、调用方构型不被修改、
并行评估的顺序保持以及计算器异常的传播。
"""

import numpy as np
import pytest

from dimerprobe.core.exceptions import MalformedGeometryError
from dimerprobe.dimer.evaluator import (
    PotentialCurve,
    energy_curve,
    force_curve,
    potential_energy,
    potential_forces,
)
from dimerprobe.dimer.sweep import SeparationSweep
from dimerprobe.potentials.base import Potential


class RecordingPotential(Potential):
    """返回间距本身作为能量，并记录调用"""

    def __init__(self):
        super().__init__({}, 10.0)
        self.calls = []

    def calculate_energy(self, cell):
        r = float(cell.atoms[1].position[0] - cell.atoms[0].position[0])
        self.calls.append(r)
        return r

    def calculate_forces(self, cell):
        r = self.calculate_energy(cell)
        forces = np.zeros((2, 3))
        forces[0, 0], forces[1, 0] = r, -r
        return forces


class ExplodingPotential(Potential):
    """在指定间距以下抛出异常，模拟外部引擎失败"""

    def __init__(self, fail_below):
        super().__init__({}, 10.0)
        self.fail_below = fail_below

    def calculate_energy(self, cell):
        r = float(cell.atoms[1].position[0] - cell.atoms[0].position[0])
        if r < self.fail_below:
            raise RuntimeError(f"simulation diverged at r={r}")
        return 0.0

    def calculate_forces(self, cell):
        self.calculate_energy(cell)
        return np.zeros((2, 3))


class TestPotentialEnergy:
    def test_ibs_reference_values(self, ibs):
        energies = potential_energy(ibs, [0.8, 1.0, 1.2])
        assert len(energies) == 3
        assert energies[0] == pytest.approx(0.0, abs=1e-12)
        assert energies[1] == pytest.approx(-0.01)
        assert energies[2] == 0.0

    def test_output_order_follows_input(self):
        r = [1.5, 0.7, 1.1, 0.9]
        energies = potential_energy(RecordingPotential(), r)
        assert np.allclose(energies, r)

    def test_accepts_sweep_object(self, ibs):
        sweep = SeparationSweep.linspace(0.6, 1.4, 9)
        assert potential_energy(ibs, sweep).shape == (9,)

    def test_caller_cell_not_modified(self, ibs, dimer_cell):
        before = dimer_cell.get_positions()
        potential_energy(ibs, [0.7, 1.1], cell=dimer_cell)
        assert np.array_equal(dimer_cell.get_positions(), before)

    def test_malformed_cell_rejected_before_evaluation(self, three_atom_cell):
        pot = RecordingPotential()
        with pytest.raises(MalformedGeometryError):
            potential_energy(pot, [1.0, 1.1], cell=three_atom_cell)
        assert pot.calls == []

    @pytest.mark.parametrize("workers", [None, 4])
    def test_separation_beyond_half_box_rejected(self, workers):
        pot = RecordingPotential()
        with pytest.raises(MalformedGeometryError):
            potential_energy(pot, [1.0, 20.0], workers=workers)
        assert pot.calls == []

    def test_custom_box_and_symbol(self, ibs):
        energies = potential_energy(ibs, [1.0], cell_size=10.0, symbol="Si")
        assert energies[0] == pytest.approx(-0.01)

    def test_errors_propagate(self):
        with pytest.raises(RuntimeError, match="diverged"):
            potential_energy(ExplodingPotential(1.0), [1.4, 1.2, 0.9, 1.3])


class TestPotentialForces:
    def test_newtons_third_law(self, ibs):
        f1, f2 = potential_forces(ibs, np.linspace(0.7, 1.3, 13))
        assert np.allclose(f1, -f2)

    def test_ibs_force_direction(self, ibs):
        f1, _ = potential_forces(ibs, [0.9, 1.0, 1.1, 1.25])
        # 原子 1 在 -x：压缩时被推向 -x，拉伸时被拉向 +x
        assert f1[0] == pytest.approx(-0.05)
        assert f1[1] == pytest.approx(0.0, abs=1e-12)
        assert f1[2] == pytest.approx(0.05)
        assert f1[3] == 0.0

    def test_smooth_ibs_force_vanishes_beyond_cutoff(self):
        from dimerprobe.potentials.ideal_brittle_solid import ideal_brittle_solid

        f1, f2 = potential_forces(ideal_brittle_solid(), [1.2, 1.5, 2.0])
        assert np.all(f1 == 0.0)
        assert np.all(f2 == 0.0)

    def test_lengths_align(self, lj):
        r = np.linspace(0.9, 2.6, 20)
        f1, f2 = potential_forces(lj, r)
        assert f1.shape == f2.shape == (20,)

    def test_errors_propagate(self):
        with pytest.raises(RuntimeError):
            potential_forces(ExplodingPotential(1.0), [1.2, 0.8])


class TestParallelEvaluation:
    def test_threaded_matches_sequential(self, lj):
        r = np.linspace(0.9, 2.4, 40)
        sequential = potential_energy(lj, r)
        threaded = potential_energy(lj, r, workers=4)
        assert np.array_equal(sequential, threaded)

    def test_threaded_forces_keep_order(self):
        r = [1.5, 0.7, 1.1, 0.9, 2.0]
        f1, f2 = potential_forces(RecordingPotential(), r, workers=3)
        assert np.allclose(f1, r)
        assert np.allclose(f2, -np.array(r))

    def test_threaded_errors_propagate(self):
        with pytest.raises(RuntimeError, match="diverged"):
            potential_energy(ExplodingPotential(1.0), [1.4, 1.2, 0.9, 1.3], workers=2)


class TestCurves:
    def test_energy_curve(self, ibs):
        curve = energy_curve(ibs, [0.8, 1.0, 1.2])
        assert curve.quantity == "energy"
        assert len(curve) == 3
        assert curve.values_atom2 is None
        assert list(curve.as_columns()) == ["r", "energy"]

    def test_force_curve(self, ibs):
        curve = force_curve(ibs, [0.9, 1.1])
        assert curve.quantity == "force"
        assert np.allclose(curve.values, -curve.values_atom2)
        assert list(curve.as_columns()) == ["r", "force", "force_atom2"]

    def test_mismatched_lengths_rejected(self):
        with pytest.raises(ValueError):
            PotentialCurve(r=np.array([1.0, 2.0]), values=np.array([0.0]))
