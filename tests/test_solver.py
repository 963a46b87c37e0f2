"""Simple set of (unit)tests for the density profile solver."""
import numpy as np
from poredft.exceptions import SolverError
from poredft.functional import IdealGas
from poredft.interface import PlanarInterface
from poredft.profile import DFTSpecification
from poredft.solver import DFTSolver, picard, anderson
from tools import make_vle
from pytest import approx
import pytest


class ExplodingGas(IdealGas):

    def __init__(self):
        super().__init__([3.0], [100.0])

    def correlation(self, temperature, density, convolver):
        return np.full_like(density, np.inf)


def test_fixed_moles():
    profile = PlanarInterface.new(make_vle([0.01, 0.02], [0.5, 0.2]), 128, 50.0).profile
    profile.specification = DFTSpecification.moles([1.0, 2.0])
    result = profile.solve()
    assert result.converged
    assert profile.moles() == approx([1.0, 2.0], rel=1e-10)
    assert profile.density == approx(np.array([[0.02], [0.04]]) * np.ones((2, 128)), rel=1e-10)


def test_fixed_chemical_potential():
    vle = make_vle(0.01, 0.7)
    profile = PlanarInterface.new(vle, 64, 50.0).profile
    profile.density = np.full((1, 64), 0.3)
    profile.solve()
    assert profile.density == approx(np.full((1, 64), 0.01), rel=1e-10)


def test_overflow():
    fluid = ExplodingGas()
    profile = PlanarInterface.new(make_vle(0.01, 0.7, fluid=fluid), 64, 50.0).profile
    density = np.copy(profile.density)
    with pytest.raises(SolverError):
        profile.solve()
    assert np.all(profile.density == density)


def test_debug_output(capsys):
    profile = PlanarInterface.new(make_vle(0.01, 0.7), 64, 50.0).profile
    profile.density = np.full((1, 64), 0.3)
    DFTSolver().picard_iteration(tol=1e-3).anderson_mixing().solve(profile, debug=True)
    out = capsys.readouterr().out
    assert 'Picard' in out
    assert 'Anderson' in out


def test_iterations_are_summed():
    profile = PlanarInterface.new(make_vle(0.01, 0.7), 64, 50.0).profile
    profile.density = np.full((1, 64), 0.3)
    result = DFTSolver().picard_iteration(max_iter=5).anderson_mixing().solve(profile)
    assert result.converged
    assert result.iterations > 5
    assert result.solver == 'Anderson'


def test_linear_fixpoint():
    # x = 0.5 * x + 1 has the fixpoint x = 2
    fixpoint = lambda x: 0.5 * x + 1.0
    x0 = np.zeros(10)
    assert picard(fixpoint, x0, max_iter=2000, tol=1e-12, damping=0.5).x == approx(np.full(10, 2.0), rel=1e-10)
    sol = anderson(fixpoint, x0, tol=1e-12)
    assert sol.converged
    assert sol.x == approx(np.full(10, 2.0), rel=1e-10)
    assert sol.iterations < 10


def test_solver_configuration():
    solver = DFTSolver().picard_iteration(max_iter=10).anderson_mixing(m_max=5)
    assert len(solver.stages) == 2
    assert 'picard' in repr(solver)
    assert 'anderson' in repr(solver)
    assert len(DFTSolver.default().stages) == 2
