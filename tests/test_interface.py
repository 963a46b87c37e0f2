"""Simple set of (unit)tests for planar interfaces."""
import numpy as np
from scipy.special import xlogy
from poredft.constants import Specification
from poredft.exceptions import NumericalError, PreconditionError, ShapeMismatchError, SolverError
from poredft.interface import PlanarInterface
from poredft.solver import DFTSolver
from tools import T_CRIT, make_vle, PDGTFluid, NoSolver
from pytest import approx
import pytest

# Width parameter of the tanh initialisation at T = 0.8 * T_CRIT
tanh_coeff = (2.4728 - 2.3625 * 0.8) / 3


def tanh_interface(n_grid=512, l_grid=100.0):
    return PlanarInterface.from_tanh(make_vle(0.01, 0.7, T=80.0), n_grid, l_grid, T_CRIT)


def test_tanh_boundaries():
    interface = tanh_interface()
    rho = interface.profile.density
    assert rho[0, 0] == approx(0.7, abs=1e-6)
    assert rho[0, -1] == approx(0.01, abs=1e-6)
    spec = interface.profile.specification
    assert spec.kind == Specification.TOTAL_MOLES
    assert spec.value == approx(interface.profile.total_moles())


def test_tanh_narrow_grid():
    with pytest.warns(RuntimeWarning):
        tanh_interface(64, 10.0)


@pytest.mark.parametrize('critical_temperature', [70.0, 76.0, None, 0.0, - 100.0, np.nan])
def test_tanh_invalid_critical_temperature(critical_temperature):
    # T / Tc >= 2.4728 / 2.3625 would swap the liquid and vapour ends
    with pytest.raises(PreconditionError):
        PlanarInterface.from_tanh(make_vle(0.01, 0.7, T=80.0), 256, 100.0, critical_temperature)


def test_surface_tension_without_solving():
    interface = tanh_interface()
    interface.solve_inplace(NoSolver())

    T = 80.0
    rho = interface.profile.density[0]
    dz = 100.0 / 512
    omega = T * (xlogy(rho, rho) - rho - rho * np.log(0.01))
    assert interface.surface_tension == approx(np.sum(omega + T * 0.01) * dz, rel=1e-10)
    assert interface.equimolar_radius == approx(50.0, abs=1e-8)


def test_solve_ideal_interface():
    # Without residual contributions, the equilibrium at fixed total moles is the uniform density
    interface = tanh_interface(256)
    moles = interface.profile.total_moles()
    solved = interface.solve()
    assert interface.surface_tension is None
    assert solved.profile.density == approx(np.full((1, 256), moles / 100.0), rel=1e-8)
    assert solved.profile.total_moles() == approx(moles, rel=1e-10)


def test_solver_failure_leaves_interface_unsolved():
    interface = tanh_interface(256)
    density = np.copy(interface.profile.density)
    with pytest.raises(SolverError) as err:
        interface.solve_inplace(DFTSolver().picard_iteration(max_iter=3))
    assert err.value.iterations == 3
    assert interface.surface_tension is None
    assert interface.equimolar_radius is None
    assert np.all(interface.profile.density == density)


def test_interfacial_thickness():
    interface = tanh_interface()
    expected = 2 * np.arctanh(0.8) / tanh_coeff
    assert interface.interfacial_thickness() == approx(expected, rel=1e-3)
    assert interface.interfacial_thickness(0.9, 0.1) == interface.interfacial_thickness()
    assert interface.interfacial_thickness(0.25, 0.75) < interface.interfacial_thickness()


@pytest.mark.parametrize('fractions', [(0.0, 0.9), (0.1, 1.0), (-0.1, 0.5), (0.5, 1.5)])
def test_invalid_thickness_fractions(fractions):
    with pytest.raises(PreconditionError):
        tanh_interface().interfacial_thickness(*fractions)


def test_interfacial_enrichment():
    assert tanh_interface().interfacial_enrichment() == approx([1.0])


def test_enrichment_of_absent_segment():
    vle = make_vle([0.01, 0.02], [0.5, 0.2])
    interface = PlanarInterface.from_tanh(vle, 128, 100.0, T_CRIT)
    density = np.copy(interface.profile.density)
    density[1] = 0.0
    interface.set_density_inplace(density)
    with pytest.raises(PreconditionError):
        interface.interfacial_enrichment()


def test_relative_adsorption():
    vle = make_vle([0.01, 0.02], [0.5, 0.2])
    interface = PlanarInterface.from_tanh(vle, 512, 100.0, T_CRIT)
    gamma = interface.relative_adsorption()
    assert gamma.shape == (2, 2)
    assert np.all(np.diag(gamma) == 0.0)
    # Identical reduced profiles: No relative adsorption
    assert gamma == approx(np.zeros((2, 2)), abs=1e-10)

    # Component 1 has its interface 5 Å further into the vapour
    z = interface.profile.grid.z
    rho_v = np.array([[0.01], [0.02]])
    rho_l = np.array([[0.5], [0.2]])
    z0 = np.array([[50.0], [55.0]])
    reduced = 0.5 * (1 - np.tanh(0.5 * (z[None, :] - z0)))
    interface.set_density_inplace(rho_v + (rho_l - rho_v) * reduced)
    gamma = interface.relative_adsorption()
    assert gamma[0, 1] == approx(0.49 * (50.0 - 55.0), rel=1e-3)
    assert gamma[1, 0] == approx(0.18 * (55.0 - 50.0), rel=1e-3)


def test_degenerate_profile():
    interface = tanh_interface()
    interface.set_density_inplace(np.full((1, 512), 0.1))
    with pytest.raises(PreconditionError):
        interface.relative_adsorption()
    with pytest.raises(PreconditionError):
        interface.interfacial_thickness()
    with pytest.raises(PreconditionError):
        interface.shift_equimolar_inplace()


def test_shift_equimolar():
    interface = tanh_interface()
    z = np.copy(interface.profile.grid.z)
    shifted = interface.shift_equimolar()
    assert np.all(interface.profile.grid.z == z)
    assert shifted.profile.grid.z[0] == approx(z[0] - 50.0, abs=1e-8)

    twice = shifted.shift_equimolar()
    assert twice.profile.grid.z == approx(shifted.profile.grid.z, abs=1e-12)


def test_set_density():
    interface = tanh_interface(128)
    density = np.linspace(0.5, 0.02, 128)[None, :]
    interface.set_density_inplace(density)
    assert np.all(interface.profile.density == density)

    other = interface.set_density(np.full((1, 128), 0.3))
    assert np.all(interface.profile.density == density)
    assert np.all(other.profile.density == 0.3)

    with pytest.raises(ShapeMismatchError):
        interface.set_density_inplace(np.zeros((1, 64)))


def test_set_density_scaled():
    interface = tanh_interface(128)
    current = np.copy(interface.profile.density)
    interface.set_density_inplace(2 * current + 0.1, scale=True)
    assert interface.profile.density == approx(current, abs=1e-12)

    with pytest.raises(PreconditionError):
        interface.set_density_inplace(np.full((1, 128), 0.3), scale=True)


def test_pdgt_initialisation():
    fluid = PDGTFluid(width=20.0)
    interface = PlanarInterface.from_pdgt(make_vle(0.01, 0.7, fluid=fluid), 1024)
    profile = interface.profile
    assert profile.grid.axes[0].domain_size == approx(120.0)
    assert profile.density[0, 0] == approx(0.7, abs=1e-6)
    assert profile.density[0, -1] == approx(0.01, abs=1e-6)
    assert profile.specification.kind == Specification.TOTAL_MOLES


def test_pdgt_minimum_width():
    interface = PlanarInterface.from_pdgt(make_vle(0.01, 0.7, fluid=PDGTFluid(width=5.0)), 256)
    assert interface.profile.grid.axes[0].domain_size == approx(100.0)


@pytest.mark.parametrize('gamma', [np.nan, np.inf, 0.0, 1e-320])
def test_pdgt_invalid_surface_tension(gamma):
    with pytest.raises(NumericalError):
        PlanarInterface.from_pdgt(make_vle(0.01, 0.7, fluid=PDGTFluid(gamma=gamma)), 256)


def test_pdgt_requires_single_segment():
    with pytest.raises(PreconditionError):
        PlanarInterface.from_pdgt(make_vle([0.01, 0.02], [0.5, 0.2]), 256)


def test_pdgt_not_implemented():
    with pytest.raises(NotImplementedError):
        PlanarInterface.from_pdgt(make_vle(0.01, 0.7), 256)
