"""Simple set of (unit)tests for the thermopack bridge."""
from types import SimpleNamespace
import numpy as np
import pytest

pytest.importorskip('thermopack')

from scipy.constants import Avogadro
from poredft.functional import IdealGas
from poredft.thermo import reduced_density, bulk_state_from_thermopack, phase_equilibrium_from_thermopack, \
    bubble_point_equilibrium, ideal_gas_from_thermopack
from pytest import approx


def fake_state(T, rho):
    return SimpleNamespace(T=T, partial_density=lambda: np.array(rho))


def test_reduced_density():
    # 1 mol / m^3 is Avogadro's number of molecules per 10^30 Å^3
    assert reduced_density([1.0e4]) == approx([1.0e4 * Avogadro * 1e-30])


def test_states_from_thermopack():
    fluid = IdealGas([3.7], [150.0])
    bulk = bulk_state_from_thermopack(fake_state(140.0, [2.0e4]), fluid)
    assert bulk.temperature == 140.0
    assert bulk.partial_density == approx(reduced_density([2.0e4]))

    vle = SimpleNamespace(vapor=fake_state(140.0, [500.0]), liquid=fake_state(140.0, [2.5e4]))
    vle = phase_equilibrium_from_thermopack(vle, fluid)
    assert vle.liquid.density > vle.vapor.density


def test_ideal_gas_from_thermopack():
    eos = SimpleNamespace(sigma=[3.7039e-10, 3.0e-10], eps_div_kb=[150.03, 120.0], m=[1.0, 1.5], nc=2)
    fluid = ideal_gas_from_thermopack(eos)
    assert fluid.sigma_ff() == approx([3.7039, 3.0])
    assert fluid.epsilon_k_ff() == approx([150.03, 120.0])
    assert fluid.m() == approx([1.0, 1.5])


def test_pcsaft_bubble_point():
    from thermopack.pcsaft import pcsaft
    eos = pcsaft()
    eos.init('C1')
    vle = bubble_point_equilibrium(eos, 140.0, IdealGas([3.7039], [150.03]))
    assert vle.temperature == approx(140.0)
    assert vle.liquid.density > vle.vapor.density
    # Liquid methane at 140 K is roughly 380 kg / m^3, i.e. 0.014 molecules / Å^3
    assert vle.liquid.density == approx(0.0143, rel=0.1)
