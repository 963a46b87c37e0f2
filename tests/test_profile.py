"""Simple set of (unit)tests for density profiles."""
import matplotlib
matplotlib.use('Agg')
import numpy as np
from poredft.bulk import BulkState
from poredft.convolver import ConvolverFFT
from poredft.exceptions import ShapeMismatchError
from poredft.functional import IdealGas
from poredft.grid import Axis, Grid
from poredft.profile import DFTProfile, DFTSpecification
from poredft.constants import Specification
from pytest import approx
import pytest


class DenseGas(IdealGas):

    def __init__(self):
        super().__init__([3.0], [100.0])

    def compute_max_density(self, moles):
        return 0.05


def make_profile(functional=None, external_potential=None, density=None, n_grid=100):
    functional = IdealGas([3.0], [100.0]) if functional is None else functional
    grid = Grid.new_1d(Axis.cartesian(n_grid, 10.0))
    bulk = BulkState(functional, 100.0, [0.1])
    return DFTProfile(grid, ConvolverFFT.plan(grid, functional.weight_functions(100.0)), bulk, external_potential,
                      density)


def test_default_density():
    v = np.linspace(0.0, 5.0, 100)[None, :]
    profile = make_profile(external_potential=v)
    assert profile.density == approx(0.1 * np.exp(- v))
    assert profile.specification.kind == Specification.CHEMICAL_POTENTIAL


def test_density_bounded_by_functional():
    v = np.full((1, 100), - 5.0)
    profile = make_profile(DenseGas(), external_potential=v)
    assert np.all(profile.density == 0.05)


def test_shape_mismatch():
    with pytest.raises(ShapeMismatchError) as err:
        make_profile(external_potential=np.zeros((1, 99)))
    assert err.value.expected == (1, 100)
    assert err.value.received == (1, 99)
    with pytest.raises(ShapeMismatchError):
        make_profile(density=np.zeros(100))


def test_integrals():
    profile = make_profile()
    assert profile.volume() == approx(10.0)
    assert profile.integrate(profile.density) == approx(1.0)
    assert profile.moles() == approx([1.0])
    assert profile.total_moles() == approx(1.0)
    # Bulk fluid: omega = - p
    assert profile.grand_potential() == approx(- 100.0 * 0.1 * 10.0)


def test_specifications():
    profile = make_profile()
    spec = DFTSpecification.moles_from_profile(profile)
    assert spec.kind == Specification.MOLES
    assert spec.value == approx([1.0])
    spec = DFTSpecification.total_moles_from_profile(profile)
    assert spec.kind == Specification.TOTAL_MOLES
    assert spec.value == approx(1.0)


def test_copy_is_independent():
    profile = make_profile()
    other = profile.copy()
    other.density *= 2
    other.grid.axes[0].grid += 1.0
    assert profile.total_moles() == approx(1.0)
    assert profile.grid.z[0] == approx(0.05)
    assert other.bulk is profile.bulk


def test_plot():
    ax = make_profile().plot()
    assert len(ax.get_lines()) == 1
