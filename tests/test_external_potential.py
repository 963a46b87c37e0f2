"""Simple set of (unit)tests for the solid-fluid potentials."""
import numpy as np
from poredft.external_potential import HardWall, LJ93, SimpleLJ93, Steele, double_wall_potential, \
    external_potential_1d
from poredft.functional import IdealGas
from poredft.grid import Geometry
from poredft.pore import Pore1D
from pytest import approx
import pytest

fluid = IdealGas([3.0, 3.5], [100.0, 150.0], [1.0, 2.0])
T = 150.0

potentials = {'hardwall': HardWall(3.4),
              'lj93': LJ93(3.4, 28.0, 0.114),
              'simplelj93': SimpleLJ93(3.4, 28.0),
              'steele': Steele(3.4, 28.0, 0.114)}


@pytest.mark.parametrize('geometry, name', [(Geometry.PLANAR, 'hardwall'), (Geometry.PLANAR, 'lj93'),
                                            (Geometry.PLANAR, 'simplelj93'), (Geometry.PLANAR, 'steele'),
                                            (Geometry.POLAR, 'hardwall'), (Geometry.POLAR, 'lj93'),
                                            (Geometry.POLAR, 'steele'),
                                            (Geometry.SPHERICAL, 'hardwall'), (Geometry.SPHERICAL, 'lj93')])
def test_potential_is_bounded(geometry, name):
    pore = Pore1D(geometry, 20.0, potentials[name], n_grid=256)
    v = external_potential_1d(20.0, T, pore.potential, fluid, pore.axis(fluid))
    assert v.shape == (2, 256)
    assert np.all(np.isfinite(v))
    assert np.max(v) <= 50.0


@pytest.mark.parametrize('geometry, potential', [(Geometry.SPHERICAL, Steele(3.4, 28.0, 0.114)),
                                                 (Geometry.POLAR, SimpleLJ93(3.4, 28.0)),
                                                 (Geometry.SPHERICAL, SimpleLJ93(3.4, 28.0))])
def test_unsupported_geometry(geometry, potential):
    pore = Pore1D(geometry, 20.0, potential, n_grid=64)
    with pytest.raises(NotImplementedError):
        external_potential_1d(20.0, T, potential, fluid, pore.axis(fluid))


def test_double_wall_is_symmetric():
    z = np.linspace(-5, 5, 11)
    v = double_wall_potential(LJ93(3.4, 28.0, 0.114), z, 10.0, fluid, T)
    assert v == approx(v[:, ::-1], rel=1e-12)


def test_cutoff_outside_pore():
    pore = Pore1D(Geometry.PLANAR, 20.0, LJ93(3.4, 28.0, 0.114), n_grid=256)
    axis = pore.axis(fluid)
    v = external_potential_1d(20.0, T, pore.potential, fluid, axis, cutoff=30.0)
    assert np.max(v) <= 30.0
    assert np.all(v[:, axis.grid > 10.0] == 30.0)


def test_lj93_is_attractive():
    z = np.linspace(2.0, 20.0, 500)
    v = LJ93(3.4, 28.0, 0.114).cartesian(z, fluid, T)
    assert np.all(np.min(v, axis=1) < 0)
    # Segments with m = 2 are attracted twice as strongly
    eps_ratio = np.sqrt(150.0 / 100.0) * 2.0
    sigma_ratio = (0.5 * (3.4 + 3.5) / (0.5 * (3.4 + 3.0)))**3
    assert np.min(v[1]) / np.min(v[0]) == approx(eps_ratio * sigma_ratio, rel=1e-2)


def test_hard_wall():
    z = np.array([1.0, 3.1, 3.3, 10.0])
    v = HardWall(3.4).cartesian(z, fluid, T)
    sigma_sf = 0.5 * (3.4 + fluid.sigma_ff())
    assert np.all(np.isinf(v[z[None, :] < sigma_sf[:, None]]))
    assert np.all(v[z[None, :] >= sigma_sf[:, None]] == 0.0)
