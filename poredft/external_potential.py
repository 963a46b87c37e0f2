"""
Solid-fluid potentials, and the assembly of the reduced external potential of a pore.

An ExternalPotential returns the raw interaction energy (K) of every fluid segment with a wall, as an array of shape
(n_segments, n_points). The walls use Lorentz-Berthelot mixing with the segment parameters of the fluid:
    sigma_sf = (sigma_ss + sigma_ff) / 2,  epsilon_sf = sqrt(epsilon_ss * epsilon_ff)
and are scaled by the segment multiplicity m.

external_potential_1d() turns such a potential into the (clamped) reduced potential beta * V on a pore axis.
"""
from abc import ABCMeta
import numpy as np
from scipy.special import gamma, hyp2f1
from poredft.constants import MAX_POTENTIAL
from poredft.grid import Geometry


def _phi(n, x, s):
    # Integrated 1/r^(2n) interaction with a cylindrical shell of solid
    return (1 - x**2)**(3 - 2 * n) * 4 * np.sqrt(np.pi) / (2 * n - 3) * s**(2 * n - 3) \
           * gamma(n - 0.5) / gamma(n) * hyp2f1(1.5 - n, 2.5 - n, 1, x**2)


def _psi(n, x, s):
    # Integrated 1/r^(2n) interaction with a single cylindrical surface
    return (1 - x**2)**(2 - 2 * n) * 4 * np.sqrt(np.pi) * s**(2 * n - 2) \
           * gamma(n - 0.5) / gamma(n) * hyp2f1(1.5 - n, 1.5 - n, 1, x**2)


class ExternalPotential(metaclass=ABCMeta):
    """
    Parent class of solid-fluid potentials. Children override the geometries they support.
    """

    def __init__(self, sigma_ss, epsilon_k_ss=0.0):
        self.sigma_ss = sigma_ss
        self.epsilon_k_ss = epsilon_k_ss

    def sigma_sf(self, fluid):
        return 0.5 * (self.sigma_ss + fluid.sigma_ff())[:, None]

    def epsilon_k_sf(self, fluid):
        return np.sqrt(self.epsilon_k_ss * fluid.epsilon_k_ff())[:, None]

    def cartesian(self, z, fluid, temperature):
        """
        Potential of a planar wall.

        Args:
            z (ndarray) : Distance from the wall (Å)
            fluid (HelmholtzEnergyFunctional) : Provides the segment parameters
            temperature (float) : Temperature (K)
        Returns:
            ndarray : Potential (K), shape (n_segments, len(z))
        """
        raise NotImplementedError(f'{type(self).__name__} is not implemented for planar walls.')

    def cylindrical(self, r, pore_size, fluid, temperature):
        """
        Potential inside a cylindrical pore.

        Args:
            r (ndarray) : Distance from the pore axis (Å)
            pore_size (float) : Pore radius (Å)
            fluid (HelmholtzEnergyFunctional) : Provides the segment parameters
            temperature (float) : Temperature (K)
        Returns:
            ndarray : Potential (K), shape (n_segments, len(r))
        """
        raise NotImplementedError(f'{type(self).__name__} is not implemented for cylindrical pores.')

    def spherical(self, r, pore_size, fluid, temperature):
        """
        Potential inside a spherical pore. Arguments as for `cylindrical`.
        """
        raise NotImplementedError(f'{type(self).__name__} is not implemented for spherical pores.')

    def __repr__(self):
        return f'{type(self).__name__}(' + ', '.join(f'{k}={v}' for k, v in vars(self).items()) + ')'


class HardWall(ExternalPotential):
    """
    Infinite repulsion closer than sigma_sf to the wall, zero elsewhere.
    """

    def __init__(self, sigma_ss):
        super().__init__(sigma_ss)

    def _wall(self, distance, fluid):
        return np.where(distance < self.sigma_sf(fluid), np.inf, 0.0)

    def cartesian(self, z, fluid, temperature):
        return self._wall(np.asarray(z)[None, :], fluid)

    def cylindrical(self, r, pore_size, fluid, temperature):
        return self._wall(pore_size - np.asarray(r)[None, :], fluid)

    def spherical(self, r, pore_size, fluid, temperature):
        return self._wall(pore_size - np.asarray(r)[None, :], fluid)


class LJ93(ExternalPotential):
    r"""
    Lennard-Jones 12-6 interaction integrated over a continuum of solid with density rho_s. For a planar wall
    $V(z) = 2 \pi \rho_s \epsilon_{sf} \sigma_{sf}^3 (\frac{2}{45} (\sigma_{sf} / z)^9 - \frac{1}{3} (\sigma_{sf} / z)^3)$
    """

    def __init__(self, sigma_ss, epsilon_k_ss, rho_s):
        super().__init__(sigma_ss, epsilon_k_ss)
        self.rho_s = rho_s

    def _prefactor(self, fluid):
        return 2 * np.pi * self.rho_s * fluid.m()[:, None] * self.epsilon_k_sf(fluid)

    def cartesian(self, z, fluid, temperature):
        s = self.sigma_sf(fluid) / np.asarray(z)[None, :]
        return self._prefactor(fluid) * self.sigma_sf(fluid)**3 * ((2 / 45) * s**9 - s**3 / 3)

    def cylindrical(self, r, pore_size, fluid, temperature):
        sigma = self.sigma_sf(fluid)
        x = np.asarray(r)[None, :] / pore_size
        s = sigma / pore_size
        return self._prefactor(fluid) * sigma**3 * (_phi(6, x, s) - _phi(3, x, s))

    def spherical(self, r, pore_size, fluid, temperature):
        sigma = self.sigma_sf(fluid)
        r = np.asarray(r)[None, :]
        R = pore_size
        return self._prefactor(fluid) * 0.5 * (
                sigma**12 / 90 * ((r - 9 * R) / (r - R)**9 - (r + 9 * R) / (r + R)**9)
                - sigma**6 / 3 * ((r - 3 * R) / (r - R)**3 - (r + 3 * R) / (r + R)**3)) / r


class SimpleLJ93(ExternalPotential):
    r"""
    Planar 9-3 wall without a solid density, $V(z) = \epsilon_{sf} ((\sigma_{sf} / z)^9 - (\sigma_{sf} / z)^3)$
    """

    def __init__(self, sigma_ss, epsilon_k_ss):
        super().__init__(sigma_ss, epsilon_k_ss)

    def cartesian(self, z, fluid, temperature):
        s = self.sigma_sf(fluid) / np.asarray(z)[None, :]
        return fluid.m()[:, None] * self.epsilon_k_sf(fluid) * (s**9 - s**3)


class Steele(ExternalPotential):
    r"""
    Steele 10-4-3 potential of a stack of graphitic planes separated by delta,
    $V(z) = 2 \pi \rho_s \epsilon_{sf} \sigma_{sf}^2 \Delta (\frac{2}{5} (\sigma_{sf} / z)^{10} - (\sigma_{sf} / z)^4
            - \frac{\sigma_{sf}^4}{3 \Delta (z + 0.61 \Delta)^3})$
    """

    def __init__(self, sigma_ss, epsilon_k_ss, rho_s, delta=3.35):
        super().__init__(sigma_ss, epsilon_k_ss)
        self.rho_s = rho_s
        self.delta = delta

    def _prefactor(self, fluid):
        return 2 * np.pi * self.rho_s * fluid.m()[:, None] * self.epsilon_k_sf(fluid) \
               * self.sigma_sf(fluid)**2 * self.delta

    def cartesian(self, z, fluid, temperature):
        sigma = self.sigma_sf(fluid)
        z = np.asarray(z)[None, :]
        s = sigma / z
        return self._prefactor(fluid) * ((2 / 5) * s**10 - s**4 - sigma**4 / (3 * self.delta * (z + 0.61 * self.delta)**3))

    def cylindrical(self, r, pore_size, fluid, temperature):
        sigma = self.sigma_sf(fluid)
        x = np.asarray(r)[None, :] / pore_size
        s = sigma / pore_size
        R_eff = pore_size + 0.61 * self.delta
        return self._prefactor(fluid) * (_psi(6, x, s) - _psi(3, x, s)
                                         - sigma / self.delta * _phi(3, np.asarray(r)[None, :] / R_eff, sigma / R_eff))


def double_wall_potential(potential, z, half_width, fluid, temperature):
    """
    Potential of a slit pore with its centre at z = 0 and walls at z = -half_width and z = half_width.

    Returns:
        ndarray : Potential (K), shape (n_segments, len(z))
    """
    z = np.asarray(z)
    return potential.cartesian(half_width + z, fluid, temperature) \
           + potential.cartesian(half_width - z, fluid, temperature)


# Raw potential on an axis, and the effective size of the confinement, keyed by geometry
_GEOMETRY_POTENTIALS = {
    Geometry.PLANAR: lambda pot, axis, size, fluid, T: double_wall_potential(pot, axis.grid, 0.5 * size, fluid, T),
    Geometry.POLAR: lambda pot, axis, size, fluid, T: pot.cylindrical(axis.grid, size, fluid, T),
    Geometry.SPHERICAL: lambda pot, axis, size, fluid, T: pot.spherical(axis.grid, size, fluid, T)
}
_EFFECTIVE_SIZE = {Geometry.PLANAR: lambda size: 0.5 * size,
                   Geometry.POLAR: lambda size: size,
                   Geometry.SPHERICAL: lambda size: size}


def external_potential_1d(pore_size, temperature, potential, fluid, axis, cutoff=None):
    """
    Compute the reduced external potential beta * V of a pore on `axis`. Points outside the pore, and all
    values exceeding the cutoff (including non-finite values), are set to the cutoff.

    Args:
        pore_size (float) : Width (planar) or radius (polar, spherical) of the pore (Å)
        temperature (float) : Temperature (K)
        potential (ExternalPotential) : The solid-fluid potential
        fluid (HelmholtzEnergyFunctional) : Provides the segment parameters
        axis (Axis) : The axis of the pore
        cutoff (float, optional) : Upper bound of beta * V, defaults to MAX_POTENTIAL

    Returns:
        ndarray : Reduced potential, shape (n_segments, axis.n_grid)
    """
    cutoff = MAX_POTENTIAL if cutoff is None else cutoff
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        v = _GEOMETRY_POTENTIALS[axis.geometry](potential, axis, pore_size, fluid, temperature) / temperature
    v = np.array(np.broadcast_to(v, (fluid.n_segments, axis.n_grid)), dtype=float)
    v = np.nan_to_num(v, nan=cutoff, posinf=cutoff)
    v[:, axis.grid > _EFFECTIVE_SIZE[axis.geometry](pore_size)] = cutoff
    return np.minimum(v, cutoff)
