"""
Planar vapour-liquid interfaces. The liquid is at the start of the domain and the vapour at the end.

Interfaces are initialised either from a tanh profile (PlanarInterface.from_tanh) or from density gradient theory
(PlanarInterface.from_pdgt), then solved at fixed total number of moles. The solved interface gives the surface
tension and the position of the equimolar dividing surface, and is the input to the analysis methods
(relative adsorption, enrichment, thickness).
"""
import warnings
import numpy as np
from poredft.constants import MIN_WIDTH, RELATIVE_WIDTH, PDGT_GRID_POINTS
from poredft.convolver import ConvolverFFT
from poredft.exceptions import PreconditionError, NumericalError, ShapeMismatchError
from poredft.grid import Axis, Grid
from poredft.profile import DFTProfile, DFTSpecification


class PlanarInterface:
    """
    Attributes:
        profile (DFTProfile) : The density profile
        vle (PhaseEquilibrium) : The phase equilibrium
        surface_tension (float or None) : Surface tension (K / Å^2), set by solve_inplace
        equimolar_radius (float or None) : Position of the equimolar dividing surface (Å), set by solve_inplace
    """

    def __init__(self, profile, vle, surface_tension=None, equimolar_radius=None):
        self.profile = profile
        self.vle = vle
        self.surface_tension = surface_tension
        self.equimolar_radius = equimolar_radius

    @staticmethod
    def new(vle, n_grid, l_grid):
        """Construction
        Interface without external potential, with the density initialised to the vapour density.

        Args:
            vle (PhaseEquilibrium) : The phase equilibrium
            n_grid (int) : Number of grid points
            l_grid (float) : Domain length (Å)
        Returns:
            PlanarInterface : The interface
        """
        grid = Grid.new_1d(Axis.cartesian(n_grid, l_grid))
        weight_functions = vle.vapor.functional.weight_functions(vle.vapor.temperature)
        convolver = ConvolverFFT.plan(grid, weight_functions)
        return PlanarInterface(DFTProfile(grid, convolver, vle.vapor), vle)

    @staticmethod
    def from_tanh(vle, n_grid, l_grid, critical_temperature):
        """Construction
        Interface initialised with a tanh profile centred in the domain, with a width from an empirical correlation
        in the reduced temperature.

        Args:
            vle (PhaseEquilibrium) : The phase equilibrium
            n_grid (int) : Number of grid points
            l_grid (float) : Domain length (Å)
            critical_temperature (float) : Critical temperature (K)
        Returns:
            PlanarInterface : The interface
        """
        if critical_temperature is None or not (np.isfinite(critical_temperature) and critical_temperature > 0):
            raise PreconditionError('PlanarInterface.from_tanh', f'Critical temperature must be positive and finite, got '
                                                             f'{critical_temperature}.')
        reduced_temperature = vle.vapor.temperature / critical_temperature
        if reduced_temperature >= 2.4728 / 2.3625:
            # The width of the tanh correlation changes sign here
            raise PreconditionError('PlanarInterface.from_tanh', f'Reduced temperature {reduced_temperature} is outside '
                                                             f'the range of the tanh correlation.')

        interface = PlanarInterface.new(vle, n_grid, l_grid)
        profile = interface.profile
        functional = profile.functional
        idx = functional.component_index()

        z0 = 0.5 * l_grid
        rho_v = vle.vapor.partial_density[idx][:, None]
        rho_l = vle.liquid.partial_density[idx][:, None]
        tanh = np.tanh(- (profile.grid.z - z0) / 3 * (2.4728 - 2.3625 * reduced_temperature))
        if 1 - abs(tanh[0]) > 1e-3:
            warnings.warn('Grid may be too narrow for tanh-profile.', RuntimeWarning, stacklevel=2)

        profile.density = 0.5 * (rho_l - rho_v) * tanh[None, :] + 0.5 * (rho_l + rho_v)
        profile.specification = DFTSpecification.total_moles_from_profile(profile)
        return interface

    @staticmethod
    def from_pdgt(vle, n_grid):
        """Construction
        Interface initialised from density gradient theory, on a domain six times the width of the gradient theory
        profile (at least MIN_WIDTH). Only available for functionals with a single segment.

        Args:
            vle (PhaseEquilibrium) : The phase equilibrium
            n_grid (int) : Number of grid points
        Returns:
            PlanarInterface : The interface
        """
        functional = vle.vapor.functional
        if functional.n_segments != 1:
            raise PreconditionError('PlanarInterface.from_pdgt',
                                    f'Density gradient theory initialisation requires a single segment, the functional '
                                    f'has {functional.n_segments}. Use PlanarInterface.from_tanh instead.')

        rho_pdgt, gamma_pdgt, z_pdgt, w_pdgt = functional.solve_pdgt(vle, PDGT_GRID_POINTS)
        if not (np.isfinite(gamma_pdgt) and abs(gamma_pdgt) >= np.finfo(float).tiny):
            raise NumericalError('PlanarInterface.from_pdgt', 'Density gradient theory did not give a valid surface '
                                                              'tension', gamma_pdgt)

        l_grid = max(MIN_WIDTH, w_pdgt * RELATIVE_WIDTH)
        interface = PlanarInterface.new(vle, n_grid, l_grid)
        profile = interface.profile
        profile.density = interp_symmetric(vle, z_pdgt, rho_pdgt, vle, profile.grid.z, 0.5 * l_grid)
        profile.specification = DFTSpecification.total_moles_from_profile(profile)
        return interface

    def solve_inplace(self, solver=None, debug=False):
        """
        Solve for the equilibrium density, then compute the surface tension and the equimolar radius.

        Args:
            solver (DFTSolver, optional) : Solver configuration
            debug (bool) : Print iteration info
        Raises:
            SolverError : If the solver does not converge. The scalars are left unset.
        """
        profile = self.profile
        profile.solve(solver, debug)

        omega = profile.grand_potential_density()
        gamma = profile.integrate(omega + self.vle.vapor.pressure())

        rho_v = self.vle.vapor.density
        rho_l = self.vle.liquid.density
        radius = profile.integrate((np.sum(profile.density, axis=0) - rho_v) / (rho_l - rho_v))
        if not (np.isfinite(gamma) and np.isfinite(radius)):
            warnings.warn(f'Solved interface has non-finite surface tension ({gamma}) or equimolar radius ({radius}).',
                          RuntimeWarning, stacklevel=2)
        self.surface_tension, self.equimolar_radius = gamma, radius

    def solve(self, solver=None, debug=False):
        """
        Returns:
            PlanarInterface : A solved copy, self is unchanged
        """
        interface = self.copy()
        interface.solve_inplace(solver, debug)
        return interface

    def copy(self):
        return PlanarInterface(self.profile.copy(), self.vle, self.surface_tension, self.equimolar_radius)

    def _boundary_densities(self, computation):
        # Total (segment-weighted) densities at the liquid and vapour ends of the domain
        m = self.profile.functional.m()[:, None]
        rho = np.sum(m * self.profile.density, axis=0)
        if rho[0] == rho[-1]:
            raise PreconditionError(computation, f'The densities at the two ends of the domain coincide ({rho[0]}).')
        return rho, rho[0], rho[-1]

    def shift_equimolar_inplace(self):
        """
        Shift the grid such that the equimolar dividing surface is at z = 0.
        """
        rho, rho_l, rho_v = self._boundary_densities('shift_equimolar')
        x = (rho - rho_v) / (rho_l - rho_v)
        axis = self.profile.grid.axes[0]
        ze = axis.edges[0] + self.profile.integrate(x)
        axis.grid -= ze
        axis.edges -= ze

    def shift_equimolar(self):
        """
        Returns:
            PlanarInterface : A copy shifted such that the equimolar dividing surface is at z = 0
        """
        interface = self.copy()
        interface.shift_equimolar_inplace()
        return interface

    def relative_adsorption(self):
        r"""
        Relative adsorption $\Gamma_i^{(j)}$ of component i with respect to the dividing surface where the
        adsorption of component j vanishes.

        Returns:
            ndarray : Gamma[i, j] (1 / Å^2), zero on the diagonal
        """
        rho = self.profile.density
        rho_l = rho[:, 0]
        rho_v = rho[:, -1]
        drho = rho_l - rho_v
        if np.any(drho == 0):
            raise PreconditionError('relative_adsorption', f'Liquid and vapour densities coincide for segment(s) '
                                                           f'{np.flatnonzero(drho == 0).tolist()}.')

        deviation = (rho - rho_l[:, None]) / drho[:, None]
        n = rho.shape[0]
        gamma = np.zeros((n, n))
        for i in range(n):
            for j in range(n):
                if i != j:
                    gamma[i, j] = - drho[i] * self.profile.integrate(deviation[j] - deviation[i])
        return gamma

    def interfacial_enrichment(self):
        """
        Returns:
            ndarray : Maximum density of each segment divided by the larger of its two bulk densities
        """
        rho = self.profile.density
        rho_bulk = np.maximum(rho[:, 0], rho[:, -1])
        if np.any(rho_bulk <= 0):
            raise PreconditionError('interfacial_enrichment', f'Segment(s) {np.flatnonzero(rho_bulk <= 0).tolist()} are '
                                                               f'absent from both bulk phases.')
        return np.max(rho, axis=1) / rho_bulk

    def interfacial_thickness(self, lower_fraction=0.1, upper_fraction=0.9):
        """
        Distance between the positions where the total density has reached `lower_fraction` and `upper_fraction` of
        the way from the vapour to the liquid density (10-90 thickness by default). The order of the fractions
        does not matter.

        Args:
            lower_fraction (float) : In (0, 1)
            upper_fraction (float) : In (0, 1)
        Returns:
            float : Thickness (Å)
        """
        for fraction in (lower_fraction, upper_fraction):
            if not 0 < fraction < 1:
                raise PreconditionError('interfacial_thickness', f'Fractions must lie in (0, 1), got {fraction}.')
        lower, upper = sorted((lower_fraction, upper_fraction))

        rho = np.sum(self.profile.density, axis=0)
        rho_l = max(rho[0], rho[-1])
        rho_v = min(rho[0], rho[-1])
        if rho_l == rho_v:
            raise PreconditionError('interfacial_thickness', f'The densities at the two ends of the domain coincide '
                                                             f'({rho_l}).')

        z = self.profile.grid.z
        z_lower = self._crossing(z, rho, rho_v + lower * (rho_l - rho_v))
        z_upper = self._crossing(z, rho, rho_v + upper * (rho_l - rho_v))
        return abs(z_upper - z_lower)

    @staticmethod
    def _crossing(z, rho, threshold):
        # First crossing of threshold, starting from the first grid point
        above = rho > threshold
        idx = np.flatnonzero(above != above[0])
        if len(idx) == 0:
            raise PreconditionError('interfacial_thickness', f'The density never crosses {threshold}.')
        i = idx[0]
        return z[i - 1] + (threshold - rho[i - 1]) / (rho[i] - rho[i - 1]) * (z[i] - z[i - 1])

    def set_density_inplace(self, density, scale=False):
        """
        Replace the density profile.

        Args:
            density (ndarray) : Segment densities, same shape as the current density
            scale (bool) : If True, `density` is mapped linearly such that its values at the ends of the domain match
                           the current values, before it replaces the current density.
        """
        density = np.array(density, dtype=float)
        if density.shape != self.profile.density.shape:
            raise ShapeMismatchError('set_density', self.profile.density.shape, density.shape)

        if scale:
            current = self.profile.density
            d_init = density[:, :1] - density[:, -1:]
            if np.any(d_init == 0):
                raise PreconditionError('set_density', 'Cannot scale a density that is equal at both ends of the '
                                                       'domain.')
            density = (density - density[:, -1:]) / d_init * (current[:, :1] - current[:, -1:]) + current[:, -1:]
        self.profile.density = density

    def set_density(self, density, scale=False):
        """
        Returns:
            PlanarInterface : A copy with the density replaced, see set_density_inplace
        """
        interface = self.copy()
        interface.set_density_inplace(density, scale)
        return interface

    def plot(self, ax=None, **kwargs):
        return self.profile.plot(ax, **kwargs)

    def __repr__(self):
        return f'PlanarInterface({self.profile}, surface_tension={self.surface_tension}, ' \
               f'equimolar_radius={self.equimolar_radius})'


def interp_symmetric(vle_pdgt, z_pdgt, rho_pdgt, vle, z, radius):
    """
    Map a one-sided density profile from a coarse grid onto a domain holding the interface and its mirror image
    about z = 0. The coarse profile (liquid first) is reduced to an order parameter using the densities of
    `vle_pdgt`, and scaled back using the densities of `vle`.

    Args:
        vle_pdgt (PhaseEquilibrium) : Equilibrium of the coarse profile
        z_pdgt (ndarray) : Coarse grid (Å), increasing
        rho_pdgt (ndarray) : Coarse segment densities, shape (n_segments, len(z_pdgt))
        vle (PhaseEquilibrium) : Equilibrium of the result
        z (ndarray) : Fine grid (Å)
        radius (float) : Position of the interface on the fine grid (Å)
    Returns:
        ndarray : Segment densities, shape (n_segments, len(z))
    """
    idx = vle_pdgt.vapor.functional.component_index()
    rho_v = vle_pdgt.vapor.partial_density[idx][:, None]
    rho_l = vle_pdgt.liquid.partial_density[idx][:, None]
    reduced_pdgt = (np.asarray(rho_pdgt) - rho_v) / (rho_l - rho_v) - 0.5
    n_segments = reduced_pdgt.shape[0]

    half = np.full(n_segments, 0.5)
    reduced = interp(z_pdgt, reduced_pdgt, z - radius, half, - half, False) \
              + interp(z_pdgt, reduced_pdgt, z + radius, - half, half, True)
    if radius < 0:
        reduced += 1.0

    # A coarse profile without an interface is carried over as it is
    flat = np.ptp(reduced_pdgt, axis=1) == 0
    reduced[flat] = reduced_pdgt[flat, :1] + 0.5

    idx = vle.vapor.functional.component_index()
    rho_v = vle.vapor.partial_density[idx][:, None]
    rho_l = vle.liquid.partial_density[idx][:, None]
    return reduced * (rho_l - rho_v) + rho_v


def _decay(y_inf, y_a, y_b, exponent):
    # y_inf + (y_a - y_inf) * ((y_b - y_inf) / (y_a - y_inf))**exponent, equal to y_inf if y_a is at the asymptote
    d_a = y_a - y_inf
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        ratio = (y_b - y_inf) / d_a
        return y_inf + np.where(d_a == 0, 0.0, d_a * ratio**exponent)


def interp(x_old, y_old, x_new, y_left, y_right, reverse):
    """
    Interpolate y_old(x_old) onto x_new: Linear between the samples, and decaying geometrically towards the
    asymptotes y_left and y_right beyond the first and last sample.

    Args:
        x_old (ndarray) : Sample points, increasing
        y_old (ndarray) : Samples, shape (n_segments, len(x_old))
        x_new (ndarray) : Points to interpolate at
        y_left (ndarray) : Asymptote of each segment for x -> -inf
        y_right (ndarray) : Asymptote of each segment for x -> inf
        reverse (bool) : If True, interpolate y_old(-x_old) instead
    Returns:
        ndarray : Interpolated values, shape (n_segments, len(x_new))
    """
    x_old = np.asarray(x_old, dtype=float)
    y_old = np.asarray(y_old, dtype=float)
    x_new = np.asarray(x_new, dtype=float)
    if reverse:
        x_old = - x_old[::-1]
        y_old = y_old[:, ::-1]
    n = len(x_old)
    y_left = np.asarray(y_left, dtype=float)[:, None]
    y_right = np.asarray(y_right, dtype=float)[:, None]

    k = np.searchsorted(x_old, x_new, side='left')
    inner = np.clip(k, 1, n - 1)
    t = (x_new - x_old[inner - 1]) / (x_old[inner] - x_old[inner - 1])
    y = (1 - t) * y_old[:, inner - 1] + t * y_old[:, inner]

    left = x_new < x_old[0]
    p_left = (x_new[left] - x_old[0]) / (x_old[1] - x_old[0])
    y[:, left] = _decay(y_left, y_old[:, :1], y_old[:, 1:2], p_left[None, :])

    right = x_new > x_old[-1]
    p_right = (x_new[right] - x_old[n - 2]) / (x_old[n - 1] - x_old[n - 2])
    y[:, right] = _decay(y_right, y_old[:, n - 2:n - 1], y_old[:, n - 1:n], p_right[None, :])
    return y
