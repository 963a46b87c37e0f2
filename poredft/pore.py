"""
Fluids confined in pores. A PoreSpecification describes the pore (geometry, size and solid-fluid potential), and is
initialized with a bulk state to give a PoreProfile, which is solved in place.

Example:
    pore = Pore1D(Geometry.PLANAR, 20.0, LJ93(sigma_ss=3.4, epsilon_k_ss=28.0, rho_s=0.114))
    profile = pore.initialize(bulk)
    profile.solve_inplace()
    profile.interfacial_tension
"""
from abc import ABCMeta, abstractmethod
import warnings
import numpy as np
from poredft.constants import DEFAULT_GRID_POINTS, POTENTIAL_OFFSET
from poredft.convolver import ConvolverFFT
from poredft.exceptions import ShapeMismatchError
from poredft.external_potential import external_potential_1d
from poredft.functional import HELIUM
from poredft.grid import Axis, Geometry, Grid
from poredft.profile import DFTProfile


class PoreSpecification(metaclass=ABCMeta):

    @abstractmethod
    def initialize(self, bulk, density=None, external_potential=None):
        """
        Args:
            bulk (BulkState) : Bulk state in equilibrium with the pore
            density (ndarray, optional) : Initial segment densities
            external_potential (ndarray, optional) : Precomputed reduced external potential
        Returns:
            PoreProfile : The (unsolved) pore
        """
        pass

    @abstractmethod
    def dimension(self):
        pass

    def pore_volume(self, reference_fluid=None):
        """
        Accessible volume of the pore: The integral of the Boltzmann factor exp(- beta V) of a probe fluid.

        Args:
            reference_fluid (ReferenceFluid, optional) : The probe, defaults to helium at 298 K
        Returns:
            float : Pore volume (Å for planar pores per unit area, Å^2 for polar pores per unit length, Å^3 for
                    spherical pores)
        """
        reference_fluid = HELIUM if reference_fluid is None else reference_fluid
        pore = self.initialize(reference_fluid.bulk_state())
        profile = pore.profile
        return profile.integrate(np.exp(- profile.external_potential[0]))


def _planar_axis(pore_size, n_grid, fluid):
    # Half the pore, mirrored about the centre, padded so that the potential reaches the cutoff inside the domain
    offset = POTENTIAL_OFFSET * np.max(fluid.sigma_ff())
    return Axis.cartesian(n_grid, 0.5 * pore_size, potential_offset=offset, mirrored=True)


_PORE_AXES = {Geometry.PLANAR: _planar_axis,
              Geometry.POLAR: lambda pore_size, n_grid, fluid: Axis.polar(n_grid, pore_size),
              Geometry.SPHERICAL: lambda pore_size, n_grid, fluid: Axis.spherical(n_grid, pore_size)}


class Pore1D(PoreSpecification):
    """
    Pore resolved on a single axis: A slit pore (planar), a cylindrical pore (polar) or a spherical pore.

    Attributes:
        geometry (Geometry) : Geometry of the pore
        pore_size (float) : Width (planar) or radius (polar, spherical) of the pore (Å)
        potential (ExternalPotential) : Solid-fluid potential
        n_grid (int or None) : Number of grid points, DEFAULT_GRID_POINTS if None
        potential_cutoff (float or None) : Upper bound of beta * V, MAX_POTENTIAL if None
    """

    def __init__(self, geometry, pore_size, potential, n_grid=None, potential_cutoff=None):
        self._geometry = Geometry(geometry)
        self._pore_size = pore_size
        self._potential = potential
        self._n_grid = n_grid
        self._potential_cutoff = potential_cutoff

    geometry = property(lambda self: self._geometry)
    pore_size = property(lambda self: self._pore_size)
    potential = property(lambda self: self._potential)
    n_grid = property(lambda self: self._n_grid)
    potential_cutoff = property(lambda self: self._potential_cutoff)

    def dimension(self):
        return self.geometry.dimension()

    def axis(self, fluid):
        """Utility
        The axis of the pore, for the segment diameters of `fluid`.
        """
        n_grid = DEFAULT_GRID_POINTS if self.n_grid is None else self.n_grid
        return _PORE_AXES[self.geometry](self.pore_size, n_grid, fluid)

    def initialize(self, bulk, density=None, external_potential=None):
        functional = bulk.functional
        axis = self.axis(functional)

        if external_potential is None:
            external_potential = external_potential_1d(self.pore_size, bulk.temperature, self.potential, functional,
                                                       axis, self.potential_cutoff)
        else:
            external_potential = np.array(external_potential, dtype=float)
            shape = (functional.n_segments, axis.n_grid)
            if external_potential.shape != shape:
                raise ShapeMismatchError('Pore1D.initialize (external potential)', shape, external_potential.shape)

        grid = Grid.new_1d(axis)
        weight_functions = functional.weight_functions(bulk.temperature)
        convolver = ConvolverFFT.plan(grid, weight_functions, 1)
        return PoreProfile(DFTProfile(grid, convolver, bulk, external_potential, density))

    def __repr__(self):
        return f'Pore1D({self.geometry.name}, pore_size={self.pore_size}, potential={self.potential}, ' \
               f'n_grid={self.n_grid}, potential_cutoff={self.potential_cutoff})'


class PoreProfile:
    """
    Density profile of a fluid in a pore.

    Attributes:
        profile (DFTProfile) : The density profile
        grand_potential (float or None) : Grand potential (K per unit area, length, or pore), set by solve_inplace
        interfacial_tension (float or None) : Excess grand potential relative to the bulk, set by solve_inplace
    """

    def __init__(self, profile, grand_potential=None, interfacial_tension=None):
        self.profile = profile
        self.grand_potential = grand_potential
        self.interfacial_tension = interfacial_tension

    def solve_inplace(self, solver=None, debug=False):
        """
        Solve for the equilibrium density, then compute the grand potential and the interfacial tension.

        Args:
            solver (DFTSolver, optional) : Solver configuration
            debug (bool) : Print iteration info
        Raises:
            SolverError : If the solver does not converge. The scalars are left unset.
        """
        self.profile.solve(solver, debug)
        omega = self.profile.grand_potential()
        gamma = omega + self.profile.bulk.pressure() * self.profile.volume()
        if not (np.isfinite(omega) and np.isfinite(gamma)):
            warnings.warn(f'Solved pore has non-finite grand potential ({omega}) or interfacial tension ({gamma}).',
                          RuntimeWarning, stacklevel=2)
        self.grand_potential, self.interfacial_tension = omega, gamma

    def solve(self, solver=None, debug=False):
        """
        Returns:
            PoreProfile : A solved copy, self is unchanged
        """
        pore = PoreProfile(self.profile.copy())
        pore.solve_inplace(solver, debug)
        return pore

    def update_bulk(self, bulk):
        """
        Returns:
            PoreProfile : Copy of the pore in equilibrium with `bulk`, with unset grand potential and tension
        """
        profile = self.profile.copy()
        profile.bulk = bulk
        return PoreProfile(profile)

    def moles(self):
        return self.profile.moles()

    def total_moles(self):
        return self.profile.total_moles()

    def __repr__(self):
        return f'PoreProfile({self.profile}, grand_potential={self.grand_potential}, ' \
               f'interfacial_tension={self.interfacial_tension})'
