"""
The DFTProfile is the mutable state shared by pores and interfaces: segment densities on a grid, the external
potential they feel, the bulk state they are in equilibrium with, the convolution plan of the functional, and the
constraint (DFTSpecification) the solver must satisfy.
"""
import copy
import numpy as np
import matplotlib.pyplot as plt
from poredft.constants import Specification
from poredft.convolver import ConvolverFFT
from poredft.exceptions import ShapeMismatchError
from poredft.solver import DFTSolver


class DFTSpecification:
    """
    Side constraint of the density profile solver: Either the chemical potential is fixed by the bulk state, or the
    number of moles of each component, or the total number of moles, in the domain is fixed.
    """

    def __init__(self, kind, value=None):
        self.kind = kind
        self.value = value

    @staticmethod
    def chemical_potential():
        return DFTSpecification(Specification.CHEMICAL_POTENTIAL)

    @staticmethod
    def moles(moles):
        return DFTSpecification(Specification.MOLES, np.array(moles, dtype=float))

    @staticmethod
    def total_moles(total_moles):
        return DFTSpecification(Specification.TOTAL_MOLES, float(total_moles))

    @staticmethod
    def moles_from_profile(profile):
        return DFTSpecification.moles(profile.moles())

    @staticmethod
    def total_moles_from_profile(profile):
        return DFTSpecification.total_moles(profile.total_moles())

    def __repr__(self):
        return f'DFTSpecification({self.kind.name}, {self.value})'


class DFTProfile:
    """
    Density profile on a grid.

    Attributes:
        grid (Grid) : The grid
        convolver (ConvolverFFT) : Convolution plan of the functional on the grid
        bulk (BulkState) : Bulk reference state
        external_potential (ndarray) : Reduced external potential beta * V, shape (n_segments, n_grid)
        density (ndarray) : Segment densities (1 / Å^3), shape (n_segments, n_grid)
        specification (DFTSpecification) : Constraint of the solver
    """

    def __init__(self, grid, convolver, bulk, external_potential=None, density=None):
        functional = bulk.functional
        shape = (functional.n_segments,) + grid.shape

        if external_potential is None:
            external_potential = np.zeros(shape)
        else:
            external_potential = np.array(external_potential, dtype=float)
            if external_potential.shape != shape:
                raise ShapeMismatchError('DFTProfile (external potential)', shape, external_potential.shape)

        if density is None:
            # Boltzmann factor of the bulk density, bounded by the maximum density of the functional
            exp_v = np.exp(- external_potential)
            bonds = functional.bond_integrals(bulk.temperature, exp_v, convolver)
            rho_b = bulk.partial_density[functional.component_index()][:, None]
            density = np.minimum(rho_b * exp_v * bonds, functional.compute_max_density(bulk.partial_density))
        else:
            density = np.array(density, dtype=float)
            if density.shape != shape:
                raise ShapeMismatchError('DFTProfile (density)', shape, density.shape)

        self.grid = grid
        self.convolver = convolver
        self.bulk = bulk
        self.external_potential = external_potential
        self.density = density
        self.specification = DFTSpecification.chemical_potential()

    @property
    def functional(self):
        return self.bulk.functional

    @property
    def temperature(self):
        return self.bulk.temperature

    def integrate(self, f):
        """Utility
        Integrate f over the domain, summing over all leading dimensions.

        Args:
            f (ndarray) : Values on the grid, shape (..., n_grid)
        Returns:
            float : The integral
        """
        return np.sum(np.asarray(f) * self.grid.integration_weights()[0])

    def integrate_segments(self, f):
        """Utility
        Integrate every row of f over the domain.

        Args:
            f (ndarray) : Values on the grid, shape (n_segments, n_grid)
        Returns:
            ndarray : One integral per segment
        """
        return np.sum(np.asarray(f) * self.grid.integration_weights()[0], axis=-1)

    def volume(self):
        return self.grid.volume()

    def moles(self):
        """Profile Property
        Returns:
            ndarray : Number of particles of each component in the domain
        """
        moles = np.zeros(self.functional.n_components)
        moles[self.functional.component_index()] = self.integrate_segments(self.density)
        return moles

    def total_moles(self):
        return np.sum(self.moles())

    def grand_potential_density(self):
        """Profile Property
        Returns:
            ndarray : Grand potential density (K / Å^3)
        """
        return self.functional.grand_potential_density(self.temperature, self.density, self.external_potential,
                                                       self.bulk, self.convolver)

    def grand_potential(self):
        return self.integrate(self.grand_potential_density())

    def solve(self, solver=None, debug=False):
        """
        Iterate the density to equilibrium, in place.

        Args:
            solver (DFTSolver, optional) : Solver configuration, defaults to DFTSolver()
            debug (bool) : Print iteration info
        Returns:
            EquilibriumResult : Convergence info
        Raises:
            SolverError : If the solver does not converge
        """
        solver = DFTSolver() if solver is None else solver
        return solver.solve(self, debug=debug)

    def copy(self):
        """Utility
        Copy with its own grid, convolution plan and arrays. Bulk state and functional are shared.
        """
        other = copy.copy(self)
        other.grid = self.grid.copy()
        other.convolver = ConvolverFFT.plan(other.grid, self.convolver.weight_functions,
                                            self.convolver.max_derivative_order)
        other.external_potential = np.copy(self.external_potential)
        other.density = np.copy(self.density)
        return other

    def plot(self, ax=None, **kwargs):
        """
        Plot the segment densities.

        Args:
            ax (matplotlib.axes.Axes, optional) : Axes to plot in, a new figure is created if not supplied
            kwargs : Passed on to ax.plot
        Returns:
            matplotlib.axes.Axes : The axes
        """
        if ax is None:
            _, ax = plt.subplots()
        for i, rho in enumerate(self.density):
            ax.plot(self.grid.z, rho, label=f'Segment {i}', **kwargs)
        ax.set_xlabel(r'$z$ [Å]')
        ax.set_ylabel(r'$\rho$ [Å$^{-3}$]')
        ax.legend()
        return ax

    def __repr__(self):
        return f'DFTProfile({self.grid}, {self.bulk}, {self.specification})'
