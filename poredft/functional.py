"""
The capability interface that profiles, pores and interfaces require from a Helmholtz energy functional.

Implementing a functional means implementing the abstract methods of HelmholtzEnergyFunctional. All other methods
have defaults corresponding to a functional without residual contributions, so that a new functional only needs to
override what it actually changes. Everything is in reduced units: Å, K, 1 / Å^3, and energies in K.
"""
from abc import ABCMeta, abstractmethod
import numpy as np
from scipy.special import xlogy
from poredft.constants import MoleculeShape, Contributions, SIGMA_HE, EPSILON_HE, T_REFERENCE, RHO_REFERENCE
from poredft.bulk import BulkState
from poredft.exceptions import ConstructionError


class HelmholtzEnergyFunctional(metaclass=ABCMeta):

    @abstractmethod
    def component_index(self):
        """Utility
        Map from segment index to component index.

        Returns:
            ndarray[int] : component_index[i] is the component that segment i belongs to
        """
        pass

    @abstractmethod
    def sigma_ff(self):
        """Utility
        Returns:
            ndarray : Segment diameters (Å)
        """
        pass

    @abstractmethod
    def epsilon_k_ff(self):
        """Utility
        Returns:
            ndarray : Segment interaction energies divided by Boltzmann's constant (K)
        """
        pass

    @property
    def n_segments(self):
        return len(self.component_index())

    @property
    def n_components(self):
        return int(np.max(self.component_index())) + 1

    def m(self):
        """Utility
        Returns:
            ndarray : Segment multiplicities
        """
        return np.ones(self.n_segments)

    def weight_functions(self, temperature):
        """
        Returns:
            list[WeightFunctionInfo] : Weight functions of the non-local contributions at `temperature`
        """
        return []

    def molecule_shape(self):
        return MoleculeShape.SPHERICAL

    def compute_max_density(self, moles):
        """
        Upper bound for the segment densities of an initial guess.

        Args:
            moles (ndarray) : Composition (per component)
        Returns:
            float : Maximum density (1 / Å^3)
        """
        return np.inf

    def bond_integrals(self, temperature, exp_dfdrho, convolver):
        """
        Chain-connectivity factors multiplying the Boltzmann factor of each segment. Unity for spherical segments.
        """
        return np.ones_like(exp_dfdrho)

    def correlation(self, temperature, density, convolver):
        r"""Profile Property
        One-body direct correlation function $c_i^{(1)}(z) = - \delta \beta F^{res} / \delta \rho_i(z)$

        Args:
            temperature (float) : Temperature (K)
            density (ndarray) : Segment densities, shape (n_segments, n_grid)
            convolver (ConvolverFFT) : Convolution plan of the profile
        Returns:
            ndarray : Same shape as `density`
        """
        return np.zeros_like(density)

    def residual_helmholtz_energy_density(self, temperature, density, convolver):
        r"""Profile Property
        Reduced residual Helmholtz energy density $\beta a^{res}(z)$ (1 / Å^3)
        """
        return np.zeros(density.shape[1:])

    def bulk_residual_chemical_potential(self, temperature, partial_density):
        """
        Returns:
            ndarray : Residual chemical potential of each component (K)
        """
        return np.zeros(len(partial_density))

    def bulk_residual_pressure(self, temperature, partial_density):
        """
        Returns:
            float : Residual pressure (K / Å^3)
        """
        return 0.0

    def grand_potential_density(self, temperature, density, external_potential, bulk, convolver):
        r"""Profile Property
        Compute the grand potential density
        $\omega(z) = k_B T [\sum_i \rho_i (\ln \rho_i - 1) + \beta a^{res} + \sum_i \rho_i (\beta V_i - \beta \mu_i)]$

        Args:
            temperature (float) : Temperature (K)
            density (ndarray) : Segment densities, shape (n_segments, n_grid)
            external_potential (ndarray) : Reduced external potential beta * V, same shape as density
            bulk (BulkState) : Bulk state setting the chemical potential
            convolver (ConvolverFFT) : Convolution plan of the profile
        Returns:
            ndarray : Grand potential density (K / Å^3)
        """
        beta_mu = bulk.chemical_potential(Contributions.TOTAL)[self.component_index()] / temperature
        omega = xlogy(density, density) - density + density * (external_potential - beta_mu[:, None])
        return temperature * (np.sum(omega, axis=0)
                              + self.residual_helmholtz_energy_density(temperature, density, convolver))

    def solve_pdgt(self, vle, n_grid):
        """
        Solve predictive density gradient theory for the interface of a phase equilibrium.

        Args:
            vle (PhaseEquilibrium) : The phase equilibrium
            n_grid (int) : Number of grid points
        Returns:
            tuple : (density (n_segments, n_grid), surface tension (K / Å^2), z (Å), interfacial width (Å)).
                    The density goes from liquid at the first point to vapour at the last point.
        """
        raise NotImplementedError(f'{type(self).__name__} does not implement density gradient theory.')


class IdealGas(HelmholtzEnergyFunctional):
    """
    Functional without residual contributions. The fluid parameters are only used to construct external
    potentials and grids.
    """

    def __init__(self, sigma, epsilon_k, m=None):
        self.sigma = np.atleast_1d(np.asarray(sigma, dtype=float))
        self.epsilon_k = np.atleast_1d(np.asarray(epsilon_k, dtype=float))
        self.segments = np.ones_like(self.sigma) if m is None else np.atleast_1d(np.asarray(m, dtype=float))
        if not (len(self.sigma) == len(self.epsilon_k) == len(self.segments)):
            raise ConstructionError('IdealGas', 'sigma, epsilon_k and m must have equal length.')

    def component_index(self):
        return np.arange(len(self.sigma))

    def sigma_ff(self):
        return self.sigma

    def epsilon_k_ff(self):
        return self.epsilon_k

    def m(self):
        return self.segments

    def __repr__(self):
        return f'IdealGas(sigma={self.sigma}, epsilon_k={self.epsilon_k}, m={self.segments})'


class ReferenceFluid(IdealGas):
    """
    Inert probe fluid used to compute the accessible volume of a pore: a single spherical segment without residual
    contributions, evaluated at a fixed temperature and density.
    """

    def __init__(self, sigma=SIGMA_HE, epsilon_k=EPSILON_HE, temperature=T_REFERENCE, density=RHO_REFERENCE):
        super().__init__([sigma], [epsilon_k])
        self.temperature = temperature
        self.density = density

    def compute_max_density(self, moles):
        return 1.0

    def bulk_state(self):
        """Construction
        Returns:
            BulkState : The reference state of the probe fluid
        """
        return BulkState(self, self.temperature, [self.density])

    def __repr__(self):
        return f'ReferenceFluid(sigma={self.sigma[0]}, epsilon_k={self.epsilon_k[0]}, ' \
               f'temperature={self.temperature}, density={self.density})'


HELIUM = ReferenceFluid()
