"""
Bulk states and phase equilibria in reduced units (K, 1 / Å^3). These are the reference states that density profiles
are solved against. See poredft.thermo for construction from thermopack states.
"""
import numpy as np
from poredft.constants import Contributions
from poredft.exceptions import PreconditionError


class BulkState:
    """
    Homogeneous state of a functional.

    Attributes:
        functional (HelmholtzEnergyFunctional) : The functional
        temperature (float) : Temperature (K)
        partial_density (ndarray) : Density of each component (1 / Å^3)
    """

    def __init__(self, functional, temperature, partial_density):
        self.functional = functional
        self.temperature = float(temperature)
        self.partial_density = np.atleast_1d(np.asarray(partial_density, dtype=float))

    @property
    def density(self):
        return np.sum(self.partial_density)

    @property
    def molefracs(self):
        return self.partial_density / self.density

    def pressure(self, contributions=Contributions.TOTAL):
        """
        Args:
            contributions (Contributions) : Which contributions to include
        Returns:
            float : Pressure (K / Å^3)
        """
        p = 0.0
        if contributions in (Contributions.TOTAL, Contributions.IDEAL_GAS):
            p += self.temperature * self.density
        if contributions in (Contributions.TOTAL, Contributions.RESIDUAL):
            p += self.functional.bulk_residual_pressure(self.temperature, self.partial_density)
        return p

    def chemical_potential(self, contributions=Contributions.TOTAL):
        """
        Chemical potential of each component, with the ideal gas reference state at unit density.

        Args:
            contributions (Contributions) : Which contributions to include
        Returns:
            ndarray : Chemical potentials (K)
        """
        mu = np.zeros_like(self.partial_density)
        if contributions in (Contributions.TOTAL, Contributions.IDEAL_GAS):
            with np.errstate(divide='ignore'):
                mu += self.temperature * np.log(self.partial_density)
        if contributions in (Contributions.TOTAL, Contributions.RESIDUAL):
            mu += self.functional.bulk_residual_chemical_potential(self.temperature, self.partial_density)
        return mu

    def __repr__(self):
        return f'BulkState(T={self.temperature} K, partial_density={self.partial_density} 1/Å^3)'


class PhaseEquilibrium:
    """
    Vapour-liquid equilibrium between two bulk states of the same functional.
    """

    def __init__(self, vapor, liquid):
        if vapor.functional is not liquid.functional:
            raise PreconditionError('PhaseEquilibrium', 'Vapour and liquid must be states of the same functional.')
        if not np.isclose(vapor.temperature, liquid.temperature):
            raise PreconditionError('PhaseEquilibrium', f'Vapour and liquid temperatures differ '
                                                        f'({vapor.temperature} K, {liquid.temperature} K).')
        if vapor.density == liquid.density:
            raise PreconditionError('PhaseEquilibrium', f'Vapour and liquid have the same density ({vapor.density}).')
        self.vapor = vapor
        self.liquid = liquid

    @property
    def temperature(self):
        return self.vapor.temperature

    @property
    def functional(self):
        return self.vapor.functional

    def __repr__(self):
        return f'PhaseEquilibrium(T={self.temperature} K,\n\tvapor={self.vapor},\n\tliquid={self.liquid})'
