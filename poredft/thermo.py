"""
Bridge to thermopack: Bulk states, phase equilibria and fluid parameters from thermopack objects, converted from SI
units to the reduced units used by poredft (Å, K, 1 / Å^3).

Example:
    from thermopack.pcsaft import pcsaft
    eos = pcsaft()
    eos.init('C1')
    functional = ideal_gas_from_thermopack(eos)
    vle = bubble_point_equilibrium(eos, 140.0, functional)
"""
import numpy as np
from scipy.constants import Avogadro
from thermopack.thermopack_state import Equilibrium
from poredft.bulk import BulkState, PhaseEquilibrium
from poredft.functional import IdealGas


def reduced_density(partial_density):
    """Utility
    Convert densities from mol / m^3 to 1 / Å^3
    """
    return np.asarray(partial_density, dtype=float) * Avogadro * 1e-30


def bulk_state_from_thermopack(state, functional):
    """
    Args:
        state (thermopack.thermopack_state.State) : The state
        functional (HelmholtzEnergyFunctional) : Functional of the bulk state
    Returns:
        BulkState : The state in reduced units
    """
    return BulkState(functional, state.T, reduced_density(state.partial_density()))


def phase_equilibrium_from_thermopack(vle, functional):
    """
    Args:
        vle (thermopack.thermopack_state.Equilibrium) : The equilibrium
        functional (HelmholtzEnergyFunctional) : Functional of the bulk states
    Returns:
        PhaseEquilibrium : The equilibrium in reduced units
    """
    return PhaseEquilibrium(bulk_state_from_thermopack(vle.vapor, functional),
                            bulk_state_from_thermopack(vle.liquid, functional))


def bubble_point_equilibrium(eos, temperature, functional, z=None):
    """
    Args:
        eos (thermopack) : Equation of state
        temperature (float) : Temperature (K)
        functional (HelmholtzEnergyFunctional) : Functional of the bulk states
        z (ndarray, optional) : Liquid composition, defaults to equal amounts of all components
    Returns:
        PhaseEquilibrium : The bubble point in reduced units
    """
    z = np.ones(eos.nc) / eos.nc if z is None else z
    return phase_equilibrium_from_thermopack(Equilibrium.bubble_pressure(eos, temperature, z=z), functional)


def ideal_gas_from_thermopack(eos):
    """
    Ideal gas functional with the segment parameters of a SAFT equation of state.

    Args:
        eos (thermopack.saft.saft) : Equation of state
    Returns:
        IdealGas : The functional
    """
    return IdealGas(np.asarray(eos.sigma) * 1e10, eos.eps_div_kb, eos.m)
