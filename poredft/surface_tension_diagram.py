"""
Surface tension along a series of phase equilibria, e.g. the saturation curve of a pure fluid.
"""
import warnings
import numpy as np
from poredft.constants import DEFAULT_GRID_POINTS, MIN_WIDTH
from poredft.exceptions import Error, PreconditionError
from poredft.functional import HelmholtzEnergyFunctional
from poredft.interface import PlanarInterface


class SurfaceTensionDiagram:
    """
    Solve one planar interface for every phase equilibrium in `dia`. Single segment functionals that implement
    density gradient theory are initialised from it, all other functionals from a tanh profile. Interfaces that fail
    to initialise or solve are skipped with a warning.

    Attributes:
        profiles (list[PlanarInterface]) : The solved interfaces
    """

    def __init__(self, dia, init_densities=None, n_grid=None, l_grid=None, critical_temperature=None, solver=None):
        """
        Args:
            dia (list[PhaseEquilibrium]) : The phase equilibria
            init_densities (bool, optional) : If given, initialise every interface from the previous solution,
                                              scaled to the new bulk densities if True (see set_density_inplace).
            n_grid (int, optional) : Number of grid points, defaults to DEFAULT_GRID_POINTS
            l_grid (float, optional) : Domain length for tanh initialisation (Å), defaults to MIN_WIDTH
            critical_temperature (float, optional) : Critical temperature for tanh initialisation (K). Required
                                                     unless every interface is initialised from gradient theory.
            solver (DFTSolver, optional) : Solver configuration
        """
        n_grid = DEFAULT_GRID_POINTS if n_grid is None else n_grid
        l_grid = MIN_WIDTH if l_grid is None else l_grid

        self.profiles = []
        for vle in dia:
            use_pdgt = _implements_pdgt(vle.functional)
            if not use_pdgt and critical_temperature is None:
                raise PreconditionError('SurfaceTensionDiagram', f'A critical temperature is required for tanh '
                                                                 f'initialisation at T = {vle.temperature} K.')
            try:
                if use_pdgt:
                    interface = PlanarInterface.from_pdgt(vle, n_grid)
                else:
                    interface = PlanarInterface.from_tanh(vle, n_grid, l_grid, critical_temperature)

                if init_densities is not None and len(self.profiles) > 0:
                    previous = self.profiles[-1].profile.density
                    if previous.shape == interface.profile.density.shape:
                        interface.set_density_inplace(previous, init_densities)

                interface.solve_inplace(solver)
            except (Error, NotImplementedError) as err:
                warnings.warn(f'Skipping interface at T = {vle.temperature} K: {err}', RuntimeWarning, stacklevel=2)
                continue
            self.profiles.append(interface)

    @property
    def temperature(self):
        return np.array([p.vle.temperature for p in self.profiles])

    @property
    def vapor_densities(self):
        return np.array([p.vle.vapor.partial_density for p in self.profiles])

    @property
    def liquid_densities(self):
        return np.array([p.vle.liquid.partial_density for p in self.profiles])

    @property
    def surface_tension(self):
        return np.array([p.surface_tension for p in self.profiles])

    def relative_adsorption(self):
        return [p.relative_adsorption() for p in self.profiles]

    def interfacial_enrichment(self):
        return [p.interfacial_enrichment() for p in self.profiles]

    def interfacial_thickness(self, lower_fraction=0.1, upper_fraction=0.9):
        return np.array([p.interfacial_thickness(lower_fraction, upper_fraction) for p in self.profiles])

    def __len__(self):
        return len(self.profiles)


def _implements_pdgt(functional):
    # Gradient theory initialisation needs a single segment and an override of solve_pdgt
    return functional.n_segments == 1 \
           and type(functional).solve_pdgt is not HelmholtzEnergyFunctional.solve_pdgt
