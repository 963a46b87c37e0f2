"""
Convolutions of density profiles with analytical weight functions.

A ConvolverFFT is planned once per profile, for a grid and the weight functions of a functional. It then computes
weighted densities by sine and cosine transforms, selected from the geometry of the grid and the parity of each
weight function. Density profiles are treated as even functions: planar profiles are mirrored about z = 0, and
spherical profiles are radially symmetric.
"""
from scipy.fft import dst, idst, dct, idct
import numpy as np
from poredft.grid import Geometry
from poredft.exceptions import PreconditionError


def _convolve_planar(analytical, discrete, axis):
    if analytical.is_even():
        return idct(dct(discrete, type=2) * analytical(axis.k_cos), type=2)

    # Odd weight: The transformed profile must be rolled to match the sine grid
    discrete_transformed = np.roll(dct(discrete, type=2), -1)
    discrete_transformed[-1] = 0
    return idst(discrete_transformed * analytical(axis.k_sin), type=2)


def _convolve_polar(analytical, discrete, axis):
    raise NotImplementedError('Convolutions are not implemented for polar geometry.')


def _convolve_spherical(analytical, discrete, axis):
    r = axis.grid
    k_sin = axis.k_sin
    k_cos = axis.k_cos

    # Shift the profile such that it vanishes at the end of the domain
    discrete_inf = discrete[-1]
    discrete_delta = discrete - discrete_inf

    # The argument to the transform is f(r) * r, which is odd if f(r) is even
    if analytical.is_even():
        delta_term = (1 / r) * idst(dst(discrete_delta * r, type=2) * analytical(k_sin), type=2)
        return delta_term + analytical(0.0) * discrete_inf

    odd_term = dst(discrete_delta * r, type=2) * analytical(k_sin) / k_sin
    even_term = np.roll(dst(discrete_delta * r, type=2) / k_sin, +1) * analytical(k_cos) * k_cos
    even_term[0] = 0
    # idst is divided by 2 because of the transform prefactor
    return (1 / (np.pi * r**2)) * idst(odd_term, type=2) / 2 - (1 / r) * idct(even_term, type=2)


_CONVOLUTIONS = {Geometry.PLANAR: _convolve_planar,
                 Geometry.POLAR: _convolve_polar,
                 Geometry.SPHERICAL: _convolve_spherical}


class ConvolverFFT:
    """
    Convolution plan bound to a grid and the weight functions of a functional.

    Attributes:
        grid (Grid) : The grid
        weight_functions (list[WeightFunctionInfo]) : Weight functions, one entry per functional contribution
        max_derivative_order (int or None) : Highest order of spatial derivatives of the weighted densities that
                                             can be requested. None means no derivatives.
    """

    def __init__(self, grid, weight_functions, max_derivative_order=None):
        self.grid = grid
        self.weight_functions = list(weight_functions)
        self.max_derivative_order = max_derivative_order

    @staticmethod
    def plan(grid, weight_functions, max_derivative_order=None):
        """Construction
        Args:
            grid (Grid) : The grid
            weight_functions (list[WeightFunctionInfo]) : Weight functions
            max_derivative_order (int, optional) : Highest derivative order of the weighted densities
        Returns:
            ConvolverFFT : The plan
        """
        return ConvolverFFT(grid, weight_functions, max_derivative_order)

    def convolve(self, analytical, discrete):
        """
        Convolve an analytical weight function with a discrete profile on the first axis of the grid.

        Args:
            analytical (Analytical) : Fourier transformed weight function
            discrete (ndarray) : The profile, one value per grid point
        Returns:
            ndarray : The convolved profile (real space)
        """
        axis = self.grid.axes[0]
        return _CONVOLUTIONS[axis.geometry](analytical, np.asarray(discrete, dtype=float), axis)

    def weighted_densities(self, density):
        """
        Args:
            density (ndarray) : Segment densities, shape (n_segments, n_grid)
        Returns:
            list[ndarray] : For every WeightFunctionInfo, the weighted densities, shape (n_weighted, n_grid)
        """
        result = []
        for info in self.weight_functions:
            wd = [density[i] for i in range(len(info.component_index))] if info.local_density else []
            for weight in info.weights:
                wd.append(sum(self.convolve(w_i, density[i]) for i, w_i in enumerate(weight)))
            result.append(np.array(wd).reshape(-1, density.shape[-1]))
        return result

    def weighted_density_gradients(self, density):
        """
        First spatial derivative of the weighted densities. Requires a plan with max_derivative_order >= 1.

        Returns:
            list[ndarray] : Same layout as `weighted_densities`
        """
        if self.max_derivative_order is None or self.max_derivative_order < 1:
            raise PreconditionError('weighted_density_gradients',
                                    'The convolver was planned without spatial derivatives.')
        z = self.grid.z
        return [np.gradient(wd, z, axis=-1) if wd.shape[-1] > 1 else np.zeros_like(wd)
                for wd in self.weighted_densities(density)]

    def __repr__(self):
        return f'ConvolverFFT({self.grid}, {len(self.weight_functions)} weight function sets, ' \
               f'max_derivative_order={self.max_derivative_order})'
