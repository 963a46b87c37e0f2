"""
Weight functions are implemented as callable objects returning their (3D) Fourier transform, with arithmetic
implemented such that for example

2 * Heaviside(R) # Returns a new callable

WeightFunctionInfo groups the weight functions of one functional contribution. It is what a functional returns from
`weight_functions(temperature)`, and what ConvolverFFT is planned with.
"""
import numpy as np
from scipy.special import spherical_jn


class Analytical:
    """
    Fourier transform of a weight function, as a function of the wavenumber k (1 / Å).

    Attributes:
        lamb (callable) : The transformed function
        integral (float) : Integral of the weight function over all space
        is_vector_valued (bool) : Vector valued weights are odd, scalar weights are even.
    """
    def __init__(self, lamb, integral, is_vector_valued=False):
        self.lamb = lamb
        self.integral = integral
        self.is_vector_valued = is_vector_valued

    def __call__(self, k):
        return self.lamb(k)

    def __mul__(self, prefactor):
        return Analytical(lambda k: prefactor * self(k), prefactor * self.integral, self.is_vector_valued)

    def __rmul__(self, prefactor):
        return self.__mul__(prefactor)

    def __truediv__(self, other):
        return self * (1 / other)

    def __add__(self, other):
        return Analytical(lambda k: self(k) + other(k), self.integral + other.integral, self.is_vector_valued)

    def is_odd(self):
        return self.is_vector_valued

    def is_even(self):
        return not self.is_odd()


class Heaviside(Analytical):
    r"""
    3D Fourier transform of $\theta(R - r)$
    """
    def __init__(self, R):
        self.R = R
        super().__init__(lambda k: (4 / 3) * np.pi * self.R**3 * (spherical_jn(0, 2 * np.pi * k * self.R)
                                                                   + spherical_jn(2, 2 * np.pi * k * self.R)),
                         (4 / 3) * np.pi * self.R**3)


class Delta(Analytical):
    r"""
    3D Fourier transform of $\delta(r - R)$
    """
    def __init__(self, R):
        self.R = R
        super().__init__(lambda k: 4 * np.pi * self.R**2 * spherical_jn(0, 2 * np.pi * k * self.R),
                         4 * np.pi * self.R**2)


class DeltaVec(Analytical):
    r"""
    3D Fourier transform of $\hat{\vec{r}}\delta(r - R)$
    """
    def __init__(self, R):
        self.R = R
        super().__init__(lambda k: - 2 * np.pi * k * (4 / 3) * np.pi * self.R**3
                                   * (spherical_jn(0, 2 * np.pi * k * self.R) + spherical_jn(2, 2 * np.pi * k * self.R)),
                         0.0, is_vector_valued=True)


class WeightFunctionInfo:
    """
    The weight functions of one functional contribution. Every weight is a list with one Analytical per segment,
    and gives one weighted density, summed over segments.

    Attributes:
        component_index (ndarray) : Segment to component map
        local_density (bool) : If True, the segment densities themselves are the first weighted densities
        scalar_weights (list[list[Analytical]]) : Scalar (even) weights
        vector_weights (list[list[Analytical]]) : Vector (odd) weights
    """
    def __init__(self, component_index, local_density=False):
        self.component_index = np.asarray(component_index)
        self.local_density = local_density
        self.scalar_weights = []
        self.vector_weights = []

    def add(self, weights, vector=False):
        """Utility
        Add a weight function, given as one Analytical per segment. Returns self, for chaining.
        """
        if len(weights) != len(self.component_index):
            raise ValueError(f'Expected one weight per segment ({len(self.component_index)}), got {len(weights)}.')
        (self.vector_weights if vector else self.scalar_weights).append(list(weights))
        return self

    @property
    def weights(self):
        return self.scalar_weights + self.vector_weights

    @property
    def n_weighted_densities(self):
        return (len(self.component_index) if self.local_density else 0) + len(self.weights)
