"""
The Grid holds the spatial discretisation of a profile: one Axis per spatial dimension that is resolved numerically.
All geometries handled here are reduced to a single Axis.

The Grid is "Dumb" in the sense that it does not solve anything. It knows the geometry (symmetry) of the domain, the
real-space grid points and cell edges, the quadrature weights, and the fourier-space grids used for convolutions.

Code that needs geometry-dependent behaviour should ask the Axis (e.g. Axis.volume(), Axis.integration_weights)
rather than branching on the geometry itself.
"""
from enum import IntEnum
import numpy as np
from poredft.exceptions import ConstructionError


class Geometry(IntEnum):
    PLANAR = 1
    POLAR = 2
    SPHERICAL = 3

    def dimension(self):
        """Number of physical dimensions of the geometry."""
        return int(self.value)


class Axis:
    """
    One-dimensional discretisation of the domain.

    Attributes:
        geometry (Geometry) : Symmetry of the axis
        grid (ndarray) : Cell centres (strictly increasing)
        edges (ndarray) : Cell boundaries, len(grid) + 1 entries
        integration_weights (ndarray) : Quadrature weights such that sum(f * w) is the integral of f over the domain
        length (float) : Length of the confined region (excluding potential_offset)
        potential_offset (float) : Padding beyond the confined region
        mirrored (bool) : Whether the axis represents one half of a domain that is symmetric about z = 0
    """

    def __init__(self, geometry, grid, edges, integration_weights, length, potential_offset=0.0, mirrored=False):
        self.geometry = geometry
        self.grid = grid
        self.edges = edges
        self.integration_weights = integration_weights
        self.length = length
        self.potential_offset = potential_offset
        self.mirrored = mirrored

    @staticmethod
    def _validate(computation, n_grid, length, min_points=1):
        if isinstance(n_grid, bool) or not isinstance(n_grid, (int, np.integer)):
            raise ConstructionError(computation, f'Number of grid points must be an integer, got {n_grid!r}.')
        if n_grid < min_points:
            raise ConstructionError(computation, f'Number of grid points must be at least {min_points}, got {n_grid}.')
        if not np.isfinite(length) or length <= 0:
            raise ConstructionError(computation, f'Domain length must be positive and finite, got {length}.')

    @staticmethod
    def cartesian(n_grid, length, potential_offset=None, mirrored=False):
        """Construction
        Equidistant axis on [0, length + potential_offset].

        Args:
            n_grid (int) : Number of grid points
            length (float) : Length of the confined region (Å)
            potential_offset (float, optional) : Padding added beyond `length` (Å)
            mirrored (bool) : If True, the axis is the positive half of a domain that is symmetric about z = 0,
                              integration weights and volume count both halves.
        Returns:
            Axis : The axis
        """
        Axis._validate('Axis.cartesian', n_grid, length)
        potential_offset = 0.0 if potential_offset is None else potential_offset
        if not np.isfinite(potential_offset) or potential_offset < 0:
            raise ConstructionError('Axis.cartesian', f'Potential offset must be non-negative, got {potential_offset}.')

        domain_size = length + potential_offset
        dz = domain_size / n_grid
        grid = np.linspace(dz / 2, domain_size - dz / 2, n_grid)
        edges = np.linspace(0.0, domain_size, n_grid + 1)
        weights = np.full(n_grid, (2.0 if mirrored else 1.0) * dz)
        return Axis(Geometry.PLANAR, grid, edges, weights, length, potential_offset, mirrored)

    @staticmethod
    def polar(n_grid, length):
        """Construction
        Logarithmically spaced axis on [0, length], refined towards the wall. The weights are the exact areas of the
        annuli between the cell edges.

        Args:
            n_grid (int) : Number of grid points (at least 2)
            length (float) : Radius of the domain (Å)
        Returns:
            Axis : The axis
        """
        Axis._validate('Axis.polar', n_grid, length, min_points=2)

        alpha = 0.002
        for _ in range(20):
            alpha = - np.log(1.0 - np.exp(- alpha)) / (n_grid - 1)
        x0 = 0.5 * (np.exp(- alpha * n_grid) + np.exp(- alpha * (n_grid - 1)))

        i = np.arange(n_grid)
        grid = length * x0 * np.exp(alpha * i)
        edges = np.empty(n_grid + 1)
        edges[0] = 0.0
        edges[1:] = length * np.exp(- alpha * (n_grid - np.arange(1, n_grid + 1)))

        ea = np.exp(alpha)
        e2a = ea**2
        k0 = e2a * (2 * ea + e2a - 1) / ((1 + ea)**2 * (e2a - 1))
        weights = np.exp(2 * alpha * i) * (e2a - 1)
        weights[0] = k0 * e2a
        weights[1] = (e2a - k0) * e2a
        weights *= np.exp(- 2 * alpha * n_grid) * np.pi * length**2
        return Axis(Geometry.POLAR, grid, edges, weights, length)

    @staticmethod
    def spherical(n_grid, length):
        """Construction
        Equidistant spherical shells on [0, length]. The weights are the exact shell volumes.

        Args:
            n_grid (int) : Number of grid points
            length (float) : Radius of the domain (Å)
        Returns:
            Axis : The axis
        """
        Axis._validate('Axis.spherical', n_grid, length)
        dr = length / n_grid
        grid = np.linspace(dr / 2, length - dr / 2, n_grid)
        edges = np.linspace(0.0, length, n_grid + 1)
        k = np.arange(n_grid)
        weights = (4 / 3) * np.pi * dr**3 * (3 * k**2 + 3 * k + 1)
        return Axis(Geometry.SPHERICAL, grid, edges, weights, length)

    @staticmethod
    def new(geometry, n_grid, length, potential_offset=None):
        """Construction
        Build the axis corresponding to `geometry`. Curved geometries ignore `potential_offset`.
        """
        return _AXIS_CONSTRUCTORS[Geometry(geometry)](n_grid, length, potential_offset)

    @property
    def n_grid(self):
        return len(self.grid)

    @property
    def domain_size(self):
        return self.edges[-1] - self.edges[0]

    @property
    def k_cos(self):
        """Fourier-space grid matching a type-II cosine transform of an equidistant axis."""
        self._require_equidistant()
        return np.arange(self.n_grid) / (2 * self.domain_size)

    @property
    def k_sin(self):
        """Fourier-space grid matching a type-II sine transform of an equidistant axis."""
        self._require_equidistant()
        return np.arange(1, self.n_grid + 1) / (2 * self.domain_size)

    def _require_equidistant(self):
        if self.geometry == Geometry.POLAR:
            raise NotImplementedError('Fourier-space grids are not implemented for the logarithmic polar axis.')

    def volume(self):
        """
        Measure of the confined region: length (planar, per unit area), area (polar, per unit length) or volume
        (spherical). The potential offset of planar axes is not included.

        Returns:
            float : The volume
        """
        if self.geometry == Geometry.PLANAR:
            return (2.0 if self.mirrored else 1.0) * self.length
        elif self.geometry == Geometry.POLAR:
            return np.pi * self.length**2
        return (4 / 3) * np.pi * self.length**3

    def copy(self):
        return Axis(self.geometry, np.copy(self.grid), np.copy(self.edges), np.copy(self.integration_weights),
                    self.length, self.potential_offset, self.mirrored)

    def __repr__(self):
        return f'Axis(geometry={self.geometry.name}, n_grid={self.n_grid}, length={self.length}, ' \
               f'potential_offset={self.potential_offset}, mirrored={self.mirrored})'


_AXIS_CONSTRUCTORS = {Geometry.PLANAR: lambda n_grid, length, offset: Axis.cartesian(n_grid, length, offset),
                      Geometry.POLAR: lambda n_grid, length, offset: Axis.polar(n_grid, length),
                      Geometry.SPHERICAL: lambda n_grid, length, offset: Axis.spherical(n_grid, length)}


class Grid:
    """
    Composition of axes. Every geometry treated in poredft is resolved on a single axis.
    """

    def __init__(self, axes):
        self.axes = list(axes)

    @staticmethod
    def new_1d(axis):
        return Grid([axis])

    @property
    def geometry(self):
        return self.axes[0].geometry

    @property
    def shape(self):
        return tuple(axis.n_grid for axis in self.axes)

    @property
    def z(self):
        """Grid points of the first axis."""
        return self.axes[0].grid

    def grids(self):
        return [axis.grid for axis in self.axes]

    def integration_weights(self):
        return [axis.integration_weights for axis in self.axes]

    def volume(self):
        return np.prod([axis.volume() for axis in self.axes])

    def copy(self):
        return Grid([axis.copy() for axis in self.axes])

    def __repr__(self):
        return 'Grid(' + ', '.join(repr(axis) for axis in self.axes) + ')'
