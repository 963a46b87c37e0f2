from enum import IntEnum

# Upper bound of the reduced external potential (beta * V)
MAX_POTENTIAL = 50.0

# Grid points used when a pore does not specify its resolution
DEFAULT_GRID_POINTS = 2048

# Padding of planar pores beyond the wall, in units of the largest segment diameter
POTENTIAL_OFFSET = 2.0

# Domain length of interfaces initialised from gradient theory: max(MIN_WIDTH, RELATIVE_WIDTH * width)
RELATIVE_WIDTH = 6.0
MIN_WIDTH = 100.0 # Å
PDGT_GRID_POINTS = 20

# Inert probe fluid used to compute pore volumes
SIGMA_HE = 2.64 # Å
EPSILON_HE = 10.9 # K
T_REFERENCE = 298.0 # K
RHO_REFERENCE = 1.0 # 1 / Å^3

# Default solver stages
PICARD_MAX_ITER = 500
PICARD_TOL = 1e-5
PICARD_DAMPING = 0.15
ANDERSON_MAX_ITER = 150
ANDERSON_TOL = 1e-11
ANDERSON_DAMPING = 0.15
ANDERSON_MMAX = 100


class Contributions(IntEnum):
    TOTAL = 0
    RESIDUAL = 1
    IDEAL_GAS = 2


class Specification(IntEnum):
    CHEMICAL_POTENTIAL = 10
    MOLES = 20
    TOTAL_MOLES = 30


class MoleculeShape(IntEnum):
    SPHERICAL = 1
    NONSPHERICAL = 2
    HETEROSEGMENTED = 3
