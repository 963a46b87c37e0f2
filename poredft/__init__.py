from . import grid
from . import external_potential
from . import functional
from . import bulk
from . import convolver
from . import profile
from . import solver
from . import pore
from . import interface
from . import surface_tension_diagram

Geometry = grid.Geometry
Axis = grid.Axis
Grid = grid.Grid
HardWall = external_potential.HardWall
LJ93 = external_potential.LJ93
SimpleLJ93 = external_potential.SimpleLJ93
Steele = external_potential.Steele
IdealGas = functional.IdealGas
ReferenceFluid = functional.ReferenceFluid
BulkState = bulk.BulkState
PhaseEquilibrium = bulk.PhaseEquilibrium
DFTProfile = profile.DFTProfile
DFTSpecification = profile.DFTSpecification
DFTSolver = solver.DFTSolver
Pore1D = pore.Pore1D
PoreProfile = pore.PoreProfile
PlanarInterface = interface.PlanarInterface
SurfaceTensionDiagram = surface_tension_diagram.SurfaceTensionDiagram
