"""Simple set of (unit)tests for bulk states and phase equilibria."""
import numpy as np
from poredft.bulk import BulkState, PhaseEquilibrium
from poredft.constants import Contributions
from poredft.exceptions import PreconditionError
from poredft.functional import IdealGas
from tools import make_vle
from pytest import approx
import pytest


def test_ideal_bulk_state():
    fluid = IdealGas([3.0, 3.5], [100.0, 150.0])
    bulk = BulkState(fluid, 120.0, [0.01, 0.03])
    assert bulk.density == approx(0.04)
    assert bulk.molefracs == approx([0.25, 0.75])
    assert bulk.pressure() == approx(120.0 * 0.04)
    assert bulk.pressure(Contributions.RESIDUAL) == 0.0
    assert bulk.chemical_potential() == approx(120.0 * np.log([0.01, 0.03]))
    assert bulk.chemical_potential(Contributions.RESIDUAL) == approx([0.0, 0.0])


def test_phase_equilibrium():
    vle = make_vle(0.01, 0.7, T=90.0)
    assert vle.temperature == 90.0
    assert vle.functional is vle.liquid.functional


def test_degenerate_phase_equilibrium():
    with pytest.raises(PreconditionError):
        make_vle(0.1, 0.1)


def test_inconsistent_phase_equilibrium():
    fluid = IdealGas([3.0], [100.0])
    other = IdealGas([3.0], [100.0])
    with pytest.raises(PreconditionError):
        PhaseEquilibrium(BulkState(fluid, 80.0, [0.01]), BulkState(other, 80.0, [0.7]))
    with pytest.raises(PreconditionError):
        PhaseEquilibrium(BulkState(fluid, 80.0, [0.01]), BulkState(fluid, 90.0, [0.7]))
