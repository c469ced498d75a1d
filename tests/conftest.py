"""Shared fixtures: setup-phase and proving-phase variables."""

import pytest

from circuit.variable import ClearVariable, VariableIndex, WireKind
from primitives.assignment import Assignment
from primitives.opaque_scalar import OpaqueScalar


def committed(position: int, value=None) -> ClearVariable:
    """Committed wire with a Known assignment, or Unknown when value is None."""
    assignment = Assignment.unknown() if value is None else Assignment.known(value)
    return ClearVariable(VariableIndex(WireKind.COMMITTED, position), assignment)


@pytest.fixture
def setup_vars():
    """x, y without witness data (setup/verification phase)."""
    return committed(0), committed(1)


@pytest.fixture
def proving_vars():
    """x = 3, y = 5 (proving phase)."""
    return committed(0, 3), committed(1, 5)


def reveal(value):
    """Test-only view of a hidden value: its int, or None when Unknown.

    Accepts an Assignment, an OpaqueScalar or a clear Scalar.
    """
    if isinstance(value, Assignment):
        return reveal(value.scalar) if value.is_known else None
    if isinstance(value, OpaqueScalar):
        return int(value._OpaqueScalar__element)
    return int(value)
