"""Circuit building - variables, linear combinations and constraint systems."""

from .constraint_system import (
    ConstraintSystem,
    ProverConstraintSystem,
    VerifierConstraintSystem,
    flatten,
)
from .linear_combination import LinearCombination, into_lc
from .variable import (
    ONE_INDEX,
    ClearVariable,
    OpaqueVariable,
    Variable,
    VariableIndex,
    WireKind,
)

__all__ = [
    # Variables
    "Variable",
    "ClearVariable",
    "OpaqueVariable",
    "VariableIndex",
    "WireKind",
    "ONE_INDEX",
    # Linear combinations
    "LinearCombination",
    "into_lc",
    # Constraint systems
    "ConstraintSystem",
    "ProverConstraintSystem",
    "VerifierConstraintSystem",
    "flatten",
]
