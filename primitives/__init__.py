"""Primitives - field arithmetic and the value types linear combinations are built from."""

from primitives.assignment import Assignment
from primitives.errors import InvalidScalarKindMix, UnknownAssignmentError
from primitives.field import (
    FF,
    SCALAR_BYTES,
    SCALAR_FIELD_ORDER,
    ff,
    ff_vector,
)
from primitives.opaque_scalar import OpaqueScalar
from primitives.scalar import Scalar, as_scalar
from primitives.scalar_value import ScalarKind, ScalarValue

__all__ = [
    # Field
    "FF",
    "ff",
    "ff_vector",
    "SCALAR_FIELD_ORDER",
    "SCALAR_BYTES",
    # Scalar values
    "ScalarKind",
    "ScalarValue",
    "Scalar",
    "OpaqueScalar",
    "as_scalar",
    # Assignments
    "Assignment",
    # Errors
    "InvalidScalarKindMix",
    "UnknownAssignmentError",
]
