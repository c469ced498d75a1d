"""Tri-state assignment: a scalar value, or the fact that it is not yet known.

During setup and verification no witness exists, so every variable's value is
Unknown. Arithmetic lifts through that uncertainty:

    Known(a) op Known(b) = Known(a op b)
    Unknown  op x        = Unknown
    x        op Unknown  = Unknown

Unknown is an expected state, not an error, and is never replaced by a
default value. Asking an Unknown assignment for its value raises
UnknownAssignmentError; value_or() is the explicit opt-in for a fallback.

Both states carry the scalar kind so that clear and opaque assignments cannot
be mixed even when neither side is known.
"""

from dataclasses import dataclass
from typing import Optional

from primitives.errors import InvalidScalarKindMix, UnknownAssignmentError
from primitives.scalar import Scalar, as_scalar
from primitives.scalar_value import ScalarKind, ScalarValue


@dataclass(frozen=True)
class Assignment:
    """Known(scalar) or Unknown, tagged with its scalar kind.

    Attributes:
        scalar: The value, or None when unknown
        kind: Scalar kind of the value (clear or opaque)
    """
    scalar: Optional[ScalarValue] = None
    kind: ScalarKind = ScalarKind.CLEAR

    def __post_init__(self):
        if self.scalar is not None and self.scalar.kind is not self.kind:
            raise InvalidScalarKindMix(self.kind, self.scalar.kind, "assign")

    # --- Construction ---

    @classmethod
    def known(cls, value) -> "Assignment":
        """Known assignment. Python ints become clear scalars."""
        if isinstance(value, int) and not isinstance(value, bool):
            value = Scalar(value)
        if not isinstance(value, ScalarValue):
            raise TypeError(f"Expected a scalar or int, got {type(value).__name__}")
        return cls(value, value.kind)

    @classmethod
    def unknown(cls, kind: ScalarKind = ScalarKind.CLEAR) -> "Assignment":
        return cls(None, kind)

    @classmethod
    def zero(cls, kind: ScalarKind = ScalarKind.CLEAR) -> "Assignment":
        return cls.known(Scalar.zero() if kind is ScalarKind.CLEAR else Scalar.zero().to_opaque())

    # --- Inspection ---

    @property
    def is_known(self) -> bool:
        return self.scalar is not None

    @property
    def value(self) -> ScalarValue:
        """The known value.

        Raises:
            UnknownAssignmentError: If the assignment is Unknown
        """
        if self.scalar is None:
            raise UnknownAssignmentError("Assignment is Unknown (no witness data)")
        return self.scalar

    def value_or(self, default):
        return self.scalar if self.scalar is not None else default

    # --- Arithmetic ---

    def _lift(self, other, operation: str) -> "Assignment":
        if not isinstance(other, Assignment):
            other = Assignment.known(as_scalar(other, self.kind))
        if other.kind is not self.kind:
            raise InvalidScalarKindMix(self.kind, other.kind, operation)
        return other

    def __add__(self, other) -> "Assignment":
        other = self._lift(other, "add")
        if self.scalar is None or other.scalar is None:
            return Assignment.unknown(self.kind)
        return Assignment(self.scalar + other.scalar, self.kind)

    def __sub__(self, other) -> "Assignment":
        other = self._lift(other, "subtract")
        if self.scalar is None or other.scalar is None:
            return Assignment.unknown(self.kind)
        return Assignment(self.scalar - other.scalar, self.kind)

    def __mul__(self, other) -> "Assignment":
        other = self._lift(other, "multiply")
        if self.scalar is None or other.scalar is None:
            return Assignment.unknown(self.kind)
        return Assignment(self.scalar * other.scalar, self.kind)

    def __neg__(self) -> "Assignment":
        if self.scalar is None:
            return self
        return Assignment(-self.scalar, self.kind)

    def negate(self) -> "Assignment":
        return -self

    # --- Widening ---

    def to_opaque(self) -> "Assignment":
        """Known(s) -> Known(s.to_opaque()), Unknown -> Unknown (opaque kind)."""
        if self.scalar is None:
            return Assignment.unknown(ScalarKind.OPAQUE)
        return Assignment(self.scalar.to_opaque(), ScalarKind.OPAQUE)

    def __repr__(self) -> str:
        if self.scalar is None:
            return "Unknown" if self.kind is ScalarKind.CLEAR else "Unknown(opaque)"
        return f"Known({self.scalar!r})"
