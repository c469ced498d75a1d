"""Clear scalars: plaintext elements of the Ristretto255 scalar field.

Scalar wraps a galois FF element. Python ints are accepted wherever a clear
scalar is expected and are reduced mod l, so constraint code can write
`lc * 2` or `lc + 7`. Equality with an int holds only for its canonical
representative in [0, l): Scalar(-1) == l - 1, but Scalar(-1) != -1.
"""

from typing import Union

from primitives.errors import InvalidScalarKindMix
from primitives.field import FF, ff, ff_from_bytes, ff_to_bytes
from primitives.opaque_scalar import OpaqueScalar
from primitives.scalar_value import ScalarKind, ScalarValue


class Scalar(ScalarValue):
    """Clear element of GF(l)."""

    __slots__ = ("element",)

    kind = ScalarKind.CLEAR

    def __init__(self, value: Union[int, FF] = 0):
        if isinstance(value, int):
            value = ff(value)
        self.element = value

    @classmethod
    def zero(cls) -> "Scalar":
        return cls(0)

    @classmethod
    def one(cls) -> "Scalar":
        return cls(1)

    def _operand(self, other, operation: str):
        if isinstance(other, Scalar):
            return other.element
        if isinstance(other, int):
            return ff(other)
        if isinstance(other, ScalarValue):
            self._require_kind(other, operation)
        return None

    # --- Arithmetic ---

    def __add__(self, other) -> "Scalar":
        rhs = self._operand(other, "add")
        if rhs is None:
            return NotImplemented
        return Scalar(self.element + rhs)

    def __sub__(self, other) -> "Scalar":
        rhs = self._operand(other, "subtract")
        if rhs is None:
            return NotImplemented
        return Scalar(self.element - rhs)

    def __mul__(self, other) -> "Scalar":
        rhs = self._operand(other, "multiply")
        if rhs is None:
            return NotImplemented
        return Scalar(self.element * rhs)

    __radd__ = __add__
    __rmul__ = __mul__

    def __rsub__(self, other) -> "Scalar":
        lhs = self._operand(other, "subtract")
        if lhs is None:
            return NotImplemented
        return Scalar(lhs - self.element)

    def __neg__(self) -> "Scalar":
        return Scalar(-self.element)

    def inverse(self) -> "Scalar":
        """Multiplicative inverse.

        Raises:
            ZeroDivisionError: If self is zero
        """
        if self.is_zero():
            raise ZeroDivisionError("Cannot invert zero")
        return Scalar(self.element ** -1)

    def __pow__(self, exp: int) -> "Scalar":
        if exp < 0:
            return self.inverse() ** (-exp)
        return Scalar(self.element ** exp)

    # --- Widening ---

    def to_opaque(self) -> OpaqueScalar:
        """Hide the value. The result supports algebra only."""
        return OpaqueScalar(self.element)

    # --- Inspection ---

    def __int__(self) -> int:
        return int(self.element)

    def is_zero(self) -> bool:
        return int(self.element) == 0

    def to_bytes(self) -> bytes:
        """Serialize to 32 bytes (little-endian)."""
        return ff_to_bytes(self.element)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Scalar":
        """Deserialize from a canonical 32-byte little-endian encoding."""
        return cls(ff_from_bytes(data))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Scalar):
            return int(self.element) == int(other.element)
        if isinstance(other, int):
            # Only canonical ints in [0, l), so equal values hash equal
            return int(self.element) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(int(self.element))

    def __repr__(self) -> str:
        return f"Scalar({int(self.element)})"


def as_scalar(value, kind: ScalarKind) -> ScalarValue:
    """Coerce a constant to a scalar of the given kind.

    Python ints are clear constants. A clear constant for an opaque
    computation, or an opaque one for a clear computation, is a kind mix.

    Raises:
        InvalidScalarKindMix: If value is a scalar of the other kind
        TypeError: If value is not a scalar or an int
    """
    if isinstance(value, bool) or not isinstance(value, (int, ScalarValue)):
        raise TypeError(f"Expected a scalar or int, got {type(value).__name__}")
    if isinstance(value, int):
        value = Scalar(value)
    if value.kind is not kind:
        raise InvalidScalarKindMix(kind, value.kind)
    return value
