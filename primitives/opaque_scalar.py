"""Opaque scalars: field elements that can be combined but never inspected.

An OpaqueScalar models a value hidden behind a commitment. It supports the
ring operations of the ScalarValue capability and nothing else: there is no
int()/bytes() conversion, no ordering, no serialization, and repr() does not
show the value. Equality is object identity: comparing against a guessed
widened constant never tells two hidden values apart.

Opaque scalars are produced by widening clear ones (Scalar.to_opaque). There
is no way back.
"""

from primitives.errors import InvalidScalarKindMix
from primitives.field import FF
from primitives.scalar_value import ScalarKind, ScalarValue


class OpaqueScalar(ScalarValue):
    """Opaque element of the Ristretto255 scalar field."""

    __slots__ = ("__element",)

    kind = ScalarKind.OPAQUE

    def __init__(self, element: FF):
        # Callers reach this through Scalar.to_opaque(); the element is never
        # handed back out.
        self.__element = element

    @classmethod
    def zero(cls) -> "OpaqueScalar":
        return cls(FF(0))

    @classmethod
    def one(cls) -> "OpaqueScalar":
        return cls(FF(1))

    def _operand(self, other, operation: str):
        if isinstance(other, OpaqueScalar):
            return other.__element
        if isinstance(other, ScalarValue):
            self._require_kind(other, operation)
        if isinstance(other, int):
            raise InvalidScalarKindMix(self.kind, ScalarKind.CLEAR, operation)
        return None

    def __add__(self, other) -> "OpaqueScalar":
        rhs = self._operand(other, "add")
        if rhs is None:
            return NotImplemented
        return OpaqueScalar(self.__element + rhs)

    def __sub__(self, other) -> "OpaqueScalar":
        rhs = self._operand(other, "subtract")
        if rhs is None:
            return NotImplemented
        return OpaqueScalar(self.__element - rhs)

    def __mul__(self, other) -> "OpaqueScalar":
        rhs = self._operand(other, "multiply")
        if rhs is None:
            return NotImplemented
        return OpaqueScalar(self.__element * rhs)

    __radd__ = __add__
    __rmul__ = __mul__

    def __rsub__(self, other) -> "OpaqueScalar":
        lhs = self._operand(other, "subtract")
        if lhs is None:
            return NotImplemented
        return OpaqueScalar(lhs - self.__element)

    def __neg__(self) -> "OpaqueScalar":
        return OpaqueScalar(-self.__element)

    def to_opaque(self) -> "OpaqueScalar":
        return self

    __hash__ = None

    def __repr__(self) -> str:
        return "OpaqueScalar(<hidden>)"
