"""Scalar-value capability shared by weights and variable assignments.

Two kinds conform to ScalarValue:
    Scalar        (clear)  - plaintext field element, fully inspectable
    OpaqueScalar  (opaque) - field element usable only in algebra

The capability requires zero/one constructors and the ring operations +, -,
unary -, *. Equality and ordering are not part of it. Every kind carries a
ScalarKind tag so that mixing kinds is caught when operands are combined.
"""

from abc import ABC, abstractmethod
from enum import Enum

from primitives.errors import InvalidScalarKindMix


class ScalarKind(Enum):
    """Visibility of a scalar value."""
    CLEAR = 0
    OPAQUE = 1


class ScalarValue(ABC):
    """Algebraic interface for weights and assignment values.

    Subclasses set the class attribute `kind` and implement the ring
    operations against operands of the same kind. All operations are total.
    """

    __slots__ = ()

    kind: ScalarKind

    @classmethod
    @abstractmethod
    def zero(cls) -> "ScalarValue":
        """Additive identity."""
        pass

    @classmethod
    @abstractmethod
    def one(cls) -> "ScalarValue":
        """Multiplicative identity."""
        pass

    @abstractmethod
    def __add__(self, other: "ScalarValue") -> "ScalarValue":
        pass

    @abstractmethod
    def __sub__(self, other: "ScalarValue") -> "ScalarValue":
        pass

    @abstractmethod
    def __neg__(self) -> "ScalarValue":
        pass

    @abstractmethod
    def __mul__(self, other: "ScalarValue") -> "ScalarValue":
        pass

    @abstractmethod
    def to_opaque(self) -> "ScalarValue":
        """Widen to the opaque kind (identity for opaque scalars)."""
        pass

    def _require_kind(self, other: "ScalarValue", operation: str) -> None:
        """Raise InvalidScalarKindMix if other is of a different kind."""
        if other.kind is not self.kind:
            raise InvalidScalarKindMix(self.kind, other.kind, operation)
