"""Circuit variables (wires).

A Variable identifies a wire of the constraint system and reports its
current tri-state assignment. The capability is:

    assignment()    read-only, stable for the same variable
    constant_one()  the distinguished "1" wire, built without external state
    into_opaque()   same wire, value hidden behind the opaque scalar kind

Two concrete kinds are provided: ClearVariable (value_type Scalar) and
OpaqueVariable (value_type OpaqueScalar). Widening a clear variable keeps
its VariableIndex, so the constraint system resolves it to the same circuit
position. Variable equality is wire identity: (variable class, index).

Arithmetic on variables builds LinearCombinations:
    x * 2 + y * 3 + 7
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from primitives.assignment import Assignment
from primitives.errors import InvalidScalarKindMix
from primitives.opaque_scalar import OpaqueScalar
from primitives.scalar import Scalar
from primitives.scalar_value import ScalarKind, ScalarValue


# --- Wire Identity ---

class WireKind(Enum):
    """Where a wire lives in the constraint system."""
    ONE = 0
    COMMITTED = 1
    MULTIPLIER_LEFT = 2
    MULTIPLIER_RIGHT = 3
    MULTIPLIER_OUTPUT = 4


@dataclass(frozen=True)
class VariableIndex:
    """Position of a wire: its kind and the commitment/gate number."""
    kind: WireKind
    position: int = 0

    def __repr__(self) -> str:
        if self.kind is WireKind.ONE:
            return "One"
        return f"{self.kind.name.title().replace('_', '')}({self.position})"


ONE_INDEX = VariableIndex(WireKind.ONE)


# --- Capability ---

class Variable(ABC):
    """Circuit wire with a tri-state assignment.

    Subclasses set `value_type` (scalar kind of the assignment and of the
    weights it combines with) and `opaque_type` (the variable class returned
    by into_opaque).
    """

    value_type: type[ScalarValue]
    opaque_type: type["Variable"]

    @property
    def kind(self) -> ScalarKind:
        return self.value_type.kind

    @abstractmethod
    def assignment(self) -> Assignment:
        """Current assignment of the wire (Unknown without witness data)."""
        pass

    @classmethod
    @abstractmethod
    def constant_one(cls) -> "Variable":
        """The wire whose value is always 1."""
        pass

    @abstractmethod
    def into_opaque(self) -> "Variable":
        """Same wire with its value hidden (opaque scalar kind)."""
        pass

    # --- Linear-combination builders ---

    def __add__(self, other):
        from circuit.linear_combination import LinearCombination
        return LinearCombination.from_variable(self) + other

    def __sub__(self, other):
        from circuit.linear_combination import LinearCombination
        return LinearCombination.from_variable(self) - other

    def __radd__(self, other):
        from circuit.linear_combination import into_lc
        return into_lc(other, type(self)) + self

    def __rsub__(self, other):
        from circuit.linear_combination import into_lc
        return into_lc(other, type(self)) - self

    def __mul__(self, weight):
        from circuit.linear_combination import LinearCombination
        if isinstance(weight, bool) or not isinstance(weight, (int, ScalarValue)):
            return NotImplemented
        return LinearCombination.from_variable_weight(self, weight)

    __rmul__ = __mul__

    def __neg__(self):
        from circuit.linear_combination import LinearCombination
        return LinearCombination.from_variable_weight(self, -self.value_type.one())


def _require_assignment_kind(variable: Variable, value: Assignment) -> None:
    if value.kind is not variable.kind:
        raise InvalidScalarKindMix(variable.kind, value.kind, "assign")


# --- Concrete Kinds ---

@dataclass(frozen=True, eq=True)
class OpaqueVariable(Variable):
    """Wire whose value may only be combined algebraically.

    Attributes:
        index: Wire position in the constraint system
        value: Opaque assignment snapshot (not part of identity)
    """
    index: VariableIndex
    value: Assignment = field(
        default_factory=lambda: Assignment.unknown(ScalarKind.OPAQUE), compare=False
    )

    value_type = OpaqueScalar

    def __post_init__(self):
        _require_assignment_kind(self, self.value)

    def assignment(self) -> Assignment:
        return self.value

    @classmethod
    def constant_one(cls) -> "OpaqueVariable":
        return cls(ONE_INDEX, Assignment.known(OpaqueScalar.one()))

    def into_opaque(self) -> "OpaqueVariable":
        return self

    def __repr__(self) -> str:
        return f"OpaqueVariable({self.index!r})"


OpaqueVariable.opaque_type = OpaqueVariable


@dataclass(frozen=True, eq=True)
class ClearVariable(Variable):
    """Wire whose value is visible to the circuit builder.

    Attributes:
        index: Wire position in the constraint system
        value: Assignment snapshot (not part of identity)
    """
    index: VariableIndex
    value: Assignment = field(default_factory=Assignment.unknown, compare=False)

    value_type = Scalar
    opaque_type = OpaqueVariable

    def __post_init__(self):
        _require_assignment_kind(self, self.value)

    def assignment(self) -> Assignment:
        return self.value

    @classmethod
    def constant_one(cls) -> "ClearVariable":
        return cls(ONE_INDEX, Assignment.known(Scalar.one()))

    def into_opaque(self) -> OpaqueVariable:
        return OpaqueVariable(self.index, self.value.to_opaque())

    def __repr__(self) -> str:
        return f"ClearVariable({self.index!r}, {self.value!r})"
