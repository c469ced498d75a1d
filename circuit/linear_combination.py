"""Linear combinations of circuit variables.

A LinearCombination is an ordered list of (variable, weight) terms

    w1*v1 + w2*v2 + ... + wn*vn

where constant terms are stored against the constant_one wire. Alongside the
terms it carries a precomputed tri-state evaluation, updated incrementally by
every operation, so eval() is O(1) and never rescans the terms. The cached
value reflects each variable's assignment at the time its term was added.

Terms are never merged: the same variable added twice gives two entries.
Consolidation happens when a constraint system flattens the combination
(circuit.constraint_system.flatten).

Every combination is tagged with the variable class it is built over, which
fixes its scalar kind. Operands are canonicalized with into_lc(), which
accepts exactly these shapes:

    LinearCombination     identity
    scalar / int          from_constant         [(one, s)]
    Variable              from_variable         [(v, 1)]
    (Variable, weight)    from_variable_weight  [(v, w)]

Anything else is a TypeError. Operands of the other scalar kind raise
InvalidScalarKindMix; clear data enters an opaque combination only after an
explicit into_opaque()/to_opaque().

Binary operators return a new combination and never share term storage with
their operands. The in-place forms (+=, -=, *=) extend/scale the left
operand, so building an n-term expression with them costs O(n) in total.
"""

from typing import Optional, Tuple

from circuit.variable import ClearVariable, Variable
from primitives.assignment import Assignment
from primitives.errors import InvalidScalarKindMix
from primitives.scalar import as_scalar
from primitives.scalar_value import ScalarValue

Term = Tuple[Variable, ScalarValue]


def _check_variable_type(expected: type[Variable], got: type[Variable]) -> None:
    """Operands must be built over the same variable class."""
    if got is expected:
        return
    if got.value_type.kind is not expected.value_type.kind:
        raise InvalidScalarKindMix(expected.value_type.kind, got.value_type.kind)
    raise TypeError(
        f"Cannot combine {got.__name__} with a linear combination of {expected.__name__}"
    )


def _is_constant(value) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, ScalarValue))


class LinearCombination:
    """Weighted sum of variables with a cached tri-state evaluation."""

    __slots__ = ("_terms", "_precomputed", "_variable_type")

    def __init__(
        self,
        terms: Optional[list] = None,
        precomputed: Optional[Assignment] = None,
        variable_type: type[Variable] = ClearVariable,
    ):
        self._variable_type = variable_type
        self._terms: list = terms if terms is not None else []
        if precomputed is None:
            precomputed = Assignment.zero(variable_type.value_type.kind)
        self._precomputed = precomputed

    # --- Canonical Constructors ---

    @classmethod
    def empty(cls, variable_type: type[Variable] = ClearVariable) -> "LinearCombination":
        """No terms, evaluates to Known(zero)."""
        return cls(variable_type=variable_type)

    @staticmethod
    def identity(lc: "LinearCombination") -> "LinearCombination":
        return lc

    @classmethod
    def from_constant(cls, value, variable_type: type[Variable] = ClearVariable) -> "LinearCombination":
        """Constant s as the single term (constant_one, s)."""
        scalar = as_scalar(value, variable_type.value_type.kind)
        return cls(
            [(variable_type.constant_one(), scalar)],
            Assignment.known(scalar),
            variable_type,
        )

    @classmethod
    def from_variable(cls, variable: Variable) -> "LinearCombination":
        """Variable v as the single term (v, one)."""
        return cls(
            [(variable, variable.value_type.one())],
            variable.assignment(),
            type(variable),
        )

    @classmethod
    def from_variable_weight(cls, variable: Variable, weight) -> "LinearCombination":
        """Pair (v, w) as the single term (v, w); w must match v's scalar kind."""
        if not isinstance(variable, Variable):
            raise TypeError(f"Expected a Variable, got {type(variable).__name__}")
        weight = as_scalar(weight, variable.kind)
        return cls(
            [(variable, weight)],
            variable.assignment() * weight,
            type(variable),
        )

    # --- Inspection ---

    @property
    def terms(self) -> Tuple[Term, ...]:
        """Terms in insertion order."""
        return tuple(self._terms)

    @property
    def variable_type(self) -> type[Variable]:
        return self._variable_type

    @property
    def kind(self):
        return self._variable_type.value_type.kind

    def eval(self) -> Assignment:
        """Precomputed evaluation. O(1)."""
        return self._precomputed

    def __len__(self) -> int:
        return len(self._terms)

    def __repr__(self) -> str:
        terms = " + ".join(f"{w!r}*{v!r}" for v, w in self._terms) or "0"
        return f"LinearCombination({terms}; eval={self._precomputed!r})"

    # --- Arithmetic ---

    def __add__(self, other) -> "LinearCombination":
        rhs = into_lc(other, self._variable_type)
        return LinearCombination(
            self._terms + rhs._terms,
            self._precomputed + rhs._precomputed,
            self._variable_type,
        )

    def __iadd__(self, other) -> "LinearCombination":
        rhs = into_lc(other, self._variable_type)
        self._precomputed = self._precomputed + rhs._precomputed
        self._terms.extend(rhs._terms)
        return self

    def __radd__(self, other) -> "LinearCombination":
        return into_lc(other, self._variable_type) + self

    def __sub__(self, other) -> "LinearCombination":
        rhs = into_lc(other, self._variable_type)
        return LinearCombination(
            self._terms + [(v, -w) for v, w in rhs._terms],
            self._precomputed - rhs._precomputed,
            self._variable_type,
        )

    def __isub__(self, other) -> "LinearCombination":
        rhs = into_lc(other, self._variable_type)
        self._precomputed = self._precomputed - rhs._precomputed
        self._terms.extend([(v, -w) for v, w in rhs._terms])
        return self

    def __rsub__(self, other) -> "LinearCombination":
        return into_lc(other, self._variable_type) - self

    def __mul__(self, scalar) -> "LinearCombination":
        if not _is_constant(scalar):
            return NotImplemented
        scalar = as_scalar(scalar, self.kind)
        return LinearCombination(
            [(v, w * scalar) for v, w in self._terms],
            self._precomputed * Assignment.known(scalar),
            self._variable_type,
        )

    __rmul__ = __mul__

    def __imul__(self, scalar) -> "LinearCombination":
        if not _is_constant(scalar):
            return NotImplemented
        scalar = as_scalar(scalar, self.kind)
        self._precomputed = self._precomputed * Assignment.known(scalar)
        self._terms = [(v, w * scalar) for v, w in self._terms]
        return self

    def __neg__(self) -> "LinearCombination":
        return self * -self._variable_type.value_type.one()

    # --- Widening ---

    def into_opaque(self) -> "LinearCombination":
        """Same terms over the opaque variable kind.

        Every variable and weight is widened individually; term count and
        order are unchanged.
        """
        return LinearCombination(
            [(v.into_opaque(), w.to_opaque()) for v, w in self._terms],
            self._precomputed.to_opaque(),
            self._variable_type.opaque_type,
        )


def into_lc(value, variable_type: type[Variable] = ClearVariable) -> LinearCombination:
    """Canonicalize value into a LinearCombination over variable_type.

    Raises:
        InvalidScalarKindMix: If value has the other scalar kind
        TypeError: If value is not one of the accepted shapes
    """
    if isinstance(value, LinearCombination):
        _check_variable_type(variable_type, value.variable_type)
        return LinearCombination.identity(value)
    if isinstance(value, Variable):
        _check_variable_type(variable_type, type(value))
        return LinearCombination.from_variable(value)
    if isinstance(value, tuple) and len(value) == 2 and isinstance(value[0], Variable):
        _check_variable_type(variable_type, type(value[0]))
        return LinearCombination.from_variable_weight(value[0], value[1])
    if _is_constant(value):
        return LinearCombination.from_constant(value, variable_type)
    raise TypeError(f"Cannot convert {type(value).__name__} into a linear combination")
