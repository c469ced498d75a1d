"""Constraint systems that consume linear combinations.

ConstraintSystem provides a uniform interface for building constraints that
works for both the prover (witness known) and the verifier/setup phase (no
witness). The same gadget code runs in both contexts; only the assignments
of the allocated variables differ.

Example:
    def build(cs: ConstraintSystem, x_value=None):
        x = cs.allocate(x_value)
        _, _, x_sq = cs.multiply(x, x)
        cs.constrain(x_sq - 9)

    # Prover: assignments are Known, the circuit can be checked
    prover = ProverConstraintSystem()
    build(prover, 3)
    assert prover.is_satisfied()

    # Verifier: same structure, every assignment Unknown
    verifier = VerifierConstraintSystem()
    build(verifier)

The R1CS shape follows multiplication gates: gate i has wires
MultiplierLeft(i), MultiplierRight(i), MultiplierOutput(i) with the implicit
constraint left * right = output. Linear constraints `lc = 0` bind the gate
wires to each other and to committed variables.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

import numpy as np

from circuit.linear_combination import LinearCombination, into_lc
from circuit.variable import ClearVariable, Variable, VariableIndex, WireKind
from primitives.assignment import Assignment
from primitives.errors import InvalidScalarKindMix, UnknownAssignmentError
from primitives.field import ff_vector
from primitives.opaque_scalar import OpaqueScalar
from primitives.scalar import Scalar
from primitives.scalar_value import ScalarKind, ScalarValue

logger = logging.getLogger(__name__)


class ConstraintSystem(ABC):
    """Records multiplication gates and linear constraints."""

    def __init__(self):
        # Per gate: [left, right, output] assignments
        self._gates: List[List[Assignment]] = []
        self._committed: List[Assignment] = []
        self._constraints: List[LinearCombination] = []
        self._pending_gate: Optional[int] = None

    @abstractmethod
    def _assign(self, value, kind: ScalarKind = ScalarKind.CLEAR) -> Assignment:
        """Turn a caller-supplied witness value into the phase's assignment.

        Args:
            value: int, Scalar, Assignment or None
            kind: Scalar kind of the resulting assignment

        Returns:
            Prover: Known assignment
            Verifier: Unknown assignment
        """
        pass

    # --- Allocation ---

    def allocate_committed(self, value=None) -> ClearVariable:
        """Allocate a variable bound to an external commitment."""
        assignment = self._assign(value)
        index = VariableIndex(WireKind.COMMITTED, len(self._committed))
        self._committed.append(assignment)
        logger.debug("allocated %r", index)
        return ClearVariable(index, assignment)

    def allocate(self, value=None) -> ClearVariable:
        """Allocate a single free variable.

        Allocations are paired onto multiplication gates: the first call opens
        a gate and returns its left wire, the next call fills the right wire
        and fixes the output to left * right.
        """
        assignment = self._assign(value)
        if self._pending_gate is None:
            i = len(self._gates)
            self._gates.append([assignment, Assignment.unknown(), Assignment.unknown()])
            self._pending_gate = i
            index = VariableIndex(WireKind.MULTIPLIER_LEFT, i)
        else:
            i = self._pending_gate
            gate = self._gates[i]
            gate[1] = assignment
            gate[2] = gate[0] * assignment
            self._pending_gate = None
            index = VariableIndex(WireKind.MULTIPLIER_RIGHT, i)
        logger.debug("allocated %r", index)
        return ClearVariable(index, assignment)

    def allocate_multiplier(
        self, input_assignments: Optional[Tuple] = None
    ) -> Tuple[ClearVariable, ClearVariable, ClearVariable]:
        """Allocate a full gate from (left, right) witness values."""
        if input_assignments is None:
            left, right = self._assign(None), self._assign(None)
        else:
            left, right = (self._assign(v) for v in input_assignments)
        return self._add_gate(left, right, ClearVariable)

    def _add_gate(
        self, left: Assignment, right: Assignment, variable_type: type[Variable]
    ) -> Tuple[Variable, Variable, Variable]:
        i = len(self._gates)
        output = left * right
        self._gates.append([left, right, output])
        logger.debug("allocated multiplier %d", i)
        return (
            variable_type(VariableIndex(WireKind.MULTIPLIER_LEFT, i), left),
            variable_type(VariableIndex(WireKind.MULTIPLIER_RIGHT, i), right),
            variable_type(VariableIndex(WireKind.MULTIPLIER_OUTPUT, i), output),
        )

    # --- Constraints ---

    def multiply(self, left, right) -> Tuple[Variable, Variable, Variable]:
        """Multiply two linear combinations.

        Allocates a gate (l, r, o) and constrains left = l, right = r.
        Opaque inputs give opaque gate variables.

        Returns:
            (l, r, o) with o = l * r
        """
        left = self._canonical(left)
        right = self._canonical(right)
        if left.kind is not right.kind:
            raise InvalidScalarKindMix(left.kind, right.kind, "multiply")
        l_var, r_var, o_var = self._add_gate(
            self._assign(left.eval(), left.kind),
            self._assign(right.eval(), right.kind),
            left.variable_type,
        )
        self.constrain(left - l_var)
        self.constrain(right - r_var)
        return l_var, r_var, o_var

    def constrain(self, lc) -> None:
        """Record the constraint lc = 0."""
        lc = self._canonical(lc)
        # Detached from the caller, whose in-place operators would rewrite it
        lc = LinearCombination(list(lc.terms), lc.eval(), lc.variable_type)
        self._constraints.append(lc)
        logger.debug("constraint %d: %d terms", len(self._constraints) - 1, len(lc))

    @staticmethod
    def _canonical(value) -> LinearCombination:
        if isinstance(value, LinearCombination):
            return value
        if isinstance(value, Variable):
            return into_lc(value, type(value))
        if isinstance(value, tuple) and value and isinstance(value[0], Variable):
            return into_lc(value, type(value[0]))
        return into_lc(value, ClearVariable)

    # --- Inspection ---

    @property
    def constraints(self) -> Tuple[LinearCombination, ...]:
        return tuple(self._constraints)

    def multipliers_len(self) -> int:
        return len(self._gates)

    def committed_len(self) -> int:
        return len(self._committed)

    def gate_assignments(self, i: int) -> Tuple[Assignment, Assignment, Assignment]:
        """(left, right, output) assignments of gate i."""
        if not 0 <= i < len(self._gates):
            raise KeyError(f"Gate {i} not allocated (have {len(self._gates)})")
        left, right, output = self._gates[i]
        return left, right, output


class ProverConstraintSystem(ConstraintSystem):
    """Proving phase - every allocated variable has a Known assignment."""

    def _assign(self, value, kind: ScalarKind = ScalarKind.CLEAR) -> Assignment:
        if value is None:
            raise ValueError("Prover allocation requires a witness value")
        if not isinstance(value, Assignment):
            value = Assignment.known(value)
        if not value.is_known:
            raise UnknownAssignmentError("Prover allocation from an Unknown assignment")
        if value.kind is not kind:
            raise InvalidScalarKindMix(kind, value.kind, "assign")
        return value

    def wire_value(self, index: VariableIndex) -> ScalarValue:
        """Current value of a wire (opaque for gates built by an opaque multiply).

        Raises:
            KeyError: If the wire was never allocated
            UnknownAssignmentError: If the wire is the still-open half of a gate
        """
        if index.kind is WireKind.ONE:
            return Scalar.one()
        if index.kind is WireKind.COMMITTED:
            if index.position >= len(self._committed):
                raise KeyError(f"{index!r} not allocated")
            return self._committed[index.position].value
        if index.position >= len(self._gates):
            raise KeyError(f"{index!r} not allocated")
        slot = {
            WireKind.MULTIPLIER_LEFT: 0,
            WireKind.MULTIPLIER_RIGHT: 1,
            WireKind.MULTIPLIER_OUTPUT: 2,
        }[index.kind]
        return self._gates[index.position][slot].value

    def recompute(self, lc: LinearCombination) -> Scalar:
        """Evaluate a clear combination from the current wire values.

        Unlike lc.eval(), which is the snapshot taken while the combination
        was built, this walks the flattened terms.

        Raises:
            InvalidScalarKindMix: If lc is opaque (its weights are not readable)
        """
        if lc.kind is not ScalarKind.CLEAR:
            raise InvalidScalarKindMix(ScalarKind.CLEAR, lc.kind, "recompute")
        flat = flatten(lc)
        if not flat:
            return Scalar.zero()
        weights = ff_vector([int(w) for w in flat.values()])
        values = ff_vector([int(self.wire_value(index)) for index in flat])
        return Scalar(np.add.reduce(weights * values))

    def _recompute_opaque(self, lc: LinearCombination) -> OpaqueScalar:
        total = OpaqueScalar.zero()
        for index, weight in flatten(lc).items():
            total = total + weight * self.wire_value(index).to_opaque()
        return total

    def unsatisfied_constraints(self) -> List[int]:
        """Indices of linear constraints that do not evaluate to zero.

        Every constraint is recomputed from the wire values: clear ones with
        recompute(), opaque ones with opaque algebra over the same flattened
        terms.
        """
        failed = []
        for i, lc in enumerate(self._constraints):
            if lc.kind is ScalarKind.OPAQUE:
                if not _opaque_is_zero(self._recompute_opaque(lc)):
                    failed.append(i)
            elif not self.recompute(lc).is_zero():
                failed.append(i)
        return failed

    def is_satisfied(self) -> bool:
        """True when every linear constraint holds."""
        failed = self.unsatisfied_constraints()
        logger.debug(
            "satisfiability: %d gates, %d constraints, %d failing",
            len(self._gates), len(self._constraints), len(failed),
        )
        return not failed


class VerifierConstraintSystem(ConstraintSystem):
    """Setup/verification phase - no witness, every assignment is Unknown.

    Witness values passed by shared gadget code are ignored.
    """

    def _assign(self, value, kind: ScalarKind = ScalarKind.CLEAR) -> Assignment:
        return Assignment.unknown(kind)


def flatten(lc: LinearCombination) -> Dict[VariableIndex, ScalarValue]:
    """Consolidate terms by wire.

    Weights of repeated variables are summed; order of first occurrence is
    kept. Clear terms whose weight sums to zero are dropped.
    """
    merged: Dict[VariableIndex, ScalarValue] = {}
    for variable, weight in lc.terms:
        index = variable.index
        merged[index] = merged[index] + weight if index in merged else weight
    return {
        index: weight for index, weight in merged.items()
        if not (isinstance(weight, Scalar) and weight.is_zero())
    }


def _opaque_is_zero(value: OpaqueScalar) -> bool:
    # Satisfiability is the prover's own check; the element is not returned
    return int(value._OpaqueScalar__element) == 0
