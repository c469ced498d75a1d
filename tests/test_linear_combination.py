"""Tests for the linear-combination engine.

Covers canonicalization of every accepted input shape, the arithmetic
operators and their cached evaluation, opaque widening, and the kind checks.
"""

import pytest

from circuit.linear_combination import LinearCombination, into_lc
from circuit.variable import ONE_INDEX, ClearVariable, OpaqueVariable
from primitives.assignment import Assignment
from primitives.errors import InvalidScalarKindMix
from primitives.opaque_scalar import OpaqueScalar
from primitives.scalar import Scalar
from primitives.scalar_value import ScalarKind
from tests.conftest import committed, reveal


def build_l(x, y) -> LinearCombination:
    """L = 2x + 3y + 7"""
    return LinearCombination.from_variable_weight(x, 2) + (y, 3) + 7


# --- Scenarios ---

def test_setup_phase_scenario(setup_vars) -> None:
    """No witness: three terms, Unknown evaluation."""
    x, y = setup_vars
    lc = build_l(x, y)
    assert len(lc.terms) == 3
    assert lc.eval() == Assignment.unknown()


def test_proving_phase_scenario(proving_vars) -> None:
    """x = 3, y = 5: 2*3 + 3*5 + 7 = 28."""
    x, y = proving_vars
    lc = build_l(x, y)
    assert len(lc.terms) == 3
    assert lc.eval() == Assignment.known(28)


def test_opaque_widening_scenario(proving_vars) -> None:
    """Widened L keeps three terms and evaluates to opaque 28."""
    x, y = proving_vars
    lc = build_l(x, y).into_opaque()
    assert len(lc.terms) == 3
    assert lc.eval().kind is ScalarKind.OPAQUE
    assert reveal(lc.eval()) == 28
    hidden = lc.eval().value
    assert isinstance(hidden, OpaqueScalar)
    with pytest.raises(TypeError):
        int(hidden)
    assert hidden != 28
    assert not any(hidden == Scalar(k).to_opaque() for k in range(64))


# --- Canonicalization ---

class TestIntoLC:
    """into_lc accepts exactly the canonical shapes."""

    def test_constant(self) -> None:
        lc = into_lc(7)
        assert lc.terms == ((ClearVariable.constant_one(), Scalar(7)),)
        assert lc.eval() == Assignment.known(7)

    def test_scalar_constant(self) -> None:
        assert into_lc(Scalar(7)).eval() == Assignment.known(7)

    def test_opaque_constant(self) -> None:
        value = Scalar(7).to_opaque()
        lc = into_lc(value, OpaqueVariable)
        (variable, weight), = lc.terms
        assert variable == OpaqueVariable.constant_one()
        assert weight is value
        assert lc.eval().value is value

    def test_variable(self, proving_vars) -> None:
        x, _ = proving_vars
        lc = into_lc(x)
        assert lc.terms == ((x, Scalar(1)),)
        assert lc.eval() == x.assignment()

    def test_variable_weight(self, proving_vars) -> None:
        x, _ = proving_vars
        lc = into_lc((x, Scalar(4)))
        assert lc.terms == ((x, Scalar(4)),)
        assert lc.eval() == Assignment.known(12)

    def test_linear_combination_is_identity(self, proving_vars) -> None:
        x, _ = proving_vars
        lc = x + 1
        assert into_lc(lc) is lc

    def test_opaque_variable_kind_follows_variable(self, proving_vars) -> None:
        x, _ = proving_vars
        lc = into_lc(x.into_opaque(), OpaqueVariable)
        assert lc.kind is ScalarKind.OPAQUE
        assert lc.variable_type is OpaqueVariable

    @pytest.mark.parametrize("value", ["7", 1.5, None, True, (1, 2), [1]])
    def test_other_shapes_are_type_errors(self, value) -> None:
        with pytest.raises(TypeError) as exc_info:
            into_lc(value)
        assert not isinstance(exc_info.value, InvalidScalarKindMix)

    def test_pair_with_non_scalar_weight(self, proving_vars) -> None:
        x, y = proving_vars
        with pytest.raises(TypeError):
            into_lc((x, y))


# --- Testable properties ---

def test_empty() -> None:
    lc = LinearCombination.empty()
    assert lc.terms == ()
    assert lc.eval() == Assignment.known(0)
    assert LinearCombination().eval() == Assignment.known(0)


def test_empty_opaque() -> None:
    lc = LinearCombination.empty(OpaqueVariable)
    assert lc.eval().kind is ScalarKind.OPAQUE
    assert reveal(lc.eval()) == 0


@pytest.mark.parametrize("fixture", ["setup_vars", "proving_vars"])
def test_adding_empty_is_identity(fixture, request) -> None:
    x, y = request.getfixturevalue(fixture)
    lc = build_l(x, y)
    total = lc + LinearCombination.empty()
    assert total.eval() == lc.eval()
    assert total.terms == lc.terms


@pytest.mark.parametrize("fixture", ["setup_vars", "proving_vars"])
def test_linearity(fixture, request) -> None:
    """eval((x + y) * s) == eval(x * s) + eval(y * s)."""
    x, y = request.getfixturevalue(fixture)
    s = Scalar(11)
    assert ((x + y) * s).eval() == (x * s).eval() + (y * s).eval()
    assert ((x + 4) * s).eval() == (x * s).eval() + into_lc(4 * s).eval()


def test_term_count_additivity(proving_vars) -> None:
    """No merging happens, even for the same variable on both sides."""
    x, y = proving_vars
    a = x + (y, 2) + 7       # 3 shapes
    b = x + x                # 2 shapes, same variable twice
    total = a + b
    assert len(total) == 5
    assert [v for v, _ in total.terms].count(x) == 3


def test_term_order_is_append_order(proving_vars) -> None:
    x, y = proving_vars
    lc = into_lc(y) + x + 1
    assert [v.index for v, _ in lc.terms] == [y.index, x.index, ONE_INDEX]


def test_unknown_absorption(proving_vars) -> None:
    """One Unknown term makes every combination containing it Unknown."""
    x, y = proving_vars
    hidden = committed(9)
    lc = x + hidden
    for step in (lambda c: c + y, lambda c: c - 5, lambda c: c * 3, lambda c: c * 0, lambda c: -c):
        lc = step(lc)
        assert not lc.eval().is_known
    assert not lc.into_opaque().eval().is_known


def test_eval_is_a_snapshot() -> None:
    """Assignments are read when a term is added, never re-read."""
    before = committed(0, 3)
    after = committed(0, 10)       # same wire, later snapshot
    lc = into_lc(before)
    lc = lc + after
    assert before == after
    assert lc.eval() == Assignment.known(13)


# --- Operators ---

class TestArithmetic:
    """Operator results and their cached evaluation."""

    def test_subtraction_negates_weights(self, proving_vars) -> None:
        x, y = proving_vars
        lc = into_lc((x, 2)) - (y, 3) - 1
        assert [w for _, w in lc.terms] == [Scalar(2), Scalar(-3), Scalar(-1)]
        assert lc.eval() == Assignment.known(6 - 15 - 1)

    def test_subtracting_combination(self, proving_vars) -> None:
        x, y = proving_vars
        lc = (x + y) - (x - y)
        assert len(lc) == 4
        assert lc.eval() == Assignment.known(10)

    def test_scalar_multiplication(self, proving_vars) -> None:
        x, _ = proving_vars
        lc = (x * 2 + 7) * 3
        assert [w for _, w in lc.terms] == [Scalar(6), Scalar(21)]
        assert lc.eval() == Assignment.known(39)
        assert (3 * (x * 2 + 7)).eval() == lc.eval()

    def test_negation(self, proving_vars) -> None:
        x, _ = proving_vars
        lc = -(x + 1)
        assert [w for _, w in lc.terms] == [Scalar(-1), Scalar(-1)]
        assert lc.eval() == Assignment.known(-4)

    def test_reflected_constant(self, proving_vars) -> None:
        x, y = proving_vars
        lc = x + y
        assert (10 - lc).eval() == Assignment.known(2)
        assert (10 + lc).eval() == Assignment.known(18)
        assert (Scalar(10) + lc).eval() == Assignment.known(18)

    def test_binary_operators_do_not_share_storage(self, proving_vars) -> None:
        x, y = proving_vars
        a = x + 1
        b = y + 2
        total = a + b
        total += 5
        total *= 2
        assert len(a) == 2 and len(b) == 2
        assert a.eval() == Assignment.known(4)
        assert [w for _, w in a.terms] == [Scalar(1), Scalar(1)]

    def test_in_place_forms(self, proving_vars) -> None:
        x, y = proving_vars
        acc = LinearCombination.empty()
        same = acc
        acc += (x, 2)
        acc += (y, 3)
        acc += 7
        assert acc is same
        assert len(acc) == 3
        assert acc.eval() == Assignment.known(28)
        acc -= x
        acc *= 2
        assert acc is same
        assert len(acc) == 4
        assert acc.eval() == Assignment.known(50)

    def test_in_place_with_itself(self, proving_vars) -> None:
        x, _ = proving_vars
        acc = x + 1
        acc += acc
        assert len(acc) == 4
        assert acc.eval() == Assignment.known(8)

    def test_multiplying_by_combination_is_not_linear(self, proving_vars) -> None:
        x, y = proving_vars
        with pytest.raises(TypeError):
            (x + 1) * (y + 1)


# --- Opaque widening ---

class TestIntoOpaque:
    """into_opaque widens every term and the cached evaluation."""

    def test_structure_preserved(self, proving_vars) -> None:
        x, y = proving_vars
        lc = build_l(x, y) - x
        hidden = lc.into_opaque()
        assert len(hidden) == len(lc)
        assert [v.index for v, _ in hidden.terms] == [v.index for v, _ in lc.terms]
        assert all(isinstance(v, OpaqueVariable) for v, _ in hidden.terms)
        assert [reveal(w) for _, w in hidden.terms] == [int(w) for _, w in lc.terms]
        assert reveal(hidden.eval()) == reveal(lc.eval()) == 25
        assert hidden.kind is ScalarKind.OPAQUE

    def test_unknown_stays_unknown(self, setup_vars) -> None:
        x, y = setup_vars
        hidden = build_l(x, y).into_opaque()
        assert hidden.eval() == Assignment.unknown(ScalarKind.OPAQUE)

    def test_operand_unchanged(self, proving_vars) -> None:
        x, y = proving_vars
        lc = build_l(x, y)
        lc.into_opaque()
        assert lc.kind is ScalarKind.CLEAR
        assert lc.eval() == Assignment.known(28)

    def test_opaque_arithmetic(self, proving_vars) -> None:
        x, y = proving_vars
        hidden = build_l(x, y).into_opaque()
        two = Scalar(2).to_opaque()
        total = (hidden + y.into_opaque() - (x.into_opaque(), two)) * two
        assert len(total) == 5
        assert reveal(total.eval()) == (28 + 5 - 6) * 2

    def test_widening_twice(self, proving_vars) -> None:
        x, y = proving_vars
        hidden = build_l(x, y).into_opaque()
        assert reveal(hidden.into_opaque().eval()) == reveal(hidden.eval()) == 28


class TestKindMixing:
    """Operands of the other scalar kind raise InvalidScalarKindMix."""

    @pytest.fixture
    def hidden(self, proving_vars):
        x, y = proving_vars
        return build_l(x, y).into_opaque()

    def test_clear_constant_into_opaque(self, hidden) -> None:
        with pytest.raises(InvalidScalarKindMix):
            hidden + 7
        with pytest.raises(InvalidScalarKindMix):
            hidden + Scalar(7)
        with pytest.raises(InvalidScalarKindMix):
            hidden * 2

    def test_clear_variable_into_opaque(self, hidden, proving_vars) -> None:
        x, _ = proving_vars
        with pytest.raises(InvalidScalarKindMix):
            hidden + x
        with pytest.raises(InvalidScalarKindMix):
            hidden - (x, 2)

    def test_opaque_into_clear(self, hidden, proving_vars) -> None:
        x, _ = proving_vars
        with pytest.raises(InvalidScalarKindMix):
            into_lc(x) + hidden
        with pytest.raises(InvalidScalarKindMix):
            into_lc(x) + Scalar(1).to_opaque()
        with pytest.raises(InvalidScalarKindMix):
            into_lc(x) + x.into_opaque()

    def test_clear_weight_for_opaque_variable(self, proving_vars) -> None:
        x, _ = proving_vars
        with pytest.raises(InvalidScalarKindMix):
            into_lc((x.into_opaque(), 2), OpaqueVariable)

    def test_explicit_widening_is_accepted(self, hidden, proving_vars) -> None:
        x, _ = proving_vars
        total = hidden + x.into_opaque() + Scalar(7).to_opaque()
        assert reveal(total.eval()) == 38
