"""Boolean constraint: v * (1 - v) = 0."""

from circuit.constraint_system import ConstraintSystem
from circuit.variable import Variable


def constrain_bit(cs: ConstraintSystem, v) -> Variable:
    """Constrain v (variable or linear combination) to be 0 or 1.

    Uses one multiplier. Returns the gate output, which the constraint pins
    to zero.
    """
    _, _, product = cs.multiply(v, 1 - v)
    cs.constrain(product)
    return product
