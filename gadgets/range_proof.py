"""Range proof gadget: 0 <= v < 2^n.

v is decomposed into n bits b_i. For each bit one multiplier (a, b, o) is
allocated with

    o = 0          so a * b = 0
    a + b - 1 = 0  so a = 1 - b

which forces b in {0, 1}. Finally v - sum(b_i * 2^i) = 0.

The bit witnesses are derived from v.eval(): on the prover v is Known and the
bits are computed, in the setup/verification phase v is Unknown and every
bit is allocated without a value.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from circuit.constraint_system import ConstraintSystem
from circuit.linear_combination import LinearCombination, into_lc
from circuit.variable import ClearVariable
from primitives.field import SCALAR_FIELD_ORDER

logger = logging.getLogger(__name__)

# Largest n with 2^n < l, so the bit decomposition cannot wrap around
MAX_RANGE_BITS = SCALAR_FIELD_ORDER.bit_length() - 1


@dataclass
class RangeProofConfig:
    """Range proof parameters."""
    n_bits: int = 64  # Proves 0 <= v < 2^n_bits

    def __post_init__(self):
        if not 1 <= self.n_bits <= MAX_RANGE_BITS:
            raise ValueError(f"n_bits must be in [1, {MAX_RANGE_BITS}], got {self.n_bits}")


def range_proof(cs: ConstraintSystem, v, config: Optional[RangeProofConfig] = None) -> None:
    """Constrain v to [0, 2^n_bits).

    Args:
        cs: Constraint system to add gates and constraints to
        v: Clear variable or linear combination
        config: Range parameters (default 64 bits)

    Raises:
        ValueError: If v is known and out of range (nothing is recorded)
    """
    if config is None:
        config = RangeProofConfig()
    v = into_lc(v, ClearVariable)
    n_bits = config.n_bits

    value = v.eval()
    if value.is_known:
        n = int(value.value)
        if n >> n_bits:
            raise ValueError(f"Value does not fit in {n_bits} bits")

    bit_sum = LinearCombination.empty()
    for i in range(n_bits):
        inputs = None
        if value.is_known:
            bit = (n >> i) & 1
            inputs = (1 - bit, bit)
        a, b, o = cs.allocate_multiplier(inputs)
        cs.constrain(o)
        cs.constrain(a + b - 1)
        bit_sum += (b, 1 << i)

    cs.constrain(v - bit_sum)
    logger.debug("range proof over %d bits: %d multipliers", n_bits, cs.multipliers_len())
