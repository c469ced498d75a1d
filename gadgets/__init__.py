"""Constraint gadgets built from linear combinations."""

from .boolean import constrain_bit
from .range_proof import MAX_RANGE_BITS, RangeProofConfig, range_proof

__all__ = [
    "constrain_bit",
    "range_proof",
    "RangeProofConfig",
    "MAX_RANGE_BITS",
]
