"""Ristretto255 scalar field GF(l).

Uses galois library for all field arithmetic. FF is the field type; clear and
opaque scalars (primitives.scalar, primitives.opaque_scalar) both wrap FF
elements.

l = 2^252 + 27742317777372353535851937790883648493 is the order of the
Ristretto255 group, i.e. the scalar field of curve25519-based proof systems.
"""

from typing import List

import galois

# --- Field Construction ---

SCALAR_FIELD_ORDER = 2**252 + 27742317777372353535851937790883648493

# Byte length of a canonical little-endian scalar encoding
SCALAR_BYTES = 32

# Finding a primitive root requires factoring l - 1, which galois would do on
# construction. 2 generates the multiplicative group of GF(l).
MULTIPLICATIVE_GENERATOR = 2

FF = galois.GF(SCALAR_FIELD_ORDER, primitive_element=MULTIPLICATIVE_GENERATOR, verify=False)
"""Base field GF(l) - Ristretto255 scalar field."""


# --- Conversions ---

def ff(value: int) -> FF:
    """Construct FF element from any Python int (reduced mod l)."""
    return FF(value % SCALAR_FIELD_ORDER)


def ff_vector(values: List[int]) -> FF:
    """Construct FF array from Python ints (each reduced mod l)."""
    return FF([v % SCALAR_FIELD_ORDER for v in values])


def ff_to_bytes(elem: FF) -> bytes:
    """Canonical 32-byte little-endian encoding of an FF element."""
    return int(elem).to_bytes(SCALAR_BYTES, "little")


def ff_from_bytes(data: bytes) -> FF:
    """Decode a canonical 32-byte little-endian encoding.

    Raises:
        ValueError: If data has the wrong length or is not reduced mod l
    """
    if len(data) != SCALAR_BYTES:
        raise ValueError(f"Scalar encoding must be {SCALAR_BYTES} bytes, got {len(data)}")
    value = int.from_bytes(data, "little")
    if value >= SCALAR_FIELD_ORDER:
        raise ValueError("Scalar encoding is not canonical (value >= l)")
    return FF(value)
