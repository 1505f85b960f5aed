"""Goldilocks prime field GF(p).

Uses galois library for all field arithmetic. FF is the field type; scalars are
`FF(x)` and columns are `FF.Zeros(n)` / `FF([...])` arrays, so the same code
works on a single cell or on a whole column thanks to galois broadcasting.
"""

from typing import Iterable, List

import galois
import numpy as np

# --- Field Construction ---

GOLDILOCKS_PRIME = 0xFFFFFFFF00000001

FF = galois.GF(GOLDILOCKS_PRIME)
"""Base field GF(p) - Goldilocks prime field."""

# Type alias for a column of field elements
FFPoly = FF


def ff_zero() -> FF:
    """Additive identity."""
    return FF(0)


def ff_one() -> FF:
    """Multiplicative identity."""
    return FF(1)


def to_field(value) -> FF:
    """Lift a Python int (possibly negative) into the field."""
    return FF(int(value) % GOLDILOCKS_PRIME)


def column_from_ints(values: Iterable[int]) -> FFPoly:
    """Build a field column from Python ints, reducing negatives mod p."""
    return FF([int(v) % GOLDILOCKS_PRIME for v in values])


def column_to_ints(column: FFPoly) -> List[int]:
    """Canonical integer representatives of a field column."""
    return [int(v) for v in np.asarray(column).tolist()]


def nonzero_mask(column: FFPoly) -> np.ndarray:
    """Boolean mask of the non-zero entries of a field column."""
    return np.asarray(column) != 0
