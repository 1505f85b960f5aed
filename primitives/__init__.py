"""Primitives - Low-level mathematical building blocks."""

from primitives.field import (
    FF,
    FFPoly,
    GOLDILOCKS_PRIME,
    column_from_ints,
    column_to_ints,
    ff_one,
    ff_zero,
    nonzero_mask,
    to_field,
)

__all__ = [
    "FF",
    "FFPoly",
    "GOLDILOCKS_PRIME",
    "column_from_ints",
    "column_to_ints",
    "ff_one",
    "ff_zero",
    "nonzero_mask",
    "to_field",
]
