"""Unit tests for the Goldilocks field helpers."""

import numpy as np

from primitives.field import (
    FF,
    GOLDILOCKS_PRIME,
    column_from_ints,
    column_to_ints,
    ff_one,
    ff_zero,
    nonzero_mask,
    to_field,
)


def test_identities() -> None:
    assert int(ff_zero()) == 0
    assert int(ff_one()) == 1
    x = FF(12345)
    assert x + ff_zero() == x
    assert x * ff_one() == x


def test_to_field_reduces_negatives() -> None:
    assert int(to_field(-1)) == GOLDILOCKS_PRIME - 1
    assert to_field(-1) + FF(1) == ff_zero()


def test_exact_arithmetic_wraps_modulo_prime() -> None:
    big = FF(GOLDILOCKS_PRIME - 1)
    assert int(big + FF(2)) == 1
    assert int(big * big) == 1  # (-1) * (-1)


def test_column_round_trip() -> None:
    values = [0, 1, 720, GOLDILOCKS_PRIME - 1]
    col = column_from_ints(values)
    assert column_to_ints(col) == values


def test_column_from_ints_reduces_negatives() -> None:
    assert column_to_ints(column_from_ints([-2])) == [GOLDILOCKS_PRIME - 2]


def test_nonzero_mask() -> None:
    col = FF([0, 3, 0, 1])
    assert np.array_equal(nonzero_mask(col), np.array([False, True, False, True]))
