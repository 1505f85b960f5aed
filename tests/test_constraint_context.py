"""Tests for ConstraintContext ABC and implementations."""

import numpy as np
import pytest

from primitives.field import FF
from protocol.data import AssignedTable
from protocol.errors import AssignmentError


def _table(schema, a_values, b_values, instance=(7, 9)):
    table = AssignedTable.empty(schema, len(a_values), instance=instance)
    for row, (a, b) in enumerate(zip(a_values, b_values)):
        table.assign_advice(schema.advice[0], row, a)
        table.assign_advice(schema.advice[1], row, b)
    return table


def test_table_context_col_returns_array(schema) -> None:
    """TableConstraintContext.col returns full array of values."""
    from constraints.base import TableConstraintContext

    table = _table(schema, [1, 2, 3, 4], [5, 6, 7, 8])
    ctx = TableConstraintContext(table)

    result = ctx.col('col_a')
    assert len(result) == 4
    assert np.array_equal(result, FF([1, 2, 3, 4]))


def test_table_context_next_col_shifts(schema) -> None:
    """TableConstraintContext.next_col shifts values by -1 (circular)."""
    from constraints.base import TableConstraintContext

    table = _table(schema, [1, 2, 3, 4, 5, 6, 7, 8], [0] * 8)
    ctx = TableConstraintContext(table)

    result = ctx.next_col('col_a')
    # next_col shifts by -1, so [1,2,3,4,5,6,7,8] -> [2,3,4,5,6,7,8,1]
    assert np.array_equal(result, FF([2, 3, 4, 5, 6, 7, 8, 1]))


def test_table_context_prev_col_shifts(schema) -> None:
    """TableConstraintContext.prev_col shifts values by +1 (circular)."""
    from constraints.base import TableConstraintContext

    table = _table(schema, [1, 2, 3, 4, 5, 6, 7, 8], [0] * 8)
    ctx = TableConstraintContext(table)

    result = ctx.prev_col('col_a')
    # prev_col shifts by +1, so [1,2,3,4,5,6,7,8] -> [8,1,2,3,4,5,6,7]
    assert np.array_equal(result, FF([8, 1, 2, 3, 4, 5, 6, 7]))


def test_table_context_instance_is_padded(schema) -> None:
    """Instance column is laid out over every row, zero-padded."""
    from constraints.base import TableConstraintContext

    table = _table(schema, [1, 2, 3, 4], [0] * 4)
    ctx = TableConstraintContext(table)

    assert np.array_equal(ctx.col('instance'), FF([7, 9, 0, 0]))


def test_row_context_returns_scalars(schema) -> None:
    """RowConstraintContext reads single cells at row, row+1 and row-1."""
    from constraints.base import RowConstraintContext

    table = _table(schema, [1, 2, 3], [4, 5, 6])
    ctx = RowConstraintContext(table, 1)

    assert ctx.col('col_a') == FF(2)
    assert ctx.next_col('col_b') == FF(6)
    assert ctx.prev_col('col_a') == FF(1)
    assert ctx.col('instance') == FF(9)


def test_row_context_out_of_range_raises(schema) -> None:
    """Queries past the table edge raise AssignmentError, not IndexError."""
    from constraints.base import RowConstraintContext

    table = _table(schema, [1, 2, 3], [4, 5, 6])
    with pytest.raises(AssignmentError):
        RowConstraintContext(table, 2).next_col('col_a')
    with pytest.raises(AssignmentError):
        RowConstraintContext(table, 0).prev_col('col_a')


def test_row_context_unassigned_cell_raises(schema) -> None:
    from constraints.base import RowConstraintContext

    table = AssignedTable.empty(schema, 2, instance=[1])
    table.assign_advice(schema.advice[0], 0, 1)
    with pytest.raises(AssignmentError):
        RowConstraintContext(table, 0).col('col_b')


def test_constraint_module_abc() -> None:
    """ConstraintModule is an abstract base class requiring gates."""
    from constraints.base import ConstraintModule

    with pytest.raises(TypeError):
        ConstraintModule()


def test_uniform_constraint_evaluation(schema) -> None:
    """Same constraint code works for both table and row contexts."""
    from constraints.base import (
        ConstraintContext,
        RowConstraintContext,
        TableConstraintContext,
    )

    # Simple constraint: a * b - a' = 0 on every row but the last

    def eval_constraint(ctx: ConstraintContext):
        return ctx.col('col_a') * ctx.col('col_b') - ctx.next_col('col_a')

    table = _table(schema, [2, 6, 24, 24], [3, 4, 1, 1])

    table_result = eval_constraint(TableConstraintContext(table))
    assert np.array_equal(table_result[:3], FF([0, 0, 0]))

    for row in range(3):
        assert eval_constraint(RowConstraintContext(table, row)) == FF(0)
