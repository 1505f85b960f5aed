"""Unit tests for the AssignedTable data structure."""

import pytest

from primitives.field import FF, column_to_ints
from protocol.data import AssignedTable, Cell
from protocol.errors import AssignmentError, SchemaError


def test_empty_table_is_unassigned(schema) -> None:
    table = AssignedTable.empty(schema, 3, instance=[6, 120])

    assert table.n_rows == 3
    assert len(table.unassigned_cells()) == 6
    assert column_to_ints(table.instance) == [6, 120]
    assert table.enabled_rows('q_0') == []


def test_empty_table_accepts_field_instance(schema) -> None:
    instance = FF([6, 120])
    table = AssignedTable.empty(schema, 3, instance=instance)
    assert column_to_ints(table.instance) == [6, 120]


def test_zero_rows_rejected(schema) -> None:
    with pytest.raises(AssignmentError):
        AssignedTable.empty(schema, 0)


def test_assign_advice_returns_cell(schema) -> None:
    table = AssignedTable.empty(schema, 2)
    cell = table.assign_advice(schema.advice[0], 1, 42)

    assert cell.cell == Cell(schema.advice[0], 1)
    assert cell.row == 1
    assert cell.value == FF(42)
    assert table.is_assigned(schema.advice[0], 1)
    assert not table.is_assigned(schema.advice[0], 0)
    assert table.value('col_a', 1) == FF(42)


def test_assign_advice_rejects_other_kinds(schema) -> None:
    table = AssignedTable.empty(schema, 2)
    with pytest.raises(SchemaError):
        table.assign_advice(schema.selectors[0], 0, 1)
    with pytest.raises(SchemaError):
        table.assign_advice(schema.instance, 0, 1)


def test_assign_advice_row_out_of_range(schema) -> None:
    table = AssignedTable.empty(schema, 2)
    with pytest.raises(AssignmentError):
        table.assign_advice(schema.advice[0], 2, 1)


def test_value_of_unassigned_cell_raises(schema) -> None:
    table = AssignedTable.empty(schema, 2)
    with pytest.raises(AssignmentError):
        table.value(schema.advice[1], 0)


def test_instance_value_out_of_range(schema) -> None:
    table = AssignedTable.empty(schema, 2, instance=[6])
    assert table.instance_value(0) == FF(6)
    with pytest.raises(AssignmentError):
        table.instance_value(1)


def test_check_complete(schema) -> None:
    table = AssignedTable.empty(schema, 2)
    for col in schema.advice:
        table.assign_advice(col, 0, 1)
    with pytest.raises(AssignmentError, match="2 unassigned"):
        table.check_complete()
    for col in schema.advice:
        table.assign_advice(col, 1, 1)
    table.check_complete()


def test_enable_selector_respects_gate_rotation(schema, factorial_gate) -> None:
    table = AssignedTable.empty(schema, 3)
    table.enable_selector(factorial_gate, 0)
    table.enable_selector(factorial_gate, 1)
    assert table.enabled_rows(factorial_gate.selector) == [0, 1]

    # Last row has no next row for the gate to read
    with pytest.raises(AssignmentError):
        table.enable_selector(factorial_gate, 2)

    table.disable_selector(factorial_gate.selector, 0)
    assert table.enabled_rows('q_0') == [1]


def test_to_dict(schema) -> None:
    table = AssignedTable.empty(schema, 2, instance=[3])
    table.assign_advice(schema.advice[0], 0, 3)
    data = table.to_dict()
    assert data['n_rows'] == 2
    assert data['advice']['col_a'] == [3, 0]
    assert data['selectors'] == {'q_0': [0, 0]}
    assert data['instance'] == [3]
