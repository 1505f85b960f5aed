"""Copy constraints: equality obligations between two cells.

Unlike gates, a copy constraint does not depend on row adjacency; it ties one
specific cell to another. The factorial circuit uses them to bind the public
instance column to the advice cells that open and close the computation:

    instance[0]  ==  col_a[0]          (seed)
    instance[1]  ==  col_a[n_rows-1]   (result)
"""

import logging
from dataclasses import dataclass

from protocol.data import AssignedCell, AssignedTable, Cell
from protocol.errors import AssignmentError, SchemaError
from protocol.schema import Column, ColumnKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CopyConstraint:
    """Assert that `left` and `right` hold the same field value."""
    left: Cell
    right: Cell

    def involves_row(self, row: int) -> bool:
        return self.left.row == row or self.right.row == row

    def to_dict(self) -> dict:
        return {
            "left": {"column": self.left.column.name, "row": self.left.row},
            "right": {"column": self.right.column.name, "row": self.right.row},
        }

    def __str__(self) -> str:
        return f"{self.left} == {self.right}"


class CopyConstraintBinder:
    """Records copy constraints on an AssignedTable.

    The binder validates both ends of every constraint when it is recorded:
    columns must have equality enabled in the schema and positions must lie
    inside the table (or inside the instance column for public cells).
    """

    def __init__(self, table: AssignedTable):
        self.table = table

    def _check_equality(self, column: Column) -> None:
        if not self.table.schema.has_equality(column):
            raise SchemaError(f"Column '{column.name}' does not have equality enabled")

    def _check_instance_row(self, instance_row: int) -> None:
        size = len(self.table.instance)
        if not 0 <= instance_row < size:
            raise AssignmentError(
                f"Instance row {instance_row} out of range (instance has {size} values)"
            )

    def constrain_equal(self, left: Cell, right: Cell) -> CopyConstraint:
        """Record `left == right` for two arbitrary cells."""
        for cell in (left, right):
            self._check_equality(cell.column)
            if cell.column.kind == ColumnKind.INSTANCE:
                self._check_instance_row(cell.row)
            elif not 0 <= cell.row < self.table.n_rows:
                raise AssignmentError(
                    f"Cell {cell} out of range for table with {self.table.n_rows} rows"
                )
        constraint = CopyConstraint(left, right)
        self.table.copy_constraints.append(constraint)
        logger.debug("Copy constraint %s", constraint)
        return constraint

    def bind(self, cell: AssignedCell, instance_row: int) -> CopyConstraint:
        """Record that an assigned cell must equal instance[instance_row].

        Raises:
            AssignmentError: If instance_row is outside the instance column
            SchemaError: If the cell's column does not have equality enabled
        """
        self._check_instance_row(instance_row)
        return self.constrain_equal(cell.cell, Cell(self.table.schema.instance, instance_row))

    def assign_from_instance(self, column: Column, row: int, instance_row: int) -> AssignedCell:
        """Copy instance[instance_row] into an advice cell and bind the two."""
        self._check_instance_row(instance_row)
        cell = self.table.assign_advice(column, row, self.table.instance_value(instance_row))
        self.bind(cell, instance_row)
        return cell
