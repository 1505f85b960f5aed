"""Base classes for constraint evaluation.

ConstraintContext provides a uniform interface for gate evaluation that works
for a whole table at once (returns arrays) and for a single row (returns
scalars). The same gate expression can be used in both contexts thanks to
galois broadcasting.

Example:
    def eval_constraint(ctx: ConstraintContext):
        a = ctx.col('col_a')
        b = ctx.col('col_b')
        return ctx.next_col('col_a') - a * b

    # Every row at once (arrays)
    residuals = eval_constraint(TableConstraintContext(table))

    # One row (scalars)
    residual = eval_constraint(RowConstraintContext(table, row=2))
"""

from abc import ABC, abstractmethod
from typing import List, Union

import numpy as np

from primitives.field import FF, FFPoly
from protocol.data import AssignedTable
from protocol.errors import AssignmentError
from protocol.expressions import Gate
from protocol.schema import CircuitSchema, ColumnKind


class ConstraintContext(ABC):
    """Uniform interface for gate evaluation - works per table and per row."""

    @abstractmethod
    def col(self, name: str) -> Union[FFPoly, FF]:
        """Get column at current row.

        Args:
            name: Column name

        Returns:
            Table: array of values at every row
            Row: scalar value at the row being checked
        """
        pass

    @abstractmethod
    def next_col(self, name: str) -> Union[FFPoly, FF]:
        """Get column at next row (offset +1).

        Returns:
            Table: array shifted by -1 (circular)
            Row: value at row + 1
        """
        pass

    @abstractmethod
    def prev_col(self, name: str) -> Union[FFPoly, FF]:
        """Get column at previous row (offset -1).

        Returns:
            Table: array shifted by +1 (circular)
            Row: value at row - 1
        """
        pass


class TableConstraintContext(ConstraintContext):
    """Whole-table implementation - returns field arrays.

    Gates are evaluated at every row simultaneously. Rotated queries wrap
    around the end of the table; rows whose gate would read a wrapped value
    must have their selector off, which the verifier enforces before masking.
    """

    def __init__(self, table: AssignedTable):
        self._table = table

    def col(self, name: str) -> FFPoly:
        column = self._table.schema.column(name)
        if column.kind == ColumnKind.INSTANCE:
            return self._table.padded_instance()
        return self._table.columns[name]

    def next_col(self, name: str) -> FFPoly:
        return np.roll(self.col(name), -1)

    def prev_col(self, name: str) -> FFPoly:
        return np.roll(self.col(name), 1)


class RowConstraintContext(ConstraintContext):
    """Single-row implementation - returns scalar field elements."""

    def __init__(self, table: AssignedTable, row: int):
        self._table = table
        self.row = row

    def _at(self, name: str, row: int) -> FF:
        if not 0 <= row < self._table.n_rows:
            raise AssignmentError(
                f"Row {self.row} queries {name}[{row}] outside a {self._table.n_rows}-row table"
            )
        column = self._table.schema.column(name)
        if column.kind == ColumnKind.INSTANCE:
            return self._table.padded_instance()[row]
        return self._table.value(column, row)

    def col(self, name: str) -> FF:
        return self._at(name, self.row)

    def next_col(self, name: str) -> FF:
        return self._at(name, self.row + 1)

    def prev_col(self, name: str) -> FF:
        return self._at(name, self.row - 1)


class ConstraintModule(ABC):
    """Per-circuit gate declarations. Used by the witness module and the verifier.

    Each circuit has its own constraint module that declares, once, the gates
    its tables must satisfy. The declaration is symbolic (see
    protocol/expressions.py) so it can be evaluated, inspected or exported.
    """

    @abstractmethod
    def gates(self, schema: CircuitSchema) -> List[Gate]:
        """Declare every gate of the circuit.

        Args:
            schema: Declared columns the gates may query

        Returns:
            Gates, each paired with its own selector
        """
        pass
