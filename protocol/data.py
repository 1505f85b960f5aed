"""Assigned table: the witness of one circuit run.

Architecture Overview:
    The circuit uses a two-phase data model:

    1. CircuitSchema / Gate (protocol/schema.py, protocol/expressions.py)
       - Fixed once at configuration time
       - Shared by every run of the circuit

    2. AssignedTable (this module)
       - Created fresh per request (per row count n)
       - Filled by a witness module, then handed read-only to the verifier
       - Dict-based storage with one field column per declared column

Usage:
    table = AssignedTable.empty(schema, n_rows=6, instance=[6, 720])
    cell = table.assign_advice(schema.advice[0], 0, FF(6))
    table.enable_selector(gate, 0)
    table.check_complete()
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, List, Tuple, Union

import numpy as np

from primitives.field import (
    FF, FFPoly, column_from_ints, column_to_ints, nonzero_mask, to_field,
)
from protocol.errors import AssignmentError, SchemaError
from protocol.schema import CircuitSchema, Column, ColumnKind

if TYPE_CHECKING:
    from protocol.copy_constraints import CopyConstraint
    from protocol.expressions import Gate


@dataclass(frozen=True)
class Cell:
    """Position of a single cell: (column, row)."""
    column: Column
    row: int

    def __str__(self) -> str:
        return f"{self.column.name}[{self.row}]"


@dataclass(frozen=True, eq=False)
class AssignedCell:
    """A cell together with the value written into it."""
    cell: Cell
    value: FF

    @property
    def column(self) -> Column:
        return self.cell.column

    @property
    def row(self) -> int:
        return self.cell.row


@dataclass
class AssignedTable:
    """Field values for every column of one circuit run.

    Attributes:
        schema: Declared columns
        n_rows: Number of usable rows
        columns: Advice and selector columns keyed by column name
        assigned: Per-row assignment mask for each advice column
        instance: Public values, may be shorter or longer than n_rows
        copy_constraints: Equality obligations recorded during assignment
    """
    schema: CircuitSchema
    n_rows: int
    columns: Dict[str, FFPoly] = field(default_factory=dict)
    assigned: Dict[str, np.ndarray] = field(default_factory=dict)
    instance: FFPoly = None
    copy_constraints: List['CopyConstraint'] = field(default_factory=list)

    @classmethod
    def empty(cls, schema: CircuitSchema, n_rows: int,
              instance: Union[FFPoly, Iterable[int]] = ()) -> 'AssignedTable':
        """Create a table with every advice cell unassigned and every selector off."""
        if n_rows < 1:
            raise AssignmentError(f"Table needs at least one row, got {n_rows}")
        table = cls(schema=schema, n_rows=n_rows)
        for col in schema.advice:
            table.columns[col.name] = FF.Zeros(n_rows)
            table.assigned[col.name] = np.zeros(n_rows, dtype=bool)
        for col in schema.selectors:
            table.columns[col.name] = FF.Zeros(n_rows)
        if isinstance(instance, FF):
            table.instance = instance.copy()
        else:
            values = list(instance)
            table.instance = column_from_ints(values) if values else FF.Zeros(0)
        return table

    # --- Lookup ---

    def _check_row(self, row: int) -> None:
        if not 0 <= row < self.n_rows:
            raise AssignmentError(f"Row {row} out of range for table with {self.n_rows} rows")

    def _check_kind(self, column: Column, kind: ColumnKind) -> None:
        if column.kind != kind:
            raise SchemaError(f"Column '{column.name}' is {column.kind.value}, expected {kind.value}")
        if column.name not in self.columns:
            raise SchemaError(f"Column '{column.name}' is not part of this table's schema")

    def is_assigned(self, column: Column, row: int) -> bool:
        if column.kind == ColumnKind.INSTANCE:
            return 0 <= row < len(self.instance)
        if column.kind == ColumnKind.SELECTOR:
            return 0 <= row < self.n_rows
        return bool(self.assigned[column.name][row])

    def value(self, column: Union[Column, str], row: int) -> FF:
        """Value of a cell; unassigned advice cells raise AssignmentError."""
        if isinstance(column, str):
            column = self.schema.column(column)
        if column.kind == ColumnKind.INSTANCE:
            return self.instance_value(row)
        self._check_row(row)
        if column.kind == ColumnKind.ADVICE and not self.assigned[column.name][row]:
            raise AssignmentError(f"Cell {column.name}[{row}] is unassigned")
        return self.columns[column.name][row]

    def instance_value(self, row: int) -> FF:
        if not 0 <= row < len(self.instance):
            raise AssignmentError(
                f"Instance row {row} out of range (instance has {len(self.instance)} values)"
            )
        return self.instance[row]

    def padded_instance(self) -> FFPoly:
        """Instance values laid out over n_rows (zero-padded or truncated)."""
        padded = FF.Zeros(self.n_rows)
        k = min(self.n_rows, len(self.instance))
        padded[:k] = self.instance[:k]
        return padded

    # --- Assignment ---

    def assign_advice(self, column: Column, row: int, value) -> AssignedCell:
        """Write a value into an advice cell (re-assignment overwrites)."""
        self._check_kind(column, ColumnKind.ADVICE)
        self._check_row(row)
        if not isinstance(value, FF):
            value = to_field(value)
        self.columns[column.name][row] = value
        self.assigned[column.name][row] = True
        return AssignedCell(Cell(column, row), self.columns[column.name][row])

    def enable_selector(self, gate: 'Gate', row: int) -> None:
        """Switch `gate` on at `row`.

        Raises:
            AssignmentError: If the gate would read a row outside the table
        """
        self._check_kind(gate.selector, ColumnKind.SELECTOR)
        self._check_row(row)
        if row + gate.max_rotation >= self.n_rows or row + gate.min_rotation < 0:
            raise AssignmentError(
                f"Cannot enable gate '{gate.name}' at row {row}: it reads rows "
                f"{row + gate.min_rotation}..{row + gate.max_rotation} of a "
                f"{self.n_rows}-row table"
            )
        self.columns[gate.selector.name][row] = 1

    def disable_selector(self, selector: Column, row: int) -> None:
        self._check_kind(selector, ColumnKind.SELECTOR)
        self._check_row(row)
        self.columns[selector.name][row] = 0

    def enabled_rows(self, selector: Union[Column, str]) -> List[int]:
        name = selector if isinstance(selector, str) else selector.name
        return [int(i) for i in np.flatnonzero(nonzero_mask(self.columns[name]))]

    # --- Completeness ---

    def unassigned_cells(self) -> List[Tuple[str, int]]:
        missing = []
        for col in self.schema.advice:
            for row in np.flatnonzero(~self.assigned[col.name]):
                missing.append((col.name, int(row)))
        return missing

    def check_complete(self) -> None:
        """Raise AssignmentError if any advice cell is still unassigned."""
        missing = self.unassigned_cells()
        if missing:
            shown = ", ".join(f"{name}[{row}]" for name, row in missing[:8])
            more = f" (+{len(missing) - 8} more)" if len(missing) > 8 else ""
            raise AssignmentError(f"{len(missing)} unassigned advice cell(s): {shown}{more}")

    def to_dict(self) -> dict:
        """Integer view of the table for serialisation."""
        return {
            "n_rows": self.n_rows,
            "advice": {c.name: column_to_ints(self.columns[c.name]) for c in self.schema.advice},
            "selectors": {c.name: column_to_ints(self.columns[c.name]) for c in self.schema.selectors},
            "instance": column_to_ints(self.instance),
        }
