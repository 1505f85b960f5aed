"""Constraint verification of an assigned table.

The verifier checks that a fully assigned table satisfies its circuit:

1. Selector check - every selector value is boolean, and no gate is switched
   on at a row whose queries would fall outside the table
2. Gate check - every gate polynomial evaluates to zero on every row where
   the gate's selector is on
3. Copy check - both cells of every copy constraint hold the same value

Two scan modes are provided. The default evaluates each polynomial over the
whole table at once and reports every failing row. With fail_fast=True rows
are checked one at a time and each gate stops at its first failure; the
table is accepted only if no gate and no copy constraint fails in either mode.

A failed check is data (ConstraintViolation), not an exception. Malformed
tables (unassigned cells, gates enabled past the last row) raise
AssignmentError.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

import numpy as np

from constraints.base import RowConstraintContext, TableConstraintContext
from primitives.field import FF, nonzero_mask
from protocol.copy_constraints import CopyConstraint
from protocol.data import AssignedTable, Cell
from protocol.errors import AssignmentError, VerificationError
from protocol.expressions import Expression, Gate
from protocol.schema import ColumnKind

logger = logging.getLogger(__name__)

# --- Violation kinds ---

GATE = "gate"
COPY = "copy"
SELECTOR = "selector"


@dataclass(frozen=True)
class ConstraintViolation:
    """One failed check.

    Attributes:
        kind: 'gate', 'copy' or 'selector'
        row: Row the check was made at
        gate: Gate name (gate and selector violations)
        constraint: Label of the failing polynomial (gate violations)
        residual: Non-zero value the polynomial evaluated to (gate violations)
        cells: Cells the failing check read
        detail: Free-form description
    """
    kind: str
    row: int
    gate: Optional[str] = None
    constraint: Optional[str] = None
    residual: Optional[int] = None
    cells: Tuple[Cell, ...] = ()
    detail: str = ""

    def references_row(self, row: int) -> bool:
        """True if the check was made at `row` or read a table cell at `row`."""
        if self.row == row:
            return True
        return any(c.row == row for c in self.cells if c.column.kind != ColumnKind.INSTANCE)

    def __str__(self) -> str:
        if self.kind == GATE:
            return (f"gate '{self.gate}' constraint '{self.constraint}' not satisfied "
                    f"at row {self.row} (residual {self.residual})")
        if self.kind == SELECTOR:
            return f"selector of gate '{self.gate}' at row {self.row}: {self.detail}"
        return f"copy constraint {self.detail}"


@dataclass
class VerificationResult:
    """Outcome of verify(): accepted iff there are no violations."""
    violations: List[ConstraintViolation] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return not self.violations

    def rows(self) -> List[int]:
        return sorted({v.row for v in self.violations})

    def assert_satisfied(self) -> None:
        """Raise VerificationError if any check failed."""
        if self.violations:
            raise VerificationError(self.violations)


# --- Main Entry Point ---

def verify(
    table: AssignedTable,
    gates: Iterable[Gate],
    copy_constraints: Optional[Iterable[CopyConstraint]] = None,
    fail_fast: bool = False,
) -> VerificationResult:
    """Check every gate and copy constraint against an assigned table.

    Args:
        table: Fully assigned table
        gates: Gates declared by the circuit's ConstraintModule
        copy_constraints: Equality obligations; defaults to those recorded on
            the table during assignment
        fail_fast: Scan row by row and stop each gate at its first failure

    Returns:
        VerificationResult listing every violation found

    Raises:
        AssignmentError: If an advice cell is unassigned or a gate is enabled
            on a row whose queries fall outside the table
    """
    gates = list(gates)
    if copy_constraints is None:
        copy_constraints = table.copy_constraints
    copy_constraints = list(copy_constraints)

    table.check_complete()

    violations: List[ConstraintViolation] = []
    for gate in gates:
        violations.extend(_check_selector(table, gate))
        if fail_fast:
            violations.extend(_check_gate_by_row(table, gate))
        else:
            violations.extend(_check_gate_over_table(table, gate))
    violations.extend(_check_copy_constraints(table, copy_constraints))

    for v in violations:
        logger.debug("Violation: %s", v)
    logger.info(
        "Verified %d rows, %d gate(s), %d copy constraint(s): %s",
        table.n_rows, len(gates), len(copy_constraints),
        "accepted" if not violations else f"rejected with {len(violations)} violation(s)",
    )
    return VerificationResult(violations)


# --- Selector Checks ---

def _active_rows(table: AssignedTable, gate: Gate) -> List[int]:
    """Rows where the gate's selector is non-zero, checked against the gate's rotations."""
    rows = table.enabled_rows(gate.selector)
    for row in rows:
        if row + gate.max_rotation >= table.n_rows or row + gate.min_rotation < 0:
            raise AssignmentError(
                f"Gate '{gate.name}' is enabled at row {row} but reads rows "
                f"{row + gate.min_rotation}..{row + gate.max_rotation} of a "
                f"{table.n_rows}-row table"
            )
    return rows


def _check_selector(table: AssignedTable, gate: Gate) -> List[ConstraintViolation]:
    selector = np.asarray(table.columns[gate.selector.name])
    violations = []
    for row in np.flatnonzero((selector != 0) & (selector != 1)):
        violations.append(ConstraintViolation(
            kind=SELECTOR,
            row=int(row),
            gate=gate.name,
            cells=(Cell(gate.selector, int(row)),),
            detail=f"non-boolean value {int(selector[row])}",
        ))
    return violations


# --- Gate Checks ---

def _cells_read(poly: Expression, row: int) -> Tuple[Cell, ...]:
    cells = {Cell(q.column, row + int(q.rotation)) for q in poly.queries()}
    return tuple(sorted(cells, key=lambda c: (c.row, c.column.name)))


def _gate_violation(gate: Gate, index: int, row: int, residual) -> ConstraintViolation:
    poly = gate.polys[index]
    return ConstraintViolation(
        kind=GATE,
        row=row,
        gate=gate.name,
        constraint=gate.label(index),
        residual=int(residual),
        cells=_cells_read(poly, row),
        detail=str(poly),
    )


def _check_gate_over_table(table: AssignedTable, gate: Gate) -> List[ConstraintViolation]:
    """Evaluate each polynomial at every row at once, then mask by the selector."""
    _active_rows(table, gate)
    ctx = TableConstraintContext(table)
    selector = table.columns[gate.selector.name]

    violations = []
    for index, poly in enumerate(gate.polys):
        # Broadcast so constant polynomials also yield one value per row
        residual = FF.Zeros(table.n_rows) + poly.evaluate(ctx)
        masked = selector * residual
        for row in np.flatnonzero(nonzero_mask(masked)):
            violations.append(_gate_violation(gate, index, int(row), residual[row]))
    violations.sort(key=lambda v: v.row)
    return violations


def _check_gate_by_row(table: AssignedTable, gate: Gate) -> List[ConstraintViolation]:
    """Evaluate row by row and stop at the gate's first failing row."""
    for row in _active_rows(table, gate):
        ctx = RowConstraintContext(table, row)
        failed = []
        for index, poly in enumerate(gate.polys):
            residual = poly.evaluate(ctx)
            if int(residual) != 0:
                failed.append(_gate_violation(gate, index, row, residual))
        if failed:
            return failed
    return []


# --- Copy Checks ---

def _check_copy_constraints(table: AssignedTable,
                            copy_constraints: List[CopyConstraint]) -> List[ConstraintViolation]:
    violations = []
    for constraint in copy_constraints:
        left = table.value(constraint.left.column, constraint.left.row)
        right = table.value(constraint.right.column, constraint.right.row)
        if int(left) != int(right):
            # Report at the table side of the constraint
            anchor = constraint.left
            if anchor.column.kind == ColumnKind.INSTANCE:
                anchor = constraint.right
            violations.append(ConstraintViolation(
                kind=COPY,
                row=anchor.row,
                cells=(constraint.left, constraint.right),
                detail=f"{constraint} failed: {int(left)} != {int(right)}",
            ))
    return violations
