"""Factorial circuit witness generation.

Policy: descending factorial. Starting from a public seed s the table holds

    row  |  col_a (product)          |  col_b (countdown)
    0    |  s                        |  s - 1
    1    |  s * (s-1)                |  s - 2
    ...  |  ...                      |  ...
    n-1  |  s * (s-1) * ... * (s-n+1)|  s - n

so the last product is the falling factorial of s with n factors. With
n == s that is s! (e.g. s = 6, n = 6 gives 720).
"""

import logging
from dataclasses import dataclass
from typing import List

from primitives.field import FF, GOLDILOCKS_PRIME, ff_one
from constraints.factorial import GATE_NAME
from protocol.copy_constraints import CopyConstraintBinder
from protocol.data import AssignedCell, AssignedTable
from protocol.errors import AssignmentError
from protocol.expressions import Gate
from .base import WitnessModule, enabled_row_range

logger = logging.getLogger(__name__)

MIN_ROWS = 2
SEED_ROW = 0
OUTPUT_ROW = 1


def falling_factorial(seed: int, n_factors: int) -> FF:
    """seed * (seed-1) * ... * (seed-n_factors+1), reduced into the field."""
    acc = 1
    for i in range(n_factors):
        acc = (acc * (seed - i)) % GOLDILOCKS_PRIME
    return FF(acc)


def expected_output(seed: int, n_rows: int) -> FF:
    """Value the last product cell takes for a given seed and row count."""
    return falling_factorial(seed, n_rows)


def factorial(n: int) -> FF:
    """n! in the field, the public output of an n-row table seeded with n."""
    return expected_output(n, n)


@dataclass(frozen=True)
class RecurrenceState:
    """Cells of one row, handed from each row's step to the next."""
    product: AssignedCell
    countdown: AssignedCell


class FactorialWitness(WitnessModule):
    """Witness generation for the factorial circuit.

    Fills col_a with the running product and col_b with the countdown, and
    switches the factorial gate on for every row that has a next row.
    """

    def _find_gate(self, gates: List[Gate]) -> Gate:
        for gate in gates:
            if gate.name == GATE_NAME:
                return gate
        raise AssignmentError(
            f"Gate '{GATE_NAME}' not declared. Got: {[g.name for g in gates]}"
        )

    def _first_row(self, table: AssignedTable, binder: CopyConstraintBinder) -> RecurrenceState:
        col_a, col_b = table.schema.advice[0], table.schema.advice[1]
        product = binder.assign_from_instance(col_a, 0, SEED_ROW)
        countdown = table.assign_advice(col_b, 0, product.value - ff_one())
        return RecurrenceState(product, countdown)

    def _step(self, table: AssignedTable, state: RecurrenceState, row: int) -> RecurrenceState:
        col_a, col_b = table.schema.advice[0], table.schema.advice[1]
        product = table.assign_advice(col_a, row, state.product.value * state.countdown.value)
        countdown = table.assign_advice(col_b, row, state.countdown.value - ff_one())
        return RecurrenceState(product, countdown)

    def assign(self, table: AssignedTable, gates: List[Gate]) -> AssignedCell:
        n_rows = table.n_rows
        if n_rows < MIN_ROWS:
            raise AssignmentError(
                f"Factorial table needs at least {MIN_ROWS} rows (initial row and one step), "
                f"got {n_rows}"
            )
        if len(table.instance) <= SEED_ROW:
            raise AssignmentError("Instance column is missing the seed value")

        gate = self._find_gate(gates)
        binder = CopyConstraintBinder(table)

        for row in enabled_row_range(gate, n_rows):
            table.enable_selector(gate, row)

        state = self._first_row(table, binder)
        for row in range(1, n_rows):
            state = self._step(table, state, row)
            logger.debug("row %d: product=%s countdown=%s",
                         row, state.product.value, state.countdown.value)

        table.check_complete()
        logger.debug("Assigned %d rows, output %s", n_rows, state.product.value)
        return state.product
