"""Base class for witness generation."""

from abc import ABC, abstractmethod
from typing import List

from protocol.data import AssignedCell, AssignedTable
from protocol.expressions import Gate


def enabled_row_range(gate: Gate, n_rows: int) -> range:
    """Rows on which `gate` may be switched on: every row whose queries stay in the table."""
    return range(-gate.min_rotation, max(n_rows - gate.max_rotation, 0))


class WitnessModule(ABC):
    """Per-circuit witness generation. Used by the prover side only.

    Each circuit has its own witness module that fills the advice columns of
    a fresh AssignedTable, switches its gates on for the rows they govern and
    records the copy constraints tying advice cells to public values. Unlike
    ConstraintModule, the verifier never calls it.
    """

    @abstractmethod
    def assign(self, table: AssignedTable, gates: List[Gate]) -> AssignedCell:
        """Fill `table` with a witness.

        Args:
            table: Empty table of the circuit's schema, carrying the instance
            gates: Gates declared by the circuit's ConstraintModule

        Returns:
            The assigned cell holding the computation's output

        Raises:
            AssignmentError: If no complete witness can be produced
        """
        pass
