"""Circuit configuration and per-request synthesis.

This module ties the pieces together:

- CircuitConfig: Shape of the circuit (columns, selectors, public output slot)
  and the name under which its constraint and witness modules are registered.
- Circuit: Declares the schema and gates once (configure), then builds a fresh
  AssignedTable for every request (synthesize) and checks it (verify).

Example:
    circuit = Circuit(CircuitConfig())
    synthesis = circuit.synthesize(n_rows=6, instance=[6, 720])
    result = circuit.verify(synthesis.table)
    assert result.accepted
"""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from constraints import get_constraint_module
from primitives.field import FFPoly
from protocol.copy_constraints import CopyConstraint, CopyConstraintBinder
from protocol.data import AssignedCell, AssignedTable
from protocol.errors import SchemaError
from protocol.expressions import Gate
from protocol.schema import CircuitSchema, declare_schema
from protocol.verifier import VerificationResult, verify
from witness import get_witness_module
from witness.factorial import SEED_ROW

logger = logging.getLogger(__name__)


@dataclass
class CircuitConfig:
    """Configuration for a circuit.

    Attributes:
        name: Registry name of the constraint and witness modules
        num_advice: Number of private columns
        num_selectors: Number of selector columns
        output_row: Instance row the computed output is bound to
    """
    name: str = "Factorial"
    num_advice: int = 2
    num_selectors: int = 1
    output_row: int = 1

    def __post_init__(self):
        if self.output_row < 0 or self.output_row == SEED_ROW:
            raise SchemaError(
                f"output_row must be a non-negative instance row other than the seed row "
                f"{SEED_ROW}, got {self.output_row}"
            )

    @classmethod
    def from_dict(cls, data: dict) -> 'CircuitConfig':
        known = {k: data[k] for k in ("name", "num_advice", "num_selectors", "output_row")
                 if k in data}
        return cls(**known)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> 'CircuitConfig':
        with open(path) as f:
            return cls.from_dict(json.load(f))

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Synthesis:
    """A freshly assigned table and the cell holding its output."""
    table: AssignedTable
    output: AssignedCell

    @property
    def copy_constraints(self) -> List[CopyConstraint]:
        return self.table.copy_constraints


class Circuit:
    """A configured circuit: fixed schema and gates, fresh table per request."""

    def __init__(self, config: Optional[CircuitConfig] = None):
        self.config = config or CircuitConfig()
        self.schema: CircuitSchema = declare_schema(
            num_advice=self.config.num_advice,
            num_selectors=self.config.num_selectors,
        )
        self.constraint_module = get_constraint_module(self.config.name)
        self.witness_module = get_witness_module(self.config.name)
        self.gates: Tuple[Gate, ...] = tuple(self.constraint_module.gates(self.schema))
        logger.debug("Configured circuit '%s' with gates %s",
                     self.config.name, [g.name for g in self.gates])

    def synthesize(self, n_rows: int, instance: Union[FFPoly, Iterable[int]],
                   expose: Optional[bool] = None) -> Synthesis:
        """Assign a fresh table for one request.

        Args:
            n_rows: Number of rows to fill
            instance: Public values; instance[0] seeds the computation and,
                when present, instance[output_row] receives the output
            expose: Bind the output to instance[output_row]. Defaults to
                binding whenever the instance has that slot

        Returns:
            Synthesis with the assigned table and output cell

        Raises:
            AssignmentError: If the witness cannot be assigned, or expose is
                requested and the instance has no output slot
        """
        table = AssignedTable.empty(self.schema, n_rows, instance)
        output = self.witness_module.assign(table, list(self.gates))
        if expose is None:
            expose = len(table.instance) > self.config.output_row
        if expose:
            self.expose_public(table, output, self.config.output_row)
        return Synthesis(table=table, output=output)

    def expose_public(self, table: AssignedTable, cell: AssignedCell, row: int) -> CopyConstraint:
        """Bind an assigned cell to instance[row]."""
        return CopyConstraintBinder(table).bind(cell, row)

    def verify(self, table: AssignedTable, fail_fast: bool = False) -> VerificationResult:
        return verify(table, self.gates, table.copy_constraints, fail_fast=fail_fast)

    def mock_prove(self, n_rows: int, instance: Union[FFPoly, Iterable[int]],
                   fail_fast: bool = False) -> Tuple[Synthesis, VerificationResult]:
        """Synthesize and verify in one call."""
        synthesis = self.synthesize(n_rows, instance)
        return synthesis, self.verify(synthesis.table, fail_fast=fail_fast)
