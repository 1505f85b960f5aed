"""Protocol - Circuit data model: schema, gates, tables and copy constraints.

Circuit, verify and export live in protocol.circuit, protocol.verifier and
protocol.export; they depend on the constraints and witness packages, which
in turn build on the modules exported here.
"""

from protocol.errors import AssignmentError, SchemaError, VerificationError
from protocol.schema import CircuitSchema, Column, ColumnKind, declare_schema
from protocol.expressions import (
    ColumnQuery,
    Constant,
    Expression,
    Gate,
    Rotation,
)
from protocol.data import AssignedCell, AssignedTable, Cell
from protocol.copy_constraints import CopyConstraint, CopyConstraintBinder

__all__ = [
    # Errors
    "SchemaError",
    "AssignmentError",
    "VerificationError",
    # Schema
    "Column",
    "ColumnKind",
    "CircuitSchema",
    "declare_schema",
    # Gates
    "Expression",
    "Constant",
    "ColumnQuery",
    "Rotation",
    "Gate",
    # Tables
    "Cell",
    "AssignedCell",
    "AssignedTable",
    "CopyConstraint",
    "CopyConstraintBinder",
]
