"""Constraint declaration modules.

Each circuit has its own ConstraintModule that declares its gates as symbolic
polynomial expressions. The CONSTRAINT_REGISTRY dict maps circuit names to
their modules.
"""

from .base import (
    ConstraintContext,
    ConstraintModule,
    RowConstraintContext,
    TableConstraintContext,
)
from .factorial import FactorialConstraints

# Registry mapping circuit names to constraint module classes
CONSTRAINT_REGISTRY: dict[str, type[ConstraintModule]] = {
    "Factorial": FactorialConstraints,
}


def get_constraint_module(circuit_name: str) -> ConstraintModule:
    """Get constraint module instance for a circuit.

    Args:
        circuit_name: Name of the circuit (e.g., 'Factorial')

    Returns:
        ConstraintModule instance for the circuit

    Raises:
        KeyError: If no constraint module is registered for the circuit
    """
    if circuit_name in CONSTRAINT_REGISTRY:
        return CONSTRAINT_REGISTRY[circuit_name]()
    raise KeyError(
        f"No constraint module for circuit '{circuit_name}'. "
        f"Available: {list(CONSTRAINT_REGISTRY.keys())}"
    )


__all__ = [
    "ConstraintContext",
    "TableConstraintContext",
    "RowConstraintContext",
    "ConstraintModule",
    "FactorialConstraints",
    "CONSTRAINT_REGISTRY",
    "get_constraint_module",
]
