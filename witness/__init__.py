"""Witness generation modules.

Each circuit has its own WitnessModule that fills the advice columns of a
fresh table directly in readable Python code. The WITNESS_REGISTRY dict maps
circuit names to their modules.
"""

from .base import WitnessModule, enabled_row_range
from .factorial import FactorialWitness, expected_output, factorial, falling_factorial

# Registry mapping circuit names to witness module classes
WITNESS_REGISTRY: dict[str, type[WitnessModule]] = {
    'Factorial': FactorialWitness,
}


def get_witness_module(circuit_name: str) -> WitnessModule:
    """Get witness module instance for a circuit.

    Args:
        circuit_name: Name of the circuit (e.g., 'Factorial')

    Returns:
        WitnessModule instance for the circuit

    Raises:
        KeyError: If no witness module is registered for the circuit
    """
    if circuit_name in WITNESS_REGISTRY:
        return WITNESS_REGISTRY[circuit_name]()
    raise KeyError(f"No witness module for circuit '{circuit_name}'. "
                   f"Available: {list(WITNESS_REGISTRY.keys())}")


__all__ = [
    'WitnessModule',
    'FactorialWitness',
    'enabled_row_range',
    'expected_output',
    'factorial',
    'falling_factorial',
    'WITNESS_REGISTRY',
    'get_witness_module',
]
