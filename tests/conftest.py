"""Shared fixtures for circuit tests."""

import pytest

from protocol.circuit import Circuit, CircuitConfig
from protocol.schema import declare_schema


@pytest.fixture
def schema():
    return declare_schema()


@pytest.fixture
def circuit():
    return Circuit(CircuitConfig())


@pytest.fixture
def factorial_gate(circuit):
    return circuit.gates[0]
