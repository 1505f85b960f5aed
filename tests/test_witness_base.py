# tests/test_witness_base.py
import pytest


def test_witness_module_is_abstract():
    from witness.base import WitnessModule

    with pytest.raises(TypeError):
        WitnessModule()  # Can't instantiate abstract class


def test_witness_module_subclass_must_implement_methods():
    from witness.base import WitnessModule

    class IncompleteWitness(WitnessModule):
        pass

    with pytest.raises(TypeError):
        IncompleteWitness()


def test_enabled_row_range(factorial_gate):
    from witness.base import enabled_row_range

    assert list(enabled_row_range(factorial_gate, 4)) == [0, 1, 2]
    assert list(enabled_row_range(factorial_gate, 2)) == [0]
    assert list(enabled_row_range(factorial_gate, 1)) == []
