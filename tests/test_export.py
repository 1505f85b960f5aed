"""Tests for circuit export."""

import json

from protocol.export import export_circuit, write_export


def test_export_layout(circuit) -> None:
    synthesis = circuit.synthesize(4, [4, 24])

    data = export_circuit(circuit, synthesis.table)

    assert data["circuit"]["name"] == "Factorial"
    assert [c["name"] for c in data["columns"]] == ['col_a', 'col_b', 'instance', 'q_0']
    assert [c["equality"] for c in data["columns"]] == [True, True, True, False]
    assert data["gates"][0]["name"] == "factorial"
    assert data["table"]["advice"]["col_a"] == [4, 12, 24, 24]
    assert data["table"]["selectors"]["q_0"] == [1, 1, 1, 0]
    assert data["table"]["instance"] == [4, 24]
    assert data["copy_constraints"][1] == {
        "left": {"column": "col_a", "row": 3},
        "right": {"column": "instance", "row": 1},
    }


def test_export_is_json_serialisable(circuit) -> None:
    synthesis = circuit.synthesize(6, [6, 720])
    text = json.dumps(export_circuit(circuit, synthesis.table))
    assert json.loads(text)["table"]["n_rows"] == 6


def test_write_export(circuit, tmp_path) -> None:
    synthesis = circuit.synthesize(3, [6, 120])

    path = write_export(circuit, synthesis.table, tmp_path / "out" / "factorial.json")

    with open(path) as f:
        data = json.load(f)
    assert data["table"]["advice"]["col_a"] == [6, 30, 120]
