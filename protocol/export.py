"""Circuit export for a proving backend.

A commitment backend needs three things from a satisfied circuit: the
assigned table, the gate polynomials and the copy constraints. This module
lays them out as plain JSON-serialisable data; producing a proof from it is
out of scope here.

Format:
    {
      "circuit": {...CircuitConfig...},
      "columns": [{"name": "col_a", "kind": "advice", "equality": true}, ...],
      "gates": [{"name": "factorial", "selector": "q_0",
                 "constraints": [{"label": ..., "expr": ..., "tree": {...}}]}],
      "table": {"n_rows": 6, "advice": {...}, "selectors": {...}, "instance": [...]},
      "copy_constraints": [{"left": {...}, "right": {...}}, ...]
    }
"""

import json
from pathlib import Path
from typing import Union

from protocol.circuit import Circuit
from protocol.data import AssignedTable


def export_circuit(circuit: Circuit, table: AssignedTable) -> dict:
    """Describe a configured circuit and one of its assigned tables."""
    schema = circuit.schema
    return {
        "circuit": circuit.config.to_dict(),
        "columns": [
            {"name": c.name, "kind": c.kind.value, "equality": schema.has_equality(c)}
            for c in schema.columns
        ],
        "gates": [gate.to_dict() for gate in circuit.gates],
        "table": table.to_dict(),
        "copy_constraints": [c.to_dict() for c in table.copy_constraints],
    }


def write_export(circuit: Circuit, table: AssignedTable, path: Union[str, Path]) -> Path:
    """Write export_circuit() to `path` as JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(export_circuit(circuit, table), f, indent=2)
    return path
