"""Factorial circuit constraint declaration.

Layout:

    col_a   |   col_b   |   instance  |  q_0
      a     |     b     |    seed     |   1
      c     |     d     |   expected  |   1
     ....   |   ....    |             |  ...
    result  |   ....    |             |   0

col_a holds the running product, col_b the countdown. At every row where
q_0 is on, with a, b at the current row and c, d at the next row:

    b - (d + 1) == 0        countdown decrements by exactly one
    c - (a * b) == 0        next product = current product * current countdown

The two polynomials are separate constraints of the same gate.
"""

from typing import List

from protocol.errors import SchemaError
from protocol.expressions import ColumnQuery, Gate, Rotation
from protocol.schema import CircuitSchema
from .base import ConstraintModule

GATE_NAME = "factorial"


class FactorialConstraints(ConstraintModule):
    """Gate declaration for the descending factorial recurrence."""

    def gates(self, schema: CircuitSchema) -> List[Gate]:
        # Every advice cell must be read by the gate, and every selector must switch it
        if len(schema.advice) != 2 or len(schema.selectors) != 1:
            raise SchemaError(
                f"Factorial gate constrains exactly 2 advice columns and 1 selector, "
                f"got {len(schema.advice)} advice and {len(schema.selectors)} selector(s)"
            )
        col_a, col_b = schema.advice
        q = schema.selectors[0]

        a = ColumnQuery(col_a, Rotation.CUR)
        b = ColumnQuery(col_b, Rotation.CUR)
        c = ColumnQuery(col_a, Rotation.NEXT)
        d = ColumnQuery(col_b, Rotation.NEXT)

        return [
            Gate(
                name=GATE_NAME,
                selector=q,
                polys=(
                    b - (d + 1),
                    c - (a * b),
                ),
                labels=("countdown", "product"),
            )
        ]
