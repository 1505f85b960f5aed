"""Column schema: the fixed shape of a circuit table.

A circuit table has three kinds of columns:

- advice: private witness lanes filled by the witness module
- instance: the public lane supplied by the caller
- selector: boolean lanes that switch a gate on or off per row

The schema is declared once per circuit definition and never changes; every
table synthesised for that circuit uses the same columns.

Example:
    schema = declare_schema(num_advice=2)
    product, countdown = schema.advice
    q = schema.selectors[0]
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple

from protocol.errors import SchemaError

# Minimum advice columns for the factorial recurrence: running product + countdown
MIN_ADVICE_COLUMNS = 2


class ColumnKind(Enum):
    ADVICE = "advice"
    INSTANCE = "instance"
    SELECTOR = "selector"


@dataclass(frozen=True)
class Column:
    """A named lane in the table. Immutable once declared."""
    name: str
    kind: ColumnKind
    index: int = 0

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class CircuitSchema:
    """Declared columns of a circuit.

    Attributes:
        advice: Private columns, in declaration order
        instance: The public column
        selectors: Boolean row selectors
        equality_columns: Columns that may take part in copy constraints
    """
    advice: Tuple[Column, ...]
    instance: Column
    selectors: Tuple[Column, ...]
    equality_columns: frozenset = field(default_factory=frozenset)

    @property
    def columns(self) -> Tuple[Column, ...]:
        return self.advice + (self.instance,) + self.selectors

    def column(self, name: str) -> Column:
        """Look up a declared column by name."""
        by_name: Dict[str, Column] = {c.name: c for c in self.columns}
        if name not in by_name:
            raise SchemaError(
                f"Unknown column '{name}'. Declared: {list(by_name.keys())}"
            )
        return by_name[name]

    def has_equality(self, column: Column) -> bool:
        return column in self.equality_columns


def _advice_names(num_advice: int) -> Tuple[str, ...]:
    # col_a, col_b, ... like the layout diagram
    return tuple(f"col_{chr(ord('a') + i)}" if i < 26 else f"col_{i}"
                 for i in range(num_advice))


def declare_schema(num_advice: int = MIN_ADVICE_COLUMNS, num_selectors: int = 1,
                   instance_name: str = "instance") -> CircuitSchema:
    """Declare the columns of the factorial circuit.

    Args:
        num_advice: Number of private columns (at least 2)
        num_selectors: Number of selector columns (at least 1)
        instance_name: Name of the public column

    Returns:
        CircuitSchema with equality enabled on every advice column and on the
        instance column

    Raises:
        SchemaError: If fewer than two advice columns or no selector is
            requested, or if column names collide
    """
    if num_advice < MIN_ADVICE_COLUMNS:
        raise SchemaError(
            f"Need at least {MIN_ADVICE_COLUMNS} advice columns "
            f"(running product and countdown), got {num_advice}"
        )
    if num_selectors < 1:
        raise SchemaError(f"Need at least one selector column, got {num_selectors}")

    advice = tuple(Column(name, ColumnKind.ADVICE, i)
                   for i, name in enumerate(_advice_names(num_advice)))
    instance = Column(instance_name, ColumnKind.INSTANCE, 0)
    selectors = tuple(Column(f"q_{i}", ColumnKind.SELECTOR, i) for i in range(num_selectors))

    names = [c.name for c in advice + (instance,) + selectors]
    if len(set(names)) != len(names):
        raise SchemaError(f"Column names must be unique, got {names}")

    return CircuitSchema(
        advice=advice,
        instance=instance,
        selectors=selectors,
        equality_columns=frozenset(advice + (instance,)),
    )
