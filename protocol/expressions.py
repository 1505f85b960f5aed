"""Symbolic polynomial expressions over table columns.

Gates are declared as expression trees whose leaves are column queries at a
row rotation (current row, next row) and field constants. The tree is kept
symbolic so it can be:

- evaluated against a ConstraintContext (one row, or the whole table at once)
- inspected for degree and queried rotations
- exported for a proving backend

Example:
    a = ColumnQuery(col_a, Rotation.CUR)
    c = ColumnQuery(col_a, Rotation.NEXT)
    b = ColumnQuery(col_b, Rotation.CUR)
    poly = c - a * b          # Difference(c, Product(a, b))
    poly.evaluate(ctx)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, FrozenSet, Tuple, Union

from primitives.field import GOLDILOCKS_PRIME, to_field
from protocol.errors import SchemaError
from protocol.schema import Column

if TYPE_CHECKING:
    from constraints.base import ConstraintContext


class Rotation(IntEnum):
    """Row offset of a query relative to the row being checked."""
    PREV = -1
    CUR = 0
    NEXT = 1


Operand = Union["Expression", int]


def _lift(value: Operand) -> "Expression":
    if isinstance(value, Expression):
        return value
    if isinstance(value, int):
        return Constant(value)
    raise TypeError(f"Cannot use {type(value).__name__} in a gate expression")


class Expression(ABC):
    """Node of a polynomial expression tree."""

    @abstractmethod
    def evaluate(self, ctx: 'ConstraintContext'):
        """Evaluate against a context.

        Returns:
            Row context: a single field element
            Table context: a field array with one entry per row
        """
        pass

    @abstractmethod
    def degree(self) -> int:
        pass

    @abstractmethod
    def queries(self) -> FrozenSet['ColumnQuery']:
        """All column queries appearing in the expression."""
        pass

    @abstractmethod
    def to_dict(self) -> dict:
        pass

    def rotations(self) -> FrozenSet[int]:
        return frozenset(int(q.rotation) for q in self.queries())

    def __add__(self, other: Operand) -> 'Expression':
        return Sum(self, _lift(other))

    def __radd__(self, other: Operand) -> 'Expression':
        return Sum(_lift(other), self)

    def __sub__(self, other: Operand) -> 'Expression':
        return Difference(self, _lift(other))

    def __rsub__(self, other: Operand) -> 'Expression':
        return Difference(_lift(other), self)

    def __mul__(self, other: Operand) -> 'Expression':
        return Product(self, _lift(other))

    def __rmul__(self, other: Operand) -> 'Expression':
        return Product(_lift(other), self)

    def __neg__(self) -> 'Expression':
        return Negated(self)


@dataclass(frozen=True, eq=True)
class Constant(Expression):
    value: int

    def __post_init__(self):
        # Canonical representative so equal field constants compare equal
        object.__setattr__(self, "value", int(self.value) % GOLDILOCKS_PRIME)

    def evaluate(self, ctx):
        return to_field(self.value)

    def degree(self) -> int:
        return 0

    def queries(self):
        return frozenset()

    def to_dict(self) -> dict:
        return {"type": "constant", "value": self.value}

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, eq=True)
class ColumnQuery(Expression):
    """Value of `column` at `current row + rotation`."""
    column: Column
    rotation: Rotation = Rotation.CUR

    def evaluate(self, ctx):
        name = self.column.name
        if self.rotation == Rotation.CUR:
            return ctx.col(name)
        if self.rotation == Rotation.NEXT:
            return ctx.next_col(name)
        return ctx.prev_col(name)

    def degree(self) -> int:
        return 1

    def queries(self):
        return frozenset([self])

    def to_dict(self) -> dict:
        return {
            "type": "query",
            "column": self.column.name,
            "kind": self.column.kind.value,
            "rotation": int(self.rotation),
        }

    def __str__(self) -> str:
        if self.rotation == Rotation.CUR:
            return self.column.name
        if self.rotation == Rotation.NEXT:
            return f"{self.column.name}'"
        return f"{self.column.name}[-1]"


@dataclass(frozen=True, eq=True)
class Sum(Expression):
    lhs: Expression
    rhs: Expression

    def evaluate(self, ctx):
        return self.lhs.evaluate(ctx) + self.rhs.evaluate(ctx)

    def degree(self) -> int:
        return max(self.lhs.degree(), self.rhs.degree())

    def queries(self):
        return self.lhs.queries() | self.rhs.queries()

    def to_dict(self) -> dict:
        return {"type": "sum", "lhs": self.lhs.to_dict(), "rhs": self.rhs.to_dict()}

    def __str__(self) -> str:
        return f"({self.lhs} + {self.rhs})"


@dataclass(frozen=True, eq=True)
class Difference(Expression):
    lhs: Expression
    rhs: Expression

    def evaluate(self, ctx):
        return self.lhs.evaluate(ctx) - self.rhs.evaluate(ctx)

    def degree(self) -> int:
        return max(self.lhs.degree(), self.rhs.degree())

    def queries(self):
        return self.lhs.queries() | self.rhs.queries()

    def to_dict(self) -> dict:
        return {"type": "difference", "lhs": self.lhs.to_dict(), "rhs": self.rhs.to_dict()}

    def __str__(self) -> str:
        return f"({self.lhs} - {self.rhs})"


@dataclass(frozen=True, eq=True)
class Product(Expression):
    lhs: Expression
    rhs: Expression

    def evaluate(self, ctx):
        return self.lhs.evaluate(ctx) * self.rhs.evaluate(ctx)

    def degree(self) -> int:
        return self.lhs.degree() + self.rhs.degree()

    def queries(self):
        return self.lhs.queries() | self.rhs.queries()

    def to_dict(self) -> dict:
        return {"type": "product", "lhs": self.lhs.to_dict(), "rhs": self.rhs.to_dict()}

    def __str__(self) -> str:
        return f"{self.lhs} * {self.rhs}"


@dataclass(frozen=True, eq=True)
class Negated(Expression):
    inner: Expression

    def evaluate(self, ctx):
        return -self.inner.evaluate(ctx)

    def degree(self) -> int:
        return self.inner.degree()

    def queries(self):
        return self.inner.queries()

    def to_dict(self) -> dict:
        return {"type": "negated", "inner": self.inner.to_dict()}

    def __str__(self) -> str:
        return f"-{self.inner}"


# --- Gates ---

@dataclass(frozen=True)
class Gate:
    """A named set of polynomials that must vanish wherever `selector` is 1.

    Each polynomial is enforced on its own, never folded into a single sum.

    Attributes:
        name: Gate name used in violation reports
        selector: Selector column switching the gate on per row
        polys: Polynomials required to evaluate to zero
        labels: Human-readable name for each polynomial
    """
    name: str
    selector: Column
    polys: Tuple[Expression, ...]
    labels: Tuple[str, ...] = ()

    def __post_init__(self):
        if not self.polys:
            raise SchemaError(f"Gate '{self.name}' declares no polynomials")
        if self.labels and len(self.labels) != len(self.polys):
            raise SchemaError(
                f"Gate '{self.name}': {len(self.labels)} labels for {len(self.polys)} polynomials"
            )

    def label(self, index: int) -> str:
        if self.labels:
            return self.labels[index]
        return f"{self.name}[{index}]"

    def constraints(self) -> Tuple[Expression, ...]:
        """Selector-multiplied polynomials, the form a proving backend commits to."""
        q = ColumnQuery(self.selector, Rotation.CUR)
        return tuple(q * poly for poly in self.polys)

    def queries(self) -> FrozenSet[ColumnQuery]:
        result = frozenset()
        for poly in self.polys:
            result = result | poly.queries()
        return result

    @property
    def max_rotation(self) -> int:
        """Largest forward row offset read by the gate (0 if none)."""
        return max([0] + [int(q.rotation) for q in self.queries()])

    @property
    def min_rotation(self) -> int:
        """Largest backward row offset read by the gate, as a non-positive int."""
        return min([0] + [int(q.rotation) for q in self.queries()])

    def degree(self) -> int:
        # +1 for the selector factor
        return 1 + max(poly.degree() for poly in self.polys)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "selector": self.selector.name,
            "constraints": [
                {"label": self.label(i), "expr": str(poly), "tree": poly.to_dict()}
                for i, poly in enumerate(self.polys)
            ],
        }
