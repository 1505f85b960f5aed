"""Tests for column schema declaration."""

import pytest

from protocol.errors import SchemaError
from protocol.schema import ColumnKind, declare_schema


class TestDeclareSchema:
    """Shape of the declared schema."""

    def test_default_shape(self) -> None:
        schema = declare_schema()
        assert [c.name for c in schema.advice] == ['col_a', 'col_b']
        assert schema.instance.name == 'instance'
        assert [c.name for c in schema.selectors] == ['q_0']

    def test_column_kinds(self) -> None:
        schema = declare_schema()
        assert all(c.kind == ColumnKind.ADVICE for c in schema.advice)
        assert schema.instance.kind == ColumnKind.INSTANCE
        assert all(c.kind == ColumnKind.SELECTOR for c in schema.selectors)

    def test_equality_enabled_on_advice_and_instance(self) -> None:
        schema = declare_schema()
        for col in schema.advice:
            assert schema.has_equality(col)
        assert schema.has_equality(schema.instance)
        assert not schema.has_equality(schema.selectors[0])

    def test_extra_columns(self) -> None:
        schema = declare_schema(num_advice=3, num_selectors=2)
        assert len(schema.advice) == 3
        assert len(schema.selectors) == 2
        assert len(schema.columns) == 6

    def test_columns_are_immutable(self) -> None:
        schema = declare_schema()
        with pytest.raises(AttributeError):
            schema.advice[0].kind = ColumnKind.INSTANCE


class TestSchemaErrors:
    """Malformed declarations are rejected at configuration time."""

    @pytest.mark.parametrize("num_advice", [0, 1])
    def test_too_few_advice_columns(self, num_advice) -> None:
        with pytest.raises(SchemaError):
            declare_schema(num_advice=num_advice)

    def test_no_selector(self) -> None:
        with pytest.raises(SchemaError):
            declare_schema(num_selectors=0)

    def test_name_collision(self) -> None:
        with pytest.raises(SchemaError):
            declare_schema(instance_name='col_a')

    def test_unknown_column_lookup(self) -> None:
        schema = declare_schema()
        assert schema.column('col_b') is schema.advice[1]
        with pytest.raises(SchemaError):
            schema.column('col_z')
