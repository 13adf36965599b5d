# ============================================================================
# SCALAR RESOLVER TESTS
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Tests - Scalar to column type mapping
# PURPOSE: Verify built-in table, annotation overrides and scalar maps
# CREATED: 19 OCT 2026
# ============================================================================
"""
Scalar Resolver Tests

Run with:
    pytest tests/test_scalars.py -v
"""

import pytest
from graphql import (
    GraphQLBoolean,
    GraphQLField,
    GraphQLFloat,
    GraphQLID,
    GraphQLInt,
    GraphQLScalarType,
    GraphQLString,
)

from abstractdb.contracts import ColumnTypeDescriptor
from abstractdb.schema.scalars import FieldRef, get_column_type_from_scalar, resolve_scalar


# ============================================================================
# HELPERS
# ============================================================================

def _ref(type_=GraphQLString, description=None):
    return FieldRef("Thing", "value", GraphQLField(type_, description=description))


MONEY = GraphQLScalarType("Money")


# ============================================================================
# BUILT-IN TABLE
# ============================================================================

class TestBuiltinScalars:
    @pytest.mark.parametrize("scalar,expected", [
        (GraphQLID, "uuid"),
        (GraphQLString, "text"),
        (GraphQLInt, "integer"),
        (GraphQLFloat, "float"),
        (GraphQLBoolean, "boolean"),
        (GraphQLScalarType("DateTime"), "timestamp"),
        (GraphQLScalarType("JSON"), "json"),
    ])
    def test_mapping(self, scalar, expected):
        descriptor = get_column_type_from_scalar(_ref(scalar), scalar, {})
        assert descriptor.type == expected
        assert descriptor.args == []

    def test_unknown_scalar(self):
        assert get_column_type_from_scalar(_ref(MONEY), MONEY, {}) is None

    def test_no_scalar_without_annotation(self):
        assert get_column_type_from_scalar(_ref(), None, {}) is None

    def test_string_length(self):
        descriptor = get_column_type_from_scalar(_ref(), GraphQLString, {"length": 80})
        assert (descriptor.type, descriptor.args) == ("string", [80])


class TestTypeAnnotation:
    def test_type_wins(self):
        descriptor = get_column_type_from_scalar(_ref(), GraphQLString, {"type": "citext"})
        assert (descriptor.type, descriptor.args) == ("citext", [])

    def test_single_arg_wrapped(self):
        descriptor = get_column_type_from_scalar(_ref(), None, {"type": "string", "args": 40})
        assert descriptor.args == [40]

    def test_list_args(self):
        descriptor = get_column_type_from_scalar(_ref(MONEY), MONEY, {"type": "decimal", "args": [12, 4]})
        assert (descriptor.type, descriptor.args) == ("decimal", [12, 4])


# ============================================================================
# SCALAR MAP
# ============================================================================

class TestScalarMap:
    def test_descriptor_instance(self):
        def scalar_map(field, scalar_type, annotations):
            return ColumnTypeDescriptor(type="decimal", args=[10, 2])

        descriptor = resolve_scalar(_ref(MONEY), MONEY, {}, scalar_map)
        assert (descriptor.type, descriptor.args) == ("decimal", [10, 2])

    def test_dict_result(self):
        descriptor = resolve_scalar(_ref(MONEY), MONEY, {}, lambda f, s, a: {"type": "money"})
        assert descriptor.type == "money"

    def test_none_falls_back(self):
        descriptor = resolve_scalar(_ref(), GraphQLString, {}, lambda f, s, a: None)
        assert descriptor.type == "text"

    def test_invalid_result_falls_back(self):
        descriptor = resolve_scalar(_ref(), GraphQLString, {}, lambda f, s, a: {"type": ""})
        assert descriptor.type == "text"

    def test_receives_field(self):
        seen = []

        def scalar_map(field, scalar_type, annotations):
            seen.append((field.path, scalar_type.name, annotations))
            return None

        resolve_scalar(_ref(), GraphQLString, {"unique": True}, scalar_map)
        assert seen == [("Thing.value", "String", {"unique": True})]


class TestFieldRef:
    def test_properties(self):
        ref = _ref(description="A value")
        assert ref.path == "Thing.value"
        assert ref.type is GraphQLString
        assert ref.description == "A value"
