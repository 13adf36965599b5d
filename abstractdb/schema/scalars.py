# ============================================================================
# SCALAR TYPE RESOLUTION
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Core - Scalar to column type mapping
# PURPOSE: Built-in scalar table and the pluggable resolver contract
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: FieldRef, ScalarMap, TYPE_MAP, get_column_type_from_scalar, resolve_scalar
# DEPENDENCIES: graphql-core, pydantic
# ============================================================================
"""
Scalar Type Resolution

Resolution order for a scalar field (or any field with @db.type):
    1. User-supplied scalar_map (CompilerOptions.scalar_map)
    2. get_column_type_from_scalar (built-in table below)
    3. None -> the field is reported and dropped

A scalar_map receives the FieldRef, the unwrapped GraphQLScalarType (None
when the field is not a scalar but carries @db.type) and the parsed
annotations. It may return a ColumnTypeDescriptor, an equivalent dict,
or None to defer to the built-in table.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Union

from graphql import GraphQLField, GraphQLNamedType, GraphQLOutputType, GraphQLScalarType
from pydantic import ValidationError

from abstractdb.contracts import ColumnTypeDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldRef:
    """
    A schema field together with the names graphql-core keeps outside it.

    GraphQLField objects do not know their own name or owning type, so the
    compiler passes this around instead.
    """
    owner: str
    name: str
    field: GraphQLField

    @property
    def type(self) -> GraphQLOutputType:
        return self.field.type

    @property
    def description(self) -> Optional[str]:
        return self.field.description

    @property
    def path(self) -> str:
        return f"{self.owner}.{self.name}"


ScalarMap = Callable[
    [FieldRef, Optional[GraphQLScalarType], Dict[str, Any]],
    Union[ColumnTypeDescriptor, Dict[str, Any], None],
]


# ============================================================================
# TYPE MAPPING
# ============================================================================

TYPE_MAP: Dict[str, Tuple[str, tuple]] = {
    # GraphQL built-in scalars
    "ID": ("uuid", ()),
    "String": ("text", ()),
    "Int": ("integer", ()),
    "Float": ("float", ()),
    "Boolean": ("boolean", ()),

    # Common custom scalars
    "DateTime": ("timestamp", ()),
    "Date": ("date", ()),
    "Time": ("time", ()),
    "JSON": ("json", ()),
    "JSONObject": ("json", ()),
    "BigInt": ("bigInteger", ()),
}


def get_column_type_from_scalar(
    field: FieldRef,
    scalar_type: Optional[GraphQLNamedType],
    annotations: Dict[str, Any],
) -> Optional[ColumnTypeDescriptor]:
    """
    Built-in scalar resolver.

    Args:
        field: Field being resolved
        scalar_type: Unwrapped scalar type, or None
        annotations: Parsed field annotations

    Returns:
        ColumnTypeDescriptor, or None for unknown scalars
    """
    # Explicit @db.type wins, with optional @db.args
    if annotations.get("type"):
        args = annotations.get("args") or []
        if not isinstance(args, list):
            args = [args]
        return ColumnTypeDescriptor(type=str(annotations["type"]), args=args)

    if scalar_type is None:
        return None

    # Bounded string: @db.length: 255
    if scalar_type.name == "String" and annotations.get("length"):
        return ColumnTypeDescriptor(type="string", args=[annotations["length"]])

    mapped = TYPE_MAP.get(scalar_type.name)
    if mapped is None:
        return None

    type_tag, args = mapped
    return ColumnTypeDescriptor(type=type_tag, args=list(args))


def _coerce(result: Any, field: FieldRef) -> Optional[ColumnTypeDescriptor]:
    """Accept descriptor instances or plain dicts from user resolvers."""
    if result is None or isinstance(result, ColumnTypeDescriptor):
        return result
    try:
        return ColumnTypeDescriptor.model_validate(result)
    except ValidationError as e:
        logger.warning(f"Scalar map returned an invalid descriptor for {field.path}: {e}")
        return None


def resolve_scalar(
    field: FieldRef,
    scalar_type: Optional[GraphQLScalarType],
    annotations: Dict[str, Any],
    scalar_map: Optional[ScalarMap] = None,
) -> Optional[ColumnTypeDescriptor]:
    """Try the user scalar_map first, then the built-in table."""
    descriptor = None
    if scalar_map is not None:
        descriptor = _coerce(scalar_map(field, scalar_type, annotations), field)
    if descriptor is None:
        descriptor = get_column_type_from_scalar(field, scalar_type, annotations)
    return descriptor


__all__ = [
    "FieldRef",
    "ScalarMap",
    "TYPE_MAP",
    "get_column_type_from_scalar",
    "resolve_scalar",
]
