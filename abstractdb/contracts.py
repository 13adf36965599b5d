# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Foundation - Core enums and base contracts
# PURPOSE: Define index kinds, diagnostic codes, and the column type contract
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: IndexKind, DiagnosticCode, ColumnTypeDescriptor, SchemaInputError
# DEPENDENCIES: enum, pydantic
# ============================================================================
"""
Base contracts for the abstract database compiler.

These cross the boundary between the compiler and its pluggable
collaborators:
- Scalar resolvers return a ColumnTypeDescriptor
- Diagnostic sinks receive DiagnosticCode-tagged reports
- Downstream DDL emitters read IndexKind-grouped index lists
"""

from enum import Enum
from typing import Any, List

from pydantic import BaseModel, Field


# ============================================================================
# ENUMS
# ============================================================================

class IndexKind(str, Enum):
    """
    Index groups accumulated on every table.

    The value doubles as the annotation key (``@db.index``, ``@db.primary``,
    ``@db.unique``).
    """
    INDEX = "index"
    PRIMARY = "primary"
    UNIQUE = "unique"


class DiagnosticCode(str, Enum):
    """
    Reasons a field, relation or foreign key was dropped or left dangling.

    Field-level codes are reported while tables are built; reference codes
    are reported by the foreign key backfill pass.
    """
    # Field level
    UNSUPPORTED_SCALAR = "unsupported_scalar"
    UNSUPPORTED_LIST = "unsupported_list"
    UNSUPPORTED_TYPE = "unsupported_type"
    FOREIGN_TYPE_NOT_FOUND = "foreign_type_not_found"
    FOREIGN_TYPE_NOT_OBJECT = "foreign_type_not_object"
    FOREIGN_FIELD_NOT_FOUND = "foreign_field_not_found"
    FOREIGN_FIELD_UNRESOLVED = "foreign_field_unresolved"

    # Backfill pass
    FOREIGN_TABLE_NOT_FOUND = "foreign_table_not_found"
    FOREIGN_COLUMN_NOT_FOUND = "foreign_column_not_found"

    def is_reference(self) -> bool:
        """Check if this code comes from the foreign key backfill pass."""
        return self in (DiagnosticCode.FOREIGN_TABLE_NOT_FOUND, DiagnosticCode.FOREIGN_COLUMN_NOT_FOUND)


# ============================================================================
# BASE DATA CONTRACTS
# ============================================================================

class ColumnTypeDescriptor(BaseModel):
    """
    Storage representation of a field, independent of naming and nullability.

    Returned by scalar resolvers and copied onto referencing columns so a
    foreign key column always stores the same type as its target.
    """
    type: str = Field(..., min_length=1, description="Column type tag, e.g. 'uuid', 'text', 'enum'")
    args: List[Any] = Field(default_factory=list, description="Type-specific parameters")

    model_config = {"frozen": False}


# ============================================================================
# ERRORS
# ============================================================================

class SchemaInputError(ValueError):
    """
    Raised at the API boundary when the input is not a usable schema.

    Problems inside a valid schema are never raised; they are reported
    through the diagnostic sink instead.
    """


__all__ = [
    "IndexKind",
    "DiagnosticCode",
    "ColumnTypeDescriptor",
    "SchemaInputError",
]
