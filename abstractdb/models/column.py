# ============================================================================
# COLUMN MODEL
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Core model - Table column and foreign key reference
# PURPOSE: Describe one storage column produced from a schema field
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: ForeignKey, Column
# DEPENDENCIES: pydantic
# ============================================================================
"""
Column Model

A Column is created once by the field descriptor resolver and is not
modified afterwards, except that the foreign key backfill pass fills in
ForeignKey.table_name / column_name.

Serialized with by_alias=True so downstream emitters receive the
camelCase keys (tableName, columnName, defaultValue).
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ForeignKey(BaseModel):
    """
    Reference from a column to a field of another schema type.

    type/field name the source schema type and field. table_name and
    column_name stay None until the backfill pass resolves them; a
    reference that stays unresolved is kept as-is (dangling).
    """
    type: str = Field(..., description="Referenced source type name")
    field: str = Field(..., description="Referenced source field name")
    table_name: Optional[str] = Field(default=None, alias="tableName")
    column_name: Optional[str] = Field(default=None, alias="columnName")

    model_config = {"frozen": False, "populate_by_name": True}

    @property
    def is_resolved(self) -> bool:
        """Check if the backfill pass found the target table and column."""
        return self.table_name is not None and self.column_name is not None


class Column(BaseModel):
    """
    A single table column.

    Attributes:
        name: Column name, unique within the owning table
        comment: Escaped, annotation-free field documentation
        annotations: Raw parsed annotations of the source field
        type: Type tag ("uuid", "text", "enum", "json", ...)
        args: Type-specific parameters (e.g. enum members)
        nullable: False when the field type is wrapped in non-null
        foreign: Reference to another type's field, if any
        default_value: Value of the default annotation, if any
    """
    name: str
    comment: Optional[str] = None
    annotations: Dict[str, Any] = Field(default_factory=dict)
    type: str
    args: List[Any] = Field(default_factory=list)
    nullable: bool = True
    foreign: Optional[ForeignKey] = None
    default_value: Optional[Any] = Field(default=None, alias="defaultValue")

    model_config = {"frozen": False, "populate_by_name": True}


__all__ = ["ForeignKey", "Column"]
