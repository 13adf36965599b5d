# ============================================================================
# TABLE MODEL
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Core model - Table and index descriptions
# PURPOSE: Describe one table (declared or synthesized join table)
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: Index, Table
# DEPENDENCIES: pydantic
# ============================================================================
"""
Table Model

A Table is created once per qualifying object type, or lazily for a
many-to-many join. Tables are never removed during a build.

Key concept:
- columns = ordered output (declaration order)
- column_map = lookup index, keyed by SOURCE FIELD NAME for declared
  tables (used by the foreign key backfill) and by column name for
  join tables
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from abstractdb.models.column import Column


class Index(BaseModel):
    """
    Index definition. Composite indexes list several columns.

    type is only set for general indexes (e.g. "gin", "btree").
    """
    name: str = Field(..., max_length=63)
    type: Optional[str] = None
    columns: List[str] = Field(default_factory=list)

    model_config = {"frozen": False}


class Table(BaseModel):
    """
    Abstract table description.

    primaries holds at most one index; the index accumulator evicts the
    oldest entry when another one is added.
    """
    name: str
    comment: Optional[str] = None
    annotations: Dict[str, Any] = Field(default_factory=dict)
    columns: List[Column] = Field(default_factory=list)
    column_map: Dict[str, Column] = Field(default_factory=dict, exclude=True)
    indexes: List[Index] = Field(default_factory=list)
    primaries: List[Index] = Field(default_factory=list)
    uniques: List[Index] = Field(default_factory=list)

    model_config = {"frozen": False}

    def add_column(self, key: str, column: Column) -> Column:
        """Append a column and index it under key."""
        self.columns.append(column)
        self.column_map[key] = column
        return column

    def get_column(self, name: str) -> Optional[Column]:
        """Find a column by its column name (not its source field name)."""
        for column in self.columns:
            if column.name == name:
                return column
        return None

    @property
    def primary_key(self) -> Optional[Index]:
        """The table's primary index, if any."""
        return self.primaries[0] if self.primaries else None


__all__ = ["Index", "Table"]
