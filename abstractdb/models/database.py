# ============================================================================
# ABSTRACT DATABASE MODEL
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Core model - Compiler output
# PURPOSE: Own every table produced by a build
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: AbstractDatabase
# DEPENDENCIES: pydantic
# ============================================================================
"""
Abstract Database Model

The pure data artifact handed to a downstream DDL emitter.

Ordering:
    Declared tables appear in schema declaration order, followed by the
    synthesized join tables in the order they were discovered.

table_map keys:
    Declared tables are keyed by their SOURCE TYPE NAME; join tables are
    keyed by their table name.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from abstractdb.models.table import Table


class AbstractDatabase(BaseModel):
    """Ordered tables plus a lookup index used during foreign key resolution."""

    tables: List[Table] = Field(default_factory=list)
    table_map: Dict[str, Table] = Field(default_factory=dict, exclude=True)

    model_config = {"frozen": False}

    def get_table(self, name: str) -> Optional[Table]:
        """Find a table by its table name."""
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for downstream consumers (camelCase aliases, JSON-safe)."""
        return self.model_dump(by_alias=True, mode="json")


__all__ = ["AbstractDatabase"]
