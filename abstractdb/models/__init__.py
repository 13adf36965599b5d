# ============================================================================
# MODELS MODULE
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Model exports
# PURPOSE: Central export point for the abstract schema models
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Pydantic models describing the compiler output:
    AbstractDatabase -> Table -> Column -> ForeignKey
                             -> Index
"""

from abstractdb.models.column import ForeignKey, Column
from abstractdb.models.table import Index, Table
from abstractdb.models.database import AbstractDatabase

__all__ = [
    "ForeignKey",
    "Column",
    "Index",
    "Table",
    "AbstractDatabase",
]
