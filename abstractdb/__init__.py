# ============================================================================
# ABSTRACTDB PACKAGE
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Package initialization
# PURPOSE: Export the compiler entry points, options and output models
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================

from abstractdb.__version__ import __version__
from abstractdb.config import CompilerOptions, NamingDefaults
from abstractdb.contracts import ColumnTypeDescriptor, DiagnosticCode, IndexKind, SchemaInputError
from abstractdb.models import AbstractDatabase, Column, ForeignKey, Index, Table
from abstractdb.schema import (
    CollectingDiagnosticSink,
    Diagnostic,
    LoggingDiagnosticSink,
    generate_abstract_database,
    generate_abstract_database_async,
)

__all__ = [
    "__version__",
    # Entry points
    "generate_abstract_database",
    "generate_abstract_database_async",
    # Options
    "CompilerOptions",
    "NamingDefaults",
    # Contracts
    "ColumnTypeDescriptor",
    "DiagnosticCode",
    "IndexKind",
    "SchemaInputError",
    # Models
    "AbstractDatabase",
    "Table",
    "Column",
    "ForeignKey",
    "Index",
    # Diagnostics
    "Diagnostic",
    "LoggingDiagnosticSink",
    "CollectingDiagnosticSink",
]
