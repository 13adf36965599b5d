# ============================================================================
# SCHEMA MODULE
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Core - Schema compilation
# PURPOSE: Compile annotated GraphQL schemas into abstract relational schemas
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================

from abstractdb.schema.annotations import AnnotationReader, DefaultAnnotationReader
from abstractdb.schema.diagnostics import (
    Diagnostic,
    DiagnosticSink,
    LoggingDiagnosticSink,
    CollectingDiagnosticSink,
)
from abstractdb.schema.foreign_keys import fill_foreign_keys
from abstractdb.schema.generator import (
    AbstractDatabaseBuilder,
    generate_abstract_database,
    generate_abstract_database_async,
    load_schema,
)
from abstractdb.schema.indexes import IndexAccumulator, INDEX_SPECS
from abstractdb.schema.join_tables import JoinTableSynthesizer
from abstractdb.schema.naming import NameNormalizer, escape_comment, truncate_identifier
from abstractdb.schema.scalars import (
    FieldRef,
    ScalarMap,
    TYPE_MAP,
    get_column_type_from_scalar,
)

__all__ = [
    # Generator
    "AbstractDatabaseBuilder",
    "generate_abstract_database",
    "generate_abstract_database_async",
    "load_schema",
    # Collaborators
    "AnnotationReader",
    "DefaultAnnotationReader",
    "FieldRef",
    "ScalarMap",
    "TYPE_MAP",
    "get_column_type_from_scalar",
    # Diagnostics
    "Diagnostic",
    "DiagnosticSink",
    "LoggingDiagnosticSink",
    "CollectingDiagnosticSink",
    # Components
    "IndexAccumulator",
    "INDEX_SPECS",
    "JoinTableSynthesizer",
    "fill_foreign_keys",
    # Utilities
    "NameNormalizer",
    "escape_comment",
    "truncate_identifier",
]
