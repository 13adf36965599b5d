# ============================================================================
# FOREIGN KEY RESOLVER
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Core - Post-pass reference backfill
# PURPOSE: Fill ForeignKey.table_name/column_name once all tables exist
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: fill_foreign_keys
# DEPENDENCIES: none
# ============================================================================
"""
Foreign Key Resolver

Runs once, after join tables have been appended. A reference whose target
table or column is missing is reported and left unresolved; the database
is still returned complete.
"""

from abstractdb.contracts import DiagnosticCode
from abstractdb.logging import ComponentType, get_logger
from abstractdb.models import AbstractDatabase
from abstractdb.schema.diagnostics import Diagnostic, DiagnosticSink

logger = get_logger(__name__, ComponentType.FOREIGN_KEYS)


def fill_foreign_keys(database: AbstractDatabase, diagnostics: DiagnosticSink) -> int:
    """
    Put the correct values in foreign.table_name and foreign.column_name.

    Args:
        database: Database with its complete table set
        diagnostics: Sink for unresolved references

    Returns:
        Number of references resolved
    """
    # table_map and column_map keys are the source type and field names
    owners = {id(owned): key for key, owned in database.table_map.items()}

    resolved = 0
    for table in database.tables:
        type_name = owners.get(id(table), table.name)
        fields = {id(owned): key for key, owned in table.column_map.items()}
        for column in table.columns:
            foreign = column.foreign
            if foreign is None or foreign.is_resolved:
                continue
            field_name = fields.get(id(column), column.name)

            foreign_table = database.table_map.get(foreign.type)
            if foreign_table is None:
                diagnostics.report(Diagnostic(
                    code=DiagnosticCode.FOREIGN_TABLE_NOT_FOUND,
                    message=f"Foreign key {table.name}.{column.name}: Table not found for type {foreign.type}.",
                    type_name=type_name,
                    field_name=field_name,
                ))
                continue

            foreign_column = foreign_table.column_map.get(foreign.field)
            if foreign_column is None:
                diagnostics.report(Diagnostic(
                    code=DiagnosticCode.FOREIGN_COLUMN_NOT_FOUND,
                    message=(
                        f"Foreign key {table.name}.{column.name}: Column not found for field "
                        f"{foreign.field} in table {foreign_table.name}."
                    ),
                    type_name=type_name,
                    field_name=field_name,
                ))
                continue

            foreign.table_name = foreign_table.name
            foreign.column_name = foreign_column.name
            resolved += 1

    logger.debug(f"Resolved {resolved} foreign keys")
    return resolved


__all__ = ["fill_foreign_keys"]
