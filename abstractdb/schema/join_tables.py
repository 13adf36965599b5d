# ============================================================================
# JOIN TABLE SYNTHESIZER
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Core - Many-to-many relation handling
# PURPOSE: Detect list-of-object relations and build shared join tables
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: JoinTableSynthesizer
# DEPENDENCIES: graphql-core
# ============================================================================
"""
Join Table Synthesizer

A list-of-object field never becomes a column on its own table. Instead:

    type User { group: [Group] }       ->  join table
    type Group { user: [User] }            group_user_join_user_group

The reciprocal field defaults to the owning table name ("user" on Group)
and can be named explicitly with @db.manyToMany. Each side contributes
one column when it is processed, so the pair above yields exactly one
join table with two columns and two single-column indexes. A self-referential list (type User { friends: [User] })
contributes both columns at once; the second gets the collision suffix.

Relations are skipped silently when the reciprocal field is absent, when
it is not a list, or when it points elsewhere with @db.foreign. This lets
a schema declare one-sided lists without producing tables or noise.

Join tables are queued and appended to the database only after every
declared table has been built.
"""

from typing import Callable, Dict, List, Optional

from graphql import (
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLOutputType,
    is_list_type,
    is_non_null_type,
    is_object_type,
)

from abstractdb.contracts import DiagnosticCode
from abstractdb.logging import ComponentType, get_logger
from abstractdb.models import AbstractDatabase, Column, Index, Table
from abstractdb.schema.annotations import AnnotationReader, get_str
from abstractdb.schema.diagnostics import Diagnostic, DiagnosticSink
from abstractdb.schema.naming import NameNormalizer, escape_comment
from abstractdb.schema.scalars import FieldRef

logger = get_logger(__name__, ComponentType.JOIN_TABLES)

FieldResolver = Callable[..., Optional[Column]]


def unwrap_non_null(type_: GraphQLOutputType) -> GraphQLOutputType:
    """Strip one non-null wrapper, if present."""
    return type_.of_type if is_non_null_type(type_) else type_


class JoinTableSynthesizer:
    """
    Creates and extends join tables for many-to-many relations.

    Args:
        type_map: Schema type map (name -> named type)
        database: Database under construction; join tables are registered
            in its table_map as soon as they are created
        names: Active naming policy
        reader: Annotation reader
        namespace: Annotation namespace
        diagnostics: Diagnostic sink
        resolve_field: The builder's field descriptor resolver
    """

    def __init__(
        self,
        type_map: Dict[str, GraphQLNamedType],
        database: AbstractDatabase,
        names: NameNormalizer,
        reader: AnnotationReader,
        namespace: str,
        diagnostics: DiagnosticSink,
        resolve_field: FieldResolver,
    ):
        self.type_map = type_map
        self.database = database
        self.names = names
        self.reader = reader
        self.namespace = namespace
        self.diagnostics = diagnostics
        self.resolve_field = resolve_field
        self.queue: List[Table] = []

    def _report(self, code: DiagnosticCode, field: FieldRef, message: str) -> None:
        self.diagnostics.report(Diagnostic(
            code=code,
            message=message,
            type_name=field.owner,
            field_name=field.name,
        ))

    def synthesize(
        self,
        table: Table,
        field: FieldRef,
        of_type: GraphQLObjectType,
        annotations: dict,
    ) -> Optional[Table]:
        """
        Handle one list-of-object field of the owning type.

        Args:
            table: Owning table (its name seeds the default reciprocal field)
            field: The list field
            of_type: Unwrapped element type
            annotations: Parsed annotations of the list field

        Returns:
            The join table that was created or extended, or None if skipped
        """
        naming = self.names.naming
        on_same_type = field.owner == of_type.name

        foreign_type = self.type_map.get(of_type.name)
        if foreign_type is None:
            self._report(
                DiagnosticCode.FOREIGN_TYPE_NOT_FOUND, field,
                f"Foreign type {of_type.name} not found on field {field.path}.",
            )
            return None
        if not is_object_type(foreign_type):
            self._report(
                DiagnosticCode.FOREIGN_TYPE_NOT_OBJECT, field,
                f"Foreign type {of_type.name} is not Object type on field {field.path}.",
            )
            return None

        # Reciprocal field
        if on_same_type:
            foreign_key = field.name
        else:
            foreign_key = get_str(annotations, "manyToMany") or table.name.lower()
        foreign_field = foreign_type.fields.get(foreign_key)
        if foreign_field is None:
            return None

        foreign_annotations = self.reader.parse(self.namespace, foreign_field.description)
        foreign_annotation = foreign_annotations.get("foreign")
        if foreign_annotation and foreign_annotation != field.name:
            logger.debug(
                f"Skipping {field.path}: {foreign_type.name}.{foreign_key} "
                f"points to {foreign_annotation}"
            )
            return None

        if not is_list_type(unwrap_non_null(foreign_field.type)):
            return None

        join_table = self._get_or_create(table, field, foreign_type, foreign_key, annotations)

        # Columns
        if on_same_type:
            key = get_str(annotations, "manyToMany") or naming.identity_field
            identity_field = foreign_type.fields.get(key)
            if identity_field is None:
                self._report(
                    DiagnosticCode.FOREIGN_FIELD_NOT_FOUND, field,
                    f"Foreign field {key} on type {of_type.name} not found on field {field.path}.",
                )
                return None
            descriptor = self.resolve_field(FieldRef(of_type.name, key, identity_field), of_type)
            if descriptor is None:
                return None
            descriptors = [descriptor, descriptor.model_copy(deep=True)]
        else:
            descriptor = self.resolve_field(FieldRef(foreign_type.name, foreign_key, foreign_field), of_type)
            if descriptor is None:
                return None
            descriptors = [descriptor]

        for descriptor in descriptors:
            while descriptor.name in join_table.column_map:
                descriptor.name += naming.collision_suffix
            join_table.add_column(descriptor.name, descriptor)

        self._add_index(join_table, [d.name for d in descriptors])
        return join_table

    def _get_or_create(
        self,
        table: Table,
        field: FieldRef,
        foreign_type: GraphQLObjectType,
        foreign_key: str,
        annotations: dict,
    ) -> Table:
        default_name = self.names.join_table_name(
            f"{field.owner}_{field.name}",
            f"{foreign_type.name}_{foreign_key}",
        )
        table_name = get_str(annotations, "table") or default_name

        join_table = self.database.table_map.get(table_name)
        if join_table is not None:
            return join_table

        comment = escape_comment(get_str(annotations, "tableComment")) or (
            f"[Auto] Join table between {field.path} and {foreign_type.name}.{foreign_key}"
        )
        join_table = Table(name=table_name, comment=comment, annotations={})
        self.queue.append(join_table)
        self.database.table_map[table_name] = join_table
        logger.debug(f"Created join table {table_name} for {field.path} (owner table {table.name})")
        return join_table

    def _add_index(self, join_table: Table, column_names: List[str]) -> Index:
        name = self.names.bounded(f"{join_table.name}_{'_'.join(column_names)}_index")
        for index in join_table.indexes:
            if index.name == name:
                index.columns.extend(c for c in column_names if c not in index.columns)
                return index
        index = Index(name=name, type=None, columns=list(column_names))
        join_table.indexes.append(index)
        return index

    def flush(self) -> List[Table]:
        """Append queued join tables to the database, in creation order."""
        flushed = list(self.queue)
        self.database.tables.extend(flushed)
        self.queue.clear()
        return flushed


__all__ = ["JoinTableSynthesizer", "unwrap_non_null"]
