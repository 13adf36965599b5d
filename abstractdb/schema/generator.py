# ============================================================================
# ABSTRACT DATABASE GENERATOR
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Core - GraphQL schema to abstract relational schema
# PURPOSE: Build tables/columns/indexes/foreign keys from annotated types
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: AbstractDatabaseBuilder, generate_abstract_database, load_schema
# DEPENDENCIES: graphql-core, pydantic
# ============================================================================
"""
GraphQL to Abstract Database Generator.

Compiles a graphql-core schema into an AbstractDatabase. Object types are
the tables, their fields the columns; metadata comes from @db.*
annotations in the type and field descriptions.

Build phases:
    1. One table per object type (introspection/root types and @db.skip
       types excluded), fields resolved in declaration order
    2. Join tables for many-to-many lists appended after declared tables
    3. Foreign key backfill over the complete table set

Nothing inside the schema aborts a build: unsupported fields and dangling
references are reported to the diagnostic sink and dropped.

Usage:
    database = generate_abstract_database('''
        type User { id: ID! name: String! }
    ''')
    database.tables[0].name            # "user"
"""

from typing import Dict, Optional, Set, Tuple, Union

from graphql import (
    GraphQLError,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLOutputType,
    GraphQLSchema,
    build_schema,
    is_enum_type,
    is_list_type,
    is_non_null_type,
    is_object_type,
    is_scalar_type,
)

from abstractdb.config import CompilerOptions, get_defaults
from abstractdb.contracts import DiagnosticCode, SchemaInputError
from abstractdb.logging import ComponentType, get_logger, log_checkpoint, log_context
from abstractdb.models import AbstractDatabase, Column, ForeignKey, Table
from abstractdb.schema.annotations import AnnotationReader, DefaultAnnotationReader, get_str
from abstractdb.schema.diagnostics import Diagnostic, DiagnosticSink, LoggingDiagnosticSink
from abstractdb.schema.foreign_keys import fill_foreign_keys
from abstractdb.schema.indexes import IndexAccumulator
from abstractdb.schema.join_tables import JoinTableSynthesizer, unwrap_non_null
from abstractdb.schema.naming import NameNormalizer, escape_comment
from abstractdb.schema.scalars import FieldRef, resolve_scalar

logger = get_logger(__name__, ComponentType.COMPILER)

ROOT_TYPES = ("Query", "Mutation", "Subscription")


def load_schema(source: Union[GraphQLSchema, str]) -> GraphQLSchema:
    """
    Accept a built schema or SDL text.

    Raises:
        SchemaInputError: If the input is neither, or the SDL is invalid
    """
    if isinstance(source, GraphQLSchema):
        return source
    if isinstance(source, str):
        try:
            return build_schema(source)
        except (GraphQLError, TypeError) as e:
            raise SchemaInputError(f"Invalid schema definition: {e}") from e
    raise SchemaInputError(f"Expected GraphQLSchema or SDL string, got {type(source).__name__}")


class AbstractDatabaseBuilder:
    """
    Convert a GraphQL schema to an AbstractDatabase.

    Owner context (type, table) is passed explicitly through every
    resolver call; the builder keeps no "current table" state.
    """

    def __init__(
        self,
        schema: GraphQLSchema,
        options: Optional[CompilerOptions] = None,
        diagnostics: Optional[DiagnosticSink] = None,
        annotation_reader: Optional[AnnotationReader] = None,
    ):
        """
        Initialize the builder.

        Args:
            schema: graphql-core schema to compile
            options: Compiler options (default: environment-derived defaults)
            diagnostics: Sink for non-fatal problems (default: logs warnings)
            annotation_reader: Annotation parser (default: DefaultAnnotationReader)
        """
        defaults = get_defaults()
        self.schema = schema
        self.options = options or defaults.compiler
        self.names = NameNormalizer(self.options.normalize_names, defaults.naming)
        self.reader = annotation_reader or DefaultAnnotationReader()
        self.diagnostics = diagnostics or LoggingDiagnosticSink()
        self.namespace = self.options.annotation_namespace
        self.type_map: Dict[str, GraphQLNamedType] = schema.type_map
        self.indexes = IndexAccumulator(self.names)
        self.root_types = self._root_type_names()

        self.database = AbstractDatabase()
        self.join_tables = self._new_join_tables()
        # (type, field) pairs being mirrored; guards reference cycles
        self._resolving: Set[Tuple[str, str]] = set()

    def _new_join_tables(self) -> JoinTableSynthesizer:
        return JoinTableSynthesizer(
            type_map=self.type_map,
            database=self.database,
            names=self.names,
            reader=self.reader,
            namespace=self.namespace,
            diagnostics=self.diagnostics,
            resolve_field=self.get_field_descriptor,
        )

    def _root_type_names(self) -> Set[str]:
        roots = set(ROOT_TYPES)
        for root in (self.schema.query_type, self.schema.mutation_type, self.schema.subscription_type):
            if root is not None:
                roots.add(root.name)
        return roots

    def _report(self, code: DiagnosticCode, field: FieldRef, message: str) -> None:
        self.diagnostics.report(Diagnostic(
            code=code,
            message=message,
            type_name=field.owner,
            field_name=field.name,
        ))

    # =========================================================================
    # DATABASE
    # =========================================================================

    def build(self) -> AbstractDatabase:
        """
        Run all build phases and return a fresh database.

        Calling build() again starts over, so repeated builds over the same
        schema produce structurally identical results.
        """
        self.database = AbstractDatabase()
        self.join_tables = self._new_join_tables()

        with log_context(operation="build_abstract_database", component=ComponentType.COMPILER.value):
            for name, type_ in self.type_map.items():
                if is_object_type(type_) and not name.startswith("__") and name not in self.root_types:
                    self.build_table(type_)
            log_checkpoint("tables_built", {"tables": len(self.database.tables)})

            join_tables = self.join_tables.flush()
            log_checkpoint("join_tables_flushed", {"join_tables": len(join_tables)})

            resolved = fill_foreign_keys(self.database, self.diagnostics)
            log_checkpoint("foreign_keys_filled", {"resolved": resolved})

        logger.info(
            f"Generated {len(self.database.tables)} tables "
            f"({len(join_tables)} join tables, {resolved} foreign keys)"
        )
        return self.database

    # =========================================================================
    # TABLE GENERATION
    # =========================================================================

    def build_table(self, type_: GraphQLObjectType) -> Optional[Table]:
        """
        Build the table of one object type.

        Returns:
            The table, or None if the type is annotated with @db.skip
        """
        annotations = self.reader.parse(self.namespace, type_.description)

        if annotations.get("skip"):
            logger.debug(f"Skipping type {type_.name}")
            return None

        table = Table(
            name=get_str(annotations, "name") or self.names.get_name(type_.name),
            comment=escape_comment(self.reader.strip(type_.description)),
            annotations=annotations,
        )

        with log_context(type_name=type_.name, table_name=table.name):
            for field_name, field in type_.fields.items():
                column = self.get_field_descriptor(FieldRef(type_.name, field_name, field), table=table)
                if column is not None:
                    table.add_column(field_name, column)

        self.database.tables.append(table)
        self.database.table_map[type_.name] = table
        return table

    # =========================================================================
    # FIELD RESOLUTION
    # =========================================================================

    def get_field_descriptor(
        self,
        field: FieldRef,
        field_type: Optional[GraphQLOutputType] = None,
        table: Optional[Table] = None,
    ) -> Optional[Column]:
        """
        Resolve one field to a column.

        Args:
            field: Field to resolve
            field_type: Type to resolve instead of the field's own (used by
                join tables to point a reciprocal field at the element type)
            table: Owning table; None when mirroring a referenced field, in
                which case no indexes are recorded and lists are unsupported

        Returns:
            Column, or None when the field is skipped, dropped, or handled
            as a many-to-many relation
        """
        annotations = self.reader.parse(self.namespace, field.description)

        if annotations.get("skip"):
            return None

        if field_type is None:
            field_type = unwrap_non_null(field.type)

        not_null = is_non_null_type(field.type)
        column_name = get_str(annotations, "name") or self.names.get_name(field.name)
        foreign: Optional[ForeignKey] = None

        with log_context(type_name=field.owner, field_name=field.name):
            # Scalar
            if is_scalar_type(field_type) or annotations.get("type"):
                descriptor = resolve_scalar(
                    field,
                    field_type if is_scalar_type(field_type) else None,
                    annotations,
                    self.options.scalar_map,
                )
                if descriptor is None:
                    self._report(
                        DiagnosticCode.UNSUPPORTED_SCALAR, field,
                        f"Unsupported type {field_type} on field {field.path}.",
                    )
                    return None
                type_tag, args = descriptor.type, descriptor.args

            # Enum
            elif is_enum_type(field_type):
                type_tag = "enum"
                args = [
                    list(field_type.values),
                    {"enumName": get_str(annotations, "enumName") or self.names.get_name(field_type.name)},
                ]

            # Object
            elif is_object_type(field_type):
                column_name = get_str(annotations, "name") or self.names.foreign_column_name(field.name)
                resolved = self._resolve_reference(field, field_type, annotations)
                if resolved is None:
                    return None
                descriptor, foreign = resolved
                type_tag, args = descriptor.type, descriptor.args

            # List
            elif is_list_type(field_type) and table is not None:
                of_type = unwrap_non_null(field_type.of_type)
                if is_object_type(of_type):
                    self.join_tables.synthesize(table, field, of_type, annotations)
                    return None
                if self.options.map_lists_to_json:
                    type_tag, args = "json", []
                else:
                    self._report(
                        DiagnosticCode.UNSUPPORTED_LIST, field,
                        f'Unsupported Scalar/Enum list on field {field.path}. Use @db.type: "json"',
                    )
                    return None

            # Unsupported
            else:
                self._report(
                    DiagnosticCode.UNSUPPORTED_TYPE, field,
                    f"Field {field.path} of type {field_type or '*unknown*'} not supported. "
                    f'Consider specifying column type with @db.type: "text" in the field description.',
                )
                return None

        if table is not None:
            column_name = self._unique_column_name(table, column_name)
            self.indexes.accumulate(table, column_name, field.name, field_type, annotations)

        return Column(
            name=column_name,
            comment=escape_comment(self.reader.strip(field.description)),
            annotations=annotations,
            type=type_tag,
            args=list(args or []),
            nullable=not not_null,
            foreign=foreign,
            default_value=annotations.get("default"),
        )

    def _unique_column_name(self, table: Table, column_name: str) -> str:
        """Append the collision suffix until no column of table has this name."""
        unique_name = column_name
        while table.get_column(unique_name) is not None:
            unique_name += self.names.naming.collision_suffix
        if unique_name != column_name:
            logger.debug(f"Column {column_name} already exists on {table.name}; using {unique_name}")
        return unique_name

    def _resolve_reference(
        self,
        field: FieldRef,
        target: GraphQLObjectType,
        annotations: dict,
    ) -> Optional[Tuple[Column, ForeignKey]]:
        """
        Resolve the referenced field of an object reference.

        The referenced field is resolved without an owning table so its
        storage type can be copied onto the referencing column.
        """
        foreign_type = self.type_map.get(target.name)
        if foreign_type is None:
            self._report(
                DiagnosticCode.FOREIGN_TYPE_NOT_FOUND, field,
                f"Foreign type {target.name} not found on field {field.path}.",
            )
            return None
        if not is_object_type(foreign_type):
            self._report(
                DiagnosticCode.FOREIGN_TYPE_NOT_OBJECT, field,
                f"Foreign type {target.name} is not Object type on field {field.path}.",
            )
            return None

        foreign_key = get_str(annotations, "foreign") or self.names.naming.identity_field
        foreign_field = foreign_type.fields.get(foreign_key)
        if foreign_field is None:
            self._report(
                DiagnosticCode.FOREIGN_FIELD_NOT_FOUND, field,
                f"Foreign field {foreign_key} on type {target.name} not found on field {field.path}.",
            )
            return None

        key = (foreign_type.name, foreign_key)
        descriptor = None
        if key not in self._resolving:
            self._resolving.add(key)
            try:
                descriptor = self.get_field_descriptor(FieldRef(foreign_type.name, foreign_key, foreign_field))
            finally:
                self._resolving.discard(key)
        if descriptor is None:
            self._report(
                DiagnosticCode.FOREIGN_FIELD_UNRESOLVED, field,
                f"Couldn't create foreign field {foreign_key} on type {target.name} "
                f"on field {field.path}. See above messages.",
            )
            return None

        return descriptor, ForeignKey(type=foreign_type.name, field=foreign_key)


# ============================================================================
# ENTRY POINTS
# ============================================================================

def generate_abstract_database(
    schema: Union[GraphQLSchema, str],
    options: Optional[CompilerOptions] = None,
    *,
    diagnostics: Optional[DiagnosticSink] = None,
    annotation_reader: Optional[AnnotationReader] = None,
) -> AbstractDatabase:
    """
    Compile a schema (or SDL text) into an AbstractDatabase.

    Raises:
        SchemaInputError: Only if the input itself is not a usable schema
    """
    builder = AbstractDatabaseBuilder(
        load_schema(schema),
        options,
        diagnostics=diagnostics,
        annotation_reader=annotation_reader,
    )
    return builder.build()


async def generate_abstract_database_async(
    schema: Union[GraphQLSchema, str],
    options: Optional[CompilerOptions] = None,
    *,
    diagnostics: Optional[DiagnosticSink] = None,
    annotation_reader: Optional[AnnotationReader] = None,
) -> AbstractDatabase:
    """Awaitable form of generate_abstract_database; the build itself never suspends."""
    return generate_abstract_database(
        schema,
        options,
        diagnostics=diagnostics,
        annotation_reader=annotation_reader,
    )


__all__ = [
    "ROOT_TYPES",
    "AbstractDatabaseBuilder",
    "generate_abstract_database",
    "generate_abstract_database_async",
    "load_schema",
]
