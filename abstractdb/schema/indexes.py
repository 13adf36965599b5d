# ============================================================================
# INDEX ACCUMULATOR
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Core - Primary/unique/general index grouping
# PURPOSE: Classify columns into per-table index lists from annotations
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: IndexSpec, INDEX_SPECS, IndexAccumulator
# DEPENDENCIES: graphql-core
# ============================================================================
"""
Index Accumulator

Annotation forms (same for @db.index, @db.primary, @db.unique):

    @db.unique                              -> own index, generated name
    @db.unique: "user_identity"             -> named; merges with other fields
                                               using the same name (composite)
    @db.index: { name: "by_tag", type: "gin" }
                                            -> named + typed (general index only)
    @db.primary: false                      -> opt out of the implicit primary key

A field named "id" of scalar type ID is a primary key member unless it
opts out. A table holds at most one primary index: adding another one
evicts the oldest.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from graphql import GraphQLNamedType, is_scalar_type

from abstractdb.config import NamingDefaults
from abstractdb.contracts import IndexKind
from abstractdb.models import Index, Table
from abstractdb.schema.naming import NameNormalizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexSpec:
    """How one index kind is stored, named and bounded."""
    kind: IndexKind
    list_name: str
    name_suffix: str
    has_type: bool = False
    max_size: Optional[int] = None
    name_includes_column: bool = True
    default_member: Optional[Callable[[str, str, NamingDefaults], bool]] = None


def _is_identity(field_name: str, scalar_name: str, naming: NamingDefaults) -> bool:
    return field_name == naming.identity_field and scalar_name == naming.identity_scalar


INDEX_SPECS: Tuple[IndexSpec, ...] = (
    IndexSpec(
        kind=IndexKind.INDEX,
        list_name="indexes",
        name_suffix="index",
        has_type=True,
    ),
    IndexSpec(
        kind=IndexKind.PRIMARY,
        list_name="primaries",
        name_suffix="pkey",
        max_size=1,
        name_includes_column=False,
        default_member=_is_identity,
    ),
    IndexSpec(
        kind=IndexKind.UNIQUE,
        list_name="uniques",
        name_suffix="unique",
    ),
)


class IndexAccumulator:
    """Adds a freshly resolved column to the index lists of its table."""

    def __init__(self, names: NameNormalizer, specs: Tuple[IndexSpec, ...] = INDEX_SPECS):
        self.names = names
        self.specs = specs

    def accumulate(
        self,
        table: Table,
        column_name: str,
        field_name: str,
        field_type: Optional[GraphQLNamedType],
        annotations: dict,
    ) -> List[Index]:
        """
        Register column_name in every index group it belongs to.

        Args:
            table: Owning table (mutated)
            column_name: Final column name
            field_name: Source field name (for the implicit primary key)
            field_type: Unwrapped field type
            annotations: Parsed field annotations

        Returns:
            The indexes the column was added to
        """
        touched = []
        for spec in self.specs:
            annotation = annotations.get(spec.kind.value)
            if not self._is_member(spec, annotation, field_name, field_type):
                continue

            index_name, index_type = self._parse_annotation(spec, annotation)
            entries: List[Index] = getattr(table, spec.list_name)

            index = None
            if index_name:
                index = next((i for i in entries if i.name == index_name), None)

            if index is None:
                if not index_name:
                    columns = [column_name] if spec.name_includes_column else []
                    index_name = self.names.index_name(table.name, columns, spec.name_suffix)
                index = Index(name=index_name, type=index_type, columns=[])
                if spec.max_size is not None and len(entries) >= spec.max_size:
                    evicted = entries.pop(0)
                    logger.debug(f"Table {table.name}: {spec.kind.value} '{index.name}' replaces '{evicted.name}'")
                entries.append(index)

            index.columns.append(column_name)
            touched.append(index)
        return touched

    def _is_member(
        self,
        spec: IndexSpec,
        annotation: Any,
        field_name: str,
        field_type: Optional[GraphQLNamedType],
    ) -> bool:
        if annotation:
            return True
        if spec.default_member is None or annotation is False:
            return False
        if field_type is None or not is_scalar_type(field_type):
            return False
        return spec.default_member(field_name, field_type.name, self.names.naming)

    def _parse_annotation(self, spec: IndexSpec, annotation: Any) -> Tuple[Optional[str], Optional[str]]:
        """Return (normalized explicit name, index type) from the annotation value."""
        name = None
        index_type = None
        if isinstance(annotation, str):
            name = annotation
        elif isinstance(annotation, dict):
            name = annotation.get("name")
            if spec.has_type and annotation.get("type") is not None:
                index_type = str(annotation["type"])
        if name:
            name = self.names.bounded(str(name))
        return name, index_type


__all__ = ["IndexSpec", "INDEX_SPECS", "IndexAccumulator"]
