# ============================================================================
# IDENTIFIER NAMING
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Core - Identifier synthesis utilities
# PURPOSE: Normalize derived names, build bounded index names, escape comments
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: NameNormalizer, truncate_identifier, escape_comment
# DEPENDENCIES: none
# ============================================================================
"""
Identifier Naming

One naming policy for every identifier the compiler derives:
- Table/column names: lowercased when normalize_names is on, never truncated
- Index names: always lowercased and truncated to 63 characters

Usage:
    names = NameNormalizer(normalize=True)
    names.get_name("UserProfile")                   # "userprofile"
    names.index_name("user", ["email"], "unique")   # "user_email_unique"
"""

from typing import Optional, Sequence

from abstractdb.config import NamingDefaults

MAX_IDENTIFIER_LENGTH = NamingDefaults.max_identifier_length


def truncate_identifier(name: str, max_length: int = MAX_IDENTIFIER_LENGTH) -> str:
    """Lowercase and cut an identifier to max_length characters."""
    return name.lower()[:max_length]


def escape_comment(comment: Optional[str]) -> Optional[str]:
    """Double single quotes so the comment survives a SQL string literal."""
    if not comment:
        return None
    return comment.replace("'", "''")


class NameNormalizer:
    """Applies the active naming policy to derived identifiers."""

    def __init__(self, normalize: bool = True, naming: Optional[NamingDefaults] = None):
        self.normalize = normalize
        self.naming = naming or NamingDefaults()

    def get_name(self, name: str) -> str:
        """Normalize a table or column name."""
        if self.normalize:
            return name.lower()
        return name

    def foreign_column_name(self, field_name: str) -> str:
        """Default column name for an object reference field."""
        return self.get_name(f"{field_name}{self.naming.foreign_suffix}")

    def join_table_name(self, left: str, right: str) -> str:
        """Canonical join table name: both sides sorted, joined by the infix."""
        return self.get_name(self.naming.join_infix.join(sorted([left, right])))

    def index_name(self, table: str, columns: Sequence[str], suffix: str) -> str:
        """Generate conventional index name: <table>_<col>..._<suffix>."""
        parts = [table, *columns, suffix]
        return self.bounded("_".join(parts))

    def bounded(self, name: str) -> str:
        """Lowercase and truncate an index name."""
        return truncate_identifier(name, self.naming.max_identifier_length)


__all__ = [
    "MAX_IDENTIFIER_LENGTH",
    "NameNormalizer",
    "truncate_identifier",
    "escape_comment",
]
