# ============================================================================
# FOREIGN KEY BACKFILL TESTS
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Tests - Post-pass reference resolution
# PURPOSE: Verify table/column lookups and dangling reference reports
# CREATED: 19 OCT 2026
# ============================================================================
"""
Foreign Key Backfill Tests

Exercises fill_foreign_keys directly on hand-built models.

Run with:
    pytest tests/test_foreign_keys.py -v
"""

from abstractdb.contracts import DiagnosticCode
from abstractdb.models import AbstractDatabase, Column, ForeignKey, Table
from abstractdb.schema import CollectingDiagnosticSink, fill_foreign_keys


# ============================================================================
# HELPERS
# ============================================================================

def _database(foreign: ForeignKey) -> AbstractDatabase:
    user = Table(name="users")
    user.add_column("id", Column(name="user_id", type="uuid", nullable=False))

    post = Table(name="post")
    post.add_column("author", Column(name="author_foreign", type="uuid", foreign=foreign))

    database = AbstractDatabase(tables=[user, post])
    database.table_map.update({"User": user, "Post": post})
    return database


class TestFillForeignKeys:
    def test_resolves_by_type_and_field(self):
        foreign = ForeignKey(type="User", field="id")
        sink = CollectingDiagnosticSink()

        assert fill_foreign_keys(_database(foreign), sink) == 1
        assert foreign.table_name == "users"
        assert foreign.column_name == "user_id"
        assert foreign.is_resolved
        assert sink.count == 0

    def test_table_not_found(self):
        foreign = ForeignKey(type="Account", field="id")
        sink = CollectingDiagnosticSink()

        assert fill_foreign_keys(_database(foreign), sink) == 0
        assert not foreign.is_resolved
        diagnostic = sink.diagnostics[0]
        assert diagnostic.code == DiagnosticCode.FOREIGN_TABLE_NOT_FOUND
        assert diagnostic.code.is_reference()
        assert diagnostic.message == "Foreign key post.author_foreign: Table not found for type Account."
        assert (diagnostic.type_name, diagnostic.field_name) == ("Post", "author")

    def test_column_not_found(self):
        foreign = ForeignKey(type="User", field="email")
        sink = CollectingDiagnosticSink()

        fill_foreign_keys(_database(foreign), sink)
        assert foreign.table_name is None
        assert [d.code for d in sink.diagnostics] == [DiagnosticCode.FOREIGN_COLUMN_NOT_FOUND]
        assert "email" in sink.messages[0]

    def test_lookup_uses_field_name_not_column_name(self):
        foreign = ForeignKey(type="User", field="user_id")
        sink = CollectingDiagnosticSink()

        fill_foreign_keys(_database(foreign), sink)
        assert sink.by_code(DiagnosticCode.FOREIGN_COLUMN_NOT_FOUND)

    def test_resolved_keys_untouched(self):
        foreign = ForeignKey(type="Account", field="id", tableName="accounts", columnName="id")
        sink = CollectingDiagnosticSink()

        assert fill_foreign_keys(_database(foreign), sink) == 0
        assert foreign.table_name == "accounts"
        assert sink.count == 0

    def test_columns_without_foreign_keys_skipped(self):
        database = AbstractDatabase(tables=[Table(name="empty")])
        assert fill_foreign_keys(database, CollectingDiagnosticSink()) == 0

    def test_join_table_reports_use_table_names(self):
        join = Table(name="group_user_join_user_group")
        join.add_column("user_foreign", Column(
            name="user_foreign", type="uuid", foreign=ForeignKey(type="Group", field="id"),
        ))
        database = AbstractDatabase(tables=[join])
        database.table_map[join.name] = join
        sink = CollectingDiagnosticSink()

        fill_foreign_keys(database, sink)
        diagnostic = sink.diagnostics[0]
        assert (diagnostic.type_name, diagnostic.field_name) == ("group_user_join_user_group", "user_foreign")
