# ============================================================================
# NAMING TESTS
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Tests - Identifier synthesis
# PURPOSE: Verify normalization, join/index naming and comment escaping
# CREATED: 19 OCT 2026
# ============================================================================
"""
Naming Tests

Run with:
    pytest tests/test_naming.py -v
"""

from abstractdb.config import NamingDefaults
from abstractdb.schema.naming import (
    MAX_IDENTIFIER_LENGTH,
    NameNormalizer,
    escape_comment,
    truncate_identifier,
)


class TestNameNormalizer:
    def test_get_name(self):
        assert NameNormalizer().get_name("UserProfile") == "userprofile"
        assert NameNormalizer(normalize=False).get_name("UserProfile") == "UserProfile"

    def test_foreign_column_name(self):
        assert NameNormalizer().foreign_column_name("Author") == "author_foreign"
        assert NameNormalizer(normalize=False).foreign_column_name("Author") == "Author_foreign"

    def test_join_table_name_is_symmetric(self):
        names = NameNormalizer()
        assert names.join_table_name("User_group", "Group_user") == "group_user_join_user_group"
        assert names.join_table_name("Group_user", "User_group") == "group_user_join_user_group"

    def test_index_name(self):
        names = NameNormalizer()
        assert names.index_name("user", ["email"], "unique") == "user_email_unique"
        assert names.index_name("user", [], "pkey") == "user_pkey"

    def test_index_name_lowercased_without_normalize(self):
        names = NameNormalizer(normalize=False)
        assert names.index_name("UserProfile", ["Email"], "index") == "userprofile_email_index"

    def test_index_name_bounded(self):
        name = NameNormalizer().index_name("t" * 60, ["column"], "index")
        assert len(name) == MAX_IDENTIFIER_LENGTH

    def test_custom_naming(self):
        names = NameNormalizer(naming=NamingDefaults(foreign_suffix="_id", max_identifier_length=10))
        assert names.foreign_column_name("author") == "author_id"
        assert names.bounded("abcdefghijklmnop") == "abcdefghij"


class TestHelpers:
    def test_truncate_identifier(self):
        assert truncate_identifier("ABC", 2) == "ab"
        assert truncate_identifier("short") == "short"

    def test_escape_comment(self):
        assert escape_comment("it's") == "it''s"
        assert escape_comment("") is None
        assert escape_comment(None) is None
