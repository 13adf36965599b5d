# ============================================================================
# CONFIGURATION TESTS
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Tests - Compiler options and defaults
# PURPOSE: Verify environment overrides and immutability
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Tests

Run with:
    pytest tests/test_config.py -v
"""

import dataclasses

import pytest

from abstractdb.config import CompilerOptions, NamingDefaults, get_defaults, reset_defaults
from abstractdb.schema import AbstractDatabaseBuilder, CollectingDiagnosticSink, load_schema


@pytest.fixture(autouse=True)
def clean_defaults(monkeypatch):
    for name in ("SCHEMA_NORMALIZE_NAMES", "SCHEMA_MAP_LISTS_TO_JSON", "SCHEMA_ANNOTATION_NAMESPACE"):
        monkeypatch.delenv(name, raising=False)
    reset_defaults()
    yield
    reset_defaults()


class TestCompilerOptions:
    def test_defaults(self):
        options = CompilerOptions()
        assert options.normalize_names is True
        assert options.scalar_map is None
        assert options.map_lists_to_json is False
        assert options.annotation_namespace == "db"

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            CompilerOptions().normalize_names = False

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SCHEMA_NORMALIZE_NAMES", "false")
        monkeypatch.setenv("SCHEMA_MAP_LISTS_TO_JSON", "yes")
        monkeypatch.setenv("SCHEMA_ANNOTATION_NAMESPACE", "sql")

        options = CompilerOptions.from_env()
        assert options.normalize_names is False
        assert options.map_lists_to_json is True
        assert options.annotation_namespace == "sql"

    def test_from_env_unset(self):
        assert CompilerOptions.from_env() == CompilerOptions()


class TestNamingDefaults:
    def test_values(self):
        naming = NamingDefaults()
        assert naming.max_identifier_length == 63
        assert naming.foreign_suffix == "_foreign"
        assert naming.collision_suffix == "_other"
        assert naming.join_infix == "_join_"


class TestGlobalDefaults:
    def test_cached_until_reset(self, monkeypatch):
        first = get_defaults()
        assert get_defaults() is first

        monkeypatch.setenv("SCHEMA_MAP_LISTS_TO_JSON", "1")
        assert get_defaults().compiler.map_lists_to_json is False

        reset_defaults()
        assert get_defaults().compiler.map_lists_to_json is True

    def test_builder_uses_env_defaults(self, monkeypatch):
        monkeypatch.setenv("SCHEMA_MAP_LISTS_TO_JSON", "true")
        builder = AbstractDatabaseBuilder(
            load_schema("type User { tags: [String] }"),
            diagnostics=CollectingDiagnosticSink(),
        )
        database = builder.build()
        assert database.tables[0].columns[0].type == "json"
