# ============================================================================
# LOGGING AND DIAGNOSTICS TESTS
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Tests - Structured logging and diagnostic sinks
# PURPOSE: Verify context propagation, formatters and sinks
# CREATED: 19 OCT 2026
# ============================================================================
"""
Logging and Diagnostics Tests

Run with:
    pytest tests/test_logging.py -v
"""

import io
import json
import logging

from abstractdb.contracts import DiagnosticCode
from abstractdb.logging import (
    ComponentType,
    HumanFormatter,
    StructuredFormatter,
    get_current_context,
    get_logger,
    log_context,
)
from abstractdb.schema import (
    CollectingDiagnosticSink,
    Diagnostic,
    DiagnosticSink,
    LoggingDiagnosticSink,
)


# ============================================================================
# HELPERS
# ============================================================================

def _capture(name, formatter):
    """Attach a string handler to a dedicated logger."""
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    base = logging.getLogger(name)
    base.handlers[:] = [handler]
    base.setLevel(logging.DEBUG)
    base.propagate = False
    return stream


def _diagnostic(code=DiagnosticCode.UNSUPPORTED_LIST):
    return Diagnostic(
        code=code,
        message="Unsupported Scalar/Enum list on field User.tags.",
        type_name="User",
        field_name="tags",
    )


# ============================================================================
# CONTEXT
# ============================================================================

class TestLogContext:
    def test_nested_context_merges(self):
        with log_context(type_name="User", operation="build"):
            with log_context(field_name="posts"):
                context = get_current_context()
                assert context.type_name == "User"
                assert context.field_name == "posts"
                assert context.operation == "build"
            assert get_current_context().field_name is None
        assert get_current_context().type_name is None

    def test_to_dict_skips_none(self):
        with log_context(table_name="user", extra={"pass": 1}):
            assert get_current_context().to_dict() == {"table_name": "user", "pass": 1}


class TestFormatters:
    def test_human_formatter_location(self):
        stream = _capture("tests.human", HumanFormatter())
        logger = get_logger("tests.human")
        with log_context(type_name="Post", field_name="author", table_name="post"):
            logger.warning("Dangling reference")
        line = stream.getvalue()
        assert "WARNING" in line
        assert "[at=Post.author, table=post]" in line
        assert "tests.human [at=Post.author, table=post]: Dangling reference" in line

    def test_structured_formatter(self):
        stream = _capture("tests.json", StructuredFormatter())
        logger = get_logger("tests.json")
        with log_context(type_name="User"):
            logger.info("Built table", extra={"columns": 2})
        record = json.loads(stream.getvalue())
        assert record["level"] == "INFO"
        assert record["logger"] == "tests.json"
        assert record["message"] == "Built table"
        assert record["context"] == {"type_name": "User"}
        assert record["data"]["columns"] == 2

    def test_component_tag(self):
        stream = _capture("tests.component", StructuredFormatter())
        logger = get_logger("tests.component", ComponentType.JOIN_TABLES)
        with log_context(component=ComponentType.COMPILER.value):
            logger.debug("Created join table")
        record = json.loads(stream.getvalue())
        assert record["data"]["component"] == "join_tables"
        assert record["context"]["component"] == "compiler"


# ============================================================================
# DIAGNOSTIC SINKS
# ============================================================================

class TestDiagnosticSinks:
    def test_collecting_sink(self):
        sink = CollectingDiagnosticSink()
        sink.report(_diagnostic())
        sink.report(_diagnostic(DiagnosticCode.UNSUPPORTED_TYPE))

        assert sink.count == 2
        assert len(sink.by_code(DiagnosticCode.UNSUPPORTED_TYPE)) == 1
        assert sink.messages[0] == "Unsupported Scalar/Enum list on field User.tags."

        sink.clear()
        assert sink.count == 0

    def test_logging_sink(self):
        stream = _capture("tests.diagnostics", StructuredFormatter())
        sink = LoggingDiagnosticSink("tests.diagnostics")
        sink.report(_diagnostic())

        assert sink.count == 1
        record = json.loads(stream.getvalue())
        assert record["level"] == "WARNING"
        assert record["data"]["code"] == "unsupported_list"
        assert record["context"] == {"type_name": "User", "field_name": "tags"}

    def test_sinks_are_diagnostic_sinks(self):
        assert isinstance(CollectingDiagnosticSink(), DiagnosticSink)
        assert isinstance(LoggingDiagnosticSink(), DiagnosticSink)

    def test_diagnostic_str(self):
        diagnostic = _diagnostic()
        assert str(diagnostic) == diagnostic.message
        assert not diagnostic.code.is_reference()
