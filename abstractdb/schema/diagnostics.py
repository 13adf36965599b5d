# ============================================================================
# DIAGNOSTICS
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Core - Non-fatal build reporting
# PURPOSE: Injected sink for warnings about dropped fields and dangling keys
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: Diagnostic, DiagnosticSink, LoggingDiagnosticSink, CollectingDiagnosticSink
# DEPENDENCIES: pydantic
# ============================================================================
"""
Diagnostics

The compiler never raises for problems inside a schema. Each problem is
turned into a Diagnostic and handed to the injected sink; the offending
field or reference is dropped (or left dangling) and the build goes on.

Sinks:
- LoggingDiagnosticSink: default, logs a WARNING per diagnostic
- CollectingDiagnosticSink: keeps diagnostics in memory for callers/tests
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from pydantic import BaseModel, Field

from abstractdb.contracts import DiagnosticCode
from abstractdb.logging import ComponentType, get_logger, log_context


class Diagnostic(BaseModel):
    """
    A human-readable report about one type/field.

    type_name and field_name are source schema names. Join tables have no
    source type, so their reports carry the join table and column names.
    """

    code: DiagnosticCode
    message: str
    type_name: Optional[str] = Field(default=None, description="Owning source type (join table name for join tables)")
    field_name: Optional[str] = Field(default=None, description="Offending source field (column name for join tables)")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return self.message


class DiagnosticSink(ABC):
    """Abstract base for diagnostic receivers; report() must not raise."""

    @abstractmethod
    def report(self, diagnostic: Diagnostic) -> None:
        pass


class LoggingDiagnosticSink(DiagnosticSink):
    """Forwards every diagnostic to the structured logger as a warning."""

    def __init__(self, logger_name: str = "abstractdb.diagnostics"):
        self.logger = get_logger(logger_name, ComponentType.DIAGNOSTICS)
        self.count = 0

    def report(self, diagnostic: Diagnostic) -> None:
        self.count += 1
        with log_context(type_name=diagnostic.type_name, field_name=diagnostic.field_name):
            self.logger.warning(diagnostic.message, extra={"code": diagnostic.code.value})


class CollectingDiagnosticSink(DiagnosticSink):
    """Keeps diagnostics in report order."""

    def __init__(self):
        self.diagnostics: List[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    @property
    def count(self) -> int:
        return len(self.diagnostics)

    @property
    def messages(self) -> List[str]:
        return [d.message for d in self.diagnostics]

    def by_code(self, code: DiagnosticCode) -> List[Diagnostic]:
        """Diagnostics with the given code."""
        return [d for d in self.diagnostics if d.code == code]

    def clear(self) -> None:
        self.diagnostics.clear()


__all__ = [
    "Diagnostic",
    "DiagnosticSink",
    "LoggingDiagnosticSink",
    "CollectingDiagnosticSink",
]
