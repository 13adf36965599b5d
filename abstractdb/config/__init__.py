# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Module

Provides compiler options and naming conventions.
"""

from abstractdb.config.defaults import (
    NamingDefaults,
    CompilerOptions,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "NamingDefaults",
    "CompilerOptions",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
