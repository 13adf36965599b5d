# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Core - Default configuration values
# PURPOSE: Compiler options and identifier conventions
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides the compiler options and the naming conventions the compiler
relies on. Options can be overridden via environment variables or passed
explicitly to generate_abstract_database().

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Any, Callable, Optional


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean environment variable ("1", "true", "yes", "on")."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class NamingDefaults:
    """
    Identifier conventions used while synthesizing names.

    Only index names are truncated to max_identifier_length; table and
    column names are emitted as derived.
    """
    # PostgreSQL NAMEDATALEN - 1
    max_identifier_length: int = 63

    # Identity field: default primary key and many-to-many linkage key
    identity_field: str = "id"
    identity_scalar: str = "ID"

    # Synthesized name parts
    foreign_suffix: str = "_foreign"
    collision_suffix: str = "_other"
    join_infix: str = "_join_"


@dataclass(frozen=True)
class CompilerOptions:
    """
    Options for a single schema compilation.

    Attributes:
        normalize_names: Lowercase all derived identifiers
        scalar_map: Resolver consulted before the built-in scalar table
        map_lists_to_json: Store scalar/enum lists as "json" columns
        annotation_namespace: Namespace of the @<ns>.<key> annotations
    """
    normalize_names: bool = True
    scalar_map: Optional[Callable[..., Any]] = None
    map_lists_to_json: bool = False
    annotation_namespace: str = "db"

    @classmethod
    def from_env(cls) -> "CompilerOptions":
        """Create from environment variables."""
        return cls(
            normalize_names=_env_flag("SCHEMA_NORMALIZE_NAMES", True),
            map_lists_to_json=_env_flag("SCHEMA_MAP_LISTS_TO_JSON", False),
            annotation_namespace=os.getenv("SCHEMA_ANNOTATION_NAMESPACE", "db"),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    naming: NamingDefaults = field(default_factory=NamingDefaults)
    compiler: CompilerOptions = field(default_factory=CompilerOptions)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            naming=NamingDefaults(),
            compiler=CompilerOptions.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "NamingDefaults",
    "CompilerOptions",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
