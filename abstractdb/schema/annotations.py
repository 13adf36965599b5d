# ============================================================================
# ANNOTATION READER
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# STATUS: Core - Documentation-string annotation parsing
# PURPOSE: Extract @<ns>.<key>: <value> directives from descriptions
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: AnnotationReader, DefaultAnnotationReader
# DEPENDENCIES: pyyaml
# ============================================================================
"""
Annotation Reader

The compiler only consumes the parsed mapping; any AnnotationReader
subclass can be injected. DefaultAnnotationReader understands one
directive per line:

    \"\"\"
    A registered user.
    @db.name: "users"
    @db.index: { name: "user_email_idx", type: "btree" }
    @db.skip
    \"\"\"

- A bare key (no value) parses as True
- Values are YAML flow nodes: "text", 'text', true, 42, [1, 2], {k: v}
- A value YAML cannot parse is kept as the raw string
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

# Any namespace; used when stripping
_ANNOTATION_LINE = re.compile(r"^[ \t]*@\w+\.\w+.*$\n?", re.MULTILINE)


class AnnotationReader(ABC):
    """Abstract base for annotation parsers."""

    @abstractmethod
    def parse(self, namespace: str, text: Optional[str]) -> Dict[str, Any]:
        """Return recognized keys of namespace mapped to parsed values."""
        pass

    @abstractmethod
    def strip(self, text: Optional[str]) -> Optional[str]:
        """Return text with all annotation syntax removed (None if empty)."""
        pass


class DefaultAnnotationReader(AnnotationReader):
    """
    Line-oriented annotation parser backed by PyYAML.

    Stateless apart from a per-namespace regex cache; safe to share.
    """

    def __init__(self):
        self._patterns: Dict[str, re.Pattern] = {}

    def _pattern(self, namespace: str) -> re.Pattern:
        pattern = self._patterns.get(namespace)
        if pattern is None:
            pattern = re.compile(
                rf"^[ \t]*@{re.escape(namespace)}\.(?P<key>\w+)(?:[ \t]*:[ \t]*(?P<value>.*?))?[ \t]*$",
                re.MULTILINE,
            )
            self._patterns[namespace] = pattern
        return pattern

    def parse(self, namespace: str, text: Optional[str]) -> Dict[str, Any]:
        """
        Parse the annotations of one namespace.

        Args:
            namespace: Annotation namespace (e.g. "db")
            text: Raw description, may be None

        Returns:
            Dict of key -> parsed value, in order of appearance. A key
            repeated on several lines keeps the last value.
        """
        result: Dict[str, Any] = {}
        if not text:
            return result

        for match in self._pattern(namespace).finditer(text):
            key = match.group("key")
            raw = match.group("value")
            if raw is None or raw == "":
                result[key] = True
            else:
                result[key] = self._parse_value(raw)
        return result

    def strip(self, text: Optional[str]) -> Optional[str]:
        """Remove annotation lines of every namespace and trim."""
        if not text:
            return None
        cleaned = _ANNOTATION_LINE.sub("", text).strip()
        return cleaned or None

    @staticmethod
    def _parse_value(raw: str) -> Any:
        try:
            return yaml.safe_load(raw)
        except yaml.YAMLError as e:
            logger.debug(f"Keeping annotation value {raw!r} as string: {e}")
            return raw


def get_str(annotations: Dict[str, Any], key: str) -> Optional[str]:
    """Return a non-empty string annotation; bare flags and non-strings give None."""
    value = annotations.get(key)
    if isinstance(value, str) and value:
        return value
    return None


__all__ = ["AnnotationReader", "DefaultAnnotationReader", "get_str"]
