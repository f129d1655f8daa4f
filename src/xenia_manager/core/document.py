"""Typed access to parsed TOML documents.

The ``toml`` codec returns plain Python containers: tables are dicts,
arrays of tables are lists of dicts, scalars are str/bool/int/... This
module classifies those values and offers "get-if-kind" lookups that
return None instead of raising, so callers can decide what a missing or
malformed value means.
"""

from enum import Enum
from typing import Any, Optional


class NodeKind(Enum):
    """Kinds of values found in a parsed document"""
    TABLE = "table"
    ARRAY_OF_TABLES = "array_of_tables"
    STRING = "string"
    BOOLEAN = "boolean"
    OTHER = "other"


def node_kind(value: Any) -> NodeKind:
    """Classify a document value.

    An empty list is treated as an (empty) array of tables.

    Args:
        value: Any value produced by the codec

    Returns:
        The NodeKind of the value
    """
    if isinstance(value, dict):
        return NodeKind.TABLE
    if isinstance(value, list) and all(isinstance(item, dict) for item in value):
        return NodeKind.ARRAY_OF_TABLES
    # bool is checked before anything numeric would be
    if isinstance(value, bool):
        return NodeKind.BOOLEAN
    if isinstance(value, str):
        return NodeKind.STRING
    return NodeKind.OTHER


def _get_if_kind(table: Any, key: str, kind: NodeKind) -> Optional[Any]:
    if not isinstance(table, dict) or key not in table:
        return None
    value = table[key]
    return value if node_kind(value) == kind else None


def get_table(table: Any, key: str) -> Optional[dict]:
    """Get a sub-table, or None if absent or not a table."""
    return _get_if_kind(table, key, NodeKind.TABLE)


def get_array_of_tables(table: Any, key: str) -> Optional[list[dict]]:
    """Get an array of tables, or None if absent or of another kind."""
    return _get_if_kind(table, key, NodeKind.ARRAY_OF_TABLES)


def get_string(table: Any, key: str) -> Optional[str]:
    """Get a string value, or None if absent or not a string."""
    return _get_if_kind(table, key, NodeKind.STRING)


def get_bool(table: Any, key: str) -> Optional[bool]:
    """Get a boolean value, or None if absent or not a boolean."""
    return _get_if_kind(table, key, NodeKind.BOOLEAN)
