"""
Backend-neutral search query representation.

This package provides the QueryBuilder that accumulates search criteria and
the value types adapters read back from it.
"""

from fulltext_query.search.query import (
    MISSING,
    PRESENT,
    UNLIMITED,
    ClassFilter,
    FieldPresence,
    QueryBuilder,
    SearchRange,
    SearchTerm,
)

__all__ = [
    "QueryBuilder",
    "SearchTerm",
    "ClassFilter",
    "SearchRange",
    "FieldPresence",
    "MISSING",
    "PRESENT",
    "UNLIMITED",
]
