"""
Full-text search query intermediate representation.

Build queries with QueryBuilder and hand them to a search engine adapter.
"""

from fulltext_query.config.config import QueryConfig, get_query_config, set_query_config
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

__version__ = "0.1.0"

__all__ = [
    "QueryBuilder",
    "SearchTerm",
    "ClassFilter",
    "SearchRange",
    "FieldPresence",
    "MISSING",
    "PRESENT",
    "UNLIMITED",
    "QueryConfig",
    "get_query_config",
    "set_query_config",
]
