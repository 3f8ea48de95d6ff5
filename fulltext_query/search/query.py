"""
Search query builder for full-text and faceted search.

This module provides a backend-neutral representation of a search request.
Callers accumulate search terms, class filters, field filters, exclusions and
pagination on a QueryBuilder; an adapter for a specific search engine later
reads the accumulated criteria through the accessors and renders them into
the engine's native query syntax.

The builder is deliberately permissive: nothing is validated here, since
only the adapter knows the index schema.
"""

import copy
import threading
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from fulltext_query.config.config import QueryConfig, get_query_config
from fulltext_query.utils.logging import get_logger

logger = get_logger(__name__)

# Sentinel limit meaning "no limit"
UNLIMITED = -1


class FieldPresence(Enum):
    """Filter values matching on whether a field has a value at all."""

    MISSING = "missing"
    PRESENT = "present"


MISSING = FieldPresence.MISSING
PRESENT = FieldPresence.PRESENT


class SearchRange(BaseModel):
    """
    Filter value matching an interval.

    Either bound may be None, leaving that side of the range open. Bounds are
    not compared or validated; their interpretation belongs to the adapter.
    """

    model_config = ConfigDict(frozen=True)

    start: Any = None
    end: Any = None

    def is_bounded(self) -> bool:
        """Whether at least one end of the range is set."""
        return self.start is not None or self.end is not None


class SearchTerm(BaseModel):
    """A single text term, optionally limited to fields and boosted per field."""

    model_config = ConfigDict(frozen=True)

    text: str
    # None means every indexed field
    fields: Optional[Tuple[str, ...]] = None
    boost: Dict[str, float] = Field(default_factory=dict)
    fuzzy: bool = False


class ClassFilter(BaseModel):
    """Restricts results to a named class, optionally including subclasses."""

    model_config = ConfigDict(frozen=True)

    class_name: str
    include_subclasses: bool = True


FilterValue = Union[Any, SearchRange, FieldPresence]


def _normalize_fields(fields: Any) -> Optional[Tuple[str, ...]]:
    if not fields:
        return None
    if isinstance(fields, (str, bytes)):
        return (fields,)
    if isinstance(fields, Iterable):
        return tuple(fields)
    return (fields,)


def _normalize_values(values: Any) -> List[FilterValue]:
    if isinstance(values, (list, tuple, set, frozenset)):
        return list(values)
    return [values]


def _normalize_boost(boost: Any) -> Any:
    if not boost:
        return {}
    if isinstance(boost, Mapping):
        return dict(boost)
    # Anything else is kept as given for the adapter to reject
    return copy.deepcopy(boost)


class _ValueSet:
    """Insertion-ordered collection of filter values without duplicates."""

    def __init__(self) -> None:
        self.values: List[FilterValue] = []
        self._keys: set = set()

    def add(self, value: FilterValue) -> None:
        # Type is part of the key so True and 1 (or 1 and 1.0) stay separate
        key = (type(value), value)
        try:
            if key in self._keys:
                return
            self._keys.add(key)
        except TypeError:
            if any(type(item) is type(value) and item == value for item in self.values):
                return
        self.values.append(copy.deepcopy(value))

    def snapshot(self) -> Tuple[FilterValue, ...]:
        return tuple(copy.deepcopy(self.values))


def _dump_value(value: FilterValue) -> Any:
    if isinstance(value, SearchRange):
        return {"type": "range", "start": value.start, "end": value.end}
    if isinstance(value, FieldPresence):
        return {"type": value.value}
    return value


class QueryBuilder:
    """
    Builder for backend-neutral search queries.

    Terms, class filters and field filters only ever accumulate; start and
    limit are the only state that gets replaced. Every mutator returns the
    builder so calls can be chained::

        query = (
            QueryBuilder()
            .add_search_term("fish", ["Title", "Content"], {"Title": 2.0})
            .add_class_filter("Article")
            .add_filter("Status", "Published")
            .set_page_size(0)
        )

    Accumulating calls are safe to make from several threads. Accessors return
    snapshots, so adapters cannot modify the builder through them.
    """

    def __init__(self, config: Optional[QueryConfig] = None):
        """
        Initialize an empty query.

        Args:
            config: Query defaults to use. When omitted, the process-wide
                configuration is read each time it is needed.
        """
        self._config = config
        self._lock = threading.Lock()
        self._search: List[SearchTerm] = []
        self._classes: List[ClassFilter] = []
        self._require: Dict[str, _ValueSet] = {}
        self._exclude: Dict[str, _ValueSet] = {}
        self._start = 0
        self._limit = UNLIMITED

        logger.debug("Query builder initialized")

    def _add_term(
        self,
        text: str,
        fields: Any,
        boost: Optional[Mapping[str, float]],
        fuzzy: bool,
    ) -> "QueryBuilder":
        # model_construct skips validation, the builder accepts input as given
        term = SearchTerm.model_construct(
            text=text,
            fields=_normalize_fields(fields),
            boost=_normalize_boost(boost),
            fuzzy=fuzzy,
        )
        with self._lock:
            self._search.append(term)
        return self

    def add_search_term(
        self,
        text: str,
        fields: Optional[Union[str, Iterable[str]]] = None,
        boost: Optional[Mapping[str, float]] = None,
    ) -> "QueryBuilder":
        """
        Add a search term.

        Args:
            text: Search text. Its syntax (grouping, boolean expressions)
                depends on the adapter.
            fields: Composite field name or names to search. Defaults to all
                indexed fields.
            boost: Map of field name to relevance weight

        Returns:
            The builder
        """
        return self._add_term(text, fields, boost, fuzzy=False)

    def add_fuzzy_search_term(
        self,
        text: str,
        fields: Optional[Union[str, Iterable[str]]] = None,
        boost: Optional[Mapping[str, float]] = None,
    ) -> "QueryBuilder":
        """
        Add a term matched by similarity rather than exactly.

        A term like "fishing" would typically also find "fish" or "fisher";
        the exact matching strategy is up to the adapter. Arguments are the
        same as for add_search_term.
        """
        return self._add_term(text, fields, boost, fuzzy=True)

    def get_search_terms(self) -> Tuple[SearchTerm, ...]:
        with self._lock:
            return tuple(term.model_copy(deep=True) for term in self._search)

    def add_class_filter(self, class_name: str, include_subclasses: bool = True) -> "QueryBuilder":
        """
        Restrict results to instances of a class.

        Args:
            class_name: Name of the class
            include_subclasses: Also match instances of subclasses

        Returns:
            The builder
        """
        class_filter = ClassFilter.model_construct(
            class_name=class_name,
            include_subclasses=include_subclasses,
        )
        with self._lock:
            self._classes.append(class_filter)
        return self

    def get_class_filters(self) -> Tuple[ClassFilter, ...]:
        with self._lock:
            return tuple(self._classes)

    @staticmethod
    def _merge(target: Dict[str, _ValueSet], field: str, values: Any) -> None:
        value_set = target.setdefault(field, _ValueSet())
        for value in _normalize_values(values):
            value_set.add(value)

    def add_filter(self, field: str, values: Any) -> "QueryBuilder":
        """
        Require a field to match one of the given values.

        Unlike search terms, filters narrow the result set without
        influencing relevancy. Values added for the same field accumulate.

        Args:
            field: Composite name of the field
            values: A scalar, a list of scalars, a SearchRange, or MISSING /
                PRESENT

        Returns:
            The builder
        """
        with self._lock:
            self._merge(self._require, field, values)
        return self

    def get_filters(self) -> Dict[str, Tuple[FilterValue, ...]]:
        with self._lock:
            return {field: values.snapshot() for field, values in self._require.items()}

    def add_exclude(self, field: str, values: Any) -> "QueryBuilder":
        """
        Exclude results where a field matches the given values.

        The inverse of add_filter, accepting the same value shapes.
        """
        with self._lock:
            self._merge(self._exclude, field, values)
        return self

    def get_excludes(self) -> Dict[str, Tuple[FilterValue, ...]]:
        with self._lock:
            return {field: values.snapshot() for field, values in self._exclude.items()}

    def set_start(self, start: int) -> "QueryBuilder":
        with self._lock:
            self._start = start
        return self

    def get_start(self) -> int:
        return self._start

    def set_limit(self, limit: int) -> "QueryBuilder":
        """Set the maximum number of results; UNLIMITED (-1) means no limit."""
        with self._lock:
            self._limit = limit
        return self

    def get_limit(self) -> int:
        return self._limit

    def _default_page_size(self) -> int:
        config = self._config if self._config is not None else get_query_config()
        return config.default_page_size

    def set_page_size(self, page: int) -> "QueryBuilder":
        """
        Select a page of results using the configured default page size.

        Sets start to ``page * default_page_size`` and limit to the page size.

        Args:
            page: Zero-based page index

        Returns:
            The builder
        """
        page_size = self._default_page_size()
        with self._lock:
            self._start = page * page_size
            self._limit = page_size
        logger.debug(f"Page {page} selected with page size {page_size}")
        return self

    def get_page_size(self) -> int:
        """Number of results per page, which is the current limit."""
        return self._limit

    def get_page(self) -> int:
        """Zero-based page index implied by start and limit."""
        with self._lock:
            if self._limit <= 0:
                return 0
            return self._start // self._limit

    def is_filtered(self) -> bool:
        """
        Whether the query constrains results in any way.

        Pagination does not count. An unfiltered query may be treated by an
        adapter as "match everything".
        """
        with self._lock:
            return bool(self._search or self._classes or self._require or self._exclude)

    def to_dict(self) -> Dict[str, Any]:
        """
        Plain data snapshot of the query.

        Range values become ``{"type": "range", "start": ..., "end": ...}``
        and presence markers ``{"type": "missing"}`` / ``{"type": "present"}``.
        """
        with self._lock:
            return {
                "search": [
                    {
                        "text": term.text,
                        "fields": list(term.fields) if term.fields is not None else None,
                        "boost": copy.deepcopy(term.boost),
                        "fuzzy": term.fuzzy,
                    }
                    for term in self._search
                ],
                "classes": [
                    {
                        "class": class_filter.class_name,
                        "include_subclasses": class_filter.include_subclasses,
                    }
                    for class_filter in self._classes
                ],
                "require": {
                    field: [_dump_value(value) for value in copy.deepcopy(values.values)]
                    for field, values in self._require.items()
                },
                "exclude": {
                    field: [_dump_value(value) for value in copy.deepcopy(values.values)]
                    for field, values in self._exclude.items()
                },
                "start": self._start,
                "limit": self._limit,
            }

    def __str__(self) -> str:
        return "Search Query"

    def __repr__(self) -> str:
        with self._lock:
            return (
                f"QueryBuilder(terms={len(self._search)}, classes={len(self._classes)}, "
                f"require={len(self._require)}, exclude={len(self._exclude)}, "
                f"start={self._start}, limit={self._limit})"
            )
