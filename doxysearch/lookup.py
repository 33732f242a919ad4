"""
Query matching over search tables.

Two match modes are supported:

- `substring` (default): the query may occur anywhere in the key or label
- `prefix`: the key or label must start with the query, which is how the
  Doxygen search widget filters its result rows

Matching is case-insensitive. Against keys the query is first normalized with
`encode_key`, so a user typing `operator*` matches the key `operator_2a`.
Against labels the query is compared with the case-folded display name.
"""

from enum import Enum
from typing import TYPE_CHECKING

from doxysearch.keys import encode_key
from doxysearch.models import IndexEntry

if TYPE_CHECKING:
    from collections.abc import Iterable  # noqa: F401
    from doxysearch.table import SearchTable  # noqa: F401


__all__ = ["MatchMode", "MatchField", "EmptyQuery", "lookup", "matches", "filter_scope"]


class MatchMode(str, Enum):
    substring = "substring"
    prefix = "prefix"


class MatchField(str, Enum):
    key = "key"
    label = "label"
    both = "both"


class EmptyQuery(str, Enum):
    """Policy for blank queries."""

    none = "none"
    all = "all"


def matches(entry, query, mode=MatchMode.substring, fields=MatchField.both):
    # type: (IndexEntry, str, MatchMode|str, MatchField|str) -> bool
    """
    Check whether a single entry matches a non-empty query.

    :param entry: Entry to test
    :param query: Raw user query
    :param mode: Match mode
    :param fields: Which entry fields are compared
    :return: True if the entry matches
    """
    mode = MatchMode(mode)
    fields = MatchField(fields)
    candidates = []  # type: list[tuple[str, str]]
    if fields in (MatchField.key, MatchField.both):
        candidates.append((entry.key, encode_key(query)))
    if fields in (MatchField.label, MatchField.both):
        candidates.append((entry.label.casefold(), query.casefold()))

    for text, needle in candidates:
        if mode is MatchMode.prefix:
            if text.startswith(needle):
                return True
        elif needle in text:
            return True
    return False


def filter_scope(entry, scope):
    # type: (IndexEntry, str) -> IndexEntry|None
    """
    Restrict an entry to the variants owned by a scope.

    :param entry: Entry to restrict
    :param scope: Scope name, compared case-insensitively
    :return: Entry with the matching variants, or None if none is left
    """
    wanted = scope.casefold()
    variants = tuple(v for v in entry.variants if v.scope is not None and v.scope.casefold() == wanted)
    if not variants:
        return None
    if len(variants) == len(entry.variants):
        return entry
    return IndexEntry(key=entry.key, variants=variants)


def lookup(
    table,
    query,
    mode=MatchMode.substring,
    fields=MatchField.both,
    scope=None,
    limit=None,
    empty_query=EmptyQuery.none,
):
    # type: (Iterable[IndexEntry], str, MatchMode|str, MatchField|str, str|None, int|None, EmptyQuery|str) -> list[IndexEntry]
    """
    Return the entries of a table that match a query, in table order.

    A query that is empty after stripping whitespace returns nothing or the whole
    table depending on `empty_query`. A query without matches returns an empty list.

    :param table: SearchTable (or any iterable of entries in table order)
    :param query: Raw user query
    :param mode: `substring` or `prefix`
    :param fields: `key`, `label` or `both`
    :param scope: Only keep variants owned by this scope
    :param limit: Maximum number of entries to return
    :param empty_query: Policy for blank queries (`none` or `all`)
    :return: Matching entries
    :raises ValueError: If mode, fields, policy or limit are invalid
    """
    mode = MatchMode(mode)
    fields = MatchField(fields)
    empty_query = EmptyQuery(empty_query)
    if limit is not None and limit < 0:
        raise ValueError(f"Limit must be non-negative, got {limit}")

    query = query.strip()
    if not query and empty_query is EmptyQuery.none:
        return []

    results = []  # type: list[IndexEntry]
    for entry in table:
        if limit is not None and len(results) >= limit:
            break
        if query and not matches(entry, query, mode, fields):
            continue
        if scope is not None:
            entry = filter_scope(entry, scope)
            if entry is None:
                continue
        results.append(entry)
    return results
