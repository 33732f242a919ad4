"""
Immutable search table.

A `SearchTable` is the in-memory form of one Doxygen search data file: an ordered
sequence of entries, each filed under a unique search key. Tables are built once
and never modified; lookups return entries in table order.
"""

from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator  # noqa: F401
    from doxysearch.models import IndexEntry  # noqa: F401


__all__ = ["SearchTable"]


class SearchTable:
    """
    Ordered, validated mapping of search keys to index entries.

    Validation on construction:
    - every key is a non-empty string
    - no key appears twice
    - every entry has at least one variant

    Variant order inside an entry is kept exactly as given, duplicates included,
    because distinct overloads must stay separately navigable.
    """

    def __init__(self, entries, source=None):
        # type: (Iterable[IndexEntry], str|None) -> None
        """
        Build a table from entries in generation order.

        :param entries: Index entries in table order
        :param source: Optional description of where the entries came from (file path)
        :raises ValueError: If an entry violates the table invariants
        """
        self.source = source
        self._entries = tuple(entries)
        self._by_key = {}  # type: dict[str, int]
        for pos, entry in enumerate(self._entries):
            if not entry.key:
                raise ValueError(f"Entry {pos} has an empty key{self._where()}")
            if entry.key in self._by_key:
                raise ValueError(f"Duplicate key '{entry.key}' at entry {pos}{self._where()}")
            if not entry.variants:
                raise ValueError(f"Entry '{entry.key}' has no variants{self._where()}")
            self._by_key[entry.key] = pos
        logger.debug(f"Built search table with {len(self._entries)} entries{self._where()}")

    def _where(self):
        # type: () -> str
        return f" in {self.source}" if self.source else ""

    def __len__(self):
        # type: () -> int
        return len(self._entries)

    def __iter__(self):
        # type: () -> Iterator[IndexEntry]
        return iter(self._entries)

    def __contains__(self, key):
        # type: (object) -> bool
        return key in self._by_key

    def __getitem__(self, key):
        # type: (str) -> IndexEntry
        return self._entries[self._by_key[key]]

    def __eq__(self, other):
        # type: (object) -> bool
        if not isinstance(other, SearchTable):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self):
        # type: () -> str
        return f"SearchTable(entries={len(self._entries)}, source={self.source!r})"

    @property
    def entries(self):
        # type: () -> tuple[IndexEntry, ...]
        """All entries in table order."""
        return self._entries

    def keys(self):
        # type: () -> list[str]
        """Search keys in table order."""
        return [entry.key for entry in self._entries]

    def get(self, key, default=None):
        # type: (str, IndexEntry|None) -> IndexEntry|None
        """
        Get the entry filed under a key.

        :param key: Normalized search key (e.g. "operator_3d_3d")
        :param default: Value returned when the key is absent
        :return: IndexEntry or default
        """
        pos = self._by_key.get(key)
        return default if pos is None else self._entries[pos]

    def lookup(self, query, **options):
        # type: (str, ...) -> list[IndexEntry]
        """
        Find entries matching a user query.

        Shortcut for `doxysearch.lookup.lookup(self, query, **options)`.
        """
        from doxysearch.lookup import lookup

        return lookup(self, query, **options)

    @classmethod
    def concat(cls, tables, source=None):
        # type: (Iterable[SearchTable], str|None) -> SearchTable
        """
        Join tables in order into one table.

        :param tables: Tables to join
        :param source: Description for the joined table
        :raises ValueError: If a key occurs in more than one table
        """
        entries = []  # type: list[IndexEntry]
        for table in tables:
            entries.extend(table.entries)
        return cls(entries, source=source)
