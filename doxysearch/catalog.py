"""
Search catalog over a Doxygen `search/` directory.

Doxygen splits its search index by category (section) and by the first character
of each symbol name (partition):

    search/
        searchdata.js   section names, labels and the characters present per section
        all_0.js        section "all", entries starting with the 1st character
        all_b.js        section "all", entries starting with the 12th character
        classes_0.js    section "classes", ...

The hex suffix of a table file is an index into the section's character set from
`searchdata.js`. Older Doxygen releases used the hex code point of the character
instead; that interpretation is used when no character set is available.

A catalog can also be opened on a single table file, which yields one section named
after the file prefix.
"""

import re
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from doxysearch import codec
from doxysearch.lookup import EmptyQuery, MatchField, MatchMode, lookup
from doxysearch.models import SectionInfo
from doxysearch.table import SearchTable
from doxysearch.utils import timer

if TYPE_CHECKING:
    from doxysearch.models import IndexEntry  # noqa: F401


__all__ = ["SearchCatalog", "SECTION_FILE_PATTERN"]


SECTION_FILE_PATTERN = re.compile(r"^(?P<section>[a-z][a-z0-9]*)_(?P<suffix>[0-9a-f]+)\.js$")
DESCRIPTOR = "searchdata.js"


def _partition_char(number, chars):
    # type: (int, str) -> str
    """Leading character of a table file from its numeric suffix, or "" when unknown."""
    if number < len(chars):
        return chars[number]
    if number >= 0x20:
        return chr(number)
    return ""


class SearchCatalog:
    """
    Read-only access to the search sections of one Doxygen documentation build.

    Implements SearchIndexProtocol. Table files are parsed on first use and cached;
    the data is immutable so cached tables are never invalidated.

    Storage structure:
        _partitions = {
            "all": [("a", Path("all_0.js")), ("b", Path("all_1.js")), ...],
            ...
        }
    """

    def __init__(self, path):
        # type: (str|Path) -> None
        """
        Open a search directory or a single search data file.

        :param path: Doxygen `search/` directory or one `<section>_<n>.js` file
        :raises FileNotFoundError: If the path doesn't exist or holds no search data
        """
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"Search data not found: {self.path}")

        self._sections = {}  # type: dict[str, SectionInfo]
        self._partitions = {}  # type: dict[str, list[tuple[str, Path]]]
        self._tables = {}  # type: dict[Path, SearchTable]

        if self.path.is_file():
            self._open_file(self.path)
        else:
            self._open_directory(self.path)

        if not self._sections:
            raise FileNotFoundError(f"No search data files in {self.path}")
        logger.debug(f"Opened search catalog {self.path} with sections {list(self._sections)}")

    def _open_file(self, file_path):
        # type: (Path) -> None
        match = SECTION_FILE_PATTERN.match(file_path.name)
        name = match.group("section") if match else file_path.stem
        char = _partition_char(int(match.group("suffix"), 16), "") if match else ""
        self._sections[name] = SectionInfo(id=0, name=name, label=name.capitalize(), chars=char)
        self._partitions[name] = [(char, file_path)]

    def _open_directory(self, directory):
        # type: (Path) -> None
        files = {}  # type: dict[str, list[tuple[int, Path]]]
        for file_path in sorted(directory.glob("*.js")):
            match = SECTION_FILE_PATTERN.match(file_path.name)
            if match is None:
                continue
            files.setdefault(match.group("section"), []).append((int(match.group("suffix"), 16), file_path))

        descriptor = directory / DESCRIPTOR
        if descriptor.exists():
            declared = codec.load_sections(descriptor)
        else:
            declared = [SectionInfo(id=i, name=name, label=name.capitalize()) for i, name in enumerate(sorted(files))]

        for info in declared:
            numbered = sorted(files.get(info.name, []), key=lambda item: item[0])
            partitions = []
            for number, file_path in numbered:
                partitions.append((_partition_char(number, info.chars), file_path))
            chars = info.chars or "".join(char for char, _ in partitions)
            self._sections[info.name] = SectionInfo(id=info.id, name=info.name, label=info.label, chars=chars)
            self._partitions[info.name] = partitions
            if not partitions:
                logger.warning(f"Section '{info.name}' has no table files in {directory}")

    def _section(self, name):
        # type: (str) -> SectionInfo
        if name not in self._sections:
            raise FileNotFoundError(f"Section '{name}' not found")
        return self._sections[name]

    def _load(self, file_path):
        # type: (Path) -> SearchTable
        table = self._tables.get(file_path)
        if table is None:
            with timer(f"Loading {file_path.name}"):
                table = codec.load(file_path)
            self._tables[file_path] = table
        return table

    def list_sections(self):
        # type: () -> list[SectionInfo]
        """
        List all sections in id order.

        :return: List of SectionInfo
        """
        return sorted(self._sections.values(), key=lambda s: s.id)

    def get_section(self, name):
        # type: (str) -> SectionInfo
        """
        Get section metadata by name.

        :param name: Section name (e.g. "all", "classes")
        :return: SectionInfo
        :raises FileNotFoundError: If the section doesn't exist
        """
        return self._section(name)

    def partitions(self, name):
        # type: (str) -> list[tuple[str, Path]]
        """
        Table files of a section with the leading character each one holds.

        :param name: Section name
        :return: List of (character, file path) in file order
        :raises FileNotFoundError: If the section doesn't exist
        """
        self._section(name)
        return list(self._partitions[name])

    def partition_table(self, name, char):
        # type: (str, str) -> SearchTable|None
        """
        Table holding the entries of a section that start with a character.

        :param name: Section name
        :param char: Leading character (case-insensitive)
        :return: SearchTable or None if the section has no entries for that character
        :raises FileNotFoundError: If the section doesn't exist
        """
        self._section(name)
        char = char.lower()
        for part_char, file_path in self._partitions[name]:
            if part_char.lower() == char:
                return self._load(file_path)
        return None

    def table(self, name):
        # type: (str) -> SearchTable
        """
        All entries of a section as one table, in file order.

        :param name: Section name
        :return: SearchTable
        :raises FileNotFoundError: If the section doesn't exist
        :raises ValueError: If two table files of the section share a key
        """
        self._section(name)
        tables = [self._load(file_path) for _, file_path in self._partitions[name]]
        if len(tables) == 1:
            return tables[0]
        return SearchTable.concat(tables, source=f"{self.path}:{name}")

    def count_entries(self, name):
        # type: (str) -> int
        """Number of entries in a section."""
        self._section(name)
        return sum(len(self._load(file_path)) for _, file_path in self._partitions[name])

    def get_entry(self, section, key):
        # type: (str, str) -> IndexEntry
        """
        Get the entry filed under a search key.

        :param section: Section name
        :param key: Normalized search key (e.g. "operator_3d_3d")
        :return: IndexEntry
        :raises FileNotFoundError: If the section or key doesn't exist
        """
        self._section(section)
        if key:
            # Keys usually start with their partition character, try that file first
            table = self.partition_table(section, key[0])
            if table is not None and key in table:
                return table[key]
        for _, file_path in self._partitions[section]:
            table = self._load(file_path)
            if key in table:
                return table[key]
        raise FileNotFoundError(f"Key '{key}' not found in section '{section}'")

    def lookup(
        self,
        section,
        query,
        mode=MatchMode.substring,
        fields=MatchField.both,
        scope=None,
        limit=None,
        empty_query=EmptyQuery.none,
    ):
        # type: (str, str, MatchMode|str, MatchField|str, str|None, int|None, EmptyQuery|str) -> list[IndexEntry]
        """
        Find entries of a section matching a query, in table order.

        In prefix mode only the partition of the query's first character is scanned,
        like the Doxygen widget which only loads that file.

        :param section: Section name
        :param query: Raw user query
        :param mode: `substring` or `prefix`
        :param fields: `key`, `label` or `both`
        :param scope: Only keep variants owned by this scope
        :param limit: Maximum number of entries
        :param empty_query: Policy for blank queries
        :return: Matching entries
        :raises FileNotFoundError: If the section doesn't exist
        :raises ValueError: If an option is invalid
        """
        self._section(section)
        mode = MatchMode(mode)
        stripped = query.strip()
        options = dict(mode=mode, fields=fields, scope=scope, limit=limit, empty_query=empty_query)

        if mode is MatchMode.prefix and stripped:
            table = self.partition_table(section, stripped[0])
            if table is not None:
                return lookup(table, query, **options)
            if all(char for char, _ in self._partitions[section]):
                return []
            # Files of unknown character must be scanned

        entries = []  # type: list[IndexEntry]
        for _, file_path in self._partitions[section]:
            entries.extend(self._load(file_path))
        return lookup(entries, query, **options)

    def close(self):
        # type: () -> None
        """Drop cached tables."""
        self._tables.clear()
