"""
Reader and writer for Doxygen search data files.

Doxygen writes its client-side search index as JavaScript files that assign
literals to global variables. A table file looks like this:

    var searchData=
    [
      ['operator_3d_3d',['operator==',['../class_s_g_point.html#ab3d2...',1,'SGPoint']]],
      ['operator_2a',['operator*',['../class_s_g_point.html#a3c87...',1,'SGPoint::operator*()'],
                                  ['../class_s_g_tuple.html#a7748...',1,'SGTuple::operator*()']]]
    ];

Each row is `[key, [label, [href, target_parent, title], ...]]`. Labels and titles are
HTML-escaped; hrefs and keys are not. The section descriptor `searchdata.js` assigns
three objects keyed by section id: `indexSectionsWithContent`, `indexSectionNames` and
`indexSectionLabels`.

Only the literal subset Doxygen emits is understood: arrays, objects, quoted strings,
numbers, `true`, `false` and `null`. Anything else in a file (functions, comments) is
skipped as long as it is outside the variable assignments that are read.
"""

import re
from pathlib import Path
from typing import TYPE_CHECKING

import msgspec
from loguru import logger

from doxysearch.models import IndexEntry, SectionInfo, Variant, derive_scope
from doxysearch.table import SearchTable

if TYPE_CHECKING:
    from collections.abc import Iterable  # noqa: F401


__all__ = [
    "CodecError",
    "parse_vars",
    "loads",
    "load",
    "dumps",
    "dump",
    "to_json",
    "from_json",
    "loads_sections",
    "load_sections",
    "escape_html",
    "unescape_html",
]


class CodecError(ValueError):
    """Malformed search data, with the position of the problem when known."""

    def __init__(self, message, text=None, pos=None, source=None):
        # type: (str, str|None, int|None, str|None) -> None
        self.line = None  # type: int|None
        self.column = None  # type: int|None
        if text is not None and pos is not None:
            self.line = text.count("\n", 0, pos) + 1
            self.column = pos - (text.rfind("\n", 0, pos) + 1) + 1
            message = f"{message} (line {self.line}, column {self.column})"
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


TOKEN = re.compile(
    r"""
    (?P<ws>\s+|//[^\n]*|/\*.*?\*/)
    |(?P<string>'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*")
    |(?P<number>-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)
    |(?P<word>[A-Za-z_$][A-Za-z0-9_$]*)
    |(?P<punct>[\[\]{},:])
    """,
    re.VERBOSE | re.DOTALL,
)

VAR_DECL = re.compile(r"\bvar\s+([A-Za-z_$][A-Za-z0-9_$]*)\s*=\s*")

JS_ESCAPE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|.)", re.DOTALL)

SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}

LITERAL_WORDS = {"true": True, "false": False, "null": None}

# Entity encoding applied by Doxygen to labels and titles
HTML_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&#39;"}
HTML_UNESCAPES = {entity: char for char, entity in HTML_ESCAPES.items()}
HTML_ENTITY = re.compile("|".join(re.escape(entity) for entity in HTML_UNESCAPES))


def _unescape_js(body):
    # type: (str) -> str
    def replace(match):
        # type: (re.Match) -> str
        esc = match.group(1)
        if esc.startswith("u{"):
            return chr(int(esc[2:-1], 16))
        if esc[0] in "ux" and len(esc) > 1:
            return chr(int(esc[1:], 16))
        if esc in ("\n", "\r\n", "\r"):
            return ""  # line continuation
        return SIMPLE_ESCAPES.get(esc, esc)

    return JS_ESCAPE.sub(replace, body)


class _LiteralParser:
    """Recursive descent parser for one JavaScript literal starting at a given offset."""

    def __init__(self, text, pos, source=None):
        # type: (str, int, str|None) -> None
        self.text = text
        self.pos = pos
        self.source = source

    def error(self, message, pos=None):
        # type: (str, int|None) -> CodecError
        return CodecError(message, self.text, self.pos if pos is None else pos, self.source)

    def next_token(self):
        # type: () -> tuple[str, str, int]
        while self.pos < len(self.text):
            match = TOKEN.match(self.text, self.pos)
            if match is None:
                raise self.error(f"Unexpected character {self.text[self.pos]!r}")
            start = self.pos
            self.pos = match.end()
            if match.lastgroup != "ws":
                return match.lastgroup, match.group(), start
        raise self.error("Unexpected end of data")

    def peek_token(self):
        # type: () -> tuple[str, str, int]
        saved = self.pos
        try:
            return self.next_token()
        finally:
            self.pos = saved

    def parse_value(self):
        # type: () -> object
        kind, value, start = self.next_token()
        if kind == "string":
            return _unescape_js(value[1:-1])
        if kind == "number":
            return int(value) if re.fullmatch(r"-?\d+", value) else float(value)
        if kind == "word":
            if value in LITERAL_WORDS:
                return LITERAL_WORDS[value]
            raise self.error(f"Unsupported identifier '{value}'", start)
        if value == "[":
            return self.parse_array()
        if value == "{":
            return self.parse_object()
        raise self.error(f"Unexpected token '{value}'", start)

    def parse_array(self):
        # type: () -> list
        items = []  # type: list
        kind, value, _ = self.peek_token()
        if value == "]":
            self.next_token()
            return items
        while True:
            items.append(self.parse_value())
            kind, value, start = self.next_token()
            if value == "]":
                return items
            if value != ",":
                raise self.error(f"Expected ',' or ']' in array, got '{value}'", start)
            # Trailing comma
            if self.peek_token()[1] == "]":
                self.next_token()
                return items

    def parse_object(self):
        # type: () -> dict
        result = {}  # type: dict
        while True:
            kind, value, start = self.next_token()
            if value == "}":
                return result
            if kind == "string":
                key = _unescape_js(value[1:-1])  # type: object
            elif kind == "number":
                key = int(value) if re.fullmatch(r"-?\d+", value) else float(value)
            elif kind == "word":
                key = value
            else:
                raise self.error(f"Invalid object key '{value}'", start)
            kind, value, start = self.next_token()
            if value != ":":
                raise self.error(f"Expected ':' after object key, got '{value}'", start)
            result[key] = self.parse_value()
            kind, value, start = self.next_token()
            if value == "}":
                return result
            if value != ",":
                raise self.error(f"Expected ',' or '}}' in object, got '{value}'", start)


def parse_vars(text, names=None, source=None):
    # type: (str, Iterable[str]|None, str|None) -> dict[str, object]
    """
    Read the literal values assigned by `var NAME = ...` declarations.

    :param text: JavaScript source
    :param names: Only parse these variables (all declarations if None)
    :param source: File name used in error messages
    :return: Mapping of variable name to parsed value, in declaration order
    :raises CodecError: If a selected assignment is not a valid literal
    """
    wanted = set(names) if names is not None else None
    result = {}  # type: dict[str, object]
    pos = 0
    while True:
        match = VAR_DECL.search(text, pos)
        if match is None:
            return result
        name = match.group(1)
        parser = _LiteralParser(text, match.end(), source)
        if wanted is None or name in wanted:
            result[name] = parser.parse_value()
            pos = parser.pos
            continue
        # Skip over unselected literals so declarations inside their strings are not picked up
        try:
            parser.parse_value()
            pos = parser.pos
        except CodecError:
            pos = match.end()


def _require(condition, message, source):
    # type: (bool, str, str|None) -> None
    if not condition:
        raise CodecError(message, source=source)


def _build_entry(row, pos, source):
    # type: (object, int, str|None) -> IndexEntry
    _require(isinstance(row, list) and len(row) == 2, f"Row {pos} is not a [key, group] pair", source)
    key, group = row
    _require(isinstance(key, str), f"Row {pos} has a non-string key", source)
    _require(
        isinstance(group, list) and len(group) >= 2 and isinstance(group[0], str),
        f"Row {pos} ('{key}') must hold a label followed by at least one link",
        source,
    )
    label = unescape_html(group[0])
    links = group[1:]
    variants = []
    for link in links:
        _require(
            isinstance(link, list) and 1 <= len(link) <= 3 and isinstance(link[0], str),
            f"Row {pos} ('{key}') has a malformed link {link!r}",
            source,
        )
        href = link[0]
        target_parent = bool(link[1]) if len(link) > 1 else True
        title = unescape_html(link[2]) if len(link) > 2 and link[2] is not None else None
        variants.append(
            Variant(
                label=label,
                href=href,
                scope=derive_scope(title, single=len(links) == 1),
                title=title,
                target_parent=target_parent,
            )
        )
    return IndexEntry(key=key, variants=tuple(variants))


def loads(text, source=None):
    # type: (str, str|None) -> SearchTable
    """
    Parse a `var searchData=[...];` file.

    :param text: File content
    :param source: File name used in error messages and stored on the table
    :return: SearchTable with entries in file order
    :raises CodecError: If the file is malformed
    :raises ValueError: If the rows violate table invariants (duplicate or empty keys)
    """
    values = parse_vars(text, names=["searchData"], source=source)
    if "searchData" not in values:
        raise CodecError("No 'var searchData' declaration found", source=source)
    rows = values["searchData"]
    _require(isinstance(rows, list), "searchData is not an array", source)
    entries = [_build_entry(row, pos, source) for pos, row in enumerate(rows)]
    return SearchTable(entries, source=source)


def load(path):
    # type: (str|Path) -> SearchTable
    """
    Read a search data file from disk.

    :param path: Path to a `<section>_<n>.js` file
    :return: SearchTable
    :raises FileNotFoundError: If the file doesn't exist
    :raises CodecError: If the file is malformed
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    logger.debug(f"Parsing search data {path}")
    return loads(text, source=str(path))


ENTITY_OR_SPECIAL = re.compile(r"&(?:#\d+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);|[&<>\"']")


def escape_html(text):
    # type: (str) -> str
    """
    Apply Doxygen's entity encoding to a label or title.

    Entities other than the five written here are kept as they are, matching
    `unescape_html` which leaves them undecoded.
    """

    def replace(match):
        # type: (re.Match) -> str
        token = match.group()
        if len(token) == 1:
            return HTML_ESCAPES[token]
        if token in HTML_UNESCAPES:
            return "&amp;" + token[1:]
        return token

    return ENTITY_OR_SPECIAL.sub(replace, text)


def unescape_html(text):
    # type: (str) -> str
    """Undo `escape_html`. Other entities are kept verbatim so they are written back unchanged."""
    return HTML_ENTITY.sub(lambda match: HTML_UNESCAPES[match.group()], text)


def _js_string(text):
    # type: (str) -> str
    return "'" + text.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n") + "'"


def _link_title(entry, variant, single):
    # type: (IndexEntry, Variant, bool) -> str|None
    """Title to write for a variant; synthesized from the scope when the variant has none."""
    title = variant.title
    if title is None and variant.scope is not None:
        title = variant.scope if single else f"{variant.scope}::{variant.label}()"
    if derive_scope(title, single) != variant.scope:
        raise CodecError(
            f"Entry '{entry.key}' has a variant whose scope {variant.scope!r} "
            f"does not match its title {title!r} and cannot be written"
        )
    return title


def _dump_entry(entry):
    # type: (IndexEntry) -> str
    labels = {variant.label for variant in entry.variants}
    if len(labels) != 1:
        raise CodecError(f"Entry '{entry.key}' mixes labels {sorted(labels)} and cannot be written")
    single = len(entry.variants) == 1
    links = []
    for variant in entry.variants:
        parts = [_js_string(variant.href), "1" if variant.target_parent else "0"]
        title = _link_title(entry, variant, single)
        if title is not None:
            parts.append(_js_string(escape_html(title)))
        links.append("[" + ",".join(parts) + "]")
    return f"[{_js_string(entry.key)},[{_js_string(escape_html(entry.label))},{','.join(links)}]]"


def dumps(table):
    # type: (Iterable[IndexEntry]) -> str
    """
    Serialize entries in Doxygen's search data layout.

    A table parsed from a Doxygen file is written back byte for byte.

    :param table: SearchTable or iterable of entries
    :return: JavaScript source
    :raises CodecError: If an entry cannot be represented (differing labels, a title naming another scope)
    """
    rows = ",\n".join("  " + _dump_entry(entry) for entry in table)
    if rows:
        return f"var searchData=\n[\n{rows}\n];\n"
    return "var searchData=\n[\n];\n"


def dump(table, path):
    # type: (Iterable[IndexEntry], str|Path) -> None
    """Write entries to a search data file."""
    path = Path(path)
    path.write_text(dumps(table), encoding="utf-8", newline="\n")
    logger.debug(f"Wrote search data {path}")


def to_json(table):
    # type: (Iterable[IndexEntry]) -> bytes
    """
    Encode entries as JSON tuples: `[[key, [[label, href, scope, title, target_parent], ...]], ...]`.

    :param table: SearchTable or iterable of entries
    :return: UTF-8 encoded JSON
    """
    return msgspec.json.encode(list(table))


def from_json(data, source=None):
    # type: (bytes|str, str|None) -> SearchTable
    """
    Decode JSON produced by `to_json`.

    :param data: JSON document
    :param source: Description stored on the table
    :return: SearchTable
    :raises CodecError: If the document does not have the expected shape
    """
    try:
        entries = msgspec.json.decode(data, type=list[IndexEntry])
    except msgspec.DecodeError as e:
        raise CodecError(f"Invalid search table JSON: {e}", source=source) from e
    return SearchTable(entries, source=source)


SECTION_VARS = ["indexSectionsWithContent", "indexSectionNames", "indexSectionLabels"]


def loads_sections(text, source=None):
    # type: (str, str|None) -> list[SectionInfo]
    """
    Parse a `searchdata.js` section descriptor.

    :param text: File content
    :param source: File name used in error messages
    :return: Sections ordered by id
    :raises CodecError: If the section names are missing or malformed
    """
    values = parse_vars(text, names=SECTION_VARS, source=source)
    names = values.get("indexSectionNames")
    if not isinstance(names, dict):
        raise CodecError("No 'var indexSectionNames' object found", source=source)
    chars = values.get("indexSectionsWithContent") or {}
    labels = values.get("indexSectionLabels") or {}
    _require(isinstance(chars, dict) and isinstance(labels, dict), "Section descriptors must be objects", source)

    sections = []
    for raw_id, name in names.items():
        try:
            section_id = int(raw_id)
        except (TypeError, ValueError):
            raise CodecError(f"Invalid section id {raw_id!r}", source=source)
        _require(isinstance(name, str) and bool(name), f"Invalid name for section {section_id}", source)
        label = labels.get(raw_id, name.capitalize())
        sections.append(SectionInfo(id=section_id, name=name, label=str(label), chars=str(chars.get(raw_id, ""))))
    return sorted(sections, key=lambda s: s.id)


def load_sections(path):
    # type: (str|Path) -> list[SectionInfo]
    """Read a `searchdata.js` section descriptor from disk."""
    path = Path(path)
    return loads_sections(path.read_text(encoding="utf-8"), source=str(path))
