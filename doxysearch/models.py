"""
# Records of a Doxygen search index

## Terms and Definitions

- **SEARCH-KEY** - Normalized, URL-safe form of a symbol name (see `doxysearch.keys`)
- **LABEL** - Human-readable symbol name as displayed in search results (e.g. `operator<`)
- **VARIANT** - One navigable occurrence of a symbol: an overload, or the same name in another class
- **TITLE** - The per-result text Doxygen renders next to a variant. For a single-variant entry it is the
    owning scope (`SGPoint`); for overloaded entries it is the qualified signature (`SGTuple::operator[](int state)`)
- **SCOPE** - Owning class or namespace of a variant, used to disambiguate results
- **SECTION** - A search category (`all`, `classes`, `functions`, ...) split into one table file per leading character

Records are immutable msgspec structs. `array_like` makes their JSON form the positional tuples the search
widget consumes: an entry is `[key, [variant, ...]]` and a variant starts with `[label, href, scope, ...]`.
"""

import msgspec


__all__ = ["Variant", "IndexEntry", "SectionInfo", "derive_scope"]


class Variant(msgspec.Struct, frozen=True, array_like=True):
    """One navigable occurrence of a symbol."""

    label: str
    href: str
    scope: str | None = None
    title: str | None = None
    target_parent: bool = True

    @property
    def page(self):
        # type: () -> str
        """Documentation page part of `href` (e.g. `../class_s_g_point.html`)."""
        return self.href.partition("#")[0]

    @property
    def anchor(self):
        # type: () -> str | None
        """Fragment part of `href`, or None when the link targets a whole page."""
        page, sep, anchor = self.href.partition("#")
        return anchor if sep else None


class IndexEntry(msgspec.Struct, frozen=True, array_like=True):
    """A search key with every occurrence filed under it, in generation order."""

    key: str
    variants: tuple[Variant, ...]

    @property
    def label(self):
        # type: () -> str
        """Display name shared by the variants of this entry."""
        return self.variants[0].label if self.variants else ""

    @property
    def scopes(self):
        # type: () -> list[str]
        """Distinct variant scopes in order of first appearance."""
        seen = []  # type: list[str]
        for variant in self.variants:
            if variant.scope is not None and variant.scope not in seen:
                seen.append(variant.scope)
        return seen


class SectionInfo(msgspec.Struct, frozen=True):
    """
    Search category of a Doxygen search directory.

    `chars` holds the leading characters that have a table file, in file order. Table
    file `<name>_<n>.js` holds the entries whose key starts with `chars[n]` (n in hex).
    """

    id: int
    name: str
    label: str
    chars: str = ""


def derive_scope(title, single):
    # type: (str|None, bool) -> str|None
    """
    Derive the owning scope of a variant from its rendered title.

    :param title: Per-result text as written by Doxygen
    :param single: True if the variant is the only one of its entry
    :return: Scope name or None for unqualified symbols
    """
    if not title:
        return None
    if single:
        # Single results carry the scope name itself
        return title
    qualified = title.split("(", 1)[0].strip()
    scope, sep, _ = qualified.rpartition("::")
    return scope if sep and scope else None
