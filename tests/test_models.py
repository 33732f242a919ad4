"""Tests for search index records."""

import msgspec
import pytest

from doxysearch.models import IndexEntry, SectionInfo, Variant, derive_scope


def test_variant_page_and_anchor():
    # type: () -> None
    """Test href is split into page and fragment."""
    variant = Variant(label="operator==", href="../class_s_g_point.html#ab3d2eb16", scope="SGPoint")
    assert variant.page == "../class_s_g_point.html"
    assert variant.anchor == "ab3d2eb16"


def test_variant_without_anchor():
    # type: () -> None
    """Test a link to a whole page has no anchor."""
    variant = Variant(label="SGPoint", href="../class_s_g_point.html")
    assert variant.page == "../class_s_g_point.html"
    assert variant.anchor is None


def test_variant_defaults():
    # type: () -> None
    """Test optional fields default to no scope and parent target."""
    variant = Variant(label="x", href="x.html")
    assert variant.scope is None
    assert variant.title is None
    assert variant.target_parent is True


def test_records_are_frozen():
    # type: () -> None
    """Test records cannot be modified after creation."""
    variant = Variant(label="x", href="x.html")
    with pytest.raises(AttributeError):
        variant.label = "y"  # type: ignore


def test_entry_label_and_scopes():
    # type: () -> None
    """Test entry label comes from its variants and scopes keep first-seen order."""
    entry = IndexEntry(
        key="operator_2b",
        variants=(
            Variant(label="operator+", href="p.html#1", scope="SGPoint"),
            Variant(label="operator+", href="t.html#1", scope="SGTuple"),
            Variant(label="operator+", href="t.html#2", scope="SGTuple"),
        ),
    )
    assert entry.label == "operator+"
    assert entry.scopes == ["SGPoint", "SGTuple"]


def test_entry_json_is_positional():
    # type: () -> None
    """Test entries encode as [key, [[label, href, scope, ...], ...]] tuples."""
    entry = IndexEntry(key="operator_3d_3d", variants=(Variant(label="operator==", href="p.html#a", scope="SGPoint"),))
    data = msgspec.json.decode(msgspec.json.encode(entry))
    assert data[0] == "operator_3d_3d"
    assert data[1][0][:3] == ["operator==", "p.html#a", "SGPoint"]


def test_section_info_defaults():
    # type: () -> None
    """Test sections have no characters unless given."""
    section = SectionInfo(id=0, name="all", label="All")
    assert section.chars == ""


@pytest.mark.parametrize(
    "title,single,scope",
    [
        ("SGPoint", True, "SGPoint"),
        ("sg::SGPoint", True, "sg::SGPoint"),
        ("SGPoint::operator*()", False, "SGPoint"),
        ("SGPoint::operator*(const SGPoint &rhs) const ", False, "SGPoint"),
        ("SGTuple::operator[](int state) const ", False, "SGTuple"),
        ("sg::SGTuple::size()", False, "sg::SGTuple"),
        ("SGPoint::x", False, "SGPoint"),
        ("distance(const SGPoint &a)", False, None),
        ("", True, None),
        (None, False, None),
    ],
)
def test_derive_scope(title, single, scope):
    # type: (str|None, bool, str|None) -> None
    """Test scope derivation for single and overloaded entries."""
    assert derive_scope(title, single) == scope
