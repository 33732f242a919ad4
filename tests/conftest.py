"""Test fixtures for doxysearch testing."""

import typing  # noqa: F401

import pytest
from fastapi.testclient import TestClient


# Search data file emitted by Doxygen for the SGPoint / SGTuple operator overloads
SEARCH_DATA_B = """\
var searchData=
[
  ['operator_21_3d',['operator!=',['../class_s_g_point.html#ac548c65149f9d5e96bfed01e2a4acaa6',1,'SGPoint']]],
  ['operator_2a',['operator*',['../class_s_g_point.html#a3c878d936b6e5255b1b1b8aedc61e86b',1,'SGPoint::operator*()'],['../class_s_g_point.html#a6744606b8f8713122dd7a1cf322f9af1',1,'SGPoint::operator*()'],['../class_s_g_point.html#a4d2ced64673970ebfdf0bc55e1cfac9d',1,'SGPoint::operator*(const SGPoint &amp;rhs) const '],['../class_s_g_tuple.html#a774881a3412a621df63ed3454a2923a3',1,'SGTuple::operator*()'],['../class_s_g_tuple.html#ab4926e79ee6cfcb52928edfee5f7aea6',1,'SGTuple::operator*()']]],
  ['operator_2a_3d',['operator*=',['../class_s_g_point.html#a2d16a99bae47723ddb8eb0257254bf9e',1,'SGPoint::operator*=()'],['../class_s_g_tuple.html#a26a157fe2e19fef59e17e58d1c0e99c1',1,'SGTuple::operator*=()']]],
  ['operator_2b',['operator+',['../class_s_g_point.html#ac65eeaae1fde02ace32a892ad4aeb772',1,'SGPoint::operator+()'],['../class_s_g_tuple.html#af1be38e7c5ab70d302219e54dc4867ad',1,'SGTuple::operator+(const SGTuple &amp;rhs) const '],['../class_s_g_tuple.html#a02cd55b18d08d67dbc0bf26531b68818',1,'SGTuple::operator+(const SGPoint &amp;rhs) const ']]],
  ['operator_2b_3d',['operator+=',['../class_s_g_point.html#a65eb9c1b564b55fadcae4e5a0b75c7a4',1,'SGPoint::operator+=()'],['../class_s_g_tuple.html#acf8c7d73d8f2704979ca44b0c755ecc7',1,'SGTuple::operator+=(const SGTuple &amp;rhs)'],['../class_s_g_tuple.html#af3e77720996ec599cdffea08f92355ae',1,'SGTuple::operator+=(const SGPoint &amp;rhs)']]],
  ['operator_2d',['operator-',['../class_s_g_point.html#a92c8c0ff9e9ec2946d9a42dbc4767940',1,'SGPoint::operator-()'],['../class_s_g_tuple.html#aca0dc9024f09628befbd25274366cb79',1,'SGTuple::operator-(const SGTuple &amp;rhs) const '],['../class_s_g_tuple.html#a4b0d32414ed5e3df2e78c43d8bc72365',1,'SGTuple::operator-(const SGPoint &amp;rhs) const ']]],
  ['operator_2d_3d',['operator-=',['../class_s_g_point.html#aef6456278892c01cd4ef0881f10d2082',1,'SGPoint::operator-=()'],['../class_s_g_tuple.html#ae3c5e1bb4faf5fb652cdb8440133d2de',1,'SGTuple::operator-=(const SGTuple &amp;rhs)'],['../class_s_g_tuple.html#a2e6d730692fe4e702e021044dd9889a8',1,'SGTuple::operator-=(const SGPoint &amp;rhs)']]],
  ['operator_2f',['operator/',['../class_s_g_point.html#ad112619c55afac0b026c236a9901e001',1,'SGPoint::operator/()'],['../class_s_g_tuple.html#a7862330b9a1f30c6d906bdff1fe3af32',1,'SGTuple::operator/()']]],
  ['operator_2f_3d',['operator/=',['../class_s_g_point.html#acd23eead6f4b4240d532beaf1dfff30d',1,'SGPoint::operator/=()'],['../class_s_g_tuple.html#a63277a0693207afb1ddbc048df29534a',1,'SGTuple::operator/=()']]],
  ['operator_3c',['operator&lt;',['../class_s_g_point.html#af4baa20da0c4a8524967140e2eb44497',1,'SGPoint::operator&lt;(const SGPoint &amp;rhs) const '],['../class_s_g_point.html#a47fbe85777b1e972ede0d239d163b07b',1,'SGPoint::operator&lt;(double rhs) const ']]],
  ['operator_3c_3c',['operator&lt;&lt;',['../class_s_g_point.html#a574625ffb8acdf3d4fbd94e9c8bac123',1,'SGPoint::operator&lt;&lt;()'],['../class_s_g_tuple.html#ab3a68f1151e2d11c7eca54a64c9d4a7b',1,'SGTuple::operator&lt;&lt;()']]],
  ['operator_3c_3d',['operator&lt;=',['../class_s_g_point.html#a8ce2d72b4096a843f8f8537d84f06400',1,'SGPoint::operator&lt;=(const SGPoint &amp;rhs) const '],['../class_s_g_point.html#a384afaac3364f0700cbdd4ea57f3a266',1,'SGPoint::operator&lt;=(double rhs) const ']]],
  ['operator_3d',['operator=',['../class_s_g_point.html#aedf45913c65b31cf7363f428cbe17087',1,'SGPoint::operator=(const SGPoint &amp;rhs)'],['../class_s_g_point.html#a1766a2ef73345b9017c214c7eeed6b7e',1,'SGPoint::operator=(double d)'],['../class_s_g_tuple.html#a1274463fbd40d837c0167252555156e0',1,'SGTuple::operator=()']]],
  ['operator_3d_3d',['operator==',['../class_s_g_point.html#ab3d2eb16f79a746cce7763a4bf0938d1',1,'SGPoint']]],
  ['operator_3e',['operator&gt;',['../class_s_g_point.html#af25174b953cb6aa24ef0484d6b39329d',1,'SGPoint::operator&gt;(const SGPoint &amp;rhs) const '],['../class_s_g_point.html#a21fe5672c770edc189bb86fcdde5c66d',1,'SGPoint::operator&gt;(double rhs) const ']]],
  ['operator_3e_3d',['operator&gt;=',['../class_s_g_point.html#a217bb7b589615b96714b4ace0794368b',1,'SGPoint::operator&gt;=(const SGPoint &amp;rhs) const '],['../class_s_g_point.html#a72c9a64d7ab038f5ca190cb5e433477f',1,'SGPoint::operator&gt;=(double rhs) const ']]],
  ['operator_5b_5d',['operator[]',['../class_s_g_point.html#a640f67ad5fa6d0b5814b7c9aecd259d3',1,'SGPoint::operator[](int player)'],['../class_s_g_point.html#a23c4b005c8bc8968a806ee0458f94f9a',1,'SGPoint::operator[](int player) const '],['../class_s_g_tuple.html#afdc495d4532e5935f37e34b29e688867',1,'SGTuple::operator[](int state)'],['../class_s_g_tuple.html#a93d85ccd16400b44a892d330f8b32d45',1,'SGTuple::operator[](int state) const ']]]
];
"""

SEARCH_DATA_A = """\
var searchData=
[
  ['abreusannikov_2ecpp',['abreusannikov.cpp',['../abreusannikov_8cpp.html',1,'']]],
  ['addstate',['addState',['../class_s_g_game.html#a0e1c7d9b5f7a3e2c4d6b8a9f0e1d2c3b',1,'SGGame']]]
];
"""

SEARCH_DATA_CLASSES = """\
var searchData=
[
  ['sgpoint',['SGPoint',['../class_s_g_point.html',1,'']]],
  ['sgtuple',['SGTuple',['../class_s_g_tuple.html',1,'']]]
];
"""

SEARCH_DATA_FUNCTIONS = """\
var searchData=
[
  ['operator_3d_3d',['operator==',['../class_s_g_point.html#ab3d2eb16f79a746cce7763a4bf0938d1',1,'SGPoint']]],
  ['operator_5b_5d',['operator[]',['../class_s_g_point.html#a640f67ad5fa6d0b5814b7c9aecd259d3',1,'SGPoint::operator[](int player)'],['../class_s_g_tuple.html#afdc495d4532e5935f37e34b29e688867',1,'SGTuple::operator[](int state)']]]
];
"""

SEARCH_SECTIONS = """\
var indexSectionsWithContent =
{
  0: "abcdefghilmoprs",
  1: "s",
  2: "o"
};

var indexSectionNames =
{
  0: "all",
  1: "classes",
  2: "functions"
};

var indexSectionLabels =
{
  0: "All",
  1: "Classes",
  2: "Functions"
};

"""


@pytest.fixture
def search_data():
    # type: () -> str
    """Doxygen search data for the operator partition of the 'all' section."""
    return SEARCH_DATA_B


@pytest.fixture
def sample_table(search_data):
    # type: (str) -> typing.Any
    """SearchTable parsed from the operator partition."""
    from doxysearch import codec

    return codec.loads(search_data, source="all_b.js")


@pytest.fixture
def search_dir(tmp_path):
    # type: (typing.Any) -> typing.Any
    """
    Create a Doxygen search directory with three sections.

    Layout:
        searchdata.js    sections all, classes, functions
        all_0.js         'a' entries
        all_b.js         'o' entries (operators)
        classes_0.js     's' entries
        functions_0.js   'o' entries
        search.js        widget code, ignored

    :return: Path of the directory
    """
    directory = tmp_path / "search"
    directory.mkdir()
    (directory / "searchdata.js").write_text(SEARCH_SECTIONS, encoding="utf-8")
    (directory / "all_0.js").write_text(SEARCH_DATA_A, encoding="utf-8")
    (directory / "all_b.js").write_text(SEARCH_DATA_B, encoding="utf-8")
    (directory / "classes_0.js").write_text(SEARCH_DATA_CLASSES, encoding="utf-8")
    (directory / "functions_0.js").write_text(SEARCH_DATA_FUNCTIONS, encoding="utf-8")
    (directory / "search.js").write_text("function convertToId(search) { return search; }\n", encoding="utf-8")
    return directory


@pytest.fixture
def catalog(search_dir):
    # type: (typing.Any) -> typing.Any
    """SearchCatalog over the test search directory."""
    from doxysearch.catalog import SearchCatalog

    catalog = SearchCatalog(search_dir)
    yield catalog
    catalog.close()


@pytest.fixture
def test_client(search_dir):
    # type: (typing.Any) -> typing.Generator[TestClient, None, None]
    """
    Create TestClient serving the test search directory.

    The lifespan opens the catalog from settings, so the search directory is
    swapped in for the duration of the test.
    """
    import doxysearch.settings
    from doxysearch.server import app

    settings = doxysearch.settings.doxy_settings
    original_dir = settings.search_dir
    original_secret = settings.api_secret
    try:
        settings.search_dir = str(search_dir)
        settings.api_secret = None
        with TestClient(app) as client:
            yield client
    finally:
        settings.search_dir = original_dir
        settings.api_secret = original_secret


@pytest.fixture
def search_sections():
    # type: () -> str
    """Doxygen section descriptor (searchdata.js) for the test search directory."""
    return SEARCH_SECTIONS
