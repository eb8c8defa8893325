from bfscore.trieleaf import TrieLeaf


def test_text_strips_terminator():
    leaf = TrieLeaf(b"foo\0")
    assert leaf.text() == "foo"
    assert leaf.length == len(b"foo\0")


def test_text_without_terminator():
    leaf = TrieLeaf(b"prefix")
    assert leaf.text() == "prefix"
    assert leaf.length == len(b"prefix")


def test_text_stops_at_first_nul():
    assert TrieLeaf(b"ab\0cd\0").text() == "ab"


def test_text_roundtrips_undecodable_bytes():
    raw = b"\xff\xfe"
    leaf = TrieLeaf(raw + b"\0")
    assert leaf.text().encode("utf-8", "surrogateescape") == raw


def test_value_defaults_and_assignment():
    leaf = TrieLeaf(b"bar\0")
    assert leaf.value is None
    leaf.value = [1, 2]
    assert leaf.value == [1, 2]


def test_leaves_compare_by_identity():
    first = TrieLeaf(b"baz\0")
    second = TrieLeaf(b"baz\0")
    assert first != second
    assert first == first