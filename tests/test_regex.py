import pytest

from bfscore.regex import Regex, RegexError, RegexType, translate

BASIC = RegexType.POSIX_BASIC
EXTENDED = RegexType.POSIX_EXTENDED
EMACS = RegexType.EMACS
GREP = RegexType.GREP


def test_translate_basic_group():
    assert translate("a\\(b\\)*", BASIC) == "(?s)a(b)*"


def test_translate_emacs_plus():
    assert translate("x+", EMACS) == "x+"


def test_unanchored_and_anchored():
    regex = Regex("b")
    assert regex.search("abc") is True
    assert regex.search("abc", anchored=True) is False
    assert regex.search("b", anchored=True) is True


@pytest.mark.parametrize(
    "pattern, regex_type, text, expected",
    [
        ("a\\(b\\)*c", BASIC, "abbc", True),
        ("a+", BASIC, "aa", False),
        ("a+", BASIC, "a+", True),
        ("a+", EXTENDED, "aaa", True),
        ("*a", BASIC, "*a", True),
        ("\\(a\\)\\1", BASIC, "aa", True),
        ("\\(a\\)\\1", BASIC, "ab", False),
        ("a\\{2,3\\}", BASIC, "aaa", True),
        ("a\\{2,3\\}", BASIC, "aaaa", False),
        ("a{2}", EXTENDED, "aa", True),
        ("a{x", EXTENDED, "a{x", True),
        ("a**", EXTENDED, "aaa", True),
        ("(ab|cd)+", EXTENDED, "abcdab", True),
        ("foo\\|bar", EMACS, "bar", True),
        ("a+", EMACS, "aaa", True),
        ("a\\+", GREP, "aaa", True),
        ("a+", GREP, "a+", True),
        ("x\\|y", GREP, "y", True),
        ("[[:digit:]]+", EXTENDED, "123", True),
        ("[[:digit:]]+", EXTENDED, "12a", False),
        ("[]a]", BASIC, "]", True),
        ("[a-]", BASIC, "-", True),
        ("a^b", BASIC, "a^b", True),
        ("a$b", BASIC, "a$b", True),
        ("a.c", BASIC, "a\\c", True),
    ],
)
def test_anchored_matches(pattern, regex_type, text, expected):
    assert Regex(pattern, regex_type).search(text, anchored=True) is expected


def test_negated_bracket():
    regex = Regex("[^a-c]")
    assert regex.search("abc") is False
    assert regex.search("abd") is True


def test_anchors_posix():
    regex = Regex("^ab$")
    assert regex.search("ab") is True
    assert regex.search("xab") is False
    assert regex.search("ab\n") is False


def test_dot_matches_newline_in_posix_only():
    assert Regex(".", EXTENDED).search("\n", anchored=True) is True
    assert Regex(".", EMACS).search("\n", anchored=True) is False


def test_emacs_line_anchor():
    assert Regex("^b", EMACS).search("a\nb") is True
    assert Regex("^b", BASIC).search("a\nb") is False


def test_grep_word_boundaries():
    regex = Regex("\\<foo\\>", GREP)
    assert regex.search("a foo b") is True
    assert regex.search("afoo") is False


def test_ignore_case():
    assert Regex("abc", ignore_case=True).search("ABC", anchored=True) is True
    assert Regex("abc").search("ABC", anchored=True) is False


def test_invalid_utf8_never_matches():
    regex = Regex(".*")
    assert regex.search(b"\xff") is False
    assert regex.search(b"abc", anchored=True) is True


def test_surrogate_text_never_matches():
    assert Regex(".*").search("a\udcff") is False


@pytest.mark.parametrize(
    "pattern, regex_type",
    [
        ("[z-a]", BASIC),
        ("[[:nope:]]", BASIC),
        ("[abc", BASIC),
        ("\\(a", BASIC),
        ("a\\)", BASIC),
        ("(a", EXTENDED),
        ("a)", EXTENDED),
        ("*a", EXTENDED),
        ("a\\{3,1\\}", BASIC),
        ("a\\{x\\}", BASIC),
        ("abc\\", BASIC),
        ("\\1", BASIC),
    ],
)
def test_invalid_patterns(pattern, regex_type):
    with pytest.raises(RegexError):
        Regex(pattern, regex_type)


def test_regex_error_is_value_error():
    with pytest.raises(ValueError):
        translate("[", BASIC)


def test_attributes_kept():
    regex = Regex("x", EMACS, ignore_case=True)
    assert (regex.pattern, regex.regex_type, regex.ignore_case) == ("x", EMACS, True)