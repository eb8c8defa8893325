"""Regular expressions in several syntax flavours, compiled with :mod:`re`.

Patterns are written in POSIX basic or extended syntax, Emacs syntax or grep
syntax, and are translated into Python's own syntax before compiling.
"""

from __future__ import annotations

import enum
import re
import string
from dataclasses import dataclass, field

__all__ = ["RegexType", "RegexError", "Regex", "translate"]


class RegexType(enum.Enum):
    """Regex syntax flavours."""

    POSIX_BASIC = "posix-basic"
    POSIX_EXTENDED = "posix-extended"
    EMACS = "emacs"
    GREP = "grep"


class RegexError(ValueError):
    """A pattern that cannot be compiled or executed."""


def _class_char(c: str) -> str:
    """A character as it may appear inside a Python character set."""
    return c if c.isalnum() else "\\" + c


_CLASSES = {
    "alpha": "a-zA-Z",
    "digit": "0-9",
    "alnum": "a-zA-Z0-9",
    "upper": "A-Z",
    "lower": "a-z",
    "space": " \\t\\n\\r\\f\\v",
    "blank": " \\t",
    "punct": "".join(_class_char(c) for c in string.punctuation),
    "print": "\\x20-\\x7e",
    "graph": "\\x21-\\x7e",
    "cntrl": "\\x00-\\x1f\\x7f",
    "xdigit": "0-9A-Fa-f",
}

_ATOM = "atom"
_REPEAT = "repeat"
_ANCHOR = "anchor"


@dataclass
class _Piece:
    text: str
    kind: str = _ATOM


@dataclass
class _Frame:
    """The alternatives of one group (or of the whole pattern)."""

    alternatives: list[list[_Piece]] = field(default_factory=lambda: [[]])

    @property
    def current(self) -> list[_Piece]:
        return self.alternatives[-1]

    def render(self) -> str:
        return "|".join("".join(p.text for p in alt) for alt in self.alternatives)


class _Translator:
    def __init__(self, pattern: str, regex_type: RegexType) -> None:
        self.pattern = pattern
        self.type = regex_type
        self.pos = 0
        self.stack = [_Frame()]
        self.extended = regex_type is RegexType.POSIX_EXTENDED
        self.posix = regex_type in (RegexType.POSIX_BASIC, RegexType.POSIX_EXTENDED)

    # Helpers

    def _peek(self, n: int = 0) -> str:
        index = self.pos + n
        return self.pattern[index] if index < len(self.pattern) else ""

    def _startswith(self, text: str) -> bool:
        return self.pattern.startswith(text, self.pos)

    @property
    def _frame(self) -> _Frame:
        return self.stack[-1]

    def _add(self, text: str, kind: str = _ATOM) -> None:
        self._frame.current.append(_Piece(text, kind))

    def _literal(self, c: str) -> None:
        self._add(re.escape(c))

    # Constructs

    def _caret(self) -> None:
        if self.extended or not self._frame.current:
            self._add("^" if self.posix else "(?m:^)", _ANCHOR)
        else:
            self._literal("^")

    def _dollar(self) -> None:
        at_end = self.pos >= len(self.pattern)
        before_close = self._startswith("\\)") and not self.extended
        before_alt = self._startswith("\\|") and self.type in (RegexType.EMACS, RegexType.GREP)
        if self.extended or at_end or before_close or before_alt:
            self._add("\\Z" if self.posix else "(?m:$)", _ANCHOR)
        else:
            self._literal("$")

    def _repeat(self, op: str, literal: str | None) -> None:
        current = self._frame.current
        if not current or current[-1].kind == _ANCHOR:
            if self.extended or literal is None:
                raise RegexError("target of repeat operator is not specified")
            self._literal(literal)
            return
        last = current[-1]
        if last.kind == _REPEAT:
            current[-1] = _Piece(f"(?:{last.text}){op}", _REPEAT)
        else:
            current[-1] = _Piece(last.text + op, _REPEAT)

    def _interval(self, closing: str) -> str | None:
        """Parse the body of an interval after its opening brace."""
        start = self.pos
        match = re.compile(r"([0-9]*)(,([0-9]*))?").match(self.pattern, self.pos)
        assert match is not None
        low, comma, high = match.group(1), match.group(2), match.group(3)
        end = match.end()
        if not self.pattern.startswith(closing, end) or (not low and not comma):
            self.pos = start
            return None
        self.pos = end + len(closing)
        lo = int(low) if low else 0
        if comma is None:
            return "{%d}" % lo
        if high:
            hi = int(high)
            if lo > hi:
                raise RegexError("invalid interval")
            return "{%d,%d}" % (lo, hi)
        return "{%d,}" % lo

    def _open(self) -> None:
        self.stack.append(_Frame())

    def _close(self) -> None:
        if len(self.stack) == 1:
            raise RegexError("unmatched close parenthesis")
        frame = self.stack.pop()
        self._add(f"({frame.render()})")

    def _alternate(self) -> None:
        self._frame.alternatives.append([])

    def _collating(self, kind: str) -> str:
        """Parse ``[.c.]``, ``[=c=]`` or ``[:name:]`` starting at the bracket."""
        end = self.pattern.find(kind + "]", self.pos + 2)
        if end < 0:
            raise RegexError("unterminated bracket expression")
        name = self.pattern[self.pos + 2 : end]
        self.pos = end + 2
        return name

    def _bracket(self) -> str:
        negate = self._peek() == "^"
        if negate:
            self.pos += 1
        items: list[str] = []
        first = True
        while True:
            c = self._peek()
            if not c:
                raise RegexError("unterminated bracket expression")
            if c == "]" and not first:
                self.pos += 1
                break
            first = False

            if c == "[" and self._peek(1) in (":", "=", "."):
                kind = self._peek(1)
                name = self._collating(kind)
                if kind == ":":
                    try:
                        items.append(_CLASSES[name])
                    except KeyError:
                        raise RegexError(f"invalid character class: {name!r}") from None
                    continue
                if len(name) != 1:
                    raise RegexError("invalid collating element")
                start = name
            else:
                start = c
                self.pos += 1

            if self._peek() == "-" and self._peek(1) not in ("]", ""):
                self.pos += 1
                if self._startswith("[."):
                    stop = self._collating(".")
                    if len(stop) != 1:
                        raise RegexError("invalid collating element")
                else:
                    stop = self._peek()
                    self.pos += 1
                if ord(stop) < ord(start):
                    raise RegexError("invalid range end")
                items.append(f"{_class_char(start)}-{_class_char(stop)}")
            else:
                items.append(_class_char(start))
        return "[" + ("^" if negate else "") + "".join(items) + "]"

    def _escape(self) -> None:
        c = self._peek()
        if not c:
            raise RegexError("trailing backslash")
        self.pos += 1
        kind = self.type

        if c in "123456789":
            self._add(f"(?:\\{c})")
            return
        if kind is not RegexType.POSIX_EXTENDED:
            if c == "(":
                self._open()
                return
            if c == ")":
                self._close()
                return
            if c == "{":
                interval = self._interval("\\}")
                if interval is None:
                    raise RegexError("invalid interval")
                self._repeat(interval, None)
                return
        if kind in (RegexType.EMACS, RegexType.GREP):
            if c == "|":
                self._alternate()
                return
            word_ops = {
                "<": ("\\b(?=\\w)", _ANCHOR),
                ">": ("\\b(?<=\\w)", _ANCHOR),
                "b": ("\\b", _ANCHOR),
                "B": ("\\B", _ANCHOR),
                "w": ("\\w", _ATOM),
                "W": ("\\W", _ATOM),
            }
            if c in word_ops:
                self._add(*word_ops[c])
                return
        if kind is RegexType.GREP and c in "+?":
            self._repeat(c, c)
            return
        if kind is RegexType.EMACS and c in "`'":
            self._add("\\A" if c == "`" else "\\Z", _ANCHOR)
            return
        self._literal(c)

    def run(self) -> str:
        while self.pos < len(self.pattern):
            c = self.pattern[self.pos]
            self.pos += 1
            if c == "\\":
                self._escape()
            elif c == "[":
                self._add(self._bracket())
            elif c == ".":
                self._add(".")
            elif c == "^":
                self._caret()
            elif c == "$":
                self._dollar()
            elif c == "*":
                self._repeat("*", "*")
            elif c in "+?" and self.type in (RegexType.POSIX_EXTENDED, RegexType.EMACS):
                self._repeat(c, c)
            elif self.extended and c == "{":
                interval = self._interval("}")
                if interval is None:
                    self._literal("{")
                else:
                    self._repeat(interval, None)
            elif self.extended and c == "(":
                self._open()
            elif self.extended and c == ")":
                self._close()
            elif self.extended and c == "|":
                self._alternate()
            else:
                self._literal(c)

        if len(self.stack) > 1:
            raise RegexError("unmatched open parenthesis")
        body = self._frame.render()
        return "(?s)" + body if self.posix else body


def translate(pattern: str, regex_type: RegexType = RegexType.POSIX_BASIC) -> str:
    """Translate a pattern of the given flavour into Python :mod:`re` syntax.

    Raises RegexError for malformed patterns.
    """
    return _Translator(pattern, RegexType(regex_type)).run()


def _decode(text: str | bytes) -> str | None:
    """The text as a valid string, or None if it is not valid UTF-8."""
    try:
        if isinstance(text, (bytes, bytearray, memoryview)):
            return bytes(text).decode("utf-8")
        text.encode("utf-8")
    except (UnicodeDecodeError, UnicodeEncodeError):
        return None
    return text


class Regex:
    """A compiled regular expression."""

    def __init__(
        self,
        pattern: str,
        regex_type: RegexType = RegexType.POSIX_BASIC,
        ignore_case: bool = False,
    ) -> None:
        self.pattern = pattern
        self.regex_type = RegexType(regex_type)
        self.ignore_case = ignore_case
        translated = translate(pattern, self.regex_type)
        try:
            self._compiled = re.compile(translated, re.IGNORECASE if ignore_case else 0)
        except re.error as exc:
            raise RegexError(str(exc)) from exc

    def __repr__(self) -> str:
        return (
            f"Regex({self.pattern!r}, {self.regex_type}, "
            f"ignore_case={self.ignore_case})"
        )

    def search(self, text: str | bytes, anchored: bool = False) -> bool:
        """Whether the pattern matches ``text``.

        With ``anchored``, only a match of the entire text counts.  Text that
        is not valid UTF-8 never matches.
        """
        decoded = _decode(text)
        if decoded is None:
            return False
        if anchored:
            return self._compiled.fullmatch(decoded) is not None
        return self._compiled.search(decoded) is not None