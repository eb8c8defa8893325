# bfscore

Small, dependency-free building blocks for a file finder, usable on their
own from Python code.

## Installation

    pip install bfscore

## What is inside

### `bfscore.timeutil`

- `BrokenTime`: a frozen dataclass of broken-down time with the usual C
  conventions (`year` counts from 1900, `month` and `yearday` from 0,
  `weekday` from Sunday = 0, `isdst` negative for unknown).
- `localtime(timestamp)` and `gmtime(timestamp)` return a `BrokenTime`.
- `mktime(tm)` turns a local `BrokenTime` into a timestamp.
- `timegm(tm)` turns a UTC `BrokenTime`, whose fields may be out of range,
  into a timestamp and returns it together with the normalised
  `BrokenTime`. It raises `OverflowError` when a field or the result
  overflows.
- `parse_timestamp(text)` parses ISO 8601-style strings such as
  `2021-03-04`, `20210304T0506`, `2021-03-04T05:06:07Z` or
  `2021-03-04T05:06:07+01:00`. Times without a zone are local. Malformed
  input raises `ValueError`.

### `bfscore.trie` and `bfscore.trieleaf`

`Trie` is a compressed (QP) trie over byte-string keys that branches on one
nibble at a time.

- `insert_str(key)` / `find_str(key)` store and look up strings, kept with a
  terminating NUL byte; `insert_mem(key)` / `find_mem(key)` work on raw
  bytes. Inserting an existing key returns its leaf; raw keys must be
  prefix-free, otherwise `insert_mem` raises `ValueError`.
- `find_prefix(key)` returns the leaf holding the longest stored string that
  is a prefix of `key`; `find_postfix(key)` returns a leaf whose string
  starts with `key`.
- `first_leaf()`, `remove(leaf)` (raises `KeyError` for a leaf not in the
  trie), `clear()`, `len(trie)` and iteration over the leaves.

Each entry is a `TrieLeaf` with the stored `key` bytes, its `length`, a free
`value` slot, and `text()` giving the key as a string up to its first NUL.

### `bfscore.regex`

`Regex(pattern, regex_type, ignore_case)` compiles a pattern written in one
of the `RegexType` flavours (`POSIX_BASIC`, `POSIX_EXTENDED`, `EMACS`,
`GREP`) by translating it to Python's `re` syntax; `translate(pattern,
regex_type)` exposes that translation. `Regex.search(text, anchored)` tells
whether the pattern matches, with `anchored=True` requiring the whole text
to match. Text that is not valid UTF-8 never matches. Malformed patterns
raise `RegexError`, a subclass of `ValueError`.

### `bfscore.typo`

`typo_distance(actual, expected)` is an edit distance in which inserting or
deleting a character costs 12 and substituting one costs the distance
between the two keys on a QWERTY keyboard (`char_distance(a, b)`). It is
meant for "did you mean" suggestions.

## Examples

    from bfscore.regex import Regex, RegexType
    from bfscore.timeutil import parse_timestamp
    from bfscore.trie import Trie
    from bfscore.typo import typo_distance

    trie = Trie()
    trie.insert_str("pre")
    trie.insert_str("prefix")
    print(trie.find_prefix("prefixes").text())   # prefix

    print(parse_timestamp("1970-01-02T00:00:00Z"))   # 86400

    print(Regex(r"\(ab\)*c", RegexType.POSIX_BASIC).search("ababc", anchored=True))   # True

    print(typo_distance("-nmae", "-name") < typo_distance("-nmae", "-type"))   # True

## What this package does not do

It is a library of parts, not a finder: there is no command-line program,
no directory walking, no wrapper over file status information, no file-mode
formatting, and no starting of child processes.

## Running the tests

    pip install bfscore[test]
    pytest