"""Building blocks for a file finder: a trie, time helpers, regexes and typo distance."""

__version__ = "2.4.1"

__all__ = ["regex", "timeutil", "trie", "trieleaf", "typo"]