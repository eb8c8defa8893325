"""The leaf type stored in a trie."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = ["TrieLeaf"]


@dataclass(eq=False)
class TrieLeaf:
    """A key held by a trie, with an arbitrary associated value.

    Leaves compare by identity, so a leaf returned by a lookup can be handed
    back to the trie to remove exactly that entry.
    """

    key: bytes
    value: Any = None

    @property
    def length(self) -> int:
        """The length of the key in bytes, including any terminating NUL."""
        return len(self.key)

    def text(self) -> str:
        """The key as a string, up to its first NUL byte."""
        head, _, _ = self.key.partition(b"\0")
        return head.decode("utf-8", "surrogateescape")