"""A QP trie: a compact radix tree that branches on one nibble at a time.

Internal nodes hold only the nibble offset they test and a sparse array of
children, indexed through a 16-bit bitmap.  Whole keys are stored only in
the leaves.  Keys must be prefix-free, which string keys are automatically
since they carry a terminating NUL byte.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Union

from .trieleaf import TrieLeaf

__all__ = ["Trie"]

_Child = Union["_Node", TrieLeaf]


@dataclass(eq=False)
class _Node:
    """An internal node testing the nibble at ``offset`` of the key."""

    offset: int
    bitmap: int = 0
    children: list[_Child] = field(default_factory=list)

    def index_of(self, bit: int) -> int:
        return (self.bitmap & (bit - 1)).bit_count()


def _nibble(key: bytes, offset: int) -> int:
    """The nibble at ``offset``: low half of a byte first, then the high half."""
    shift = (offset & 1) << 2
    return (key[offset >> 1] >> shift) & 0xF


def _common_length(a: bytes, b: bytes, length: int) -> int:
    """Length of the common prefix of ``a`` and ``b`` within ``length`` bytes."""
    if a[:length] == b[:length]:
        return length
    lo, hi = 0, length
    while hi - lo > 1:
        mid = (lo + hi) // 2
        if a[lo:mid] == b[lo:mid]:
            lo = mid
        else:
            hi = mid
    return lo


def _key_mismatch(key1: bytes, key2: bytes, length: int) -> int:
    """The offset of the first nibble that differs between two keys."""
    i = _common_length(key1, key2, length)
    offset = 0
    if i < length:
        offset = int((key1[i] & 0xF) == (key2[i] & 0xF))
    return offset | (i << 1)


def _encode_str(key: str | bytes) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8", "surrogateescape")
    return bytes(key)


def _terminal_leaf(node: _Node) -> TrieLeaf | None:
    """Find a leaf that may end at this node; a NUL byte may take two nibbles."""
    for _ in range(2):
        if not node.bitmap & 1:
            break
        child = node.children[0]
        if isinstance(child, TrieLeaf):
            return child
        node = child
    return None


def _check_prefix(leaf: TrieLeaf | None, skip: int, key: bytes) -> bool:
    """Whether ``leaf`` (a NUL-terminated key) is a prefix of ``key``."""
    if leaf is None or leaf.length > len(key):
        return False
    end = leaf.length - 1
    return key[skip:end] == leaf.key[skip:end]


class Trie:
    """A set of byte-string keys, each stored in a :class:`TrieLeaf`."""

    def __init__(self) -> None:
        self._root: _Child | None = None
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[TrieLeaf]:
        if self._root is None:
            return
        stack: list[_Child] = [self._root]
        while stack:
            item = stack.pop()
            if isinstance(item, TrieLeaf):
                yield item
            else:
                stack.extend(reversed(item.children))

    def _set_slot(self, owner: _Node | None, index: int, value: _Child) -> None:
        if owner is None:
            self._root = value
        else:
            owner.children[index] = value

    def _representative(self, key: bytes) -> TrieLeaf | None:
        """A leaf agreeing with ``key`` at every branch point on its path."""
        current = self._root
        if current is None:
            return None
        while isinstance(current, _Node):
            index = 0
            if (current.offset >> 1) < len(key):
                bit = 1 << _nibble(key, current.offset)
                if current.bitmap & bit:
                    index = current.index_of(bit)
            current = current.children[index]
        return current

    def first_leaf(self) -> TrieLeaf | None:
        """The first leaf in trie order, or None if the trie is empty."""
        return self._representative(b"")

    def find_str(self, key: str | bytes) -> TrieLeaf | None:
        """Find the leaf for a string key (stored with a terminating NUL)."""
        return self.find_mem(_encode_str(key) + b"\0")

    def find_mem(self, key: bytes) -> TrieLeaf | None:
        """Find the leaf for an exact byte key."""
        key = bytes(key)
        rep = self._representative(key)
        if rep is not None and rep.key == key:
            return rep
        return None

    def find_postfix(self, key: str | bytes) -> TrieLeaf | None:
        """Find a leaf whose key starts with the given string, or None."""
        raw = _encode_str(key)
        rep = self._representative(raw + b"\0")
        if rep is not None and rep.length >= len(raw) and rep.key[: len(raw)] == raw:
            return rep
        return None

    def find_prefix(self, key: str | bytes) -> TrieLeaf | None:
        """Find the leaf holding the longest string that is a prefix of ``key``."""
        current = self._root
        if current is None:
            return None

        raw = _encode_str(key) + b"\0"
        length = len(raw)
        best: TrieLeaf | None = None
        skip = 0

        while isinstance(current, _Node):
            offset = current.offset
            if (offset >> 1) >= length:
                return best

            leaf = _terminal_leaf(current)
            if _check_prefix(leaf, skip, raw):
                best = leaf
                skip = offset >> 1

            bit = 1 << _nibble(raw, offset)
            if not current.bitmap & bit:
                return best
            current = current.children[current.index_of(bit)]

        if _check_prefix(current, skip, raw):
            best = current
        return best

    def insert_str(self, key: str | bytes) -> TrieLeaf:
        """Insert a string key, returning its (possibly pre-existing) leaf."""
        return self.insert_mem(_encode_str(key) + b"\0")

    def insert_mem(self, key: bytes) -> TrieLeaf:
        """Insert a byte key, returning its (possibly pre-existing) leaf.

        Raises ValueError if the key is a proper prefix of a stored key or
        the other way round, since the trie only holds prefix-free keys.
        """
        key = bytes(key)
        rep = self._representative(key)
        if rep is None:
            leaf = TrieLeaf(key)
            self._root = leaf
            self._size += 1
            return leaf

        limit = min(len(key), rep.length)
        mismatch = _key_mismatch(key, rep.key, limit)
        if (mismatch >> 1) >= limit:
            if len(key) == rep.length:
                return rep
            raise ValueError("trie keys must be prefix-free")

        owner: _Node | None = None
        slot = 0
        current: _Child = self._root  # type: ignore[assignment]
        while isinstance(current, _Node):
            if current.offset > mismatch:
                break
            bit = 1 << _nibble(key, current.offset)
            if current.bitmap & bit:
                owner, slot = current, current.index_of(bit)
                current = current.children[slot]
            else:
                return self._node_insert(current, key, bit)

        return self._split(owner, slot, current, key, rep, mismatch)

    def _node_insert(self, node: _Node, key: bytes, bit: int) -> TrieLeaf:
        """Add a leaf for ``key`` as a new child of an existing node."""
        leaf = TrieLeaf(key)
        node.bitmap |= bit
        node.children.insert(node.index_of(bit), leaf)
        self._size += 1
        return leaf

    def _split(
        self,
        owner: _Node | None,
        slot: int,
        current: _Child,
        key: bytes,
        rep: TrieLeaf,
        mismatch: int,
    ) -> TrieLeaf:
        """Put a new branch node at ``mismatch`` above ``current``."""
        key_nibble = _nibble(key, mismatch)
        rep_nibble = _nibble(rep.key, mismatch)
        leaf = TrieLeaf(key)
        node = _Node(offset=mismatch, bitmap=(1 << key_nibble) | (1 << rep_nibble))
        node.children = [current, leaf] if key_nibble > rep_nibble else [leaf, current]
        self._set_slot(owner, slot, node)
        self._size += 1
        return leaf

    def remove(self, leaf: TrieLeaf) -> None:
        """Remove a leaf previously returned by this trie.

        Raises KeyError if the leaf is not in the trie.
        """
        if self._root is None:
            raise KeyError(leaf.key)

        owner: _Node | None = None
        slot = 0
        branch: _Node | None = None
        branch_owner: _Node | None = None
        branch_slot = 0
        child_bit = 0
        child_index = 0

        current: _Child = self._root
        while isinstance(current, _Node):
            if (current.offset >> 1) >= leaf.length:
                raise KeyError(leaf.key)
            bit = 1 << _nibble(leaf.key, current.offset)
            if not current.bitmap & bit:
                raise KeyError(leaf.key)
            index = current.index_of(bit)

            # Only nodes with several children can lose one
            if current.bitmap & (current.bitmap - 1):
                branch, branch_owner, branch_slot = current, owner, slot
                child_bit, child_index = bit, index

            owner, slot = current, index
            current = current.children[index]

        if current is not leaf:
            raise KeyError(leaf.key)

        self._size -= 1
        if branch is None:
            self._root = None
            return

        del branch.children[child_index]
        branch.bitmap ^= child_bit
        if len(branch.children) == 1:
            self._set_slot(branch_owner, branch_slot, branch.children[0])

    def clear(self) -> None:
        """Remove every key."""
        self._root = None
        self._size = 0