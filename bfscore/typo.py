"""A keyboard-aware edit distance, for suggesting corrections to typos."""

from __future__ import annotations

__all__ = ["char_distance", "typo_distance"]

_INSERT_COST = 12

# Key positions on a QWERTY keyboard: (column, row, shift)
_KEY_COORDS: dict[str, tuple[int, int, int]] = {
    "`": (0, 0, 0), "~": (0, 0, 1),
    "1": (3, 0, 0), "!": (3, 0, 1),
    "2": (6, 0, 0), "@": (6, 0, 1),
    "3": (9, 0, 0), "#": (9, 0, 1),
    "4": (12, 0, 0), "$": (12, 0, 1),
    "5": (15, 0, 0), "%": (15, 0, 1),
    "6": (18, 0, 0), "^": (18, 0, 1),
    "7": (21, 0, 0), "&": (21, 0, 1),
    "8": (24, 0, 0), "*": (24, 0, 1),
    "9": (27, 0, 0), "(": (27, 0, 1),
    "0": (30, 0, 0), ")": (30, 0, 1),
    "-": (33, 0, 0), "_": (33, 0, 1),
    "=": (36, 0, 0), "+": (36, 0, 1),

    "\t": (1, 3, 0),
    "q": (4, 3, 0), "Q": (4, 3, 1),
    "w": (7, 3, 0), "W": (7, 3, 1),
    "e": (10, 3, 0), "E": (10, 3, 1),
    "r": (13, 3, 0), "R": (13, 3, 1),
    "t": (16, 3, 0), "T": (16, 3, 1),
    "y": (19, 3, 0), "Y": (19, 3, 1),
    "u": (22, 3, 0), "U": (22, 3, 1),
    "i": (25, 3, 0), "I": (25, 3, 1),
    "o": (28, 3, 0), "O": (28, 3, 1),
    "p": (31, 3, 0), "P": (31, 3, 1),
    "[": (34, 3, 0), "{": (34, 3, 1),
    "]": (37, 3, 0), "}": (37, 3, 1),
    "\\": (40, 3, 0), "|": (40, 3, 1),

    "a": (5, 6, 0), "A": (5, 6, 1),
    "s": (8, 6, 0), "S": (8, 6, 1),
    "d": (11, 6, 0), "D": (11, 6, 1),
    "f": (14, 6, 0), "F": (14, 6, 1),
    "g": (17, 6, 0), "G": (17, 6, 1),
    "h": (20, 6, 0), "H": (20, 6, 1),
    "j": (23, 6, 0), "J": (23, 6, 1),
    "k": (26, 6, 0), "K": (26, 6, 1),
    "l": (29, 6, 0), "L": (29, 6, 1),
    ";": (32, 6, 0), ":": (32, 6, 1),
    "'": (35, 6, 0), '"': (35, 6, 1),
    "\n": (38, 6, 0),

    "z": (6, 9, 0), "Z": (6, 9, 1),
    "x": (9, 9, 0), "X": (9, 9, 1),
    "c": (12, 9, 0), "C": (12, 9, 1),
    "v": (15, 9, 0), "V": (15, 9, 1),
    "b": (18, 9, 0), "B": (18, 9, 1),
    "n": (21, 9, 0), "N": (21, 9, 1),
    "m": (24, 9, 0), "M": (24, 9, 1),
    ",": (27, 9, 0), "<": (27, 9, 1),
    ".": (30, 9, 0), ">": (30, 9, 1),
    "/": (33, 9, 0), "?": (33, 9, 1),

    " ": (18, 12, 0),
}

_ORIGIN = (0, 0, 0)


def char_distance(a: str, b: str) -> int:
    """Manhattan distance between two characters' keys; unknown keys sit at the origin."""
    ac = _KEY_COORDS.get(a, _ORIGIN)
    bc = _KEY_COORDS.get(b, _ORIGIN)
    return sum(abs(x - y) for x, y in zip(ac, bc))


def typo_distance(actual: str, expected: str) -> int:
    """The "typo" distance from what the user typed to a valid string.

    A Levenshtein distance where inserting or deleting a character costs 12
    and substituting one costs the keyboard distance between the two keys.
    """
    previous = [_INSERT_COST * j for j in range(len(expected) + 1)]
    for a in actual:
        current = [previous[0] + _INSERT_COST]
        for j, b in enumerate(expected, start=1):
            current.append(
                min(
                    previous[j - 1] + char_distance(a, b),
                    previous[j] + _INSERT_COST,
                    current[j - 1] + _INSERT_COST,
                )
            )
        previous = current
    return previous[-1]