"""Indentation arithmetic: widths, (levels, remainder) pairs and whitespace strings.

A width reported by an oracle running with tabs ``step`` columns wide splits
exactly into whole indentation levels (one tab each) and an alignment
remainder (spaces).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar

TAB = "\t"
SPACE = " "

# Whitespace class used for the leading and trailing runs of a line.
_WS = " \t\f\v\r"
_LEADING_RE = re.compile(f"^[{_WS}]*")
_TRAILING_RE = re.compile(f"[{_WS}]*$")


@dataclass(frozen=True)
class IndentDecomposition:
    """Result of asking for a line's indentation.

    ``valid`` is False when no oracle is active; ``levels`` and ``remainder``
    are then both zero and carry no meaning.
    """

    valid: bool
    levels: int = 0
    remainder: int = 0

    INACTIVE: ClassVar[IndentDecomposition]

    @property
    def indent(self) -> str:
        """The whitespace string encoding this decomposition."""
        return encode(self.levels, self.remainder)

    @property
    def length(self) -> int:
        """Number of raw characters in :attr:`indent`."""
        return self.levels + self.remainder

    def display_width(self, tabstop: int) -> int:
        """Screen cells taken by the indentation when tabs are ``tabstop`` wide."""
        return self.levels * tabstop + self.remainder


IndentDecomposition.INACTIVE = IndentDecomposition(valid=False)


def decompose(raw_width: int, step: int) -> tuple[int, int]:
    """Split ``raw_width`` into ``(levels, remainder)`` with ``0 <= remainder < step``."""
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    if raw_width < 0:
        raise ValueError(f"raw_width must be non-negative, got {raw_width}")
    return divmod(raw_width, step)


def encode(levels: int, remainder: int) -> str:
    """Return ``levels`` tabs followed by ``remainder`` spaces."""
    if levels < 0 or remainder < 0:
        raise ValueError(f"cannot encode negative indentation ({levels}, {remainder})")
    return TAB * levels + SPACE * remainder


def rendered_width(indent: str, step: int) -> int:
    """Width of an indentation string with tabs advancing to multiples of ``step``."""
    width = 0
    for ch in indent:
        if ch == TAB:
            width += step - width % step
        else:
            width += 1
    return width


def leading_whitespace(text: str) -> str:
    """The maximal whitespace prefix of ``text``."""
    return _LEADING_RE.match(text).group(0)


def trailing_whitespace(text: str) -> str:
    """The maximal whitespace suffix of ``text``."""
    return _TRAILING_RE.search(text).group(0)


def strip_leading(text: str) -> str:
    return text[len(leading_whitespace(text)):]


def strip_trailing(text: str) -> str:
    trailing = trailing_whitespace(text)
    return text[: len(text) - len(trailing)] if trailing else text


def replace_leading(text: str, indent: str) -> str:
    """Swap the leading whitespace run of ``text`` for ``indent``."""
    return indent + strip_leading(text)
