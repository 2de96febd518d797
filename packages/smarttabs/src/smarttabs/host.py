"""Host editor interface and an in-memory reference host.

smarttabs never stores text itself. Every read and write goes through an
:class:`EditorHost`, so undo grouping and other host bookkeeping keep
working. :class:`BufferHost` implements the interface over a list of lines
and is what the CLI and the tests drive.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from smarttabs.codec import leading_whitespace, rendered_width, strip_leading
from smarttabs.cursor import virtual_column

if TYPE_CHECKING:
    from smarttabs.oracle import AutoIndentOracle

logger = logging.getLogger(__name__)


@dataclass
class HostOptions:
    """Editor settings smarttabs reads (and, for the tab widths, briefly overrides)."""

    tabstop: int = 8
    shiftwidth: int = 8
    expandtab: bool = False
    # Paste mode: keep whitespace exactly as typed or pasted.
    paste: bool = False
    comment_leaders: tuple[str, ...] = ("//", "#")
    continue_comments: bool = True


@dataclass(frozen=True)
class Cursor:
    line: int
    column: int


@runtime_checkable
class EditorHost(Protocol):
    """What smarttabs needs from a text editor.

    Lines and columns are 1-based. Column ``len(line) + 1`` is the
    end-of-line position used in insert mode.
    """

    options: HostOptions
    oracle: AutoIndentOracle | None

    def line_count(self) -> int:
        """Number of lines in the buffer (at least 1)."""
        ...

    def get_line(self, line_number: int) -> str:
        ...

    def set_line(self, line_number: int, text: str) -> None:
        """Replace a whole line through the host's normal (undoable) edit path."""
        ...

    def get_cursor(self) -> Cursor:
        ...

    def set_cursor(self, line_number: int, column: int) -> None:
        ...

    def insert_text(self, text: str) -> None:
        """Insert ``text`` at the cursor and move the cursor past it."""
        ...

    def insert_line_break(self) -> None:
        """Split the cursor line like pressing Enter, with native auto-indent."""
        ...

    def open_line_above(self) -> None:
        """Native "open line above": new line, cursor at its end, comment continued."""
        ...

    def open_line_below(self) -> None:
        """Native "open line below": new line, cursor at its end, comment continued."""
        ...

    def virtual_column_of(self, line_number: int, column: int) -> int:
        """Screen cells before ``column`` using the display tab width."""
        ...


class BufferHost:
    """In-memory :class:`EditorHost`.

    Native auto-indent asks the configured oracle for a width under the
    current tab settings and renders it the way a plain editor would: as
    many ``tabstop``-wide tabs as fit, then spaces (only spaces with
    ``expandtab``).
    """

    def __init__(
        self,
        lines: list[str] | None = None,
        *,
        options: HostOptions | None = None,
        oracle: AutoIndentOracle | None = None,
    ) -> None:
        self._lines: list[str] = list(lines) if lines else [""]
        for text in self._lines:
            _check_line_text(text)
        # Line terminator after each line; "" for a last line without one.
        self._endings: list[str] = ["\n"] * (len(self._lines) - 1) + [""]
        self._newline = "\n"
        self.options = options or HostOptions()
        self.oracle = oracle
        self._cursor = Cursor(1, 1)

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        options: HostOptions | None = None,
        oracle: AutoIndentOracle | None = None,
    ) -> BufferHost:
        """Build a buffer from file content.

        Each line's terminator (``\\n`` or ``\\r\\n``) and a missing final
        newline are remembered, so :attr:`text` reproduces them. Line bodies
        never contain the terminator.
        """
        *terminated, last = text.split("\n")
        bodies: list[str] = []
        endings: list[str] = []
        for piece in terminated:
            if piece.endswith("\r"):
                bodies.append(piece[:-1])
                endings.append("\r\n")
            else:
                bodies.append(piece)
                endings.append("\n")
        if last or not bodies:
            bodies.append(last)
            endings.append("")
        host = cls(bodies, options=options, oracle=oracle)
        host._endings = endings
        host._newline = next((e for e in endings if e), "\n")
        return host

    @property
    def text(self) -> str:
        return "".join(line + ending for line, ending in zip(self._lines, self._endings))

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    # --- Line access ---

    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, line_number: int) -> str:
        return self._lines[self._index(line_number)]

    def set_line(self, line_number: int, text: str) -> None:
        _check_line_text(text)
        self._lines[self._index(line_number)] = text

    def _index(self, line_number: int) -> int:
        if not 1 <= line_number <= len(self._lines):
            raise IndexError(f"line {line_number} out of range 1..{len(self._lines)}")
        return line_number - 1

    # --- Cursor ---

    def get_cursor(self) -> Cursor:
        return self._cursor

    def set_cursor(self, line_number: int, column: int) -> None:
        text = self.get_line(line_number)
        column = max(1, min(column, len(text) + 1))
        self._cursor = Cursor(line_number, column)

    def virtual_column_of(self, line_number: int, column: int) -> int:
        return virtual_column(self.get_line(line_number), column, self.options.tabstop)

    # --- Native editing ---

    def insert_text(self, text: str) -> None:
        _check_line_text(text)
        cur = self._cursor
        line = self.get_line(cur.line)
        idx = cur.column - 1
        self.set_line(cur.line, line[:idx] + text + line[idx:])
        self._cursor = Cursor(cur.line, cur.column + len(text))

    def insert_line_break(self) -> None:
        cur = self._cursor
        line = self.get_line(cur.line)
        idx = cur.column - 1
        head, carried = line[:idx], line[idx:]
        self._lines[cur.line - 1] = head
        self._insert_line(cur.line + 1, strip_leading(carried))
        new_line = cur.line + 1
        indent = self._native_indent(new_line)
        self._lines[new_line - 1] = indent + self._lines[new_line - 1]
        self._cursor = Cursor(new_line, len(indent) + 1)

    def open_line_below(self) -> None:
        self._open_line(self._cursor.line, self._cursor.line + 1)

    def open_line_above(self) -> None:
        self._open_line(self._cursor.line, self._cursor.line)

    def _open_line(self, origin: int, new_line: int) -> None:
        leader = self._comment_leader(self.get_line(origin))
        self._insert_line(new_line, f"{leader} " if leader else "")
        indent = self._native_indent(new_line)
        text = indent + self._lines[new_line - 1]
        self._lines[new_line - 1] = text
        self._cursor = Cursor(new_line, len(text) + 1)

    def _insert_line(self, line_number: int, text: str) -> None:
        """Insert ``text`` so it becomes ``line_number``, terminated like its neighbour above."""
        i = line_number - 1
        if i == 0:
            ending = self._newline
        elif i == len(self._lines) and not self._endings[i - 1]:
            self._endings[i - 1] = self._newline
            ending = ""
        else:
            ending = self._endings[i - 1]
        self._lines.insert(i, text)
        self._endings.insert(i, ending)

    def _comment_leader(self, text: str) -> str | None:
        if not self.options.continue_comments:
            return None
        body = strip_leading(text)
        for leader in self.options.comment_leaders:
            if body.startswith(leader):
                return leader
        return None

    def _native_indent(self, line_number: int) -> str:
        width = self._native_width(line_number)
        ts = self.options.tabstop
        if self.options.expandtab:
            return " " * width
        return "\t" * (width // ts) + " " * (width % ts)

    def _native_width(self, line_number: int) -> int:
        previous = rendered_width(
            leading_whitespace(self._lines[line_number - 2]), self.options.tabstop
        ) if line_number > 1 else 0
        if self.oracle is None:
            return previous
        try:
            width = self.oracle.compute_width(self, line_number)
        except Exception:
            logger.exception("Native auto-indent failed for line %d", line_number)
            return previous
        return previous if width is None else max(0, width)


def _check_line_text(text: str) -> None:
    if "\n" in text:
        raise ValueError("line text must not contain a newline")
