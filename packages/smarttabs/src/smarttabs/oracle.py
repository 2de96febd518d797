"""Auto-indent oracles and their registry.

An oracle answers one question: how many columns should this line be
indented by? It measures existing indentation with ``host.options.tabstop``
and adds ``host.options.shiftwidth`` per level, so the width adapter can
run it with both set to a large step and split the answer exactly.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from smarttabs.codec import leading_whitespace, rendered_width, strip_leading
from smarttabs.cursor import virtual_column
from smarttabs.errors import ConfigError

if TYPE_CHECKING:
    from smarttabs.host import EditorHost


@runtime_checkable
class AutoIndentOracle(Protocol):
    def compute_width(self, host: EditorHost, line_number: int) -> int | None:
        """Desired indentation width, or ``None`` to copy the previous line."""
        ...


def indent_width(host: EditorHost, text: str) -> int:
    """Width of the leading whitespace of ``text`` under the host's tabstop."""
    return rendered_width(leading_whitespace(text), host.options.tabstop)


def previous_nonblank(host: EditorHost, line_number: int) -> int:
    """Nearest line above ``line_number`` with non-whitespace content, or 0."""
    n = line_number - 1
    while n >= 1:
        if host.get_line(n).strip():
            return n
        n -= 1
    return 0


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


class PreviousLineOracle:
    """Copy the previous line's indentation (plain ``autoindent``)."""

    def compute_width(self, host: EditorHost, line_number: int) -> int | None:
        return None


class ExpressionOracle:
    """Delegate to a user-supplied function.

    Whatever the function raises propagates to the caller; the width adapter
    turns it into "leave the line alone".
    """

    def __init__(self, func: Callable[[EditorHost, int], int | None]) -> None:
        self.func = func

    def compute_width(self, host: EditorHost, line_number: int) -> int | None:
        return self.func(host, line_number)


@dataclass
class _BracketScan:
    unclosed: list[int]
    unmatched_closers: int


class BlockStructureOracle:
    """C-style indentation driven by brackets on the previous line.

    * Each bracket left open on the previous line adds one ``shiftwidth``.
    * If the innermost open bracket is followed by content on that line
      (``foo(a,``), the new line aligns just after the bracket instead.
    * A line starting with a closer moves back one level, or under its
      opener when aligning.
    * A previous line that closes brackets opened earlier hands back the
      indentation of the line that opened them.
    """

    def __init__(
        self,
        opening: str = "{[(",
        closing: str = "}])",
        line_comments: tuple[str, ...] = ("//", "#"),
    ) -> None:
        if len(opening) != len(closing):
            raise ConfigError("opening and closing brackets must pair up")
        self.opening = opening
        self.closing = closing
        self.line_comments = line_comments

    def compute_width(self, host: EditorHost, line_number: int) -> int | None:
        prev = previous_nonblank(host, line_number)
        if prev == 0:
            return 0
        text = host.get_line(prev)
        sw = host.options.shiftwidth
        scan = self._scan(text)
        starts_with_closer = strip_leading(host.get_line(line_number))[:1] in tuple(self.closing)

        if scan.unclosed:
            opener = scan.unclosed[-1]
            rest = self._code(text[opener + 1:]).strip()
            if rest:
                column = opener + 1 if starts_with_closer else opener + 2
                return virtual_column(text, column, host.options.tabstop)
            width = self._base_width(host, prev, scan) + sw * len(scan.unclosed)
        else:
            width = self._base_width(host, prev, scan)
        if starts_with_closer:
            width -= sw
        return max(0, width)

    def _base_width(self, host: EditorHost, prev: int, scan: _BracketScan) -> int:
        """Indentation of the line that started the previous line's statement."""
        owed = scan.unmatched_closers
        n = prev
        while owed > 0 and n > 1:
            n -= 1
            line_scan = self._scan(host.get_line(n))
            owed -= len(line_scan.unclosed)
            if owed <= 0:
                break
            owed += line_scan.unmatched_closers
        return indent_width(host, host.get_line(n))

    def _code(self, text: str) -> str:
        """``text`` with string literals blanked and any line comment cut off."""
        out: list[str] = []
        quote: str | None = None
        i = 0
        while i < len(text):
            ch = text[i]
            if quote:
                if ch == "\\":
                    out.append("  ")
                    i += 2
                    continue
                if ch == quote:
                    quote = None
                out.append(" ")
            elif ch in "\"'":
                quote = ch
                out.append(" ")
            elif any(text.startswith(c, i) for c in self.line_comments):
                break
            else:
                out.append(ch)
            i += 1
        return "".join(out)[: len(text)]

    def _scan(self, text: str) -> _BracketScan:
        unclosed: list[int] = []
        unmatched = 0
        for i, ch in enumerate(self._code(text)):
            if ch in self.opening:
                unclosed.append(i)
            elif ch in self.closing:
                if unclosed:
                    unclosed.pop()
                else:
                    unmatched += 1
        return _BracketScan(unclosed=unclosed, unmatched_closers=unmatched)


class ListStructureOracle:
    """Lisp-style indentation.

    Inside an open list, a line aligns under the second element when one
    follows the operator on the opening line, otherwise ``body_indent`` past
    the paren. Operators in ``body_forms`` always use ``body_indent``. A list
    whose first element is itself a list (or is empty) aligns one past the
    paren. Lines outside every list go to column 0.
    """

    DEFAULT_BODY_FORMS = frozenset({
        "define", "defmacro", "defun", "dolist", "dotimes", "lambda",
        "let", "let*", "letrec", "progn", "unless", "when",
    })

    def __init__(self, body_indent: int = 2, body_forms: frozenset[str] | None = None) -> None:
        self.body_indent = body_indent
        self.body_forms = self.DEFAULT_BODY_FORMS if body_forms is None else body_forms

    def compute_width(self, host: EditorHost, line_number: int) -> int | None:
        found = self._innermost_open(host, line_number)
        if found is None:
            return 0
        ln, idx = found
        text = host.get_line(ln)
        ts = host.options.tabstop
        paren_vcol = virtual_column(text, idx + 1, ts)

        i = idx + 1
        if i >= len(text) or text[i] in " \t;" or text[i] == "(":
            return paren_vcol + 1
        start = i
        while i < len(text) and text[i] not in " \t();":
            i += 1
        if text[start:i] in self.body_forms:
            return paren_vcol + self.body_indent
        while i < len(text) and text[i] in " \t":
            i += 1
        if i < len(text) and text[i] not in ");":
            return virtual_column(text, i + 1, ts)
        return paren_vcol + self.body_indent

    def _innermost_open(self, host: EditorHost, line_number: int) -> tuple[int, int] | None:
        depth = 0
        for ln in range(line_number - 1, 0, -1):
            for idx, ch in reversed(_paren_events(host.get_line(ln))):
                if ch == ")":
                    depth += 1
                elif depth == 0:
                    return ln, idx
                else:
                    depth -= 1
        return None


def _paren_events(text: str) -> list[tuple[int, str]]:
    """Positions of list parens in one line, skipping strings, comments and ``#\\(``."""
    events: list[tuple[int, str]] = []
    in_string = False
    i = 0
    while i < len(text):
        ch = text[i]
        if in_string:
            if ch == "\\":
                i += 1
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == ";":
            break
        elif text.startswith("#\\", i):
            i += 2
        elif ch in "()":
            events.append((i, ch))
        i += 1
    return events


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

OracleFactory = Callable[..., AutoIndentOracle]

_registry: dict[str, OracleFactory] = {}


def register_oracle(name: str, factory: OracleFactory) -> None:
    """Register an oracle factory under ``name`` (replacing any previous one)."""
    _registry[name] = factory


def get_oracle(name: str) -> OracleFactory | None:
    return _registry.get(name)


def oracle_names() -> list[str]:
    return sorted(_registry)


def create_oracle(name: str, **kwargs: object) -> AutoIndentOracle:
    """Instantiate a registered strategy.

    Raises:
        ConfigError: ``name`` is not registered.
    """
    factory = _registry.get(name)
    if factory is None:
        raise ConfigError(f"unknown indent strategy: {name} (known: {', '.join(oracle_names())})")
    return factory(**kwargs)


def _register_builtins() -> None:
    register_oracle("previous-line", PreviousLineOracle)
    register_oracle("expression", ExpressionOracle)
    register_oracle("block", BlockStructureOracle)
    register_oracle("list", ListStructureOracle)


_register_builtins()
