"""Interactive trigger handlers: Tab, Enter, open line, leave insert, realign.

Each handler runs to completion against the host and returns. Oracle
problems never escape a handler; at worst the line is left as it was.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from smarttabs.adapter import decompose_line
from smarttabs.cleanup import delete_trailing_whitespace, should_clean
from smarttabs.codec import leading_whitespace
from smarttabs.cursor import move_cursor_after_indentation, preserve_virtual_column
from smarttabs.reindent import apply_indentation, reindent_line, reindent_range

if TYPE_CHECKING:
    from smarttabs.config import SmartTabsConfig
    from smarttabs.host import Cursor, EditorHost

logger = logging.getLogger(__name__)

_WHITESPACE = " \t\f\v\r"


class SmartTabsPolicy:
    """Maps editor triggers to reindent, cursor and cleanup operations."""

    def __init__(self, host: EditorHost, config: SmartTabsConfig) -> None:
        self.host = host
        self.config = config

    # --- Tab ---

    def on_tab(self) -> None:
        """Indent, jump over whitespace, or insert a soft tab, in that order of preference."""
        host = self.host
        cur = host.get_cursor()
        text = host.get_line(cur.line)

        if cur.column <= len(leading_whitespace(text)) + 1:
            result = decompose_line(host, self.config, cur.line)
            boundary = result.display_width(host.options.tabstop)
            if result.valid and host.virtual_column_of(cur.line, cur.column) < boundary:
                if self.config.one_tab_indent:
                    apply_indentation(host, cur.line, result)
                    move_cursor_after_indentation(host, cur.line, result.levels, result.remainder)
                else:
                    host.insert_text("\t")
                return

        if self.config.tab_space_jump and self._jump_over_whitespace(cur, text):
            return
        self._insert_soft_tab(cur)

    def _jump_over_whitespace(self, cur: Cursor, text: str) -> bool:
        idx = cur.column - 1
        at_ws = idx < len(text) and text[idx] in _WHITESPACE
        after_ws = 0 < idx <= len(text) and text[idx - 1] in _WHITESPACE
        if not (at_ws or after_ws):
            return False
        end = idx
        while end < len(text) and text[end] in _WHITESPACE:
            end += 1
        if end >= len(text) or end == idx:
            return False
        self.host.set_cursor(cur.line, end + 1)
        return True

    def _insert_soft_tab(self, cur: Cursor) -> None:
        ts = self.host.options.tabstop
        vcol = self.host.virtual_column_of(cur.line, cur.column)
        self.host.insert_text(" " * (ts - vcol % ts))

    # --- New lines ---

    def on_enter(self) -> None:
        """Split the line natively, then reindent the new line keeping the cursor's screen column."""
        host = self.host
        host.insert_line_break()
        cur = host.get_cursor()
        target = host.virtual_column_of(cur.line, cur.column)
        reindent_line(host, self.config, cur.line)
        if cur.line > 1 and should_clean(host, self.config, on_newline=True):
            delete_trailing_whitespace(host, cur.line - 1)
        preserve_virtual_column(host, cur.line, target)

    def on_open_line_below(self) -> None:
        """Open a line below natively, then reindent it with tabs and spaces."""
        self.host.open_line_below()
        self._reindent_opened_line()

    def on_open_line_above(self) -> None:
        """Open a line above natively, then reindent it with tabs and spaces."""
        self.host.open_line_above()
        self._reindent_opened_line()

    def _reindent_opened_line(self) -> None:
        # The native open already continued any comment; only the indentation changes.
        line = self.host.get_cursor().line
        reindent_line(self.host, self.config, line)
        self.host.set_cursor(line, len(self.host.get_line(line)) + 1)

    # --- Leaving insert mode ---

    def on_insert_leave(self) -> None:
        """Drop indentation or spaces typed on this line but never followed by text."""
        host = self.host
        if not should_clean(host, self.config, on_newline=False):
            return
        cur = host.get_cursor()
        delete_trailing_whitespace(host, cur.line)
        length = len(host.get_line(cur.line))
        if cur.column > length:
            host.set_cursor(cur.line, max(1, length))

    # --- Realign ---

    def on_realign_range(self, first: int, last: int) -> None:
        """Reindent a line range, then put the cursor where a native realign would."""
        host = self.host
        if first > last:
            first, last = last, first
        count = host.line_count()
        first = max(1, min(first, count))
        last = max(1, min(last, count))
        results = reindent_range(host, self.config, first, last)
        logger.debug(
            "Realigned lines %d-%d (%d reindented)",
            first, last, sum(1 for r in results if r.valid),
        )
        host.set_cursor(first, len(leading_whitespace(host.get_line(first))) + 1)

    def on_realign_line(self) -> None:
        """Reindent the cursor line and put the cursor just past its indentation."""
        line = self.host.get_cursor().line
        result = reindent_line(self.host, self.config, line)
        if result.valid:
            move_cursor_after_indentation(self.host, line, result.levels, result.remainder)
