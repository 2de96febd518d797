"""Raw/virtual column mapping and cursor placement after a line rewrite.

Raw columns are 1-based character offsets. A virtual column is the number
of screen cells in front of a raw column: tabs advance to the next multiple
of the display tab width, other grapheme clusters take their terminal width.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import grapheme
import wcwidth as _wcwidth

if TYPE_CHECKING:
    from smarttabs.host import EditorHost


def _cluster_width(g: str) -> int:
    width = _wcwidth.wcswidth(g)
    if width >= 0:
        return width
    # Control characters report -1; count what is printable.
    return sum(max(0, _wcwidth.wcwidth(ch)) for ch in g)


def advance(vcol: int, cluster: str, tabstop: int) -> int:
    """Virtual column after ``cluster`` when it starts at ``vcol``."""
    if cluster == "\t":
        return vcol + tabstop - vcol % tabstop
    return vcol + _cluster_width(cluster)


def virtual_column(text: str, column: int, tabstop: int) -> int:
    """Screen cells preceding raw ``column`` of ``text``.

    Columns past the end of the line count as trailing single cells, so
    ``virtual_column(text, len(text) + 1, ts)`` is the display width.
    """
    if tabstop <= 0:
        raise ValueError(f"tabstop must be positive, got {tabstop}")
    prefix = text[: max(0, column - 1)]
    vcol = 0
    for g in grapheme.graphemes(prefix):
        vcol = advance(vcol, g, tabstop)
    return vcol + max(0, column - 1 - len(text))


def display_width(text: str, tabstop: int) -> int:
    return virtual_column(text, len(text) + 1, tabstop)


def column_for_virtual(text: str, target: int, tabstop: int) -> int:
    """First raw column whose virtual column equals ``target``, else end of line.

    End of line is ``len(text) + 1``.
    """
    if tabstop <= 0:
        raise ValueError(f"tabstop must be positive, got {tabstop}")
    column = 1
    vcol = 0
    for g in grapheme.graphemes(text):
        if vcol == target:
            return column
        if vcol > target:
            break
        vcol = advance(vcol, g, tabstop)
        column += len(g)
    else:
        if vcol == target:
            return column
    return len(text) + 1


def move_cursor_after_indentation(
    host: EditorHost, line_number: int, levels: int, remainder: int
) -> None:
    """Place the cursor right after ``levels`` tabs and ``remainder`` spaces."""
    host.set_cursor(line_number, levels + remainder + 1)


def preserve_virtual_column(host: EditorHost, line_number: int, target: int) -> None:
    """Put the cursor back on virtual column ``target`` using the display tab width."""
    text = host.get_line(line_number)
    host.set_cursor(line_number, column_for_virtual(text, target, host.options.tabstop))
