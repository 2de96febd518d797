"""Rewrite a line's leading whitespace as tabs for levels and spaces for alignment."""

from __future__ import annotations

from typing import TYPE_CHECKING

from smarttabs.adapter import decompose_line
from smarttabs.codec import IndentDecomposition, replace_leading

if TYPE_CHECKING:
    from smarttabs.config import SmartTabsConfig
    from smarttabs.host import EditorHost


def apply_indentation(host: EditorHost, line_number: int, result: IndentDecomposition) -> None:
    """Write ``result`` as the line's leading whitespace; no-op if invalid or unchanged."""
    if not result.valid:
        return
    text = host.get_line(line_number)
    new_text = replace_leading(text, result.indent)
    if new_text != text:
        host.set_line(line_number, new_text)


def reindent_line(host: EditorHost, config: SmartTabsConfig, line_number: int) -> IndentDecomposition:
    """Reindent one line from the oracle's width.

    Only the leading whitespace run changes; an empty or whitespace-only line
    becomes the bare indentation. Returns
    :attr:`IndentDecomposition.INACTIVE` and touches nothing when the oracle
    is inactive.
    """
    result = decompose_line(host, config, line_number)
    apply_indentation(host, line_number, result)
    return result


def reindent_range(
    host: EditorHost, config: SmartTabsConfig, first: int, last: int
) -> list[IndentDecomposition]:
    """Reindent ``first..last`` inclusive, top to bottom, one line at a time.

    Each line sees the lines above it as already rewritten.
    """
    return [reindent_line(host, config, n) for n in range(first, last + 1)]
