"""Run the host's auto-indent oracle with amplified tab widths.

With ``tabstop`` and ``shiftwidth`` both set to ``internal_step``, every
indentation level an oracle reports is worth exactly ``internal_step``
columns, and anything below that is alignment. The caller can then split
the width with :func:`smarttabs.codec.decompose`.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from smarttabs.codec import IndentDecomposition, decompose, leading_whitespace, rendered_width

if TYPE_CHECKING:
    from smarttabs.config import SmartTabsConfig
    from smarttabs.host import EditorHost

logger = logging.getLogger(__name__)

# Held for the whole override-invoke-restore sequence.
_override_lock = threading.RLock()


@contextmanager
def scoped_tab_width(host: EditorHost, step: int) -> Iterator[None]:
    """Temporarily set the host's tabstop and shiftwidth to ``step``.

    Both settings are restored on every exit path.
    """
    with _override_lock:
        options = host.options
        saved = (options.tabstop, options.shiftwidth)
        options.tabstop = step
        options.shiftwidth = step
        try:
            yield
        finally:
            options.tabstop, options.shiftwidth = saved


def compute_raw_width(host: EditorHost, config: SmartTabsConfig, line_number: int) -> int | None:
    """Amplified indentation width for ``line_number``, or ``None`` when inactive.

    Failures inside the oracle are logged and reported as inactive, so the
    caller leaves the line untouched.
    """
    if host.oracle is None:
        logger.debug("No indent oracle configured; line %d left alone", line_number)
        return None
    if host.options.expandtab:
        logger.debug("expandtab is set; line %d left alone", line_number)
        return None

    step = config.internal_step
    with scoped_tab_width(host, step):
        try:
            width = host.oracle.compute_width(host, line_number)
        except Exception:
            logger.exception("Indent oracle failed on line %d", line_number)
            return None
        if width is None:
            width = _previous_line_width(host, line_number, step)

    if width < 0:
        logger.debug("Oracle returned negative width %d for line %d; using 0", width, line_number)
        width = 0
    return width


def _previous_line_width(host: EditorHost, line_number: int, step: int) -> int:
    if line_number <= 1:
        return 0
    return rendered_width(leading_whitespace(host.get_line(line_number - 1)), step)


def decompose_line(host: EditorHost, config: SmartTabsConfig, line_number: int) -> IndentDecomposition:
    """Ask the oracle about ``line_number`` and split the answer into levels and remainder."""
    width = compute_raw_width(host, config, line_number)
    if width is None:
        return IndentDecomposition.INACTIVE
    levels, remainder = decompose(width, config.internal_step)
    return IndentDecomposition(valid=True, levels=levels, remainder=remainder)
