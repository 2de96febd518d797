"""Trailing whitespace removal."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from smarttabs.codec import strip_trailing

if TYPE_CHECKING:
    from smarttabs.config import SmartTabsConfig
    from smarttabs.host import EditorHost

logger = logging.getLogger(__name__)


def delete_trailing_whitespace(host: EditorHost, line_number: int) -> None:
    """Strip the trailing whitespace run, rewriting the line even if nothing changes."""
    host.set_line(line_number, strip_trailing(host.get_line(line_number)))


def should_clean(host: EditorHost, config: SmartTabsConfig, *, on_newline: bool) -> bool:
    """Whether a trigger may remove trailing whitespace.

    Paste mode always wins. New-line triggers also need
    ``delete_trailing_whitespace_on_newline``.
    """
    if host.options.paste:
        logger.debug("Paste mode; keeping trailing whitespace")
        return False
    if on_newline and not config.delete_trailing_whitespace_on_newline:
        return False
    return True
