"""Exception types raised by smarttabs."""

from __future__ import annotations


class SmartTabsError(Exception):
    """Base class for smarttabs errors."""


class ConfigError(SmartTabsError, ValueError):
    """Invalid configuration, reported when the configuration is built or loaded."""


class OracleError(SmartTabsError):
    """An auto-indent oracle could not evaluate a line.

    Oracles may raise this deliberately. The width adapter treats it (and any
    other exception escaping an oracle) as "no opinion" and leaves the line
    alone.
    """
