"""smarttabs configuration with JSON settings files.

Precedence, lowest to highest: defaults < global settings file < project
settings file < explicit overrides. Values are validated when the
configuration is built, never at first use.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from smarttabs.errors import ConfigError

CONFIG_DIR_NAME = ".smarttabs"
SETTINGS_FILE_NAME = "settings.json"

# JSON key -> dataclass field
_KEY_ALIASES: dict[str, str] = {
    "deleteTrailingWhitespaceOnNewline": "delete_trailing_whitespace_on_newline",
    "oneTabIndent": "one_tab_indent",
    "tabSpaceJump": "tab_space_jump",
    "internalStep": "internal_step",
}


@dataclass(frozen=True)
class SmartTabsConfig:
    """Behaviour flags read at the start of every operation."""

    delete_trailing_whitespace_on_newline: bool = True
    one_tab_indent: bool = True
    tab_space_jump: bool = True
    internal_step: int = 80

    def __post_init__(self) -> None:
        for name in ("delete_trailing_whitespace_on_newline", "one_tab_indent", "tab_space_jump"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigError(f"{name} must be a bool, got {value!r}")
        step = self.internal_step
        # bool is an int subclass; True is not a step
        if isinstance(step, bool) or not isinstance(step, int):
            raise ConfigError(f"internal_step must be an int, got {step!r}")
        if step <= 0:
            raise ConfigError(f"internal_step must be positive, got {step}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SmartTabsConfig:
        """Build a config from camelCase or snake_case keys; ``None`` values are ignored."""
        return cls(**_normalize_keys(data))

    def with_overrides(self, **overrides: Any) -> SmartTabsConfig:
        """Return a validated copy with the given fields replaced."""
        return replace(self, **_normalize_keys(overrides))


def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    known = {f.name for f in fields(SmartTabsConfig)}
    result: dict[str, Any] = {}
    for key, value in data.items():
        name = _KEY_ALIASES.get(key, key)
        if name not in known:
            raise ConfigError(f"unknown setting: {key}")
        if value is None:
            continue
        result[name] = value
    return result


def _merge_settings(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Shallow precedence merge; ``None`` in ``overrides`` never clears a value."""
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        result[_KEY_ALIASES.get(key, key)] = value
    return result


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a settings object from JSON; a missing file is an empty object."""
    if not os.path.exists(path):
        return {}
    try:
        content = Path(path).read_text(encoding="utf-8")
        settings = json.loads(content)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"cannot read settings from {path}: {e}") from e
    if not isinstance(settings, dict):
        raise ConfigError(f"settings in {path} must be a JSON object")
    return settings


def default_settings_path() -> str:
    """Global settings file (~/.smarttabs/settings.json)."""
    return os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME, SETTINGS_FILE_NAME)


def load_config(
    path: str | None = None,
    *,
    cwd: str | None = None,
    overrides: dict[str, Any] | None = None,
) -> SmartTabsConfig:
    """Load and validate configuration.

    Args:
        path: Global settings file. Defaults to :func:`default_settings_path`.
        cwd: When given, ``<cwd>/.smarttabs/settings.json`` is merged on top.
        overrides: Highest-precedence values, e.g. from command-line flags.

    Raises:
        ConfigError: A settings file is unreadable or a value is invalid.
    """
    settings: dict[str, Any] = {}
    settings = _merge_settings(settings, _load_from_file(path or default_settings_path()))
    if cwd is not None:
        project_path = os.path.join(cwd, CONFIG_DIR_NAME, SETTINGS_FILE_NAME)
        settings = _merge_settings(settings, _load_from_file(project_path))
    if overrides:
        settings = _merge_settings(settings, overrides)
    return SmartTabsConfig.from_dict(settings)
