"""smarttabs: indent with tabs, align with spaces."""

from smarttabs.adapter import compute_raw_width, decompose_line, scoped_tab_width
from smarttabs.cleanup import delete_trailing_whitespace
from smarttabs.codec import IndentDecomposition, decompose, encode
from smarttabs.config import SmartTabsConfig, load_config
from smarttabs.cursor import (
    column_for_virtual,
    move_cursor_after_indentation,
    preserve_virtual_column,
    virtual_column,
)
from smarttabs.errors import ConfigError, OracleError, SmartTabsError
from smarttabs.events import EditorEventSource, EventBus, Trigger, bind_policy
from smarttabs.host import BufferHost, Cursor, EditorHost, HostOptions
from smarttabs.oracle import (
    AutoIndentOracle,
    BlockStructureOracle,
    ExpressionOracle,
    ListStructureOracle,
    PreviousLineOracle,
    create_oracle,
    register_oracle,
)
from smarttabs.policy import SmartTabsPolicy
from smarttabs.reindent import reindent_line, reindent_range

__all__ = [
    # Core
    "IndentDecomposition",
    "compute_raw_width",
    "decompose",
    "decompose_line",
    "delete_trailing_whitespace",
    "encode",
    "reindent_line",
    "reindent_range",
    "scoped_tab_width",
    # Cursor
    "column_for_virtual",
    "move_cursor_after_indentation",
    "preserve_virtual_column",
    "virtual_column",
    # Configuration and errors
    "ConfigError",
    "OracleError",
    "SmartTabsConfig",
    "SmartTabsError",
    "load_config",
    # Host and events
    "BufferHost",
    "Cursor",
    "EditorEventSource",
    "EditorHost",
    "EventBus",
    "HostOptions",
    "SmartTabsPolicy",
    "Trigger",
    "bind_policy",
    # Oracles
    "AutoIndentOracle",
    "BlockStructureOracle",
    "ExpressionOracle",
    "ListStructureOracle",
    "PreviousLineOracle",
    "create_oracle",
    "register_oracle",
]
