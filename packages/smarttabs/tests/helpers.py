"""Test doubles: a write-recording buffer host and fixed-width oracles."""

from __future__ import annotations

from smarttabs.host import BufferHost
from smarttabs.oracle import ExpressionOracle


class RecordingHost(BufferHost):
    """BufferHost that records every line write."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.writes: list[tuple[int, str]] = []

    def set_line(self, line_number: int, text: str) -> None:
        self.writes.append((line_number, text))
        super().set_line(line_number, text)


def fixed_oracle(width: int | None) -> ExpressionOracle:
    """Oracle that reports the same width for every line."""
    return ExpressionOracle(lambda host, line_number: width)


def failing_oracle(exc: Exception) -> ExpressionOracle:
    def evaluate(host, line_number):
        raise exc

    return ExpressionOracle(evaluate)
