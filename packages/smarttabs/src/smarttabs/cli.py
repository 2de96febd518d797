"""Command-line entry point. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from smarttabs.codec import decompose, encode
from smarttabs.config import load_config
from smarttabs.errors import ConfigError
from smarttabs.host import BufferHost, HostOptions
from smarttabs.oracle import create_oracle, oracle_names
from smarttabs.policy import SmartTabsPolicy

logger = logging.getLogger(__name__)

_LOG_LEVELS = ["debug", "info", "warning", "error"]


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _visible(indent: str) -> str:
    return indent.replace("\t", "→").replace(" ", "·")


@click.group()
@click.option("--log-level", type=click.Choice(_LOG_LEVELS), default="warning", show_default=True)
def main(log_level):
    """Indent with tabs, align with spaces."""
    _setup_logging(log_level)


@main.command("realign")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strategy", type=click.Choice(oracle_names()), default="block", show_default=True,
              help="Auto-indent strategy that decides each line's width")
@click.option("--tabstop", type=click.IntRange(min=1), default=8, show_default=True,
              help="Display width of a tab")
@click.option("--shiftwidth", type=click.IntRange(min=1), default=None,
              help="Columns per indentation level (defaults to --tabstop)")
@click.option("--step", type=int, default=None, help="Internal step (overrides settings)")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="Settings file (default ~/.smarttabs/settings.json)")
@click.option("--check", is_flag=True, help="Only report files that would change")
@click.option("--in-place", "-i", is_flag=True, help="Rewrite files instead of printing them")
def realign(files, strategy, tabstop, shiftwidth, step, config_path, check, in_place):
    """Reindent every line of FILES."""
    if strategy == "expression":
        raise click.UsageError("the expression strategy needs a Python callable and is not available here")
    try:
        config = load_config(config_path, cwd=str(Path.cwd()), overrides={"internalStep": step})
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    changed: list[Path] = []
    for path in files:
        with path.open(encoding="utf-8", newline="") as f:
            original = f.read()
        host = BufferHost.from_text(
            original,
            options=HostOptions(tabstop=tabstop, shiftwidth=shiftwidth or tabstop),
            oracle=create_oracle(strategy),
        )
        SmartTabsPolicy(host, config).on_realign_range(1, host.line_count())
        result = host.text
        if result != original:
            changed.append(path)
            logger.info("%s: realigned", path)

        if check:
            continue
        if in_place:
            if result != original:
                path.write_text(result, encoding="utf-8", newline="")
        else:
            click.echo(result, nl=False)

    if check and changed:
        for path in changed:
            click.echo(f"would realign {path}")
        sys.exit(1)


@main.command("decompose")
@click.argument("width", type=click.IntRange(min=0))
@click.option("--step", type=click.IntRange(min=1), default=80, show_default=True)
def decompose_cmd(width, step):
    """Split an amplified WIDTH into tab levels and alignment spaces."""
    levels, remainder = decompose(width, step)
    click.echo(f"{levels} {remainder} {_visible(encode(levels, remainder))}")


@main.command("strategies")
def strategies():
    """List available auto-indent strategies."""
    for name in oracle_names():
        click.echo(name)


if __name__ == "__main__":
    main()
