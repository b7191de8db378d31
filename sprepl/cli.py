# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Command-line interface for sprepl."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from sprepl import __version__
from sprepl.core.config import ConfigError, ReplConfig
from sprepl.repl.interactive import InteractiveREPL

console = Console()

DEBUG_LOG = Path(".sprepl/debug.log")


def _enable_debug_log() -> Path:
    """Write debug logs to a file (keeps the prompt clean)."""
    DEBUG_LOG.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(DEBUG_LOG, mode='w')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))
    logging.getLogger('sprepl').addHandler(file_handler)
    logging.getLogger('sprepl').setLevel(logging.DEBUG)
    return DEBUG_LOG


@click.command()
@click.version_option(version=__version__, prog_name="sprepl")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to config YAML file.",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug logging to .sprepl/debug.log.",
)
def cli(config: Optional[str], debug: bool):
    """Interactive Python prompt.

    Enter runs a complete statement; blocks end with an empty line.
    Tab completes names. Ctrl-D asks before exiting.

    \b
    Examples:
        sprepl
        sprepl -c repl.yaml
        sprepl --debug
    """
    if debug:
        log_file = _enable_debug_log()
        console.print(f"[dim]Debug logs: {log_file}[/dim]")

    try:
        cfg = ReplConfig.from_yaml(config) if config else ReplConfig()
    except (ConfigError, FileNotFoundError) as e:
        console.print(f"[red]Config error:[/red] {escape(str(e))}")
        sys.exit(1)

    repl = InteractiveREPL(cfg, console=console)
    sys.exit(repl.run())
