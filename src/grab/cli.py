"""
Command line entry point for grab.

A run loads the configuration, scans the source directories, lets the user
pick one recent file and moves it into the current directory. Exit code 1 is
reserved for configuration, scan and copy failures; cancelling at any prompt
exits cleanly with 0.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from .config.parser import ConfigParser, ConfigurationError
from .tools.formatter import prepare_listing
from .tools.mover import MoveError, MoveOutcome, move_file
from .tools.scanner import DirectoryScanner, ScanError
from .tools.selector import SelectionCancelled, Selector


logger = logging.getLogger(__name__)


LOG_LEVEL_ENV = 'GRAB_LOG_LEVEL'
DEFAULT_LOG_LEVEL = 'WARNING'


def configure_logging(console: Console) -> None:
    """Send log records to the given console, at the level named by GRAB_LOG_LEVEL."""
    level_name = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True
    )


def main(home: Optional[Union[str, Path]] = None,
         cwd: Optional[Union[str, Path]] = None,
         console: Optional[Console] = None,
         err_console: Optional[Console] = None,
         selector: Optional[Selector] = None,
         now: Optional[float] = None) -> int:
    """
    Run one load, scan, select and move cycle.

    Args:
        home: Home directory override (defaults to the current user's)
        cwd: Destination directory (defaults to the current working directory)
        console: Console for status output
        err_console: Console for fatal errors and logging
        selector: Prompt implementation
        now: Scan time as epoch seconds (defaults to the wall clock)

    Returns:
        Process exit code
    """
    console = console or Console()
    err_console = err_console or Console(stderr=True)
    selector = selector or Selector(console)
    configure_logging(err_console)

    try:
        parser = ConfigParser(home=home)
        result = parser.load_config()
    except ConfigurationError as e:
        err_console.print(f"Failed to read configuration: {e}", markup=False, highlight=False)
        return 1

    if result.created:
        console.print(
            f"Created default configuration file at: {result.config_path}",
            markup=False,
            highlight=False
        )
    config = result.config

    try:
        files = DirectoryScanner(config).scan(now)
    except ScanError as e:
        err_console.print(f"Failed to find files: {e}", markup=False, highlight=False)
        return 1

    logger.debug(f"Found {len(files)} recent files")
    if not files:
        console.print(
            f"No new files found in the last {config.time_limit} minutes",
            style="red",
            markup=False,
            highlight=False
        )
        return 0

    try:
        selected = selector.choose(prepare_listing(files))
    except SelectionCancelled:
        console.print("No file selected", markup=False, highlight=False)
        return 0

    try:
        moved = move_file(selected, selector, cwd)
    except MoveError as e:
        err_console.print(f"Failed to move file: {e}", markup=False, highlight=False)
        return 1

    if moved.outcome is MoveOutcome.DECLINED:
        console.print("Operation canceled", markup=False, highlight=False)
    elif moved.outcome is MoveOutcome.COPIED:
        console.print(
            f"File '{selected.name}' was copied, but failed to delete the original: {moved.error}",
            style="yellow",
            markup=False,
            highlight=False
        )
    elif moved.outcome is MoveOutcome.UNCHANGED:
        console.print(
            f"File '{selected.name}' is already in the current directory",
            markup=False,
            highlight=False
        )
    else:
        console.print(
            f"Successfully moved '{selected.name}' to current directory",
            style="green",
            markup=False,
            highlight=False
        )

    return 0
