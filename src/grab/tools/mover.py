"""
Move the selected file into the current working directory.

A rename is tried first. When it fails (most commonly because source and
destination are on different filesystems) the file is copied and the original
deleted. A failed delete after a successful copy is reported as a partial
success; only a failed copy is an error.
"""

import os
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union
import logging

from ..models.descriptor import FileDescriptor
from .selector import Selector


logger = logging.getLogger(__name__)


class MoveOutcome(Enum):
    """Possible results of a move."""
    MOVED = "moved"
    COPIED = "copied"
    DECLINED = "declined"
    UNCHANGED = "unchanged"


@dataclass
class MoveResult:
    """
    Result of a move operation.

    Attributes:
        outcome: What happened to the file
        target: Destination path
        error: Why the original could not be deleted (COPIED only)
    """
    outcome: MoveOutcome
    target: Path
    error: Optional[OSError] = None


class MoveError(Exception):
    """Raised when the selected file cannot be copied to the destination."""
    pass


def target_path_for(descriptor: FileDescriptor, cwd: Optional[Union[str, Path]] = None) -> Path:
    """Get the destination path for a descriptor inside cwd."""
    directory = Path(cwd) if cwd is not None else Path.cwd()
    return directory / descriptor.name


def _is_same_file(source: Path, target: Path) -> bool:
    try:
        return os.path.samefile(source, target)
    except OSError:
        return False


def move_file(descriptor: FileDescriptor, selector: Selector,
              cwd: Optional[Union[str, Path]] = None) -> MoveResult:
    """
    Move the described file into the current directory.

    Args:
        descriptor: The selected file
        selector: Prompt used to confirm overwriting an existing file
        cwd: Destination directory (defaults to the current working directory)

    Returns:
        MoveResult describing the outcome

    Raises:
        MoveError: If the file could not be copied
    """
    source = descriptor.path
    target = target_path_for(descriptor, cwd)

    if target.is_dir():
        raise MoveError(f"Cannot move {source}: {target} is a directory")

    if target.exists():
        if _is_same_file(source, target):
            logger.info(f"{source} is already in the destination directory")
            return MoveResult(MoveOutcome.UNCHANGED, target)

        overwrite = selector.confirm(f"File '{descriptor.name}' already exists. Overwrite?", default=False)
        if not overwrite:
            logger.info(f"Overwrite of {target} declined")
            return MoveResult(MoveOutcome.DECLINED, target)

    try:
        os.replace(source, target)
        logger.info(f"Renamed {source} to {target}")
        return MoveResult(MoveOutcome.MOVED, target)
    except OSError as e:
        logger.debug(f"Rename of {source} failed ({e}), falling back to copy")

    try:
        shutil.copy2(source, target)
    except OSError as e:
        raise MoveError(f"Cannot copy {source} to {target}: {e}") from e

    try:
        os.remove(source)
    except OSError as e:
        logger.info(f"Copied {source} to {target} but could not delete the original: {e}")
        return MoveResult(MoveOutcome.COPIED, target, error=e)

    logger.info(f"Copied {source} to {target} and deleted the original")
    return MoveResult(MoveOutcome.MOVED, target)
