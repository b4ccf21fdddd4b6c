"""
Directory scanner for grab.

This module walks the configured source directories depth-first and collects
a descriptor for every regular file created within the recency window. Hidden
entries and entries whose name contains a blacklisted substring are skipped at
every depth, and skipped directories are not descended into.

Creation time is read from st_birthtime where the platform provides it. On
platforms without it (most Linux filesystems through os.stat) the modification
time is used instead.

Symbolic links are neither followed nor listed, so link cycles cannot be
entered, but there is no explicit loop detection either.

Within a directory all files are visited before any subdirectory is descended
into (os.walk order), so "encounter order" for equal timestamps is files of a
directory first, then the contents of its subdirectories in listing order.
"""

import os
import stat
import time
from pathlib import Path
from typing import Dict, List, Optional
import logging

from ..models.config import GrabConfig
from ..models.descriptor import FileDescriptor


logger = logging.getLogger(__name__)


HIDDEN_PREFIX = '.'


class ScanError(Exception):
    """Raised when a directory or file cannot be read during a scan."""
    pass


def creation_timestamp(stat_result: os.stat_result) -> int:
    """
    Get the creation time of a file as whole epoch seconds.

    Falls back to the modification time when the platform does not expose
    a birth time.
    """
    birthtime = getattr(stat_result, 'st_birthtime', None)
    if birthtime is not None:
        return int(birthtime)
    return int(stat_result.st_mtime)


class DirectoryScanner:
    """
    Recursive scanner that finds recently created files.

    The first error encountered aborts the whole scan with a ScanError;
    no partial results are returned.
    """

    def __init__(self, config: GrabConfig):
        """
        Initialize the scanner.

        Args:
            config: Configuration providing sources, time limit and blacklist
        """
        self.config = config
        self._stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            'directories_traversed': 0,
            'files_scanned': 0,
            'files_matched': 0,
            'entries_skipped': 0
        }

    def compute_cutoff(self, now: Optional[float] = None) -> int:
        """
        Compute the earliest creation timestamp still considered recent.

        Args:
            now: Current time as epoch seconds (defaults to the wall clock)

        Raises:
            ScanError: If the window reaches back before the epoch
        """
        current = int(time.time() if now is None else now)
        cutoff = current - self.config.window_seconds
        if cutoff < 0:
            raise ScanError(
                f"Time limit of {self.config.time_limit} minutes reaches before the epoch"
            )
        return cutoff

    def scan(self, now: Optional[float] = None) -> List[FileDescriptor]:
        """
        Scan every configured source directory.

        Args:
            now: Current time as epoch seconds (defaults to the wall clock)

        Returns:
            Descriptors in encounter order

        Raises:
            ScanError: On the first unreadable directory or file
        """
        cutoff = self.compute_cutoff(now)
        descriptors: List[FileDescriptor] = []

        for source in self.config.get_existing_sources():
            source_path = Path(source)
            logger.info(f"Scanning source directory: {source_path}")
            descriptors.extend(self._scan_directory(source_path, cutoff))

        logger.info(
            f"Scan finished: {self._stats['files_matched']} of "
            f"{self._stats['files_scanned']} files created since cutoff {cutoff}"
        )
        return descriptors

    def _scan_directory(self, root_path: Path, cutoff: int) -> List[FileDescriptor]:
        """
        Recursively walk a single source directory.

        Args:
            root_path: Source directory to walk
            cutoff: Earliest creation timestamp to include

        Returns:
            Descriptors for matching files under root_path
        """
        found = []

        for current_dir, subdirs, files in os.walk(root_path, onerror=self._raise_walk_error):
            current_path = Path(current_dir)
            self._stats['directories_traversed'] += 1

            # Prune skipped subdirectories so os.walk does not descend into them
            kept_subdirs = []
            for d in subdirs:
                if self.should_skip(d):
                    self._stats['entries_skipped'] += 1
                else:
                    kept_subdirs.append(d)
            subdirs[:] = kept_subdirs

            for filename in files:
                if self.should_skip(filename):
                    self._stats['entries_skipped'] += 1
                    continue

                descriptor = self._describe_file(current_path / filename, cutoff)
                if descriptor is not None:
                    self._stats['files_matched'] += 1
                    found.append(descriptor)

        return found

    @staticmethod
    def _raise_walk_error(error: OSError) -> None:
        raise ScanError(f"Cannot read directory {error.filename}: {error.strerror or error}") from error

    def should_skip(self, name: str) -> bool:
        """
        Check if a file or directory name is hidden or blacklisted.

        Args:
            name: Entry name (not a full path)

        Returns:
            True if the entry should be skipped
        """
        if name.startswith(HIDDEN_PREFIX):
            return True
        return any(blocked in name for blocked in self.config.black_list)

    def _describe_file(self, file_path: Path, cutoff: int) -> Optional[FileDescriptor]:
        """
        Create a descriptor for a file if it is a regular file created since cutoff.

        Raises:
            ScanError: If the file metadata cannot be read
        """
        try:
            stat_result = os.lstat(file_path)
        except OSError as e:
            raise ScanError(f"Cannot read metadata of {file_path}: {e}") from e

        if not stat.S_ISREG(stat_result.st_mode):
            logger.debug(f"Skipping non-regular file: {file_path}")
            return None

        self._stats['files_scanned'] += 1

        created = creation_timestamp(stat_result)
        if created < cutoff:
            return None

        try:
            return FileDescriptor.from_file(file_path, stat_result.st_size, created)
        except (OverflowError, OSError, ValueError) as e:
            raise ScanError(f"Invalid creation time for {file_path}: {e}") from e

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the last scans.

        Returns:
            Dictionary containing scan counters
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = self._empty_stats()


def find_recent_files(config: GrabConfig, now: Optional[float] = None) -> List[FileDescriptor]:
    """
    Convenience function to scan all sources of a configuration.

    Args:
        config: Configuration to scan with
        now: Current time as epoch seconds (optional)

    Returns:
        Descriptors in encounter order
    """
    return DirectoryScanner(config).scan(now)
