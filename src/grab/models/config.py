"""
Configuration data model for grab.

This module defines the configuration structure loaded from the user's JSON
config file: the source directories to scan, the recency window, and the
name blacklist applied during scanning.
"""

from typing import Dict, List, Any
from pathlib import Path
from pydantic import BaseModel, Field, StrictStr, field_validator


DEFAULT_TIME_LIMIT = 20


class GrabConfig(BaseModel):
    """
    Main configuration class for grab.

    Attributes:
        source_dir: Directories scanned recursively for recent files
        time_limit: Recency window in minutes
        black_list: Substrings; any file or directory name containing one is skipped
    """

    source_dir: List[StrictStr] = Field(..., description="Directories to scan for recent files")
    time_limit: int = Field(..., ge=0, strict=True, description="Recency window in minutes")
    black_list: List[StrictStr] = Field(default_factory=list, description="Name substrings to skip")

    @field_validator('source_dir')
    @classmethod
    def validate_source_dir(cls, v: List[str]) -> List[str]:
        """Drop blank entries and expand a leading ~ in source directories."""
        normalized = []
        for source in v:
            if not source or not source.strip():
                continue
            if source.startswith('~'):
                source = str(Path(source).expanduser())
            normalized.append(source)
        return normalized

    @field_validator('black_list', mode='before')
    @classmethod
    def validate_black_list(cls, v) -> List[str]:
        """Treat a null blacklist as empty and drop empty substrings."""
        if v is None:
            return []
        if isinstance(v, list):
            return [entry for entry in v if entry != ""]
        return v

    @property
    def window_seconds(self) -> int:
        """Recency window in seconds."""
        return self.time_limit * 60

    def get_existing_sources(self) -> List[str]:
        """Get source directories that currently exist on disk."""
        return [source for source in self.source_dir if Path(source).exists()]

    def validate_configuration(self) -> List[str]:
        """Validate the configuration against the filesystem and return any warnings."""
        warnings = []

        if not self.source_dir:
            warnings.append("No source directories configured, nothing will be scanned")

        for source in self.source_dir:
            source_path = Path(source)
            if not source_path.exists():
                warnings.append(f"Source directory does not exist: {source}")
            elif not source_path.is_dir():
                warnings.append(f"Source path is not a directory: {source}")

        if self.time_limit == 0:
            warnings.append("Time limit is 0 minutes, only files created this second will be listed")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GrabConfig':
        """Create configuration from dictionary representation."""
        return cls.model_validate(data)

    @classmethod
    def default(cls, home: Path) -> 'GrabConfig':
        """Build the first-run configuration for the given home directory."""
        return cls(
            source_dir=[str(home / 'Downloads')],
            time_limit=DEFAULT_TIME_LIMIT,
            black_list=[]
        )

    def __str__(self) -> str:
        """String representation of the configuration."""
        parts = [f"Sources: {len(self.source_dir)} directories"]
        parts.append(f"Time limit: {self.time_limit} minutes")
        parts.append(f"Blacklist entries: {len(self.black_list)}")

        return " | ".join(parts)
