"""
File descriptor model for grab.

A descriptor is the in-memory record of one candidate file found by the
scanner: where it lives, how big it is, when it was created, and the column
widths used to render it next to the other candidates.
"""

from datetime import datetime
from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field


SIZE_UNITS = ['B', 'KB', 'MB', 'GB', 'TB']

DEFAULT_TIME_WIDTH = 5
DEFAULT_SIZE_WIDTH = 8


def format_size(num_bytes: int) -> str:
    """
    Format a byte count for display.

    Bytes are rendered as an integer ("1023B"); larger units with one decimal
    place ("1.5KB"). TB is the largest unit.
    """
    size = float(num_bytes)
    unit_index = 0
    while size >= 1024.0 and unit_index < len(SIZE_UNITS) - 1:
        size /= 1024.0
        unit_index += 1

    if unit_index == 0:
        return f"{num_bytes}B"
    return f"{size:.1f}{SIZE_UNITS[unit_index]}"


def format_clock(timestamp: int) -> str:
    """Format an epoch timestamp as local HH:MM."""
    return datetime.fromtimestamp(timestamp).strftime('%H:%M')


class FileDescriptor(BaseModel):
    """
    A recently created file offered for selection.

    Attributes:
        path: Full path to the file
        name: Base name shown in the list and used as the move target
        size: File size in bytes
        created_timestamp: Creation time as epoch seconds
        created_time: Creation time as local HH:MM
        time_width: Rendered width of the time column
        size_width: Rendered width of the size column
    """

    model_config = ConfigDict(frozen=True)

    path: Path = Field(..., description="Full path to the file")
    name: str = Field(..., min_length=1, description="Base name of the file")
    size: int = Field(..., ge=0, description="File size in bytes")
    created_timestamp: int = Field(..., description="Creation time as epoch seconds")
    created_time: str = Field(..., description="Creation time as local HH:MM")
    time_width: int = Field(DEFAULT_TIME_WIDTH, ge=0, description="Time column width")
    size_width: int = Field(DEFAULT_SIZE_WIDTH, ge=0, description="Size column width")

    @classmethod
    def from_file(cls, path: Path, size: int, created_timestamp: int) -> 'FileDescriptor':
        """Create a descriptor for a scanned file."""
        return cls(
            path=path,
            name=path.name,
            size=size,
            created_timestamp=created_timestamp,
            created_time=format_clock(created_timestamp)
        )

    def get_size_human_readable(self) -> str:
        """Get file size in human-readable format."""
        return format_size(self.size)

    def with_widths(self, time_width: int, size_width: int) -> 'FileDescriptor':
        """Return a copy of this descriptor using the given column widths."""
        return self.model_copy(update={'time_width': time_width, 'size_width': size_width})

    def render(self) -> str:
        """Render the descriptor as an aligned `time  size  name` line."""
        return (
            f"{self.created_time:<{self.time_width}} "
            f"{self.get_size_human_readable():<{self.size_width}} "
            f"{self.name}"
        )

    def __str__(self) -> str:
        return self.render()
