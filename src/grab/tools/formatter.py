"""
Presentation helpers for grab.

Sorts scanned descriptors newest first and assigns every descriptor the same
column widths so the selection list renders aligned.
"""

from typing import List, Tuple

from ..models.descriptor import FileDescriptor, format_size


COLUMN_PADDING = 2
FALLBACK_TIME_WIDTH = 8
FALLBACK_SIZE_WIDTH = 10

__all__ = [
    'COLUMN_PADDING',
    'compute_column_widths',
    'format_size',
    'prepare_listing',
    'sort_by_recency',
]


def sort_by_recency(descriptors: List[FileDescriptor]) -> List[FileDescriptor]:
    """Sort descriptors newest first, keeping encounter order for equal timestamps."""
    return sorted(descriptors, key=lambda d: d.created_timestamp, reverse=True)


def compute_column_widths(descriptors: List[FileDescriptor]) -> Tuple[int, int]:
    """
    Compute the padded time and size column widths for a list.

    Returns:
        Tuple of (time_width, size_width)
    """
    time_width = max((len(d.created_time) for d in descriptors), default=FALLBACK_TIME_WIDTH)
    size_width = max(
        (len(d.get_size_human_readable()) for d in descriptors),
        default=FALLBACK_SIZE_WIDTH
    )
    return time_width + COLUMN_PADDING, size_width + COLUMN_PADDING


def prepare_listing(descriptors: List[FileDescriptor]) -> List[FileDescriptor]:
    """
    Sort descriptors and apply uniform column widths.

    The input list and its descriptors are left unchanged.
    """
    ordered = sort_by_recency(descriptors)
    time_width, size_width = compute_column_widths(ordered)
    return [d.with_widths(time_width, size_width) for d in ordered]
