"""
Unit tests for descriptors and list formatting.
"""

from datetime import datetime
from pathlib import Path
import pytest
from pydantic import ValidationError

from grab.models.descriptor import FileDescriptor, format_size, format_clock
from grab.tools.formatter import (
    COLUMN_PADDING,
    compute_column_widths,
    prepare_listing,
    sort_by_recency
)


def descriptor(name: str, created: int, size: int = 10) -> FileDescriptor:
    return FileDescriptor.from_file(Path("/downloads") / name, size, created)


class TestFormatSize:
    """Test cases for human-readable sizes."""

    @pytest.mark.parametrize("num_bytes,expected", [
        (0, "0B"),
        (1, "1B"),
        (1023, "1023B"),
        (1024, "1.0KB"),
        (1536, "1.5KB"),
        (1048576, "1.0MB"),
        (5 * 1024 ** 3, "5.0GB"),
        (2 * 1024 ** 4, "2.0TB"),
    ])
    def test_examples(self, num_bytes, expected):
        assert format_size(num_bytes) == expected

    def test_terabytes_are_the_largest_unit(self):
        assert format_size(2048 * 1024 ** 4) == "2048.0TB"


class TestFileDescriptor:
    """Test cases for FileDescriptor."""

    def test_from_file(self):
        created = int(datetime(2024, 3, 1, 9, 7).timestamp())
        d = FileDescriptor.from_file(Path("/downloads/a.zip"), 2048, created)

        assert d.name == "a.zip"
        assert d.created_time == "09:07"
        assert d.created_time == format_clock(created)
        assert d.get_size_human_readable() == "2.0KB"

    def test_descriptor_is_frozen(self):
        d = descriptor("a.txt", 100)
        with pytest.raises(ValidationError):
            d.size = 5

    def test_with_widths_returns_copy(self):
        d = descriptor("a.txt", 100)
        wide = d.with_widths(9, 12)

        assert (wide.time_width, wide.size_width) == (9, 12)
        assert (d.time_width, d.size_width) == (5, 8)
        assert wide.path == d.path

    def test_render(self):
        created = int(datetime(2024, 3, 1, 10, 5).timestamp())
        d = FileDescriptor.from_file(Path("/dl/report.pdf"), 1536, created).with_widths(7, 7)

        assert d.render() == "10:05   1.5KB   report.pdf"
        assert str(d) == d.render()

    def test_negative_size_rejected(self):
        with pytest.raises(ValidationError):
            FileDescriptor.from_file(Path("/dl/x"), -1, 0)


class TestFormatter:
    """Test cases for sorting and column widths."""

    def test_sort_newest_first(self):
        items = [descriptor("a", 100), descriptor("b", 300), descriptor("c", 200)]
        assert [d.name for d in sort_by_recency(items)] == ["b", "c", "a"]

    def test_sort_is_stable_for_ties(self):
        items = [descriptor("first", 100), descriptor("second", 100),
                 descriptor("newer", 200), descriptor("third", 100)]

        assert [d.name for d in sort_by_recency(items)] == ["newer", "first", "second", "third"]

    def test_column_widths(self):
        items = [descriptor("a", 100, size=5), descriptor("b", 200, size=1536), descriptor("c", 300, size=1023)]

        time_width, size_width = compute_column_widths(items)

        assert time_width == len("10:00") + COLUMN_PADDING
        assert size_width == len("1023B") + COLUMN_PADDING

    def test_column_widths_empty(self):
        assert compute_column_widths([]) == (8 + COLUMN_PADDING, 10 + COLUMN_PADDING)

    def test_prepare_listing(self):
        items = [descriptor("small", 100, size=3), descriptor("big", 200, size=3 * 1024 ** 2)]

        listing = prepare_listing(items)

        assert [d.name for d in listing] == ["big", "small"]
        assert {d.time_width for d in listing} == {5 + COLUMN_PADDING}
        assert {d.size_width for d in listing} == {len("3.0MB") + COLUMN_PADDING}
        assert [d.time_width for d in items] == [5, 5]

    def test_rendered_rows_align(self):
        items = [descriptor("x.txt", 100, size=3), descriptor("y.iso", 200, size=700 * 1024 ** 2)]

        rows = [d.render() for d in prepare_listing(items)]

        assert rows[0].index("y.iso") == rows[1].index("x.txt")

    def test_two_files_scenario(self):
        """Files created at 10:00 and 10:05 list the 10:05 file first."""
        ten = descriptor("ten.txt", int(datetime(2024, 3, 1, 10, 0).timestamp()))
        ten_five = descriptor("ten_five.txt", int(datetime(2024, 3, 1, 10, 5).timestamp()))

        listing = prepare_listing([ten, ten_five])

        assert [d.created_time for d in listing] == ["10:05", "10:00"]
        assert [d.name for d in listing] == ["ten_five.txt", "ten.txt"]
