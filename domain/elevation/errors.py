"""Elevation Bounded Context - Error Hierarchy.

Custom exceptions for header parsing and grid loading.

Query services (cell mapping, projection, normalization) never raise; every
error here is fatal to the load operation it occurs in.
"""

from __future__ import annotations


class ElevationError(Exception):
    """Base error for elevation grid operations."""


class HeaderParseError(ElevationError):
    """Header line carries a numeric key whose value cannot be parsed.

    Attributes:
        line_number: 1-based line number in the header file
        key: The recognized key (upper-cased) whose value is malformed
        line: The raw offending line, stripped of its line terminator
    """

    def __init__(self, line_number: int, key: str, line: str) -> None:
        self.line_number = line_number
        self.key = key
        self.line = line
        super().__init__(f"Malformed value for {key} on line {line_number}: {line!r}")


class InvalidHeaderError(ElevationError):
    """Header dimensions or cell size cannot describe a grid."""


class SizeMismatchError(ElevationError):
    """Payload byte length disagrees with the header-declared dimensions.

    Attributes:
        expected: Byte count implied by NROWS * NCOLS * 4
        actual: Byte count found on disk
    """

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"File size mismatch: expected {expected} bytes, got {actual}"
        )


class InsufficientMemoryError(ElevationError):
    """Grid requires more memory than the configured budget allows."""
