"""Domain Port(s) for Elevation I/O.

Defines interfaces (Protocols) that infrastructure adapters must implement.
No concrete I/O here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from .value_objects import ElevationGrid, EsriHeader


@runtime_checkable
class HeaderRepository(Protocol):
    """Port for obtaining grid headers from external sources.

    Implementations live in infrastructure (e.g., ESRI .hdr adapter).
    """

    def load_header(self, file_path: Path | str) -> EsriHeader:
        """Parse a header file into an EsriHeader."""
        ...


@runtime_checkable
class GridRepository(Protocol):
    """Port for materializing a grid payload described by a parsed header."""

    def load_grid(self, file_path: Path | str, header: EsriHeader) -> ElevationGrid:
        """Load the full payload and return a read-only ElevationGrid."""
        ...
