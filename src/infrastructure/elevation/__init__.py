"""Infrastructure adapters for the elevation bounded context.

This module provides the infrastructure layer implementations for elevation
operations: parsing ESRI .hdr headers and loading .flt float payloads.

Adapters are exported for simplified imports, together with the two
function-style entry points most callers need.
"""

from __future__ import annotations

from pathlib import Path

from domain.elevation.repositories import GridRepository, HeaderRepository
from domain.elevation.value_objects import ElevationGrid, EsriHeader, GridConvention

from .esri_header_adapter import EsriHeaderAdapter, format_header, parse_header_lines
from .flt_grid_adapter import FltGridAdapter

__all__ = [
    "EsriHeaderAdapter",
    "FltGridAdapter",
    "format_header",
    "load_grid",
    "load_header",
    "parse_header_lines",
]


def load_header(file_path: Path | str) -> EsriHeader:
    """Parse an ESRI .hdr file. See EsriHeaderAdapter.load_header."""
    repository: HeaderRepository = EsriHeaderAdapter()
    return repository.load_header(file_path)


def load_grid(
    file_path: Path | str,
    header: EsriHeader,
    convention: GridConvention | None = None,
) -> ElevationGrid:
    """Load an ESRI .flt payload described by header. See FltGridAdapter.load_grid."""
    repository: GridRepository = FltGridAdapter(convention=convention)
    return repository.load_grid(file_path, header)
