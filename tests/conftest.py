"""Root pytest configuration for all tests.

Provides the 3x3 sample grid (header -1/-1 origin, one-degree cells,
payload 0..8) both as files under tmp_path and as an in-memory header.
"""

from pathlib import Path

import pytest

from domain.elevation.value_objects import EsriHeader
from infrastructure.elevation import parse_header_lines
from shared.sample_grids import (
    SAMPLE_3X3_HEADER_TEXT,
    SAMPLE_3X3_STEM,
    SAMPLE_3X3_VALUES,
)
from tests.conftest_utils import write_grid_pair


@pytest.fixture
def sample_3x3_header() -> EsriHeader:
    return parse_header_lines(SAMPLE_3X3_HEADER_TEXT.splitlines())


@pytest.fixture
def sample_3x3_pair(tmp_path: Path) -> tuple[Path, Path]:
    """(header_path, payload_path) for the little-endian 3x3 sample grid."""
    return write_grid_pair(
        tmp_path, SAMPLE_3X3_HEADER_TEXT, SAMPLE_3X3_VALUES, stem=SAMPLE_3X3_STEM
    )
