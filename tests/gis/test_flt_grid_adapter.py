import logging

import numpy as np
import pytest

from domain.elevation.errors import (
    InsufficientMemoryError,
    InvalidHeaderError,
    SizeMismatchError,
)
from domain.elevation.services import sample_elevation
from domain.elevation.value_objects import (
    ByteOrder,
    EsriHeader,
    GridConvention,
    RowOrientation,
)

# Use infrastructure.* (not src.infrastructure.*) for consistency with domain.* imports.
from infrastructure.elevation import load_grid
from infrastructure.elevation import flt_grid_adapter
from infrastructure.elevation.flt_grid_adapter import FltGridAdapter
from infrastructure.elevation.esri_header_adapter import parse_header_lines
from shared.sample_grids import SAMPLE_3X3_HEADER_TEXT, SAMPLE_3X3_VALUES
from tests.conftest_utils import header_text, write_grid_pair

ADAPTER_LOGGER = "infrastructure.elevation.flt_grid_adapter"


def _header(text: str) -> EsriHeader:
    return parse_header_lines(text.splitlines())


def test_sample_grid_happy_path(sample_3x3_pair, sample_3x3_header):
    _, flt = sample_3x3_pair

    grid = FltGridAdapter().load_grid(flt, sample_3x3_header)

    assert grid.data.shape == (3, 3)
    assert grid.data.dtype == np.float32
    assert grid.header == sample_3x3_header
    assert grid.row_orientation is RowOrientation.SOUTH_UP
    # Values fill physical rows in file order, ncols at a time
    np.testing.assert_array_equal(
        grid.data, np.arange(9, dtype=np.float32).reshape(3, 3)
    )
    assert grid.value_at(0, 0) == 0.0
    assert grid.value_at(1, 0) == 3.0
    assert grid.value_at(2, 2) == 8.0


def test_loaded_grid_is_read_only(sample_3x3_pair, sample_3x3_header):
    _, flt = sample_3x3_pair
    grid = FltGridAdapter().load_grid(flt, sample_3x3_header)

    with pytest.raises(ValueError):
        grid.data[0, 0] = 42.0


def test_bit_exact_float32_values(tmp_path):
    values = [-10722.0, 8046.0, 0.1, -0.0, 3.4028234663852886e38, 1e-45]
    text = header_text(NCOLS=3, NROWS=2, CELLSIZE=1, BYTEORDER="LSBFIRST")
    _, flt = write_grid_pair(tmp_path, text, values)

    grid = FltGridAdapter().load_grid(flt, _header(text))

    expected = np.asarray(values, dtype=np.float32).reshape(2, 3)
    assert grid.data.tobytes() == expected.tobytes()


# ---------------------------------------------------------------------------
# Size validation
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("count", [0, 1, 8, 10, 18])
def test_size_mismatch_raises(tmp_path, sample_3x3_header, count):
    _, flt = write_grid_pair(tmp_path, SAMPLE_3X3_HEADER_TEXT, range(count))

    with pytest.raises(SizeMismatchError) as excinfo:
        FltGridAdapter().load_grid(flt, sample_3x3_header)

    assert excinfo.value.expected == 36
    assert excinfo.value.actual == count * 4
    assert "expected 36 bytes" in str(excinfo.value)


def test_size_mismatch_on_partial_sample(tmp_path, sample_3x3_header):
    flt = tmp_path / "odd.flt"
    flt.write_bytes(b"\x00" * 35)

    with pytest.raises(SizeMismatchError) as excinfo:
        FltGridAdapter().load_grid(flt, sample_3x3_header)

    assert (excinfo.value.expected, excinfo.value.actual) == (36, 35)


def test_size_mismatch_raised_before_decoding(tmp_path, sample_3x3_header, monkeypatch):
    _, flt = write_grid_pair(tmp_path, SAMPLE_3X3_HEADER_TEXT, range(4))

    def _no_decode(*args, **kwargs):
        raise AssertionError("payload must not be decoded")

    monkeypatch.setattr(flt_grid_adapter.np, "fromfile", _no_decode)

    with pytest.raises(SizeMismatchError):
        FltGridAdapter().load_grid(flt, sample_3x3_header)


def test_file_not_found_raises(tmp_path, sample_3x3_header):
    with pytest.raises(FileNotFoundError):
        FltGridAdapter().load_grid(tmp_path / "missing.flt", sample_3x3_header)


# ---------------------------------------------------------------------------
# Header sanity
# ---------------------------------------------------------------------------
def test_zero_dimensions_rejected(tmp_path):
    flt = tmp_path / "empty.flt"
    flt.write_bytes(b"")

    with pytest.raises(InvalidHeaderError):
        FltGridAdapter().load_grid(flt, EsriHeader(cell_size=1.0))


def test_zero_dimensions_with_payload_is_size_mismatch(tmp_path):
    flt = tmp_path / "grid.flt"
    flt.write_bytes(b"\x00" * 12)

    with pytest.raises(SizeMismatchError):
        FltGridAdapter().load_grid(flt, EsriHeader(cell_size=1.0))


def test_non_positive_cell_size_rejected(tmp_path):
    text = header_text(NCOLS=3, NROWS=3, CELLSIZE=0)
    _, flt = write_grid_pair(tmp_path, text, range(9))

    with pytest.raises(InvalidHeaderError):
        FltGridAdapter().load_grid(flt, _header(text))


def test_memory_budget_exceeded(sample_3x3_pair, sample_3x3_header):
    _, flt = sample_3x3_pair

    with pytest.raises(InsufficientMemoryError):
        FltGridAdapter(max_bytes=32).load_grid(flt, sample_3x3_header)


def test_memory_budget_exact_fit(sample_3x3_pair, sample_3x3_header):
    _, flt = sample_3x3_pair

    grid = FltGridAdapter(max_bytes=36).load_grid(flt, sample_3x3_header)

    assert grid.shape == (3, 3)


# ---------------------------------------------------------------------------
# Byte order
# ---------------------------------------------------------------------------
def test_big_endian_payload_from_header_tag(tmp_path):
    text = header_text(NCOLS=3, NROWS=3, CELLSIZE=1, BYTEORDER="MSBFIRST")
    _, flt = write_grid_pair(tmp_path, text, SAMPLE_3X3_VALUES, dtype=">f4")

    grid = FltGridAdapter().load_grid(flt, _header(text))

    assert grid.data.dtype == np.float32
    assert grid.data.dtype.isnative
    assert grid.value_at(2, 2) == 8.0
    assert grid.value_at(0, 1) == 1.0


def test_empty_byteorder_tag_decodes_little_endian(tmp_path):
    text = header_text(NCOLS=3, NROWS=3, CELLSIZE=1)
    _, flt = write_grid_pair(tmp_path, text, SAMPLE_3X3_VALUES)

    grid = FltGridAdapter().load_grid(flt, _header(text))

    assert grid.value_at(2, 2) == 8.0


def test_convention_byte_order_overrides_tag(tmp_path):
    # Header claims little-endian, but the payload was written big-endian
    text = header_text(NCOLS=3, NROWS=3, CELLSIZE=1, BYTEORDER="LSBFIRST")
    _, flt = write_grid_pair(tmp_path, text, SAMPLE_3X3_VALUES, dtype=">f4")
    adapter = FltGridAdapter(convention=GridConvention(byte_order=ByteOrder.BIG))

    grid = adapter.load_grid(flt, _header(text))

    assert grid.value_at(2, 2) == 8.0


def test_unrecognized_byteorder_warns_and_decodes_little_endian(tmp_path, caplog):
    text = header_text(NCOLS=3, NROWS=3, CELLSIZE=1, BYTEORDER="VAXFIRST")
    _, flt = write_grid_pair(tmp_path, text, SAMPLE_3X3_VALUES)
    caplog.set_level(logging.WARNING, logger=ADAPTER_LOGGER)

    grid = FltGridAdapter().load_grid(flt, _header(text))

    assert grid.value_at(2, 2) == 8.0
    assert "VAXFIRST" in caplog.text


# ---------------------------------------------------------------------------
# Orientation and logging
# ---------------------------------------------------------------------------
def test_row_orientation_recorded_without_reordering(
    sample_3x3_pair, sample_3x3_header
):
    _, flt = sample_3x3_pair
    convention = GridConvention(row_orientation=RowOrientation.NORTH_DOWN)

    grid = load_grid(flt, sample_3x3_header, convention)

    assert grid.row_orientation is RowOrientation.NORTH_DOWN
    # Physical order is kept; orientation is applied by the coordinate mapper
    assert grid.value_at(0, 0) == 0.0
    assert grid.value_at(2, 2) == 8.0


def test_high_nodata_warning(tmp_path, caplog):
    text = header_text(NCOLS=3, NROWS=3, CELLSIZE=1, NODATA_VALUE=-9999)
    values = [-9999.0] * 8 + [12.5]
    _, flt = write_grid_pair(tmp_path, text, values, stem="mostly_nodata")
    caplog.set_level(logging.WARNING, logger=ADAPTER_LOGGER)

    FltGridAdapter().load_grid(flt, _header(text))

    assert "88.9% NoData" in caplog.text
    assert "mostly_nodata.flt" in caplog.text
    assert str(tmp_path) not in caplog.text


def test_high_nodata_warning_with_non_representable_sentinel(tmp_path, caplog):
    text = header_text(NCOLS=3, NROWS=3, CELLSIZE=1, NODATA_VALUE=-9999.9)
    values = [-9999.9] * 9
    _, flt = write_grid_pair(tmp_path, text, values)
    caplog.set_level(logging.WARNING, logger=ADAPTER_LOGGER)

    grid = FltGridAdapter().load_grid(flt, _header(text))

    assert "100.0% NoData" in caplog.text
    assert sample_elevation(grid, 0.0, 0.0).is_nodata is True


def test_no_nodata_warning_for_clean_grid(sample_3x3_pair, sample_3x3_header, caplog):
    _, flt = sample_3x3_pair
    caplog.set_level(logging.DEBUG, logger=ADAPTER_LOGGER)

    FltGridAdapter().load_grid(flt, sample_3x3_header)

    assert "NoData" not in caplog.text
    assert "Loaded 3x3" in caplog.text


def test_adapters_implement_domain_ports():
    from domain.elevation.repositories import GridRepository, HeaderRepository
    from infrastructure.elevation import EsriHeaderAdapter

    assert isinstance(FltGridAdapter(), GridRepository)
    assert isinstance(EsriHeaderAdapter(), HeaderRepository)
