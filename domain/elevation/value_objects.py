"""Elevation Bounded Context - Value Objects.

Immutable data structures for ESRI-style elevation grids (.hdr + .flt pairs).
All validation occurs at construction time via Pydantic.

Conventions that the files cannot describe themselves (which physical row is
north, which sphere axis is "up", payload byte order) are explicit enums
bundled in GridConvention and passed to loaders and services.
"""

from __future__ import annotations

from enum import Enum

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, ValidationInfo, model_validator

# ---------------------------------------------------------------------------
# Numeric Constants
# ---------------------------------------------------------------------------
FLOAT32_BYTES = 4  # Payload sample width (4_BYTE_FLOAT)
ADOPT_ARRAY = "adopt_array"  # Validation context key used by ElevationGrid.adopt()


# ---------------------------------------------------------------------------
# Conventions
# ---------------------------------------------------------------------------
class RowOrientation(str, Enum):
    """Mapping from physical file row to latitude.

    SOUTH_UP: physical row 0 is YLLCENTER; latitude grows with the row index.
    NORTH_DOWN: physical row 0 is +90 degrees; latitude shrinks with the row index.
    """

    SOUTH_UP = "south_up"
    NORTH_DOWN = "north_down"


class SphereAxes(str, Enum):
    """Orientation of the sphere that produced cartesian query points.

    Z_UP: lat = asin(z / r), lon = atan2(y, x)
    Y_UP: lat = asin(y / r), lon = -atan2(z, x)  (right-handed Y-up meshes)
    """

    Z_UP = "z_up"
    Y_UP = "y_up"


class ByteOrder(str, Enum):
    """Payload byte order, as declared by the header BYTEORDER tag."""

    LITTLE = "LSBFIRST"
    BIG = "MSBFIRST"

    @property
    def numpy_dtype(self) -> np.dtype:
        return np.dtype("<f4") if self is ByteOrder.LITTLE else np.dtype(">f4")

    @classmethod
    def from_tag(cls, tag: str) -> ByteOrder | None:
        """Resolve a header BYTEORDER tag; empty means little-endian.

        Returns None for tags that name neither order.
        """
        normalized = tag.strip().upper()
        if normalized in ("", "LSBFIRST", "LSB", "LITTLE", "LITTLE_ENDIAN", "I"):
            return cls.LITTLE
        if normalized in ("MSBFIRST", "MSB", "BIG", "BIG_ENDIAN", "M"):
            return cls.BIG
        return None


class GridConvention(BaseModel):
    """Configuration for interpreting a grid pair (Value Object).

    byte_order: when set, overrides the header BYTEORDER tag.
    """

    row_orientation: RowOrientation = RowOrientation.SOUTH_UP
    sphere_axes: SphereAxes = SphereAxes.Z_UP
    byte_order: ByteOrder | None = None

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# EsriHeader
# ---------------------------------------------------------------------------
class EsriHeader(BaseModel):
    """Parsed ESRI .hdr metadata (Value Object).

    Keys absent from the file keep their zero/empty defaults. The payload
    size invariant (nrows * ncols * 4 == file length) is checked when a grid
    is loaded, not here.
    """

    ncols: int = 0  # NCOLS
    nrows: int = 0  # NROWS
    xll_center: float = 0.0  # XLLCENTER, longitude of column 0 center
    yll_center: float = 0.0  # YLLCENTER, latitude of the southern row center
    cell_size: float = 0.0  # CELLSIZE, degrees per cell
    nodata_value: float = 0.0  # NODATA_VALUE
    byte_order: str = ""  # BYTEORDER, stored verbatim
    number_type: str = ""  # NUMBERTYPE, stored verbatim
    min_value: float = 0.0  # MIN_VALUE
    max_value: float = 0.0  # MAX_VALUE

    model_config = ConfigDict(frozen=True)

    @property
    def expected_payload_bytes(self) -> int:
        return self.nrows * self.ncols * FLOAT32_BYTES

    @property
    def value_range(self) -> tuple[float, float]:
        """Declared (min, max) sample range used for normalization."""
        return (self.min_value, self.max_value)


# ---------------------------------------------------------------------------
# ElevationGrid
# ---------------------------------------------------------------------------
class ElevationGrid(BaseModel):
    """Materialized elevation samples with their header (Value Object).

    data is kept in physical file order: data[0] is the first row stored in
    the payload. row_orientation says which latitude that row represents.
    The array is read-only after construction.
    """

    data: NDArray[np.float32]  # 2D float32 array (nrows x ncols), read-only
    header: EsriHeader
    row_orientation: RowOrientation = RowOrientation.SOUTH_UP

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def validate_grid(self, info: ValidationInfo) -> "ElevationGrid":
        if self.data.ndim != 2:
            raise ValueError(f"Data must be 2D, got {self.data.ndim}D")
        if self.data.dtype != np.float32:
            raise ValueError(f"Data must be float32, got {self.data.dtype}")
        expected_shape = (self.header.nrows, self.header.ncols)
        if self.data.shape != expected_shape:
            raise ValueError(
                f"Data shape {self.data.shape} does not match header {expected_shape}"
            )

        # Adopted arrays (see adopt()) are frozen in place; anything else is
        # copied so caller arrays never change and never alias the grid.
        adopted = bool(info.context and info.context.get(ADOPT_ARRAY))
        if adopted and self.data.flags.c_contiguous:
            self.data.flags.writeable = False
            return self
        immutable = np.array(self.data, dtype=np.float32, copy=True, order="C")
        immutable.flags.writeable = False
        object.__setattr__(self, "data", immutable)

        return self

    @classmethod
    def adopt(
        cls,
        data: NDArray[np.float32],
        header: EsriHeader,
        row_orientation: RowOrientation = RowOrientation.SOUTH_UP,
    ) -> "ElevationGrid":
        """Build a grid that takes ownership of data without copying it.

        data is frozen in place. Callers must not keep other references to
        it; the grid loader uses this to avoid doubling memory on large grids.
        """
        return cls.model_validate(
            {"data": data, "header": header, "row_orientation": row_orientation},
            context={ADOPT_ARRAY: True},
        )

    @property
    def shape(self) -> tuple[int, int]:
        return (self.header.nrows, self.header.ncols)

    def value_at(self, row: int, col: int) -> float:
        """Return the sample at a physical (row, col) index."""
        return float(self.data[row, col])


# ---------------------------------------------------------------------------
# ElevationSample
# ---------------------------------------------------------------------------
class ElevationSample(BaseModel):
    """Result of a nearest-cell lookup (Value Object).

    normalized maps the header's MIN_VALUE..MAX_VALUE onto -1..+1 and is not
    clamped; samples outside the declared range fall outside -1..+1.
    """

    latitude: float
    longitude: float
    row: int
    col: int
    elevation: float
    normalized: float
    is_nodata: bool = False

    model_config = ConfigDict(frozen=True)
