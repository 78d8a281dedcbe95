"""Elevation Bounded Context - Domain Services.

Pure domain logic for point queries against an elevation grid.
NO I/O operations - file loading is implemented by infrastructure adapters
under `src/infrastructure/elevation/` via domain ports.

Every function here is total: off-grid coordinates clamp to the nearest edge
cell, degenerate inputs map to defined fallbacks, and nothing raises.
"""

from __future__ import annotations

import math

import numpy as np

from domain.elevation.value_objects import (
    ElevationGrid,
    ElevationSample,
    EsriHeader,
    RowOrientation,
    SphereAxes,
)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
NORTH_POLE_LAT = 90.0
MIN_RADIUS = 1e-9  # Below this a cartesian point is treated as the origin
MIN_RANGE = 1e-6  # Below this a (min, max) range is treated as empty


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def round_half_away(value: float) -> float:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    if not math.isfinite(value):
        return value
    magnitude = abs(value)
    whole = math.floor(magnitude)
    # abs(value) + 0.5 would round 0.49999999999999994 up to 1.0
    if magnitude - whole >= 0.5:
        whole += 1
    return math.copysign(whole, value)


def _clamp_index(value: float, size: int) -> int:
    # NaN compares false everywhere; pin it to the first index
    if math.isnan(value):
        return 0
    return int(max(0.0, min(float(size - 1), value)))


# ---------------------------------------------------------------------------
# Nearest-cell mapping
# ---------------------------------------------------------------------------
def lat_lon_to_cell(
    lat: float,
    lon: float,
    header: EsriHeader,
    row_orientation: RowOrientation = RowOrientation.SOUTH_UP,
) -> tuple[int, int]:
    """Map a geographic coordinate to the nearest (row, col) grid index.

    Row formula depends on the orientation:
        SOUTH_UP:   row = round((lat - YLLCENTER) / CELLSIZE)
        NORTH_DOWN: row = round((90 - lat) / CELLSIZE)
    Column formula is shared: col = round((lon - XLLCENTER) / CELLSIZE)

    Both indices are clamped independently into the grid, so out-of-range
    coordinates resolve to the nearest edge cell.

    Args:
        lat: Latitude in degrees (any finite value)
        lon: Longitude in degrees (any finite value)
        header: Header describing origin, cell size and dimensions
        row_orientation: Physical-row convention the grid was loaded with

    Returns:
        (row, col) within [0, nrows-1] x [0, ncols-1]. A header with a
        non-positive cell size maps everything to (0, 0).
    """
    if not header.cell_size > 0:
        return (0, 0)

    if row_orientation is RowOrientation.NORTH_DOWN:
        row_f = (NORTH_POLE_LAT - lat) / header.cell_size
    else:
        row_f = (lat - header.yll_center) / header.cell_size
    col_f = (lon - header.xll_center) / header.cell_size

    row = _clamp_index(round_half_away(row_f), header.nrows)
    col = _clamp_index(round_half_away(col_f), header.ncols)
    return (row, col)


def cell_center(
    row: int,
    col: int,
    header: EsriHeader,
    row_orientation: RowOrientation = RowOrientation.SOUTH_UP,
) -> tuple[float, float]:
    """Return the (lat, lon) center of a grid cell; inverse of lat_lon_to_cell."""
    if row_orientation is RowOrientation.NORTH_DOWN:
        lat = NORTH_POLE_LAT - row * header.cell_size
    else:
        lat = header.yll_center + row * header.cell_size
    lon = header.xll_center + col * header.cell_size
    return (lat, lon)


# ---------------------------------------------------------------------------
# Sphere -> geographic projection
# ---------------------------------------------------------------------------
def cartesian_to_lat_lon(
    x: float, y: float, z: float, axes: SphereAxes = SphereAxes.Z_UP
) -> tuple[float, float]:
    """Convert a 3D point on a sphere to (lat, lon) in degrees.

    The point need not lie on the unit sphere; only its direction matters.
    Points within MIN_RADIUS of the origin return (0.0, 0.0).

    Args:
        x, y, z: Cartesian coordinates
        axes: Orientation policy of the sphere that produced the point

    Returns:
        (latitude, longitude) in degrees, latitude in [-90, 90] and
        longitude in [-180, 180].
    """
    r = math.sqrt(x * x + y * y + z * z)
    if r < MIN_RADIUS:
        return (0.0, 0.0)

    if axes is SphereAxes.Y_UP:
        up, lon_rad = y, -math.atan2(z, x)
    else:
        up, lon_rad = z, math.atan2(y, x)

    # sqrt rounding can leave |up| a hair above r
    ratio = max(-1.0, min(1.0, up / r))
    return (math.degrees(math.asin(ratio)), math.degrees(lon_rad))


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------
def normalize(value: float, min_value: float, max_value: float) -> float:
    """Map [min_value, max_value] linearly onto [-1, +1].

    Values outside the range are passed through unclamped and land outside
    [-1, +1]. A range narrower than MIN_RANGE returns 0.0.
    """
    span = max_value - min_value
    if abs(span) < MIN_RANGE:
        return 0.0
    ratio = (value - min_value) / span
    return ratio * 2.0 - 1.0


def is_nodata(value: float, header: EsriHeader) -> bool:
    """Check a sample against the header's NODATA_VALUE sentinel.

    Exact comparison at float32 precision: the sentinel is stored in the
    payload as a 4-byte float, so -9999.9 matches -9999.900390625.
    NaN samples are always NoData.
    """
    if math.isnan(value):
        return True
    return float(np.float32(value)) == float(np.float32(header.nodata_value))


# ---------------------------------------------------------------------------
# Point lookups
# ---------------------------------------------------------------------------
def sample_elevation(grid: ElevationGrid, lat: float, lon: float) -> ElevationSample:
    """Look up the nearest-cell elevation at a geographic coordinate.

    Uses the grid's own row orientation and the header's MIN_VALUE/MAX_VALUE
    for the normalized value.

    Example:
        >>> header = load_header("ETOPO2v2g_f4_LSB.hdr")
        >>> grid = load_grid("ETOPO2v2g_f4_LSB.flt", header)
        >>> sample = sample_elevation(grid, 40.0, -75.0)
        >>> print(f"row={sample.row} col={sample.col} elev={sample.elevation}")
    """
    header = grid.header
    row, col = lat_lon_to_cell(lat, lon, header, grid.row_orientation)
    elevation = grid.value_at(row, col)
    return ElevationSample(
        latitude=lat,
        longitude=lon,
        row=row,
        col=col,
        elevation=elevation,
        normalized=normalize(elevation, header.min_value, header.max_value),
        is_nodata=is_nodata(elevation, header),
    )


def sample_cartesian(
    grid: ElevationGrid,
    x: float,
    y: float,
    z: float,
    axes: SphereAxes = SphereAxes.Z_UP,
) -> ElevationSample:
    """Look up the nearest-cell elevation under a point on a sphere."""
    lat, lon = cartesian_to_lat_lon(x, y, z, axes)
    return sample_elevation(grid, lat, lon)
