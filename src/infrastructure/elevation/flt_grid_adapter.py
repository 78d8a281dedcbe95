"""ESRI .flt adapter for GridRepository.

Loads the raw binary payload of an ESRI float grid pair into a domain
ElevationGrid Value Object, using the already-parsed EsriHeader for sizing.

Lifecycle:
1) Compare payload length on disk with NROWS * NCOLS * 4 before decoding
2) Check the header describes a usable grid (positive NCOLS, NROWS, CELLSIZE)
3) Check the optional memory budget before allocation
4) Resolve byte order (convention override, else header BYTEORDER tag)
5) Decode the payload in one pass under a scoped file handle
6) Freeze the array and return ElevationGrid in physical file row order
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from domain.elevation.errors import (
    InsufficientMemoryError,
    InvalidHeaderError,
    SizeMismatchError,
)
from domain.elevation.value_objects import (
    FLOAT32_BYTES,
    ByteOrder,
    ElevationGrid,
    EsriHeader,
    GridConvention,
)

# Module-level logger (reused across all calls)
logger = logging.getLogger(__name__)

HIGH_NODATA_PCT = 80.0  # Warn when more of the grid than this is NoData


def validate_header_dimensions(header: EsriHeader) -> None:
    """Reject headers that cannot describe a grid.

    Raises:
        InvalidHeaderError: If NCOLS, NROWS or CELLSIZE is not positive
    """
    if header.ncols <= 0 or header.nrows <= 0:
        raise InvalidHeaderError(
            f"Header dimensions must be positive: {header.ncols}x{header.nrows}"
        )
    if not header.cell_size > 0:
        raise InvalidHeaderError(f"Header cell size must be positive: {header.cell_size}")


class FltGridAdapter:
    """Infrastructure adapter for loading ESRI float grids.

    Parameters
    ----------
    convention: GridConvention | None
        Row orientation recorded on the loaded grid, and an optional byte
        order that overrides the header BYTEORDER tag. Defaults to
        GridConvention() (south-up, tag-driven byte order).
    max_bytes: int | None
        Optional memory budget for the resulting float32 grid (rows*cols*4).
        Exceeding it raises InsufficientMemoryError before allocation.
    """

    def __init__(
        self,
        convention: GridConvention | None = None,
        max_bytes: int | None = None,
    ) -> None:
        self.convention = convention or GridConvention()
        self.max_bytes = max_bytes

    def resolve_byte_order(self, header: EsriHeader) -> ByteOrder:
        """Return the payload byte order: override, header tag, else little-endian."""
        if self.convention.byte_order is not None:
            return self.convention.byte_order
        byte_order = ByteOrder.from_tag(header.byte_order)
        if byte_order is None:
            logger.warning(
                "Unrecognized BYTEORDER %r; decoding as %s",
                header.byte_order,
                ByteOrder.LITTLE.value,
            )
            return ByteOrder.LITTLE
        return byte_order

    def load_grid(self, file_path: Path | str, header: EsriHeader) -> ElevationGrid:
        """Load a .flt payload and return a read-only ElevationGrid.

        Raises:
            FileNotFoundError: If the payload does not exist
            PermissionError: If the payload cannot be read (filename only)
            InvalidHeaderError: If the header cannot describe a grid
            SizeMismatchError: If the payload length disagrees with the header
            InsufficientMemoryError: If the grid exceeds the memory budget
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(str(path))

        expected = header.expected_payload_bytes
        try:
            actual = path.stat().st_size
        except OSError as e:
            # Log only filename, errno, and strerror to avoid leaking absolute paths
            logger.error(
                "Failed to stat %s (errno=%s, strerror=%s)",
                path.name,
                getattr(e, "errno", "unknown"),
                getattr(e, "strerror", "unknown"),
            )
            raise

        if actual != expected:
            raise SizeMismatchError(expected, actual)

        # After the size check: an empty payload matches a 0x0 header
        validate_header_dimensions(header)

        if self.max_bytes is not None and expected > self.max_bytes:
            raise InsufficientMemoryError(
                f"Grid size {expected}B exceeds budget {self.max_bytes}B"
            )

        byte_order = self.resolve_byte_order(header)
        count = header.nrows * header.ncols

        try:
            with path.open("rb") as fh:
                raw = np.fromfile(fh, dtype=byte_order.numpy_dtype, count=count)
        except PermissionError as e:
            raise PermissionError(path.name) from e
        except MemoryError as e:
            raise InsufficientMemoryError("Insufficient memory to load grid") from e

        # File shrank between stat and read
        if raw.size != count:
            raise SizeMismatchError(expected, raw.size * FLOAT32_BYTES)

        # Non-native byte order is swapped into a native float32 copy
        if raw.dtype != np.float32:
            raw = raw.astype(np.float32)
        # Sole reference to the decoded buffer: the grid freezes it in place
        grid = ElevationGrid.adopt(
            data=raw.reshape(header.nrows, header.ncols),
            header=header,
            row_orientation=self.convention.row_orientation,
        )

        sentinel = np.float32(header.nodata_value)
        nodata_pct = float(np.count_nonzero(grid.data == sentinel) * 100.0 / count)
        if nodata_pct > HIGH_NODATA_PCT:
            logger.warning(
                "Grid %s: %.1f%% NoData samples detected", path.name, nodata_pct
            )
        logger.debug(
            "Grid %s: Loaded %dx%d %s grid (%s)",
            path.name,
            header.ncols,
            header.nrows,
            byte_order.value,
            self.convention.row_orientation.value,
        )
        return grid
