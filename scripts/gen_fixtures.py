#!/usr/bin/env python3
"""Generate synthetic ESRI float grid pairs (.hdr + .flt) for manual checks.

Fixtures are minimal synthetic grids - not real elevation data. Pair them
with scripts/query_elevation.py to exercise the loader end to end.

Usage:
    python scripts/gen_fixtures.py

Output:
    data/sample_3x3.hdr, data/sample_3x3.flt            (little-endian)
    data/sample_3x3_msb.hdr, data/sample_3x3_msb.flt    (big-endian)
    data/sample_global_1deg.hdr, data/sample_global_1deg.flt

Dependencies:
    This script imports from shared/sample_grids.py (not tests/) to avoid
    circular dependencies between scripts and tests packages.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np

from domain.elevation.value_objects import ByteOrder, EsriHeader
from infrastructure.elevation import EsriHeaderAdapter, parse_header_lines
from shared.sample_grids import (
    SAMPLE_3X3_HEADER_TEXT,
    SAMPLE_3X3_STEM,
    SAMPLE_3X3_VALUES,
)

# Output directory
DATA_DIR = Path(__file__).parent.parent / "data"


def ensure_dir() -> None:
    """Ensure output directory exists."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    print(f"Output directory: {DATA_DIR}")


def write_pair(stem: str, header: EsriHeader, values: np.ndarray) -> Path:
    """Write <stem>.hdr and <stem>.flt, encoding values per header BYTEORDER."""
    byte_order = ByteOrder.from_tag(header.byte_order) or ByteOrder.LITTLE
    EsriHeaderAdapter().write_header(DATA_DIR / f"{stem}.hdr", header)
    flt_path = DATA_DIR / f"{stem}.flt"
    np.asarray(values, dtype=byte_order.numpy_dtype).tofile(flt_path)
    return flt_path


def gen_sample_3x3() -> None:
    """3x3 grid around (0, 0), payload 0..8, little-endian."""
    header = parse_header_lines(SAMPLE_3X3_HEADER_TEXT.splitlines())
    path = write_pair(SAMPLE_3X3_STEM, header, np.array(SAMPLE_3X3_VALUES))
    print(f"  Created: {path.name} (3x3, LSBFIRST, 0..8)")


def gen_sample_3x3_msb() -> None:
    """Same 3x3 grid encoded big-endian."""
    header = parse_header_lines(SAMPLE_3X3_HEADER_TEXT.splitlines()).model_copy(
        update={"byte_order": ByteOrder.BIG.value}
    )
    path = write_pair(f"{SAMPLE_3X3_STEM}_msb", header, np.array(SAMPLE_3X3_VALUES))
    print(f"  Created: {path.name} (3x3, MSBFIRST, 0..8)")


def gen_sample_global_1deg() -> None:
    """Whole-globe 1-degree grid, south-up, elevation = latitude * 100 m."""
    nrows, ncols = 181, 361
    lats = np.linspace(-90.0, 90.0, nrows, dtype=np.float32)
    values = np.repeat(lats[:, np.newaxis] * 100.0, ncols, axis=1)
    header = EsriHeader(
        ncols=ncols,
        nrows=nrows,
        xll_center=-180.0,
        yll_center=-90.0,
        cell_size=1.0,
        nodata_value=999999.0,
        byte_order=ByteOrder.LITTLE.value,
        number_type="4_BYTE_FLOAT",
        min_value=-9000.0,
        max_value=9000.0,
    )
    path = write_pair("sample_global_1deg", header, values.ravel())
    print(f"  Created: {path.name} ({ncols}x{nrows}, 1 degree, latitude ramp)")


def main() -> int:
    print("=" * 60)
    print("Generating synthetic ESRI float grids")
    print("=" * 60)
    ensure_dir()

    gen_sample_3x3()
    gen_sample_3x3_msb()
    gen_sample_global_1deg()

    print("\nGenerated files:")
    for f in sorted(DATA_DIR.iterdir()):
        if f.is_file() and f.suffix.lower() in (".hdr", ".flt"):
            print(f"  {f.name:40} {f.stat().st_size:>10}B")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
