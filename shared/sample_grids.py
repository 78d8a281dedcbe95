"""Single source of truth for sample grid definitions.

This module defines the header text and payload values used by both:
- scripts/gen_fixtures.py (writes the sample pair to disk)
- tests/ (builds the same pair under tmp_path)

Location: shared/ (not tests/) to avoid scripts->tests dependency.
"""

from __future__ import annotations

# Header of the global ETOPO2v2g 2 arc-minute grid (little-endian float build)
ETOPO2V2G_HEADER_TEXT: str = """\
NCOLS 10801
NROWS 5401
XLLCENTER -180.00000
YLLCENTER -90.00000
CELLSIZE 0.03333333333
NODATA_VALUE 999999
BYTEORDER LSBFIRST
NUMBERTYPE 4_BYTE_FLOAT
MIN_VALUE -10722.0
MAX_VALUE 8046.0
"""

# 3x3 grid centered on (0, 0) with one-degree cells
SAMPLE_3X3_HEADER_TEXT: str = """\
NCOLS 3
NROWS 3
XLLCENTER -1
YLLCENTER -1
CELLSIZE 1
NODATA_VALUE -9999
BYTEORDER LSBFIRST
NUMBERTYPE 4_BYTE_FLOAT
MIN_VALUE 0
MAX_VALUE 8
"""

# Payload values in file order: row 0 is 0, 1, 2; row 2 is 6, 7, 8
SAMPLE_3X3_VALUES: list[float] = [float(v) for v in range(9)]

SAMPLE_3X3_STEM: str = "sample_3x3"
