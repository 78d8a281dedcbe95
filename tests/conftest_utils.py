"""Shared pytest helpers.

This module provides reusable helpers for writing ESRI grid pairs to disk.

These utilities are used by:
- tests/conftest.py
- tests/gis/test_esri_header_adapter.py
- tests/gis/test_flt_grid_adapter.py
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import numpy as np


def header_text(**keys: object) -> str:
    """Build header text from KEY=value pairs, one "KEY value" line each."""
    return "".join(f"{key} {value}\n" for key, value in keys.items())


def write_grid_pair(
    directory: Path,
    text: str,
    values: Iterable[float],
    *,
    stem: str = "grid",
    dtype: str = "<f4",
) -> tuple[Path, Path]:
    """Write <stem>.hdr with text and <stem>.flt with values encoded as dtype.

    Returns:
        (header_path, payload_path)
    """
    hdr_path = directory / f"{stem}.hdr"
    hdr_path.write_text(text, encoding="utf-8")
    flt_path = directory / f"{stem}.flt"
    np.asarray(list(values), dtype=dtype).tofile(flt_path)
    return hdr_path, flt_path
