"""ESRI .hdr adapter for HeaderRepository.

Parses the plain-text header of an ESRI float grid pair into an EsriHeader
Value Object. Example header (ETOPO2v2g):

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

Parsing rules:
1) Each line is split on whitespace; lines with fewer than two tokens are skipped
2) Keys match case-insensitively; unknown keys are ignored
3) Lines may appear in any order; the last duplicate wins
4) Missing keys keep the EsriHeader zero/empty defaults
5) A malformed numeric value fails the whole parse (HeaderParseError)
6) Numbers use plain decimal syntax: digit-group underscores ("1_000") are
   rejected, while "nan" and "inf" are accepted as floats
7) Undecodable bytes are replaced, so a stray Latin-1 comment line is skipped
   like any other unrecognized line
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from domain.elevation.errors import HeaderParseError
from domain.elevation.value_objects import EsriHeader

# Module-level logger (reused across all calls)
logger = logging.getLogger(__name__)


def _parse_int(text: str) -> int:
    if "_" in text:
        raise ValueError(f"invalid integer: {text!r}")
    return int(text)


def _parse_float(text: str) -> float:
    if "_" in text:
        raise ValueError(f"invalid number: {text!r}")
    return float(text)


# Recognized header keys -> (EsriHeader field, value parser), in file order
HEADER_FIELDS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "NCOLS": ("ncols", _parse_int),
    "NROWS": ("nrows", _parse_int),
    "XLLCENTER": ("xll_center", _parse_float),
    "YLLCENTER": ("yll_center", _parse_float),
    "CELLSIZE": ("cell_size", _parse_float),
    "NODATA_VALUE": ("nodata_value", _parse_float),
    "BYTEORDER": ("byte_order", str),
    "NUMBERTYPE": ("number_type", str),
    "MIN_VALUE": ("min_value", _parse_float),
    "MAX_VALUE": ("max_value", _parse_float),
}


def parse_header_lines(lines: Iterable[str]) -> EsriHeader:
    """Parse header text lines into an EsriHeader.

    Args:
        lines: Header lines, with or without line terminators

    Returns:
        EsriHeader with every recognized key applied

    Raises:
        HeaderParseError: If a numeric key carries an unparsable value
    """
    values: dict[str, Any] = {}
    for line_number, line in enumerate(lines, start=1):
        parts = line.split()
        if len(parts) < 2:
            continue

        key = parts[0].upper()
        field = HEADER_FIELDS.get(key)
        if field is None:
            logger.debug("Ignoring unrecognized header key %s", parts[0])
            continue

        name, parser = field
        try:
            values[name] = parser(parts[1])
        except ValueError as e:
            raise HeaderParseError(line_number, key, line.rstrip("\r\n")) from e

    return EsriHeader(**values)


def format_header(header: EsriHeader) -> str:
    """Serialize all ten recognized keys; parse_header_lines() reverses it exactly."""
    lines = []
    for key, (name, _) in HEADER_FIELDS.items():
        value = getattr(header, name)
        # repr() round-trips floats bit-exactly
        text = repr(value) if isinstance(value, float) else str(value)
        if text == "":
            # An empty string value would drop the line on re-parse
            continue
        lines.append(f"{key:<14}{text}")
    return "\n".join(lines) + "\n"


class EsriHeaderAdapter:
    """Infrastructure adapter for reading and writing ESRI .hdr files."""

    def load_header(self, file_path: Path | str) -> EsriHeader:
        """Parse a header file into an EsriHeader.

        Raises:
            FileNotFoundError: If the file does not exist
            PermissionError: If the file cannot be read (filename only)
            HeaderParseError: If a numeric key carries an unparsable value
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(str(path))

        try:
            with path.open("r", encoding="utf-8", errors="replace") as fh:
                header = parse_header_lines(fh)
        except PermissionError as e:
            # Re-raise with filename only to avoid leaking full path in logs
            raise PermissionError(path.name) from e
        except HeaderParseError:
            logger.error("Header %s: malformed numeric value", path.name)
            raise

        logger.debug(
            "Header %s: %dx%d grid, cellsize=%s, byteorder=%s",
            path.name,
            header.ncols,
            header.nrows,
            header.cell_size,
            header.byte_order or "<unset>",
        )
        return header

    def write_header(self, file_path: Path | str, header: EsriHeader) -> Path:
        """Write a header file for the given EsriHeader and return its path."""
        path = Path(file_path)
        path.write_text(format_header(header), encoding="utf-8")
        logger.debug("Header %s: written", path.name)
        return path
