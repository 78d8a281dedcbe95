#!/usr/bin/env python3
"""Look up nearest-cell elevations in an ESRI float grid pair.

Prints the parsed header, then queries a latitude/longitude and a cartesian
point on the sphere.

Usage:
    python scripts/query_elevation.py data/ETOPO2v2g_f4_LSB.hdr data/ETOPO2v2g_f4_LSB.flt
    python scripts/query_elevation.py grid.hdr grid.flt --lat 40 --lon -75 --xyz 0.5 0.5 0.7
    python scripts/query_elevation.py grid.hdr grid.flt --north-down --y-up -v
"""

from __future__ import annotations

import argparse
import logging

from domain.elevation.errors import ElevationError
from domain.elevation.services import sample_cartesian, sample_elevation
from domain.elevation.value_objects import (
    ElevationSample,
    GridConvention,
    RowOrientation,
    SphereAxes,
)
from infrastructure.elevation import load_grid, load_header

logger = logging.getLogger("query_elevation")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("header", help="Path to the .hdr header file")
    parser.add_argument("payload", help="Path to the .flt payload file")
    parser.add_argument("--lat", type=float, default=40.0)
    parser.add_argument("--lon", type=float, default=-75.0)
    parser.add_argument(
        "--xyz", type=float, nargs=3, default=(0.5, 0.5, 0.7), metavar=("X", "Y", "Z")
    )
    parser.add_argument(
        "--north-down",
        action="store_true",
        help="Payload row 0 is +90 latitude (default: row 0 is YLLCENTER)",
    )
    parser.add_argument(
        "--y-up", action="store_true", help="Cartesian points use a Y-up sphere"
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def describe(sample: ElevationSample) -> str:
    flag = " NODATA" if sample.is_nodata else ""
    return (
        f"lat={sample.latitude:.2f}, lon={sample.longitude:.2f} => "
        f"row={sample.row}, col={sample.col}, elevation={sample.elevation} m, "
        f"normalized={sample.normalized:.3f}{flag}"
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    convention = GridConvention(
        row_orientation=(
            RowOrientation.NORTH_DOWN if args.north_down else RowOrientation.SOUTH_UP
        ),
        sphere_axes=SphereAxes.Y_UP if args.y_up else SphereAxes.Z_UP,
    )

    try:
        header = load_header(args.header)
        grid = load_grid(args.payload, header, convention)
    except (ElevationError, OSError) as e:
        logger.error("Failed to load grid: %s", e)
        return 1

    print("HDR Info:")
    for name, value in header.model_dump().items():
        print(f"  {name.upper():<13}= {value}")
    print()

    print("Lookup:   " + describe(sample_elevation(grid, args.lat, args.lon)))
    x, y, z = args.xyz
    sample = sample_cartesian(grid, x, y, z, convention.sphere_axes)
    print(f"Centroid ({x}, {y}, {z}): " + describe(sample))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
