"""Elevation Bounded Context.

Responsible for global elevation grids and point queries:
- Value Objects: EsriHeader, ElevationGrid, GridConvention, ElevationSample
- Services: lat_lon_to_cell, cartesian_to_lat_lon, normalize, sample_elevation
"""
