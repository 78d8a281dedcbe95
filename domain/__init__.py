"""ETOPO Elevation Domain Layer.

This package contains the core grid logic organized by bounded context:
- elevation: ESRI header model, elevation grid, nearest-cell lookup
"""

from domain import elevation

__all__ = ["elevation"]
