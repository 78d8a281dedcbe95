"""Shared constants used by both scripts and tests.

This package provides a dependency-free location for sample grid definitions
that need to be shared across packages without creating circular imports.
"""

from __future__ import annotations
