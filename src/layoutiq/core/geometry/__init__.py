"""Geometry: viewport primitives, semantic regions, and grid spreading."""

from layoutiq.core.geometry.models import Position, Rect, Viewport
from layoutiq.core.geometry.regions import (
    DEFAULT_MARGIN,
    REGION_NAMES,
    nearest_region,
    resolve_region,
)
from layoutiq.core.geometry.spread import spread_positions

__all__ = [
    "DEFAULT_MARGIN",
    "REGION_NAMES",
    "Position",
    "Rect",
    "Viewport",
    "nearest_region",
    "resolve_region",
    "spread_positions",
]
