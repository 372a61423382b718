"""Semantic regions: named fractional zones of the viewport.

Every named region keeps ``margin`` units away from the viewport edges it
borders.  Unknown names (and ``None``) resolve to ``center``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from layoutiq.core.geometry.models import Rect

if TYPE_CHECKING:
    from layoutiq.core.geometry.models import Viewport

DEFAULT_MARGIN = 50.0
DEFAULT_REGION = "center"

REGION_NAMES: tuple[str, ...] = (
    "top-left",
    "top-right",
    "bottom-left",
    "bottom-right",
    "top",
    "bottom",
    "left",
    "right",
    "center",
)


def resolve_region(
    name: str | None,
    viewport: Viewport,
    *,
    margin: float = DEFAULT_MARGIN,
) -> Rect:
    """Map a region *name* to its rectangle inside *viewport*."""
    w = viewport.width
    h = viewport.height
    m = margin

    if name == "top-left":
        x, y, width, height = m, m, w * 0.4, h * 0.4
    elif name == "top-right":
        x, y, width, height = w * 0.6, m, w * 0.4 - m, h * 0.4
    elif name == "bottom-left":
        x, y, width, height = m, h * 0.6, w * 0.4, h * 0.4 - m
    elif name == "bottom-right":
        x, y, width, height = w * 0.6, h * 0.6, w * 0.4 - m, h * 0.4 - m
    elif name == "top":
        x, y, width, height = m, m, w - 2 * m, h * 0.3
    elif name == "bottom":
        x, y, width, height = m, h * 0.7, w - 2 * m, h * 0.3 - m
    elif name == "left":
        x, y, width, height = m, m, w * 0.3, h - 2 * m
    elif name == "right":
        x, y, width, height = w * 0.7, m, w * 0.3 - m, h - 2 * m
    else:
        x, y, width, height = w * 0.2, h * 0.2, w * 0.6, h * 0.6

    # Viewports smaller than the margins collapse the region instead of
    # producing negative sizes.
    return Rect(x=x, y=y, width=max(0.0, width), height=max(0.0, height))


def nearest_region(
    x: float,
    y: float,
    viewport: Viewport,
    *,
    margin: float = DEFAULT_MARGIN,
) -> str:
    """Return the region whose centre is closest to ``(x, y)``.

    Ties keep the earlier entry of :data:`REGION_NAMES`.
    """
    best = DEFAULT_REGION
    best_distance: float | None = None
    for name in REGION_NAMES:
        center = resolve_region(name, viewport, margin=margin).center
        distance = (center.x - x) ** 2 + (center.y - y) ** 2
        if best_distance is None or distance < best_distance:
            best = name
            best_distance = distance
    return best
