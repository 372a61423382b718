"""Grid spreading: distribute N items over a rectangle."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from layoutiq.core.geometry.models import Position

if TYPE_CHECKING:
    from layoutiq.core.geometry.models import Rect


def spread_positions(count: int, rect: Rect) -> list[Position]:
    """Return *count* cell centres of a near-square grid laid over *rect*.

    Cells are filled row-major: item ``i`` lands in row ``i // cols`` and
    column ``i % cols``.  A single item sits at the centre of *rect*.
    """
    if count < 0:
        msg = f"count must be non-negative, got {count}"
        raise ValueError(msg)
    if count == 0:
        return []
    if count == 1:
        return [rect.center]

    cols = math.ceil(math.sqrt(count))
    rows = math.ceil(count / cols)
    cell_width = rect.width / cols
    cell_height = rect.height / rows

    positions: list[Position] = []
    for i in range(count):
        row, col = divmod(i, cols)
        positions.append(
            Position(
                x=rect.x + col * cell_width + cell_width / 2,
                y=rect.y + row * cell_height + cell_height / 2,
            )
        )
    return positions
