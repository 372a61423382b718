"""Geometry primitives: positions, rectangles, and the viewport.

All coordinates are viewport-space floats with the origin at the top-left
corner and ``y`` growing downwards.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from layoutiq.core.errors import InvalidViewportError


class Position(BaseModel):
    """A point in viewport space."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def distance_to(self, other: Position) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


class Rect(BaseModel):
    """An axis-aligned rectangle given by its top-left corner and size."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float = Field(ge=0)
    height: float = Field(ge=0)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def center(self) -> Position:
        return Position(x=self.x + self.width / 2, y=self.y + self.height / 2)

    def contains(self, point: Position) -> bool:
        """Return ``True`` if *point* lies inside or on the edge of the rect."""
        return self.x <= point.x <= self.right and self.y <= point.y <= self.bottom

    def intersects(self, other: Rect) -> bool:
        """Closed-interval test: rectangles that only touch still intersect."""
        return not (
            self.right < other.x
            or other.right < self.x
            or self.bottom < other.y
            or other.bottom < self.y
        )

    def intersection(self, other: Rect) -> Rect | None:
        """Return the overlapping rectangle, or ``None`` if disjoint."""
        if not self.intersects(other):
            return None
        left = max(self.x, other.x)
        top = max(self.y, other.y)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        return Rect(x=left, y=top, width=right - left, height=bottom - top)

    def translated(self, dx: float, dy: float) -> Rect:
        return Rect(x=self.x + dx, y=self.y + dy, width=self.width, height=self.height)


class Viewport(BaseModel):
    """Visible drawing area.  Both dimensions must be finite and positive."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(gt=0, allow_inf_nan=False)
    height: float = Field(gt=0, allow_inf_nan=False)

    @classmethod
    def of(cls, width: float, height: float) -> Viewport:
        """Build a viewport, raising :class:`InvalidViewportError` on bad input."""
        try:
            return cls(width=width, height=height)
        except ValidationError as exc:
            raise InvalidViewportError(f"{width}x{height}") from exc

    @property
    def bounds(self) -> Rect:
        return Rect(x=0, y=0, width=self.width, height=self.height)

    @property
    def center(self) -> Position:
        return Position(x=self.width / 2, y=self.height / 2)

    def inset(self, amount: float) -> Rect:
        """Return the viewport rect shrunk by *amount* on every side."""
        return Rect(
            x=amount,
            y=amount,
            width=max(0.0, self.width - 2 * amount),
            height=max(0.0, self.height - 2 * amount),
        )
