"""Element handles: the host-side objects the registry points at.

:class:`LayoutHandle` is the minimal capability the default geometry
provider and mover expect.  :class:`SceneElement` implements it in memory
for hosts (and tests) that have no scene graph of their own.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from layoutiq.core.agents.models import ElementGeometry
from layoutiq.core.geometry.models import Position, Rect


@runtime_checkable
class LayoutHandle(Protocol):
    """A movable element that can report its own geometry."""

    def geometry(self) -> ElementGeometry:
        """Return the element's current geometry."""
        ...

    def move_to(self, position: Position) -> bool:
        """Centre the element on *position*; return ``False`` if refused."""
        ...


class SceneElement:
    """In-memory rectangle implementing :class:`LayoutHandle`.

    ``x``/``y`` are the local top-left position inside a parent whose
    global origin is *parent_origin*.  The reported bounds are
    axis-aligned and scaled (a negative scale mirrors the element but keeps
    a positive size); rotation is carried through but does not change the
    bounds.
    """

    def __init__(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        *,
        scale: float = 1.0,
        rotation: float = 0.0,
        visible: bool = True,
        alpha: float = 1.0,
        movable: bool = True,
        parent_origin: Position | None = None,
    ) -> None:
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.scale = scale
        self.rotation = rotation
        self.visible = visible
        self.alpha = alpha
        self.movable = movable
        self.parent_origin = parent_origin or Position(x=0, y=0)

    def __repr__(self) -> str:
        return (
            f"SceneElement(x={self.x!r}, y={self.y!r}, "
            f"width={self.width!r}, height={self.height!r})"
        )

    @property
    def bounds(self) -> Rect:
        return Rect(
            x=self.parent_origin.x + self.x,
            y=self.parent_origin.y + self.y,
            width=abs(self.width * self.scale),
            height=abs(self.height * self.scale),
        )

    def geometry(self) -> ElementGeometry:
        bounds = self.bounds
        return ElementGeometry(
            position=Position(x=self.x, y=self.y),
            global_position=Position(x=bounds.x, y=bounds.y),
            bounds=bounds,
            scale=self.scale,
            rotation=self.rotation,
            visible=self.visible,
            alpha=self.alpha,
        )

    def move_to(self, position: Position) -> bool:
        if not self.movable:
            return False
        bounds = self.bounds
        self.x = position.x - bounds.width / 2 - self.parent_origin.x
        self.y = position.y - bounds.height / 2 - self.parent_origin.y
        return True
