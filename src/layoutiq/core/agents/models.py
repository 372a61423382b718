"""Agent data models: roles, observed geometry, and registry entries.

An *agent* is a visual element under layout observation.  The core never
owns the element itself; it keeps an opaque handle and reads an
:class:`ElementGeometry` snapshot from it once per analysis pass.
"""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from layoutiq.core.geometry.models import Position, Rect


class ElementRole(StrEnum):
    """What kind of element an agent is, as far as placement goes."""

    GUARDIAN = "guardian"  # headers, critical buttons
    SCOUT = "scout"  # debug info, stats
    DIPLOMAT = "diplomat"  # modals, overlays
    WANDERER = "wanderer"  # freely placed decoration
    ANCHOR = "anchor"  # corner buttons, navigation
    FOLLOWER = "follower"  # tooltips, context menus
    CROWD = "crowd"  # list and grid items
    SENTINEL = "sentinel"  # safe-area markers, close buttons
    MERCHANT = "merchant"  # call-to-action elements
    INVISIBLE = "invisible"  # backgrounds, layout helpers


class ElementGeometry(BaseModel):
    """Geometry reported by the host for one element at one instant."""

    model_config = ConfigDict(frozen=True)

    position: Position
    global_position: Position
    bounds: Rect
    scale: float = 1.0
    rotation: float = 0.0
    visible: bool = True
    alpha: float = Field(default=1.0, ge=0, le=1)

    @property
    def is_shown(self) -> bool:
        return self.visible and self.alpha > 0


class TrackedElement(BaseModel):
    """Registry entry: element id, host handle, and placement role."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str = Field(min_length=1)
    handle: Any
    role: ElementRole = ElementRole.WANDERER
