"""Agent registry and the host capabilities built on it.

:class:`AgentRegistry` holds the live id → handle mapping.  Two capability
protocols sit on top of it:

* :class:`GeometryProvider`: reads an element's geometry at the start of
  each analysis pass.
* :class:`ElementMover`: relocates an element and reports whether the
  relocation was accepted.

The default implementations delegate to handles implementing
:class:`~layoutiq.core.agents.handles.LayoutHandle`; hosts with their own
scene graph can supply their own provider and mover instead.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

from layoutiq.core.agents.models import ElementGeometry, ElementRole, TrackedElement
from layoutiq.core.agents.roles import infer_role
from layoutiq.core.errors import DuplicateElementError, UnknownElementError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from layoutiq.core.geometry.models import Position

logger = logging.getLogger(__name__)


class GeometryProvider(Protocol):
    """Reads the current geometry of a tracked element."""

    def geometry(self, element_id: str, handle: Any) -> ElementGeometry: ...


class ElementMover(Protocol):
    """Relocates an element; ``False`` (or an exception) means rejected."""

    def move(self, element_id: str, position: Position) -> bool: ...


class AgentRegistry:
    """Ordered id → :class:`TrackedElement` mapping.

    Iteration follows registration order, which the analysis engine uses
    as its deterministic tie-break.
    """

    def __init__(self) -> None:
        self._elements: dict[str, TrackedElement] = {}

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, element_id: object) -> bool:
        return element_id in self._elements

    def __iter__(self) -> Iterator[TrackedElement]:
        return iter(list(self._elements.values()))

    def register(
        self,
        element_id: str,
        handle: Any,
        role: ElementRole | str | None = None,
    ) -> TrackedElement:
        """Start tracking *handle* under *element_id*.

        When *role* is omitted it is inferred from the id, falling back to
        :attr:`ElementRole.WANDERER`.

        Raises:
            DuplicateElementError: If *element_id* is already registered.
        """
        if element_id in self._elements:
            raise DuplicateElementError(element_id)

        if role is None:
            resolved = infer_role(element_id) or ElementRole.WANDERER
        else:
            resolved = ElementRole(role)

        element = TrackedElement(id=element_id, handle=handle, role=resolved)
        self._elements[element_id] = element
        logger.debug("Registered element %r with role %s", element_id, resolved.value)
        return element

    def unregister(self, element_id: str) -> TrackedElement:
        """Stop tracking *element_id* and return its entry.

        Raises:
            UnknownElementError: If *element_id* is not registered.
        """
        try:
            element = self._elements.pop(element_id)
        except KeyError:
            raise UnknownElementError(element_id) from None
        logger.debug("Unregistered element %r", element_id)
        return element

    def get(self, element_id: str) -> TrackedElement | None:
        return self._elements.get(element_id)

    def ids(self) -> list[str]:
        return list(self._elements)


class HandleGeometryProvider:
    """:class:`GeometryProvider` that asks the handle itself."""

    def geometry(self, element_id: str, handle: Any) -> ElementGeometry:
        return handle.geometry()


class RegistryMover:
    """:class:`ElementMover` that resolves ids through an :class:`AgentRegistry`.

    Unknown ids are rejected (``False``) rather than raised, so a stale
    plan entry counts as a single failed move.
    """

    def __init__(self, registry: AgentRegistry) -> None:
        self._registry = registry

    def move(self, element_id: str, position: Position) -> bool:
        element = self._registry.get(element_id)
        if element is None:
            logger.warning("Cannot move %r: element is not registered", element_id)
            return False
        return bool(element.handle.move_to(position))
