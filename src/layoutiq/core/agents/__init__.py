"""Agents: tracked elements, their roles, and host capabilities."""

from layoutiq.core.agents.handles import LayoutHandle, SceneElement
from layoutiq.core.agents.models import ElementGeometry, ElementRole, TrackedElement
from layoutiq.core.agents.registry import (
    AgentRegistry,
    ElementMover,
    GeometryProvider,
    HandleGeometryProvider,
    RegistryMover,
)
from layoutiq.core.agents.roles import infer_role

__all__ = [
    "AgentRegistry",
    "ElementGeometry",
    "ElementMover",
    "ElementRole",
    "GeometryProvider",
    "HandleGeometryProvider",
    "LayoutHandle",
    "RegistryMover",
    "SceneElement",
    "TrackedElement",
    "infer_role",
]
