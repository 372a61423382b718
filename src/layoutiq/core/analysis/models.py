"""Analysis data models: per-agent reports and cross-agent patterns.

A :class:`GlobalAnalysis` is produced once per pass and never modified;
every model here is frozen and uses tuples for its sequences.
"""

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from layoutiq.core.agents.models import ElementGeometry, ElementRole
from layoutiq.core.geometry.models import Position, Viewport


class AgentSnapshot(BaseModel):
    """Geometry of one tracked element captured at the start of a pass."""

    model_config = ConfigDict(frozen=True)

    agent_id: str
    role: ElementRole = ElementRole.WANDERER
    geometry: ElementGeometry


class PressureType(StrEnum):
    OVERLAP = "overlap"
    EDGE_PROXIMITY = "edge_proximity"
    CROWDING = "crowding"
    COMPETITION = "competition"


class Pressure(BaseModel):
    """A conflict signal acting on an agent.

    For ``overlap`` and ``competition`` the *source* is the other agent's
    id; for edge pressure it names the edge (``"left_edge"`` …).
    """

    model_config = ConfigDict(frozen=True)

    type: PressureType
    source: str
    magnitude: float = Field(ge=0)


class PositionAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    visibility: float = Field(ge=0, le=1)
    accessibility: float = Field(default=1.0, ge=0, le=1)
    appropriateness: float = Field(default=0.8, ge=0, le=1)


class AgentReport(BaseModel):
    """Snapshot of one agent's situation during a single pass."""

    model_config = ConfigDict(frozen=True)

    agent_id: str
    role: ElementRole = ElementRole.WANDERER
    position_assessment: PositionAssessment
    environmental_pressures: tuple[Pressure, ...] = ()
    neighbors: tuple[str, ...] = ()
    confidence: float = Field(default=1.0, ge=0, le=1)

    def pressures_of(self, kind: PressureType) -> tuple[Pressure, ...]:
        return tuple(p for p in self.environmental_pressures if p.type == kind)


class Cluster(BaseModel):
    """Agents judged to be too close together."""

    model_config = ConfigDict(frozen=True)

    members: tuple[str, ...] = Field(min_length=2)
    region: str | None = None
    centroid: Position | None = None


class GlobalPatterns(BaseModel):
    model_config = ConfigDict(frozen=True)

    clusters: tuple[Cluster, ...] = ()


class SystemIssue(BaseModel):
    """A layout-wide problem summarised from individual reports."""

    model_config = ConfigDict(frozen=True)

    type: str
    severity: float = Field(ge=0, le=1)
    description: str
    affected_agents: tuple[str, ...] = ()
    suggested_action: str = ""


class GlobalAnalysis(BaseModel):
    """Result of one analysis pass; input to the execution planner."""

    model_config = ConfigDict(frozen=True)

    agent_reports: tuple[AgentReport, ...] = ()
    global_patterns: GlobalPatterns = Field(default_factory=GlobalPatterns)
    viewport: Viewport
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    system_issues: tuple[SystemIssue, ...] = ()
    overall_health: float = Field(default=1.0, ge=0, le=1)

    def report_for(self, agent_id: str) -> AgentReport | None:
        for report in self.agent_reports:
            if report.agent_id == agent_id:
                return report
        return None
