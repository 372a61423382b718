"""Global analysis engine: turns element geometry into a :class:`GlobalAnalysis`.

One call to :meth:`GlobalAnalysisEngine.analyze` is one pass:

1. **Visibility**: fraction of each element's bounds inside the viewport.
2. **Pairwise pressures**: symmetric ``overlap`` pressure for every pair of
   intersecting bounds, ``competition`` for same-role agents that sit close.
3. **Local pressures**: ``edge_proximity`` near viewport edges and
   ``crowding`` when an agent has too many neighbours.
4. **Clusters**: connected components of agents whose centres are within
   the cluster radius (or whose bounds overlap), tagged with the nearest
   semantic region.
5. **Summary**: per-agent confidence, system issues, and overall health.

Nothing is cached between passes: every report is derived from the
snapshots handed in.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from layoutiq.core.agents.models import ElementRole
from layoutiq.core.analysis.models import (
    AgentReport,
    AgentSnapshot,
    Cluster,
    GlobalAnalysis,
    GlobalPatterns,
    PositionAssessment,
    Pressure,
    PressureType,
    SystemIssue,
)
from layoutiq.core.config import LayoutSettings
from layoutiq.core.errors import DuplicateElementError, InvalidViewportError
from layoutiq.core.geometry.models import Position, Rect, Viewport
from layoutiq.core.geometry.regions import nearest_region
from layoutiq.utils.telemetry import (
    ATTR_AGENT_COUNT,
    ATTR_CLUSTER_COUNT,
    ATTR_OVERALL_HEALTH,
    ATTR_VIEWPORT_HEIGHT,
    ATTR_VIEWPORT_WIDTH,
    get_tracer,
    set_span_attributes,
)

_tracer = get_tracer(__name__)

EDGE_PRESSURE = 0.7
CROWDING_PRESSURE = 0.6
COMPETITION_PRESSURE = 0.5
PROMINENCE_BAND = 100.0


def _utcnow() -> datetime:
    return datetime.now(UTC)


def check_viewport(viewport: Viewport) -> None:
    """Raise :class:`InvalidViewportError` unless both dimensions are usable."""
    for label, value in (("width", viewport.width), ("height", viewport.height)):
        if not math.isfinite(value) or value <= 0:
            raise InvalidViewportError(f"{label} must be a positive finite number, got {value}")


def visibility_fraction(bounds: Rect, viewport: Viewport) -> float:
    """Fraction of *bounds* area lying inside the viewport, in ``[0, 1]``."""
    screen = viewport.bounds
    if bounds.area == 0:
        return 1.0 if screen.contains(Position(x=bounds.x, y=bounds.y)) else 0.0
    inside = bounds.intersection(screen)
    if inside is None:
        return 0.0
    return min(1.0, inside.area / bounds.area)


def overlap_magnitude(a: Rect, b: Rect) -> float:
    """Intersection area relative to the smaller of the two boxes."""
    inside = a.intersection(b)
    smaller = min(a.area, b.area)
    if inside is None or smaller == 0:
        return 0.0
    return min(1.0, inside.area / smaller)


class _Components:
    """Union-find over agent indices; roots are always the lowest index."""

    def __init__(self, size: int) -> None:
        self._parent = list(range(size))

    def find(self, i: int) -> int:
        while self._parent[i] != i:
            self._parent[i] = self._parent[self._parent[i]]
            i = self._parent[i]
        return i

    def union(self, i: int, j: int) -> None:
        ri, rj = self.find(i), self.find(j)
        if ri != rj:
            lo, hi = min(ri, rj), max(ri, rj)
            self._parent[hi] = lo

    def groups(self) -> list[list[int]]:
        by_root: dict[int, list[int]] = {}
        for i in range(len(self._parent)):
            by_root.setdefault(self.find(i), []).append(i)
        return [by_root[root] for root in sorted(by_root)]


class GlobalAnalysisEngine:
    """Stateless analyser; holds only its settings and clock."""

    def __init__(
        self,
        settings: LayoutSettings | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.settings = settings or LayoutSettings()
        self._clock = clock or _utcnow

    def analyze(self, snapshots: Sequence[AgentSnapshot], viewport: Viewport) -> GlobalAnalysis:
        """Run one analysis pass over *snapshots* inside *viewport*.

        Raises:
            InvalidViewportError: If the viewport has unusable dimensions.
            DuplicateElementError: If two snapshots share an id.
        """
        check_viewport(viewport)

        with _tracer.start_as_current_span("layout.analyze") as span:
            set_span_attributes(
                span, {ATTR_VIEWPORT_WIDTH: viewport.width, ATTR_VIEWPORT_HEIGHT: viewport.height}
            )

            agents = [s for s in snapshots if s.geometry.is_shown]
            seen: set[str] = set()
            for agent in agents:
                if agent.agent_id in seen:
                    raise DuplicateElementError(agent.agent_id)
                seen.add(agent.agent_id)

            span.set_attribute(ATTR_AGENT_COUNT, len(agents))

            bounds = [a.geometry.bounds for a in agents]
            centers = [b.center for b in bounds]

            overlaps, competitors = self._pairwise_pressures(agents, bounds, centers)
            neighbors = self._neighbors(agents, centers)

            reports: list[AgentReport] = []
            for i, agent in enumerate(agents):
                reports.append(
                    self._report(
                        agent,
                        bounds[i],
                        viewport,
                        overlaps[i],
                        competitors[i],
                        neighbors[i],
                    )
                )

            clusters = self._find_clusters(agents, bounds, centers, viewport)
            span.set_attribute(ATTR_CLUSTER_COUNT, len(clusters))

            health = (
                sum(r.confidence for r in reports) / len(reports) if reports else 1.0
            )
            span.set_attribute(ATTR_OVERALL_HEALTH, health)

            return GlobalAnalysis(
                agent_reports=tuple(reports),
                global_patterns=GlobalPatterns(clusters=tuple(clusters)),
                viewport=viewport,
                timestamp=self._clock(),
                system_issues=tuple(self._system_issues(reports, clusters)),
                overall_health=min(1.0, health),
            )

    # ------------------------------------------------------------------
    # Pressures
    # ------------------------------------------------------------------

    def _pairwise_pressures(
        self,
        agents: list[AgentSnapshot],
        bounds: list[Rect],
        centers: list[Position],
    ) -> tuple[list[list[Pressure]], list[list[Pressure]]]:
        overlaps: list[list[Pressure]] = [[] for _ in agents]
        competitors: list[list[Pressure]] = [[] for _ in agents]
        radius = self.settings.competition_radius

        for i in range(len(agents)):
            for j in range(i + 1, len(agents)):
                a, b = agents[i], agents[j]
                if bounds[i].intersects(bounds[j]):
                    magnitude = overlap_magnitude(bounds[i], bounds[j])
                    overlaps[i].append(
                        Pressure(type=PressureType.OVERLAP, source=b.agent_id, magnitude=magnitude)
                    )
                    overlaps[j].append(
                        Pressure(type=PressureType.OVERLAP, source=a.agent_id, magnitude=magnitude)
                    )
                if a.role == b.role and centers[i].distance_to(centers[j]) < radius:
                    competitors[i].append(
                        Pressure(
                            type=PressureType.COMPETITION,
                            source=b.agent_id,
                            magnitude=COMPETITION_PRESSURE,
                        )
                    )
                    competitors[j].append(
                        Pressure(
                            type=PressureType.COMPETITION,
                            source=a.agent_id,
                            magnitude=COMPETITION_PRESSURE,
                        )
                    )
        return overlaps, competitors

    def _neighbors(self, agents: list[AgentSnapshot], centers: list[Position]) -> list[list[str]]:
        radius = self.settings.neighbor_radius
        return [
            [
                other.agent_id
                for j, other in enumerate(agents)
                if j != i and centers[i].distance_to(centers[j]) <= radius
            ]
            for i in range(len(agents))
        ]

    def _edge_pressures(self, bounds: Rect, viewport: Viewport) -> list[Pressure]:
        m = self.settings.margin
        edges = (
            ("left_edge", bounds.x < m),
            ("top_edge", bounds.y < m),
            ("right_edge", bounds.right > viewport.width - m),
            ("bottom_edge", bounds.bottom > viewport.height - m),
        )
        return [
            Pressure(type=PressureType.EDGE_PROXIMITY, source=name, magnitude=EDGE_PRESSURE)
            for name, hit in edges
            if hit
        ]

    # ------------------------------------------------------------------
    # Per-agent report
    # ------------------------------------------------------------------

    def _report(
        self,
        agent: AgentSnapshot,
        bounds: Rect,
        viewport: Viewport,
        overlaps: list[Pressure],
        competitors: list[Pressure],
        neighbors: list[str],
    ) -> AgentReport:
        pressures: list[Pressure] = [*overlaps, *competitors]
        pressures.extend(self._edge_pressures(bounds, viewport))
        if len(neighbors) > self.settings.crowding_threshold:
            pressures.append(
                Pressure(type=PressureType.CROWDING, source="neighbors", magnitude=CROWDING_PRESSURE)
            )

        visibility = visibility_fraction(bounds, viewport)
        appropriateness = self._appropriateness(agent.role, bounds, viewport)
        assessment = PositionAssessment(
            visibility=visibility,
            accessibility=max(0.0, 1.0 - 0.2 * len(overlaps)),
            appropriateness=appropriateness,
        )
        issues = len(overlaps) + len(competitors)
        confidence = max(0.0, min(1.0, (visibility + appropriateness) / 2 - 0.1 * issues))

        return AgentReport(
            agent_id=agent.agent_id,
            role=agent.role,
            position_assessment=assessment,
            environmental_pressures=tuple(pressures),
            neighbors=tuple(neighbors),
            confidence=confidence,
        )

    @staticmethod
    def _appropriateness(role: ElementRole, bounds: Rect, viewport: Viewport) -> float:
        w, h = viewport.width, viewport.height
        if role == ElementRole.ANCHOR:
            near_edge = (
                bounds.x < PROMINENCE_BAND
                or bounds.y < PROMINENCE_BAND
                or bounds.x > w - PROMINENCE_BAND
                or bounds.y > h - PROMINENCE_BAND
            )
            return 1.0 if near_edge else 0.5
        if role == ElementRole.GUARDIAN:
            central = 0.2 * w < bounds.x < 0.8 * w and 0.2 * h < bounds.y < 0.8 * h
            return 1.0 if central else 0.7
        return 0.8

    # ------------------------------------------------------------------
    # Global patterns
    # ------------------------------------------------------------------

    def _find_clusters(
        self,
        agents: list[AgentSnapshot],
        bounds: list[Rect],
        centers: list[Position],
        viewport: Viewport,
    ) -> list[Cluster]:
        radius = self.settings.cluster_radius
        components = _Components(len(agents))

        for i in range(len(agents)):
            for j in range(i + 1, len(agents)):
                close = centers[i].distance_to(centers[j]) <= radius
                inside = bounds[i].intersection(bounds[j])
                if close or (inside is not None and inside.area > 0):
                    components.union(i, j)

        clusters: list[Cluster] = []
        for group in components.groups():
            if len(group) < 2:
                continue
            cx = sum(centers[i].x for i in group) / len(group)
            cy = sum(centers[i].y for i in group) / len(group)
            clusters.append(
                Cluster(
                    members=tuple(agents[i].agent_id for i in group),
                    region=nearest_region(cx, cy, viewport, margin=self.settings.margin),
                    centroid=Position(x=cx, y=cy),
                )
            )
        return clusters

    def _system_issues(
        self, reports: list[AgentReport], clusters: list[Cluster]
    ) -> list[SystemIssue]:
        issues: list[SystemIssue] = []

        if clusters:
            issues.append(
                SystemIssue(
                    type="clustering",
                    severity=0.7,
                    description="Multiple elements clustered in same area",
                    affected_agents=tuple(m for c in clusters for m in c.members),
                    suggested_action="Redistribute elements across available space",
                )
            )

        off_screen = [r.agent_id for r in reports if r.position_assessment.visibility < 1.0]
        if off_screen:
            issues.append(
                SystemIssue(
                    type="visibility",
                    severity=0.9,
                    description="Elements positioned outside viewport",
                    affected_agents=tuple(off_screen),
                    suggested_action="Reposition elements within safe area",
                )
            )

        overlapping = [r.agent_id for r in reports if r.pressures_of(PressureType.OVERLAP)]
        if overlapping:
            issues.append(
                SystemIssue(
                    type="overlap",
                    severity=0.8,
                    description="Elements overlapping each other",
                    affected_agents=tuple(overlapping),
                    suggested_action="Separate overlapping elements",
                )
            )

        return issues
