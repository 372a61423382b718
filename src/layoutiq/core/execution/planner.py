"""Execution planner: three independent correction policies.

Each policy reads only the :class:`GlobalAnalysis`; their moves are
concatenated in a fixed order (clusters, visibility, conflicts) and never
merged.  An element touched by several policies gets several moves.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from layoutiq.core.analysis.models import PressureType
from layoutiq.core.config import LayoutSettings
from layoutiq.core.execution.models import (
    ExecutionPlan,
    MoveReason,
    PlannedMove,
    PlanPriority,
    PlanStrategy,
)
from layoutiq.core.geometry.models import Position
from layoutiq.core.geometry.regions import resolve_region
from layoutiq.core.geometry.spread import spread_positions
from layoutiq.utils.telemetry import (
    ATTR_MOVES_TOTAL,
    ATTR_PLAN_STRATEGY,
    get_tracer,
    set_span_attributes,
)

if TYPE_CHECKING:
    from layoutiq.core.analysis.models import GlobalAnalysis
    from layoutiq.core.geometry.models import Viewport

_tracer = get_tracer(__name__)


class ExecutionPlanner:
    """Builds an :class:`ExecutionPlan` from a :class:`GlobalAnalysis`."""

    def __init__(self, settings: LayoutSettings | None = None) -> None:
        self.settings = settings or LayoutSettings()

    def plan(self, analysis: GlobalAnalysis) -> ExecutionPlan:
        with _tracer.start_as_current_span("layout.plan") as span:
            moves = [
                *self.plan_cluster_resolution(analysis),
                *self.plan_visibility_corrections(analysis),
                *self.plan_conflict_resolution(analysis),
            ]
            plan = ExecutionPlan(
                moves=tuple(moves),
                priority=PlanPriority.HIGH,
                strategy=PlanStrategy.CONFLICT_RESOLUTION,
            )
            set_span_attributes(
                span, {ATTR_MOVES_TOTAL: len(plan.moves), ATTR_PLAN_STRATEGY: plan.strategy.value}
            )
            return plan

    def plan_cluster_resolution(self, analysis: GlobalAnalysis) -> list[PlannedMove]:
        """Spread each cluster's members over a grid in the cluster's region."""
        moves: list[PlannedMove] = []
        for cluster in analysis.global_patterns.clusters:
            bounds = resolve_region(
                cluster.region or "center", analysis.viewport, margin=self.settings.margin
            )
            targets = spread_positions(len(cluster.members), bounds)
            for member, target in zip(cluster.members, targets, strict=True):
                moves.append(
                    PlannedMove(
                        element_id=member,
                        target_position=target,
                        reason=MoveReason.CLUSTER_RESOLUTION,
                        priority=self.settings.cluster_priority,
                    )
                )
        return moves

    def plan_visibility_corrections(self, analysis: GlobalAnalysis) -> list[PlannedMove]:
        """Bring mostly off-screen agents back to the middle of the safe area."""
        safe = self.safe_position(analysis.viewport)
        return [
            PlannedMove(
                element_id=report.agent_id,
                target_position=safe,
                reason=MoveReason.VISIBILITY_CORRECTION,
                priority=self.settings.visibility_priority,
            )
            for report in analysis.agent_reports
            if report.position_assessment.visibility < self.settings.visibility_threshold
        ]

    def plan_conflict_resolution(self, analysis: GlobalAnalysis) -> list[PlannedMove]:
        """Push each overlapping pair apart horizontally, once per pair."""
        moves: list[PlannedMove] = []
        processed: set[tuple[str, str]] = set()
        left, right = self.separation_positions(analysis.viewport)

        for report in analysis.agent_reports:
            for pressure in report.pressures_of(PressureType.OVERLAP):
                a, b = report.agent_id, pressure.source
                pair = (a, b) if a <= b else (b, a)
                if pair in processed:
                    continue
                processed.add(pair)
                for element_id, target in ((report.agent_id, left), (pressure.source, right)):
                    moves.append(
                        PlannedMove(
                            element_id=element_id,
                            target_position=target,
                            reason=MoveReason.CONFLICT_RESOLUTION,
                            priority=self.settings.conflict_priority,
                        )
                    )
        return moves

    def safe_position(self, viewport: Viewport) -> Position:
        return viewport.inset(self.settings.safe_inset).center

    def separation_positions(self, viewport: Viewport) -> tuple[Position, Position]:
        center = viewport.center
        offset = self.settings.separation_offset
        return (
            Position(x=center.x - offset, y=center.y),
            Position(x=center.x + offset, y=center.y),
        )
