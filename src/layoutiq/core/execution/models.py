"""Execution data models: planned moves, plans, results, and records.

Plans and records are frozen: once the applier has appended a record to
the history nothing can change what it says happened.
"""

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from layoutiq.core.geometry.models import Position


class MoveReason(StrEnum):
    CLUSTER_RESOLUTION = "cluster_resolution"
    VISIBILITY_CORRECTION = "visibility_correction"
    CONFLICT_RESOLUTION = "conflict_resolution"


class PlanPriority(StrEnum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    CRITICAL = "critical"


class PlanStrategy(StrEnum):
    CONFLICT_RESOLUTION = "conflict_resolution"
    OPTIMIZATION = "optimization"
    EMERGENCY = "emergency"


class PlannedMove(BaseModel):
    """A proposed relocation of one element."""

    model_config = ConfigDict(frozen=True)

    element_id: str
    target_position: Position
    reason: MoveReason
    priority: float = Field(ge=0, le=1)


class ExecutionPlan(BaseModel):
    """Moves in policy-emission order plus plan-level metadata.

    The same element may appear more than once; the applier runs moves by
    descending priority, so the lowest-priority move for an element lands
    last.
    """

    model_config = ConfigDict(frozen=True)

    moves: tuple[PlannedMove, ...] = ()
    priority: PlanPriority = PlanPriority.HIGH
    strategy: PlanStrategy = PlanStrategy.CONFLICT_RESOLUTION


class ExecutionDetail(BaseModel):
    """Outcome of one attempted move."""

    model_config = ConfigDict(frozen=True)

    element_id: str
    success: bool
    reason: MoveReason
    target_position: Position
    error: str | None = None


class ExecutionResult(BaseModel):
    """Aggregate outcome of applying a plan."""

    model_config = ConfigDict(frozen=True)

    total_moves: int = 0
    successful_moves: int = 0
    failed_moves: int = 0
    details: tuple[ExecutionDetail, ...] = ()

    @property
    def success_rate(self) -> float | None:
        """Fraction of moves accepted, or ``None`` when nothing was attempted."""
        if self.total_moves == 0:
            return None
        return self.successful_moves / self.total_moves


class ExecutionRecord(BaseModel):
    """History entry for one applied plan."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    plan: ExecutionPlan
    results: ExecutionResult
    success: bool
