"""Execution applier: runs a plan's moves through an element mover.

Moves are applied by descending priority.  Equal priorities keep their
emission order (Python's sort is stable), so for one element the
visibility correction runs before cluster and conflict moves and the
lowest-priority move is the one that lands last.

Every move is isolated: a mover that returns ``False`` or raises marks that
move as failed and the batch carries on.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from operator import attrgetter
from typing import TYPE_CHECKING

from layoutiq.core.execution.history import ExecutionHistory
from layoutiq.core.execution.models import (
    ExecutionDetail,
    ExecutionRecord,
    ExecutionResult,
    PlannedMove,
)
from layoutiq.core.execution.summary import format_execution_summary
from layoutiq.utils.telemetry import (
    ATTR_EXECUTION_SUCCESS,
    ATTR_MOVES_FAILED,
    ATTR_MOVES_SUCCESSFUL,
    ATTR_MOVES_TOTAL,
    get_tracer,
    set_span_attributes,
)

if TYPE_CHECKING:
    from layoutiq.core.agents.registry import ElementMover
    from layoutiq.core.execution.models import ExecutionPlan

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def order_moves(moves: tuple[PlannedMove, ...] | list[PlannedMove]) -> list[PlannedMove]:
    """Return *moves* sorted by priority, highest first, ties in input order."""
    return sorted(moves, key=attrgetter("priority"), reverse=True)


def is_successful(result: ExecutionResult, threshold: float = 0.8) -> bool:
    """A pass succeeds when strictly more than *threshold* of its moves landed.

    A pass with no moves is not a success.
    """
    rate = result.success_rate
    return rate is not None and rate > threshold


class ExecutionApplier:
    """Applies plans and owns the execution history."""

    def __init__(
        self,
        history: ExecutionHistory | None = None,
        *,
        success_threshold: float = 0.8,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.history = history if history is not None else ExecutionHistory()
        self.success_threshold = success_threshold
        self._clock = clock or _utcnow

    def apply(self, plan: ExecutionPlan, mover: ElementMover) -> ExecutionResult:
        """Apply every move of *plan* via *mover* and record the outcome."""
        with _tracer.start_as_current_span("layout.apply") as span:
            details = [self._apply_move(move, mover) for move in order_moves(plan.moves)]
            successful = sum(1 for d in details if d.success)

            result = ExecutionResult(
                total_moves=len(details),
                successful_moves=successful,
                failed_moves=len(details) - successful,
                details=tuple(details),
            )
            record = ExecutionRecord(
                timestamp=self._clock(),
                plan=plan,
                results=result,
                success=is_successful(result, self.success_threshold),
            )
            self.history.append(record)

            set_span_attributes(
                span,
                {
                    ATTR_MOVES_TOTAL: result.total_moves,
                    ATTR_MOVES_SUCCESSFUL: result.successful_moves,
                    ATTR_MOVES_FAILED: result.failed_moves,
                    ATTR_EXECUTION_SUCCESS: record.success,
                },
            )

            logger.info(
                "Applied %d/%d moves (%s)",
                result.successful_moves,
                result.total_moves,
                "success" if record.success else "failure",
            )
            return result

    def summary(self) -> str:
        """Human-readable summary of the most recent execution."""
        return format_execution_summary(self.history.latest())

    def _apply_move(self, move: PlannedMove, mover: ElementMover) -> ExecutionDetail:
        target = move.target_position
        try:
            accepted = bool(mover.move(move.element_id, target))
        except Exception as exc:
            logger.warning(
                "Error moving %s (%s): %s", move.element_id, move.reason.value, exc, exc_info=True
            )
            return ExecutionDetail(
                element_id=move.element_id,
                success=False,
                reason=move.reason,
                target_position=target,
                error=f"{type(exc).__name__}: {exc}",
            )

        if not accepted:
            logger.warning("Move rejected for %s (%s)", move.element_id, move.reason.value)
            return ExecutionDetail(
                element_id=move.element_id,
                success=False,
                reason=move.reason,
                target_position=target,
                error="move rejected",
            )

        logger.debug(
            "Moved %s to (%.1f, %.1f) - %s", move.element_id, target.x, target.y, move.reason.value
        )
        return ExecutionDetail(
            element_id=move.element_id,
            success=True,
            reason=move.reason,
            target_position=target,
        )
