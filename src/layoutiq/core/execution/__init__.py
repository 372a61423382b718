"""Execution: planning corrective moves and applying them."""

from layoutiq.core.execution.applier import ExecutionApplier, order_moves
from layoutiq.core.execution.history import ExecutionHistory
from layoutiq.core.execution.models import (
    ExecutionDetail,
    ExecutionPlan,
    ExecutionRecord,
    ExecutionResult,
    MoveReason,
    PlannedMove,
    PlanPriority,
    PlanStrategy,
)
from layoutiq.core.execution.planner import ExecutionPlanner
from layoutiq.core.execution.summary import format_execution_summary

__all__ = [
    "ExecutionApplier",
    "ExecutionDetail",
    "ExecutionHistory",
    "ExecutionPlan",
    "ExecutionPlanner",
    "ExecutionRecord",
    "ExecutionResult",
    "MoveReason",
    "PlanPriority",
    "PlanStrategy",
    "PlannedMove",
    "format_execution_summary",
    "order_moves",
]
