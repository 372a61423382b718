"""Tests for the ExecutionApplier."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from layoutiq.core.execution.applier import ExecutionApplier, is_successful, order_moves
from layoutiq.core.execution.models import (
    ExecutionPlan,
    ExecutionResult,
    MoveReason,
    PlannedMove,
)
from layoutiq.core.geometry.models import Position

FIXED = datetime(2024, 1, 1, tzinfo=UTC)


def _move(element_id: str, priority: float, reason: MoveReason = MoveReason.CONFLICT_RESOLUTION) -> PlannedMove:
    return PlannedMove(
        element_id=element_id,
        target_position=Position(x=priority * 100, y=0),
        reason=reason,
        priority=priority,
    )


class RecordingMover:
    def __init__(self, reject: set[str] | None = None, explode: set[str] | None = None) -> None:
        self.calls: list[tuple[str, Position]] = []
        self.reject = reject or set()
        self.explode = explode or set()

    def move(self, element_id: str, position: Position) -> bool:
        self.calls.append((element_id, position))
        if element_id in self.explode:
            raise RuntimeError("renderer gone")
        return element_id not in self.reject


class TestOrderMoves:
    def test_descending_priority(self) -> None:
        moves = [_move("c", 0.7), _move("v", 0.9), _move("k", 0.8)]
        assert [m.priority for m in order_moves(moves)] == [0.9, 0.8, 0.7]

    def test_ties_keep_emission_order(self) -> None:
        moves = [_move("a", 0.7), _move("b", 0.9), _move("c", 0.7), _move("d", 0.7)]
        assert [m.element_id for m in order_moves(moves)] == ["b", "a", "c", "d"]


class TestIsSuccessful:
    @pytest.mark.parametrize(
        ("successful", "total", "expected"),
        [(8, 10, False), (9, 10, True), (1, 1, True), (0, 1, False), (0, 0, False)],
    )
    def test_threshold_is_strict(self, successful: int, total: int, expected: bool) -> None:
        result = ExecutionResult(
            total_moves=total, successful_moves=successful, failed_moves=total - successful
        )
        assert is_successful(result) is expected


class TestExecutionApplier:
    def setup_method(self) -> None:
        self.applier = ExecutionApplier(clock=lambda: FIXED)

    def test_applies_in_priority_order(self) -> None:
        mover = RecordingMover()
        plan = ExecutionPlan(moves=(_move("c", 0.7), _move("v", 0.9), _move("k", 0.8)))
        result = self.applier.apply(plan, mover)
        assert [c[0] for c in mover.calls] == ["v", "k", "c"]
        assert [d.element_id for d in result.details] == ["v", "k", "c"]
        assert result.successful_moves == 3

    def test_exception_is_isolated_to_its_move(self) -> None:
        mover = RecordingMover(explode={"b"})
        plan = ExecutionPlan(moves=(_move("a", 0.9), _move("b", 0.8), _move("c", 0.7)))
        result = self.applier.apply(plan, mover)
        assert [c[0] for c in mover.calls] == ["a", "b", "c"]
        assert result.total_moves == 3
        assert result.successful_moves == 2
        assert result.failed_moves == 1
        failed = result.details[1]
        assert not failed.success
        assert failed.error == "RuntimeError: renderer gone"

    def test_rejected_move_is_failed(self) -> None:
        result = self.applier.apply(ExecutionPlan(moves=(_move("a", 0.5),)), RecordingMover(reject={"a"}))
        [detail] = result.details
        assert detail.success is False
        assert detail.error == "move rejected"

    def test_counts_add_up(self) -> None:
        mover = RecordingMover(reject={"x"}, explode={"y"})
        plan = ExecutionPlan(
            moves=(_move("x", 0.9), _move("y", 0.8), _move("z", 0.7), _move("w", 0.6))
        )
        result = self.applier.apply(plan, mover)
        assert result.total_moves == len(plan.moves)
        assert result.successful_moves + result.failed_moves == result.total_moves

    def test_records_success_flag(self) -> None:
        moves = tuple(_move(f"e{i}", 0.5) for i in range(10))
        self.applier.apply(ExecutionPlan(moves=moves), RecordingMover(reject={"e0", "e1"}))
        self.applier.apply(ExecutionPlan(moves=moves), RecordingMover(reject={"e0"}))
        first, second = self.applier.history.records()
        assert first.success is False
        assert second.success is True
        assert first.timestamp == FIXED

    def test_empty_plan_is_not_a_success(self) -> None:
        result = self.applier.apply(ExecutionPlan(), RecordingMover())
        assert result.total_moves == 0
        assert result.success_rate is None
        record = self.applier.history.latest()
        assert record is not None
        assert record.success is False

    def test_history_grows_by_one_per_pass(self) -> None:
        plan = ExecutionPlan(moves=(_move("a", 0.5),))
        self.applier.apply(plan, RecordingMover())
        first = self.applier.history.records()
        self.applier.apply(plan, RecordingMover(reject={"a"}))
        second = self.applier.history.records()
        assert len(second) == len(first) + 1
        assert second[0] == first[0]

    def test_records_are_immutable(self) -> None:
        self.applier.apply(ExecutionPlan(moves=(_move("a", 0.5),)), RecordingMover())
        record = self.applier.history.latest()
        assert record is not None
        with pytest.raises(ValidationError):
            record.success = False  # type: ignore[misc]

    def test_summary_uses_latest_record(self) -> None:
        self.applier.apply(ExecutionPlan(moves=(_move("a", 0.5),)), RecordingMover())
        assert "[ok] a: conflict_resolution" in self.applier.summary()
