"""Execution history: append-only store of :class:`ExecutionRecord` values.

Retention is explicit: the history is a ring buffer of *capacity* records
(oldest dropped first), or unbounded when *capacity* is ``None``.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from layoutiq.core.execution.models import ExecutionRecord


class ExecutionHistory:
    """Bounded, append-only log of applied plans."""

    def __init__(self, capacity: int | None = 100) -> None:
        if capacity is not None and capacity < 1:
            msg = f"capacity must be positive or None, got {capacity}"
            raise ValueError(msg)
        self._records: deque[ExecutionRecord] = deque(maxlen=capacity)
        self._appended = 0

    @property
    def capacity(self) -> int | None:
        return self._records.maxlen

    @property
    def total_appended(self) -> int:
        """Number of records ever appended, including evicted ones."""
        return self._appended

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ExecutionRecord]:
        return iter(tuple(self._records))

    def append(self, record: ExecutionRecord) -> None:
        self._records.append(record)
        self._appended += 1

    def latest(self) -> ExecutionRecord | None:
        return self._records[-1] if self._records else None

    def records(self) -> tuple[ExecutionRecord, ...]:
        return tuple(self._records)
