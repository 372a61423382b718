"""Plain-text rendering of execution records."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from layoutiq.core.execution.models import ExecutionRecord

NO_EXECUTIONS = "No executions performed yet."


def format_execution_summary(record: ExecutionRecord | None) -> str:
    """Render *record* (the latest execution) as a multi-line summary."""
    lines: list[str] = ["=== LAYOUT EXECUTION SUMMARY ==="]

    if record is None:
        lines.append(NO_EXECUTIONS)
        return "\n".join(lines)

    results = record.results
    rate = results.success_rate
    lines.append(f"Latest Execution: {record.timestamp.strftime('%H:%M:%S')}")
    lines.append(f"Success Rate: {'n/a' if rate is None else f'{rate * 100:.1f}%'}")
    lines.append(f"Outcome: {'success' if record.success else 'failure'}")
    lines.append(f"Total Moves: {results.total_moves}")
    lines.append(f"Successful: {results.successful_moves}")
    lines.append(f"Failed: {results.failed_moves}")
    lines.append("")

    lines.append("EXECUTION DETAILS:")
    if not results.details:
        lines.append("  (no moves planned)")
    for detail in results.details:
        target = detail.target_position
        if detail.success:
            lines.append(f"  [ok] {detail.element_id}: {detail.reason.value}")
            lines.append(f"     -> Moved to ({target.x:.1f}, {target.y:.1f})")
        else:
            lines.append(f"  [failed] {detail.element_id}: Failed: {detail.reason.value}")
            if detail.error:
                lines.append(f"     !! {detail.error}")

    return "\n".join(lines)
