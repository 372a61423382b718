"""Shared CLI output formatters."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from layoutiq.core.analysis.models import GlobalAnalysis  # noqa: TC001
from layoutiq.core.execution.models import ExecutionResult  # noqa: TC001
from layoutiq.core.geometry.models import Viewport  # noqa: TC001
from layoutiq.core.geometry.regions import REGION_NAMES, resolve_region

console = Console()


def print_execution_result(result: ExecutionResult, *, as_json: bool = False) -> None:
    """Pretty-print the outcome of one layout pass."""
    if as_json:
        console.print_json(result.model_dump_json())
        return

    console.print("\n[bold]Execution Result[/bold]")
    console.print(f"  Total moves: {result.total_moves}")
    console.print(f"  Successful: [green]{result.successful_moves}[/green]")
    console.print(f"  Failed: [red]{result.failed_moves}[/red]")

    if not result.details:
        return

    table = Table(title="Moves")
    table.add_column("Element", style="cyan")
    table.add_column("Reason")
    table.add_column("Target")
    table.add_column("Status")

    for detail in result.details:
        target = detail.target_position
        status = (
            "[green]ok[/green]"
            if detail.success
            else f"[red]{escape(detail.error or 'failed')}[/red]"
        )
        table.add_row(
            detail.element_id,
            detail.reason.value,
            f"({target.x:.1f}, {target.y:.1f})",
            status,
        )

    console.print(table)


def print_analysis(analysis: GlobalAnalysis, *, as_json: bool = False) -> None:
    """Pretty-print per-agent reports and clusters."""
    if as_json:
        console.print_json(analysis.model_dump_json())
        return

    table = Table(title="Agent Reports")
    table.add_column("Agent", style="cyan")
    table.add_column("Role")
    table.add_column("Visibility", justify="right")
    table.add_column("Confidence", justify="right")
    table.add_column("Pressures")

    for report in analysis.agent_reports:
        pressures = ", ".join(
            f"{p.type.value}:{p.source}" for p in report.environmental_pressures
        )
        table.add_row(
            report.agent_id,
            report.role.value,
            f"{report.position_assessment.visibility:.2f}",
            f"{report.confidence:.2f}",
            _truncate(pressures) or "-",
        )

    console.print(table)
    console.print(f"  Overall health: {analysis.overall_health * 100:.1f}%")

    for cluster in analysis.global_patterns.clusters:
        console.print(f"  Cluster in {cluster.region or 'center'}: {', '.join(cluster.members)}")


def print_regions_table(viewport: Viewport, *, margin: float) -> None:
    """Pretty-print the rectangle of every named region."""
    table = Table(title=f"Regions for {viewport.width:g}x{viewport.height:g}")
    table.add_column("Region", style="cyan")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("width", justify="right")
    table.add_column("height", justify="right")

    for name in REGION_NAMES:
        rect = resolve_region(name, viewport, margin=margin)
        table.add_row(name, f"{rect.x:g}", f"{rect.y:g}", f"{rect.width:g}", f"{rect.height:g}")

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
