"""Plain-text rendering of a :class:`GlobalAnalysis`."""

from __future__ import annotations

from typing import TYPE_CHECKING

from layoutiq.core.analysis.models import PressureType

if TYPE_CHECKING:
    from layoutiq.core.analysis.models import AgentReport, GlobalAnalysis


def describe_agent(report: AgentReport) -> str:
    """One-line status for an agent report."""
    overlaps = len(report.pressures_of(PressureType.OVERLAP))
    if report.position_assessment.visibility < 1.0:
        return f"Partially off-screen ({report.position_assessment.visibility:.0%} visible)"
    if overlaps:
        return f"In conflict with {overlaps} other element(s)"
    if report.confidence >= 0.7:
        return "Peaceful and well-positioned"
    return "Slightly stressed but functional"


def format_intelligence_report(analysis: GlobalAnalysis) -> str:
    """Render *analysis* as a multi-line diagnostic report."""
    lines: list[str] = ["=== LAYOUT INTELLIGENCE REPORT ==="]
    lines.append(f"Analysis Time: {analysis.timestamp.strftime('%H:%M:%S')}")
    lines.append(f"Viewport: {analysis.viewport.width:g}x{analysis.viewport.height:g}")
    lines.append(f"Active Agents: {len(analysis.agent_reports)}")
    lines.append(f"Overall Health: {analysis.overall_health * 100:.1f}%")
    lines.append("")

    lines.append("AGENT STATUS SUMMARY:")
    if not analysis.agent_reports:
        lines.append("  (no visible agents)")
    for report in analysis.agent_reports:
        lines.append(f"  {report.agent_id} ({report.role.value}): {describe_agent(report)}")

    clusters = analysis.global_patterns.clusters
    if clusters:
        lines.append("")
        lines.append("GLOBAL PATTERNS:")
        for cluster in clusters:
            lines.append(f"  Cluster in {cluster.region or 'center'}: {', '.join(cluster.members)}")

    if analysis.system_issues:
        lines.append("")
        lines.append("SYSTEM ISSUES:")
        for issue in analysis.system_issues:
            lines.append(f"  {issue.type}: {issue.description}")
            if issue.affected_agents:
                lines.append(f"     Affected: {', '.join(issue.affected_agents)}")
            if issue.suggested_action:
                lines.append(f"     Suggested: {issue.suggested_action}")

    return "\n".join(lines)
