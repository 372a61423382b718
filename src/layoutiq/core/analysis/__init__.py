"""Analysis: per-agent reports, pressures, clusters, and system issues."""

from layoutiq.core.analysis.engine import GlobalAnalysisEngine
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
from layoutiq.core.analysis.report import format_intelligence_report

__all__ = [
    "AgentReport",
    "AgentSnapshot",
    "Cluster",
    "GlobalAnalysis",
    "GlobalAnalysisEngine",
    "GlobalPatterns",
    "PositionAssessment",
    "Pressure",
    "PressureType",
    "SystemIssue",
    "format_intelligence_report",
]
