"""Tests for the GlobalAnalysisEngine."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from layoutiq.core.agents.models import ElementGeometry, ElementRole
from layoutiq.core.analysis.engine import (
    GlobalAnalysisEngine,
    overlap_magnitude,
    visibility_fraction,
)
from layoutiq.core.analysis.models import AgentSnapshot, PressureType
from layoutiq.core.errors import DuplicateElementError, InvalidViewportError
from layoutiq.core.geometry.models import Position, Rect, Viewport

FIXED = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
VIEWPORT = Viewport(width=1000, height=800)


def _snap(
    agent_id: str,
    x: float,
    y: float,
    w: float = 50,
    h: float = 50,
    *,
    role: ElementRole = ElementRole.WANDERER,
    visible: bool = True,
    alpha: float = 1.0,
) -> AgentSnapshot:
    return AgentSnapshot(
        agent_id=agent_id,
        role=role,
        geometry=ElementGeometry(
            position=Position(x=x, y=y),
            global_position=Position(x=x, y=y),
            bounds=Rect(x=x, y=y, width=w, height=h),
            visible=visible,
            alpha=alpha,
        ),
    )


def _engine() -> GlobalAnalysisEngine:
    return GlobalAnalysisEngine(clock=lambda: FIXED)


class TestVisibility:
    def test_fully_inside(self) -> None:
        assert visibility_fraction(Rect(x=100, y=100, width=50, height=50), VIEWPORT) == 1.0

    def test_half_off_left_edge(self) -> None:
        bounds = Rect(x=-50, y=0, width=100, height=100)
        assert visibility_fraction(bounds, VIEWPORT) == pytest.approx(0.5)

    def test_fully_outside(self) -> None:
        assert visibility_fraction(Rect(x=2000, y=10, width=50, height=50), VIEWPORT) == 0.0

    def test_zero_area_point(self) -> None:
        assert visibility_fraction(Rect(x=10, y=10, width=0, height=0), VIEWPORT) == 1.0
        assert visibility_fraction(Rect(x=-10, y=10, width=0, height=0), VIEWPORT) == 0.0

    def test_report_carries_visibility(self) -> None:
        analysis = _engine().analyze([_snap("a", -50, 300, 100, 100)], VIEWPORT)
        assert analysis.agent_reports[0].position_assessment.visibility == pytest.approx(0.5)


class TestOverlap:
    def test_symmetric_overlap_pressure(self) -> None:
        analysis = _engine().analyze(
            [_snap("a", 100, 100, 100, 100), _snap("b", 150, 150, 100, 100)], VIEWPORT
        )
        a, b = analysis.agent_reports
        [pa] = a.pressures_of(PressureType.OVERLAP)
        [pb] = b.pressures_of(PressureType.OVERLAP)
        assert pa.source == "b"
        assert pb.source == "a"
        assert pa.magnitude == pytest.approx(0.25)
        assert pb.magnitude == pytest.approx(0.25)

    def test_touching_edges_count_as_overlap(self) -> None:
        analysis = _engine().analyze(
            [_snap("a", 100, 100, 100, 100), _snap("b", 200, 100, 100, 100)], VIEWPORT
        )
        [pressure] = analysis.agent_reports[0].pressures_of(PressureType.OVERLAP)
        assert pressure.magnitude == 0.0

    def test_disjoint_elements_have_no_overlap(self) -> None:
        analysis = _engine().analyze([_snap("a", 100, 100), _snap("b", 700, 500)], VIEWPORT)
        for report in analysis.agent_reports:
            assert report.pressures_of(PressureType.OVERLAP) == ()

    def test_overlap_sources_follow_registration_order(self) -> None:
        analysis = _engine().analyze(
            [
                _snap("a", 300, 300, 100, 100),
                _snap("b", 320, 320, 100, 100),
                _snap("c", 340, 340, 100, 100),
            ],
            VIEWPORT,
        )
        b = analysis.report_for("b")
        assert b is not None
        assert [p.source for p in b.pressures_of(PressureType.OVERLAP)] == ["a", "c"]

    def test_overlap_magnitude_uses_smaller_box(self) -> None:
        big = Rect(x=0, y=0, width=100, height=100)
        small = Rect(x=10, y=10, width=10, height=10)
        assert overlap_magnitude(big, small) == 1.0


class TestLocalPressures:
    def test_edge_proximity(self) -> None:
        analysis = _engine().analyze([_snap("a", 10, 10)], VIEWPORT)
        sources = [p.source for p in analysis.agent_reports[0].pressures_of(PressureType.EDGE_PROXIMITY)]
        assert sources == ["left_edge", "top_edge"]

    def test_far_edges(self) -> None:
        analysis = _engine().analyze([_snap("a", 960, 760, 30, 30)], VIEWPORT)
        sources = [p.source for p in analysis.agent_reports[0].pressures_of(PressureType.EDGE_PROXIMITY)]
        assert sources == ["right_edge", "bottom_edge"]

    def test_crowding(self) -> None:
        snaps = [_snap(f"e{i}", 400 + i * 15, 400, 10, 10) for i in range(5)]
        analysis = _engine().analyze(snaps, VIEWPORT)
        for report in analysis.agent_reports:
            assert len(report.neighbors) == 4
            assert report.pressures_of(PressureType.CROWDING)

    def test_competition_between_same_roles(self) -> None:
        analysis = _engine().analyze(
            [
                _snap("a", 300, 300, role=ElementRole.ANCHOR),
                _snap("b", 400, 300, role=ElementRole.ANCHOR),
                _snap("c", 350, 300, role=ElementRole.SCOUT),
            ],
            VIEWPORT,
        )
        a = analysis.report_for("a")
        c = analysis.report_for("c")
        assert a is not None and c is not None
        assert [p.source for p in a.pressures_of(PressureType.COMPETITION)] == ["b"]
        assert c.pressures_of(PressureType.COMPETITION) == ()


class TestClusters:
    def test_close_pair_forms_cluster_in_nearest_region(self) -> None:
        analysis = _engine().analyze(
            [_snap("a", 100, 100, 100, 100), _snap("b", 150, 150, 100, 100)], VIEWPORT
        )
        [cluster] = analysis.global_patterns.clusters
        assert cluster.members == ("a", "b")
        assert cluster.region == "top-left"
        assert cluster.centroid == Position(x=175, y=175)

    def test_chain_is_one_connected_cluster(self) -> None:
        analysis = _engine().analyze(
            [
                _snap("c", 230, 390, 20, 20),
                _snap("a", 90, 390, 20, 20),
                _snap("b", 160, 390, 20, 20),
            ],
            VIEWPORT,
        )
        [cluster] = analysis.global_patterns.clusters
        assert cluster.members == ("c", "a", "b")

    def test_far_apart_elements_do_not_cluster(self) -> None:
        analysis = _engine().analyze([_snap("a", 100, 100), _snap("b", 700, 500)], VIEWPORT)
        assert analysis.global_patterns.clusters == ()

    def test_separate_clusters_ordered_by_first_member(self) -> None:
        analysis = _engine().analyze(
            [
                _snap("x1", 800, 600, 20, 20),
                _snap("y1", 100, 100, 20, 20),
                _snap("x2", 820, 600, 20, 20),
                _snap("y2", 120, 100, 20, 20),
            ],
            VIEWPORT,
        )
        members = [c.members for c in analysis.global_patterns.clusters]
        assert members == [("x1", "x2"), ("y1", "y2")]


class TestAnalysisPass:
    def test_hidden_elements_are_skipped(self) -> None:
        analysis = _engine().analyze(
            [
                _snap("shown", 100, 100),
                _snap("hidden", 100, 100, visible=False),
                _snap("transparent", 100, 100, alpha=0.0),
            ],
            VIEWPORT,
        )
        assert [r.agent_id for r in analysis.agent_reports] == ["shown"]
        assert analysis.global_patterns.clusters == ()

    def test_duplicate_ids_raise(self) -> None:
        with pytest.raises(DuplicateElementError):
            _engine().analyze([_snap("a", 0, 0), _snap("a", 10, 10)], VIEWPORT)

    def test_invalid_viewport_fails_fast(self) -> None:
        bad = Viewport.model_construct(width=-1.0, height=100.0)
        with pytest.raises(InvalidViewportError):
            _engine().analyze([_snap("a", 0, 0)], bad)

    def test_nan_viewport_fails_fast(self) -> None:
        bad = Viewport.model_construct(width=float("nan"), height=100.0)
        with pytest.raises(InvalidViewportError):
            _engine().analyze([], bad)

    def test_is_deterministic(self) -> None:
        snaps = [
            _snap("a", 100, 100, 100, 100),
            _snap("b", 150, 150, 100, 100),
            _snap("c", -80, 300, 100, 100),
        ]
        engine = _engine()
        assert engine.analyze(snaps, VIEWPORT) == engine.analyze(snaps, VIEWPORT)

    def test_empty_pass(self) -> None:
        analysis = _engine().analyze([], VIEWPORT)
        assert analysis.agent_reports == ()
        assert analysis.overall_health == 1.0
        assert analysis.system_issues == ()
        assert analysis.timestamp == FIXED

    def test_system_issues(self) -> None:
        analysis = _engine().analyze(
            [
                _snap("a", 100, 100, 100, 100),
                _snap("b", 150, 150, 100, 100),
                _snap("off", 2000, 100),
            ],
            VIEWPORT,
        )
        issues = {i.type: i for i in analysis.system_issues}
        assert set(issues) == {"clustering", "visibility", "overlap"}
        assert issues["visibility"].affected_agents == ("off",)
        assert issues["overlap"].affected_agents == ("a", "b")

    def test_role_appropriateness(self) -> None:
        analysis = _engine().analyze(
            [
                _snap("corner", 10, 10, role=ElementRole.ANCHOR),
                _snap("lost", 500, 400, role=ElementRole.ANCHOR),
                _snap("hero", 400, 300, role=ElementRole.GUARDIAN),
            ],
            VIEWPORT,
        )
        scores = {r.agent_id: r.position_assessment.appropriateness for r in analysis.agent_reports}
        assert scores == {"corner": 1.0, "lost": 0.5, "hero": 1.0}
