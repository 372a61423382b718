"""Tests for ``layoutiq analyze`` CLI command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from click.testing import CliRunner

from layoutiq.cli import main

if TYPE_CHECKING:
    from pathlib import Path

_SCENE_YAML = """\
viewport: { width: 1000, height: 800 }
elements:
  - { id: a, x: 100, y: 100, width: 100, height: 100 }
  - { id: b, x: 150, y: 150, width: 100, height: 100 }
"""


class TestAnalyzeCommand:
    def test_table(self, tmp_path: Path) -> None:
        f = tmp_path / "scene.yaml"
        f.write_text(_SCENE_YAML)

        result = CliRunner().invoke(main, ["analyze", str(f)])

        assert result.exit_code == 0, result.output
        assert "Agent Reports" in result.output
        assert "Overall health" in result.output
        assert "Cluster in top-left: a, b" in result.output

    def test_report(self, tmp_path: Path) -> None:
        f = tmp_path / "scene.yaml"
        f.write_text(_SCENE_YAML)

        result = CliRunner().invoke(main, ["analyze", str(f), "--report"])

        assert result.exit_code == 0
        assert "=== LAYOUT INTELLIGENCE REPORT ===" in result.output
        assert "SYSTEM ISSUES:" in result.output

    def test_json(self, tmp_path: Path) -> None:
        f = tmp_path / "scene.yaml"
        f.write_text(_SCENE_YAML)

        result = CliRunner().invoke(main, ["analyze", str(f), "--json"])

        assert result.exit_code == 0
        assert '"agent_reports"' in result.output
        assert '"overall_health"' in result.output

    def test_analyze_does_not_move(self, tmp_path: Path) -> None:
        f = tmp_path / "scene.yaml"
        f.write_text(_SCENE_YAML)

        CliRunner().invoke(main, ["analyze", str(f)])

        assert f.read_text() == _SCENE_YAML

    def test_invalid_scene(self, tmp_path: Path) -> None:
        f = tmp_path / "bad.yaml"
        f.write_text("viewport: { width: -5, height: 10 }\n")

        result = CliRunner().invoke(main, ["analyze", str(f)])

        assert result.exit_code != 0
        assert "Error analysing scene" in result.output
