"""``layoutiq analyze``: analyse a scene without moving anything."""

from __future__ import annotations

import sys

import click

from layoutiq.cli_commands._output import console, print_analysis
from layoutiq.core.analysis.report import format_intelligence_report
from layoutiq.core.errors import LayoutError
from layoutiq.sdk.errors import SceneValidationError


@click.command()
@click.argument("scene", type=click.Path(exists=True))
@click.option("--report", is_flag=True, help="Print the plain-text intelligence report.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def analyze(scene: str, report: bool, as_json: bool) -> None:
    """Analyse the layout of the scene defined in SCENE yaml file."""
    from layoutiq.sdk.scene import SceneRunner

    try:
        analysis = SceneRunner.from_yaml(scene).analyze()
    except (SceneValidationError, LayoutError) as exc:
        console.print(f"[red]Error analysing scene:[/red] {exc}")
        sys.exit(1)

    if report and not as_json:
        console.print(format_intelligence_report(analysis), markup=False)
        return

    print_analysis(analysis, as_json=as_json)
