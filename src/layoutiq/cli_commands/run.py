"""``layoutiq run``: run layout passes over a scene YAML file."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from layoutiq.cli_commands._output import console, print_execution_result
from layoutiq.core.errors import LayoutError
from layoutiq.sdk.errors import SceneValidationError


@click.command()
@click.argument("scene", type=click.Path(exists=True))
@click.option("--passes", "-n", default=1, show_default=True, type=click.IntRange(min=1),
              help="Number of layout passes to run.")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None,
              help="Write the corrected scene YAML to this file.")
@click.option("--summary/--no-summary", default=True, help="Print the execution summary.")
@click.option("--json", "as_json", is_flag=True, help="Output the last result as JSON.")
def run(scene: str, passes: int, output: str | None, summary: bool, as_json: bool) -> None:
    """Run layout correction on the scene defined in SCENE yaml file."""
    from layoutiq.sdk.scene import SceneRunner

    try:
        runner = SceneRunner.from_yaml(scene)
    except (SceneValidationError, LayoutError) as exc:
        console.print(f"[red]Validation error:[/red] {exc}")
        sys.exit(1)

    try:
        results = runner.run(passes)
    except LayoutError as exc:
        console.print(f"[red]Execution error:[/red] {exc}")
        sys.exit(1)

    print_execution_result(results[-1], as_json=as_json)

    if summary and not as_json:
        console.print()
        console.print(runner.executor.get_execution_summary(), markup=False)

    if output:
        Path(output).write_text(runner.dump_yaml(), encoding="utf-8")
        if not as_json:
            console.print(f"[green]Wrote corrected scene to {output}[/green]")
