"""``layoutiq regions``: show region rectangles for a viewport size."""

from __future__ import annotations

import json
import sys

import click

from layoutiq.cli_commands._output import console, print_regions_table
from layoutiq.core.errors import InvalidViewportError
from layoutiq.core.geometry.models import Viewport
from layoutiq.core.geometry.regions import DEFAULT_MARGIN, REGION_NAMES, resolve_region


@click.command()
@click.option("--width", "-w", type=float, required=True, help="Viewport width.")
@click.option("--height", "-h", type=float, required=True, help="Viewport height.")
@click.option("--margin", type=float, default=DEFAULT_MARGIN, show_default=True)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def regions(width: float, height: float, margin: float, as_json: bool) -> None:
    """List the named layout regions for a WIDTH x HEIGHT viewport."""
    try:
        viewport = Viewport.of(width, height)
    except InvalidViewportError as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)

    if as_json:
        data = {
            name: resolve_region(name, viewport, margin=margin).model_dump()
            for name in REGION_NAMES
        }
        console.print_json(json.dumps(data))
        return

    print_regions_table(viewport, margin=margin)
