"""Output handling shared by the planning commands."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Sequence

import typer

from framecut.domain import CutPiece
from framecut.infrastructure import (
    CutDiagramRenderer,
    CutListFormatter,
    CuttingPlanResult,
    CuttingSheetFormatter,
    JsonExporter,
)


class OutputFormat(str, Enum):
    """Formats the planning commands can print or write."""

    TEXT = "text"
    JSON = "json"
    SVG = "svg"
    CUTLIST = "cutlist"


def emit_plan(
    result: CuttingPlanResult,
    pieces: Sequence[CutPiece],
    output_format: OutputFormat,
    output_dir: Path | None,
    project_name: str,
) -> None:
    """Print or write a cutting plan in the requested format.

    SVG writes one file per stock unit into ``output_dir`` (default: the
    current directory). Other formats print to stdout.

    Exits with code 2 when pieces were left unplaced.
    """
    if output_format == OutputFormat.TEXT:
        typer.echo(CuttingSheetFormatter().format(result))
    elif output_format == OutputFormat.JSON:
        typer.echo(JsonExporter().export(result))
    elif output_format == OutputFormat.CUTLIST:
        typer.echo(CutListFormatter(result.stock.kind).format(list(pieces)))
    else:
        out_dir = output_dir or Path(".")
        out_dir.mkdir(parents=True, exist_ok=True)
        renderer = CutDiagramRenderer()
        svgs = renderer.render_all_svg(result)
        if not svgs:
            typer.echo("No stock units used; no diagrams written.", err=True)
        for layout, svg in zip(result.layouts, svgs):
            path = out_dir / f"{project_name}_{layout.stock_unit_index}.svg"
            path.write_text(svg, encoding="utf-8")
            typer.echo(f"  SVG: {path}")

    if result.unplaced:
        typer.echo(
            f"Warning: {len(result.unplaced)} piece(s) larger than the stock were not placed: "
            + ", ".join(p.label or p.id for p in result.unplaced),
            err=True,
        )
        raise typer.Exit(code=2)
