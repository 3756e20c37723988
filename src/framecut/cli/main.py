"""Typer CLI for cutting-plan optimization."""

import logging
import math
import re
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer

from framecut.application import PlanCuttingCommand
from framecut.application.config import ConfigError, load_config
from framecut.cli.commands import (
    OutputFormat,
    display_load_error,
    emit_plan,
    validate_command,
)
from framecut.domain import (
    CuttingPlanError,
    OversizedPolicy,
    PieceRow,
    StockDescriptor,
    StockKind,
    expand_piece_rows,
)
from framecut.infrastructure import CuttingPlanConfig, CuttingPlanService

# WIDTHxHEIGHT[xQTY][:label], e.g. "60x40", "60x40x3", "60x40x3:Order 1042"
_PIECE_SPEC = re.compile(
    r"^\s*(?P<w>\d+(?:\.\d+)?)\s*x\s*(?P<h>\d+(?:\.\d+)?)"
    r"(?:\s*x\s*(?P<q>\d+))?\s*(?::(?P<label>.*))?$"
)


app = typer.Typer(
    name="framecut",
    help="Plan cuts of moulding bars and glass, backing and mat sheets.",
)

app.command(name="validate")(validate_command)


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging")
    ] = False,
) -> None:
    """Plan cuts of moulding bars and glass, backing and mat sheets."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def parse_piece_spec(spec: str) -> PieceRow:
    """Parse a ``WIDTHxHEIGHT[xQTY][:label]`` piece option.

    Raises:
        typer.BadParameter: If the value is malformed or a size is zero.
    """
    match = _PIECE_SPEC.match(spec)
    if match is None:
        raise typer.BadParameter(
            f"Invalid piece '{spec}'. Use WIDTHxHEIGHT[xQTY][:label], e.g. 60x40x2:Glass"
        )
    width = float(match.group("w"))
    height = float(match.group("h"))
    quantity = int(match.group("q") or 1)
    if width <= 0 or height <= 0 or quantity < 1:
        raise typer.BadParameter(f"Invalid piece '{spec}': sizes and quantity must be positive")
    return PieceRow(
        width=width,
        height=height,
        quantity=quantity,
        label=(match.group("label") or "").strip(),
    )


def _policy(strict: bool) -> OversizedPolicy:
    return OversizedPolicy.RAISE if strict else OversizedPolicy.COLLECT


def _fail(error: CuttingPlanError) -> NoReturn:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1)


@app.command()
def plan(
    job_file: Annotated[Path, typer.Argument(help="Path to the JSON job file")],
    output_format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Output format")
    ] = OutputFormat.TEXT,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory for SVG diagrams"),
    ] = None,
) -> None:
    """Compute a cutting plan for a job file."""
    try:
        config = load_config(job_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    try:
        output = PlanCuttingCommand().execute(config)
    except CuttingPlanError as e:
        _fail(e)

    emit_plan(output.result, output.pieces, output_format, output_dir, job_file.stem)


@app.command()
def bars(
    lengths: Annotated[list[float], typer.Argument(help="Cut lengths in cm")],
    bar_length: Annotated[
        float, typer.Option("--bar-length", "-l", help="Stock bar length in cm")
    ],
    label: Annotated[str, typer.Option("--label", help="Label for every cut")] = "",
    strict: Annotated[
        bool, typer.Option("--strict", help="Fail if a cut is longer than the bar")
    ] = False,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Output format")
    ] = OutputFormat.TEXT,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory for SVG diagrams"),
    ] = None,
) -> None:
    """Plan moulding cuts from bars (First-Fit Decreasing).

    Example:
        framecut bars 200 150 100 50 --bar-length 300
    """
    if not all(math.isfinite(length) and length > 0 for length in lengths):
        raise typer.BadParameter(
            "Cut lengths must be positive numbers", param_hint="LENGTHS"
        )

    try:
        stock = StockDescriptor.bar(bar_length)
        pieces = expand_piece_rows(
            [PieceRow(width=length, height=0.0, label=label) for length in lengths],
            StockKind.BAR,
        )
        service = CuttingPlanService(CuttingPlanConfig(oversized_policy=_policy(strict)))
        result = service.plan(stock, pieces)
    except CuttingPlanError as e:
        _fail(e)

    emit_plan(result, pieces, output_format, output_dir, "bars")


@app.command()
def sheets(
    width: Annotated[float, typer.Option("--width", "-w", help="Sheet width in cm")],
    height: Annotated[float, typer.Option("--height", "-h", help="Sheet height in cm")],
    piece: Annotated[
        list[str],
        typer.Option("--piece", "-p", help="Piece as WIDTHxHEIGHT[xQTY][:label]"),
    ],
    rotate: Annotated[
        bool, typer.Option("--rotate/--no-rotate", help="Allow 90 degree rotation")
    ] = True,
    strict: Annotated[
        bool, typer.Option("--strict", help="Fail if a piece is larger than the sheet")
    ] = False,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Output format")
    ] = OutputFormat.TEXT,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory for SVG diagrams"),
    ] = None,
) -> None:
    """Plan glass, backing or mat cuts from sheets (guillotine, BSSF).

    Example:
        framecut sheets -w 100 -h 100 -p 60x60x2:Glass
    """
    rows = [parse_piece_spec(spec) for spec in piece]

    try:
        stock = StockDescriptor.sheet(width, height)
        pieces = expand_piece_rows(rows, StockKind.SHEET)
        config = CuttingPlanConfig(allow_rotation=rotate, oversized_policy=_policy(strict))
        result = CuttingPlanService(config).plan(stock, pieces)
    except CuttingPlanError as e:
        _fail(e)

    emit_plan(result, pieces, output_format, output_dir, "sheets")


if __name__ == "__main__":
    app()
