"""Validate command for checking cutting job files.

This module provides the `validate` command that checks a JSON job file for
schema errors and for cut-list rows that cannot be cut from the chosen stock.
"""

from pathlib import Path
from typing import Annotated

import typer

from framecut.application.config import (
    ConfigError,
    ValidationResult,
    load_config,
    validate_config,
)


def validate_command(
    job_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file to validate"),
    ],
) -> None:
    """Validate a cutting job file.

    Exit codes:
        0 - Job is valid with no warnings
        1 - Job has errors (cannot be planned)
        2 - Job is valid but has warnings

    Example:
        framecut validate order-1042.json
    """
    typer.echo(f"Validating {job_file}...")
    typer.echo()

    try:
        config = load_config(job_file)
    except ConfigError as e:
        display_load_error(e)
        typer.echo()
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    outcome = validate_config(config)
    _report(outcome)
    raise typer.Exit(code=outcome.exit_code)


def display_load_error(error: ConfigError) -> None:
    """Print why a job file could not be loaded, one problem per line."""
    typer.echo("Errors:", err=True)
    for line in _load_error_lines(error):
        typer.echo(line, err=True)


def _load_error_lines(error: ConfigError) -> list[str]:
    if error.error_type == "file_not_found":
        return [f"  File not found: {error.path}"]
    if error.error_type == "json_parse":
        return ["  Invalid JSON syntax"] + [
            f"    Line {d.get('line', '?')}, Column {d.get('column', '?')}: "
            f"{d.get('message', 'unknown problem')}"
            for d in error.details
        ]
    if error.error_type == "validation" and error.details:
        return [
            f"  {d.get('path') or '(job)'}: {d.get('message', 'invalid value')}"
            for d in error.details
        ]
    return [f"  {error.message}"]


def _report(outcome: ValidationResult) -> None:
    if outcome.errors:
        typer.echo("Errors:", err=True)
        for problem in outcome.errors:
            typer.echo(f"  {problem.path}: {problem.message}", err=True)
            if problem.value is not None:
                typer.echo(f"    Got: {problem.value!r}", err=True)
        typer.echo()

    if outcome.warnings:
        typer.echo("Warnings:")
        for advisory in outcome.warnings:
            typer.echo(f"  {advisory.path}: {advisory.message}")
            if advisory.suggestion:
                typer.echo(f"    Suggestion: {advisory.suggestion}")
        typer.echo()

    if outcome.errors:
        typer.echo(
            f"Validation failed: {len(outcome.errors)} error(s), "
            f"{len(outcome.warnings)} warning(s)",
            err=True,
        )
    elif outcome.warnings:
        typer.echo(f"Validation passed with {len(outcome.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Job is valid.")
