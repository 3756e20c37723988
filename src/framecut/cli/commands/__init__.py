"""CLI command implementations for the framecut application.

This package contains:
- validate: Validate a job file
- output_handlers: Shared plan output for the planning commands
"""

from framecut.cli.commands.output_handlers import OutputFormat, emit_plan
from framecut.cli.commands.validate import display_load_error, validate_command

__all__ = ["OutputFormat", "display_load_error", "emit_plan", "validate_command"]
