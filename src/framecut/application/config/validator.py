"""Validation structures and cut-list advisories for cutting jobs.

Schema problems are caught by Pydantic when a job is loaded. The checks
here look at the job as a whole: rows that can never be cut from the chosen
stock, and dimensions that do not apply to it.
"""

from dataclasses import dataclass, field
from typing import Any

from framecut.application.config.schema import CuttingJobConfiguration, PieceRowConfig
from framecut.domain.value_objects import StockKind
from framecut.infrastructure.bin_packing import EPSILON


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "pieces[0].height")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings.

    Attributes:
        errors: Blocking validation errors
        warnings: Non-blocking validation warnings
    """

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 clean, 1 errors, 2 warnings only."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(self, path: str, message: str, value: Any = None) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self


def _row_fits(config: CuttingJobConfiguration, row: PieceRowConfig) -> bool:
    stock = config.stock
    if stock.kind == StockKind.BAR:
        return row.width <= stock.length + EPSILON
    if row.width <= stock.width + EPSILON and row.height <= stock.height + EPSILON:
        return True
    return (
        config.options.allow_rotation
        and row.height <= stock.width + EPSILON
        and row.width <= stock.height + EPSILON
    )


def validate_config(config: CuttingJobConfiguration) -> ValidationResult:
    """Check a loaded job for rows that cannot be planned as written.

    Args:
        config: A CuttingJobConfiguration (already validated by Pydantic)

    Returns:
        ValidationResult containing any errors or warnings
    """
    result = ValidationResult()
    stock = config.stock

    if not config.pieces:
        result.add_warning("pieces", "No pieces to cut", "Add at least one cut-list row")

    for index, row in enumerate(config.pieces):
        path = f"pieces[{index}]"

        if stock.kind == StockKind.SHEET and row.height <= 0:
            result.add_error(
                f"{path}.height", "Sheet pieces need a positive height", row.height
            )
            continue

        if stock.kind == StockKind.BAR and row.height > 0:
            result.add_warning(
                f"{path}.height",
                f"Height {row.height:g} cm is ignored for bar stock",
            )

        if not _row_fits(config, row):
            if stock.kind == StockKind.BAR:
                size = f"{row.width:g} cm"
                limit = f"the {stock.length:g} cm bar"
            else:
                size = f"{row.width:g} x {row.height:g} cm"
                limit = f"the {stock.width:g} x {stock.height:g} cm sheet"
            result.add_warning(
                path,
                f"{row.quantity} piece(s) of {size} do not fit {limit}",
                "Choose a larger stock size or split the piece",
            )

    return result
