"""Exceptions raised by the cutting-plan engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from framecut.domain.value_objects import CutPiece


class CuttingPlanError(Exception):
    """Base class for all cutting-plan failures."""


class InvalidStockError(CuttingPlanError, ValueError):
    """Raised when stock dimensions cannot describe a physical unit."""


class InvalidPieceError(CuttingPlanError, ValueError):
    """Raised when a piece list is malformed for the chosen stock."""


class OversizedPieceError(CuttingPlanError):
    """Raised when pieces exceed the stock and the caller asked to fail.

    Attributes:
        pieces: Every piece that fits the stock in no orientation.
    """

    def __init__(self, pieces: tuple[CutPiece, ...]) -> None:
        self.pieces = pieces
        labels = ", ".join(f"{p.id} ({p.label})" for p in pieces)
        super().__init__(f"{len(pieces)} piece(s) exceed the stock size: {labels}")
