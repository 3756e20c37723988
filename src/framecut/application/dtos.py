"""Data transfer objects for cutting-plan use cases."""

from __future__ import annotations

from dataclasses import dataclass

from framecut.domain import CutPiece, StockDescriptor
from framecut.infrastructure.bin_packing import CuttingPlanResult


@dataclass(frozen=True)
class PlanOutput:
    """Output of a planning command.

    Attributes:
        stock: Stock the plan was computed for.
        pieces: Expanded pieces submitted to the packer.
        result: The cutting plan.
    """

    stock: StockDescriptor
    pieces: tuple[CutPiece, ...]
    result: CuttingPlanResult

    @property
    def is_complete(self) -> bool:
        """True when every submitted piece was placed."""
        return not self.result.has_unplaced
