"""Domain layer - value objects, errors and piece list services."""

from .errors import (
    CuttingPlanError,
    InvalidPieceError,
    InvalidStockError,
    OversizedPieceError,
)
from .services import PieceRow, default_label, expand_piece_rows, summarize_pieces
from .value_objects import (
    CutPiece,
    FreeRectangle,
    OversizedPolicy,
    StockDescriptor,
    StockKind,
)

__all__ = [
    # Value objects
    "CutPiece",
    "FreeRectangle",
    "OversizedPolicy",
    "StockDescriptor",
    "StockKind",
    # Piece list services
    "PieceRow",
    "default_label",
    "expand_piece_rows",
    "summarize_pieces",
    # Errors
    "CuttingPlanError",
    "InvalidPieceError",
    "InvalidStockError",
    "OversizedPieceError",
]
