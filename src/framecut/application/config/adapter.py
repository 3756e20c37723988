"""Conversion from validated job configuration to domain objects."""

from framecut.application.config.schema import CuttingJobConfiguration
from framecut.domain import (
    CutPiece,
    PieceRow,
    StockDescriptor,
    StockKind,
    expand_piece_rows,
)
from framecut.infrastructure.bin_packing import CuttingPlanConfig


def config_to_stock(config: CuttingJobConfiguration) -> StockDescriptor:
    """Build the stock descriptor named by a job configuration."""
    stock = config.stock
    if stock.kind == StockKind.BAR:
        return StockDescriptor.bar(stock.length, name=stock.name, code=stock.code)
    return StockDescriptor.sheet(stock.width, stock.height, name=stock.name, code=stock.code)


def config_to_piece_rows(config: CuttingJobConfiguration) -> list[PieceRow]:
    """Convert configured cut-list rows to domain rows."""
    return [
        PieceRow(
            width=row.width,
            height=row.height,
            quantity=row.quantity,
            label=row.label,
        )
        for row in config.pieces
    ]


def config_to_pieces(config: CuttingJobConfiguration) -> list[CutPiece]:
    """Expand configured rows into individual pieces for the packer."""
    return expand_piece_rows(config_to_piece_rows(config), config.stock.kind)


def config_to_plan_config(config: CuttingJobConfiguration) -> CuttingPlanConfig:
    """Build packer options from the job's ``options`` block."""
    return CuttingPlanConfig(
        allow_rotation=config.options.allow_rotation,
        oversized_policy=config.options.on_oversized,
    )
