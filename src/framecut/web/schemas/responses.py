"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class StockSchema(BaseModel):
    """Stock material a plan was cut from."""

    kind: str = Field(..., description="'bar' or 'sheet'")
    width: float = Field(..., description="Bar length or sheet width in cm")
    height: float = Field(..., description="Sheet height in cm (0 for bars)")
    name: str = Field(default="", description="Material name")
    code: str = Field(default="", description="Material code")


class PieceSchema(BaseModel):
    """A requested cut piece."""

    id: str = Field(..., description="Piece id, '<row>-<index>'")
    width: float = Field(..., description="Width (or cut length) in cm")
    height: float = Field(..., description="Height in cm (0 for bar cuts)")
    label: str = Field(default="", description="Piece label")


class PlacedPieceSchema(BaseModel):
    """A piece placed on a stock unit."""

    piece: PieceSchema
    x: float = Field(..., description="Offset from the left edge in cm")
    y: float = Field(..., description="Offset from the top edge in cm")
    rotated: bool = Field(..., description="Whether the piece was turned 90 degrees")


class LayoutSchema(BaseModel):
    """Placements on one stock unit."""

    stock_unit_index: int = Field(..., description="1-based stock unit number")
    waste: float = Field(..., description="Unused length (cm) or area (cm2)")
    placed_pieces: list[PlacedPieceSchema] = Field(default_factory=list)


class CuttingPlanResponse(BaseModel):
    """Response for cutting-plan computation."""

    stock: StockSchema
    stock_units_used: int = Field(..., description="Number of bars or sheets needed")
    total_pieces_area: float = Field(..., description="Length or area of placed pieces")
    total_stock_area: float = Field(..., description="Length or area of stock used")
    total_waste: float = Field(..., description="Length or area left over")
    waste_percentage: float = Field(..., description="Waste as a share of stock used")
    utilization_percentage: float = Field(..., description="100 minus waste percentage")
    layouts: list[LayoutSchema] = Field(default_factory=list)
    unplaced: list[PieceSchema] = Field(
        default_factory=list, description="Pieces larger than the stock"
    )


class ValidationResultSchema(BaseModel):
    """Response for job validation."""

    is_valid: bool = Field(..., description="Whether the job is valid")
    errors: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation errors"
    )
    warnings: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation warnings"
    )
