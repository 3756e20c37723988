"""Pydantic schemas for the REST API."""

from framecut.web.schemas.requests import PlanRequest
from framecut.web.schemas.responses import (
    CuttingPlanResponse,
    LayoutSchema,
    PieceSchema,
    PlacedPieceSchema,
    StockSchema,
    ValidationResultSchema,
)

__all__ = [
    # Requests
    "PlanRequest",
    # Responses
    "CuttingPlanResponse",
    "LayoutSchema",
    "PieceSchema",
    "PlacedPieceSchema",
    "StockSchema",
    "ValidationResultSchema",
]
