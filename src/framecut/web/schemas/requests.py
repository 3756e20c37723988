"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class PlanRequest(BaseModel):
    """Request carrying a full cutting-job configuration."""

    config: dict[str, Any] = Field(..., description="Cutting job configuration JSON")
