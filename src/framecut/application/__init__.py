"""Application layer - use cases and orchestration."""

from .commands import PlanCuttingCommand
from .dtos import PlanOutput

__all__ = [
    "PlanCuttingCommand",
    "PlanOutput",
]
