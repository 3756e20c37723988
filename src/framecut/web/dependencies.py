"""FastAPI dependency injection for planning services."""

from typing import Annotated

from fastapi import Depends

from framecut.application import PlanCuttingCommand


def get_plan_command() -> PlanCuttingCommand:
    """Dependency for PlanCuttingCommand."""
    return PlanCuttingCommand()


PlanCommandDep = Annotated[PlanCuttingCommand, Depends(get_plan_command)]
